"""CLI orchestration: wires config, path resolution and commands together."""

import argparse
import logging
import re
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from xcstrings_cli.add import run_add_command
from xcstrings_cli.config import load_config
from xcstrings_cli.errors import ArgumentError
from xcstrings_cli.filters import resolve_filter
from xcstrings_cli.init import init
from xcstrings_cli.languages import languages
from xcstrings_cli.paths import resolve_xcstrings_path
from xcstrings_cli.payload import STRINGS_FORMATS
from xcstrings_cli.remove import remove
from xcstrings_cli.strings import TEMPLATE_VARIABLES, list_strings
from xcstrings_cli.xcstrings import LOCALIZATION_STATES

PROG = "xcstrings"
COMMAND_METAVAR = "<command>"

_UNKNOWN_COMMAND = re.compile(
    rf"""argument {re.escape(COMMAND_METAVAR)}: invalid choice: (['"]?)(.*?)\1(?: \(choose from|$)"""
)

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """Configure logging with rich handler for colored, readable output on stderr."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True, show_path=False)],
    )


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with the full help on stderr."""

    def error(self, message: str) -> None:
        unknown = _UNKNOWN_COMMAND.match(message)
        if unknown:
            message = f"Unknown command: {unknown.group(2)}"
        err_console.print(f"[red]{escape(message)}[/red]")
        err_console.print()
        self.print_help(sys.stderr)
        raise SystemExit(1)


def _format_removed(removed: dict[str, list[str]]) -> str:
    return "\n".join(f"- [{' '.join(langs)}] {key}" for key, langs in removed.items())


def _resolve_path(args: argparse.Namespace) -> str:
    config = load_config(args.config)
    return resolve_xcstrings_path(args.path, config)


def _cmd_add(args: argparse.Namespace) -> None:
    path = _resolve_path(args)
    result = run_add_command(
        path,
        key=args.key,
        comment=args.comment,
        strings_arg=args.strings,
        strings_format=args.strings_format,
        default_text=args.text,
        language=args.language,
        config_path=args.config,
        state=args.state,
        interactive=args.interactive,
    )
    added = "\n".join(f"- {escape(k)}" for k in result.keys)
    console.print(f"[green]✓ Added keys:\n{added}[/green]")


def _cmd_remove(args: argparse.Namespace) -> None:
    if not args.key and not args.languages:
        raise ArgumentError("Either --key or --languages must be provided")

    path = _resolve_path(args)
    removed = remove(path, args.key, args.languages, dry_run=args.dry_run)
    items = escape(_format_removed(removed))

    if not removed:
        console.print("[yellow]No matching strings found.[/yellow]")
    elif args.dry_run:
        console.print(f"[blue]Would remove:\n{items}[/blue]")
    else:
        console.print(f"[green]✓ Removed\n{items}[/green]")


def _cmd_languages(args: argparse.Namespace) -> None:
    path = _resolve_path(args)
    result = languages(path, load_config(args.config))
    console.out(" ".join(result), highlight=False)


def _cmd_strings(args: argparse.Namespace) -> None:
    key_filter = resolve_filter(
        "key",
        glob=args.key,
        explicit_glob=args.key_glob,
        regex=args.key_regex,
        substring=args.key_substring,
    )
    text_filter = resolve_filter(
        "text",
        glob=args.text,
        explicit_glob=args.text_glob,
        regex=args.text_regex,
        substring=args.text_substring,
    )

    path = _resolve_path(args)
    output = list_strings(
        path,
        languages=args.languages,
        key_filter=key_filter,
        text_filter=text_filter,
        fmt=args.format,
    )
    if output:
        console.out(output, highlight=False)


def _cmd_init(args: argparse.Namespace) -> None:
    init(console=console)


def build_parser() -> argparse.ArgumentParser:
    """Build the ``xcstrings`` argument parser."""
    # Subcommands accept the global options too; SUPPRESS keeps them from
    # overwriting a value given before the subcommand.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=argparse.SUPPRESS, help="Path to config file")
    common.add_argument("--path", default=argparse.SUPPRESS, help="Path to xcstrings file or alias")

    parser = _ArgumentParser(
        prog=PROG,
        description="Manage Apple .xcstrings localization catalogs",
    )
    parser.add_argument("--config", default=None, help="Path to config file")
    parser.add_argument(
        "--path",
        default=None,
        help="Path to xcstrings file, or alias from config (default: ./Localizable.xcstrings)",
    )
    subparsers = parser.add_subparsers(dest="command", metavar=COMMAND_METAVAR)
    subparsers.required = True

    add_parser = subparsers.add_parser("add", parents=[common], help="Add a string")
    add_parser.add_argument(
        "--key", help="The key of the string (omit when adding multiple keys via --strings)"
    )
    add_parser.add_argument("--comment", help="The comment for the string")
    add_parser.add_argument(
        "-l", "--language", help="The language of the string provided with --text"
    )
    add_parser.add_argument(
        "--state",
        metavar="STATE",
        help=f"State to apply to added strings ({' | '.join(LOCALIZATION_STATES)})",
    )
    add_parser.add_argument("--text", help="The string value for the default language")
    add_parser.add_argument(
        "--strings",
        action="append",
        nargs="?",
        const="",
        metavar="PAYLOAD",
        help="The strings JSON or YAML; read from stdin when given without a value",
    )
    add_parser.add_argument(
        "--strings-format",
        choices=STRINGS_FORMATS,
        default="auto",
        help="Format for the data provided with --strings (default: auto)",
    )
    add_parser.add_argument(
        "-i", "--interactive", action="store_true", help="Add strings in an interactive flow"
    )
    add_parser.set_defaults(handler=_cmd_add, command_parser=add_parser)

    remove_parser = subparsers.add_parser("remove", parents=[common], help="Remove a string")
    remove_parser.add_argument("-k", "--key", help="The key to remove")
    remove_parser.add_argument(
        "-l", "--languages", nargs="+", action="extend", help="Languages to remove"
    )
    remove_parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Show what would be removed without writing changes",
    )
    remove_parser.set_defaults(handler=_cmd_remove, command_parser=remove_parser)

    languages_parser = subparsers.add_parser(
        "languages",
        parents=[common],
        help="List supported languages from xcodeproj or xcstrings",
    )
    languages_parser.set_defaults(handler=_cmd_languages, command_parser=languages_parser)

    strings_parser = subparsers.add_parser(
        "strings",
        aliases=["list"],
        parents=[common],
        help="List strings in the xcstrings file",
    )
    for label, what in (("key", "keys"), ("text", "translations")):
        strings_parser.add_argument(f"--{label}", help=f"Filter {what} by glob (default)")
        strings_parser.add_argument(f"--{label}-glob", help=f"Filter {what} by glob (explicit)")
        strings_parser.add_argument(f"--{label}-regex", help=f"Filter {what} by regex")
        strings_parser.add_argument(f"--{label}-substring", help=f"Filter {what} by substring match")
    strings_parser.add_argument(
        "-l", "--languages", nargs="+", action="extend", help="Include only these languages"
    )
    strings_parser.add_argument(
        "--format",
        help="Template for each line. Available variables: "
        + ", ".join("{{%s}}" % name for name in TEMPLATE_VARIABLES),
    )
    strings_parser.set_defaults(handler=_cmd_strings, command_parser=strings_parser)

    init_parser = subparsers.add_parser(
        "init", parents=[common], help="Initialize configuration file"
    )
    init_parser.set_defaults(handler=_cmd_init, command_parser=init_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main synchronous entry point for the CLI.

    Args:
        argv: Arguments without the program name, defaults to ``sys.argv[1:]``.
    """
    setup_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        args.handler(args)
    except (ValueError, OSError, RuntimeError) as e:
        err_console.print(f"[red bold]Error:[/red bold] {escape(str(e))}")
        err_console.print()
        args.command_parser.print_help(sys.stderr)
        raise SystemExit(1)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Cancelled by user.[/yellow]")
        raise SystemExit(130)
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
