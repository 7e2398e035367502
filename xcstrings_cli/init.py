"""Interactive creation of an ``xcstrings-cli.yaml`` configuration file."""

import os
from pathlib import Path
from typing import Callable

import yaml
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

INIT_FILE_NAME = "xcstrings-cli.yaml"

_SKIPPED_DIRS = {"node_modules"}

_SECTION_COMMENTS = {
    "missingLanguagePolicy": "Behavior for handling missing languages when adding strings.",
    "xcstringsPaths": "Paths to .xcstrings files to manage. Specify relative or absolute paths.",
    "xcodeprojPaths": "Paths to .xcodeproj directories. Used for discovering supported languages.",
}


def find_xcstrings_files(root: Path) -> list[Path]:
    """Find .xcstrings files below ``root``, skipping hidden dirs and node_modules."""
    results: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(
            d for d in dirnames if not d.startswith(".") and d not in _SKIPPED_DIRS
        )
        for name in sorted(filenames):
            if name.endswith(".xcstrings"):
                results.append(Path(dirpath) / name)
    return results


def find_xcodeproj_dirs(root: Path) -> list[Path]:
    """Find .xcodeproj directories directly inside ``root``."""
    return sorted(p for p in root.iterdir() if p.is_dir() and p.name.endswith(".xcodeproj"))


def _relative(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root)) or str(path)
    except ValueError:
        return str(path)



def render_config(xcstrings_paths: list[str], xcodeproj_paths: list[str]) -> str:
    """Render the config file contents, one commented YAML section per key."""
    values = {
        "missingLanguagePolicy": "skip",
        "xcstringsPaths": list(xcstrings_paths),
        "xcodeprojPaths": list(xcodeproj_paths),
    }
    sections = [
        f"# {_SECTION_COMMENTS[key]}\n"
        + yaml.safe_dump({key: value}, sort_keys=False, allow_unicode=True, default_flow_style=False)
        for key, value in values.items()
    ]
    return "\n".join(sections)


def _select(
    console: Console,
    candidates: list[Path],
    root: Path,
    title: str,
    ask: Callable[..., bool],
) -> list[str]:
    console.print(f"[bold]{title}[/bold]")
    selected: list[str] = []
    for candidate in candidates:
        rel = _relative(candidate, root)
        if ask(f"  Include [white]{escape(rel)}[/white]?", default=True):
            selected.append(rel)
    return selected


def _print_list(console: Console, label: str, items: list[str]) -> None:
    console.print(f"[cyan]  {label}:[/cyan]")
    if items:
        for item in items:
            console.print(f"    • {escape(item)}")
    else:
        console.print("[dim]    (none)[/dim]")


def init(
    cwd: Path | None = None,
    console: Console | None = None,
    ask: Callable[..., bool] = Confirm.ask,
) -> Path | None:
    """Walk the user through creating ``xcstrings-cli.yaml``.

    Args:
        cwd: Project directory, defaults to the working directory.
        console: Console for output.
        ask: Yes/no prompt, ``rich.prompt.Confirm.ask`` by default.

    Returns:
        Path of the written file, or None if the user cancelled.
    """
    root = (cwd or Path.cwd()).resolve()
    console = console or Console()

    console.print()
    console.print("[bold cyan]xcstrings-cli Configuration Setup[/bold cyan]")
    console.print("[dim]" + "─" * 40 + "[/dim]")

    console.print("[yellow]Searching for .xcstrings files...[/yellow]")
    xcstrings_files = find_xcstrings_files(root)
    console.print("[yellow]Searching for .xcodeproj directories...[/yellow]")
    xcodeproj_dirs = find_xcodeproj_dirs(root)
    console.print()

    selected_xcstrings: list[str] = []
    if xcstrings_files:
        console.print(f"[green]✓ Found {len(xcstrings_files)} .xcstrings file(s)[/green]")
        selected_xcstrings = _select(
            console, xcstrings_files, root, "Select .xcstrings files to manage:", ask
        )
    else:
        console.print("[dim]  No .xcstrings files found in current directory[/dim]")

    selected_xcodeproj: list[str] = []
    if xcodeproj_dirs:
        noun = "directory" if len(xcodeproj_dirs) == 1 else "directories"
        console.print(f"[green]✓ Found {len(xcodeproj_dirs)} .xcodeproj {noun}[/green]")
        selected_xcodeproj = _select(
            console,
            xcodeproj_dirs,
            root,
            "Select .xcodeproj directories for language detection:",
            ask,
        )
    else:
        console.print("[dim]  No .xcodeproj directories found[/dim]")

    console.print()
    console.print("[bold]Configuration Summary:[/bold]")
    _print_list(console, "xcstringsPaths", selected_xcstrings)
    _print_list(console, "xcodeprojPaths", selected_xcodeproj)
    console.print()

    if not ask(f"Create [yellow]{INIT_FILE_NAME}[/yellow]?", default=True):
        console.print("[dim]  Configuration cancelled.[/dim]")
        return None

    target = root / INIT_FILE_NAME
    target.write_text(render_config(selected_xcstrings, selected_xcodeproj), encoding="utf-8")

    console.print(f"[bold green]✓ Created {INIT_FILE_NAME}[/bold green]")
    console.print("[dim]   Run [cyan]xcstrings --help[/cyan] to see available commands.[/dim]")
    return target
