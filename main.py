"""Entry point for the xcstrings catalog tool."""

from xcstrings_cli.cli import main

if __name__ == "__main__":
    main()
