"""CLI entry point for season-streams.

Thin wrapper that delegates to main.py and turns its return value
into the process exit status.
"""

from sys import exit

from main import cli as main_cli


def cli() -> None:
    """Entry point for the season-streams console script."""
    exit(main_cli())


if __name__ == "__main__":
    cli()
