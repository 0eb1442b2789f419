#!/usr/bin/env python3
"""
b2bstate CLI - B2B commerce state container tools

Main entrypoint for the b2bstate command-line tool.
"""

import sys

import typer
from rich.console import Console
from rich.table import Table

from b2bstate.actions import ALL_ACTION_TYPES
from b2bstate.logging_config import setup_logging
from cli.commands import cart, log, replay

app = typer.Typer(
    name="b2bstate",
    help="B2B commerce state container CLI",
    add_completion=False,
)

console = Console()

app.add_typer(log.app, name="log", help="Action journal operations")
app.add_typer(cart.app, name="cart", help="Saved cart operations")

app.command(name="replay")(replay.replay_command)


@app.callback()
def configure():
    """Configure logging from B2BSTATE_LOG_LEVEL / B2BSTATE_LOG_FORMAT."""
    # stdout carries command output (including --json)
    setup_logging(stream=sys.stderr)


@app.command()
def version():
    """Show version information."""
    from cli import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]b2bstate[/bold]", f"v{__version__}")
    table.add_row("Slices", "company, quotes, approvals, cartB2B")
    table.add_row("Action types", str(len(ALL_ACTION_TYPES)))

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
