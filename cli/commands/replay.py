"""
Replay command: rebuild state from the action journal
"""

import json
from typing import Dict, Optional

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from b2bstate.core.canonical import canonicalize
from b2bstate.core.errors import B2BStateError
from b2bstate.replay import replay
from b2bstate.selectors.cart import select_checkout_summary
from b2bstate.snapshot import compute_state_hash

from .log import DEFAULT_LOG, fail, open_journal

console = Console()


def replay_command(
    log_path: str = typer.Option(DEFAULT_LOG, "--log", "-l", help="Path to action journal"),
    until: Optional[int] = typer.Option(None, "--until", "-u", help="Replay until sequence number"),
    show_state: bool = typer.Option(False, "--show-state", "-s", help="Show final state"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replay the action journal and report the rebuilt state.

    Examples:
        b2bstate replay
        b2bstate replay --until 10
        b2bstate replay --show-state
        b2bstate replay --json
    """
    try:
        journal = open_journal(log_path)
        if not json_output:
            console.print("[bold]Replaying action journal...[/bold]")
        result = replay(journal, to_seq=until)
        action_counts: Dict[str, int] = {}
        for entry in journal.entries():
            if until is not None and entry.seq > until:
                break
            action_counts[entry.action.type] = action_counts.get(entry.action.type, 0) + 1
    except FileNotFoundError:
        fail("Log file not found", json_output, path=log_path)
    except B2BStateError as e:
        fail(str(e), json_output)

    state_hash = compute_state_hash(result.state)
    summary = dict(select_checkout_summary(result.state))

    if json_output:
        output = {
            "success": True,
            "actions_replayed": result.applied,
            "state_hash": state_hash,
            "action_counts": action_counts,
            "checkout_summary": summary,
        }
        if show_state:
            output["state"] = canonicalize(result.state)
        print(json.dumps(output, indent=2))
        raise typer.Exit(0)

    console.print(f"[green]✓ Replayed {result.applied} actions successfully[/green]")
    console.print(f"  State hash: [yellow]{state_hash}[/yellow]")

    table = Table(title="Action Counts")
    table.add_column("Action Type", style="green")
    table.add_column("Count", style="cyan", justify="right")
    for action_type in sorted(action_counts.keys()):
        table.add_row(action_type, str(action_counts[action_type]))
    console.print(table)

    summary_table = Table(title="Checkout Summary", show_header=False)
    for key, value in summary.items():
        summary_table.add_row(key, str(value))
    console.print(summary_table)

    if show_state:
        console.print("\n[bold]Final State:[/bold]")
        syntax = Syntax(json.dumps(canonicalize(result.state), indent=2), "json", theme="monokai")
        console.print(syntax)

    raise typer.Exit(0)
