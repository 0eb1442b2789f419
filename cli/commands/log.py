"""
Action journal commands: tail, inspect, verify
"""

import json
import os
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from b2bstate.config import Settings
from b2bstate.core.errors import B2BStateError
from b2bstate.log import FileActionLog, verify_chain

app = typer.Typer()
console = Console()

DEFAULT_LOG = Settings.from_env().journal_path


def open_journal(log_path: str) -> FileActionLog:
    # FileActionLog creates missing files; reading commands must not
    if not os.path.exists(log_path):
        raise FileNotFoundError(log_path)
    return FileActionLog(log_path)


def fail(message: str, json_output: bool, **extra: Any) -> None:
    if json_output:
        print(json.dumps({"error": message, **extra}))
    else:
        console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(2)


def _load_records(log_path: str) -> List[Dict[str, Any]]:
    return list(open_journal(log_path).records())


@app.command()
def tail(
    log_path: str = typer.Option(DEFAULT_LOG, "--log", "-l", help="Path to action journal"),
    lines: Optional[int] = typer.Option(None, "--lines", "-n", help="Number of records to show"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show the last journaled actions.

    Examples:
        b2bstate log tail
        b2bstate log tail --lines 10
        b2bstate log tail --json
    """
    try:
        records = _load_records(log_path)
    except FileNotFoundError:
        fail("Log file not found", json_output, path=log_path)
    except B2BStateError as e:
        fail(str(e), json_output)

    if lines:
        records = records[-lines:]

    if json_output:
        print(json.dumps({"actions": records, "count": len(records)}, indent=2))
        raise typer.Exit(0)

    if not records:
        console.print("[yellow]Action journal is empty[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Action Journal: {log_path}")
    table.add_column("Seq", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Timestamp", style="yellow")
    table.add_column("Hash (prefix)", style="dim")

    for rec in records:
        action = rec["action"]
        table.add_row(
            str(action.get("seq", "N/A")),
            action.get("type", "N/A"),
            action.get("ts", "N/A"),
            rec.get("action_hash", "")[:16] or "N/A",
        )

    console.print(table)
    console.print(f"\n[bold]Total actions:[/bold] {len(records)}")
    raise typer.Exit(0)


@app.command()
def inspect(
    log_path: str = typer.Option(DEFAULT_LOG, "--log", "-l", help="Path to action journal"),
    from_seq: Optional[int] = typer.Option(None, "--from", help="Start from sequence number"),
    to_seq: Optional[int] = typer.Option(None, "--to", help="End at sequence number"),
    action_type: Optional[str] = typer.Option(None, "--type", "-t", help="Filter by action type"),
    show_payload: bool = typer.Option(False, "--payload", "-p", help="Show full payload"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Inspect journaled actions with filters.

    Examples:
        b2bstate log inspect --from 0 --to 10
        b2bstate log inspect --type cartB2B/addItem
        b2bstate log inspect --payload --json
    """
    try:
        records = _load_records(log_path)
    except FileNotFoundError:
        fail("Log file not found", json_output, path=log_path)
    except B2BStateError as e:
        fail(str(e), json_output)

    if from_seq is not None:
        records = [rec for rec in records if rec["action"].get("seq", 0) >= from_seq]
    if to_seq is not None:
        records = [rec for rec in records if rec["action"].get("seq", 0) <= to_seq]
    if action_type:
        records = [rec for rec in records if rec["action"].get("type") == action_type]

    if json_output:
        if not show_payload:
            for rec in records:
                rec["action"]["payload"] = "<hidden>"
        print(json.dumps({"actions": records, "count": len(records)}, indent=2))
        raise typer.Exit(0)

    if not records:
        console.print("[yellow]No actions match the filters[/yellow]")
        raise typer.Exit(0)

    for rec in records:
        action = rec["action"]
        console.print(f"\n[bold cyan]Action {action.get('seq', 'N/A')}[/bold cyan]")
        console.print(f"  Type: [green]{action.get('type', 'N/A')}[/green]")
        console.print(f"  Timestamp: {action.get('ts', 'N/A')}")
        console.print(f"  Hash: {rec.get('action_hash', 'N/A')}")
        console.print(f"  Prev Hash: {rec.get('prev_hash', 'N/A')}")

        if show_payload:
            console.print("  Payload:")
            syntax = Syntax(
                json.dumps(action.get("payload", {}), indent=2),
                "json",
                theme="monokai",
                line_numbers=False,
            )
            console.print(syntax)

    console.print(f"\n[bold]Total actions:[/bold] {len(records)}")
    raise typer.Exit(0)


@app.command()
def verify(
    log_path: str = typer.Option(DEFAULT_LOG, "--log", "-l", help="Path to action journal"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Verify the journal hash chain.

    Exit code 0 when every link checks out, 2 otherwise.
    """
    try:
        verified = verify_chain(_load_records(log_path))
    except FileNotFoundError:
        fail("Log file not found", json_output, path=log_path)
    except B2BStateError as e:
        fail(str(e), json_output, valid=False)

    if json_output:
        print(json.dumps({"valid": True, "verified": verified}))
    else:
        console.print(f"[green]✓ Hash chain valid[/green] ({verified} actions)")
    raise typer.Exit(0)
