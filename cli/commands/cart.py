"""
Cart commands: show a saved cart
"""

import json

import typer
from rich.console import Console
from rich.table import Table

from b2bstate.config import Settings
from b2bstate.core.errors import B2BStateError
from b2bstate.reducers import root_reducer
from b2bstate.selectors.cart import select_cart_items, select_checkout_summary
from b2bstate.snapshot import load_cart_snapshot

from .log import fail

app = typer.Typer()
console = Console()


@app.command()
def show(
    snapshot_path: str = typer.Option(
        Settings.from_env().snapshot_path, "--snapshot", "-s", help="Path to saved cart"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Hydrate a saved cart and show its lines and checkout summary.

    Examples:
        b2bstate cart show --snapshot /tmp/b2bstate/cart.json
        b2bstate cart show --json
    """
    try:
        action = load_cart_snapshot(snapshot_path)
    except B2BStateError as e:
        fail(str(e), json_output, path=snapshot_path)

    state = root_reducer(None, action)
    items = select_cart_items(state)
    summary = dict(select_checkout_summary(state))

    if json_output:
        print(
            json.dumps(
                {"items": [item.to_dict() for item in items], "checkout_summary": summary},
                indent=2,
            )
        )
        raise typer.Exit(0)

    if not items:
        console.print("[yellow]Cart is empty[/yellow]")

    table = Table(title=f"Cart: {snapshot_path}")
    table.add_column("Product", style="green")
    table.add_column("SKU", style="dim")
    table.add_column("Qty", style="cyan", justify="right")
    table.add_column("Unit", justify="right")
    table.add_column("Line Total", style="yellow", justify="right")
    for item in items:
        table.add_row(
            item.product_name or item.product_id,
            item.product_sku,
            str(item.quantity),
            f"{item.unit_price:.2f}",
            f"{item.line_total:.2f}",
        )
    console.print(table)

    status = "[green]ready[/green]" if summary["can_checkout"] else f"[red]{summary['blocked_reason']}[/red]"
    console.print(f"\n[bold]Total:[/bold] {summary['total']:.2f} {summary['currency']}")
    console.print(f"[bold]Checkout:[/bold] {status}")
    raise typer.Exit(0)
