"""Setup manager commands for the trade journal CLI.

Handles the setup playbook: per-setup statistics and custom setups.
"""

import click
from rich.table import Table

from tradejournal.cli.common import console, money, ratio, require_session


@click.group(invoke_without_command=True)
@click.pass_context
def setup(ctx: click.Context) -> None:
    """Manage setups and compare their performance.
    
    \b
    Examples:
      tradejournal setup
      tradejournal setup add "VCP Breakout"
      tradejournal setup rename "VCP Breakout" VCP
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(list_setups)


@setup.command("list")
def list_setups() -> None:
    """Show statistics for every setup, best first."""
    from tradejournal.analytics import best_and_worst_setup

    session = require_session()
    rows = session.setup_performance()
    best, worst = best_and_worst_setup(rows)

    table = Table(title="Setup Playbook", show_header=True, header_style="bold cyan")
    table.add_column("Setup", style="bold")
    table.add_column("Type", style="dim")
    table.add_column("Trades", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Win %", justify="right")
    table.add_column("Profit Factor", justify="right")
    table.add_column("Avg P&L", justify="right")

    for row in rows:
        table.add_row(
            row.name,
            "User Strategy" if row.is_custom else "System Standard",
            str(row.count),
            money(row.pnl, signed=True, colored=True),
            f"{row.win_rate:.1f}%",
            ratio(row.profit_factor),
            money(row.avg_pnl),
        )

    console.print(table)

    if best:
        console.print(f"[green]Best setup:[/green] {best.name} ({money(best.pnl, signed=True)})")
    if worst:
        console.print(f"[red]Worst setup:[/red] {worst.name} ({money(worst.pnl)})")


@setup.command("add")
@click.argument("name")
def add_setup(name: str) -> None:
    """Add a custom setup."""
    session = require_session()
    if session.add_setup(name):
        console.print(f"[green]Added setup '{name.strip()}'.[/green]")
    else:
        console.print(f"[yellow]Setup '{name}' already exists or is invalid.[/yellow]")


@setup.command("remove")
@click.argument("name")
def remove_setup(name: str) -> None:
    """Remove a custom setup. Trades keep their label."""
    session = require_session()
    if session.remove_setup(name):
        console.print(f"[green]Removed setup '{name}'.[/green]")
    else:
        console.print(f"[yellow]'{name}' is not a custom setup.[/yellow]")


@setup.command("rename")
@click.argument("old_name")
@click.argument("new_name")
def rename_setup(old_name: str, new_name: str) -> None:
    """Rename a custom setup and relabel its trades."""
    session = require_session()
    if session.rename_setup(old_name, new_name):
        console.print(f"[green]Renamed '{old_name}' to '{new_name.strip()}'.[/green]")
    else:
        console.print(
            f"[yellow]Cannot rename '{old_name}': it must be a custom setup "
            f"and '{new_name}' must be unused.[/yellow]"
        )
