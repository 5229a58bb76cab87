"""Growth challenge commands for the trade journal CLI.

Handles progress display, goal edits, and archiving reached goals.
"""

from typing import Optional

import click
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table

from tradejournal.analytics.challenge import TARGET_SESSIONS
from tradejournal.cli.common import console, handle_errors, money, require_session


@click.group(invoke_without_command=True)
@click.pass_context
def challenge(ctx: click.Context) -> None:
    """Track your capital growth challenge.
    
    \b
    Examples:
      tradejournal challenge
      tradejournal challenge set --title "First 10L" --start 500000 --target 1000000
      tradejournal challenge archive
      tradejournal challenge history
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(show_challenge)


@challenge.command("show")
def show_challenge() -> None:
    """Show progress toward the active goal."""
    session = require_session()
    active = session.challenge
    progress = session.progress()

    color = "green" if progress.goal_reached else "blue"
    body = (
        f"[bold]{active.title}[/bold]\n"
        f"[dim]Active since {active.start_date:%Y-%m-%d}[/dim]\n\n"
        f"Starting Capital: {money(active.starting_capital)}\n"
        f"Target Capital:   {money(active.target_capital)}\n"
        f"Current Capital:  [bold]{money(progress.current_capital)}[/bold]  "
        f"({money(progress.net_pnl, signed=True, colored=True)} Total Profit)\n\n"
        f"Progress: [bold {color}]{progress.percentage:.1f}%[/bold {color}]  "
        f"[dim]{'Strong Trend' if progress.percentage > 50 else 'Building Base'}[/dim]"
    )
    console.print(Panel(body, title="[bold]Growth Challenge[/bold]", border_style=color))
    console.print(ProgressBar(total=100, completed=progress.percentage, complete_style=color))

    if progress.goal_reached:
        console.print(
            "\n[bold green]🏆 Goal reached![/bold green] "
            "Run [cyan]tradejournal challenge archive[/cyan] to set your next milestone."
        )
        return

    console.print(
        f"\nTo reach {money(active.target_capital)} you need a net profit of "
        f"[bold]{money(progress.remaining_profit)}[/bold] from your current equity.\n"
        f"Avg P&L per session required (over {TARGET_SESSIONS}): "
        f"[bold]{money(progress.per_session_target)}[/bold]"
    )


@challenge.command("set")
@click.option("--title", default=None, help="Goal title.")
@click.option("--start", "starting_capital", type=float, default=None, help="Starting capital.")
@click.option("--target", "target_capital", type=float, default=None, help="Target capital.")
@handle_errors
def set_challenge(
    title: Optional[str],
    starting_capital: Optional[float],
    target_capital: Optional[float],
) -> None:
    """Edit the active goal."""
    if title is None and starting_capital is None and target_capital is None:
        raise click.UsageError("Pass at least one of --title, --start or --target.")

    session = require_session()
    updated = session.update_challenge(title, starting_capital, target_capital)
    console.print(
        f"[green]Challenge updated:[/green] {updated.title} "
        f"({money(updated.starting_capital)} → {money(updated.target_capital)})"
    )


@challenge.command("archive")
@click.option("-y", "--yes", is_flag=True, default=False, help="Skip confirmation.")
@handle_errors
def archive(yes: bool) -> None:
    """Archive a reached goal and start the next one.
    
    The next goal starts from the old target and aims to double it.
    """
    session = require_session()

    if not yes and not click.confirm(
        "Congratulations! Archive this milestone and set a new professional goal?"
    ):
        console.print("[dim]Cancelled.[/dim]")
        return

    next_challenge = session.archive_challenge()
    console.print(Panel(
        f"[green]Milestone archived.[/green]\n\n"
        f"Next goal: [bold]{next_challenge.title}[/bold]\n"
        f"{money(next_challenge.starting_capital)} → {money(next_challenge.target_capital)}",
        title="[bold green]Challenge Complete[/bold green]",
        border_style="green",
    ))


@challenge.command("history")
def history() -> None:
    """Show completed challenges."""
    from tradejournal.analytics import challenge_gain

    session = require_session()
    completed = session.completed_challenges

    if not completed:
        console.print("[dim]No completed challenges yet.[/dim]")
        return

    table = Table(title="Hall of Fame", show_header=True, header_style="bold cyan")
    table.add_column("Goal", style="bold")
    table.add_column("Period", style="dim")
    table.add_column("Capital", justify="right")
    table.add_column("Profit", justify="right")
    table.add_column("Gain", justify="right")

    for past in completed:
        profit, gain_pct = challenge_gain(past)
        end = f"{past.end_date:%Y-%m-%d}" if past.end_date else "N/A"
        table.add_row(
            past.title,
            f"{past.start_date:%Y-%m-%d} to {end}",
            f"{money(past.starting_capital)} → {money(past.target_capital)}",
            money(profit, signed=True, colored=True),
            f"{gain_pct:.0f}%",
        )

    console.print(table)
