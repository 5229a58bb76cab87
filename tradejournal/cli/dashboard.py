"""Dashboard commands for the trade journal CLI.

Handles the performance dashboard and the monthly P&L calendar.
"""

import calendar as calendar_lib
from datetime import datetime
from typing import Optional

import click
from rich.columns import Columns
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    MONTH_FORMATS,
    console,
    money,
    ratio,
    require_session,
    resolve_month,
)


def _stat_panel(title: str, value: str, sub: str = "") -> Panel:
    body = f"[bold]{value}[/bold]" + (f"\n[dim]{sub}[/dim]" if sub else "")
    return Panel(body, title=title, border_style="cyan", expand=True)


@click.command()
@click.option("--month", type=click.DateTime(MONTH_FORMATS), default=None, help="Month for weekly P&L and equity (YYYY-MM).")
def dashboard(month: Optional[datetime]) -> None:
    """Show performance statistics.
    
    Net P&L, win rate, reward/risk and streaks cover all closed trades;
    the weekly P&L and equity curve cover the selected month.
    
    \b
    Examples:
      tradejournal dashboard
      tradejournal dashboard --month 2024-03
    """
    session = require_session()
    selected = resolve_month(month)
    board = session.dashboard(selected)
    stats = board.stats

    streak_sign = "+" if stats.current_streak > 0 else ""
    console.print(Columns([
        _stat_panel(
            "Net P&L",
            money(stats.net_pnl, colored=True),
            "Profitable" if stats.net_pnl >= 0 else "Drawdown",
        ),
        _stat_panel("Win Rate", f"{stats.win_rate:.1f}%", f"({stats.win_count}W / {stats.loss_count}L)"),
        _stat_panel(
            "Avg R:R",
            ratio(stats.reward_risk),
            f"Win: {money(stats.avg_win)} / Loss: {money(stats.avg_loss)}",
        ),
        _stat_panel(
            "Streaks",
            str(stats.max_win_streak),
            f"Current: {streak_sign}{stats.current_streak} ({'Hot' if stats.current_streak > 0 else 'Cold'})",
        ),
    ], equal=True, expand=True))

    # Win % by day of week
    daily = Table(title="Win % by Day", show_header=True, header_style="bold cyan")
    daily.add_column("Day", style="bold")
    daily.add_column("Trades", justify="right")
    daily.add_column("Win %", justify="right")
    for day in board.daily:
        color = "green" if day.win_rate >= 50 else "red"
        win = f"[{color}]{day.win_rate:.1f}%[/{color}]" if day.total else "[dim]0.0%[/dim]"
        daily.add_row(day.name, str(day.total), win)

    # P&L by setup
    setups = Table(title="P&L by Setup", show_header=True, header_style="bold cyan")
    setups.add_column("Setup", style="bold")
    setups.add_column("P&L", justify="right")
    for name, pnl in sorted(board.setups.items(), key=lambda item: item[1], reverse=True):
        setups.add_row(name, money(pnl, signed=True, colored=True))

    console.print(Columns([daily, setups]))

    month_label = board.month.strftime("%B %Y")

    # Weekly net P&L
    if board.weekly:
        weekly = Table(title=f"Weekly Net P&L - {month_label}", show_header=True, header_style="bold cyan")
        weekly.add_column("Week of", style="bold")
        weekly.add_column("P&L", justify="right")
        for week in board.weekly:
            weekly.add_row(week.week_start.strftime("%b %d"), money(week.pnl, signed=True, colored=True))
        console.print(weekly)
    else:
        console.print(f"\n[dim]No closed trades in {month_label}.[/dim]")
        return

    # Equity curve
    equity = Table(title=f"Equity Curve - {month_label}", show_header=True, header_style="bold cyan")
    equity.add_column("Exit", style="dim")
    equity.add_column("Trade P&L", justify="right")
    equity.add_column("Equity", justify="right")
    for point in board.equity:
        equity.add_row(
            point.date.strftime("%Y-%m-%d %H:%M"),
            money(point.pnl, signed=True, colored=True),
            money(point.equity, colored=True),
        )
    console.print(equity)


@click.command()
@click.option("--month", type=click.DateTime(MONTH_FORMATS), default=None, help="Month to show (YYYY-MM).")
def calendar(month: Optional[datetime]) -> None:
    """Show daily P&L for a month.
    
    Trades are placed on the day they were entered; only closed
    trades count.
    """
    from tradejournal.analytics import calendar_month

    session = require_session()
    selected = resolve_month(month)
    summary = calendar_month(session.trades, selected)

    table = Table(
        title=f"{selected.strftime('%B %Y')} - Monthly P&L {money(summary.monthly_pnl, signed=True)}",
        show_header=True,
        header_style="bold cyan",
        show_lines=True,
    )
    for name in ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]:
        table.add_column(name, justify="center", min_width=10)

    month_calendar = calendar_lib.Calendar(firstweekday=6)
    for week in month_calendar.monthdayscalendar(selected.year, selected.month):
        cells = []
        for day in week:
            if day == 0:
                cells.append("")
                continue
            entry = summary.days.get(day)
            if entry is None:
                cells.append(f"[dim]{day}[/dim]")
            else:
                color = "green" if entry.pnl >= 0 else "red"
                cells.append(
                    f"[bold]{day}[/bold]\n[{color}]{entry.pnl:+,.0f}[/{color}]\n"
                    f"[dim]{entry.wins}W {entry.losses}L[/dim]"
                )
        table.add_row(*cells)

    console.print(table)
