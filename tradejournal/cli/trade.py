"""Trade commands for the trade journal CLI.

Handles logging, editing, deleting and listing trades.
"""

import base64
import mimetypes
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    DATETIME_FORMATS,
    console,
    get_config,
    handle_errors,
    money,
    require_session,
)
from tradejournal.models import FEELINGS, AssetClass, Direction, Trade, new_trade


DIRECTION_CHOICES = [d.value for d in Direction]
ASSET_CHOICES = [a.value for a in AssetClass]


def encode_screenshot(path: Path) -> str:
    """Read an image file into a data URL.

    Raises:
        click.BadParameter: If the file is not an image.
    """
    mime, _ = mimetypes.guess_type(path.name)
    if not mime or not mime.startswith("image/"):
        raise click.BadParameter(f"{path} is not an image file", param_hint="--screenshot")
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def _trade_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by add and edit; unset options are None."""
    options = [
        click.option("-d", "--direction", type=click.Choice(DIRECTION_CHOICES, case_sensitive=False), default=None, help="Long or Short."),
        click.option("-a", "--asset", "asset_class", type=click.Choice(ASSET_CHOICES, case_sensitive=False), default=None, help="Asset class."),
        click.option("--entry", "entry_date", type=click.DateTime(DATETIME_FORMATS), default=None, help="Entry time."),
        click.option("--exit", "exit_date", type=click.DateTime(DATETIME_FORMATS), default=None, help="Exit time; omit for an open trade."),
        click.option("--entry-price", type=float, default=None, help="Entry price."),
        click.option("--exit-price", type=float, default=None, help="Exit price."),
        click.option("-q", "--qty", "quantity", type=float, default=None, help="Quantity."),
        click.option("--fees", type=float, default=None, help="Fees paid."),
        click.option("--pnl", type=float, default=None, help="Net P&L; computed from prices if omitted."),
        click.option("-s", "--setup", default=None, help="Setup label."),
        click.option("-m", "--mistake", "mistakes", multiple=True, help="Mistake tag (repeatable)."),
        click.option("--followed/--broke-plan", "followed_setup", default=None, help="Whether you followed your plan."),
        click.option("--reason", "entry_reason", default=None, help="Why you took the trade."),
        click.option("--feeling", type=click.Choice(FEELINGS, case_sensitive=False), default=None, help="How you felt."),
        click.option("--lesson", "lesson_learned", default=None, help="Lesson learned."),
        click.option("-t", "--tag", "tags", multiple=True, help="Hashtag (repeatable)."),
        click.option("--screenshot", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None, help="Chart image to attach."),
        click.option("-n", "--notes", default=None, help="General notes."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _collect_fields(**options: Any) -> dict[str, Any]:
    """Turn CLI options into Trade fields, dropping unset ones."""
    fields = {}
    for key, value in options.items():
        if value is None or value == ():
            continue
        if key == "direction":
            value = Direction(value.capitalize())
        elif key == "asset_class":
            value = AssetClass(value.capitalize())
        elif key in ("mistakes", "tags"):
            value = list(value)
        elif key == "screenshot":
            value = encode_screenshot(value)
        fields[key] = value
    return fields


def _print_trade(trade: Trade, title: str) -> None:
    status = "Closed" if trade.is_closed else "[yellow]Open[/yellow]"
    pnl = money(trade.pnl, signed=True, colored=True) if trade.pnl is not None else "-"
    lines = [
        f"[bold]{trade.symbol}[/bold] {trade.direction.value} ({trade.asset_class.value}) - {status}",
        f"ID:        [dim]{trade.id}[/dim]",
        f"Entry:     {trade.entry_date:%Y-%m-%d %H:%M} @ {trade.entry_price:g}",
    ]
    if trade.exit_date:
        exit_price = f"{trade.exit_price:g}" if trade.exit_price is not None else "-"
        lines.append(f"Exit:      {trade.exit_date:%Y-%m-%d %H:%M} @ {exit_price}")
    lines += [
        f"Quantity:  {trade.quantity:g}   Fees: {money(trade.fees)}",
        f"Net P&L:   {pnl}",
        f"Setup:     {trade.setup or '-'}   Followed plan: {'yes' if trade.followed_setup else 'no'}",
        f"Feeling:   {trade.feeling}",
    ]
    if trade.mistakes:
        lines.append(f"Mistakes:  {', '.join(trade.mistakes)}")
    if trade.tags:
        lines.append(f"Tags:      {' '.join(trade.tags)}")
    if trade.entry_reason:
        lines.append(f"Reason:    {trade.entry_reason}")
    if trade.lesson_learned:
        lines.append(f"Lesson:    {trade.lesson_learned}")
    if trade.notes:
        lines.append(f"Notes:     {trade.notes}")
    if trade.screenshot:
        lines.append("[dim]Screenshot attached[/dim]")

    console.print(Panel("\n".join(lines), title=f"[bold cyan]{title}[/bold cyan]", border_style="cyan"))


@click.command()
@click.argument("symbol")
@_trade_options
@handle_errors
def add(symbol: str, **options: Any) -> None:
    """Log a new trade.
    
    \b
    Examples:
      tradejournal add RELIANCE --entry-price 2350.5 --exit-price 2380 -q 100 --fees 50 \\
          --exit "2024-03-01 10:30" -s Breakout --feeling Calm -t breakout
      tradejournal add NIFTY -d Short -a Futures --entry-price 19500 -q 50
    """
    session = require_session()

    fields = _collect_fields(**options)
    fields["symbol"] = symbol
    fields.setdefault("feeling", get_config().get("journal", {}).get("default_feeling", "Calm"))
    explicit_pnl = "pnl" in fields

    trade = new_trade(**fields)
    if not explicit_pnl:
        trade = trade.with_computed_pnl()

    saved = session.save_trade(trade)
    _print_trade(saved, "Trade Logged")


@click.command()
@click.argument("trade_id")
@click.option("--symbol", "symbol_opt", default=None, help="Trading symbol.")
@_trade_options
@handle_errors
def edit(trade_id: str, symbol_opt: Optional[str], **options: Any) -> None:
    """Edit a logged trade.
    
    Only the options you pass are changed. P&L is recomputed when
    prices, quantity, fees or direction change unless --pnl is given.
    
    \b
    Examples:
      tradejournal edit 3f2a... --exit "2024-03-01 15:10" --exit-price 2401
    """
    session = require_session()
    current = session.get_trade(trade_id)

    fields = _collect_fields(**options)
    if symbol_opt:
        fields["symbol"] = symbol_opt
    if not fields:
        console.print("[dim]Nothing to change.[/dim]")
        return

    trade = Trade.model_validate({**current.model_dump(), **fields})
    repricing = {"direction", "entry_price", "exit_price", "quantity", "fees"}
    if "pnl" not in fields and repricing & fields.keys():
        trade = trade.with_computed_pnl()

    saved = session.save_trade(trade, editing_id=trade_id)
    if saved.id != trade_id:
        console.print(f"[yellow]Original record was missing; saved as new trade {saved.id}[/yellow]")
    _print_trade(saved, "Trade Updated")


@click.command()
@click.argument("trade_id")
@click.option("-y", "--yes", is_flag=True, default=False, help="Skip confirmation.")
@handle_errors
def delete(trade_id: str, yes: bool) -> None:
    """Delete a trade."""
    session = require_session()

    if not yes and not click.confirm("Are you sure you want to delete this trade?"):
        console.print("[dim]Cancelled.[/dim]")
        return

    session.delete_trade(trade_id)

    console.print(f"[green]Trade {trade_id} deleted.[/green]")


@click.command()
@click.argument("trade_id")
@handle_errors
def show(trade_id: str) -> None:
    """Show every journal field of a trade."""
    session = require_session()
    _print_trade(session.get_trade(trade_id), "Trade Details")


@click.command()
@click.option("--search", "text", default="", help="Match symbol, notes or setup.")
@click.option("-a", "--asset", "asset_class", type=click.Choice(ASSET_CHOICES, case_sensitive=False), default=None, help="Asset class.")
@click.option("-d", "--direction", type=click.Choice(DIRECTION_CHOICES, case_sensitive=False), default=None, help="Long or Short.")
@click.option("-s", "--setup", default=None, help="Setup label.")
@click.option("--from", "date_from", type=click.DateTime(["%Y-%m-%d"]), default=None, help="Entered on or after.")
@click.option("--to", "date_to", type=click.DateTime(["%Y-%m-%d"]), default=None, help="Entered on or before.")
@click.option("--limit", type=int, default=50, show_default=True, help="Maximum rows.")
def trades(
    text: str,
    asset_class: Optional[str],
    direction: Optional[str],
    setup: Optional[str],
    date_from: Optional[datetime],
    date_to: Optional[datetime],
    limit: int,
) -> None:
    """List trades, newest first.
    
    \b
    Examples:
      tradejournal trades
      tradejournal trades -s Breakout --from 2024-01-01
      tradejournal trades --search reliance -a Stocks
    """
    from tradejournal.analytics import TradeFilter

    session = require_session()

    criteria = TradeFilter(
        text=text,
        asset_class=AssetClass(asset_class.capitalize()) if asset_class else None,
        direction=Direction(direction.capitalize()) if direction else None,
        setup=setup,
        date_from=date_from.date() if date_from else None,
        date_to=date_to.date() if date_to else None,
    )
    rows = session.filter_trades(criteria)

    if not rows:
        console.print(Panel(
            "[dim]No trades found[/dim]" + ("\n\nTry clearing your filters." if criteria.is_active else ""),
            title="[bold]Trade Journal[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title=f"Trade Journal ({len(rows)} trades)",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Entry", style="dim")
    table.add_column("Symbol", style="bold")
    table.add_column("Side", justify="center")
    table.add_column("Asset")
    table.add_column("Setup")
    table.add_column("P&L", justify="right")
    table.add_column("ID", style="dim", max_width=12)

    for trade in rows[:limit]:
        side_color = "green" if trade.direction == Direction.LONG else "red"
        if not trade.is_closed:
            pnl_str = "[yellow]open[/yellow]"
        elif trade.pnl is not None:
            pnl_str = money(trade.pnl, signed=True, colored=True)
        else:
            pnl_str = "-"

        table.add_row(
            trade.entry_date.strftime("%Y-%m-%d %H:%M"),
            trade.symbol,
            f"[{side_color}]{trade.direction.value}[/{side_color}]",
            trade.asset_class.value,
            trade.setup or "-",
            pnl_str,
            trade.id,
        )

    console.print(table)
