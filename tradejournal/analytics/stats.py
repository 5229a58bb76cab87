"""Trade statistics for the dashboard.

All functions here are pure: they take a list of trades, filter to
closed trades, and return fresh result objects. None of them raise on
an empty list; ratios degrade to 0 (or INFINITE for profit ratios).
"""

import math
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, Field

from tradejournal.models.trade import Trade


INFINITE = math.inf

UNKNOWN_SETUP = "Unknown"

DAYS_ORDER = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
WEEKDAYS = DAYS_ORDER[:5]


class TradeStats(BaseModel):
    """Headline numbers for a set of trades."""

    net_pnl: float = 0.0
    total_trades: int = 0
    win_count: int = 0
    loss_count: int = 0
    win_rate: float = 0.0
    gross_profit: float = 0.0
    gross_loss: float = 0.0
    avg_win: float = 0.0
    avg_loss: float = 0.0
    reward_risk: float = 0.0
    max_win_streak: int = 0
    current_streak: int = 0

    model_config = {"frozen": True}


class DayPerformance(BaseModel):
    """Win rate for one weekday."""

    name: str
    win_rate: float = 0.0
    total: int = 0

    model_config = {"frozen": True}


class WeeklyPnL(BaseModel):
    """Net P&L for the week starting on week_start (a Monday)."""

    week_start: date
    pnl: float = 0.0

    model_config = {"frozen": True}


class EquityPoint(BaseModel):
    """One point on the cumulative P&L curve."""

    date: datetime
    equity: float
    pnl: float

    model_config = {"frozen": True}


class SetupPerformance(BaseModel):
    """Aggregates for one setup label."""

    name: str
    count: int = 0
    pnl: float = 0.0
    win_rate: float = 0.0
    profit_factor: float = 0.0
    avg_pnl: float = 0.0
    is_custom: bool = False

    model_config = {"frozen": True}


class CalendarDay(BaseModel):
    """Closed trades entered on one calendar day."""

    day: int
    pnl: float = 0.0
    count: int = 0
    wins: int = 0
    losses: int = 0

    model_config = {"frozen": True}


class CalendarMonth(BaseModel):
    """Per-day results for a month plus the month total."""

    year: int
    month: int
    days: dict[int, CalendarDay] = Field(default_factory=dict)
    monthly_pnl: float = 0.0

    model_config = {"frozen": True}


class Dashboard(BaseModel):
    """Everything the dashboard view shows for a selected month."""

    month: date
    stats: TradeStats
    daily: list[DayPerformance]
    weekly: list[WeeklyPnL]
    equity: list[EquityPoint]
    setups: dict[str, float]

    model_config = {"frozen": True}


def _ratio(numerator: float, denominator: float) -> float:
    """Divide, returning INFINITE for x/0 with x > 0 and 0 for 0/0."""
    if denominator == 0:
        return INFINITE if numerator > 0 else 0.0
    return numerator / denominator


def closed_trades(trades: Iterable[Trade]) -> list[Trade]:
    """Get closed trades sorted by exit timestamp ascending."""
    return sorted((t for t in trades if t.is_closed), key=lambda t: t.exit_date)


def net_pnl(trades: Iterable[Trade]) -> float:
    """Sum of P&L over closed trades; a missing P&L counts as zero."""
    return sum(t.net_pnl for t in trades if t.is_closed)


def win_rate(trades: Iterable[Trade]) -> float:
    """Percentage of closed trades with positive P&L."""
    closed = [t for t in trades if t.is_closed]
    if not closed:
        return 0.0
    wins = sum(1 for t in closed if t.is_win)
    return wins / len(closed) * 100


def streaks(trades: Iterable[Trade]) -> tuple[int, int]:
    """Calculate the longest win streak and the current streak.

    The current streak is the run ending at the most recent closed
    trade: positive for wins, negative for losses.

    Args:
        trades: Trades in any order.

    Returns:
        Tuple of (max_win_streak, current_streak).
    """
    closed = closed_trades(trades)

    max_win_streak = 0
    run = 0
    for trade in closed:
        if trade.is_win:
            run += 1
            max_win_streak = max(max_win_streak, run)
        else:
            run = 0

    current_streak = 0
    if closed:
        last_win = closed[-1].is_win
        for trade in reversed(closed):
            if trade.is_win != last_win:
                break
            current_streak += 1 if last_win else -1

    return max_win_streak, current_streak


def compute_trade_stats(trades: Sequence[Trade]) -> TradeStats:
    """Calculate headline statistics from a list of trades.

    Args:
        trades: Trades in any order; open trades are ignored.

    Returns:
        TradeStats, zero-valued when there are no closed trades.
    """
    closed = closed_trades(trades)
    if not closed:
        return TradeStats()

    wins = [t for t in closed if t.is_win]
    losses = [t for t in closed if not t.is_win]

    gross_profit = sum(t.net_pnl for t in wins)
    gross_loss = abs(sum(t.net_pnl for t in losses))
    avg_win = gross_profit / len(wins) if wins else 0.0
    avg_loss = gross_loss / len(losses) if losses else 0.0
    max_win_streak, current_streak = streaks(closed)

    return TradeStats(
        net_pnl=net_pnl(closed),
        total_trades=len(closed),
        win_count=len(wins),
        loss_count=len(losses),
        win_rate=len(wins) / len(closed) * 100,
        gross_profit=gross_profit,
        gross_loss=gross_loss,
        avg_win=avg_win,
        avg_loss=avg_loss,
        reward_risk=_ratio(avg_win, avg_loss),
        max_win_streak=max_win_streak,
        current_streak=current_streak,
    )


def day_of_week_performance(trades: Iterable[Trade]) -> list[DayPerformance]:
    """Win rate per weekday of exit.

    Monday to Friday are always present; Saturday and Sunday only
    appear when they have trades.
    """
    totals = [0] * 7
    wins = [0] * 7

    for trade in closed_trades(trades):
        weekday = trade.exit_date.weekday()
        totals[weekday] += 1
        if trade.is_win:
            wins[weekday] += 1

    return [
        DayPerformance(
            name=name,
            win_rate=(wins[i] / totals[i] * 100) if totals[i] > 0 else 0.0,
            total=totals[i],
        )
        for i, name in enumerate(DAYS_ORDER)
        if totals[i] > 0 or name in WEEKDAYS
    ]


def _in_month(moment: date, month: date) -> bool:
    return moment.year == month.year and moment.month == month.month


def month_trades(trades: Iterable[Trade], month: date) -> list[Trade]:
    """Closed trades that exited in the month containing `month`, in exit order."""
    return [t for t in closed_trades(trades) if _in_month(t.exit_date, month)]


def week_start(moment: date) -> date:
    """Monday of the week containing `moment`; Sunday belongs to the week before."""
    if isinstance(moment, datetime):
        moment = moment.date()
    return moment - timedelta(days=moment.weekday())


def weekly_pnl(trades: Iterable[Trade], month: date) -> list[WeeklyPnL]:
    """Net P&L per week for trades closed in the given month."""
    buckets: dict[date, float] = defaultdict(float)
    for trade in month_trades(trades, month):
        buckets[week_start(trade.exit_date)] += trade.net_pnl

    return [WeeklyPnL(week_start=start, pnl=pnl) for start, pnl in sorted(buckets.items())]


def equity_curve(trades: Iterable[Trade], month: date) -> list[EquityPoint]:
    """Running P&L over the trades closed in the given month.

    The curve restarts at zero for every month.
    """
    points = []
    cumulative = 0.0
    for trade in month_trades(trades, month):
        cumulative += trade.net_pnl
        points.append(EquityPoint(date=trade.exit_date, equity=cumulative, pnl=trade.net_pnl))
    return points


def setup_pnl(trades: Iterable[Trade]) -> dict[str, float]:
    """Total closed-trade P&L per setup label."""
    totals: dict[str, float] = {}
    for trade in closed_trades(trades):
        name = trade.setup or UNKNOWN_SETUP
        totals[name] = totals.get(name, 0.0) + trade.net_pnl
    return totals


def setup_performance(
    trades: Iterable[Trade],
    setups: Iterable[str] = (),
    custom_setups: Iterable[str] = (),
) -> list[SetupPerformance]:
    """Per-setup statistics for the setup manager.

    Args:
        trades: Trades in any order.
        setups: Labels to always report, even with no trades.
        custom_setups: Labels flagged as user-defined.

    Returns:
        SetupPerformance rows sorted by total P&L, best first.
    """
    grouped: dict[str, list[Trade]] = {name: [] for name in setups}
    for trade in closed_trades(trades):
        grouped.setdefault(trade.setup or UNKNOWN_SETUP, []).append(trade)

    custom = set(custom_setups)
    rows = []
    for name, group in grouped.items():
        wins = [t for t in group if t.net_pnl > 0]
        losses = [t for t in group if t.net_pnl < 0]
        total = sum(t.net_pnl for t in group)
        gross_profit = sum(t.net_pnl for t in wins)
        gross_loss = abs(sum(t.net_pnl for t in losses))

        rows.append(
            SetupPerformance(
                name=name,
                count=len(group),
                pnl=total,
                win_rate=(len(wins) / len(group) * 100) if group else 0.0,
                profit_factor=_ratio(gross_profit, gross_loss),
                avg_pnl=(total / len(group)) if group else 0.0,
                is_custom=name in custom,
            )
        )

    return sorted(rows, key=lambda row: row.pnl, reverse=True)


def best_and_worst_setup(
    performance: Sequence[SetupPerformance],
) -> tuple[Optional[SetupPerformance], Optional[SetupPerformance]]:
    """Pick the best (profitable) and worst (losing) setup from sorted rows."""
    if not performance:
        return None, None
    best = performance[0] if performance[0].pnl > 0 else None
    worst = performance[-1] if performance[-1].pnl < 0 else None
    return best, worst


def calendar_month(trades: Iterable[Trade], month: date) -> CalendarMonth:
    """Group closed trades by the day of the month they were entered."""
    days: dict[int, dict[str, float]] = {}
    monthly = 0.0

    for trade in trades:
        if not trade.is_closed or not _in_month(trade.entry_date, month):
            continue
        bucket = days.setdefault(
            trade.entry_date.day, {"pnl": 0.0, "count": 0, "wins": 0, "losses": 0}
        )
        bucket["pnl"] += trade.net_pnl
        bucket["count"] += 1
        if trade.is_win:
            bucket["wins"] += 1
        else:
            bucket["losses"] += 1
        monthly += trade.net_pnl

    return CalendarMonth(
        year=month.year,
        month=month.month,
        days={day: CalendarDay(day=day, **values) for day, values in sorted(days.items())},
        monthly_pnl=monthly,
    )


def dashboard(trades: Sequence[Trade], month: Optional[date] = None) -> Dashboard:
    """Build the dashboard for a month (defaults to the current month)."""
    month = month or date.today()
    return Dashboard(
        month=date(month.year, month.month, 1),
        stats=compute_trade_stats(trades),
        daily=day_of_week_performance(trades),
        weekly=weekly_pnl(trades, month),
        equity=equity_curve(trades, month),
        setups=setup_pnl(trades),
    )
