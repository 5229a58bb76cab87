"""Aggregation engine and challenge tracker."""

from tradejournal.analytics.stats import (
    INFINITE,
    UNKNOWN_SETUP,
    CalendarMonth,
    Dashboard,
    DayPerformance,
    EquityPoint,
    SetupPerformance,
    TradeStats,
    WeeklyPnL,
    best_and_worst_setup,
    calendar_month,
    closed_trades,
    compute_trade_stats,
    dashboard,
    day_of_week_performance,
    equity_curve,
    month_trades,
    net_pnl,
    setup_performance,
    setup_pnl,
    streaks,
    week_start,
    weekly_pnl,
    win_rate,
)
from tradejournal.analytics.challenge import (
    ChallengeProgress,
    archive_challenge,
    challenge_gain,
    compute_progress,
    progress_percentage,
    update_challenge,
)
from tradejournal.analytics.filters import TradeFilter, filter_trades

__all__ = [
    "INFINITE",
    "UNKNOWN_SETUP",
    "CalendarMonth",
    "Dashboard",
    "DayPerformance",
    "EquityPoint",
    "SetupPerformance",
    "TradeStats",
    "WeeklyPnL",
    "best_and_worst_setup",
    "calendar_month",
    "closed_trades",
    "compute_trade_stats",
    "dashboard",
    "day_of_week_performance",
    "equity_curve",
    "month_trades",
    "net_pnl",
    "setup_performance",
    "setup_pnl",
    "streaks",
    "week_start",
    "weekly_pnl",
    "win_rate",
    "ChallengeProgress",
    "archive_challenge",
    "challenge_gain",
    "compute_progress",
    "progress_percentage",
    "update_challenge",
    "TradeFilter",
    "filter_trades",
]
