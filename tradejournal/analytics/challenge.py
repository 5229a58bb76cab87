"""Growth challenge tracking.

Progress is derived from the trade list on every call; nothing here
mutates the challenge or the history passed in.
"""

import uuid
from datetime import datetime
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel

from tradejournal.analytics.stats import net_pnl
from tradejournal.models.challenge import (
    NEXT_CHALLENGE_TITLE,
    ChallengeStatus,
    GrowthChallenge,
)
from tradejournal.models.trade import Trade


# Sessions the remaining profit is spread over
TARGET_SESSIONS = 20


class ChallengeProgress(BaseModel):
    """Where the active challenge stands."""

    current_capital: float
    net_pnl: float
    percentage: float
    goal_reached: bool
    remaining_profit: float = 0.0
    per_session_target: float = 0.0

    model_config = {"frozen": True}


def progress_percentage(starting: float, target: float, current: float) -> float:
    """Share of the starting-to-target gap covered, clamped to [0, 100].

    A non-positive gap yields 0.
    """
    gap = target - starting
    if gap <= 0:
        return 0.0
    return min(max((current - starting) / gap * 100, 0.0), 100.0)


def compute_progress(challenge: GrowthChallenge, trades: Iterable[Trade]) -> ChallengeProgress:
    """Calculate capital and progress for a challenge.

    Args:
        challenge: Challenge being tracked.
        trades: All of the user's trades.

    Returns:
        ChallengeProgress with current capital, percentage, the profit
        still needed and that profit spread over TARGET_SESSIONS
        (zero while the journal is empty).
    """
    trades = list(trades)
    pnl = net_pnl(trades)
    current = challenge.starting_capital + pnl
    percentage = progress_percentage(challenge.starting_capital, challenge.target_capital, current)
    remaining = max(0.0, challenge.target_capital - current)
    return ChallengeProgress(
        current_capital=current,
        net_pnl=pnl,
        percentage=percentage,
        goal_reached=percentage >= 100,
        remaining_profit=remaining,
        per_session_target=remaining / TARGET_SESSIONS if trades else 0.0,
    )


def update_challenge(
    challenge: GrowthChallenge,
    title: Optional[str] = None,
    starting_capital: Optional[float] = None,
    target_capital: Optional[float] = None,
) -> GrowthChallenge:
    """Return a copy of the challenge with the given fields replaced."""
    changes: dict = {}
    if title is not None:
        changes["title"] = title
    if starting_capital is not None:
        changes["starting_capital"] = starting_capital
    if target_capital is not None:
        changes["target_capital"] = target_capital
    return challenge.model_copy(update=changes)


def archive_challenge(
    challenge: GrowthChallenge,
    history: Sequence[GrowthChallenge] = (),
    now: Optional[datetime] = None,
) -> tuple[list[GrowthChallenge], GrowthChallenge]:
    """Archive a completed challenge and start the next one.

    The caller must have established that the goal was reached; this
    function does not check progress.

    Args:
        challenge: Active challenge to archive.
        history: Previously completed challenges, newest first.
        now: Archive timestamp, defaults to the current time.

    Returns:
        Tuple of (new history, new active challenge). The next challenge
        starts at the old target and aims to double it.
    """
    now = now or datetime.now()

    archived = challenge.model_copy(
        update={"status": ChallengeStatus.COMPLETED, "end_date": now}
    )
    next_challenge = GrowthChallenge(
        id=str(uuid.uuid4()),
        title=NEXT_CHALLENGE_TITLE,
        starting_capital=challenge.target_capital,
        target_capital=challenge.target_capital * 2,
        current_capital=challenge.target_capital,
        start_date=now,
        status=ChallengeStatus.ACTIVE,
    )
    return [archived, *history], next_challenge


def challenge_gain(challenge: GrowthChallenge) -> tuple[float, float]:
    """Profit and percentage gain of a completed challenge."""
    profit = challenge.target_capital - challenge.starting_capital
    if challenge.starting_capital > 0:
        gain_pct = (challenge.target_capital / challenge.starting_capital - 1) * 100
    else:
        gain_pct = 0.0
    return profit, gain_pct
