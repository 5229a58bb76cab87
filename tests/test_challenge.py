"""Property-based tests for growth challenge tracking.

**Feature: trade-journal**
"""

from datetime import datetime, timedelta

from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.analytics import (
    archive_challenge,
    challenge_gain,
    compute_progress,
    progress_percentage,
    update_challenge,
)
from tradejournal.analytics.challenge import TARGET_SESSIONS
from tradejournal.models import (
    ChallengeStatus,
    GrowthChallenge,
    Trade,
    default_challenge,
)
from tradejournal.models.challenge import NEXT_CHALLENGE_TITLE


def closed_trade(pnl: float, offset: int = 0) -> Trade:
    exit_date = datetime(2024, 5, 1, 10, 0) + timedelta(hours=offset)
    return Trade(entry_date=exit_date - timedelta(minutes=30), exit_date=exit_date, symbol="X", pnl=pnl)


capital = st.floats(min_value=0.0, max_value=1e9, allow_nan=False, allow_infinity=False)


class TestProgressPercentage:
    """
    **Feature: trade-journal, Property 11: Progress Clamping**

    *For any* starting, target and current capital, progress lies in
    [0, 100], and a non-positive gap yields 0.
    """

    @given(starting=capital, target=capital, current=st.floats(min_value=-1e9, max_value=1e10, allow_nan=False))
    @settings(max_examples=200)
    def test_progress_bounded(self, starting: float, target: float, current: float):
        pct = progress_percentage(starting, target, current)

        assert 0 <= pct <= 100, f"Progress {pct} out of range"
        if target <= starting:
            assert pct == 0

    def test_halfway(self):
        assert progress_percentage(500000, 1000000, 750000) == 50

    def test_overshoot_clamped(self):
        assert progress_percentage(500000, 1000000, 1200000) == 100

    def test_drawdown_clamped(self):
        assert progress_percentage(500000, 1000000, 400000) == 0


class TestComputeProgress:
    """
    **Feature: trade-journal, Property 12: Capital From Closed Trades**

    Current capital is starting capital plus net closed-trade P&L.
    """

    def test_closed_trades_only(self):
        challenge = default_challenge()
        trades = [
            closed_trade(200000.0, 0),
            closed_trade(50000.0, 1),
            Trade(entry_date=datetime(2024, 5, 2), symbol="OPEN", pnl=999999.0),
        ]

        progress = compute_progress(challenge, trades)

        assert progress.net_pnl == 250000
        assert progress.current_capital == 750000
        assert progress.percentage == 50
        assert not progress.goal_reached

    def test_goal_reached(self):
        progress = compute_progress(default_challenge(), [closed_trade(500000.0)])

        assert progress.percentage == 100
        assert progress.goal_reached

    def test_remaining_profit_over_sessions(self):
        progress = compute_progress(default_challenge(), [closed_trade(100000.0)])

        assert progress.remaining_profit == 400000
        assert progress.per_session_target == 400000 / TARGET_SESSIONS == 20000

    def test_remaining_profit_floors_at_zero(self):
        progress = compute_progress(default_challenge(), [closed_trade(700000.0)])

        assert progress.remaining_profit == 0
        assert progress.per_session_target == 0

    def test_empty_journal_has_no_session_target(self):
        progress = compute_progress(default_challenge(), [])

        assert progress.remaining_profit == 500000
        assert progress.per_session_target == 0

    def test_challenge_not_mutated(self):
        challenge = default_challenge()

        compute_progress(challenge, [closed_trade(600000.0)])

        assert challenge.current_capital == challenge.starting_capital

    @given(pnls=st.lists(st.floats(min_value=-1e5, max_value=1e5, allow_nan=False), max_size=20))
    @settings(max_examples=50)
    def test_goal_reached_matches_percentage(self, pnls: list[float]):
        trades = [closed_trade(pnl, i) for i, pnl in enumerate(pnls)]

        progress = compute_progress(default_challenge(), trades)

        assert progress.goal_reached == (progress.percentage >= 100)


class TestArchive:
    """
    **Feature: trade-journal, Property 13: Archive Produces Next Goal**

    Archiving prepends the completed goal and starts a new one at the old
    target aiming for double.
    """

    def test_archive_default(self):
        challenge = default_challenge()
        now = datetime(2024, 6, 1, 12, 0)

        history, nxt = archive_challenge(challenge, [], now=now)

        assert len(history) == 1
        assert history[0].id == challenge.id
        assert history[0].status == ChallengeStatus.COMPLETED
        assert history[0].end_date == now
        assert nxt.title == NEXT_CHALLENGE_TITLE
        assert nxt.starting_capital == 1000000
        assert nxt.target_capital == 2000000
        assert nxt.current_capital == 1000000
        assert nxt.status == ChallengeStatus.ACTIVE
        assert nxt.start_date == now
        assert nxt.id != challenge.id

    @given(count=st.integers(min_value=0, max_value=5))
    @settings(max_examples=20)
    def test_history_prepended(self, count: int):
        previous = [GrowthChallenge(title=f"Old {i}", status=ChallengeStatus.COMPLETED) for i in range(count)]
        challenge = default_challenge()

        history, _ = archive_challenge(challenge, previous)

        assert len(history) == count + 1
        assert history[0].id == challenge.id
        assert history[1:] == previous

    def test_inputs_unchanged(self):
        challenge = default_challenge()
        previous: list[GrowthChallenge] = []

        archive_challenge(challenge, previous)

        assert challenge.status == ChallengeStatus.ACTIVE
        assert previous == []


class TestUpdateAndGain:
    """
    **Feature: trade-journal, Property 14: Challenge Editing**
    """

    def test_update_only_given_fields(self):
        challenge = default_challenge()

        changed = update_challenge(challenge, target_capital=2500000)

        assert changed.target_capital == 2500000
        assert changed.starting_capital == challenge.starting_capital
        assert changed.title == challenge.title
        assert challenge.target_capital == 1000000

    def test_gain(self):
        profit, gain_pct = challenge_gain(default_challenge())

        assert profit == 500000
        assert gain_pct == 100

    def test_gain_zero_start(self):
        _, gain_pct = challenge_gain(GrowthChallenge(starting_capital=0, target_capital=100))

        assert gain_pct == 0
