"""Application state for a signed-in journal user.

JournalSession owns the current user, their trade list and their
journal profile. The trade list is replaced wholesale by every store
snapshot; statistics are computed on demand from it.
"""

import logging
from datetime import date
from typing import Optional

from tradejournal.analytics import (
    ChallengeProgress,
    Dashboard,
    SetupPerformance,
    TradeFilter,
    archive_challenge,
    compute_progress,
    dashboard,
    filter_trades,
    setup_performance,
    update_challenge,
)
from tradejournal.auth import LocalAuth
from tradejournal.db.store import DataStore, Recreated, Subscription
from tradejournal.exceptions import (
    ChallengeNotReachedError,
    NotAuthenticatedError,
    TradeNotFoundError,
)
from tradejournal.models import (
    SETUP_TYPES,
    GrowthChallenge,
    JournalProfile,
    Trade,
    User,
    default_challenge,
)

logger = logging.getLogger(__name__)


class JournalSession:
    """State and actions for the signed-in user."""

    def __init__(
        self,
        store: DataStore,
        auth: LocalAuth,
        initial_challenge: Optional[GrowthChallenge] = None,
    ):
        """Initialize the session.

        Args:
            store: Persistence for trades and profiles.
            auth: Authentication provider.
            initial_challenge: Challenge given to brand-new users.
        """
        self.store = store
        self.auth = auth
        self.initial_challenge = initial_challenge or default_challenge()

        self.user: Optional[User] = None
        self.trades: list[Trade] = []
        self.profile: JournalProfile = JournalProfile(challenge=self.initial_challenge)

        self._feed: Optional[Subscription] = None
        self._unsubscribe_auth = None

    # ==================== Lifecycle ====================

    def start(self) -> "JournalSession":
        """Begin following auth changes; signs in the remembered user."""
        if self._unsubscribe_auth is None:
            self._unsubscribe_auth = self.auth.on_change(self._on_auth_changed)
        return self

    def close(self) -> None:
        """Stop following auth and trade changes."""
        if self._unsubscribe_auth is not None:
            self._unsubscribe_auth()
            self._unsubscribe_auth = None
        self._close_feed()

    def _close_feed(self) -> None:
        if self._feed is not None:
            self._feed.close()
            self._feed = None

    def _on_auth_changed(self, user: Optional[User]) -> None:
        self._close_feed()

        if user is None:
            self.user = None
            self.trades = []
            self.profile = JournalProfile(challenge=self.initial_challenge)
            return

        self.user = user
        self._feed = self.store.subscribe(user.uid, self._on_snapshot)

        profile = self.store.get_profile(user.uid)
        if profile is None:
            logger.info("Creating journal profile for %s", user.email)
            profile = JournalProfile(challenge=self.initial_challenge)
            self.store.save_profile(user.uid, profile)
        self.profile = profile

    def _on_snapshot(self, trades: list[Trade]) -> None:
        self.trades = trades

    def _require_user(self) -> User:
        if self.user is None:
            raise NotAuthenticatedError()
        return self.user

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    # ==================== Trades ====================

    def get_trade(self, trade_id: str) -> Trade:
        """Find a trade in the current list.

        Raises:
            TradeNotFoundError: If no trade has this id.
        """
        for trade in self.trades:
            if trade.id == trade_id:
                return trade
        raise TradeNotFoundError(trade_id)

    def _put_local(self, trade: Trade, replaces: Optional[str] = None) -> None:
        """Place a trade in the local list, replacing by id or prepending."""
        stale = {trade.id, replaces}
        index = next((i for i, t in enumerate(self.trades) if t.id in stale), None)
        remaining = [t for t in self.trades if t.id not in stale]
        if index is None or replaces not in (None, trade.id):
            self.trades = [trade, *remaining]
        else:
            remaining.insert(index, trade)
            self.trades = remaining

    def save_trade(self, trade: Trade, editing_id: Optional[str] = None) -> Trade:
        """Create a trade, or update the trade with id editing_id.

        If the update target has vanished the store recreates it under a
        new id; the local list is re-keyed to match.

        Returns:
            The trade under its final id.
        """
        user = self._require_user()

        if editing_id is None:
            trade_id = self.store.create_trade(user.uid, trade)
            saved = trade.model_copy(update={"id": trade_id})
            self._put_local(saved)
            return saved

        outcome = self.store.update_trade(user.uid, editing_id, trade)
        if isinstance(outcome, Recreated):
            logger.info("Trade %s re-keyed as %s", editing_id, outcome.trade_id)
            saved = trade.model_copy(update={"id": outcome.trade_id})
            self._put_local(saved, replaces=editing_id)
        else:
            saved = trade.model_copy(update={"id": editing_id})
            self._put_local(saved)
        return saved

    def delete_trade(self, trade_id: str) -> None:
        """Delete a trade; the snapshot feed refreshes the list."""
        user = self._require_user()
        self.store.delete_trade(user.uid, trade_id)
        self.trades = [t for t in self.trades if t.id != trade_id]

    def filter_trades(self, criteria: Optional[TradeFilter] = None) -> list[Trade]:
        return filter_trades(self.trades, criteria)

    # ==================== Analytics ====================

    def dashboard(self, month: Optional[date] = None) -> Dashboard:
        """Dashboard statistics for the current trade list."""
        return dashboard(self.trades, month)

    def setup_performance(self) -> list[SetupPerformance]:
        return setup_performance(
            self.trades,
            setups=self.profile.all_setups,
            custom_setups=self.profile.custom_setups,
        )

    # ==================== Profile lists ====================

    def _update_profile(self, **fields) -> JournalProfile:
        user = self._require_user()
        self.profile = self.store.update_profile(user.uid, **fields)
        return self.profile

    @property
    def all_setups(self) -> list[str]:
        return self.profile.all_setups

    def add_setup(self, name: str) -> bool:
        """Add a custom setup. Returns False for blanks and duplicates."""
        self._require_user()
        name = name.strip()
        if not name or name in SETUP_TYPES or name in self.profile.custom_setups:
            return False
        self._update_profile(custom_setups=[*self.profile.custom_setups, name])
        return True

    def remove_setup(self, name: str) -> bool:
        """Remove a custom setup. Built-in setups cannot be removed."""
        self._require_user()
        if name not in self.profile.custom_setups:
            return False
        self._update_profile(custom_setups=[s for s in self.profile.custom_setups if s != name])
        return True

    def rename_setup(self, old_name: str, new_name: str) -> bool:
        """Rename a custom setup and relabel every trade that uses it."""
        self._require_user()
        new_name = new_name.strip()
        custom = self.profile.custom_setups
        if (
            not new_name
            or old_name not in custom
            or new_name in custom
            or new_name in SETUP_TYPES
        ):
            return False

        self._update_profile(custom_setups=[new_name if s == old_name else s for s in custom])
        for trade in [t for t in self.trades if t.setup == old_name]:
            self.save_trade(trade.model_copy(update={"setup": new_name}), editing_id=trade.id)
        return True

    def add_rule(self, rule: str) -> bool:
        self._require_user()
        rule = rule.strip()
        if not rule or rule in self.profile.custom_rules:
            return False
        self._update_profile(custom_rules=[*self.profile.custom_rules, rule])
        return True

    def remove_rule(self, rule: str) -> bool:
        self._require_user()
        if rule not in self.profile.custom_rules:
            return False
        self._update_profile(custom_rules=[r for r in self.profile.custom_rules if r != rule])
        return True

    def add_mistake(self, mistake: str) -> bool:
        self._require_user()
        mistake = mistake.strip()
        if not mistake or mistake in self.profile.mistakes:
            return False
        self._update_profile(mistakes=[*self.profile.mistakes, mistake])
        return True

    def remove_mistake(self, mistake: str) -> bool:
        self._require_user()
        if mistake not in self.profile.mistakes:
            return False
        self._update_profile(mistakes=[m for m in self.profile.mistakes if m != mistake])
        return True

    # ==================== Challenge ====================

    @property
    def challenge(self) -> GrowthChallenge:
        return self.profile.challenge

    @property
    def completed_challenges(self) -> list[GrowthChallenge]:
        return self.profile.completed_challenges

    def progress(self) -> ChallengeProgress:
        return compute_progress(self.challenge, self.trades)

    def update_challenge(
        self,
        title: Optional[str] = None,
        starting_capital: Optional[float] = None,
        target_capital: Optional[float] = None,
    ) -> GrowthChallenge:
        """Edit the active challenge."""
        self._require_user()
        changed = update_challenge(self.challenge, title, starting_capital, target_capital)
        self._update_profile(challenge=changed)
        return changed

    def archive_challenge(self) -> GrowthChallenge:
        """Archive the reached goal and start the next one.

        Returns:
            The new active challenge.

        Raises:
            ChallengeNotReachedError: If progress is below 100%.
        """
        self._require_user()
        progress = self.progress()
        if not progress.goal_reached:
            raise ChallengeNotReachedError(progress.percentage)

        reached = self.challenge.model_copy(update={"current_capital": progress.current_capital})
        history, next_challenge = archive_challenge(reached, self.completed_challenges)
        self._update_profile(challenge=next_challenge, completed_challenges=history)
        return next_challenge
