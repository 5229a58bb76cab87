"""Tests for the journal session.

**Feature: trade-journal**
"""

import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from tradejournal.auth import LocalAuth
from tradejournal.db.store import DataStore
from tradejournal.exceptions import (
    ChallengeNotReachedError,
    NotAuthenticatedError,
    TradeNotFoundError,
)
from tradejournal.models import SETUP_TYPES, Trade, default_challenge
from tradejournal.session import JournalSession


@pytest.fixture
def journal():
    """Yield (session, store, auth) backed by a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = DataStore(Path(tmpdir) / "test.db")
        auth = LocalAuth(Path(tmpdir) / "session.toml")
        session = JournalSession(store, auth).start()
        yield session, store, auth
        session.close()


@pytest.fixture
def signed_in(journal):
    session, store, auth = journal
    auth.sign_in("asha@example.com", "Asha")
    return session


def closed_trade(pnl: float, setup: str = "Breakout", symbol: str = "RELIANCE") -> Trade:
    return Trade(
        entry_date=datetime(2024, 3, 4, 9, 30),
        exit_date=datetime(2024, 3, 4, 14, 0),
        symbol=symbol,
        pnl=pnl,
        setup=setup,
    )


class TestLifecycle:
    """
    **Feature: trade-journal, Property 28: Session Follows Auth**

    Signing in loads the user's trades and profile; signing out clears
    them.
    """

    def test_requires_user(self, journal):
        session, _, _ = journal

        assert not session.is_authenticated
        with pytest.raises(NotAuthenticatedError):
            session.save_trade(closed_trade(10.0))
        with pytest.raises(NotAuthenticatedError):
            session.add_setup("VCP")

    def test_sign_in_creates_profile(self, journal):
        session, store, auth = journal

        user = auth.sign_in("asha@example.com")

        assert session.user == user
        assert store.get_profile(user.uid) is not None
        assert session.challenge.title == default_challenge().title

    def test_sign_in_loads_existing_trades(self, journal):
        session, store, auth = journal
        user = auth.sign_in("asha@example.com")
        store.create_trade(user.uid, closed_trade(10.0))
        auth.sign_out()

        assert session.trades == []

        auth.sign_in("asha@example.com")

        assert len(session.trades) == 1

    def test_remembered_user_on_start(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")
            LocalAuth(Path(tmpdir) / "session.toml").sign_in("asha@example.com")

            session = JournalSession(store, LocalAuth(Path(tmpdir) / "session.toml")).start()

            assert session.is_authenticated
            session.close()


class TestSaveTrade:
    """
    **Feature: trade-journal, Property 29: Local List Consistency**

    After any save or delete the local list holds each trade once.
    """

    def test_create(self, signed_in):
        saved = signed_in.save_trade(closed_trade(10.0))

        assert [t.id for t in signed_in.trades] == [saved.id]
        assert signed_in.get_trade(saved.id).pnl == 10.0

    def test_update_in_place(self, signed_in):
        saved = signed_in.save_trade(closed_trade(10.0))

        updated = signed_in.save_trade(saved.model_copy(update={"pnl": 20.0}), editing_id=saved.id)

        assert updated.id == saved.id
        assert [t.pnl for t in signed_in.trades] == [20.0]

    def test_update_missing_rekeys(self, signed_in):
        saved = signed_in.save_trade(closed_trade(10.0))
        signed_in.store.delete_trade(signed_in.user.uid, saved.id)

        updated = signed_in.save_trade(saved.model_copy(update={"pnl": 30.0}), editing_id=saved.id)

        assert updated.id != saved.id
        assert [t.id for t in signed_in.trades] == [updated.id]
        with pytest.raises(TradeNotFoundError):
            signed_in.get_trade(saved.id)

    def test_delete(self, signed_in):
        saved = signed_in.save_trade(closed_trade(10.0))

        signed_in.delete_trade(saved.id)
        signed_in.delete_trade(saved.id)

        assert signed_in.trades == []

    def test_dashboard_uses_trades(self, signed_in):
        signed_in.save_trade(closed_trade(100.0))
        signed_in.save_trade(closed_trade(-40.0))

        board = signed_in.dashboard(datetime(2024, 3, 1).date())

        assert board.stats.net_pnl == 60
        assert board.stats.total_trades == 2


class TestSetupManagement:
    """
    **Feature: trade-journal, Property 30: Setup Labels**
    """

    def test_add_and_remove(self, signed_in):
        assert signed_in.add_setup(" VCP ")
        assert not signed_in.add_setup("VCP")
        assert not signed_in.add_setup(SETUP_TYPES[0])
        assert not signed_in.add_setup("  ")
        assert signed_in.all_setups == [*SETUP_TYPES, "VCP"]

        assert not signed_in.remove_setup(SETUP_TYPES[0])
        assert signed_in.remove_setup("VCP")
        assert signed_in.profile.custom_setups == []

    def test_rename_relabels_trades(self, signed_in):
        signed_in.add_setup("VCP")
        signed_in.save_trade(closed_trade(10.0, setup="VCP"))
        signed_in.save_trade(closed_trade(20.0, setup="Scalp"))

        assert signed_in.rename_setup("VCP", "Cup and Handle")

        assert sorted(t.setup for t in signed_in.trades) == ["Cup and Handle", "Scalp"]
        assert signed_in.profile.custom_setups == ["Cup and Handle"]
        stored = signed_in.store.get_trades(signed_in.user.uid)
        assert sorted(t.setup for t in stored) == ["Cup and Handle", "Scalp"]

    def test_rename_rejects_builtin_targets(self, signed_in):
        signed_in.add_setup("VCP")

        assert not signed_in.rename_setup("VCP", SETUP_TYPES[0])
        assert not signed_in.rename_setup(SETUP_TYPES[0], "Other")

    def test_setup_performance_lists_all(self, signed_in):
        signed_in.add_setup("VCP")
        signed_in.save_trade(closed_trade(10.0, setup="VCP"))

        rows = {row.name: row for row in signed_in.setup_performance()}

        assert set(rows) == {*SETUP_TYPES, "VCP"}
        assert rows["VCP"].is_custom
        assert rows["VCP"].pnl == 10


class TestRulesAndMistakes:
    """
    **Feature: trade-journal, Property 31: Playbook Lists**
    """

    def test_rules(self, signed_in):
        assert signed_in.add_rule("No trades after 3pm")
        assert not signed_in.add_rule("No trades after 3pm")
        assert "No trades after 3pm" in signed_in.profile.custom_rules
        assert signed_in.remove_rule("No trades after 3pm")
        assert not signed_in.remove_rule("No trades after 3pm")

    def test_mistakes_persist(self, journal):
        session, store, auth = journal
        user = auth.sign_in("asha@example.com")

        session.add_mistake("Sized up after a loss")

        assert "Sized up after a loss" in store.get_profile(user.uid).mistakes
        assert session.remove_mistake("FOMO")
        assert "FOMO" not in store.get_profile(user.uid).mistakes


class TestChallenge:
    """
    **Feature: trade-journal, Property 32: Challenge Lifecycle**
    """

    def test_progress(self, signed_in):
        signed_in.save_trade(closed_trade(250000.0))

        progress = signed_in.progress()

        assert progress.current_capital == 750000
        assert progress.percentage == 50

    def test_archive_requires_goal(self, signed_in):
        with pytest.raises(ChallengeNotReachedError):
            signed_in.archive_challenge()

        assert signed_in.completed_challenges == []

    def test_archive(self, signed_in):
        original = signed_in.challenge
        signed_in.save_trade(closed_trade(600000.0))

        nxt = signed_in.archive_challenge()

        assert signed_in.challenge == nxt
        assert nxt.starting_capital == original.target_capital
        assert nxt.target_capital == original.target_capital * 2
        assert [c.id for c in signed_in.completed_challenges] == [original.id]
        assert signed_in.completed_challenges[0].current_capital == 1100000
        stored = signed_in.store.get_profile(signed_in.user.uid)
        assert stored.challenge == nxt

    def test_update_challenge(self, signed_in):
        changed = signed_in.update_challenge(title="25L", target_capital=2500000)

        assert signed_in.challenge == changed
        assert changed.title == "25L"
        assert changed.starting_capital == 500000
