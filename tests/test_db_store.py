"""Property-based tests for the database store.

**Feature: trade-journal**
"""

import tempfile
from datetime import datetime
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.db.store import DataStore, Recreated, Updated
from tradejournal.exceptions import PermissionDeniedError
from tradejournal.models import GrowthChallenge, JournalProfile, Trade


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        yield DataStore(db_path)


def sample_trade(symbol: str = "RELIANCE", pnl: float = 100.0) -> Trade:
    return Trade(
        entry_date=datetime(2024, 3, 4, 9, 30),
        exit_date=datetime(2024, 3, 4, 14, 0),
        symbol=symbol,
        entry_price=2500.0,
        exit_price=2510.0,
        quantity=10,
        pnl=pnl,
        setup="Breakout",
        tags=["#gap"],
    )


class TestDatabaseSchemaCompleteness:
    """
    **Feature: trade-journal, Property 20: Database Schema Completeness**

    *For any* fresh database, all required tables (trades, profiles)
    should exist.
    """

    def test_schema_completeness(self, temp_db: DataStore):
        tables = temp_db.get_tables()

        for table in DataStore.REQUIRED_TABLES:
            assert table in tables, f"Required table '{table}' is missing"

    def test_reopen_keeps_data(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "nested" / "test.db"
            DataStore(db_path).create_trade("u1", sample_trade())

            store = DataStore(db_path)

            assert store.get_stats() == {"trades": 1, "profiles": 0}


class TestTradeCrud:
    """
    **Feature: trade-journal, Property 21: Trade Persistence**

    *For any* set of trades created for a user, all are returned, newest
    created first, and only to that user.
    """

    @given(
        symbols=st.lists(
            st.text(
                alphabet=st.characters(whitelist_categories=("Lu", "Nd")),
                min_size=1,
                max_size=10,
            ),
            min_size=1,
            max_size=10,
        )
    )
    @settings(max_examples=30, deadline=None)
    def test_created_trades_listed_newest_first(self, symbols: list[str]):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")

            ids = [store.create_trade("u1", sample_trade(symbol)) for symbol in symbols]
            trades = store.get_trades("u1")

            assert [t.id for t in trades] == list(reversed(ids))
            assert len(set(ids)) == len(ids), "Store ids must be unique"
            assert store.get_trades("u2") == []

    def test_store_assigns_id(self, temp_db: DataStore):
        trade = sample_trade()

        trade_id = temp_db.create_trade("u1", trade)
        stored = temp_db.get_trade("u1", trade_id)

        assert trade_id != trade.id
        assert stored is not None
        assert stored.model_copy(update={"id": trade.id}) == trade

    def test_get_trade_other_user(self, temp_db: DataStore):
        trade_id = temp_db.create_trade("u1", sample_trade())

        assert temp_db.get_trade("u2", trade_id) is None


class TestUpdateTrade:
    """
    **Feature: trade-journal, Property 22: Update Or Recreate**

    Updating an owned trade keeps its id; updating a missing or foreign
    trade creates a new record under a new id.
    """

    def test_update_in_place(self, temp_db: DataStore):
        trade_id = temp_db.create_trade("u1", sample_trade())

        outcome = temp_db.update_trade("u1", trade_id, sample_trade(pnl=-50.0))

        assert outcome == Updated()
        assert temp_db.get_trade("u1", trade_id).pnl == -50.0
        assert len(temp_db.get_trades("u1")) == 1

    def test_missing_target_recreated(self, temp_db: DataStore):
        outcome = temp_db.update_trade("u1", "gone", sample_trade())

        assert isinstance(outcome, Recreated)
        assert outcome.trade_id != "gone"
        assert [t.id for t in temp_db.get_trades("u1")] == [outcome.trade_id]

    def test_foreign_target_recreated(self, temp_db: DataStore):
        theirs = temp_db.create_trade("u2", sample_trade(pnl=1.0))

        outcome = temp_db.update_trade("u1", theirs, sample_trade(pnl=2.0))

        assert isinstance(outcome, Recreated)
        assert temp_db.get_trade("u2", theirs).pnl == 1.0
        assert temp_db.get_trade("u1", outcome.trade_id).pnl == 2.0


class TestDeleteTrade:
    """
    **Feature: trade-journal, Property 23: Idempotent Delete**
    """

    def test_delete(self, temp_db: DataStore):
        trade_id = temp_db.create_trade("u1", sample_trade())

        temp_db.delete_trade("u1", trade_id)

        assert temp_db.get_trades("u1") == []

    def test_delete_twice(self, temp_db: DataStore):
        trade_id = temp_db.create_trade("u1", sample_trade())

        temp_db.delete_trade("u1", trade_id)
        temp_db.delete_trade("u1", trade_id)

        assert temp_db.get_stats()["trades"] == 0

    def test_delete_foreign(self, temp_db: DataStore):
        trade_id = temp_db.create_trade("u2", sample_trade())

        with pytest.raises(PermissionDeniedError):
            temp_db.delete_trade("u1", trade_id)

        assert temp_db.get_trade("u2", trade_id) is not None


class TestSubscriptions:
    """
    **Feature: trade-journal, Property 24: Snapshot Delivery**

    Subscribers receive the full list immediately and after every change
    to their own trades.
    """

    def test_snapshots(self, temp_db: DataStore):
        snapshots: list[list[Trade]] = []

        subscription = temp_db.subscribe("u1", snapshots.append)
        first = temp_db.create_trade("u1", sample_trade("A"))
        temp_db.create_trade("u1", sample_trade("B"))
        temp_db.update_trade("u1", first, sample_trade("A", pnl=5.0))
        temp_db.delete_trade("u1", first)

        assert [len(s) for s in snapshots] == [0, 1, 2, 2, 1]
        assert [t.symbol for t in snapshots[2]] == ["B", "A"]
        assert snapshots[-1][0].symbol == "B"

        subscription.close()
        temp_db.create_trade("u1", sample_trade("C"))

        assert len(snapshots) == 5
        assert not subscription.active

    def test_other_users_not_notified(self, temp_db: DataStore):
        snapshots: list[list[Trade]] = []
        temp_db.subscribe("u1", snapshots.append)

        temp_db.create_trade("u2", sample_trade())

        assert snapshots == [[]]


class TestProfiles:
    """
    **Feature: trade-journal, Property 25: Profile Merge**
    """

    def test_missing_profile(self, temp_db: DataStore):
        assert temp_db.get_profile("u1") is None

    def test_save_and_get(self, temp_db: DataStore):
        profile = JournalProfile(custom_setups=["VCP"])

        temp_db.save_profile("u1", profile)

        assert temp_db.get_profile("u1") == profile

    def test_update_merges(self, temp_db: DataStore):
        temp_db.save_profile("u1", JournalProfile(custom_setups=["VCP"]))
        challenge = GrowthChallenge(title="Double", starting_capital=1000, target_capital=2000)

        merged = temp_db.update_profile("u1", challenge=challenge)

        assert merged.custom_setups == ["VCP"]
        assert merged.challenge == challenge
        assert temp_db.get_profile("u1") == merged

    def test_update_creates(self, temp_db: DataStore):
        profile = temp_db.update_profile("u1", mistakes=["FOMO"])

        assert profile.mistakes == ["FOMO"]
        assert temp_db.get_stats()["profiles"] == 1
