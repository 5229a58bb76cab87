"""SQLite data store for the trade journal."""

import json
import logging
import sqlite3
import uuid
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

from pydantic import BaseModel

from tradejournal.exceptions import PermissionDeniedError
from tradejournal.models import JournalProfile, Trade

logger = logging.getLogger(__name__)


SnapshotCallback = Callable[[list[Trade]], None]


class Updated(BaseModel):
    """The trade was updated in place under its existing id."""

    model_config = {"frozen": True}


class Recreated(BaseModel):
    """The update target was missing, so a new record was created."""

    trade_id: str

    model_config = {"frozen": True}


UpdateOutcome = Union[Updated, Recreated]


class Subscription:
    """Handle for a snapshot listener registered with the store."""

    def __init__(self, store: "DataStore", user_id: str, callback: SnapshotCallback):
        self._store = store
        self.user_id = user_id
        self.callback = callback
        self.active = True

    def close(self) -> None:
        """Stop receiving snapshots."""
        if self.active:
            self._store._remove_subscription(self)
            self.active = False


class DataStore:
    """SQLite-based data store for trades and journal profiles."""

    REQUIRED_TABLES = [
        "trades",
        "profiles",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._subscriptions: list[Subscription] = []
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            # Trades table; the record itself is stored as JSON
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    data TEXT NOT NULL
                )
            """)
            cursor.execute(
                "CREATE INDEX IF NOT EXISTS idx_trades_user ON trades (user_id, created_at)"
            )

            # One journal profile per user
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS profiles (
                    user_id TEXT PRIMARY KEY,
                    data TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Trades ====================

    @staticmethod
    def _serialize(trade: Trade) -> str:
        return trade.model_dump_json(exclude={"id"})

    @staticmethod
    def _deserialize(trade_id: str, data: str) -> Trade:
        return Trade.model_validate({**json.loads(data), "id": trade_id})

    def create_trade(self, user_id: str, trade: Trade) -> str:
        """Create a trade record.

        The client-side id of the trade is ignored; the store assigns
        a new one.

        Args:
            user_id: Owner of the trade.
            trade: Trade to store.

        Returns:
            The store-assigned trade id.
        """
        trade_id = uuid.uuid4().hex
        now = datetime.now().isoformat()
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO trades (id, user_id, created_at, updated_at, data)
                VALUES (?, ?, ?, ?, ?)
                """,
                (trade_id, user_id, now, now, self._serialize(trade)),
            )
            conn.commit()
        finally:
            conn.close()

        logger.info("Trade saved with id %s", trade_id)
        self._notify(user_id)
        return trade_id

    def _get_owner(self, trade_id: str) -> Optional[str]:
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT user_id FROM trades WHERE id = ?", (trade_id,))
            row = cursor.fetchone()
            return row["user_id"] if row else None
        finally:
            conn.close()

    def update_trade(self, user_id: str, trade_id: str, trade: Trade) -> UpdateOutcome:
        """Update a trade, recreating it if the target is gone.

        When no record with trade_id belongs to the user (missing, or
        owned by someone else), the trade is saved as a new record
        instead and its new id is returned so the caller can re-key.

        Args:
            user_id: Owner of the trade.
            trade_id: Id of the record to update.
            trade: New trade contents.

        Returns:
            Updated() or Recreated(trade_id=<new id>).
        """
        owner = self._get_owner(trade_id)

        if owner == user_id:
            conn = self._get_connection()
            try:
                cursor = conn.cursor()
                cursor.execute(
                    "UPDATE trades SET data = ?, updated_at = ? WHERE id = ?",
                    (self._serialize(trade), datetime.now().isoformat(), trade_id),
                )
                conn.commit()
            finally:
                conn.close()

            logger.info("Trade %s updated", trade_id)
            self._notify(user_id)
            return Updated()

        reason = "not-found" if owner is None else "permission-denied"
        logger.warning("Update of trade %s failed (%s); creating a new record", trade_id, reason)
        new_id = self.create_trade(user_id, trade)
        logger.info("Recovery successful, new trade id %s", new_id)
        return Recreated(trade_id=new_id)

    def delete_trade(self, user_id: str, trade_id: str) -> None:
        """Delete a trade.

        Deleting an id that does not exist is not an error.

        Args:
            user_id: Owner of the trade.
            trade_id: Id of the trade to delete.

        Raises:
            PermissionDeniedError: If the trade belongs to another user.
        """
        owner = self._get_owner(trade_id)
        if owner is None:
            logger.info("Trade %s does not exist (already deleted?)", trade_id)
            return
        if owner != user_id:
            raise PermissionDeniedError(trade_id)

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM trades WHERE id = ?", (trade_id,))
            conn.commit()
        finally:
            conn.close()

        logger.info("Trade %s deleted", trade_id)
        self._notify(user_id)

    def get_trades(self, user_id: str) -> list[Trade]:
        """Get all trades for a user, newest created first.

        Args:
            user_id: Owner of the trades.

        Returns:
            List of trades.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, data
                FROM trades
                WHERE user_id = ?
                ORDER BY created_at DESC, rowid DESC
                """,
                (user_id,),
            )
            return [self._deserialize(row["id"], row["data"]) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_trade(self, user_id: str, trade_id: str) -> Optional[Trade]:
        """Get a single trade by id.

        Returns:
            Trade if found and owned by the user, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, data FROM trades WHERE id = ? AND user_id = ?",
                (trade_id, user_id),
            )
            row = cursor.fetchone()
            if row:
                return self._deserialize(row["id"], row["data"])
            return None
        finally:
            conn.close()

    # ==================== Snapshots ====================

    def subscribe(self, user_id: str, callback: SnapshotCallback) -> Subscription:
        """Listen for the user's full trade list.

        The callback is invoked right away with the current list and
        again after every change to the user's trades.

        Args:
            user_id: User whose trades to watch.
            callback: Receives the complete list, newest created first.

        Returns:
            Subscription handle; call close() to stop listening.
        """
        subscription = Subscription(self, user_id, callback)
        self._subscriptions.append(subscription)
        callback(self.get_trades(user_id))
        return subscription

    def _remove_subscription(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def _notify(self, user_id: str) -> None:
        listeners = [s for s in self._subscriptions if s.user_id == user_id]
        if not listeners:
            return
        snapshot = self.get_trades(user_id)
        for subscription in listeners:
            subscription.callback(list(snapshot))

    # ==================== Profiles ====================

    def get_profile(self, user_id: str) -> Optional[JournalProfile]:
        """Get a user's journal profile.

        Returns:
            JournalProfile if one was saved, None for a new user.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT data FROM profiles WHERE user_id = ?", (user_id,))
            row = cursor.fetchone()
            if row:
                return JournalProfile.model_validate_json(row["data"])
            return None
        finally:
            conn.close()

    def save_profile(self, user_id: str, profile: JournalProfile) -> None:
        """Save or replace a user's journal profile."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO profiles (user_id, data, updated_at)
                VALUES (?, ?, ?)
                """,
                (user_id, profile.model_dump_json(), datetime.now().isoformat()),
            )
            conn.commit()
        finally:
            conn.close()

    def update_profile(self, user_id: str, **fields) -> JournalProfile:
        """Merge fields into a user's profile, creating it if needed.

        Returns:
            The saved profile.
        """
        current = self.get_profile(user_id) or JournalProfile()
        profile = JournalProfile.model_validate({**current.model_dump(), **fields})
        self.save_profile(user_id, profile)
        return profile

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
