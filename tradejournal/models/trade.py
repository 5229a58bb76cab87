"""Trade data model."""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


DEFAULT_FEELING = "Calm"


class Direction(str, Enum):
    """Trade direction."""

    LONG = "Long"
    SHORT = "Short"


class AssetClass(str, Enum):
    """Instrument asset class."""

    CRYPTO = "Crypto"
    FOREX = "Forex"
    STOCKS = "Stocks"
    FUTURES = "Futures"
    OPTIONS = "Options"


def new_trade_id() -> str:
    """Generate a fresh client-side trade identifier."""
    return str(uuid.uuid4())


def compute_pnl(
    direction: Direction,
    entry_price: Optional[float],
    exit_price: Optional[float],
    quantity: Optional[float],
    fees: Optional[float] = 0.0,
) -> Optional[float]:
    """Calculate net P&L for a trade.

    Args:
        direction: Long or short.
        entry_price: Entry price.
        exit_price: Exit price.
        quantity: Position size.
        fees: Total fees paid.

    Returns:
        Net P&L rounded to 2 decimals, or None if entry price,
        exit price or quantity is missing.
    """
    if not entry_price or not exit_price or not quantity:
        return None

    if direction == Direction.LONG:
        gross = (exit_price - entry_price) * quantity
    else:
        gross = (entry_price - exit_price) * quantity

    return round(gross - (fees or 0.0), 2)


class Trade(BaseModel):
    """Represents a journaled trade."""

    id: str = Field(default_factory=new_trade_id, description="Trade identifier")
    entry_date: datetime = Field(..., description="Entry timestamp")
    exit_date: Optional[datetime] = Field(default=None, description="Exit timestamp, None while open")
    symbol: str = Field(default="", description="Trading symbol")
    direction: Direction = Field(default=Direction.LONG, description="Long or short")
    asset_class: AssetClass = Field(default=AssetClass.STOCKS, description="Asset class")
    entry_price: float = Field(default=0.0, description="Entry price")
    exit_price: Optional[float] = Field(default=None, description="Exit price")
    quantity: float = Field(default=0.0, description="Position size")
    fees: float = Field(default=0.0, description="Fees paid")
    pnl: Optional[float] = Field(default=None, description="Net P&L")

    setup: Optional[str] = Field(default=None, description="Setup label")
    mistakes: list[str] = Field(default_factory=list, description="Mistake tags")
    followed_setup: bool = Field(default=True, description="Whether the plan was followed")
    entry_reason: str = Field(default="", description="Why the trade was taken")
    feeling: str = Field(default=DEFAULT_FEELING, description="Mood label")
    lesson_learned: str = Field(default="", description="Lesson learned")
    tags: list[str] = Field(default_factory=list, description="Hashtags")
    screenshot: Optional[str] = Field(default=None, description="Image as a data URL")
    notes: str = Field(default="", description="General notes")

    model_config = {"frozen": True}

    @field_validator("symbol", mode="before")
    @classmethod
    def _normalize_symbol(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("exit_date", "screenshot", "setup", mode="before")
    @classmethod
    def _empty_as_none(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @field_validator("entry_date", "exit_date")
    @classmethod
    def _local_naive(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Aware timestamps are stored as naive local time so all dates compare
        if value is not None and value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value

    @field_validator("entry_price", "quantity", "fees", mode="before")
    @classmethod
    def _missing_as_zero(cls, value: Any) -> Any:
        if value is None or value == "":
            return 0.0
        return value

    @field_validator("exit_price", mode="before")
    @classmethod
    def _optional_number(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, value: list[str]) -> list[str]:
        tags: list[str] = []
        for tag in value:
            tag = tag.strip()
            if not tag:
                continue
            if not tag.startswith("#"):
                tag = f"#{tag}"
            if tag not in tags:
                tags.append(tag)
        return tags

    @property
    def is_closed(self) -> bool:
        """A trade is closed once it has an exit timestamp."""
        return self.exit_date is not None

    @property
    def net_pnl(self) -> float:
        """Stored P&L, treating a missing value as zero."""
        return self.pnl or 0.0

    @property
    def is_win(self) -> bool:
        return self.net_pnl > 0

    def with_computed_pnl(self) -> "Trade":
        """Return a copy with pnl derived from prices, quantity and fees.

        The stored pnl is kept if the price fields are incomplete.
        """
        pnl = compute_pnl(
            self.direction, self.entry_price, self.exit_price, self.quantity, self.fees
        )
        if pnl is None:
            return self
        return self.model_copy(update={"pnl": pnl})


def new_trade(**overrides: Any) -> Trade:
    """Create a trade with journal-entry defaults.

    Args:
        **overrides: Field values replacing the defaults.

    Returns:
        New Trade with a fresh id, the current time as entry time,
        and zeroed economics.
    """
    fields: dict[str, Any] = {
        "id": new_trade_id(),
        "entry_date": datetime.now(),
        "exit_date": None,
        "symbol": "",
        "direction": Direction.LONG,
        "asset_class": AssetClass.STOCKS,
        "entry_price": 0.0,
        "exit_price": 0.0,
        "quantity": 0.0,
        "fees": 0.0,
        "feeling": DEFAULT_FEELING,
        "followed_setup": True,
        "notes": "",
    }
    fields.update(overrides)
    return Trade(**fields)
