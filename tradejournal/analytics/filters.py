"""Trade list filtering."""

from datetime import date, datetime, time
from typing import Iterable, Optional

from pydantic import BaseModel

from tradejournal.models.trade import AssetClass, Direction, Trade


class TradeFilter(BaseModel):
    """Criteria for narrowing the trade list. Unset fields match everything."""

    text: str = ""
    asset_class: Optional[AssetClass] = None
    direction: Optional[Direction] = None
    setup: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    model_config = {"frozen": True}

    @property
    def is_active(self) -> bool:
        return bool(
            self.text
            or self.asset_class
            or self.direction
            or self.setup
            or self.date_from
            or self.date_to
        )


def matches(trade: Trade, criteria: TradeFilter) -> bool:
    """Check whether a single trade satisfies the criteria."""
    needle = criteria.text.lower()
    if needle and not (
        needle in trade.symbol.lower()
        or needle in trade.notes.lower()
        or needle in (trade.setup or "").lower()
    ):
        return False

    if criteria.asset_class and trade.asset_class != criteria.asset_class:
        return False
    if criteria.direction and trade.direction != criteria.direction:
        return False
    if criteria.setup and trade.setup != criteria.setup:
        return False

    entered = trade.entry_date
    if criteria.date_from and entered < datetime.combine(criteria.date_from, time.min):
        return False
    if criteria.date_to and entered > datetime.combine(criteria.date_to, time.max):
        return False

    return True


def filter_trades(trades: Iterable[Trade], criteria: Optional[TradeFilter] = None) -> list[Trade]:
    """Filter trades and sort them newest entry first."""
    criteria = criteria or TradeFilter()
    selected = [t for t in trades if matches(t, criteria)]
    return sorted(selected, key=lambda t: t.entry_date, reverse=True)
