"""Data models for the trade journal."""

from tradejournal.models.trade import (
    AssetClass,
    Direction,
    Trade,
    compute_pnl,
    new_trade,
)
from tradejournal.models.challenge import (
    ChallengeStatus,
    GrowthChallenge,
    default_challenge,
)
from tradejournal.models.analysis import AnalysisResult
from tradejournal.models.profile import (
    COMMON_MISTAKES,
    DEFAULT_RULES,
    FEELINGS,
    SETUP_TYPES,
    JournalProfile,
    User,
)

__all__ = [
    "AssetClass",
    "Direction",
    "Trade",
    "compute_pnl",
    "new_trade",
    "ChallengeStatus",
    "GrowthChallenge",
    "default_challenge",
    "AnalysisResult",
    "COMMON_MISTAKES",
    "DEFAULT_RULES",
    "FEELINGS",
    "SETUP_TYPES",
    "JournalProfile",
    "User",
]
