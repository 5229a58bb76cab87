"""User and JournalProfile data models."""

from pydantic import BaseModel, Field

from tradejournal.models.challenge import GrowthChallenge, default_challenge


SETUP_TYPES = [
    "Breakout",
    "Scalp",
    "Support/Resistance",
]

COMMON_MISTAKES = [
    "FOMO",
    "Revenge Trading",
    "Overleveraged",
    "Impatience",
    "Did not follow plan",
    "Hope Trading",
    "Moved Stop Loss",
]

FEELINGS = [
    "Calm",
    "Confident",
    "Fearful",
    "Greedy",
    "Anxious",
    "Excited",
    "Frustrated",
    "Bored",
]

DEFAULT_RULES = [
    "Stick to the trading plan",
    "Risk no more than 1% per trade",
    "Wait for setup confirmation",
    "No trading during high-impact news",
]


class User(BaseModel):
    """Represents the signed-in user."""

    uid: str = Field(..., min_length=1, description="Stable user identifier")
    email: str = Field(..., description="Email address")
    name: str = Field(default="User", description="Display name")

    model_config = {"frozen": True}

    @property
    def first_name(self) -> str:
        return self.name.split(" ")[0] if self.name else "User"


class JournalProfile(BaseModel):
    """Per-user journal document: goals and managed label lists."""

    challenge: GrowthChallenge = Field(default_factory=default_challenge)
    completed_challenges: list[GrowthChallenge] = Field(default_factory=list)
    custom_setups: list[str] = Field(default_factory=list)
    custom_rules: list[str] = Field(default_factory=lambda: list(DEFAULT_RULES))
    mistakes: list[str] = Field(default_factory=lambda: list(COMMON_MISTAKES))

    model_config = {"frozen": True}

    @property
    def all_setups(self) -> list[str]:
        """Built-in setups followed by custom ones."""
        return [*SETUP_TYPES, *self.custom_setups]
