"""GrowthChallenge data model."""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


DEFAULT_CHALLENGE_TITLE = "10L Professional Milestone"
DEFAULT_STARTING_CAPITAL = 500000.0
DEFAULT_TARGET_CAPITAL = 1000000.0
NEXT_CHALLENGE_TITLE = "Next Professional Milestone"


class ChallengeStatus(str, Enum):
    """Lifecycle state of a growth challenge."""

    ACTIVE = "active"
    COMPLETED = "completed"


class GrowthChallenge(BaseModel):
    """Represents a capital growth goal."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Challenge identifier")
    title: str = Field(default=DEFAULT_CHALLENGE_TITLE, description="Goal title")
    starting_capital: float = Field(default=DEFAULT_STARTING_CAPITAL, description="Capital at start")
    target_capital: float = Field(default=DEFAULT_TARGET_CAPITAL, description="Capital to reach")
    current_capital: float = Field(default=DEFAULT_STARTING_CAPITAL, description="Last known capital")
    start_date: datetime = Field(default_factory=datetime.now, description="Start timestamp")
    end_date: Optional[datetime] = Field(default=None, description="Archive timestamp")
    status: ChallengeStatus = Field(default=ChallengeStatus.ACTIVE, description="Challenge status")

    model_config = {"frozen": True}


def default_challenge(
    title: str = DEFAULT_CHALLENGE_TITLE,
    starting_capital: float = DEFAULT_STARTING_CAPITAL,
    target_capital: float = DEFAULT_TARGET_CAPITAL,
) -> GrowthChallenge:
    """Create the initial active challenge for a new journal."""
    return GrowthChallenge(
        title=title,
        starting_capital=starting_capital,
        target_capital=target_capital,
        current_capital=starting_capital,
    )
