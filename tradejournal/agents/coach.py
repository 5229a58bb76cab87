"""Trading Coach Agent for journal feedback.

This agent reviews closed trades the way a prop-firm risk manager
would and returns structured feedback: a summary, strengths,
weaknesses, tips, and a discipline score.
"""

import json
import logging
from typing import Any, Optional, Sequence

from agents import Agent
from pydantic import ValidationError

from tradejournal.agents.base import create_agent, run_agent_sync
from tradejournal.exceptions import CoachError
from tradejournal.models import AnalysisResult, Trade

logger = logging.getLogger(__name__)


# The coaching view is only offered once there is enough history
MIN_TRADES_FOR_ANALYSIS = 3


COACH_INSTRUCTIONS = """You are a professional trading coach and risk manager at a top proprietary trading firm.
Your role is to review a trader's journal and give honest, specific feedback.

When reviewing trades:
1. Identify patterns in behavior, profitability, and mistakes
2. Relate outcomes to the setups used and the mistakes tagged
3. Use the trader's own notes to understand their decision making

Always provide:
- A concise paragraph summarizing performance and trading style
- Strengths worth keeping
- Weaknesses that cost money
- Specific, actionable tips
- A discipline score from 0 to 100 covering discipline and performance
"""


def summarize_trades(trades: Sequence[Trade]) -> list[dict[str, Any]]:
    """Reduce closed trades to the fields the coach needs.

    Args:
        trades: Trades in any order; open trades are skipped.

    Returns:
        List of trade summaries.
    """
    return [
        {
            "symbol": t.symbol,
            "direction": t.direction.value,
            "pnl": t.pnl,
            "setup": t.setup,
            "mistakes": t.mistakes,
            "notes": t.notes,
        }
        for t in trades
        if t.is_closed
    ]


def build_prompt(trades: Sequence[Trade]) -> str:
    """Build the analysis request for a set of trades."""
    data = json.dumps(summarize_trades(trades))
    return f"""Analyze the following recent trading journal entries.
Identify patterns in behavior, profitability, and mistakes.

Data: {data}

Respond with the summary, strengths, weaknesses, actionable tips,
and an integer discipline score between 0 and 100."""


class TradingCoachAgent:
    """Agent that turns a trade journal into coaching feedback."""

    def __init__(self, model: Optional[str] = None):
        """Initialize the Trading Coach Agent.

        Args:
            model: Optional model override.
        """
        self.model = model
        self._agent = self._create_agent()

    def _create_agent(self) -> Agent:
        """Create the underlying agent."""
        return create_agent(
            name="Trading Coach Agent",
            instructions=COACH_INSTRUCTIONS,
            output_type=AnalysisResult,
            model=self.model,
        )

    def analyze(self, trades: Sequence[Trade]) -> AnalysisResult:
        """Review trades and return structured feedback.

        Args:
            trades: The user's trades.

        Returns:
            AnalysisResult from the model.

        Raises:
            CoachError: If there is nothing to analyze or the agent fails.
        """
        if not trades:
            raise CoachError("No trades to analyze.")

        try:
            output = run_agent_sync(self._agent, build_prompt(trades))
        except Exception as e:
            logger.error("Coach analysis failed: %s", e)
            raise CoachError(f"AI analysis failed: {e}") from e

        if isinstance(output, AnalysisResult):
            return output
        if not output:
            raise CoachError("Empty response from AI")

        try:
            return AnalysisResult.model_validate_json(output)
        except ValidationError as e:
            logger.error("Coach returned malformed analysis: %s", e)
            raise CoachError("AI returned a malformed analysis") from e
