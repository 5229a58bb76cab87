"""AI agents for the trade journal.

This module provides the TradingCoachAgent, which reviews closed
trades and produces structured coaching feedback.
"""

from tradejournal.agents.base import (
    apply_openai_config,
    create_agent,
    resolve_model,
    run_agent_sync,
)
from tradejournal.agents.coach import (
    MIN_TRADES_FOR_ANALYSIS,
    TradingCoachAgent,
    build_prompt,
    summarize_trades,
)

__all__ = [
    "apply_openai_config",
    "create_agent",
    "resolve_model",
    "run_agent_sync",
    "MIN_TRADES_FOR_ANALYSIS",
    "TradingCoachAgent",
    "build_prompt",
    "summarize_trades",
]
