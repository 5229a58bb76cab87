"""Helpers shared by the journal's AI agents.

Agents are built and run with the OpenAI Agents SDK. Credentials come
from the environment, optionally seeded from the [openai] config
section.
"""

import logging
import os
from typing import Any, Optional

# Telemetry uploads fail noisily without a platform account
os.environ.setdefault("OPENAI_AGENTS_DISABLE_TRACING", "1")

from agents import Agent, Runner

logger = logging.getLogger(__name__)


DEFAULT_MODEL = "gpt-4o"


def resolve_model(model: Optional[str] = None) -> str:
    """Pick the model: explicit argument, then OPENAI_MODEL, then the default."""
    return model or os.environ.get("OPENAI_MODEL") or DEFAULT_MODEL


def apply_openai_config(openai_config: dict) -> Optional[str]:
    """Export the configured API key unless the environment already has one.

    Args:
        openai_config: The [openai] section of the journal config.

    Returns:
        The API key in effect, or None if none is configured.
    """
    configured = openai_config.get("api_key")
    if configured and not os.environ.get("OPENAI_API_KEY"):
        os.environ["OPENAI_API_KEY"] = configured
    return os.environ.get("OPENAI_API_KEY") or None


def create_agent(
    name: str,
    instructions: str,
    output_type: Optional[type] = None,
    model: Optional[str] = None,
) -> Agent:
    """Build an agent without tools.

    Args:
        name: Agent name shown in logs.
        instructions: System prompt.
        output_type: Optional pydantic model for structured output.
        model: Optional model override.
    """
    return Agent(
        name=name,
        instructions=instructions,
        model=resolve_model(model),
        output_type=output_type,
    )


def run_agent_sync(agent: Agent, prompt: str) -> Any:
    """Run an agent to completion and return its final output.

    The output is an instance of the agent's output_type when it has
    one, otherwise text.
    """
    from rich.console import Console

    Console(stderr=True).print(f"[dim]🤖 {agent.name} ({agent.model})[/dim]")
    logger.debug("Running %s with a %d character prompt", agent.name, len(prompt))

    result = Runner.run_sync(agent, prompt)
    return result.final_output
