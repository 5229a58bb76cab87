"""AI coaching command for the trade journal CLI."""

import click
from rich.markdown import Markdown
from rich.panel import Panel

from tradejournal.cli.common import console, error_panel, get_config, require_session
from tradejournal.exceptions import CoachError


@click.command()
def coach() -> None:
    """Get AI coaching on your closed trades.
    
    Sends a summary of your closed trades (symbol, direction, P&L,
    setup, mistakes, notes) to the configured OpenAI model.
    """
    session = require_session()
    config = get_config()

    try:
        from tradejournal.agents import (
            MIN_TRADES_FOR_ANALYSIS,
            TradingCoachAgent,
            apply_openai_config,
        )
    except ImportError:
        error_panel(
            "Please install the required packages:\n"
            "[cyan]pip install openai-agents[/cyan]",
            title="Import Error",
        )
        raise SystemExit(1)

    if len(session.trades) < MIN_TRADES_FOR_ANALYSIS:
        console.print(Panel(
            f"[dim]Log at least {MIN_TRADES_FOR_ANALYSIS} trades to unlock AI coaching.[/dim]",
            title="[bold]AI Coach[/bold]",
            border_style="dim",
        ))
        return

    openai_config = config.get("openai", {})
    if not apply_openai_config(openai_config):
        error_panel(
            "OpenAI API key not configured.\n\n"
            "Set OPENAI_API_KEY or add it to the \\[openai] section of config.toml."
        )
        raise SystemExit(1)

    console.print("[dim]Generating report...[/dim]")

    try:
        result = TradingCoachAgent(model=openai_config.get("model")).analyze(session.trades)
    except CoachError:
        error_panel("Failed to generate analysis. Check API Key or try again later.")
        raise SystemExit(1)

    score_color = "green" if result.discipline_score >= 70 else "yellow" if result.discipline_score >= 40 else "red"
    console.print(Panel(
        f"{result.summary}\n\n"
        f"Discipline Score: [bold {score_color}]{result.discipline_score}/100[/bold {score_color}]",
        title="[bold cyan]Performance Summary[/bold cyan]",
        border_style="cyan",
    ))

    sections = [
        ("Strengths", result.strengths, "green"),
        ("Weaknesses", result.weaknesses, "red"),
        ("Actionable Tips", result.actionable_tips, "blue"),
    ]
    for title, items, color in sections:
        if items:
            console.print(Panel(
                Markdown("\n".join(f"- {item}" for item in items)),
                title=f"[bold {color}]{title}[/bold {color}]",
                border_style=color,
            ))
