"""Shared helpers for the CLI commands."""

import functools
import math
from datetime import date, datetime
from typing import Any, Callable, Optional

import click
from rich.console import Console
from rich.panel import Panel

from tradejournal.exceptions import JournalError

console = Console()


MONTH_FORMATS = ["%Y-%m"]
DATETIME_FORMATS = ["%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M", "%Y-%m-%d"]


def get_config() -> dict:
    """Load configuration, falling back to defaults."""
    from tradejournal.config import load_config

    return load_config()


def get_session():
    """Build a started JournalSession for the remembered user."""
    from tradejournal.auth import LocalAuth
    from tradejournal.config import get_db_path, get_session_path
    from tradejournal.db.store import DataStore
    from tradejournal.models import default_challenge
    from tradejournal.session import JournalSession

    config = get_config()
    challenge_config = config.get("challenge", {})
    initial = default_challenge(
        title=challenge_config.get("title", "10L Professional Milestone"),
        starting_capital=float(challenge_config.get("starting_capital", 500000.0)),
        target_capital=float(challenge_config.get("target_capital", 1000000.0)),
    )

    store = DataStore(get_db_path())
    auth = LocalAuth(get_session_path())
    return JournalSession(store, auth, initial_challenge=initial).start()


def require_session():
    """Get a session, exiting with a message if nobody is signed in."""
    session = get_session()
    if not session.is_authenticated:
        error_panel(
            "Not signed in.\n\n"
            "Run [cyan]tradejournal login --email you@example.com[/cyan] first."
        )
        raise SystemExit(1)
    return session


def error_panel(message: str, title: str = "Error") -> None:
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Show journal errors as a panel and exit with status 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except JournalError as e:
            error_panel(str(e))
            raise SystemExit(1)

    return wrapper


def currency() -> str:
    return get_config().get("journal", {}).get("currency", "₹")


def money(value: float, signed: bool = False, colored: bool = False) -> str:
    """Format an amount with the configured currency symbol."""
    sign = "+" if signed and value >= 0 else ""
    text = f"{sign}{currency()}{value:,.2f}"
    if not colored:
        return text
    color = "green" if value >= 0 else "red"
    return f"[{color}]{text}[/{color}]"


def ratio(value: float) -> str:
    """Format a ratio, showing the infinite sentinel as ∞."""
    if math.isinf(value):
        return "∞"
    return f"{value:.2f}"


def resolve_month(month: Optional[datetime]) -> date:
    """First day of the selected month, defaulting to the current one."""
    moment = month or datetime.now()
    return date(moment.year, moment.month, 1)
