"""Authentication commands for the trade journal CLI.

Handles local sign-in and sign-out.
"""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import console, error_panel, get_session


@click.command()
@click.option("--email", prompt=True, help="Email address identifying your journal.")
@click.option("--name", default=None, help="Display name.")
def login(email: str, name: Optional[str]) -> None:
    """Sign in to your journal.
    
    Creates a template config file on first use.
    
    \b
    Examples:
      tradejournal login --email trader@example.com --name "Asha Rao"
    """
    from tradejournal.config import create_template_config

    config_path = create_template_config()
    session = get_session()

    try:
        user = session.auth.sign_in(email, name)
    except ValueError as e:
        error_panel(str(e), title="Login Failed")
        raise SystemExit(1)

    console.print(Panel(
        f"[green]Signed in as {user.name}[/green] ({user.email})\n\n"
        f"Journal has {len(session.trades)} trades.\n"
        f"[dim]Config: {config_path}[/dim]",
        title="[bold green]Login Successful[/bold green]",
        border_style="green",
    ))


@click.command()
def logout() -> None:
    """Sign out of your journal."""
    session = get_session()

    if not session.is_authenticated:
        console.print("[dim]Not signed in.[/dim]")
        return

    session.auth.sign_out()
    console.print("[green]Signed out.[/green]")


@click.command()
@click.option("--stats", "show_stats", is_flag=True, default=False, help="Show journal database statistics.")
def whoami(show_stats: bool) -> None:
    """Show the signed-in user."""
    session = get_session()

    if session.user is None:
        console.print("[dim]Not signed in.[/dim]")
    else:
        console.print(
            f"[bold]{session.user.name}[/bold] ({session.user.email}) - "
            f"{len(session.trades)} trades"
        )

    if show_stats:
        store = session.store
        table = Table(title="Journal Database", show_header=True, header_style="bold cyan")
        table.add_column("Table")
        table.add_column("Records", justify="right")
        counts = store.get_stats()
        for name in store.get_tables():
            table.add_row(name, str(counts.get(name, "-")))
        console.print(table)
        console.print(f"[dim]{store.db_path}[/dim]")
