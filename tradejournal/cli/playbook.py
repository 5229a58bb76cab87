"""Trading rules and mistake list commands for the trade journal CLI."""

import click

from tradejournal.cli.common import console, require_session


def _print_list(title: str, items: list[str]) -> None:
    console.print(f"[bold cyan]{title}[/bold cyan]")
    if not items:
        console.print("[dim]  (empty)[/dim]")
    for i, item in enumerate(items, 1):
        console.print(f"  {i}. {item}")


@click.group(invoke_without_command=True)
@click.pass_context
def rules(ctx: click.Context) -> None:
    """Manage your trading rules."""
    if ctx.invoked_subcommand is None:
        session = require_session()
        _print_list("Trading Rules", session.profile.custom_rules)


@rules.command("add")
@click.argument("rule")
def add_rule(rule: str) -> None:
    """Add a trading rule."""
    session = require_session()
    if session.add_rule(rule):
        console.print("[green]Rule added.[/green]")
    else:
        console.print("[yellow]Rule already exists or is empty.[/yellow]")


@rules.command("remove")
@click.argument("rule")
def remove_rule(rule: str) -> None:
    """Remove a trading rule."""
    session = require_session()
    if session.remove_rule(rule):
        console.print("[green]Rule removed.[/green]")
    else:
        console.print(f"[yellow]No rule '{rule}'.[/yellow]")


@click.group(invoke_without_command=True)
@click.pass_context
def mistakes(ctx: click.Context) -> None:
    """Manage the mistake tags offered when logging trades."""
    if ctx.invoked_subcommand is None:
        session = require_session()
        _print_list("Mistake Tags", session.profile.mistakes)


@mistakes.command("add")
@click.argument("mistake")
def add_mistake(mistake: str) -> None:
    """Add a mistake tag."""
    session = require_session()
    if session.add_mistake(mistake):
        console.print("[green]Mistake tag added.[/green]")
    else:
        console.print("[yellow]Mistake tag already exists or is empty.[/yellow]")


@mistakes.command("remove")
@click.argument("mistake")
def remove_mistake(mistake: str) -> None:
    """Remove a mistake tag."""
    session = require_session()
    if session.remove_mistake(mistake):
        console.print("[green]Mistake tag removed.[/green]")
    else:
        console.print(f"[yellow]No mistake tag '{mistake}'.[/yellow]")
