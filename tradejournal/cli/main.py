"""Main CLI entry point for the trade journal.

Commands live in their own modules and are imported only when invoked,
so `tradejournal --help` does not pay for the agents SDK.
"""

import importlib

import click


# Command name -> "module:attribute"
LAZY_SUBCOMMANDS = {
    "login": "tradejournal.cli.auth:login",
    "logout": "tradejournal.cli.auth:logout",
    "whoami": "tradejournal.cli.auth:whoami",
    "add": "tradejournal.cli.trade:add",
    "edit": "tradejournal.cli.trade:edit",
    "delete": "tradejournal.cli.trade:delete",
    "trades": "tradejournal.cli.trade:trades",
    "show": "tradejournal.cli.trade:show",
    "dashboard": "tradejournal.cli.dashboard:dashboard",
    "calendar": "tradejournal.cli.dashboard:calendar",
    "setup": "tradejournal.cli.setups:setup",
    "rules": "tradejournal.cli.playbook:rules",
    "mistakes": "tradejournal.cli.playbook:mistakes",
    "challenge": "tradejournal.cli.challenge:challenge",
    # AI
    "coach": "tradejournal.cli.coach:coach",
}


class LazyGroup(click.Group):
    """Click group that resolves subcommands from import paths on demand."""

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted({*super().list_commands(ctx), *self.lazy_subcommands})

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        if cmd_name not in self.commands and cmd_name in self.lazy_subcommands:
            self.add_command(self._resolve(cmd_name), cmd_name)
        return super().get_command(ctx, cmd_name)

    def _resolve(self, cmd_name: str) -> click.Command:
        module_path, _, attr = self.lazy_subcommands[cmd_name].partition(":")
        command = getattr(importlib.import_module(module_path), attr or cmd_name, None)
        if not isinstance(command, click.Command):
            raise click.ClickException(f"{self.lazy_subcommands[cmd_name]} is not a click command")
        return command


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradejournal")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Trade Journal - log trades, track performance, grow your capital.

    Record trades with setups, mistakes and emotions, then review
    win rates, streaks, weekly P&L and per-setup results, track a
    capital growth challenge, and get AI coaching on your journal.

    \b
    Quick Start:
      tradejournal login --email you@example.com
      tradejournal add RELIANCE --entry-price 2350 --exit-price 2380 --qty 100
      tradejournal dashboard
    """
    from tradejournal.cli.common import get_config
    from tradejournal.config import setup_logging

    level = "DEBUG" if verbose else get_config().get("logging", {}).get("level", "WARNING")
    setup_logging(level)

    ctx.ensure_object(dict)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
