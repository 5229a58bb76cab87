"""CLI commands for the trade journal.

This package provides the command-line interface, including sign-in,
trade logging, dashboards, challenge tracking, and AI coaching.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
