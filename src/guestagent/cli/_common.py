"""Shared utilities for all CLI command modules.

Provides the Rich console instance, the ``--config`` option and the
helper that builds a configured agent.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.console import Console

from .. import CONFIG_PATH
from ..agent import GuestAgent
from ..config import load_config
from ..log import setup_logging
from ..registry import CommandError

console = Console()

config_option = click.option(
    "--config", "config_path", default=CONFIG_PATH, type=click.Path(),
    help="Agent config file.",
)


def build_agent(config_path: str) -> GuestAgent:
    """Load config, set up logging and return a ready agent."""
    config = load_config(Path(config_path))
    setup_logging(config.log_file, verbose=config.verbose)
    return GuestAgent(config)


def run_command(agent: GuestAgent, name: str, **arguments):
    """Invoke a command, exiting with status 1 on a dispatch error."""
    try:
        return agent.execute(name, **arguments)
    except CommandError as exc:
        console.print(f"[bold red]{exc}[/]")
        sys.exit(1)


def enabled_icon(enabled: bool) -> str:
    return "[bold green]enabled[/]" if enabled else "[bold red]disabled[/]"
