"""Capability commands: info, config."""

from __future__ import annotations

import json

import click
import yaml
from rich.panel import Panel
from rich.table import Table

from ._common import build_agent, config_option, console, enabled_icon, run_command
from ..models import AgentInfo


def register_info_commands(main: click.Group) -> None:
    """Register the capability and config commands."""

    @main.command()
    @config_option
    @click.option("--json-out", is_flag=True, help="Output as JSON.")
    def info(config_path: str, json_out: bool):
        """List supported commands, most recently registered first."""
        agent = build_agent(config_path)
        report = AgentInfo(**run_command(agent, "guest-info"))

        if json_out:
            click.echo(json.dumps(report.model_dump(), indent=2))
            return

        console.print()
        console.print(
            Panel(
                f"Version: [bold]{report.version}[/]\n"
                f"Commands: [bold]{len(report.supported_commands)}[/]",
                title="Guest Agent",
                border_style="bright_blue",
            )
        )
        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("Command", style="bold cyan")
        table.add_column("Status")
        for cmd in report.supported_commands:
            table.add_row(cmd.name, enabled_icon(cmd.enabled))
        console.print(table)
        console.print()

    @main.command("config")
    @config_option
    def show_config(config_path: str):
        """Print the effective configuration as YAML."""
        agent = build_agent(config_path)
        data = agent.config.model_dump(mode="json")
        click.echo(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
