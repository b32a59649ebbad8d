"""Privacy reset command."""

from __future__ import annotations

import json
import sys

import click
from rich.table import Table

from ._common import build_agent, config_option, console


def register_reset_commands(main: click.Group) -> None:
    """Register the privacy-reset command."""

    @main.command("privacy-reset")
    @config_option
    @click.argument("seed")
    @click.option("--yes", is_flag=True, help="Skip confirmation.")
    @click.option("--report", "show_report", is_flag=True, help="Show per-target diagnostics.")
    @click.option("--json-out", is_flag=True, help="Output diagnostics as JSON.")
    def privacy_reset(config_path: str, seed: str, yes: bool, show_report: bool, json_out: bool):
        """Scrub host-identifying state, reseeding entropy with SEED.

        Regenerates SSH host keys and bounces every physical NIC.
        Always acknowledges; use --report to see what actually happened.
        """
        agent = build_agent(config_path)
        if not agent.registry.is_enabled("guest-privacy-reset"):
            console.print("[bold red]command guest-privacy-reset has been disabled[/]")
            sys.exit(1)

        if not yes and not click.confirm(
            "  This deletes SSH host keys and restarts networking. Proceed?", default=False,
        ):
            console.print("[yellow]Aborted.[/]")
            return

        report = agent.sequencer.run(seed)

        if json_out:
            click.echo(json.dumps(report.model_dump(mode="json"), indent=2))
            return

        console.print("\n  [green]Privacy reset acknowledged.[/]\n")
        if not show_report:
            return

        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("Phase", style="bold")
        table.add_column("Target", style="cyan")
        table.add_column("Result")
        table.add_column("Detail", style="dim")
        for outcome in report.outcomes:
            if outcome.skipped:
                result = "[dim]skipped[/]"
            elif outcome.ok:
                result = "[green]ok[/]"
            else:
                result = "[red]failed[/]"
            table.add_row(outcome.phase.value, outcome.target, result, outcome.detail)
        console.print(table)
        console.print()
