"""Channel commands: sync, ping."""

from __future__ import annotations

import click

from ._common import build_agent, config_option, console, run_command


def register_sync_commands(main: click.Group) -> None:
    """Register the resync and liveness commands."""

    @main.command()
    @config_option
    @click.argument("token", type=int)
    @click.option("--delimited", is_flag=True, help="Prefix the response with the 0xFF delimiter.")
    def sync(config_path: str, token: int, delimited: bool):
        """Echo TOKEN back through the response framer.

        Output is the raw framed response, exactly as the controller
        would read it off the channel.
        """
        agent = build_agent(config_path)
        name = "guest-sync-delimited" if delimited else "guest-sync"
        echoed = run_command(agent, name, id=token)
        agent.framer(click.get_binary_stream("stdout")).write_response({"return": echoed})

    @main.command()
    @config_option
    def ping(config_path: str):
        """Check that the agent answers."""
        agent = build_agent(config_path)
        run_command(agent, "guest-ping")
        console.print("[green]pong[/]")
