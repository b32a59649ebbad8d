"""
guestagent CLI — drive the guest-side commands from a local shell.

Each command group lives in its own module and is attached to the
main Click group through a register function.

Entry point: guestagent.cli:main
"""

from __future__ import annotations

import click

from .. import __version__


@click.group()
@click.version_option(version=__version__, prog_name="guestagent")
def main():
    """guestagent — guest-side control surface.

    Resync the channel, list capabilities, scrub a cloned guest.
    """


# ---------------------------------------------------------------------------
# Register all command groups/commands from modular files
# ---------------------------------------------------------------------------

from .info import register_info_commands
from .sync_cmd import register_sync_commands
from .reset import register_reset_commands

register_info_commands(main)
register_sync_commands(main)
register_reset_commands(main)
