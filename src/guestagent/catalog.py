"""Capability catalog: guest-info."""

from __future__ import annotations

from . import __version__
from .models import AgentInfo, CommandDescriptor
from .registry import CommandRegistry


class CapabilityCatalog:
    """Reports which commands this agent exposes and which are enabled.

    Args:
        registry: Live command registry, read at query time.
        version: Build identifier to report.
    """

    def __init__(self, registry: CommandRegistry, version: str = __version__):
        self.registry = registry
        self.version = version

    def get_info(self) -> AgentInfo:
        """Build a fresh capability report.

        Descriptors are prepended as the registry is walked, so the
        most recently registered command comes first. Reporting tools
        depend on that order.
        """
        commands: list[CommandDescriptor] = []
        for name in self.registry.list_command_names():
            descriptor = CommandDescriptor(name=name, enabled=self.registry.is_enabled(name))
            commands.insert(0, descriptor)
        return AgentInfo(version=self.version, supported_commands=commands)
