"""
GuestAgent — wires the command handlers to one transport session.

The transport loop (not part of this package) owns a ``GuestAgent``,
hands decoded requests to ``agent.registry.invoke`` and writes results
through ``agent.framer``.
"""

from __future__ import annotations

import logging
from typing import Any, BinaryIO, Optional

from . import __version__
from .catalog import CapabilityCatalog
from .config import AgentConfig
from .facilities import HostFacilities
from .models import AgentInfo
from .privacy import PrivacyResetSequencer
from .registry import CommandRegistry
from .session import ResponseFramer, TransportSession
from .sync import SyncGate

logger = logging.getLogger("guestagent.agent")


class GuestAgent:
    """One agent instance bound to one transport session.

    Args:
        config: Agent configuration (blacklist, reset targets).
        facilities: OS primitives for the privacy reset.
        version: Build identifier reported by guest-info.
    """

    def __init__(
        self,
        config: Optional[AgentConfig] = None,
        facilities: Optional[HostFacilities] = None,
        version: str = __version__,
    ):
        self.config = config or AgentConfig()
        self.session = TransportSession()
        self.registry = CommandRegistry(blacklist=self.config.blacklist)
        self.gate = SyncGate(self.session)
        self.catalog = CapabilityCatalog(self.registry, version=version)
        self.sequencer = PrivacyResetSequencer(self.config.privacy_reset, facilities)
        self._register_builtins()

    def _register_builtins(self) -> None:
        self.registry.register("guest-sync-delimited", self._sync_delimited)
        self.registry.register("guest-sync", self._sync)
        self.registry.register("guest-ping", self.gate.ping)
        self.registry.register("guest-info", self._info)
        self.registry.register("guest-privacy-reset", self._privacy_reset)
        logger.info(
            "Registered %d command(s), %d blacklisted",
            len(self.registry),
            len(self.config.blacklist),
        )

    def _sync(self, id: int) -> int:
        return self.gate.sync(id)

    def _sync_delimited(self, id: int) -> int:
        return self.gate.sync_delimited(id)

    def _info(self) -> dict[str, Any]:
        return self.catalog.get_info().model_dump()

    def _privacy_reset(self, seed: str) -> None:
        self.sequencer.privacy_reset(seed)

    def info(self) -> AgentInfo:
        return self.catalog.get_info()

    def execute(self, name: str, **arguments: Any) -> Any:
        """Dispatch one decoded request. Raises ``CommandError`` subclasses."""
        return self.registry.invoke(name, **arguments)

    def framer(self, stream: BinaryIO) -> ResponseFramer:
        """A response framer for ``stream`` that shares this agent's session."""
        return ResponseFramer(self.session, stream)
