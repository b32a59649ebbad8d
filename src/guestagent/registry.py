"""
Command registry — the dispatcher's source of truth for guest commands.

Commands are registered once at startup, in a fixed order. Whether a
command may run is decided at call time: it must be registered enabled,
not disabled since, and not on the configured blacklist.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional

logger = logging.getLogger("guestagent.registry")


class CommandError(Exception):
    """Base class for dispatch failures."""


class CommandNotFoundError(CommandError):
    """Raised when no command is registered under the requested name."""


class CommandDisabledError(CommandError):
    """Raised when the command exists but policy forbids running it."""


class _Entry:
    __slots__ = ("name", "handler", "enabled")

    def __init__(self, name: str, handler: Callable[..., Any], enabled: bool):
        self.name = name
        self.handler = handler
        self.enabled = enabled


class CommandRegistry:
    """Registered guest commands, kept in registration order.

    Args:
        blacklist: Command names that are never enabled.
    """

    def __init__(self, blacklist: Optional[Iterable[str]] = None) -> None:
        self._commands: dict[str, _Entry] = {}
        self._blacklist: set[str] = set(blacklist or ())

    def register(self, name: str, handler: Callable[..., Any], enabled: bool = True) -> None:
        if name in self._commands:
            raise ValueError(f"command already registered: {name}")
        self._commands[name] = _Entry(name, handler, enabled)
        logger.debug("Registered command %s (enabled=%s)", name, enabled)

    def list_command_names(self) -> list[str]:
        """All registered names, oldest registration first."""
        return list(self._commands)

    def is_enabled(self, name: str) -> bool:
        entry = self._commands.get(name)
        if entry is None:
            return False
        return entry.enabled and name not in self._blacklist

    def enable(self, name: str) -> None:
        self._get(name).enabled = True

    def disable(self, name: str) -> None:
        self._get(name).enabled = False

    def blacklist(self, names: Iterable[str]) -> None:
        """Add names to the blacklist. Unknown names are kept for later."""
        self._blacklist.update(names)

    def invoke(self, name: str, **arguments: Any) -> Any:
        """Run a command with already-decoded arguments.

        Raises:
            CommandNotFoundError: Name not registered.
            CommandDisabledError: Registered but not enabled.
        """
        entry = self._get(name)
        if not self.is_enabled(name):
            raise CommandDisabledError(f"command {name} has been disabled")
        return entry.handler(**arguments)

    def _get(self, name: str) -> _Entry:
        try:
            return self._commands[name]
        except KeyError:
            raise CommandNotFoundError(f"command {name} not found") from None

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)
