"""
Pydantic models for what the agent reports back to the controller.

Nothing here is persisted. Every instance is built on demand, handed
to the caller by value, and forgotten.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class CommandDescriptor(BaseModel):
    """One registered command and whether it may run right now."""

    name: str
    enabled: bool


class AgentInfo(BaseModel):
    """Capability report returned by guest-info.

    Attributes:
        version: Agent build identifier, fixed for the process lifetime.
        supported_commands: Every registered command, most recently
            registered first.
    """

    version: str
    supported_commands: list[CommandDescriptor] = Field(default_factory=list)

    def command_names(self) -> list[str]:
        """Names in report order."""
        return [cmd.name for cmd in self.supported_commands]


class ResetPhase(str, Enum):
    """Linear progress of a privacy reset."""

    NOT_STARTED = "not-started"
    ENTROPY_RESET = "entropy-reset"
    HOST_KEY_DESTRUCTION = "host-key-destruction"
    HOST_KEY_REGENERATION = "host-key-regeneration"
    SERVICE_RESTART = "service-restart"
    NETWORK_INTERFACE_BOUNCE = "network-interface-bounce"
    NETWORK_SERVICE_RESTART = "network-service-restart"
    DONE = "done"


class StepOutcome(BaseModel):
    """Result of one action against one target during a reset."""

    phase: ResetPhase
    target: str
    ok: bool = True
    skipped: bool = False
    detail: str = ""


class ResetReport(BaseModel):
    """Internal record of a privacy reset run.

    Diagnostics only. The controller never sees this; from its side
    the reset always succeeds.
    """

    phase: ResetPhase = ResetPhase.NOT_STARTED
    outcomes: list[StepOutcome] = Field(default_factory=list)
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    def record(self, outcome: StepOutcome) -> None:
        self.outcomes.append(outcome)

    def advance(self, phase: ResetPhase) -> None:
        """Move to the next phase, stamping start/finish times."""
        if self.phase == ResetPhase.NOT_STARTED:
            self.started_at = datetime.now(timezone.utc)
        self.phase = phase
        if phase == ResetPhase.DONE:
            self.finished_at = datetime.now(timezone.utc)

    @property
    def failures(self) -> list[StepOutcome]:
        return [o for o in self.outcomes if not o.ok]

    def for_phase(self, phase: ResetPhase) -> list[StepOutcome]:
        return [o for o in self.outcomes if o.phase == phase]
