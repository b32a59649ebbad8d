"""Tests for the report models."""

from __future__ import annotations

from guestagent.models import (
    AgentInfo,
    CommandDescriptor,
    ResetPhase,
    ResetReport,
    StepOutcome,
)


class TestAgentInfo:
    def test_defaults(self) -> None:
        info = AgentInfo(version="1.0")
        assert info.supported_commands == []
        assert info.command_names() == []

    def test_dump_shape(self) -> None:
        info = AgentInfo(
            version="1.0",
            supported_commands=[CommandDescriptor(name="guest-sync", enabled=False)],
        )
        assert info.model_dump() == {
            "version": "1.0",
            "supported_commands": [{"name": "guest-sync", "enabled": False}],
        }


class TestResetReport:
    def test_advance_stamps_times(self) -> None:
        report = ResetReport()
        assert report.started_at is None
        report.advance(ResetPhase.ENTROPY_RESET)
        assert report.started_at is not None
        assert report.finished_at is None
        report.advance(ResetPhase.DONE)
        assert report.finished_at is not None
        assert report.finished_at >= report.started_at

    def test_failures_and_for_phase(self) -> None:
        report = ResetReport()
        report.record(StepOutcome(phase=ResetPhase.SERVICE_RESTART, target="sshd", ok=False))
        report.record(StepOutcome(phase=ResetPhase.ENTROPY_RESET, target="/dev/random"))
        assert [o.target for o in report.failures] == ["sshd"]
        assert [o.target for o in report.for_phase(ResetPhase.ENTROPY_RESET)] == ["/dev/random"]

    def test_phase_values(self) -> None:
        assert ResetPhase("network-interface-bounce") == ResetPhase.NETWORK_INTERFACE_BOUNCE
