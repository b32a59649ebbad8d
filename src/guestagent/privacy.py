"""
Privacy reset — scrub host-identifying state from a cloned guest.

Runs a fixed sequence of remediation steps:

1. Reset the kernel entropy pools and reseed them from the caller.
2. Delete the SSH host keys.
3. Regenerate the SSH host keys (after the reseed, never before).
4. Restart sshd.
5. Bounce every physical NIC: all down, then all up. The NICs may have
   been replugged with different hardware, and DHCP will usually reset
   the hostname on the way back up.
6. Kick the legacy network service if the distro has one.

Every step is best effort. A failing target never stops the next target
or the next step, failures are not logged, and the controller always
gets a plain acknowledgment. The only audit trail is the start/finish
pair written through ``slog``.
"""

from __future__ import annotations

import subprocess
from typing import Callable, Optional

from .config import PrivacyResetConfig
from .facilities import HostFacilities
from .log import slog
from .models import ResetPhase, ResetReport, StepOutcome


class PrivacyResetSequencer:
    """Runs guest-privacy-reset.

    Args:
        config: Targets to touch.
        facilities: OS primitives. Defaults to the real host.
    """

    def __init__(
        self,
        config: Optional[PrivacyResetConfig] = None,
        facilities: Optional[HostFacilities] = None,
    ):
        self.config = config or PrivacyResetConfig()
        self.facilities = facilities or HostFacilities(timeout=self.config.command_timeout)

    def privacy_reset(self, seed: str) -> None:
        """Command handler. Always succeeds from the caller's side."""
        self.run(seed)

    def run(self, seed: str) -> ResetReport:
        """Run every step in order and return what happened.

        Args:
            seed: Caller-supplied entropy, written to each pool as UTF-8.

        Returns:
            ResetReport: Per-target outcomes, for diagnostics only.
        """
        report = ResetReport()
        steps: list[tuple[ResetPhase, Callable[[ResetReport], None]]] = [
            (ResetPhase.ENTROPY_RESET, lambda r: self._reset_entropy(r, seed)),
            (ResetPhase.HOST_KEY_DESTRUCTION, self._destroy_host_keys),
            (ResetPhase.HOST_KEY_REGENERATION, self._regenerate_host_keys),
            (ResetPhase.SERVICE_RESTART, self._restart_ssh),
            (ResetPhase.NETWORK_INTERFACE_BOUNCE, self._bounce_interfaces),
            (ResetPhase.NETWORK_SERVICE_RESTART, self._restart_network_service),
        ]

        slog("guest-privacy-reset start")
        for phase, step in steps:
            report.advance(phase)
            try:
                step(report)
            except Exception as exc:
                # Enumeration itself failed (e.g. sysfs unreadable).
                report.record(StepOutcome(phase=phase, target="*", ok=False, detail=str(exc)))
        report.advance(ResetPhase.DONE)
        slog("guest-privacy-reset finish")
        return report

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _reset_entropy(self, report: ResetReport, seed: str) -> None:
        data = seed.encode("utf-8")
        for device in self.config.entropy_devices:
            def action(device=device):
                cleared = self.facilities.reset_entropy_pool(device, data)
                return "" if cleared else "pool not cleared"
            self._attempt(report, ResetPhase.ENTROPY_RESET, str(device), action)

    def _destroy_host_keys(self, report: ResetReport) -> None:
        for path in self.config.host_key_paths():
            def action(path=path):
                return "" if self.facilities.remove_file(path) else "already absent"
            self._attempt(report, ResetPhase.HOST_KEY_DESTRUCTION, str(path), action)

    def _regenerate_host_keys(self, report: ResetReport) -> None:
        for key in self.config.host_keys:
            path = self.config.ssh_dir / key.name
            cmd = ["ssh-keygen", "-N", "", "-t", key.type, "-f", str(path)]
            self._attempt_command(report, ResetPhase.HOST_KEY_REGENERATION, key.type, cmd)

    def _restart_ssh(self, report: ResetReport) -> None:
        service = self.config.ssh_service
        self._attempt_command(
            report, ResetPhase.SERVICE_RESTART, service, ["service", service, "restart"],
        )

    def _bounce_interfaces(self, report: ResetReport) -> None:
        interfaces = self.facilities.physical_interfaces(self.config.sysfs_net)
        # All down before any up.
        for iface in interfaces:
            self._attempt_command(
                report, ResetPhase.NETWORK_INTERFACE_BOUNCE, f"{iface}:down", ["ifdown", iface],
            )
        for iface in interfaces:
            self._attempt_command(
                report, ResetPhase.NETWORK_INTERFACE_BOUNCE, f"{iface}:up", ["ifup", iface],
            )

    def _restart_network_service(self, report: ResetReport) -> None:
        script = self.config.network_init_script
        if not self.facilities.exists(script):
            report.record(StepOutcome(
                phase=ResetPhase.NETWORK_SERVICE_RESTART,
                target="network",
                skipped=True,
                detail=f"{script} not present",
            ))
            return
        self._attempt_command(
            report, ResetPhase.NETWORK_SERVICE_RESTART, "network",
            ["service", "network", "restart"],
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _attempt(
        self,
        report: ResetReport,
        phase: ResetPhase,
        target: str,
        action: Callable[[], str],
    ) -> None:
        """Run one action, recording instead of raising."""
        try:
            detail = action()
            report.record(StepOutcome(phase=phase, target=target, detail=detail or ""))
        except Exception as exc:
            report.record(StepOutcome(phase=phase, target=target, ok=False, detail=str(exc)))

    def _attempt_command(
        self,
        report: ResetReport,
        phase: ResetPhase,
        target: str,
        cmd: list[str],
    ) -> None:
        def action():
            result: subprocess.CompletedProcess = self.facilities.run(cmd)
            if result.returncode != 0:
                stderr = (result.stderr or "").strip()
                raise RuntimeError(f"{cmd[0]} exited {result.returncode}: {stderr}")
            return ""
        self._attempt(report, phase, target, action)
