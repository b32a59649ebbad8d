"""Shared test fixtures for guestagent."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from guestagent.config import AgentConfig, PrivacyResetConfig
from guestagent.facilities import HostFacilities


class FakeFacilities(HostFacilities):
    """Records every OS action instead of performing it.

    Args:
        interfaces: Names returned as physical NICs.
        fail: Make every action fail.
        failing: Command names (argv[0]) or paths that fail.
        network_script: Whether the legacy network init script exists.
    """

    def __init__(
        self,
        interfaces: list[str] | None = None,
        fail: bool = False,
        failing: set[str] | None = None,
        network_script: bool = False,
    ):
        super().__init__(timeout=1)
        self.interfaces = interfaces or []
        self.fail = fail
        self.failing = failing or set()
        self.network_script = network_script
        self.calls: list[tuple] = []

    def _should_fail(self, key: str) -> bool:
        return self.fail or key in self.failing

    def reset_entropy_pool(self, device: Path, seed: bytes) -> bool:
        self.calls.append(("entropy", str(device), seed))
        if self._should_fail(str(device)):
            raise PermissionError(f"cannot open {device}")
        return True

    def remove_file(self, path: Path) -> bool:
        self.calls.append(("unlink", str(path)))
        if self._should_fail(str(path)):
            raise PermissionError(f"cannot unlink {path}")
        return True

    def exists(self, path: Path) -> bool:
        self.calls.append(("exists", str(path)))
        return self.network_script

    def run(self, cmd: list[str]) -> subprocess.CompletedProcess:
        self.calls.append(("run", *cmd))
        if self._should_fail(cmd[0]):
            raise FileNotFoundError(cmd[0])
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    def physical_interfaces(self, sysfs_net: Path) -> list[str]:
        self.calls.append(("list-interfaces", str(sysfs_net)))
        if self.fail:
            raise OSError(f"cannot read {sysfs_net}")
        return list(self.interfaces)

    def commands(self) -> list[list[str]]:
        """Just the external commands, in call order."""
        return [list(c[1:]) for c in self.calls if c[0] == "run"]


@pytest.fixture
def fake_host() -> FakeFacilities:
    return FakeFacilities(interfaces=["eth0", "eth1"])


@pytest.fixture
def reset_config(tmp_path: Path) -> PrivacyResetConfig:
    """Reset targets pointed into a temp directory."""
    return PrivacyResetConfig(
        entropy_devices=[tmp_path / "urandom", tmp_path / "random"],
        ssh_dir=tmp_path / "ssh",
        sysfs_net=tmp_path / "net",
        network_init_script=tmp_path / "init.d" / "network",
    )


@pytest.fixture
def agent_config(reset_config: PrivacyResetConfig) -> AgentConfig:
    return AgentConfig(privacy_reset=reset_config)
