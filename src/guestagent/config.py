"""
Agent configuration.

Loaded from a YAML file (``$GUESTAGENT_CONFIG`` or
``/etc/guestagent/config.yaml``). A missing or unreadable file is not
fatal: the agent falls back to defaults and keeps running.

Example config.yaml:

    blacklist:
      - guest-privacy-reset
    log_file: /var/log/guestagent.log
    privacy_reset:
      host_keys:
        - {type: ed25519, name: ssh_host_ed25519_key}
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from . import CONFIG_PATH

logger = logging.getLogger("guestagent.config")


class HostKeySpec(BaseModel):
    """An SSH host key algorithm and the file it lives in."""

    type: str
    name: str


def _default_host_keys() -> list[HostKeySpec]:
    return [
        HostKeySpec(type="rsa1", name="ssh_host_key"),
        HostKeySpec(type="rsa", name="ssh_host_rsa_key"),
        HostKeySpec(type="dsa", name="ssh_host_dsa_key"),
    ]


class PrivacyResetConfig(BaseModel):
    """Targets touched by guest-privacy-reset."""

    entropy_devices: list[Path] = Field(
        default_factory=lambda: [Path("/dev/urandom"), Path("/dev/random")]
    )
    ssh_dir: Path = Path("/etc/ssh")
    host_keys: list[HostKeySpec] = Field(default_factory=_default_host_keys)
    ssh_service: str = "sshd"
    sysfs_net: Path = Path("/sys/class/net")
    network_init_script: Path = Path("/etc/init.d/network")
    command_timeout: int = 120

    def host_key_paths(self) -> list[Path]:
        """Private and public key file for every configured key type."""
        paths: list[Path] = []
        for key in self.host_keys:
            private = self.ssh_dir / key.name
            paths.append(private)
            paths.append(private.with_name(private.name + ".pub"))
        return paths


class AgentConfig(BaseModel):
    """Persistent configuration for the guest agent."""

    blacklist: list[str] = Field(default_factory=list)
    log_file: Optional[Path] = None
    verbose: bool = False
    privacy_reset: PrivacyResetConfig = Field(default_factory=PrivacyResetConfig)


def load_config(path: Optional[Path] = None) -> AgentConfig:
    """Load agent configuration from disk.

    Args:
        path: Config file. Defaults to ``CONFIG_PATH``.

    Returns:
        AgentConfig loaded from YAML, or defaults.
    """
    config_file = Path(path or CONFIG_PATH).expanduser()
    if config_file.exists():
        try:
            data = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
            return AgentConfig(**data)
        except (yaml.YAMLError, ValueError, TypeError) as exc:
            logger.warning("Failed to load config %s: %s — using defaults", config_file, exc)
    return AgentConfig()
