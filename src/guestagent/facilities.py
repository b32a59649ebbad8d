"""OS primitives used by the privacy reset.

Thin wrappers over the kernel random device, the filesystem, sysfs and
external commands. They raise on failure; deciding what a failure means
is the caller's job.

Usage:
    from guestagent.facilities import HostFacilities
    host = HostFacilities()
    host.run(["service", "sshd", "restart"])
    host.physical_interfaces(Path("/sys/class/net"))   # ["eth0", ...]
"""

from __future__ import annotations

import fcntl
import os
import subprocess
from pathlib import Path

# _IO('R', 0x06) from <linux/random.h>
RNDCLEARPOOL = 0x5206


def _run(cmd: list[str], timeout: int = 120) -> subprocess.CompletedProcess:
    """Run a command and capture output.

    Args:
        cmd: Command and arguments.
        timeout: Seconds before the child is killed.

    Returns:
        CompletedProcess with stdout/stderr.
    """
    return subprocess.run(
        cmd, capture_output=True, text=True, timeout=timeout, check=False,
    )


class HostFacilities:
    """Real host implementation. Tests substitute their own."""

    def __init__(self, timeout: int = 120):
        self.timeout = timeout

    def reset_entropy_pool(self, device: Path, seed: bytes) -> bool:
        """Clear a kernel entropy pool and mix ``seed`` into it.

        The clear needs CAP_SYS_ADMIN and is a no-op on recent kernels,
        so its failure does not stop the seed write.

        Returns:
            bool: True if the pool clear ioctl succeeded.

        Raises:
            OSError: The device could not be opened or written.
        """
        fd = os.open(device, os.O_WRONLY)
        try:
            try:
                fcntl.ioctl(fd, RNDCLEARPOOL)
                cleared = True
            except OSError:
                cleared = False
            os.write(fd, seed)
            return cleared
        finally:
            os.close(fd)

    def remove_file(self, path: Path) -> bool:
        """Unlink ``path``.

        Returns:
            bool: False if it was already gone.
        """
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True

    def exists(self, path: Path) -> bool:
        return path.exists()

    def run(self, cmd: list[str]) -> subprocess.CompletedProcess:
        return _run(cmd, timeout=self.timeout)

    def physical_interfaces(self, sysfs_net: Path) -> list[str]:
        """Interfaces backed by a device link, sorted by name.

        Virtual interfaces (lo, bridges, tun, veth) have no ``device``
        symlink under their sysfs entry.
        """
        if not sysfs_net.is_dir():
            return []
        names = []
        for entry in sysfs_net.iterdir():
            if entry.is_symlink() and (entry / "device").is_symlink():
                names.append(entry.name)
        return sorted(names)
