"""Hand the terminal over to ssh."""

import logging
import subprocess
from typing import List
from urllib.parse import urlparse

from .constants import SSH_USER

logger = logging.getLogger(__name__)


def ssh_host_from_url(url: str) -> str:
    """Get the host to ssh to from the Docker engine URL.

    Engines reached over a local socket publish ports on this machine.
    """
    return urlparse(url).hostname or "localhost"


def build_ssh_command(
    host: str,
    port: int,
    command: str = "",
    user: str = SSH_USER,
    strict_host_key_checking: bool = False,
) -> List[str]:
    """Build the ssh argv for a pairing session.

    Containers are recreated with fresh host keys, so host-key checking is
    off unless strict_host_key_checking is set.
    """
    checking = "yes" if strict_host_key_checking else "no"
    cmd = [
        "ssh",
        "-t",
        "-o", f"StrictHostKeyChecking={checking}",
        "-p", str(port),
        f"{user}@{host}",
    ]
    if command:
        cmd.append(command)
    return cmd


def run_ssh(cmd: List[str]) -> int:
    """Run ssh attached to this terminal and return its exit status."""
    if "StrictHostKeyChecking=no" in cmd:
        logger.warning(
            "Host key checking is disabled for this session; "
            "set strict_host_key_checking in your config to enable it"
        )
    logger.debug(f"Running: {' '.join(cmd)}")
    return subprocess.run(cmd).returncode
