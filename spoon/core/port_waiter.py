"""Wait for a TCP port to accept connections."""

import logging
import select
import socket
import threading
import time
from enum import Enum
from typing import Callable, Optional

from .constants import PORT_PROBE_TIMEOUT, PORT_RETRY_INTERVAL

logger = logging.getLogger(__name__)


class PortState(str, Enum):
    """Readiness of a probed port."""

    WAITING = "waiting"
    READY = "ready"


def probe_port(host: str, port: int, timeout: float = PORT_PROBE_TIMEOUT) -> bool:
    """Try one connection to host:port.

    The port counts as ready once the connection is open and the server has
    sent something (for sshd, its version banner). Connecting and waiting for
    that data share one timeout.

    Args:
        host: Hostname or address
        port: TCP port
        timeout: Seconds allowed for the whole attempt

    Returns:
        True if the port is ready, False on any network error
    """
    sock = None
    started = time.monotonic()
    try:
        sock = socket.create_connection((host, port), timeout=timeout)
        remaining = max(0.0, timeout - (time.monotonic() - started))
        readable, _, _ = select.select([sock], [], [], remaining)
        return bool(readable)
    except OSError as e:
        logger.debug(f"Probe of {host}:{port} failed: {e}")
        return False
    finally:
        if sock is not None:
            sock.close()


def wait_for_port(
    host: str,
    port: int,
    *,
    interval: float = PORT_RETRY_INTERVAL,
    probe_timeout: float = PORT_PROBE_TIMEOUT,
    timeout: Optional[float] = None,
    cancel: Optional[threading.Event] = None,
    on_wait: Optional[Callable[[], None]] = None,
) -> PortState:
    """Block until host:port is ready.

    With no timeout and no cancel event this waits forever.

    Args:
        host: Hostname or address
        port: TCP port
        interval: Seconds to sleep between attempts
        probe_timeout: Seconds allowed per attempt
        timeout: Overall deadline in seconds, or None for no deadline
        cancel: Event that ends the wait when set
        on_wait: Called after every failed attempt

    Returns:
        READY once a probe succeeds, WAITING if the deadline passed or the
        wait was cancelled
    """
    deadline = None if timeout is None else time.monotonic() + timeout
    state = PortState.WAITING

    while state is PortState.WAITING:
        if cancel is not None and cancel.is_set():
            logger.debug(f"Wait for {host}:{port} cancelled")
            break
        if deadline is not None and time.monotonic() >= deadline:
            logger.debug(f"Wait for {host}:{port} hit its {timeout}s deadline")
            break

        if probe_port(host, port, probe_timeout):
            state = PortState.READY
            continue

        if on_wait is not None:
            on_wait()
        if cancel is not None:
            cancel.wait(interval)
        else:
            time.sleep(interval)

    return state
