"""
Network reachability check.

The gateway depends on any `() -> bool` callable; this module provides the
default one, a short TCP connect to the API host.
"""

from __future__ import annotations

import logging
import socket
from typing import Callable
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

Reachability = Callable[[], bool]


class SocketReachability:
    """
    Reports the network as reachable if a TCP connection to the API host
    succeeds within `timeout` seconds.
    """

    def __init__(self, base_url: str, timeout: float = 3.0) -> None:
        parsed = urlparse(base_url)
        self.host = parsed.hostname or ""
        self.port = parsed.port or (443 if parsed.scheme == "https" else 80)
        self.timeout = timeout

    def __call__(self) -> bool:
        if not self.host:
            return False
        try:
            with socket.create_connection((self.host, self.port), timeout=self.timeout):
                return True
        except OSError as e:
            logger.debug("Host %s:%d unreachable: %s", self.host, self.port, e)
            return False
