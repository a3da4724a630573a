"""
Remote API package.

HTTP gateway, wire DTOs and the network reachability probe.
"""

from travelsync.infrastructure.remote.gateway import FetchResult, PushResult, RemoteGateway
from travelsync.infrastructure.remote.reachability import (
    Reachability,
    SocketReachability,
)

__all__ = [
    "FetchResult",
    "PushResult",
    "Reachability",
    "RemoteGateway",
    "SocketReachability",
]
