"""
Core networking: the TCP listener, the per-client Connection wrapper and the
ConnectionHandler that runs one exchange.

    SocketServer ──accept()──► Connection ──► ConnectionHandler.handle()
                                               (in its own thread)
"""

from .connection import Connection, ConnectionState
from .handler import ConnectionHandler
from .socket_server import SocketServer

__all__ = [
    "Connection",
    "ConnectionState",
    "ConnectionHandler",
    "SocketServer",
]
