"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

Wraps an accepted client socket with the reading, writing and closing
behaviour of a one-request connection.

=============================================================================
WHERE DOES A REQUEST END?
=============================================================================

TCP is a byte stream; it carries no message boundaries. The server does not
look for the blank line that ends an HTTP header block and does not honour
Content-Length. Instead it uses a SHORT READ heuristic:

    recv(1024) → 1024 bytes   "buffer was filled, there may be more"
    recv(1024) → 1024 bytes   "still more"
    recv(1024) →  310 bytes   "short read: that was the end"  ──► stop

A read of 0 bytes (peer closed its side) is also short, so a client that
sends and then shuts down its write side is always handled.

KNOWN LIMITATION: a request whose length is an exact multiple of the buffer
size fills every read, so the server waits for one more recv() that only
returns once the client sends more or closes. Clients that half-close after
sending are unaffected.

=============================================================================
CONNECTION STATES
=============================================================================

    READING_REQUEST ──► PARSED ──► RESOLVING ──► RESPONDING ──► CLOSED

Strictly linear: one request per connection, no keep-alive, no way back.
The handler moves the connection through the middle states; this class sets
READING_REQUEST and CLOSED itself.

=============================================================================
"""

import socket
import time
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional
import uuid


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Lifecycle of a connection, in order."""
    READING_REQUEST = "reading_request"  # Accumulating request bytes
    PARSED = "parsed"                    # Request line interpreted
    RESOLVING = "resolving"              # Looking up the file
    RESPONDING = "responding"            # Writing the response
    CLOSED = "closed"                    # Socket released


@dataclass
class Connection:
    """
    An accepted client connection.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short identifier used in log messages.
        state: Current lifecycle state.
        created_at: When the connection was accepted.
        buffer_size: Size of each recv() call.
    """

    socket: socket.socket
    address: tuple[str, int]

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.READING_REQUEST
    created_at: float = field(default_factory=time.time)

    buffer_size: int = 1024

    def __post_init__(self):
        # Blocking with no timeout: a silent client holds its thread
        self.socket.setblocking(True)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    @property
    def age(self) -> float:
        """Seconds since the connection was accepted."""
        return time.time() - self.created_at

    def read_request(self) -> Optional[bytes]:
        """
        Read until a short read signals the end of the request.

        Returns:
            Everything the client sent (possibly b""), or None if the socket
            failed mid-read and the connection should be abandoned.
        """
        self.state = ConnectionState.READING_REQUEST
        chunks = []

        while True:
            try:
                chunk = self.socket.recv(self.buffer_size)
            except OSError as e:
                logger.warning(f"[{self.id}] Read failed: {e}")
                return None

            chunks.append(chunk)

            if len(chunk) < self.buffer_size:
                break

        return b"".join(chunks)

    def send_response(self, data: bytes) -> bool:
        """
        Send the whole response.

        sendall() blocks until every byte is handed to the kernel or the
        socket fails; from the caller's side the write either happened or
        it did not.

        Returns:
            True if sent, False if the connection was lost.
        """
        try:
            self.socket.sendall(data)
            return True
        except OSError as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

    def close(self):
        """
        Release the socket. Safe to call more than once.

        shutdown(SHUT_WR) sends FIN first so the client sees a clean end of
        stream after the response.
        """
        if self.state == ConnectionState.CLOSED:
            return

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Peer already gone

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age * 1000:.1f}ms")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
