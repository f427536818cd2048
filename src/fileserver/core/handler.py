"""
=============================================================================
CONNECTION HANDLER
=============================================================================

Runs one exchange on one connection, start to finish.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                     │
    │   READING_REQUEST   conn.read_request()         (short-read loop)   │
    │         │                                                           │
    │         ▼                                                           │
    │   PARSED            parser.parse(raw)                               │
    │         │                                                           │
    │         ▼                                                           │
    │   RESOLVING         BAD_REQUEST? ── yes ──► skip, empty payload     │
    │         │               │                                           │
    │         │               no ──► resolver.resolve(path)               │
    │         ▼                                                           │
    │   RESPONDING        build_response() → to_bytes() → sendall()       │
    │         │                                                           │
    │         ▼                                                           │
    │   CLOSED            socket released, exchange logged                │
    │                                                                     │
    └─────────────────────────────────────────────────────────────────────┘

If the socket fails while reading or writing, the connection is abandoned:
no response is guaranteed and nothing is written to the exchange log.

=============================================================================
"""

import logging
from typing import Optional

from .connection import Connection, ConnectionState
from ..access_log import ExchangeLog
from ..handlers.static import FileResolver
from ..http.request import RequestParser
from ..http.response import HTTPResponse, build_response


logger = logging.getLogger(__name__)


class ConnectionHandler:
    """
    Orchestrates parser, resolver, response builder and exchange log for a
    single connection. Create one per accepted connection and call handle()
    once, from the thread that owns the connection.

    Nothing the handler creates (request, payload, response) is visible to
    other threads; the exchange log is the only shared collaborator.
    """

    def __init__(
        self,
        conn: Connection,
        resolver: FileResolver,
        exchange_log: ExchangeLog,
        server_name: str,
        parser: Optional[RequestParser] = None,
    ):
        self.conn = conn
        self.resolver = resolver
        self.exchange_log = exchange_log
        self.server_name = server_name
        self.parser = parser or RequestParser()

    @property
    def state(self) -> ConnectionState:
        return self.conn.state

    def handle(self) -> Optional[HTTPResponse]:
        """
        Serve the connection.

        Returns:
            The response that was sent, or None if the connection was
            abandoned because of a socket error.
        """
        with self.conn:
            raw = self.conn.read_request()
            if raw is None:
                return None

            # ─────────────────────────────────────────────────────────────
            # PARSED
            # ─────────────────────────────────────────────────────────────
            request = self.parser.parse(raw)
            self.conn.state = ConnectionState.PARSED

            # ─────────────────────────────────────────────────────────────
            # RESOLVING
            # ─────────────────────────────────────────────────────────────
            self.conn.state = ConnectionState.RESOLVING
            payload = b""
            if not request.is_bad_request:
                result = self.resolver.resolve(request.path)
                request.status = result.status
                payload = result.payload

            # ─────────────────────────────────────────────────────────────
            # RESPONDING
            # ─────────────────────────────────────────────────────────────
            self.conn.state = ConnectionState.RESPONDING
            response = build_response(request, payload)

            if not self.conn.send_response(response.to_bytes(self.server_name)):
                logger.warning(f"[{self.conn.id}] Abandoned {request.path!r} after failed send")
                return None

        # ─────────────────────────────────────────────────────────────────
        # CLOSED
        # ─────────────────────────────────────────────────────────────────
        # The socket is released before logging so the log lock is never
        # held while socket I/O is outstanding.
        self.exchange_log.log(request, response)
        logger.debug(
            f"[{self.conn.id}] {self.conn.client_ip} {response.status_line} "
            f"{request.path or '/'} ({response.content_length} bytes)"
        )
        return response
