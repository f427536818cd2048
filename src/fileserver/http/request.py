"""
=============================================================================
HTTP REQUEST PARSER
=============================================================================

Turns the raw bytes read from a connection into an HTTPRequest.

=============================================================================
WHAT WE ACTUALLY INTERPRET
=============================================================================

    GET /docs/index.html HTTP/1.1\r\n      <── request line (the only part
    Host: localhost:8080\r\n                    that decides the outcome)
    User-Agent: curl/8.0\r\n               <── headers (kept for logging and
    \r\n                                        inspection, never required)

The request line must split into EXACTLY three whitespace-separated tokens:

    METHOD      PATH                PROTOCOL
    ──┬───      ─────┬────────      ───┬────
      │              │                 │
    "GET" only    one leading "/"    copied verbatim
                  stripped           into the response

=============================================================================
FAILURES ARE VALUES, NOT EXCEPTIONS
=============================================================================

Malformed input never raises. The parser always hands back an HTTPRequest;
a bad request line simply comes back with status = BAD_REQUEST, and nothing
after the request line is looked at:

    b""                          → BAD_REQUEST  (empty stream)
    b"GET /a\r\n"                → BAD_REQUEST  (two tokens)
    b"GET /a HTTP/1.1 extra\r\n" → BAD_REQUEST  (four tokens)
    b"POST / HTTP/1.1\r\n"       → BAD_REQUEST  (method not GET)
    b"get / HTTP/1.1\r\n"        → BAD_REQUEST  (methods are case-sensitive)
    b"GET /a HTTP/1.1\r\n"       → status None, path "a"

A successfully parsed request leaves its status unset; the file lookup
decides between OK, NOT_FOUND and FORBIDDEN.

=============================================================================
PATH NORMALIZATION
=============================================================================

Only ONE leading "/" is removed so the path is relative to the file root.
No percent-decoding, no ".." collapsing:

    "/index.html"   → "index.html"
    "//etc/passwd"  → "/etc/passwd"
    "a/b"           → "a/b"
    "/../secret"    → "../secret"     (not sanitized, see handlers/static.py)

=============================================================================
"""

import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, Optional

from .status_codes import HTTPStatus


logger = logging.getLogger(__name__)


DEFAULT_PROTOCOL = "HTTP/1.1"


class HTTPMethod(str, Enum):
    """Methods the server accepts. Anything else is a Bad Request."""

    GET = "GET"


@dataclass
class HTTPRequest:
    """
    A parsed request, owned by exactly one connection handler.

    Attributes:
        method:  HTTPMethod.GET, or None when the request line was rejected.
        path:    Request path relative to the file root.
        version: Protocol token from the request line, e.g. "HTTP/1.1".
        status:  Outcome of the exchange. None until the file lookup runs,
                 BAD_REQUEST straight away if parsing failed.
        headers: Header fields with lower-cased names. On duplicates the
                 last value wins.
    """

    method: Optional[HTTPMethod]
    path: str
    version: str = DEFAULT_PROTOCOL
    status: Optional[HTTPStatus] = None
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def bad_request(cls) -> "HTTPRequest":
        """Request value for input whose request line could not be used."""
        return cls(method=None, path="", status=HTTPStatus.BAD_REQUEST)

    @property
    def is_bad_request(self) -> bool:
        return self.status is HTTPStatus.BAD_REQUEST

    @property
    def host(self) -> str:
        """Value of the Host header, or "" if the client sent none."""
        return self.headers.get("host", "")

    def get_header(self, name: str, default: str = "") -> str:
        """Case-insensitive header lookup."""
        return self.headers.get(name.lower(), default)


def normalize_path(path: str) -> str:
    """Strip exactly one leading '/' so the path is relative to the file root."""
    if path.startswith("/"):
        return path[1:]
    return path


class RequestParser:
    """
    Parser for the request line and header block of a single request.

    The parser is stateless, so one instance can be shared by every
    connection handler.

    Usage:
        parser = RequestParser()
        request = parser.parse(b"GET /index.html HTTP/1.1\\r\\n\\r\\n")
        request.path    # "index.html"
        request.status  # None
    """

    def parse(self, data: bytes) -> HTTPRequest:
        """
        Parse raw request bytes.

        Args:
            data: Everything read from the connection.

        Returns:
            An HTTPRequest. Never raises for malformed input.
        """
        # ─────────────────────────────────────────────────────────────────
        # DECODE AND SPLIT INTO LINES
        # ─────────────────────────────────────────────────────────────────
        # Invalid UTF-8 is replaced rather than rejected; the request line
        # check below is what decides whether the request is usable.
        text = data.decode("utf-8", errors="replace")
        lines = [line.rstrip("\r") for line in text.split("\n")]

        # ─────────────────────────────────────────────────────────────────
        # REQUEST LINE
        # ─────────────────────────────────────────────────────────────────
        tokens = lines[0].split()
        if len(tokens) != 3:
            logger.debug(f"Rejecting request line with {len(tokens)} tokens: {lines[0]!r}")
            return HTTPRequest.bad_request()

        method, path, version = tokens
        if method != HTTPMethod.GET.value:
            logger.debug(f"Rejecting unsupported method: {method!r}")
            return HTTPRequest.bad_request()

        return HTTPRequest(
            method=HTTPMethod.GET,
            path=normalize_path(path),
            version=version,
            headers=self._parse_headers(lines[1:]),
        )

    def _parse_headers(self, lines: list[str]) -> Dict[str, str]:
        """
        Parse "Name: value" lines up to the first blank line.

        Lines without a colon are skipped; a header block is never a
        reason to reject a request.
        """
        headers: Dict[str, str] = {}

        for line in lines:
            if not line:
                break  # End of header block

            name, sep, value = line.partition(":")
            if not sep or not name.strip():
                continue

            # Last write wins on repeated names
            headers[name.strip().lower()] = value.strip()

        return headers


def parse_request(data: bytes) -> HTTPRequest:
    """Parse raw request bytes with a throwaway RequestParser."""
    return RequestParser().parse(data)
