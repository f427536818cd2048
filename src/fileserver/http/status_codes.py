"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The file server speaks a deliberately tiny slice of RFC 7231. Every exchange
ends in exactly one of four outcomes:

    ┌────────┬──────────────┬───────────────────────────────────────────────┐
    │  Code  │  Phrase      │  When                                         │
    ├────────┼──────────────┼───────────────────────────────────────────────┤
    │  200   │ OK           │ File found and read                           │
    │  400   │ Bad Request  │ Request line malformed, or method is not GET  │
    │  403   │ Forbidden    │ File exists but the server may not read it    │
    │  404   │ Not Found    │ No file there (or any other read failure)     │
    └────────┴──────────────┴───────────────────────────────────────────────┘

There is no 5xx: an unexpected read failure is reported as 404.

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    Closed set of statuses a response can carry.

    Being an IntEnum, members compare equal to their numeric code:

        >>> HTTPStatus.NOT_FOUND == 404
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'Not Found'
    """

    OK = 200
    BAD_REQUEST = 400
    FORBIDDEN = 403
    NOT_FOUND = 404

    @property
    def phrase(self) -> str:
        """Reason phrase used on the status line."""
        return _PHRASES[self]

    @property
    def is_error(self) -> bool:
        """True for every status except OK."""
        return self is not HTTPStatus.OK


# Exhaustive: one entry per member, checked by the tests.
_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.FORBIDDEN: "Forbidden",
    HTTPStatus.NOT_FOUND: "Not Found",
}
