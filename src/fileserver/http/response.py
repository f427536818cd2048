"""
=============================================================================
HTTP RESPONSE BUILDING
=============================================================================

Builds the response for a finished request and serializes it to the wire.

=============================================================================
WIRE FORMAT
=============================================================================

Every response, whatever its status, has the same shape. Lines end in a
bare "\\n", the header lines start with a single space, and the message is
framed by a leading blank line and two trailing newlines:

    ┌─────────────────────────────────────────────────────────────────────┐
    │ \\n                                                                  │
    │ HTTP/1.1 200 OK\\n                                                   │
    │  Server: fileserver/1.0\\n                                           │
    │  Content-type: text/html\\n                                          │
    │  Content-length: 2\\n                                                │
    │ \\n                                                                  │
    │ hi\\n                                                                │
    │ \\n                                                                  │
    └─────────────────────────────────────────────────────────────────────┘

Existing clients of the server match on this exact layout, so it is kept
byte for byte even though it is not RFC 7230 framing. Content-length counts
the payload only, not the trailing newlines.

=============================================================================
"""

from dataclasses import dataclass

from .request import HTTPRequest
from .status_codes import HTTPStatus
from .mime_types import ContentType, get_content_type


@dataclass(frozen=True)
class HTTPResponse:
    """
    An immutable response value.

    Attributes:
        version: Protocol token, copied from the request.
        status: Final status of the exchange.
        content_type: Derived from the request path's extension.
        content_length: Number of payload bytes.
        payload: File contents for OK, empty for every other status.
    """

    version: str
    status: HTTPStatus
    content_type: ContentType
    content_length: int
    payload: bytes = b""

    @property
    def status_line(self) -> str:
        """e.g. 'HTTP/1.1 404 Not Found'"""
        return f"{self.version} {self.status.value} {self.status.phrase}"

    def to_bytes(self, server_name: str) -> bytes:
        """
        Serialize for sending.

        Args:
            server_name: Value of the Server header.

        Returns:
            The complete response message.
        """
        head = (
            "\n"
            f"{self.status_line}\n"
            f" Server: {server_name}\n"
            f" Content-type: {self.content_type.value}\n"
            f" Content-length: {self.content_length}\n"
            "\n"
        )
        return head.encode("utf-8") + self.payload + b"\n\n"


def build_response(request: HTTPRequest, payload: bytes = b"") -> HTTPResponse:
    """
    Build the response for a request whose status has been decided.

    Pure: the same request and payload always give an equal response.

    Args:
        request: Parsed request with its status set.
        payload: File contents. Ignored unless the status is OK.

    Returns:
        The response to send.

    Raises:
        ValueError: If the request has no status yet.
    """
    if request.status is None:
        raise ValueError(f"Cannot build a response before the status is set: {request.path!r}")

    if request.status.is_error:
        payload = b""

    return HTTPResponse(
        version=request.version,
        status=request.status,
        content_type=get_content_type(request.path),
        content_length=len(payload),
        payload=payload,
    )
