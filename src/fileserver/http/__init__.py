"""
HTTP protocol pieces: status codes, content types, request parsing and
response building. Nothing in this package touches a socket or a file.

    from fileserver.http import parse_request, build_response, HTTPStatus

    request = parse_request(b"GET /index.html HTTP/1.1\\r\\n\\r\\n")
    request.status = HTTPStatus.OK
    response = build_response(request, b"hi")
    response.to_bytes("fileserver/1.0")
"""

from .status_codes import HTTPStatus
from .mime_types import ContentType, get_content_type
from .request import (
    HTTPMethod,
    HTTPRequest,
    RequestParser,
    normalize_path,
    parse_request,
)
from .response import HTTPResponse, build_response

__all__ = [
    "HTTPStatus",
    "ContentType",
    "get_content_type",
    "HTTPMethod",
    "HTTPRequest",
    "RequestParser",
    "normalize_path",
    "parse_request",
    "HTTPResponse",
    "build_response",
]
