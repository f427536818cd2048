"""
Unit tests for HTTP response building.
"""

import dataclasses

import pytest

from fileserver.http.mime_types import ContentType
from fileserver.http.request import HTTPMethod, HTTPRequest, parse_request
from fileserver.http.response import HTTPResponse, build_response
from fileserver.http.status_codes import HTTPStatus


def make_request(path: str, status: HTTPStatus, version: str = "HTTP/1.1") -> HTTPRequest:
    return HTTPRequest(method=HTTPMethod.GET, path=path, version=version, status=status)


class TestBuildResponse:
    """Tests for build_response()."""

    def test_ok_html(self):
        """GET index.html containing "hi"."""
        response = build_response(make_request("index.html", HTTPStatus.OK), b"hi")

        assert response.status is HTTPStatus.OK
        assert response.content_type is ContentType.TEXT_HTML
        assert response.content_length == 2
        assert response.payload == b"hi"

    def test_protocol_copied_from_request(self):
        response = build_response(make_request("a.txt", HTTPStatus.OK, "HTTP/1.0"), b"x")
        assert response.version == "HTTP/1.0"

    @pytest.mark.parametrize("status", [
        HTTPStatus.BAD_REQUEST,
        HTTPStatus.NOT_FOUND,
        HTTPStatus.FORBIDDEN,
    ])
    def test_error_statuses_have_empty_payload(self, status: HTTPStatus):
        response = build_response(make_request("index.html", status), b"leaked")

        assert response.payload == b""
        assert response.content_length == 0

    def test_bad_request_from_parser(self):
        request = parse_request(b"POST / HTTP/1.1\r\n\r\n")
        response = build_response(request)

        assert response.status is HTTPStatus.BAD_REQUEST
        assert response.content_type is ContentType.TEXT_PLAIN
        assert response.version == "HTTP/1.1"

    def test_status_must_be_set(self):
        request = HTTPRequest(method=HTTPMethod.GET, path="index.html")

        with pytest.raises(ValueError):
            build_response(request, b"hi")

    def test_deterministic(self):
        request = make_request("notes.txt", HTTPStatus.OK)

        assert build_response(request, b"abc") == build_response(request, b"abc")

    def test_immutable(self):
        response = build_response(make_request("a.txt", HTTPStatus.OK), b"abc")

        with pytest.raises(dataclasses.FrozenInstanceError):
            response.payload = b"other"

    def test_binary_payload_length(self):
        payload = bytes(range(256))
        response = build_response(make_request("data.bin", HTTPStatus.OK), payload)

        assert response.content_length == 256
        assert response.payload == payload


class TestWireFormat:
    """Tests for HTTPResponse.to_bytes()."""

    def test_ok_exact_bytes(self):
        response = build_response(make_request("index.html", HTTPStatus.OK), b"hi")

        assert response.to_bytes("test-server") == (
            b"\n"
            b"HTTP/1.1 200 OK\n"
            b" Server: test-server\n"
            b" Content-type: text/html\n"
            b" Content-length: 2\n"
            b"\n"
            b"hi\n"
            b"\n"
        )

    def test_not_found_exact_bytes(self):
        response = build_response(make_request("missing.txt", HTTPStatus.NOT_FOUND))

        assert response.to_bytes("s") == (
            b"\nHTTP/1.1 404 Not Found\n"
            b" Server: s\n"
            b" Content-type: text/plain\n"
            b" Content-length: 0\n"
            b"\n\n\n"
        )

    @pytest.mark.parametrize("status, line", [
        (HTTPStatus.OK, "HTTP/1.1 200 OK"),
        (HTTPStatus.BAD_REQUEST, "HTTP/1.1 400 Bad Request"),
        (HTTPStatus.FORBIDDEN, "HTTP/1.1 403 Forbidden"),
        (HTTPStatus.NOT_FOUND, "HTTP/1.1 404 Not Found"),
    ])
    def test_status_line(self, status: HTTPStatus, line: str):
        response = build_response(make_request("x", status))
        assert response.status_line == line

    def test_round_trip_through_splitter(self, wire):
        response = build_response(make_request("docs/guide.html", HTTPStatus.OK), b"\n\nbody\n")
        status_line, headers, payload = wire(response.to_bytes("fileserver/1.0"))

        assert status_line == "HTTP/1.1 200 OK"
        assert headers == {
            "Server": "fileserver/1.0",
            "Content-type": "text/html",
            "Content-length": "7",
        }
        assert payload == b"\n\nbody\n"


class TestHTTPStatus:
    """Tests for HTTPStatus enum."""

    def test_closed_set(self):
        assert {s.value for s in HTTPStatus} == {200, 400, 403, 404}

    def test_every_status_has_phrase(self):
        for status in HTTPStatus:
            assert status.phrase

    def test_is_error(self):
        assert not HTTPStatus.OK.is_error
        assert HTTPStatus.NOT_FOUND.is_error
        assert HTTPStatus.FORBIDDEN.is_error
        assert HTTPStatus.BAD_REQUEST.is_error

    def test_compares_to_int(self):
        assert HTTPStatus.FORBIDDEN == 403
