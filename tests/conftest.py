"""
pytest configuration and fixtures.
"""

import socket
import threading
import time
from pathlib import Path
from typing import Callable, Generator, Tuple
import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fileserver import FileServer, ServerConfig


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request for an HTML file."""
    return (
        b"GET /index.html HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: text/html\r\n"
        b"\r\n"
    )


@pytest.fixture
def sample_post_request() -> bytes:
    """Sample POST request, which the server rejects."""
    return (
        b"POST / HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"Content-Length: 2\r\n"
        b"\r\n"
        b"hi"
    )


@pytest.fixture
def file_root(tmp_path: Path) -> Path:
    """A small document root."""
    root = tmp_path / "www"
    root.mkdir()
    (root / "index.html").write_bytes(b"hi")
    (root / "notes.txt").write_bytes(b"plain text\n")
    (root / "docs").mkdir()
    (root / "docs" / "guide.html").write_bytes(b"<h1>Guide</h1>")
    (root / "data.bin").write_bytes(bytes(range(256)) * 4)
    return root


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


def parse_wire(data: bytes) -> Tuple[str, dict, bytes]:
    """
    Split a response in the server's wire format into
    (status line, headers, payload).
    """
    assert data.startswith(b"\n"), data[:40]
    head, sep, rest = data[1:].partition(b"\n\n")
    assert sep, "no blank line after headers"
    assert rest.endswith(b"\n\n"), rest[-10:]

    lines = head.decode("utf-8").split("\n")
    headers = {}
    for line in lines[1:]:
        assert line.startswith(" "), line
        name, _, value = line[1:].partition(": ")
        headers[name] = value

    return lines[0], headers, rest[:-2]


@pytest.fixture
def wire() -> Callable[[bytes], Tuple[str, dict, bytes]]:
    """The wire-format splitter, for tests that read raw responses."""
    return parse_wire


class TestServer:
    """Test server helper that runs in a background thread."""

    __test__ = False  # Not a test class

    def __init__(self, server: FileServer):
        self.server = server
        self._thread: threading.Thread = None

    @property
    def port(self) -> int:
        return self.server.address[1]

    @property
    def log_path(self) -> Path:
        return Path(self.server.config.log_file)

    def start(self):
        """Start server in background thread."""
        self._thread = threading.Thread(target=self.server.run, daemon=True)
        self._thread.start()

        if not self.server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        """Stop the server and wait for the listening socket to close."""
        self.server.shutdown()

        if not self.server.wait_for_shutdown(timeout=5.0):
            raise RuntimeError("Server failed to stop")

        # run() closes the exchange log after the listener stops
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    def request(self, raw: bytes) -> bytes:
        """Send raw bytes on a fresh connection and return everything sent back."""
        with socket.create_connection(("127.0.0.1", self.port), timeout=5.0) as s:
            s.sendall(raw)
            s.shutdown(socket.SHUT_WR)
            chunks = []
            while True:
                chunk = s.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
        return b"".join(chunks)

    def get(self, path: str) -> Tuple[str, dict, bytes]:
        raw = f"GET {path} HTTP/1.1\r\nHost: localhost\r\n\r\n".encode()
        return parse_wire(self.request(raw))

    def wait_idle(self, timeout: float = 5.0) -> None:
        """Wait until every handler thread has logged and finished."""
        deadline = time.time() + timeout
        while self.server.active_connections:
            if time.time() > deadline:
                raise RuntimeError("Handlers still running")
            time.sleep(0.01)


@pytest.fixture
def server_factory(free_port: int, file_root: Path, tmp_path: Path) -> Generator[Callable[..., TestServer], None, None]:
    """Start file servers over file_root; all are stopped at teardown."""
    started = []

    def factory(**overrides) -> TestServer:
        options = dict(
            host="127.0.0.1",
            port=free_port,
            root_dir=str(file_root),
            log_file=str(tmp_path / "log.txt"),
            log_level="WARNING",
        )
        options.update(overrides)

        test_srv = TestServer(FileServer(ServerConfig(**options)))
        test_srv.start()
        started.append(test_srv)
        return test_srv

    yield factory

    for test_srv in started:
        test_srv.stop()


@pytest.fixture
def test_server(server_factory) -> TestServer:
    """A running file server over file_root."""
    return server_factory()
