"""
=============================================================================
EXCHANGE LOG
=============================================================================

Every completed exchange is appended to one log file as a two-line record:

    10-19-2026 14:03:27: REQUEST - GET index.html
    10-19-2026 14:03:27: RESPONSE - 200 text/html

=============================================================================
ONE FILE, MANY THREADS
=============================================================================

Every connection handler runs in its own thread, and they all write to the
same file handle. A single lock guards that handle:

    Thread A ──┐
    Thread B ──┼──► lock ──► write(record) ──► flush ──► unlock
    Thread C ──┘

The lock is held for exactly one record, never across socket I/O, and is
released on every exit path (it is a `with` block). Records therefore never
interleave, and the order in the file is the order in which handlers got
the lock, not the order in which requests arrived.

=============================================================================
BEST EFFORT
=============================================================================

A failed write (disk full, handle closed during shutdown...) is reported on
the "fileserver.access" logger and dropped. It never reaches the client:
by the time an exchange is logged its response has already been sent.

Each record is flushed to the OS but not fsync'ed; a crash mid-write may
leave a partial record at the end of the file.

=============================================================================
"""

import logging
import threading
from datetime import datetime
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .http.request import HTTPRequest
from .http.response import HTTPResponse


logger = logging.getLogger("fileserver.access")


TIMESTAMP_FORMAT = "%m-%d-%Y %H:%M:%S"


@dataclass
class LogEntry:
    """
    One exchange, ready to be written.

    Attributes:
        method: Request method, "-" if the request line was rejected.
        path: Request path, "/" for an empty path.
        status_code: Numeric response status.
        content_type: Response content type.
        timestamp: Local time the entry was created.
    """

    method: str
    path: str
    status_code: int
    content_type: str
    timestamp: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_exchange(cls, request: HTTPRequest, response: HTTPResponse) -> "LogEntry":
        return cls(
            method=request.method.value if request.method else "-",
            path=request.path or "/",
            status_code=response.status.value,
            content_type=response.content_type.value,
        )

    def to_text(self) -> str:
        """Render the two-line record, newline-terminated."""
        date = self.timestamp.strftime(TIMESTAMP_FORMAT)
        return (
            f"{date}: REQUEST - {self.method} {self.path}\n"
            f"{date}: RESPONSE - {self.status_code} {self.content_type}\n"
        )


class ExchangeLog:
    """
    Append-only log of request/response pairs shared by all handlers.

    Usage:
        log = ExchangeLog.open("log.txt")   # truncates the file
        log.log(request, response)
        log.close()

    Opening is the only operation that raises; log() never does.
    """

    def __init__(self, stream, path: Optional[Path] = None):
        """
        Args:
            stream: Writable text stream to append records to.
            path: Where the stream lives, for messages only.
        """
        self._stream = stream
        self.path = path
        self._lock = threading.Lock()

    @classmethod
    def open(cls, path: Union[str, Path]) -> "ExchangeLog":
        """
        Create (or truncate) the log file.

        Raises:
            OSError: If the file cannot be created. This is fatal at start-up.
        """
        path = Path(path)
        stream = open(path, "w", encoding="utf-8")
        logger.debug(f"Exchange log opened at {path}")
        return cls(stream, path)

    def log(self, request: HTTPRequest, response: HTTPResponse) -> bool:
        """
        Append the record for one exchange.

        Returns:
            True if the record was written, False if the write failed.
        """
        entry = LogEntry.from_exchange(request, response)
        record = entry.to_text()

        try:
            with self._lock:
                self._stream.write(record)
                self._stream.flush()
        except (OSError, ValueError) as e:
            # ValueError: write to a closed file during shutdown
            logger.error(f"Failed to write exchange log record: {e}")
            return False

        logger.debug(record.rstrip("\n"))
        return True

    def close(self) -> None:
        with self._lock:
            if not self._stream.closed:
                self._stream.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
