"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for the file server.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │   Priority (highest to lowest):                                     │
    │                                                                     │
    │   1. Command-line arguments                                         │
    │      └── python -m fileserver --port 3000                           │
    │                                                                     │
    │   2. Environment variables                                          │
    │      └── FILESERVER_PORT=3000 python -m fileserver                  │
    │                                                                     │
    │   3. Default values (in this dataclass)                             │
    └─────────────────────────────────────────────────────────────────────┘

The defaults reproduce the classic behaviour: listen on 127.0.0.1:8080,
serve the working directory, log exchanges to ./log.txt.

=============================================================================
"""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ServerConfig:
    """
    Configuration for the file server.

    NETWORK
    - host, port, backlog, buffer_size

    FILES
    - root_dir, log_file

    IDENTITY / LOGGING
    - server_name, log_level

    Note that there is no timeout setting: a connection is served until the
    client finishes sending, however long that takes.
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "127.0.0.1"
    """The IP address to bind to."""

    port: int = 8080
    """The port to listen on. 0 lets the OS pick a free one."""

    backlog: int = 128
    """Maximum number of connections queued before accept()."""

    buffer_size: int = 1024
    """
    Size of each recv() call in bytes.
    A read shorter than this is taken to mean the request is complete.
    """

    # ─────────────────────────────────────────────────────────────────────
    # FILES
    # ─────────────────────────────────────────────────────────────────────

    root_dir: Optional[str] = None
    """Directory files are served from. None = working directory at start-up."""

    log_file: str = "log.txt"
    """Exchange log. Truncated every time the server starts."""

    # ─────────────────────────────────────────────────────────────────────
    # IDENTITY / LOGGING
    # ─────────────────────────────────────────────────────────────────────

    server_name: str = "fileserver/1.0"
    """Value of the Server header."""

    log_level: str = "INFO"
    """Level for the diagnostic logger (not the exchange log)."""

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        FILESERVER_HOST         Server host (default: 127.0.0.1)
        FILESERVER_PORT         Server port (default: 8080)
        FILESERVER_ROOT         File root (default: working directory)
        FILESERVER_LOG_FILE     Exchange log path (default: log.txt)
        FILESERVER_BUFFER_SIZE  recv() size in bytes (default: 1024)
        FILESERVER_LOG_LEVEL    Logging level (default: INFO)
        """
        defaults = cls()
        return cls(
            host=os.getenv("FILESERVER_HOST", defaults.host),
            port=int(os.getenv("FILESERVER_PORT", str(defaults.port))),
            root_dir=os.getenv("FILESERVER_ROOT", defaults.root_dir),
            log_file=os.getenv("FILESERVER_LOG_FILE", defaults.log_file),
            buffer_size=int(os.getenv("FILESERVER_BUFFER_SIZE", str(defaults.buffer_size))),
            log_level=os.getenv("FILESERVER_LOG_LEVEL", defaults.log_level),
        )

    @property
    def level(self) -> int:
        """log_level as a logging module constant."""
        return getattr(logging, self.log_level.upper(), logging.INFO)

    def resolved_root(self) -> Path:
        """Absolute file root."""
        return Path(self.root_dir if self.root_dir is not None else os.getcwd()).resolve()

    def validate(self) -> None:
        """
        Validate configuration values.

        Called once at start-up so that a bad value fails immediately
        instead of on the first request.

        Raises:
            ValueError: On the first invalid setting.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.buffer_size < 1:
            raise ValueError("buffer_size must be >= 1")

        if self.backlog < 0:
            raise ValueError("backlog must be >= 0")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")

        if not self.resolved_root().is_dir():
            raise ValueError(f"File root is not a directory: {self.resolved_root()}")
