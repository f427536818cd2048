"""
=============================================================================
FILE RESOLUTION
=============================================================================

Maps a normalized request path to file bytes, or to the status explaining
why there are none.

=============================================================================
OUTCOMES
=============================================================================

    ┌─────────────────────────────────────┬───────────────┬───────────────┐
    │  What happened                      │  Status       │  Payload      │
    ├─────────────────────────────────────┼───────────────┼───────────────┤
    │  File read                          │  OK           │  file bytes   │
    │  No such file                       │  NOT_FOUND    │  b""          │
    │  File exists, permission denied     │  FORBIDDEN    │  b""          │
    │  Anything else (a directory, bad    │  NOT_FOUND    │  b""          │
    │  name, I/O error)                   │               │               │
    └─────────────────────────────────────┴───────────────┴───────────────┘

There is no "internal error" outcome. Reading a directory fails like any
other non-permission error, which is also why "/" yields 404: directory
listing is not offered.

=============================================================================
PATH TRAVERSAL
=============================================================================

The request path is joined onto the root as-is. Neither ".." segments nor
a second leading slash are rejected:

    root = /srv/www
    "../etc/passwd"  → /srv/etc/passwd    (outside the root!)
    "/etc/passwd"    → /etc/passwd        (absolute path replaces the root)

This is a known, unaddressed gap. Rather than change what clients see, the
resolver logs a WARNING every time a resolved path lands outside the root
so that it shows up in operations logs.

=============================================================================
"""

import os
import logging
from pathlib import Path
from dataclasses import dataclass
from typing import Optional, Union

from ..http.status_codes import HTTPStatus


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Result of looking up one path."""

    status: HTTPStatus
    payload: bytes = b""

    @property
    def ok(self) -> bool:
        return self.status is HTTPStatus.OK


class FileResolver:
    """
    Reads files relative to a fixed root directory.

    The root is fixed when the resolver is created; by default it is the
    process working directory at that moment, so a later os.chdir() does
    not move it.

    Usage:
        resolver = FileResolver("/srv/www")
        result = resolver.resolve("index.html")
        if result.ok:
            send(result.payload)
    """

    def __init__(self, root_dir: Optional[Union[str, Path]] = None):
        """
        Args:
            root_dir: Directory requests are resolved against.
                      None means the current working directory.
        """
        self.root_dir = Path(root_dir if root_dir is not None else os.getcwd()).resolve()

    def resolve(self, path: str) -> Resolution:
        """
        Read the file at root_dir / path.

        Args:
            path: Request path with its leading slash already stripped.

        Returns:
            Resolution with the status and, for OK, the file bytes.
        """
        full_path = self.root_dir / path
        self._check_within_root(path, full_path)

        try:
            content = full_path.read_bytes()
        except FileNotFoundError:
            logger.debug(f"No file at {full_path}")
            return Resolution(HTTPStatus.NOT_FOUND)
        except PermissionError:
            logger.debug(f"Permission denied reading {full_path}")
            return Resolution(HTTPStatus.FORBIDDEN)
        except (OSError, ValueError) as e:
            # Directories, names with NUL bytes, device errors...
            logger.debug(f"Cannot read {full_path}: {e}")
            return Resolution(HTTPStatus.NOT_FOUND)

        return Resolution(HTTPStatus.OK, content)

    def _check_within_root(self, path: str, full_path: Path) -> None:
        """Warn (but do not refuse) when a path escapes the root."""
        try:
            resolved = full_path.resolve()
        except (OSError, RuntimeError, ValueError):
            return  # Unresolvable paths fail in resolve() anyway

        try:
            resolved.relative_to(self.root_dir)
        except ValueError:
            logger.warning(f"Request path escapes file root {self.root_dir}: {path!r}")
