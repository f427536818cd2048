"""
=============================================================================
CONTENT TYPE DETECTION
=============================================================================

Maps a request path to the Content-type header of its response.

This is NOT a MIME database. The server knows exactly two types:

    ┌────────────────────────────┬───────────────┐
    │  Extension (after last .)  │  Content-type │
    ├────────────────────────────┼───────────────┤
    │  html                      │  text/html    │
    │  anything else / none      │  text/plain   │
    └────────────────────────────┴───────────────┘

The comparison is case-sensitive: "page.HTML" is served as text/plain.
Nothing looks at the file contents.

=============================================================================
"""

from enum import Enum


class ContentType(str, Enum):
    """The two content types the server can emit."""

    TEXT_HTML = "text/html"
    TEXT_PLAIN = "text/plain"


DEFAULT_CONTENT_TYPE = ContentType.TEXT_PLAIN

# Extension (without the dot) -> content type.
CONTENT_TYPES = {
    "html": ContentType.TEXT_HTML,
}


def get_extension(path: str) -> str:
    """
    Return the text after the last '.' in path, or "" if there is none.

    Examples:
        get_extension("index.html")     -> "html"
        get_extension("archive.tar.gz") -> "gz"
        get_extension("README")         -> ""
        get_extension("dir.v2/notes")   -> "v2/notes"
    """
    if "." not in path:
        return ""
    return path.rsplit(".", 1)[1]


def get_content_type(path: str) -> ContentType:
    """
    Determine the content type for a request path.

    Args:
        path: Normalized request path (leading slash already stripped).

    Returns:
        ContentType.TEXT_HTML for a path ending in exactly ".html",
        ContentType.TEXT_PLAIN otherwise.
    """
    return CONTENT_TYPES.get(get_extension(path), DEFAULT_CONTENT_TYPE)
