"""
Request handlers.

The server has a single one: static file resolution against the file root.

    from fileserver.handlers import FileResolver

    resolver = FileResolver("/srv/www")
    resolver.resolve("index.html")   # Resolution(status=OK, payload=b"...")
"""

from .static import FileResolver, Resolution

__all__ = [
    "FileResolver",
    "Resolution",
]
