"""
=============================================================================
FILESERVER - Minimal Concurrent HTTP File Server
=============================================================================

Serves files from a local directory over HTTP/1.x, one request per TCP
connection and one thread per connection, and records every exchange in a
shared append-only log.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    fileserver/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m fileserver)
    ├── server.py            # FileServer: listener + thread per connection
    ├── config.py            # ServerConfig dataclass
    ├── access_log.py        # Exchange log shared by all handlers
    ├── core/
    │   ├── socket_server.py # TCP listener
    │   ├── connection.py    # Client socket wrapper, short-read reader
    │   └── handler.py       # One exchange, start to finish
    ├── http/
    │   ├── request.py       # Request line / header parsing
    │   ├── response.py      # Response value and wire format
    │   ├── status_codes.py  # OK / 400 / 403 / 404
    │   └── mime_types.py    # text/html vs text/plain
    └── handlers/
        └── static.py        # File lookup against the file root

=============================================================================
QUICK START
=============================================================================

    from fileserver import FileServer, ServerConfig

    server = FileServer(ServerConfig(port=8080, root_dir="./public"))
    server.run()

    $ curl http://127.0.0.1:8080/index.html

=============================================================================
"""

__version__ = "1.0.0"

from .server import FileServer
from .config import ServerConfig

__all__ = ["FileServer", "ServerConfig", "__version__"]
