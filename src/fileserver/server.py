"""
=============================================================================
FILE SERVER
=============================================================================

Wires the listener, the file resolver and the exchange log together.

=============================================================================
THREAD PER CONNECTION
=============================================================================

    main thread                         handler threads
    ───────────                         ───────────────
    SocketServer.start()
      │ accept() ──► conn 1 ──spawn──►  ConnectionHandler(conn 1).handle()
      │ accept() ──► conn 2 ──spawn──►  ConnectionHandler(conn 2).handle()
      │ accept() ──► conn 3 ──spawn──►  ConnectionHandler(conn 3).handle()
      ▼                                          │
     ...                                         └──► ExchangeLog (one lock)

Every accepted connection gets a fresh daemon thread; the accept loop never
waits on a connection. There is no pool, no queue and no cap on the number
of threads, and no connection timeout. The exchange log is the only state
shared between handler threads.

=============================================================================
FAILURE MODES
=============================================================================

    Bind/listen fails        → OSError out of run(); the process should exit
    Log file cannot be made  → OSError out of run(); same
    A handler thread crashes → logged with traceback, listener keeps going
    Client I/O fails         → that connection is abandoned, nothing else

=============================================================================
"""

import logging
import threading
from typing import Optional

from .config import ServerConfig
from .access_log import ExchangeLog
from .core import SocketServer, Connection, ConnectionHandler
from .handlers import FileResolver
from .http import RequestParser


logger = logging.getLogger(__name__)


class FileServer:
    """
    The file-serving daemon.

    Usage:
        server = FileServer(ServerConfig(port=8080, root_dir="./public"))
        server.run()   # Blocks until Ctrl+C / SIGTERM / server.shutdown()
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        self.config = config or ServerConfig()
        self.config.validate()

        # The root is pinned here, so a later chdir() does not move it
        self.resolver = FileResolver(self.config.resolved_root())
        self.parser = RequestParser()

        self._socket_server = SocketServer(self.config)
        self._exchange_log: Optional[ExchangeLog] = None

        self._active = 0
        self._active_lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        """True while the listener is accepting connections."""
        return self._socket_server.is_running

    @property
    def address(self):
        """Bound (host, port) once listening."""
        return self._socket_server.address

    @property
    def active_connections(self) -> int:
        """Handlers currently in flight. Informational only; never limits admission."""
        with self._active_lock:
            return self._active

    def run(self):
        """
        Start serving (blocking).

        Raises:
            OSError: If the exchange log cannot be created or the address
                     cannot be bound.
        """
        self._setup_logging()

        # Truncates any previous log; fails fast before the socket is bound
        self._exchange_log = ExchangeLog.open(self.config.log_file)

        logger.info(
            f"Serving {self.resolver.root_dir} on {self.config.host}:{self.config.port}, "
            f"logging exchanges to {self.config.log_file}"
        )

        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self._shutdown()

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the listener accepts connections."""
        return self._socket_server.wait_until_ready(timeout)

    def wait_for_shutdown(self, timeout: Optional[float] = None) -> bool:
        """Block until the listening socket is closed. Returns False on timeout."""
        return self._socket_server.wait_for_shutdown(timeout)

    def shutdown(self):
        """Ask the accept loop to stop. run() returns shortly after."""
        self._socket_server.shutdown()

    def _setup_logging(self):
        logging.basicConfig(
            level=self.config.level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        logging.getLogger("fileserver").setLevel(self.config.level)

    def _shutdown(self):
        """
        Stop the server.

        Handler threads still running are not cancelled. Any record they
        try to write after the log is closed is dropped by ExchangeLog.
        """
        if self._exchange_log is not None:
            self._exchange_log.close()
        logger.info(f"Server stopped ({self.active_connections} connections still in flight)")

    # =========================================================================
    # CONNECTION DISPATCH
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """Called by the listener for each accepted connection."""
        with self._active_lock:
            self._active += 1

        thread = threading.Thread(
            target=self._process_connection,
            args=(conn,),
            name=f"conn-{conn.id}",
            daemon=True,
        )
        thread.start()

    def _process_connection(self, conn: Connection):
        """Thread entry point: run one ConnectionHandler to completion."""
        try:
            handler = ConnectionHandler(
                conn,
                resolver=self.resolver,
                exchange_log=self._exchange_log,
                server_name=self.config.server_name,
                parser=self.parser,
            )
            handler.handle()
        except Exception as e:
            logger.exception(f"[{conn.id}] Connection error: {e}")
            conn.close()
        finally:
            with self._active_lock:
                self._active -= 1
