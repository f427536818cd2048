"""
=============================================================================
FILE SERVER CLI ENTRY POINT
=============================================================================

    # Serve the current directory on 127.0.0.1:8080, log to ./log.txt
    python -m fileserver

    # Custom port and file root
    python -m fileserver --port 3000 --root ./public

    # Exchange log somewhere else, verbose diagnostics
    python -m fileserver --log-file /tmp/exchanges.log --log-level DEBUG

Every option also has an environment variable (see ServerConfig.from_env);
flags on the command line win.

Exit status is 1 if the server cannot start (bad option, port in use, log
file not writable) and 0 after a clean Ctrl+C / SIGTERM.

=============================================================================
"""

import argparse
import sys

from . import __version__
from .server import FileServer
from .config import ServerConfig, LOG_LEVELS


def build_parser(defaults: ServerConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fileserver",
        description="Minimal concurrent HTTP file server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m fileserver                        # Serve cwd on 127.0.0.1:8080
  python -m fileserver --port 3000            # Custom port
  python -m fileserver --root ./public        # Serve another directory
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=defaults.host,
        help=f"Host to bind to (default: {defaults.host})"
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=defaults.port,
        help=f"Port to listen on (default: {defaults.port})"
    )

    parser.add_argument(
        "--buffer-size",
        type=int,
        default=defaults.buffer_size,
        help=f"Bytes per socket read; a shorter read ends the request (default: {defaults.buffer_size})"
    )

    # ─────────────────────────────────────────────────────────────────────
    # FILE ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--root", "-r",
        default=defaults.root_dir,
        help="Directory to serve files from (default: current directory)"
    )

    parser.add_argument(
        "--log-file",
        default=defaults.log_file,
        help=f"Exchange log, truncated at start-up (default: {defaults.log_file})"
    )

    # ─────────────────────────────────────────────────────────────────────
    # META ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--server-name",
        default=defaults.server_name,
        help=f"Value of the Server header (default: {defaults.server_name})"
    )

    parser.add_argument(
        "--log-level", "-l",
        type=str.upper,
        choices=LOG_LEVELS,
        default=defaults.log_level.upper(),
        help=f"Diagnostic logging level (default: {defaults.log_level})"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"fileserver {__version__}"
    )

    return parser


def main(argv=None) -> int:
    """CLI entry point. Returns the process exit status."""
    try:
        defaults = ServerConfig.from_env()
    except ValueError as e:
        print(f"Error: invalid environment setting: {e}", file=sys.stderr)
        return 1

    args = build_parser(defaults).parse_args(argv)

    config = ServerConfig(
        host=args.host,
        port=args.port,
        buffer_size=args.buffer_size,
        root_dir=args.root,
        log_file=args.log_file,
        server_name=args.server_name,
        log_level=args.log_level,
    )

    try:
        server = FileServer(config)
        server.run()
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
