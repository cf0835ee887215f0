"""Process entry point: bind the listening socket and serve the app."""

import logging
import signal
import socket
import sys
from typing import Optional

import uvicorn

from awibi_api.core.config import Settings, get_settings
from awibi_api.core.logging import configure_logging
from awibi_api.main import create_app

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def bind_socket(host: str, port: int) -> socket.socket:
    """
    Create a TCP socket bound to ``host:port``.

    Raises:
        OSError: If the address is in use or cannot be bound
    """
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    sock.set_inheritable(True)
    return sock


def _on_shutdown_signal(signum, frame):
    # uvicorn re-raises the signal it handled once it has shut down
    logger.debug(f"Shutdown signal {signum} received after server exit")


def _serve(server: uvicorn.Server, sock: socket.socket) -> None:
    """Run uvicorn on ``sock`` without letting its shutdown signal kill the process."""
    previous = {sig: signal.signal(sig, _on_shutdown_signal) for sig in SHUTDOWN_SIGNALS}
    try:
        server.run(sockets=[sock])
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
        sock.close()


def run(settings: Optional[Settings] = None) -> int:
    """
    Bind the configured port and serve until shutdown.

    Returns:
        Process exit status: 0 on normal shutdown, 1 if the port could not be
        bound or the server failed to start
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    try:
        sock = bind_socket(settings.HOST, settings.PORT)
    except OSError as e:
        logger.error(f"Failed to bind {settings.HOST}:{settings.PORT}: {e}")
        return 1

    port = sock.getsockname()[1]
    logger.info(f"Server running on port {port}")

    config = uvicorn.Config(
        create_app(settings),
        log_config=None,
        log_level=settings.UVICORN_LOG_LEVEL,
        access_log=False,
    )
    server = uvicorn.Server(config)
    _serve(server, sock)

    if not server.started:
        logger.error("Server failed to start")
        return 1
    return 0


def main() -> None:
    """Console script entry point."""
    sys.exit(run())
