"""Run the gateway under uvicorn with signal-driven graceful shutdown.

The listener runs on a background thread while the main thread waits for
SIGINT/SIGTERM. Shutdown stops accepting connections and gives in-flight
requests a bounded time to finish. Requests blocked on the daemon are not
cancelled; if they outlive the bound, shutdown reports an error and the
serving thread is abandoned at process exit.
"""
from __future__ import annotations
import argparse
import logging
import signal
import sys
import threading
from types import FrameType

import uvicorn

from ollama_gateway.common.logging_setup import setup_logging
from ollama_gateway.common.settings import (
    GATEWAY_HOST,
    GATEWAY_PORT,
    LOG_LEVEL,
    SHUTDOWN_TIMEOUT,
)
from ollama_gateway.serve.app import create_app

LOGGER = logging.getLogger("ollama_gateway.server")

class ShutdownError(RuntimeError):
    """Graceful shutdown did not complete within its time bound."""

class GatewayServer:
    def __init__(
        self,
        host: str = GATEWAY_HOST,
        port: int = GATEWAY_PORT,
        shutdown_timeout: float = SHUTDOWN_TIMEOUT,
    ) -> None:
        self.host = host
        self.port = port
        self.shutdown_timeout = shutdown_timeout
        self.app = create_app()
        config = uvicorn.Config(
            self.app,
            host=host,
            port=port,
            timeout_graceful_shutdown=shutdown_timeout,
            log_config=None,
        )
        self._server = uvicorn.Server(config)
        self._quit = threading.Event()

    def _serve(self) -> None:
        # uvicorn only installs its own signal handlers on the main thread.
        try:
            self._server.run()
        except SystemExit as e:
            # uvicorn exits this way when it cannot bind.
            LOGGER.error("HTTP server error: listener exited with status %s", e.code)
        except Exception:
            LOGGER.exception("HTTP server error")

    def _on_signal(self, signum: int, _frame: FrameType | None) -> None:
        LOGGER.info("Received %s", signal.Signals(signum).name)
        self._quit.set()

    def request_shutdown(self) -> None:
        """Wake run() as if a termination signal had arrived."""
        self._quit.set()

    def run(self) -> None:
        """
        Serve until SIGINT/SIGTERM, then shut down gracefully.

        Must be called from the main thread.

        Raises:
            ShutdownError: In-flight requests did not drain in time.
        """
        previous = {
            sig: signal.signal(sig, self._on_signal)
            for sig in (signal.SIGINT, signal.SIGTERM)
        }
        thread = threading.Thread(
            target=self._serve, name="ollama-gateway-http", daemon=True
        )
        try:
            thread.start()
            LOGGER.info("Serving on %s:%s", self.host, self.port)
            self._quit.wait()
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)
        self.shutdown(thread)

    def shutdown(self, thread: threading.Thread) -> None:
        """
        Stop accepting connections and wait for the serving thread.

        Args:
            thread: Thread running the uvicorn server.

        Raises:
            ShutdownError: The thread is still alive after shutdown_timeout.
        """
        LOGGER.info("Shutting down, waiting up to %ss for in-flight requests", self.shutdown_timeout)
        self._server.should_exit = True
        thread.join(self.shutdown_timeout)
        if thread.is_alive():
            raise ShutdownError(
                f"in-flight requests did not finish within {self.shutdown_timeout}s"
            )
        LOGGER.info("Server stopped")

def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Proxy /generate and /models to a local Ollama daemon")
    ap.add_argument("--host", default=GATEWAY_HOST, help="Bind address")
    ap.add_argument("--port", type=int, default=GATEWAY_PORT, help="Listening port")
    ap.add_argument(
        "--shutdown-timeout",
        type=float,
        default=SHUTDOWN_TIMEOUT,
        help="Seconds to wait for in-flight requests on shutdown",
    )
    ap.add_argument("--log-level", default=LOG_LEVEL, help="Root log level")
    args = ap.parse_args(argv)

    setup_logging(args.log_level)
    server = GatewayServer(args.host, args.port, args.shutdown_timeout)
    try:
        server.run()
    except ShutdownError as e:
        LOGGER.error("Shutdown failed: %s", e)
        print(f"Server error: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
