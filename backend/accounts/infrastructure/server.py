"""REST Server Lifecycle: bind, serve in the background, shut down gracefully.

Invariants:
    - States: STARTING → LISTENING → SHUTTING_DOWN → STOPPED; CRASHED is terminal
    - Bind failure → CRASHED + ListenerError, uvicorn never starts
    - Stop event set → listening sockets close at once, in-flight requests get
      grace_period seconds, leftovers are cancelled by uvicorn
    - Serve task ending on its own while LISTENING → CRASHED + ListenerError
    - Error raised while SHUTTING_DOWN → ServerShutdownError
    - Cancelled run() awaits the serve task before the socket closes
    - Process signals are NOT handled here; the caller owns the stop event

Design Decisions:
    - Socket bound by us, not by uvicorn: uvicorn calls sys.exit() on bind
      errors, which would bypass the error taxonomy
    - uvicorn.Server subclass disables its own signal capture so shutdown is
      driven only by the stop event (ADR: one owner for process signals)
    - Main path waits on whichever finishes first, stop event or serve task
      (asyncio.wait FIRST_COMPLETED)
"""

import asyncio
import contextlib
import logging
import socket
from typing import Generator

import uvicorn
from starlette.types import ASGIApp

from accounts.core.domain_types import ServerState
from accounts.core.errors import ListenerError, ServerShutdownError

DEFAULT_GRACE_PERIOD = 10.0
LISTEN_BACKLOG = 2048


class _ManagedServer(uvicorn.Server):
    """uvicorn server that leaves SIGINT/SIGTERM to the caller."""

    @contextlib.contextmanager
    def capture_signals(self) -> Generator[None, None, None]:
        yield


class RestServer:
    """Runs an ASGI app on host:port until stop is set or the listener dies."""

    def __init__(
        self,
        app: ASGIApp,
        port: int,
        host: str = "0.0.0.0",
        grace_period: float = DEFAULT_GRACE_PERIOD,
        logger: logging.Logger | None = None,
    ):
        self._app = app
        self._host = host
        self._port = port
        self._grace_period = grace_period
        self._logger = logger or logging.getLogger(__name__)
        self.state = ServerState.STARTING
        self.bound_port: int | None = None

    async def run(self, stop: asyncio.Event) -> None:
        """Serve until stop is set. Returns only after a clean shutdown."""
        self._set_state(ServerState.STARTING)
        try:
            sock = self._bind()
        except ListenerError:
            self._set_state(ServerState.CRASHED)
            raise
        self.bound_port = sock.getsockname()[1]

        server = _ManagedServer(uvicorn.Config(
            self._app,
            host=self._host,
            port=self.bound_port,
            lifespan="off",
            log_config=None,
            access_log=False,
            timeout_graceful_shutdown=self._grace_period,
        ))
        serve_task = asyncio.create_task(self._serve(server, sock))
        stop_task = asyncio.create_task(stop.wait())
        self._set_state(ServerState.LISTENING)
        self._logger.info(f"listening on {self._host}:{self.bound_port}")

        try:
            done, _ = await asyncio.wait(
                {serve_task, stop_task}, return_when=asyncio.FIRST_COMPLETED,
            )
        except asyncio.CancelledError:
            server.should_exit = True
            stop_task.cancel()
            serve_task.cancel()
            await asyncio.gather(serve_task, stop_task, return_exceptions=True)
            sock.close()
            raise

        if serve_task in done:
            stop_task.cancel()
            sock.close()
            self._set_state(ServerState.CRASHED)
            exc = serve_task.exception()
            if exc is not None:
                raise ListenerError(f"listener failed: {exc}") from exc
            raise ListenerError("listener exited unexpectedly")

        await self._shutdown(server, serve_task, sock)

    async def _shutdown(
        self, server: uvicorn.Server, serve_task: asyncio.Task, sock: socket.socket,
    ) -> None:
        self._set_state(ServerState.SHUTTING_DOWN)
        self._logger.info("shutting down server...")
        server.should_exit = True
        try:
            await serve_task
        except Exception as e:
            self._set_state(ServerState.CRASHED)
            raise ServerShutdownError(str(e)) from e
        finally:
            sock.close()
        self._set_state(ServerState.STOPPED)
        self._logger.info("server stopped")

    async def _serve(self, server: uvicorn.Server, sock: socket.socket) -> None:
        try:
            await server.serve(sockets=[sock])
        except SystemExit as e:
            # uvicorn exits the process when its startup fails
            raise ListenerError(f"listener exited with status {e.code}") from e

    def _bind(self) -> socket.socket:
        family = socket.AF_INET6 if ":" in self._host else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((self._host, self._port))
            sock.listen(LISTEN_BACKLOG)
        except OSError as e:
            sock.close()
            raise ListenerError(
                f"cannot bind {self._host}:{self._port}: {e}", "BIND_ERROR",
            ) from e
        return sock

    def _set_state(self, state: ServerState) -> None:
        self.state = state
        self._logger.debug(f"server {state.value}", extra={"state": state.value})
