"""
Starting and stopping the HTTP server from code.

``BlogServer`` wraps a uvicorn ``Server`` running in a background
task on the current event loop.  ``start`` returns once the server
accepts connections and ``stop`` waits until it has shut down::

    server = BlogServer(port=8081)
    await server.start("test-blog.db")
    ...
    await server.stop()
"""

import asyncio
import logging
from typing import Optional

from uvicorn import Config, Server

from .core.config import settings
from .main import create_app
from .repositories import build_repository

logger = logging.getLogger(__name__)


class BlogServer:
    """Serve the Blog API on ``host``:``port`` until ``stop`` is called."""

    def __init__(self, host: Optional[str] = None, port: Optional[int] = None) -> None:
        self.host = host or settings.host
        self.port = port if port is not None else settings.port
        self.repository = None
        self._server: Optional[Server] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self, database_url: Optional[str] = None) -> None:
        """Open the post store and start serving.

        Raises ``RuntimeError`` if the server is already running or
        exits before it becomes ready.
        """
        if self.running:
            raise RuntimeError("Server is already running")

        self.repository = build_repository(database_url or settings.database_url)
        app = create_app(repository=self.repository)
        # log_config=None keeps uvicorn on the handlers set up by create_app.
        config = Config(
            app=app,
            host=self.host,
            port=self.port,
            log_level=settings.log_level.lower(),
            log_config=None,
        )
        self._server = Server(config)
        self._task = asyncio.create_task(self._serve())

        while not self._server.started:
            if self._task.done():
                task, self._task, self._server = self._task, None, None
                task.result()
                raise RuntimeError("Server exited during startup")
            await asyncio.sleep(0.05)
        logger.info("Listening on %s:%s", self.host, self.port)

    async def _serve(self) -> None:
        # uvicorn calls sys.exit(1) when it cannot bind; asyncio would
        # re-raise that out of the event loop instead of storing it.
        try:
            await self._server.serve()
        except SystemExit as e:
            raise RuntimeError(f"Could not serve on {self.host}:{self.port}") from e

    async def stop(self) -> None:
        """Ask the server to exit and wait for it.  No-op if not running."""
        if not self.running:
            return
        self._server.should_exit = True
        await self._task
        self._task = None
        self._server = None
        logger.info("Server on %s:%s stopped", self.host, self.port)
