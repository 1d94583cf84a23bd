"""
Main application orchestrator.

Handles:
- Registry and collector setup
- HTTP server lifecycle
- Graceful shutdown
"""

import asyncio
import platform
import signal
from wsgiref.simple_server import WSGIServer

from prometheus_client import CollectorRegistry, PlatformCollector, ProcessCollector

from .collectors.build_info import BuildInfoCollector
from .collectors.pids import PidsCollector
from .config.loader import validate
from .config.schema import ExporterConfig
from .const import APP_NAME, APP_VERSION
from .logging import get_logger
from .models.metric import PidsMetrics
from .web import create_app, create_server


logger = get_logger("app")


def build_context() -> str:
    """Describe the runtime the exporter was started with."""
    return (
        f"(python={platform.python_implementation()} {platform.python_version()}, "
        f"platform={platform.platform()})"
    )


def create_registry(config: ExporterConfig) -> CollectorRegistry:
    """
    Create a registry with all exporter collectors.

    Args:
        config: Exporter configuration

    Returns:
        Registry ready to be served
    """
    registry = CollectorRegistry()
    ProcessCollector(registry=registry)
    PlatformCollector(registry=registry)
    registry.register(BuildInfoCollector())
    registry.register(PidsCollector(config.cgroup_root, PidsMetrics()))
    return registry


class Application:
    """
    Main application class.

    Serves the registry over HTTP until a shutdown signal arrives.
    """

    def __init__(self, config: ExporterConfig):
        """
        Initialize application.

        Args:
            config: Exporter configuration
        """
        self.config = config
        self.registry = create_registry(config)

        self.server: WSGIServer | None = None
        self._server_task: asyncio.Task | None = None
        self._shutdown_event = asyncio.Event()

    def _setup_signal_handlers(self) -> None:
        """Setup signal handlers for graceful shutdown."""
        loop = asyncio.get_running_loop()

        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, self._signal_handler)

    def _signal_handler(self) -> None:
        """Handle shutdown signals."""
        logger.info("Received shutdown signal")
        self.shutdown()

    def _on_server_done(self, task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"HTTP server stopped unexpectedly: {task.exception()}")
        self.shutdown()

    def shutdown(self) -> None:
        """Request the application to stop."""
        self._shutdown_event.set()

    async def start(self) -> None:
        """
        Start serving and wait for shutdown.

        Raises:
            OSError: If the listen address cannot be bound
        """
        logger.info(f"Starting {APP_NAME} (version={APP_VERSION})")
        logger.info(f"Build context {build_context()}")

        for warning in validate(self.config):
            logger.warning(f"Config warning: {warning}")

        self.server = create_server(self.config.listen_address, create_app(self.registry))

        self._setup_signal_handlers()

        self._server_task = asyncio.create_task(asyncio.to_thread(self.server.serve_forever))
        self._server_task.add_done_callback(self._on_server_done)

        logger.info(f"Listening on {self.config.listen_address}")

        await self._shutdown_event.wait()

        await self.stop()

    async def stop(self) -> None:
        """Stop the HTTP server."""
        if self.server is None:
            return

        logger.info(f"Stopping {APP_NAME}")

        await asyncio.to_thread(self.server.shutdown)

        if self._server_task is not None:
            await asyncio.gather(self._server_task, return_exceptions=True)
            self._server_task = None

        self.server.server_close()
        self.server = None

        logger.info(f"{APP_NAME} stopped")

    async def run(self) -> None:
        """
        Run the application until shutdown.

        Startup errors such as a failed bind propagate to the caller,
        which reports them.
        """
        await self.start()


async def run_app(config: ExporterConfig) -> None:
    """
    Create and run the application.

    Args:
        config: Exporter configuration
    """
    logger.debug(f"cgroup root: {config.cgroup_root}")

    app = Application(config)
    await app.run()
