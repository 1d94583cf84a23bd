"""
HTTP endpoint serving the metrics exposition.

Routes:
- /metrics: Prometheus text format from the registry
- anything else: static banner
"""

import socket
from collections.abc import Callable, Iterable
from socketserver import ThreadingMixIn
from typing import Any
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from prometheus_client import CollectorRegistry, make_wsgi_app

from .config.schema import ListenAddress
from .const import BANNER, METRICS_PATH
from .logging import get_logger


logger = get_logger("web")

WSGIApp = Callable[[dict[str, Any], Callable[..., Any]], Iterable[bytes]]


class ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    """WSGI server handling each scrape in its own thread."""

    daemon_threads = True


class ThreadingWSGIServerV6(ThreadingWSGIServer):
    address_family = socket.AF_INET6


class LoggingRequestHandler(WSGIRequestHandler):
    """Request handler that sends access lines to the exporter log."""

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug(f"{self.address_string()} {format % args}")


def create_app(registry: CollectorRegistry) -> WSGIApp:
    """
    Create the exporter WSGI application.

    Args:
        registry: Registry whose collectors are scraped on /metrics

    Returns:
        WSGI callable
    """
    metrics_app = make_wsgi_app(registry)
    banner = BANNER.encode("utf-8")

    def app(environ: dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
        if environ.get("PATH_INFO", "") == METRICS_PATH:
            return metrics_app(environ, start_response)

        start_response(
            "200 OK",
            [
                ("Content-Type", "text/plain; charset=utf-8"),
                ("Content-Length", str(len(banner))),
            ],
        )
        return [banner]

    return app


def create_server(address: ListenAddress, app: WSGIApp) -> WSGIServer:
    """
    Bind the HTTP server.

    Raises:
        OSError: If the address cannot be bound
    """
    server_class = ThreadingWSGIServerV6 if address.is_ipv6 else ThreadingWSGIServer
    return make_server(
        address.host,
        address.port,
        app,
        server_class=server_class,
        handler_class=LoggingRequestHandler,
    )
