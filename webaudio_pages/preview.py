"""Serve a generated site locally, reporting each page view to the router.

The preview server is a plain :mod:`http.server` over the output directory.
Every successfully served HTML page is handed to the application's router as
a navigation, which is how the analytics binding observes route changes
outside a browser.
"""

from __future__ import annotations

import functools
import logging
import typing as typ
from http import HTTPStatus
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlsplit

from ._constants import PAGE_SUFFIX

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .app import SiteApplication

logger = logging.getLogger(__name__)


class PreviewRequestHandler(SimpleHTTPRequestHandler):
    """Static file handler that turns served pages into route changes.

    Pages are served under the site base path, the prefix every generated
    href carries, while the files sit at the root of the output directory.
    """

    application: SiteApplication
    base_path: str

    def __init__(
        self,
        *args: typ.Any,
        application: SiteApplication,
        base_path: str = "/",
        **kwargs: typ.Any,
    ) -> None:
        self.application = application
        self.base_path = base_path
        super().__init__(*args, **kwargs)

    def send_head(self) -> typ.Any:
        path = urlsplit(self.path).path
        if self._within_base(path):
            return super().send_head()
        if path == "/":
            self.send_response(HTTPStatus.FOUND)
            self.send_header("Location", self.base_path)
            self.send_header("Content-Length", "0")
            self.end_headers()
            return None
        self.send_error(HTTPStatus.NOT_FOUND, "File not found")
        return None

    def translate_path(self, path: str) -> str:
        if self.base_path != "/" and self._within_base(urlsplit(path).path):
            path = "/" + path[len(self.base_path.rstrip("/")) :].lstrip("/")
        return super().translate_path(path)

    def send_response(self, code: int, message: str | None = None) -> None:
        super().send_response(code, message)
        if code == HTTPStatus.OK and self.command == "GET":
            self._notify_router()

    def log_message(self, format: str, *args: typ.Any) -> None:  # noqa: A002
        logger.info("%s - %s", self.address_string(), format % args)

    def _within_base(self, path: str) -> bool:
        return path.startswith(self.base_path) or path == self.base_path.rstrip("/")

    def _notify_router(self) -> None:
        path = urlsplit(self.path).path
        if not (path.endswith("/") or path.endswith(PAGE_SUFFIX)):
            return
        host = self.headers.get("Host")
        url = f"http://{host}{self.path}" if host else None
        self.application.router.go(path, url=url)


class PreviewServer:
    """Threaded HTTP server bound to one running site application."""

    def __init__(
        self,
        application: SiteApplication,
        directory: Path,
        *,
        host: str = "127.0.0.1",
        port: int = 4173,
    ) -> None:
        self.application = application
        self.directory = directory
        handler = functools.partial(
            PreviewRequestHandler,
            application=application,
            base_path=application.site.base_path,
            directory=str(directory),
        )
        self.httpd = ThreadingHTTPServer((host, port), handler)

    @property
    def address(self) -> tuple[str, int]:
        """Host and port the server is listening on."""
        host, port = self.httpd.server_address[:2]
        return str(host), int(port)

    def serve_forever(self) -> None:
        """Start the application and serve requests until interrupted."""
        self.application.start()
        try:
            self.httpd.serve_forever()
        finally:
            self.shutdown()

    def shutdown(self) -> None:
        """Close the socket and release application plugins."""
        self.httpd.server_close()
        self.application.close()


__all__ = ["PreviewRequestHandler", "PreviewServer"]
