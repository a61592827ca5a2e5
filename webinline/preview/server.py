# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Preview HTTP server.

Provides a WSGI application that plays the host side of a webview: it
serves the initial HTML with inlined resources, and the images base
location used for assets that were not inlined.
"""

import logging
import threading
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from werkzeug.wrappers.response import StartResponse

from werkzeug.exceptions import NotFound
from werkzeug.routing import Map, Rule
from werkzeug.serving import make_server
from werkzeug.wrappers import Request, Response

from webinline.config import InlinerConfig
from webinline.inliner import ResourceInliner
from webinline.preview.handlers import RequestHandlers


logger = logging.getLogger(__name__)


def _images_route_prefix(images_base_uri: str) -> str:
    """Route prefix for locally served images.

    An absolute base URI points somewhere else, so images are still
    served locally under ``/images``.
    """
    if images_base_uri == "" or images_base_uri.startswith("/"):
        return images_base_uri
    return "/images"


class PreviewServer:
    """WSGI preview server.

    Runs in a background thread once started.
    """

    def __init__(
        self,
        config: InlinerConfig,
        inliner: ResourceInliner | None = None,
    ) -> None:
        """Initialize preview server.

        Args:
            config: Inliner configuration (root, base URI, bind address).
            inliner: Inliner to use. Defaults to one rooted at
                ``config.extension_root``.
        """
        self.config = config
        self.host = config.preview_host
        self.port = config.preview_port
        self.inliner = inliner or ResourceInliner(config.extension_root)
        self._server: Any = None
        self._thread: threading.Thread | None = None

        self._handlers = RequestHandlers(config, self.inliner)

        images_prefix = _images_route_prefix(config.images_base_uri)
        self._url_map = Map(
            [
                Rule("/", endpoint="index"),
                Rule(f"{images_prefix}/<filename>", endpoint="image"),
                Rule("/api/resources", endpoint="api_resources"),
                Rule("/health", endpoint="health"),
            ]
        )

        self._endpoint_handlers = {
            "index": self._handlers.handle_index,
            "image": self._handlers.handle_image,
            "api_resources": self._handlers.handle_api_resources,
            "health": self._handlers.handle_health,
        }

    def start(self) -> None:
        """Start the preview server in a background thread."""
        self._server = make_server(
            self.host,
            self.port,
            self._wsgi_app,
            threaded=True,
        )
        self._thread = threading.Thread(
            target=self._server.serve_forever,
            daemon=True,
            name="PreviewServer",
        )
        self._thread.start()
        logger.info(
            "Preview server started at http://%s:%d/ (root %s)",
            self.host,
            self.port,
            self.inliner.root,
        )

    def stop(self) -> None:
        """Stop the preview server."""
        if self._server:
            self._server.shutdown()
            logger.info("Preview server stopped")
        if self._thread is not None:
            self._thread.join(timeout=5)
            self._thread = None

    def _wsgi_app(
        self,
        environ: dict[str, Any],
        start_response: "StartResponse",
    ) -> Iterable[bytes]:
        """WSGI application entry point."""
        request = Request(environ)
        response = self._dispatch(request)
        return response(environ, start_response)

    def _dispatch(self, request: Request) -> Response:
        """Route request to appropriate handler.

        Args:
            request: Incoming request.

        Returns:
            Response to send.
        """
        adapter = self._url_map.bind_to_environ(request.environ)
        try:
            endpoint, values = adapter.match()
            handler = self._endpoint_handlers[endpoint]
            return handler(request, **values)
        except NotFound:
            return Response("Not Found", status=404)
        except Exception:
            logger.exception("Error handling request %s", request.path)
            return Response("Internal Server Error", status=500)
