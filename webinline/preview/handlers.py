# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""HTTP request handlers for the preview server.

Every request builds its bundle from scratch; nothing is cached between
requests.
"""

import json
import logging

from werkzeug.exceptions import NotFound
from werkzeug.wrappers import Request, Response

from webinline.bootstrap import WebviewBootstrap, inject_bundle
from webinline.bundle import find_asset_by_filename
from webinline.config import InlinerConfig
from webinline.inliner import AssetUnavailable, ResourceInliner
from webinline.preview import views


logger = logging.getLogger(__name__)

#: Directory (relative to the extension root) served under the images
#: base location.
IMAGES_SEGMENTS: tuple[str, ...] = ("assets", "images")


class RequestHandlers:
    """Container for preview HTTP request handlers."""

    def __init__(self, config: InlinerConfig, inliner: ResourceInliner) -> None:
        """Initialize request handlers.

        Args:
            config: Inliner configuration.
            inliner: Inliner rooted at the extension directory.
        """
        self.config = config
        self.inliner = inliner

    def _bootstrap(self) -> WebviewBootstrap:
        return inject_bundle(
            self.inliner,
            self.config.images_base_uri,
            concurrent=self.config.concurrent,
        )

    def handle_index(self, request: Request) -> Response:
        """Render the preview page with inlined resources."""
        stylesheets = [
            self.inliner.inline_stylesheet(path)
            for path in self.config.stylesheets
        ]
        return Response(
            views.render_preview_page(self._bootstrap(), stylesheets),
            content_type="text/html; charset=utf-8",
        )

    def handle_image(self, request: Request, filename: str) -> Response:
        """Serve an image from the images directory.

        This is the URL fallback the front-end uses for assets that
        were not inlined.

        Raises:
            NotFound: If the filename is unsafe or the file is missing.
        """
        if not filename or "/" in filename or filename.startswith("."):
            raise NotFound()

        segments = (*IMAGES_SEGMENTS, filename)
        if not self.inliner.exists(segments):
            raise NotFound()

        asset = find_asset_by_filename(filename)
        mime_type = asset.mime_type if asset else "application/octet-stream"
        try:
            data = self.inliner.read_bytes(segments)
        except AssetUnavailable as e:
            logger.warning("Failed to read image %s: %s", e.path, e.cause)
            raise NotFound() from e
        return Response(data, content_type=mime_type)

    def handle_api_resources(self, request: Request) -> Response:
        """Return the bootstrap configuration as JSON."""
        return Response(
            json.dumps(self._bootstrap().to_dict()),
            content_type="application/json",
        )

    def handle_health(self, request: Request) -> Response:
        """Health check endpoint."""
        return Response(
            json.dumps({"status": "ok"}),
            content_type="application/json",
        )
