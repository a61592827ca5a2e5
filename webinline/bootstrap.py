# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Initial configuration handed to the webview front-end.

The front-end receives a single JSON object embedded in the initial
HTML instead of reading ``window`` globals::

    {"imagesBaseUri": "...", "inlinedResources": {"rooLogoSvg": "...", ...}}

Each displayable asset resolves to its inlined value when that value is
a non-empty string, and otherwise to ``<imagesBaseUri>/<filename>``.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from webinline.bundle import ResourceBundle, get_known_asset


if TYPE_CHECKING:
    from webinline.inliner import ResourceInliner


logger = logging.getLogger(__name__)

DEFAULT_ELEMENT_ID = "webview-bootstrap"

# Keep "</script>" and HTML comment openers out of the embedded JSON.
_SCRIPT_ESCAPES = {ord(c): f"\\u{ord(c):04x}" for c in "<>&"}


@dataclass(frozen=True)
class WebviewBootstrap:
    """Images base location plus inlined resources for the front-end.

    Attributes:
        images_base_uri: URL prefix for assets that were not inlined.
        inlined_resources: Inlined values keyed by asset.
    """

    images_base_uri: str = ""
    inlined_resources: ResourceBundle = field(default_factory=ResourceBundle)

    def resolve_asset_src(self, key: str) -> str:
        """Resolve the ``src`` the front-end uses for an asset.

        Args:
            key: Wire name of a known asset (e.g. ``"rooLogoSvg"``).

        Returns:
            The inlined data URI if present, otherwise a URL built from
            the images base location and the asset's filename.

        Raises:
            KeyError: If the key is not a known asset.
        """
        asset = get_known_asset(key)
        inlined = self.inlined_resources.get(key)
        if inlined:
            return inlined
        return f"{self.images_base_uri}/{asset.filename}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "imagesBaseUri": self.images_base_uri,
            "inlinedResources": self.inlined_resources.to_dict(),
        }

    def to_json(self) -> str:
        """Serialize to JSON that is inert inside a ``<script>`` element."""
        raw = json.dumps(self.to_dict(), separators=(",", ":"))
        return raw.translate(_SCRIPT_ESCAPES)

    def render_script(self, element_id: str = DEFAULT_ELEMENT_ID) -> str:
        """Render the configuration as a JSON data block for the page."""
        return (
            f'<script type="application/json" id="{element_id}">'
            f"{self.to_json()}</script>"
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WebviewBootstrap":
        """Parse a configuration object, tolerating missing fields."""
        base = data.get("imagesBaseUri", "")
        resources = data.get("inlinedResources", {})
        if not isinstance(resources, Mapping):
            resources = {}
        return cls(
            images_base_uri=base if isinstance(base, str) else "",
            inlined_resources=ResourceBundle.from_mapping(resources),
        )


def inject_bundle(
    inliner: "ResourceInliner",
    images_base_uri: str,
    *,
    concurrent: bool = True,
) -> WebviewBootstrap:
    """Build a fresh bundle and pair it with the images base location.

    Args:
        inliner: Inliner rooted at the extension directory.
        images_base_uri: URL prefix for assets that are not inlined.
        concurrent: Resolve assets concurrently.

    Returns:
        Configuration ready to embed in the initial HTML.
    """
    bundle = inliner.build_resource_bundle(concurrent=concurrent)
    logger.debug(
        "Injecting %d inlined resources (base %s)",
        bundle.inlined_count,
        images_base_uri,
    )
    return WebviewBootstrap(
        images_base_uri=images_base_uri.rstrip("/"),
        inlined_resources=bundle,
    )
