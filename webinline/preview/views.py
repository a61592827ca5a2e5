# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""HTML rendering for the preview page.

The page mirrors what a webview host delivers as its initial HTML:
inlined stylesheets, the bootstrap JSON block, and images whose ``src``
is resolved from the bootstrap (inline data URI, or a URL under the
images base location).
"""

import html

from webinline.bootstrap import DEFAULT_ELEMENT_ID, WebviewBootstrap
from webinline.bundle import KNOWN_ASSETS


_IMAGE_LABELS = {
    "rooLogoSvg": "Logo",
    "openrouterPng": "OpenRouter",
    "requestyPng": "Requesty",
}


def render_asset_images(bootstrap: WebviewBootstrap) -> str:
    """Render one ``<img>`` per known asset.

    Each image carries ``data-asset`` so the front-end script can
    re-resolve it, and ``data-inlined`` to show which path was taken.
    """
    items = []
    for asset in KNOWN_ASSETS:
        src = bootstrap.resolve_asset_src(asset.key)
        is_inlined = bool(bootstrap.inlined_resources.get(asset.key))
        inlined = "true" if is_inlined else "false"
        label = html.escape(_IMAGE_LABELS.get(asset.key, asset.key))
        items.append(f"""
        <figure class="asset" data-inlined="{inlined}">
            <img src="{html.escape(src)}" alt="{label}"
                 data-asset="{asset.key}" data-filename="{asset.filename}">
            <figcaption>{label}</figcaption>
        </figure>""")
    return "".join(items)


def resolver_script(element_id: str = DEFAULT_ELEMENT_ID) -> str:
    """Front-end resolution of asset sources from the bootstrap block.

    Applies the same rule as ``WebviewBootstrap.resolve_asset_src``: a
    non-empty inlined value wins, otherwise base location plus filename.
    """
    return f"""
    <script>
    (function() {{
        var el = document.getElementById("{element_id}");
        if (!el) return;
        var config = JSON.parse(el.textContent || "{{}}");
        var base = config.imagesBaseUri || "";
        var inlined = config.inlinedResources || {{}};
        document.querySelectorAll("img[data-asset]").forEach(function(img) {{
            var value = inlined[img.dataset.asset];
            img.src = (typeof value === "string" && value)
                ? value
                : base + "/" + img.dataset.filename;
        }});
    }})();
    </script>"""


def render_preview_page(
    bootstrap: WebviewBootstrap,
    stylesheets: list[str],
) -> str:
    """Render the complete preview page.

    Args:
        bootstrap: Configuration handed to the front-end.
        stylesheets: Pre-rendered ``<style>`` blocks (or failure
            comments) to place in the head.

    Returns:
        Complete HTML page.
    """
    styles = "\n    ".join(stylesheets)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>Webview preview</title>
    {styles}
    {bootstrap.render_script()}
</head>
<body>
    <main class="hero">
        {render_asset_images(bootstrap)}
    </main>
    {resolver_script()}
</body>
</html>
"""
