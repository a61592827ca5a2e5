# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Tests for webinline/bootstrap.py."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from webinline.bootstrap import WebviewBootstrap, inject_bundle
from webinline.bundle import ResourceBundle
from webinline.inliner import ResourceInliner


class TestResolveAssetSrc:
    """The front-end fallback rule."""

    def test_uses_inlined_value(self) -> None:
        bootstrap = WebviewBootstrap(
            images_base_uri="https://host/images",
            inlined_resources=ResourceBundle(roo_logo_svg="data:image/svg"),
        )
        assert bootstrap.resolve_asset_src("rooLogoSvg") == "data:image/svg"

    def test_empty_value_falls_back_to_url(self) -> None:
        bootstrap = WebviewBootstrap(images_base_uri="https://host/images")

        assert bootstrap.resolve_asset_src("rooLogoSvg") == (
            "https://host/images/roo-logo.svg"
        )
        assert bootstrap.resolve_asset_src("openrouterPng") == (
            "https://host/images/openrouter.png"
        )
        assert bootstrap.resolve_asset_src("requestyPng") == (
            "https://host/images/requesty.png"
        )

    def test_never_returns_empty(self) -> None:
        bootstrap = WebviewBootstrap()
        for key in ("rooLogoSvg", "openrouterPng", "requestyPng"):
            assert bootstrap.resolve_asset_src(key) != ""

    def test_unknown_key(self) -> None:
        with pytest.raises(KeyError):
            WebviewBootstrap().resolve_asset_src("roo-logo.svg")


class TestSerialization:
    def test_to_dict(self) -> None:
        bootstrap = WebviewBootstrap(
            images_base_uri="/images",
            inlined_resources=ResourceBundle(requesty_png="data:x"),
        )
        assert bootstrap.to_dict() == {
            "imagesBaseUri": "/images",
            "inlinedResources": {
                "rooLogoSvg": "",
                "openrouterPng": "",
                "requestyPng": "data:x",
            },
        }

    def test_to_json_round_trips(self) -> None:
        bootstrap = WebviewBootstrap(
            images_base_uri="/images",
            inlined_resources=ResourceBundle(roo_logo_svg="data:a"),
        )
        assert json.loads(bootstrap.to_json()) == bootstrap.to_dict()

    def test_to_json_escapes_markup(self) -> None:
        bootstrap = WebviewBootstrap(
            images_base_uri="/x</script><script>alert(1)</script>&"
        )
        encoded = bootstrap.to_json()

        assert "<" not in encoded
        assert ">" not in encoded
        assert "&" not in encoded
        assert json.loads(encoded)["imagesBaseUri"] == (
            "/x</script><script>alert(1)</script>&"
        )

    def test_render_script(self) -> None:
        script = WebviewBootstrap(images_base_uri="/images").render_script()

        assert script.startswith(
            '<script type="application/json" id="webview-bootstrap">'
        )
        assert script.endswith("</script>")
        assert script.count("</script>") == 1

    def test_render_script_custom_id(self) -> None:
        script = WebviewBootstrap().render_script("cfg")
        assert 'id="cfg"' in script


class TestFromDict:
    def test_parses_full_object(self) -> None:
        bootstrap = WebviewBootstrap.from_dict(
            {
                "imagesBaseUri": "/images",
                "inlinedResources": {"rooLogoSvg": "data:a"},
            }
        )
        assert bootstrap.images_base_uri == "/images"
        assert bootstrap.inlined_resources.roo_logo_svg == "data:a"

    def test_missing_fields(self) -> None:
        assert WebviewBootstrap.from_dict({}) == WebviewBootstrap()

    def test_wrong_types(self) -> None:
        bootstrap = WebviewBootstrap.from_dict(
            {"imagesBaseUri": 3, "inlinedResources": ["x"]}
        )
        assert bootstrap == WebviewBootstrap()


class TestInjectBundle:
    def test_builds_fresh_bundle(self, extension_root: Path) -> None:
        inliner = ResourceInliner(extension_root)

        bootstrap = inject_bundle(inliner, "https://host/images/")

        assert bootstrap.images_base_uri == "https://host/images"
        assert bootstrap.inlined_resources.inlined_count == 3
        assert bootstrap.resolve_asset_src("rooLogoSvg").startswith(
            "data:image/svg+xml;base64,"
        )

    def test_missing_assets_resolve_to_urls(self, empty_root: Path) -> None:
        bootstrap = inject_bundle(ResourceInliner(empty_root), "/images")

        assert bootstrap.resolve_asset_src("openrouterPng") == (
            "/images/openrouter.png"
        )

    def test_passes_concurrency_flag(self) -> None:
        inliner = MagicMock()
        inliner.build_resource_bundle.return_value = ResourceBundle()

        inject_bundle(inliner, "/images", concurrent=False)

        inliner.build_resource_bundle.assert_called_once_with(concurrent=False)
