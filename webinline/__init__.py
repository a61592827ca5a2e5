# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Inline extension-bundled assets into webview HTML.

Converts stylesheets and icons into ``<style>`` blocks and ``data:``
URIs so a sandboxed webview can render them without fetching local
resources, which tunnel forwarding may break.
"""

from webinline.bootstrap import WebviewBootstrap, inject_bundle
from webinline.bundle import (
    KNOWN_ASSETS,
    AssetKind,
    KnownAsset,
    ResourceBundle,
)
from webinline.config import ConfigError, InlinerConfig
from webinline.inliner import (
    AssetReader,
    AssetUnavailable,
    FileSystemReader,
    ResourceInliner,
    join_path,
)


__all__ = [
    "KNOWN_ASSETS",
    "AssetKind",
    "AssetReader",
    "AssetUnavailable",
    "ConfigError",
    "FileSystemReader",
    "InlinerConfig",
    "KnownAsset",
    "ResourceBundle",
    "ResourceInliner",
    "WebviewBootstrap",
    "inject_bundle",
    "join_path",
]
