# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Inline extension-bundled assets for the webview.

Webviews reached through a forwarding tunnel may fail to load local
resources (the tunnel rewrites origins and policy headers). The
``ResourceInliner`` avoids those fetches by turning stylesheets into
``<style>`` blocks and icons into ``data:`` URIs that can be embedded
directly in the initial HTML.

Every public operation is best-effort: read failures are logged as
warnings and replaced by a fallback value, never raised.

Usage:
    inliner = ResourceInliner(Path("/path/to/extension"))
    css = inliner.inline_stylesheet(["assets", "styles", "webview.css"])
    bundle = inliner.build_resource_bundle()
"""

import base64
import logging
import os
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Protocol

from webinline.bundle import (
    KNOWN_ASSETS,
    AssetKind,
    KnownAsset,
    ResourceBundle,
)


logger = logging.getLogger(__name__)

SVG_MIME_TYPE = "image/svg+xml"

#: Joins the extension root with relative path segments.
PathResolver = Callable[[Path, Sequence[str]], Path]


class AssetReader(Protocol):
    """Reads asset contents from a resolved location."""

    def read_text(self, location: Path) -> str: ...

    def read_bytes(self, location: Path) -> bytes: ...

    def access(self, location: Path) -> None:
        """Raise if the location is not accessible."""
        ...


class AssetUnavailable(Exception):
    """An asset could not be read.

    Covers missing files, permission errors, decode errors and any other
    reader failure. Never escapes the public ``ResourceInliner`` API.
    """

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause


def join_path(root: Path, segments: Sequence[str]) -> Path:
    """Default path resolver: join segments onto the root."""
    return root.joinpath(*segments)


class FileSystemReader:
    """Asset reader backed by the local filesystem."""

    def read_text(self, location: Path) -> str:
        return location.read_text(encoding="utf-8")

    def read_bytes(self, location: Path) -> bytes:
        return location.read_bytes()

    def access(self, location: Path) -> None:
        if not os.access(location, os.R_OK):
            raise FileNotFoundError(f"Not accessible: {location}")


def _display_path(path: Sequence[str]) -> str:
    return "/".join(path)


class ResourceInliner:
    """Convert root-relative assets into inline representations.

    Holds no state beyond its collaborators: every call resolves and
    reads afresh, so calls may run concurrently.
    """

    def __init__(
        self,
        root: Path,
        *,
        resolver: PathResolver = join_path,
        reader: AssetReader | None = None,
    ) -> None:
        """Initialize inliner.

        Args:
            root: Extension root that asset paths are relative to.
            resolver: Joins the root with relative path segments.
            reader: Reads asset contents. Defaults to the filesystem.
        """
        self.root = root
        self._resolver = resolver
        self._reader = reader or FileSystemReader()

    def _read_text(self, path: Sequence[str]) -> str:
        try:
            return self._reader.read_text(self._resolver(self.root, path))
        except Exception as e:
            raise AssetUnavailable(_display_path(path), e) from e

    def read_bytes(self, path: Sequence[str]) -> bytes:
        """Read an asset's raw bytes.

        Unlike the inlining operations this raises on failure, for hosts
        that serve the file directly.

        Raises:
            AssetUnavailable: If the asset cannot be read.
        """
        try:
            return self._reader.read_bytes(self._resolver(self.root, path))
        except Exception as e:
            raise AssetUnavailable(_display_path(path), e) from e

    def inline_stylesheet(self, path: Sequence[str]) -> str:
        """Read a stylesheet and wrap it in a ``<style>`` block.

        Args:
            path: Path segments relative to the root.

        Returns:
            ``<style>`` block with the verbatim file text, or an HTML
            comment naming the path if the file could not be read.
        """
        try:
            css = self._read_text(path)
        except AssetUnavailable as e:
            logger.warning("Failed to inline CSS %s: %s", e.path, e.cause)
            return f"<!-- Failed to inline CSS: {e.path} -->"
        return f"<style>\n{css}\n</style>"

    def svg_to_data_uri(self, path: Sequence[str]) -> str:
        """Read an SVG as text and return it as a base64 data URI.

        Returns:
            ``data:image/svg+xml;base64,...``, or ``""`` on failure.
        """
        try:
            svg = self._read_text(path)
        except AssetUnavailable as e:
            logger.warning(
                "Failed to convert SVG to data URI %s: %s", e.path, e.cause
            )
            return ""
        payload = base64.b64encode(svg.encode("utf-8")).decode("ascii")
        return f"data:{SVG_MIME_TYPE};base64,{payload}"

    def image_to_data_uri(self, path: Sequence[str], mime_type: str) -> str:
        """Read a raster image and return it as a base64 data URI.

        Args:
            path: Path segments relative to the root.
            mime_type: MIME type to declare; the content is not sniffed.

        Returns:
            ``data:<mime_type>;base64,...``, or ``""`` on failure.
        """
        try:
            data = self.read_bytes(path)
        except AssetUnavailable as e:
            logger.warning(
                "Failed to convert image to data URI %s: %s", e.path, e.cause
            )
            return ""
        payload = base64.b64encode(data).decode("ascii")
        return f"data:{mime_type};base64,{payload}"

    def asset_to_data_uri(
        self, path: Sequence[str], mime_type: str | None = None
    ) -> str:
        """Convert an asset to a data URI, picking the read mode by type.

        Without a MIME type (or with ``image/svg+xml``) the asset is
        treated as a vector icon and read as text. Any other MIME type
        reads raw bytes.
        """
        if mime_type is None or mime_type == SVG_MIME_TYPE:
            return self.svg_to_data_uri(path)
        return self.image_to_data_uri(path, mime_type)

    def exists(self, path: Sequence[str]) -> bool:
        """Report whether an asset is currently accessible.

        Any failure (missing, permission denied, resolver error) is
        reported as ``False``.
        """
        try:
            self._reader.access(self._resolver(self.root, path))
        except Exception:
            return False
        return True

    def _inline_known_asset(self, asset: KnownAsset) -> str:
        # Missing assets skip the read so they do not log a warning.
        if not self.exists(asset.segments):
            logger.debug(
                "Asset not present: %s", _display_path(asset.segments)
            )
            return ""
        if asset.kind is AssetKind.VECTOR:
            return self.svg_to_data_uri(asset.segments)
        return self.image_to_data_uri(asset.segments, asset.mime_type)

    def build_resource_bundle(
        self, *, concurrent: bool = True
    ) -> ResourceBundle:
        """Inline every known asset into a fresh bundle.

        Args:
            concurrent: Resolve assets on a thread pool. When False they
                are resolved one after another in declaration order. The
                resulting bundle is the same either way.

        Returns:
            Bundle with a value for every known asset. Assets that are
            missing or unreadable map to ``""``.
        """
        if concurrent:
            with ThreadPoolExecutor(
                max_workers=len(KNOWN_ASSETS),
                thread_name_prefix="ResourceInliner",
            ) as pool:
                values = list(pool.map(self._inline_known_asset, KNOWN_ASSETS))
        else:
            values = [self._inline_known_asset(a) for a in KNOWN_ASSETS]

        bundle = ResourceBundle.from_mapping(
            {asset.key: value for asset, value in zip(KNOWN_ASSETS, values)}
        )
        logger.debug(
            "Built resource bundle: %d of %d assets inlined",
            bundle.inlined_count,
            len(KNOWN_ASSETS),
        )
        return bundle
