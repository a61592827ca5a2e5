# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Resource bundle handed to the webview and the table of known assets.

The bundle has a fixed shape: one entry per known asset, always present.
An asset that could not be inlined maps to the empty string, which the
front-end treats as "not inlined" and replaces with a URL under the
images base location.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any


class AssetKind(Enum):
    """How an asset is turned into a data URI."""

    VECTOR = "vector"
    RASTER = "raster"


@dataclass(frozen=True)
class KnownAsset:
    """An extension-bundled asset that is inlined into every bundle.

    Attributes:
        key: Wire name of the asset in the serialized bundle.
        segments: Path segments relative to the extension root.
        kind: Vector assets are read as text, raster assets as bytes.
        mime_type: MIME type used in the data URI.
    """

    key: str
    segments: tuple[str, ...]
    kind: AssetKind
    mime_type: str

    @property
    def filename(self) -> str:
        """Conventional filename used when falling back to a URL."""
        return self.segments[-1]


KNOWN_ASSETS: tuple[KnownAsset, ...] = (
    KnownAsset(
        key="rooLogoSvg",
        segments=("assets", "images", "roo-logo.svg"),
        kind=AssetKind.VECTOR,
        mime_type="image/svg+xml",
    ),
    KnownAsset(
        key="openrouterPng",
        segments=("assets", "images", "openrouter.png"),
        kind=AssetKind.RASTER,
        mime_type="image/png",
    ),
    KnownAsset(
        key="requestyPng",
        segments=("assets", "images", "requesty.png"),
        kind=AssetKind.RASTER,
        mime_type="image/png",
    ),
)

_ASSETS_BY_KEY: dict[str, KnownAsset] = {a.key: a for a in KNOWN_ASSETS}

if len(_ASSETS_BY_KEY) != len(KNOWN_ASSETS):  # pragma: no cover
    raise RuntimeError("Duplicate key in KNOWN_ASSETS")


def get_known_asset(key: str) -> KnownAsset:
    """Look up a known asset by wire name.

    Raises:
        KeyError: If no asset has that wire name.
    """
    return _ASSETS_BY_KEY[key]


def find_asset_by_filename(filename: str) -> KnownAsset | None:
    """Return the known asset with the given filename, if any."""
    for asset in KNOWN_ASSETS:
        if asset.filename == filename:
            return asset
    return None


@dataclass(frozen=True)
class ResourceBundle:
    """Inlined values for every known asset.

    Each value is a data URI, or the empty string when the asset was
    not inlined.
    """

    roo_logo_svg: str = ""
    openrouter_png: str = ""
    requesty_png: str = ""

    def to_dict(self) -> dict[str, str]:
        """Serialize using the wire names of the known assets."""
        return {
            key: getattr(self, name) for key, name in _FIELD_BY_KEY.items()
        }

    def get(self, key: str) -> str:
        """Return the value stored under a wire name.

        Raises:
            KeyError: If the key is not a known asset.
        """
        return getattr(self, _FIELD_BY_KEY[key])

    @property
    def inlined_count(self) -> int:
        """Number of assets that carry an inline value."""
        return sum(1 for value in self.to_dict().values() if value)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "ResourceBundle":
        """Build a bundle from a wire-keyed mapping.

        Unknown keys are ignored. Missing or non-string values become
        the empty string.
        """
        values: dict[str, str] = {}
        for key, name in _FIELD_BY_KEY.items():
            value = mapping.get(key, "")
            values[name] = value if isinstance(value, str) else ""
        return cls(**values)


_FIELD_BY_KEY: dict[str, str] = dict(
    zip(
        (asset.key for asset in KNOWN_ASSETS),
        (f.name for f in fields(ResourceBundle)),
        strict=True,
    )
)
