# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Shared pytest fixtures used across multiple test packages."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from webinline.dotenv_loader import reset_dotenv_state


SAMPLE_SVG = '<svg><path d="M0,0L10,10"/></svg>'
SAMPLE_CSS = "body { color: red; }"
OPENROUTER_BYTES = b"\x89PNG\r\n\x1a\nopenrouter-image-data"
REQUESTY_BYTES = b"\x89PNG\r\n\x1a\nrequesty-image-data"


@pytest.fixture
def extension_root(tmp_path: Path) -> Path:
    """Create an extension directory with every known asset present.

    Returns:
        Path to the extension root.
    """
    root = tmp_path / "extension"
    images = root / "assets" / "images"
    images.mkdir(parents=True)
    styles = root / "assets" / "styles"
    styles.mkdir(parents=True)

    (images / "roo-logo.svg").write_text(SAMPLE_SVG)
    (images / "openrouter.png").write_bytes(OPENROUTER_BYTES)
    (images / "requesty.png").write_bytes(REQUESTY_BYTES)
    (styles / "webview.css").write_text(SAMPLE_CSS)

    return root


@pytest.fixture
def empty_root(tmp_path: Path) -> Path:
    """Create an extension directory with no assets."""
    root = tmp_path / "empty"
    root.mkdir()
    return root


@pytest.fixture(autouse=True)
def _reset_dotenv() -> Iterator[None]:
    """Reset dotenv state around each test."""
    reset_dotenv_state()
    yield
    reset_dotenv_state()
