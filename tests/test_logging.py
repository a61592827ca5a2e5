# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Tests for webinline/logging.py."""

import logging
from collections.abc import Iterator

import pytest

from webinline.logging import (
    DEFAULT_FORMAT,
    configure_logging,
    get_logger,
    parse_level,
)


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """Restore root logger handlers and level after the test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestParseLevel:
    def test_known_levels(self) -> None:
        assert parse_level("DEBUG") == logging.DEBUG
        assert parse_level("warning") == logging.WARNING
        assert parse_level(" error ") == logging.ERROR

    def test_unknown_level(self) -> None:
        with pytest.raises(ValueError, match="Unknown log level"):
            parse_level("verbose")


@pytest.mark.usefixtures("restore_root_logger")
class TestConfigureLogging:
    def test_sets_level(self) -> None:
        configure_logging(level=logging.DEBUG)
        assert logging.getLogger().level == logging.DEBUG

    def test_single_handler_after_repeated_calls(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_default_format(self) -> None:
        configure_logging()
        handler = logging.getLogger().handlers[0]
        assert handler.formatter is not None
        assert handler.formatter._fmt == DEFAULT_FORMAT

    def test_custom_format(self) -> None:
        configure_logging(format_string="%(message)s")
        handler = logging.getLogger().handlers[0]
        assert handler.formatter is not None
        assert handler.formatter._fmt == "%(message)s"


class TestGetLogger:
    def test_returns_named_logger(self) -> None:
        logger = get_logger("webinline.test")
        assert logger is logging.getLogger("webinline.test")
