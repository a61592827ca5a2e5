# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Configuration for the resource inliner and preview server.

Configuration is loaded from a YAML file (``webinline.yaml`` in the
working directory by default) with support for ``!env`` tags that
resolve values from environment variables::

    extension_root: !env WEBINLINE_ROOT
    images_base_uri: /images
    stylesheets:
      - assets/styles/webview.css
    concurrent: true
    preview:
      host: 127.0.0.1
      port: 5300
    logging:
      level: INFO

Every key is optional.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from webinline.dotenv_loader import load_dotenv_once
from webinline.logging import parse_level


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "webinline.yaml"
DEFAULT_STYLESHEETS: tuple[tuple[str, ...], ...] = (
    ("assets", "styles", "webview.css"),
)

_BOOL_TRUTHY = frozenset({"true", "1", "yes", "on"})
_BOOL_FALSY = frozenset({"false", "0", "no", "off"})


class ConfigError(Exception):
    """Base exception for configuration errors."""


class _EnvVar:
    """Placeholder for an unresolved ``!env VAR_NAME`` tag."""

    def __init__(self, var_name: str) -> None:
        self.var_name = var_name


def _env_constructor(loader: yaml.SafeLoader, node: yaml.Node) -> _EnvVar:
    """Handle ``!env VAR_NAME`` in YAML."""
    value = loader.construct_scalar(node)
    return _EnvVar(str(value))


def _make_loader() -> type[yaml.SafeLoader]:
    """Create a YAML loader that understands ``!env``."""

    class EnvLoader(yaml.SafeLoader):
        pass

    EnvLoader.add_constructor("!env", _env_constructor)
    return EnvLoader


def _raw_resolve(value: object) -> str | None:
    """Resolve an ``_EnvVar`` to its string value, or stringify literals.

    Returns None if the value is None or the env var is unset/empty.
    """
    if isinstance(value, _EnvVar):
        return os.environ.get(value.var_name) or None
    if value is None:
        return None
    return str(value)


def _coerce_bool(value: object, name: str) -> bool:
    if isinstance(value, bool):
        return value
    s = str(value).lower().strip()
    if s in _BOOL_TRUTHY:
        return True
    if s in _BOOL_FALSY:
        return False
    raise ConfigError(f"Config '{name}': cannot convert {value!r} to bool")


def _resolve_str(value: object, *, default: str) -> str:
    resolved = _raw_resolve(value)
    return default if resolved is None else resolved


def _resolve_int(value: object, name: str, *, default: int) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"Config '{name}' must be an integer")
    if isinstance(value, int):
        return value
    resolved = _raw_resolve(value)
    if resolved is None:
        return default
    try:
        return int(resolved)
    except ValueError:
        raise ConfigError(
            f"Config '{name}' must be an integer, got {resolved!r}"
        ) from None


def _resolve_bool(value: object, name: str, *, default: bool) -> bool:
    if isinstance(value, _EnvVar):
        value = _raw_resolve(value)
    if value is None:
        return default
    return _coerce_bool(value, name)


def _split_asset_path(value: str) -> tuple[str, ...]:
    """Split ``a/b/c`` into segments, dropping empty parts."""
    return tuple(part for part in value.split("/") if part)


def _resolve_stylesheets(value: object) -> tuple[tuple[str, ...], ...]:
    if value is None:
        return DEFAULT_STYLESHEETS
    if not isinstance(value, list):
        raise ConfigError(
            f"Config 'stylesheets' must be a list, got {type(value).__name__}"
        )
    result: list[tuple[str, ...]] = []
    for item in value:
        resolved = _raw_resolve(item)
        if not resolved:
            continue
        segments = _split_asset_path(resolved)
        if ".." in segments:
            raise ConfigError(
                f"Stylesheet path must stay inside the root: {resolved}"
            )
        if segments:
            result.append(segments)
    return tuple(result)


def _section(raw: dict, name: str) -> dict:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a YAML mapping")
    return section


@dataclass(frozen=True)
class InlinerConfig:
    """Inliner and preview server settings.

    Attributes:
        extension_root: Directory that asset paths are relative to.
        images_base_uri: URL prefix for assets that are not inlined.
        stylesheets: Stylesheets inlined into the preview page, each as
            path segments relative to the root.
        concurrent: Resolve bundle assets concurrently.
        preview_host: Preview server bind address.
        preview_port: Preview server port.
        log_level: Root log level name.
    """

    extension_root: Path = field(default_factory=Path.cwd)
    images_base_uri: str = "/images"
    stylesheets: tuple[tuple[str, ...], ...] = DEFAULT_STYLESHEETS
    concurrent: bool = True
    preview_host: str = "127.0.0.1"
    preview_port: int = 5300
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate and normalize configuration.

        Raises:
            ConfigError: If configuration is invalid.
        """
        if not 1 <= self.preview_port <= 65535:
            raise ConfigError(
                f"Preview port must be in 1..65535: {self.preview_port}"
            )
        try:
            parse_level(self.log_level)
        except ValueError as e:
            raise ConfigError(str(e)) from None
        # Frozen dataclass: normalize via object.__setattr__.
        object.__setattr__(
            self, "images_base_uri", self.images_base_uri.rstrip("/")
        )
        object.__setattr__(self, "log_level", self.log_level.strip().upper())

    @property
    def log_level_value(self) -> int:
        return parse_level(self.log_level)

    @classmethod
    def from_yaml(cls, config_path: Path | None = None) -> "InlinerConfig":
        """Load configuration from a YAML file.

        Values tagged with ``!env VAR_NAME`` are resolved from the
        environment at load time. A ``.env`` file next to the config
        (or in the working directory) is loaded first.

        Args:
            config_path: Path to the YAML file. Defaults to
                ``webinline.yaml`` in the working directory; when that
                file does not exist, defaults are used.

        Returns:
            InlinerConfig instance.

        Raises:
            ConfigError: If an explicit file is missing or a value is
                invalid.
        """
        if config_path is None:
            config_path = Path.cwd() / DEFAULT_CONFIG_NAME
            if not config_path.exists():
                load_dotenv_once()
                logger.debug("No %s found, using defaults", config_path)
                return cls()
        elif not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")

        load_dotenv_once(config_path.parent / ".env")

        try:
            with open(config_path) as f:
                raw = yaml.load(f, Loader=_make_loader())
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError(
                f"Config file must be a YAML mapping: {config_path}"
            )

        config = cls._from_raw(raw, base_dir=config_path.parent)
        logger.info(
            "Config loaded from %s: root=%s", config_path, config.extension_root
        )
        return config

    @classmethod
    def _from_raw(cls, raw: dict[str, Any], base_dir: Path) -> "InlinerConfig":
        """Build config from parsed (but unresolved) YAML dict.

        Relative ``extension_root`` values are taken relative to
        *base_dir* (the config file's directory).
        """
        preview = _section(raw, "preview")
        logging_section = _section(raw, "logging")

        root_value = _raw_resolve(raw.get("extension_root"))
        if root_value is None:
            extension_root = base_dir
        else:
            extension_root = Path(root_value).expanduser()
            if not extension_root.is_absolute():
                extension_root = base_dir / extension_root

        return cls(
            extension_root=extension_root,
            images_base_uri=_resolve_str(
                raw.get("images_base_uri"), default="/images"
            ),
            stylesheets=_resolve_stylesheets(raw.get("stylesheets")),
            concurrent=_resolve_bool(
                raw.get("concurrent"), "concurrent", default=True
            ),
            preview_host=_resolve_str(
                preview.get("host"), default="127.0.0.1"
            ),
            preview_port=_resolve_int(
                preview.get("port"), "preview.port", default=5300
            ),
            log_level=_resolve_str(
                logging_section.get("level"), default="INFO"
            ),
        )
