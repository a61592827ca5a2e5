# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""webinline CLI: multi-command entry point.

Subcommands:

* ``bundle``: print the webview bootstrap JSON (base URI + inlined assets)
* ``css``: print inlined ``<style>`` blocks for stylesheet paths
* ``serve``: run the preview server
"""

import argparse
import dataclasses
import logging
import sys
import threading
from pathlib import Path

from webinline.bootstrap import inject_bundle
from webinline.config import ConfigError, InlinerConfig
from webinline.inliner import ResourceInliner
from webinline.logging import configure_logging, get_logger


logger = get_logger(__name__)

_USAGE = """\
usage: webinline <command> [args]

commands:
  bundle   Print the webview bootstrap JSON
  css      Print inlined <style> blocks for stylesheet paths
  serve    Run the preview server

Run 'webinline <command> --help' for command-specific help.\
"""


def _add_config_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to webinline.yaml (default: ./webinline.yaml if present)",
    )


def _load_config(path: Path | None) -> InlinerConfig | None:
    """Load config, reporting errors on stderr.

    Returns:
        The config, or None if it could not be loaded.
    """
    try:
        return InlinerConfig.from_yaml(path)
    except ConfigError as e:
        print(f"webinline: configuration error: {e}", file=sys.stderr)
        return None


# ── bundle subcommand ───────────────────────────────────────────────


def cmd_bundle(argv: list[str]) -> int:
    """Print the bootstrap JSON for the configured extension root.

    Returns:
        Exit code (0 on success, 1 on configuration error).
    """
    parser = argparse.ArgumentParser(
        prog="webinline bundle",
        description="Print the webview bootstrap JSON.",
    )
    _add_config_argument(parser)
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Resolve assets one after another instead of concurrently",
    )
    args = parser.parse_args(argv)

    config = _load_config(args.config)
    if config is None:
        return 1
    configure_logging(level=config.log_level_value)

    inliner = ResourceInliner(config.extension_root)
    bootstrap = inject_bundle(
        inliner,
        config.images_base_uri,
        concurrent=config.concurrent and not args.sequential,
    )
    print(bootstrap.to_json())
    return 0


# ── css subcommand ──────────────────────────────────────────────────


def cmd_css(argv: list[str]) -> int:
    """Print inlined stylesheets.

    Paths are ``a/b/c`` strings relative to the extension root. Without
    paths, the stylesheets from the config are used.

    Returns:
        Exit code (0 on success, 1 on configuration error).
    """
    parser = argparse.ArgumentParser(
        prog="webinline css",
        description="Print inlined <style> blocks for stylesheet paths.",
    )
    _add_config_argument(parser)
    parser.add_argument("paths", nargs="*", help="Stylesheet paths (a/b/c)")
    args = parser.parse_args(argv)

    config = _load_config(args.config)
    if config is None:
        return 1
    configure_logging(level=config.log_level_value)

    if args.paths:
        paths = [tuple(p for p in raw.split("/") if p) for raw in args.paths]
    else:
        paths = list(config.stylesheets)

    inliner = ResourceInliner(config.extension_root)
    for path in paths:
        print(inliner.inline_stylesheet(path))
    return 0


# ── serve subcommand ────────────────────────────────────────────────


def cmd_serve(argv: list[str]) -> int:
    """Run the preview server until interrupted.

    Returns:
        Exit code (0 on clean shutdown, 1 on configuration error).
    """
    from webinline.preview import PreviewServer

    parser = argparse.ArgumentParser(
        prog="webinline serve",
        description="Serve the webview preview page.",
    )
    _add_config_argument(parser)
    parser.add_argument("--host", default=None, help="Bind address")
    parser.add_argument("--port", type=int, default=None, help="Port")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)

    config = _load_config(args.config)
    if config is None:
        return 1
    configure_logging(
        level=logging.DEBUG if args.debug else config.log_level_value
    )

    try:
        server_config = dataclasses.replace(
            config,
            preview_host=args.host or config.preview_host,
            preview_port=args.port or config.preview_port,
        )
    except ConfigError as e:
        print(f"webinline: configuration error: {e}", file=sys.stderr)
        return 1

    server = PreviewServer(server_config)
    server.start()
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        server.stop()
    return 0


_DISPATCH: dict[str, str] = {
    "bundle": "cmd_bundle",
    "css": "cmd_css",
    "serve": "cmd_serve",
}


def cli() -> None:
    """Entry point for ``webinline``."""
    argv = sys.argv[1:]

    if not argv or argv[0] in ("-h", "--help"):
        print(_USAGE)
        sys.exit(0)

    if argv[0] not in _DISPATCH:
        print(f"webinline: unknown command '{argv[0]}'", file=sys.stderr)
        print(_USAGE, file=sys.stderr)
        sys.exit(2)

    # Look up handler by name so tests can mock individual commands.
    import webinline.cli as _self

    handler = getattr(_self, _DISPATCH[argv[0]])
    sys.exit(handler(argv[1:]))
