"""Command-line entry point for the mvix game server."""

from __future__ import annotations

import argparse
import logging
import sys
import threading
import webbrowser
from dataclasses import replace
from pathlib import Path
from typing import Mapping, Sequence, TextIO

import uvicorn

from mvix import is_existing_file
from mvix.server import ServerSettings, create_app

LOG_FORMAT = "[%(asctime)s][%(name)s][%(levelname)s] - %(message)s"
BROWSER_DELAY_SECONDS = 0.5


def _format_host_for_url(host: str) -> str:
    """Return a host suitable for inclusion in an HTTP URL."""

    if host in {"0.0.0.0", "::"}:
        # Wildcard binds are not browsable; point the browser at loopback.
        host = "127.0.0.1" if host == "0.0.0.0" else "::1"
    if ":" in host and not host.startswith("["):
        return f"[{host}]"
    return host


def server_url(settings: ServerSettings) -> str:
    """Return the HTTP URL a browser should open for ``settings``."""

    return f"http://{_format_host_for_url(settings.host)}:{settings.port}"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mvix",
        description="Serve a browser game folder with case-insensitive asset lookups.",
    )
    parser.add_argument(
        "root",
        nargs="?",
        type=Path,
        default=None,
        help="Game folder containing index.html (defaults to the current directory).",
    )
    parser.add_argument("--host", default=None, help="Interface to bind (env: HOST).")
    parser.add_argument(
        "--port", type=int, default=None, help="TCP port to listen on (env: PORT)."
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose logging (env: DEBUG).",
    )
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Do not open the game in a web browser once the server starts.",
    )
    return parser


def load_settings(
    args: argparse.Namespace, environ: Mapping[str, str] | None = None
) -> ServerSettings:
    """Merge environment configuration with command-line overrides."""

    settings = ServerSettings.from_env(environ, root=args.root)
    overrides: dict[str, object] = {}
    if args.host:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.debug:
        overrides["debug"] = True
    return replace(settings, **overrides) if overrides else settings


def main(
    argv: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Parse arguments, validate the game folder and run the server."""

    error_stream = stderr if stderr is not None else sys.stderr
    args = _build_parser().parse_args(argv)

    try:
        settings = load_settings(args, environ)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=error_stream)
        return 1

    if not is_existing_file(settings.root / "index.html"):
        print("Please run mvix in the game folder.", file=error_stream)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=LOG_FORMAT,
    )

    app = create_app(settings)
    url = server_url(settings)
    print(f"Listening on {url}")

    if not args.no_browser:
        timer = threading.Timer(BROWSER_DELAY_SECONDS, webbrowser.open, args=(url,))
        timer.daemon = True
        timer.start()

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    raise SystemExit(main())
