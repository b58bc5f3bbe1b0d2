"""Configuration helpers for the game asset server."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping


def _normalise_string(value: str | None, *, default: str) -> str:
    if value is None:
        return default

    trimmed = value.strip()
    return trimmed or default


def _parse_port(value: str | None, *, default: int) -> int:
    if value is None:
        return default

    trimmed = value.strip()
    if not trimmed:
        return default

    try:
        port = int(trimmed)
    except ValueError as exc:
        raise ValueError("PORT must be an integer.") from exc
    if not 0 < port < 65536:
        raise ValueError("PORT must be between 1 and 65535.")
    return port


@dataclass(frozen=True)
class ServerSettings:
    """Deployment settings for the asset server.

    ``root`` is the game folder being served (the directory containing the
    game's ``index.html``). Host, port and debug mode come from the ``HOST``,
    ``PORT`` and ``DEBUG`` environment variables; empty strings are treated as
    if the variable was unset.
    """

    root: Path = field(default_factory=Path.cwd)
    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False
    save_file_name: str = "mvix.json"

    @property
    def save_path(self) -> Path:
        """Return the file that mirrors the browser save data."""

        return self.root / self.save_file_name

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        root: Path | None = None,
    ) -> "ServerSettings":
        """Return settings populated from ``environ``.

        Args:
            environ: Optional mapping of environment variables. When omitted,
                :data:`os.environ` is used.
            root: Game folder to serve. Defaults to the working directory.

        Raises:
            ValueError: If ``PORT`` is not a valid TCP port.
        """

        source = environ if environ is not None else os.environ

        host = _normalise_string(source.get("HOST"), default="0.0.0.0")
        port = _parse_port(source.get("PORT"), default=3000)
        debug = bool((source.get("DEBUG") or "").strip())
        resolved_root = Path(root).expanduser() if root is not None else Path.cwd()

        return cls(
            root=resolved_root.resolve(),
            host=host,
            port=port,
            debug=debug,
        )


__all__ = ["ServerSettings"]
