"""Case-insensitive resolution of request paths against the real filesystem.

Game assets are frequently referenced with a casing that differs from the
files shipped on disk (the games were authored on case-insensitive
filesystems). :func:`resolve_path` maps such a reference onto the entry that
actually exists, comparing one segment at a time so that every directory
level may differ in case independently.

Neither resolver function raises: undecodable input and directory listing
failures are reported as ``None`` and logged at ``DEBUG`` level.
"""

from __future__ import annotations

import logging
import os
import re
from urllib.parse import unquote

from . import fs

logger = logging.getLogger(__name__)

_ESCAPE_PATTERN = re.compile(r"%(?![0-9A-Fa-f]{2})")


class PathDecodeError(ValueError):
    """Raised when a path contains malformed percent-encoding."""


def decode_path(value: str) -> str:
    """Percent-decode ``value`` strictly.

    ``+`` is left untouched. A ``%`` that does not introduce two hex digits,
    or escapes that do not form valid UTF-8, raise :class:`PathDecodeError`.
    """

    if "%" not in value:
        return value

    malformed = _ESCAPE_PATTERN.search(value)
    if malformed is not None:
        raise PathDecodeError(
            f"Malformed percent escape at offset {malformed.start()} in {value!r}."
        )

    try:
        return unquote(value, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as exc:
        raise PathDecodeError(f"Escapes in {value!r} are not valid UTF-8.") from exc


def resolve_path(
    target_path: str, *, base: str | os.PathLike[str] | None = None
) -> str | None:
    """Return the on-disk spelling of ``target_path`` or ``None`` if absent.

    ``target_path`` is percent-decoded and made absolute against ``base``
    (the current working directory when omitted). A path that exists exactly
    as written is returned unchanged. Otherwise the walk climbs towards the
    filesystem root until an existing ancestor is found, then descends again,
    matching each remaining segment case-insensitively against the directory
    listing. When several entries differ only by case, the first one listed
    wins.
    """

    try:
        decoded = decode_path(target_path)
    except PathDecodeError as exc:
        logger.debug("Treating undecodable path as missing: %s", exc)
        return None

    current = _absolutise(decoded, base)
    unresolved: list[str] = []
    while not fs.is_existing(current):
        parent, segment = os.path.split(current)
        if not segment:
            # Reached the filesystem root without finding anything.
            return None
        unresolved.append(segment)
        current = parent

    for segment in reversed(unresolved):
        match = _match_entry(current, segment)
        if match is None:
            return None
        current = os.path.join(current, match)

    return current


def resolve_file(
    target_path: str, *, base: str | os.PathLike[str] | None = None
) -> str | None:
    """Resolve ``target_path`` like :func:`resolve_path` but only accept files."""

    resolved = resolve_path(target_path, base=base)
    if resolved is None or not fs.is_existing_file(resolved):
        return None
    return resolved


def _absolutise(path: str, base: str | os.PathLike[str] | None) -> str:
    anchor = os.fspath(base) if base is not None else os.getcwd()
    return os.path.abspath(os.path.join(anchor, path))


def _match_entry(directory: str, segment: str) -> str | None:
    try:
        names = fs.list_entries(directory)
    except OSError as exc:
        logger.debug("Cannot list %s while resolving %r: %s", directory, segment, exc)
        return None

    folded = segment.casefold()
    for name in names:
        if name.casefold() == folded:
            return name
    return None


__all__ = ["PathDecodeError", "decode_path", "resolve_file", "resolve_path"]
