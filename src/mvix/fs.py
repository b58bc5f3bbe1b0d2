"""Non-throwing filesystem probes used by the path resolver."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

PathLike = str | os.PathLike[str]


def is_existing_file(path: PathLike) -> bool:
    """Return ``True`` when ``path`` is a regular file (symlinks followed)."""

    try:
        return Path(path).is_file()
    except (OSError, ValueError):
        return False


def is_existing_dir(path: PathLike) -> bool:
    """Return ``True`` when ``path`` is a directory (symlinks followed)."""

    try:
        return Path(path).is_dir()
    except (OSError, ValueError):
        return False


def is_existing(path: PathLike) -> bool:
    """Return ``True`` when ``path`` names either a file or a directory.

    Any error raised while probing, including permission failures and paths
    containing NUL characters, is reported as ``False``.
    """

    return is_existing_file(path) or is_existing_dir(path)


def list_entries(path: PathLike) -> List[str]:
    """Return the names of the immediate entries of the directory ``path``.

    Entries are returned in the order the operating system reports them.

    Raises:
        OSError: If the directory cannot be listed.
    """

    with os.scandir(path) as iterator:
        return [entry.name for entry in iterator]


__all__ = ["is_existing", "is_existing_dir", "is_existing_file", "list_entries"]
