"""Select replacement scripts for known versions of a game's source files.

Patches are stored as ``<stem>.<digest>.patch<suffix>`` where ``digest`` is
the first 8 hex digits of the SHA-256 of the original file they replace, e.g.
``main.dcab1427.patch.js`` replaces the ``main.js`` whose content hashes to
``dcab1427``.
"""

from __future__ import annotations

import hashlib
import logging
import re
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)

_PATCH_NAME = re.compile(
    r"^(?P<stem>.+)\.(?P<digest>[0-9a-f]{8})\.patch(?P<suffix>\.[^.]+)?$"
)

PatchKey = Tuple[str, str, str]


def content_digest(data: bytes) -> str:
    """Return the first eight hex digits of the SHA-256 of ``data``."""

    return hashlib.sha256(data).hexdigest()[:8]


def bundled_patch_directory() -> Traversable:
    """Return the directory holding the patches shipped with the package."""

    return resources.files(__package__).joinpath("patches")


class PatchRegistry:
    """Index of patch scripts keyed by file name and original content digest."""

    def __init__(self, directory: Traversable | Path | None = None) -> None:
        self._directory = directory if directory is not None else bundled_patch_directory()
        self._patches: Dict[PatchKey, Traversable | Path] = {}

        if not self._directory.is_dir():
            logger.warning("Patch directory %s does not exist", self._directory)
            return

        for entry in self._directory.iterdir():
            match = _PATCH_NAME.match(entry.name)
            if match is None or not entry.is_file():
                continue
            key = (match["stem"], match["digest"], match["suffix"] or "")
            self._patches[key] = entry

    def available(self) -> List[str]:
        """Return the sorted file names of every registered patch."""

        return sorted(entry.name for entry in self._patches.values())

    def patch_for(self, original: Path) -> bytes | None:
        """Return the patch replacing ``original`` or ``None`` if there is none.

        The original is hashed on every call so edits to the game files are
        picked up without restarting the server.
        """

        original_path = Path(original)
        try:
            digest = content_digest(original_path.read_bytes())
        except OSError as exc:
            logger.warning("Cannot read %s for patch selection: %s", original_path, exc)
            return None

        entry = self._patches.get((original_path.stem, digest, original_path.suffix))
        if entry is None:
            logger.info(
                "No patch registered for %s (digest %s); serving original",
                original_path.name,
                digest,
            )
            return None

        logger.debug("Serving patch %s for %s", entry.name, original_path)
        return entry.read_bytes()


__all__ = ["PatchRegistry", "bundled_patch_directory", "content_digest"]
