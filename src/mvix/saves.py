"""Persistence for the browser save data mirrored by the patched client."""

from __future__ import annotations

from pathlib import Path


class SaveDataStore:
    """Store the serialised ``localStorage`` snapshot as a single JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def save(self, content: str) -> None:
        """Overwrite the stored snapshot; empty payloads are ignored."""

        if not content:
            return
        self.path.write_text(content, encoding="utf-8")

    def load(self) -> str | None:
        """Return the stored snapshot or ``None`` if nothing was saved yet."""

        if not self.path.is_file():
            return None
        return self.path.read_text(encoding="utf-8")


__all__ = ["SaveDataStore"]
