"""Memoisation of successful file resolutions."""

from __future__ import annotations

from typing import Callable, Dict, MutableMapping, Optional

from .resolver import resolve_file

FileResolver = Callable[[str], Optional[str]]


class PathLookupCache:
    """Remember which file each requested path string resolved to.

    Entries are keyed by the raw request string exactly as received, so two
    spellings of the same file occupy separate entries. Only file hits are
    stored; misses are resolved again on every lookup. Entries are never
    evicted, which assumes the served tree keeps its casing while the process
    runs.

    Concurrent misses on the same key may both walk the filesystem and both
    store the (identical) result; no locking is performed.
    """

    def __init__(
        self,
        store: MutableMapping[str, str] | None = None,
        *,
        resolver: FileResolver = resolve_file,
    ) -> None:
        self._store: MutableMapping[str, str] = store if store is not None else {}
        self._resolver = resolver

    def lookup(self, target_path: str) -> str | None:
        """Return the canonical file for ``target_path`` or ``None``."""

        cached = self._store.get(target_path)
        if cached is not None:
            return cached

        found = self._resolver(target_path)
        if found is not None:
            self._store[target_path] = found
        return found

    def snapshot(self) -> Dict[str, str]:
        """Return a copy of the cached entries."""

        return dict(self._store)

    def __contains__(self, target_path: object) -> bool:
        return target_path in self._store

    def __len__(self) -> int:
        return len(self._store)


__all__ = ["FileResolver", "PathLookupCache"]
