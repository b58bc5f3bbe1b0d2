"""Serve browser games from disk regardless of how their asset paths are cased."""

from .cache import PathLookupCache
from .fs import is_existing, is_existing_dir, is_existing_file, list_entries
from .patching import PatchRegistry, content_digest
from .resolver import PathDecodeError, decode_path, resolve_file, resolve_path
from .saves import SaveDataStore

__all__ = [
    "PathLookupCache",
    "PathDecodeError",
    "decode_path",
    "resolve_path",
    "resolve_file",
    "is_existing",
    "is_existing_dir",
    "is_existing_file",
    "list_entries",
    "PatchRegistry",
    "content_digest",
    "SaveDataStore",
]
