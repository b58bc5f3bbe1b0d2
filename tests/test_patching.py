from __future__ import annotations

import hashlib
from pathlib import Path

from mvix.patching import PatchRegistry, content_digest
from conftest import STOCK_MV_MAIN_JS


def test_content_digest_is_sha256_prefix() -> None:
    assert content_digest(b"") == "e3b0c442"
    assert content_digest(b"SceneManager") == hashlib.sha256(b"SceneManager").hexdigest()[:8]
    assert content_digest(STOCK_MV_MAIN_JS.encode("utf-8")) == "dcab1427"
    assert len(content_digest(b"x" * 1024)) == 8


def test_bundled_registry_ships_storage_proxy_patch() -> None:
    registry = PatchRegistry()

    assert "main.dcab1427.patch.js" in registry.available()


def test_patch_for_matches_name_and_digest(tmp_path: Path) -> None:
    original = tmp_path / "js" / "main.js"
    original.parent.mkdir()
    original.write_bytes(b"PluginManager.setup($plugins);")
    digest = content_digest(original.read_bytes())

    patches = tmp_path / "patches"
    patches.mkdir()
    (patches / f"main.{digest}.patch.js").write_bytes(b"// patched")
    (patches / "main.00000000.patch.js").write_bytes(b"// other version")
    (patches / "README.txt").write_text("not a patch", encoding="utf-8")

    registry = PatchRegistry(patches)

    assert registry.available() == [
        "main.00000000.patch.js",
        f"main.{digest}.patch.js",
    ]
    assert registry.patch_for(original) == b"// patched"


def test_patch_for_returns_none_for_unknown_versions(tmp_path: Path) -> None:
    original = tmp_path / "main.js"
    original.write_bytes(b"an unreleased build")
    patches = tmp_path / "patches"
    patches.mkdir()
    (patches / "main.00000000.patch.js").write_bytes(b"// other version")

    registry = PatchRegistry(patches)

    assert registry.patch_for(original) is None
    assert registry.patch_for(tmp_path / "missing.js") is None


def test_patch_for_requires_matching_file_name(tmp_path: Path) -> None:
    original = tmp_path / "rpg_core.js"
    original.write_bytes(b"core")
    patches = tmp_path / "patches"
    patches.mkdir()
    (patches / f"main.{content_digest(b'core')}.patch.js").write_bytes(b"// main")

    assert PatchRegistry(patches).patch_for(original) is None


def test_missing_patch_directory_yields_empty_registry(tmp_path: Path) -> None:
    registry = PatchRegistry(tmp_path / "absent")

    assert registry.available() == []
    original = tmp_path / "main.js"
    original.write_bytes(b"")
    assert registry.patch_for(original) is None


def test_bundled_patch_matches_stock_mv_main_script(tmp_path: Path) -> None:
    original = tmp_path / "main.js"
    original.write_bytes(STOCK_MV_MAIN_JS.encode("utf-8"))

    patch = PatchRegistry().patch_for(original)

    assert patch is not None
    assert b"localStorageProxy" in patch
