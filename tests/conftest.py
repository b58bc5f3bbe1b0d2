"""Test configuration for the mvix project."""

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from collections.abc import Callable

import pytest

# cSpell:ignore kaleid
ASSET_FILES = (
    "Fate/Zero",
    "Fate/stay night",
    "Fate/kaleid liner プリズマ☆イリヤ",
    "劇場版Fate/stay night [Heaven's Feel]",
    "劇場版Fate/stay night UNLIMITED BLADE WORKS",
)


# main.js as exported by RPG Maker MV, with LF line endings.
STOCK_MV_MAIN_JS = (
    "//=============================================================================\n"
    "// main.js\n"
    "//=============================================================================\n"
    "\n"
    "PluginManager.setup($plugins);\n"
    "\n"
    "window.onload = function() {\n"
    "    SceneManager.run(Scene_Boot);\n"
    "};\n"
)


@pytest.fixture()
def asset_root(tmp_path: Path) -> Path:
    """Return a directory populated with the sample asset files."""

    root = tmp_path / "assets"
    for relative in ASSET_FILES:
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(relative, encoding="utf-8")
    return root


@pytest.fixture()
def asset_path(asset_root: Path) -> Callable[[str], str]:
    """Return a helper building absolute path strings below ``asset_root``."""

    def _path(relative: str) -> str:
        return os.path.join(str(asset_root), relative)

    return _path


@pytest.fixture()
def case_sensitive_fs(tmp_path: Path) -> None:
    """Skip the requesting test on case-insensitive filesystems."""

    if os.path.exists(str(tmp_path).upper()):
        pytest.skip("filesystem is case-insensitive")


@pytest.fixture()
def game_root(tmp_path: Path) -> Path:
    """Return a minimal game folder as produced by the RPG Maker MV exporter."""

    root = tmp_path / "game"
    (root / "img" / "titles1").mkdir(parents=True)
    (root / "js").mkdir()
    (root / "data").mkdir()
    (root / "manual").mkdir()

    (root / "index.html").write_text("<html>game</html>", encoding="utf-8")
    (root / "img" / "titles1" / "Castle.png").write_bytes(b"castle-png")
    (root / "img" / "titles1" / "My Title.png").write_bytes(b"title-png")
    (root / "js" / "main.js").write_text("SceneManager.run(Scene_Boot);", encoding="utf-8")
    (root / "data" / "Map001.json").write_text('{"id": 1}', encoding="utf-8")
    (root / "manual" / "index.html").write_text("<html>manual</html>", encoding="utf-8")
    return root


__all__ = ["STOCK_MV_MAIN_JS", "asset_root", "asset_path", "case_sensitive_fs", "game_root"]
