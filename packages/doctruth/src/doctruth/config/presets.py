from __future__ import annotations

from pathlib import Path

BUNDLED_PRESETS_DIR = Path(__file__).resolve().parents[1] / "presets"
LOCAL_PRESETS_DIR = Path(".doctruth") / "presets"
PRESET_SUFFIXES = (".yml", ".yaml")


def preset_search_path(cwd: Path) -> list[Path]:
    return [BUNDLED_PRESETS_DIR, cwd / LOCAL_PRESETS_DIR]


def find_preset(name: str, cwd: Path) -> Path | None:
    if not name or "/" in name or "\\" in name or name.startswith("."):
        return None
    for root in preset_search_path(cwd):
        for suffix in PRESET_SUFFIXES:
            candidate = root / f"{name}{suffix}"
            if candidate.is_file():
                return candidate
    return None


def list_presets(cwd: Path) -> list[str]:
    names: set[str] = set()
    for root in preset_search_path(cwd):
        if not root.is_dir():
            continue
        for path in root.iterdir():
            if path.is_file() and path.suffix in PRESET_SUFFIXES:
                names.add(path.stem)
    return sorted(names)
