from __future__ import annotations

from pathlib import Path

from .errors import KIND_OUTPUT_WRITE_FAILURE, TruthError
from .exit_codes import ERR_ARTIFACT


def write_text_file(path: Path, content: str, *, encoding: str = "utf-8") -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding=encoding)
    except OSError as exc:
        raise TruthError(f"failed to write report {path}: {exc}", ERR_ARTIFACT, kind=KIND_OUTPUT_WRITE_FAILURE) from exc
    return path


def read_bytes_if_exists(path: Path) -> bytes | None:
    if not path.is_file():
        return None
    return path.read_bytes()
