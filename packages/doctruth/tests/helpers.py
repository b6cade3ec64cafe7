from __future__ import annotations

import sys
from pathlib import Path

import pytest

from doctruth.config.model import TruthConfig
from doctruth.core.clock import format_duration
from doctruth.truth.model import ResultTree, TruthMeta

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="uses POSIX shell commands")

FIXED_TS = "2026-01-02T03:04:05.000Z"


def make_config(payload: dict[str, object], path: Path | None = None) -> TruthConfig:
    return TruthConfig.build(path or Path(".doctruth.yml"), dict(payload))


def make_meta(project: str = "Test", generated: str = FIXED_TS, seconds: float = 1.0) -> TruthMeta:
    return TruthMeta(project=project, generated=generated, version=1, generation_time=format_duration(seconds))


def make_tree(**sections: object) -> ResultTree:
    meta = sections.pop("meta", None) or make_meta()
    return ResultTree(meta=meta, **sections)  # type: ignore[arg-type]


class FakeExecutor:
    """Executor double returning canned outputs keyed by command."""

    def __init__(self, outputs: dict[str, str] | None = None, default: str = "") -> None:
        self.outputs = outputs or {}
        self.default = default
        self.calls: list[tuple[str, float | None]] = []

    def run(self, command: str, timeout_seconds: float | None = None) -> str:
        self.calls.append((command, timeout_seconds))
        return self.outputs.get(command, self.default)


def fixed_timer(values: list[float]):
    it = iter(values)
    return lambda: next(it)
