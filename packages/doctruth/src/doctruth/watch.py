from __future__ import annotations

import time
from pathlib import Path
from typing import Callable

from .core.errors import TruthError
from .core.logging import log_event
from .runner import TruthRunner

DEFAULT_WATCH_PATHS: tuple[str, ...] = ("lib", "src", "bin", "test", "tests", "package.json", "pyproject.toml")
IGNORED_PARTS = frozenset({"node_modules", ".git", ".doctruth", "__pycache__", ".venv"})
IGNORED_NAME_PREFIXES: tuple[str, ...] = ("CURRENT_TRUTH",)

Snapshot = dict[Path, tuple[int, int]]


def watch_targets(runner: TruthRunner) -> list[Path]:
    names = [*DEFAULT_WATCH_PATHS, str(runner.ctx.config_path), *runner.config.watch_paths]
    out: list[Path] = []
    for name in names:
        path = runner.ctx.resolve(name)
        if path.exists() and path not in out:
            out.append(path)
    return out


def _ignored(path: Path, output: Path) -> bool:
    if path == output:
        return True
    if any(part in IGNORED_PARTS for part in path.parts):
        return True
    return path.name.startswith(IGNORED_NAME_PREFIXES)


def snapshot(targets: list[Path], output: Path) -> Snapshot:
    state: Snapshot = {}
    for target in targets:
        candidates = [target] if target.is_file() else sorted(target.rglob("*")) if target.is_dir() else []
        for path in candidates:
            if not path.is_file() or _ignored(path, output):
                continue
            try:
                stat = path.stat()
            except OSError:
                continue
            state[path] = (stat.st_mtime_ns, stat.st_size)
    return state


def detect_changes(before: Snapshot, after: Snapshot) -> list[tuple[str, Path]]:
    events: list[tuple[str, Path]] = []
    for path in sorted(after):
        if path not in before:
            events.append(("add", path))
        elif before[path] != after[path]:
            events.append(("change", path))
    for path in sorted(before):
        if path not in after:
            events.append(("unlink", path))
    return events


class Watcher:
    """Polling watcher: regenerate once per poll cycle that saw at least one change."""

    def __init__(self, runner: TruthRunner, interval_seconds: float = 1.0, sleep: Callable[[float], None] = time.sleep) -> None:
        self.runner = runner
        self.interval_seconds = interval_seconds
        self.sleep = sleep

    def _regenerate(self) -> None:
        try:
            self.runner.generate()
        except TruthError as exc:
            log_event(self.runner.ctx, "error", "watch", "generate-failed", kind=exc.kind, message=str(exc))

    def run(self, max_cycles: int | None = None) -> int:
        ctx = self.runner.ctx
        log_event(ctx, "info", "watch", "start", interval_seconds=self.interval_seconds)
        self._regenerate()
        output = self.runner.output_path
        state = snapshot(watch_targets(self.runner), output)
        regenerations = 0
        cycles = 0
        while max_cycles is None or cycles < max_cycles:
            self.sleep(self.interval_seconds)
            cycles += 1
            current = snapshot(watch_targets(self.runner), output)
            events = detect_changes(state, current)
            state = current
            if not events:
                continue
            for event, path in events:
                log_event(ctx, "info", "watch", "change-detected", event=event, path=str(path))
            self._regenerate()
            regenerations += 1
        return regenerations
