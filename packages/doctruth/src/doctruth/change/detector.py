from __future__ import annotations

import json
import re
from dataclasses import dataclass, field

from ..core.fs import read_bytes_if_exists
from ..core.logging import log_event
from ..reporting.render import RenderOptions
from ..runner import TruthRunner

TITLE_LINE = re.compile(r"^(?:# |<h1>)")
VOLATILE_LINE = re.compile(r"^(?:<p>)?(?:Generated|Generation Time): .*$")
VOLATILE_META_KEYS = ("generated", "generation_time")
ANSI_RED = "\033[31m"
ANSI_GREEN = "\033[32m"
ANSI_RESET = "\033[0m"


@dataclass(frozen=True)
class DiffLine:
    index: int
    marker: str
    text: str


@dataclass(frozen=True)
class ChangeReport:
    changed: bool
    first_run: bool = False
    diff: tuple[DiffLine, ...] = field(default_factory=tuple)


def positional_diff(old: str, new: str) -> tuple[DiffLine, ...]:
    """Compare line ``i`` of ``old`` with line ``i`` of ``new``; no alignment search."""
    old_lines = old.split("\n")
    new_lines = new.split("\n")
    rows: list[DiffLine] = []
    for idx in range(max(len(old_lines), len(new_lines))):
        before = old_lines[idx] if idx < len(old_lines) else None
        after = new_lines[idx] if idx < len(new_lines) else None
        if before == after:
            continue
        if before is not None:
            rows.append(DiffLine(idx, "-", before))
        if after is not None:
            rows.append(DiffLine(idx, "+", after))
    return tuple(rows)


def format_diff(lines: tuple[DiffLine, ...], options: RenderOptions) -> str:
    out = ["", "Differences found:", "==================", ""]
    for line in lines:
        text = f"{line.marker} {line.text}"
        if options.color:
            text = f"{ANSI_RED if line.marker == '-' else ANSI_GREEN}{text}{ANSI_RESET}"
        out.append(text)
    return "\n".join(out)


def _strip_header_stamps(content: str) -> str:
    """Drop the timestamp and duration lines directly under the report title only."""
    lines = content.split("\n")
    for idx, line in enumerate(lines):
        if TITLE_LINE.match(line):
            stamps = [row for row in lines[idx + 1 : idx + 3] if not VOLATILE_LINE.match(row)]
            return "\n".join([*lines[: idx + 1], *stamps, *lines[idx + 3 :]])
    return content


def strip_volatile(content: str) -> str:
    try:
        payload = json.loads(content)
    except ValueError:
        return _strip_header_stamps(content)
    if isinstance(payload, dict) and isinstance(payload.get("meta"), dict):
        for key in VOLATILE_META_KEYS:
            payload["meta"].pop(key, None)
    return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)


class ChangeDetector:
    def __init__(self, runner: TruthRunner) -> None:
        self.runner = runner

    def check(self, semantic: bool = False) -> ChangeReport:
        ctx = self.runner.ctx
        path = self.runner.output_path
        previous = read_bytes_if_exists(path)
        if previous is None:
            log_event(ctx, "warning", "change", "no-previous-truth", path=str(path))
            return ChangeReport(changed=True, first_run=True)
        self.runner.generate()
        current = path.read_bytes()
        old_text = previous.decode("utf-8", errors="replace")
        new_text = current.decode("utf-8", errors="replace")
        if semantic:
            changed = strip_volatile(old_text) != strip_volatile(new_text)
        else:
            changed = previous != current
        log_event(ctx, "info", "change", "compared", changed=changed, semantic=semantic)
        if not changed:
            return ChangeReport(changed=False)
        return ChangeReport(changed=True, diff=positional_diff(old_text, new_text))
