from __future__ import annotations

from pathlib import Path

from ..core.context import RunContext
from ..core.fs import write_text_file
from ..core.logging import log_event


def save_report(ctx: RunContext, path: Path, content: str) -> Path:
    out = write_text_file(path, content)
    log_event(ctx, "info", "writer", "report-saved", path=str(path))
    log_event(ctx, "debug", "writer", "report-size", kb=f"{out.stat().st_size / 1024:.1f}")
    return out
