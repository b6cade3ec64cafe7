from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

from .errors import TruthError
from .exit_codes import ERR_USAGE

OutputFormat = Literal["markdown", "json", "html"]

OUTPUT_FORMATS: tuple[str, ...] = ("markdown", "json", "html")
DEFAULT_CONFIG_NAME = ".doctruth.yml"
DEFAULT_OUTPUT = "CURRENT_TRUTH.md"
DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class RunContext:
    run_id: str
    cwd: Path
    config_path: Path
    output: str | None
    output_format: OutputFormat
    timeout_seconds: float
    silent: bool
    verbose: bool
    fail_on_error: bool
    color: bool
    log_json: bool

    @classmethod
    def from_args(
        cls,
        config: str | None = None,
        output: str | None = None,
        output_format: str = "markdown",
        timeout_seconds: float | None = None,
        silent: bool = False,
        verbose: bool = False,
        fail_on_error: bool = False,
        color: bool = True,
        log_json: bool = False,
        run_id: str | None = None,
        cwd: Path | None = None,
    ) -> "RunContext":
        if output_format not in OUTPUT_FORMATS:
            raise TruthError(f"unknown output format `{output_format}`: expected one of {', '.join(OUTPUT_FORMATS)}", ERR_USAGE, kind="usage")
        timeout = DEFAULT_TIMEOUT_SECONDS if timeout_seconds is None else float(timeout_seconds)
        if timeout <= 0:
            raise TruthError(f"timeout must be positive, got {timeout_seconds}", ERR_USAGE, kind="usage")
        default_run = f"doctruth-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}"
        return cls(
            run_id=run_id or os.environ.get("DOCTRUTH_RUN_ID", default_run),
            cwd=(cwd or Path.cwd()).resolve(),
            config_path=Path(config or DEFAULT_CONFIG_NAME),
            output=output,
            output_format=output_format,  # type: ignore[arg-type]
            timeout_seconds=timeout,
            silent=silent,
            verbose=verbose,
            fail_on_error=fail_on_error,
            color=color and "NO_COLOR" not in os.environ,
            log_json=log_json,
        )

    def resolve(self, path: str | Path) -> Path:
        raw = Path(path)
        return raw if raw.is_absolute() else self.cwd / raw
