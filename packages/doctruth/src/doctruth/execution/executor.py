from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.context import RunContext
from ..core.errors import (
    KIND_COMMAND_INVOCATION_ERROR,
    KIND_COMMAND_KILLED,
    KIND_COMMAND_NONZERO_EXIT,
    KIND_COMMAND_TIMEOUT,
    TruthError,
)
from ..core.exit_codes import ERR_COMMAND
from ..core.logging import log_event
from ..core.process import MAX_BUFFER_BYTES, CommandResult, run_shell


@dataclass(frozen=True)
class Outcome:
    text: str
    kind: str | None = None

    @property
    def failed(self) -> bool:
        return self.kind is not None


def format_seconds(value: float) -> str:
    return f"{value:g}"


def classify(result: CommandResult, timeout_seconds: float) -> Outcome:
    """Map a finished process onto captured text, first matching rule wins."""
    if result.timed_out:
        return Outcome(f"[TIMEOUT: Command exceeded {format_seconds(timeout_seconds)}s]", KIND_COMMAND_TIMEOUT)
    if result.signal_name is not None:
        return Outcome(f"[KILLED: Signal {result.signal_name}]", KIND_COMMAND_KILLED)
    if result.error is not None:
        return Outcome(f"[ERROR: {result.error}]", KIND_COMMAND_INVOCATION_ERROR)
    if result.ok:
        return Outcome(result.stdout.strip())
    stdout = result.stdout.strip()
    if stdout:
        return Outcome(stdout, KIND_COMMAND_NONZERO_EXIT)
    stderr = " | ".join(line.strip() for line in result.stderr.strip().splitlines() if line.strip())
    if stderr:
        return Outcome(f"[STDERR: {stderr}]", KIND_COMMAND_NONZERO_EXIT)
    return Outcome(f"[EXIT CODE: {result.code}]", KIND_COMMAND_NONZERO_EXIT)


class CommandExecutor:
    def __init__(self, ctx: RunContext, fail_fast: bool | None = None, max_buffer_bytes: int = MAX_BUFFER_BYTES) -> None:
        self.ctx = ctx
        self.fail_fast = ctx.fail_on_error if fail_fast is None else fail_fast
        self.max_buffer_bytes = max_buffer_bytes

    def run(self, command: str, timeout_seconds: float | None = None) -> str:
        timeout = float(timeout_seconds) if timeout_seconds else self.ctx.timeout_seconds
        log_event(self.ctx, "debug", "executor", "run-command", command=command, timeout_seconds=format_seconds(timeout))
        result = run_shell(command, timeout, cwd=self.ctx.cwd, max_buffer_bytes=self.max_buffer_bytes)
        outcome = classify(result, timeout)
        if outcome.failed:
            log_event(
                self.ctx,
                "debug",
                "executor",
                "command-failed",
                command=command,
                kind=outcome.kind,
                code=result.code,
                duration_ms=result.duration_ms,
            )
            if self.fail_fast:
                raise TruthError(f"Command failed: {command}\n{outcome.text}", ERR_COMMAND, kind=str(outcome.kind))
        return outcome.text
