from __future__ import annotations

import os
import shutil
import signal
import subprocess
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import IO

MAX_BUFFER_BYTES = 10 * 1024 * 1024
NO_COLOR_ENV = {"NO_COLOR": "1", "FORCE_COLOR": "0", "CLICOLOR": "0"}
READ_CHUNK_BYTES = 64 * 1024
POLL_SECONDS = 0.05
KILL_GRACE_SECONDS = 0.5


@dataclass(frozen=True)
class CommandResult:
    code: int | None
    stdout: str
    stderr: str
    duration_ms: int
    timed_out: bool = False
    signal_name: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.code == 0 and not self.timed_out and self.signal_name is None and self.error is None


def posix_shell() -> str:
    for candidate in ("/bin/bash", "/bin/sh"):
        if Path(candidate).exists():
            return candidate
    return shutil.which("bash") or shutil.which("sh") or "/bin/sh"


def command_env(base: dict[str, str] | None = None) -> dict[str, str]:
    env = dict(os.environ if base is None else base)
    env.update(NO_COLOR_ENV)
    return env


def _kill_tree(proc: subprocess.Popen[bytes]) -> None:
    if os.name == "nt":
        proc.kill()
        return
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass


def _signal_name(code: int) -> str:
    try:
        return signal.Signals(-code).name
    except ValueError:
        return str(-code)


class _OutputCollector:
    """Drains stdout and stderr on reader threads, capped at ``max_bytes`` combined."""

    def __init__(self, max_bytes: int) -> None:
        self.max_bytes = max_bytes
        self.total = 0
        self.buffers: dict[str, bytearray] = {"stdout": bytearray(), "stderr": bytearray()}
        self.overflow = threading.Event()
        self._lock = threading.Lock()
        self._threads: list[threading.Thread] = []

    def start(self, proc: subprocess.Popen[bytes]) -> None:
        for name, pipe in (("stdout", proc.stdout), ("stderr", proc.stderr)):
            thread = threading.Thread(target=self._drain, args=(name, pipe), daemon=True)
            thread.start()
            self._threads.append(thread)

    def _drain(self, name: str, pipe: IO[bytes]) -> None:
        with pipe:
            while True:
                chunk = pipe.read1(READ_CHUNK_BYTES)  # type: ignore[attr-defined]
                if not chunk:
                    return
                with self._lock:
                    room = max(self.max_bytes - self.total, 0)
                    self.buffers[name] += chunk[:room]
                    self.total += len(chunk)
                    if self.total > self.max_bytes:
                        self.overflow.set()
                        return

    def join(self, deadline: float) -> bool:
        for thread in self._threads:
            thread.join(max(deadline - time.monotonic(), 0))
        return not any(thread.is_alive() for thread in self._threads)

    def text(self, name: str) -> str:
        with self._lock:
            data = bytes(self.buffers[name])
        return data.decode("utf-8", errors="replace").replace("\r\n", "\n")


def _wait_for_exit(proc: subprocess.Popen[bytes], collector: _OutputCollector, deadline: float) -> bool:
    """Block until the process exits or output overflows; True means the deadline passed first."""
    while proc.poll() is None:
        if collector.overflow.is_set():
            return False
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return True
        collector.overflow.wait(min(remaining, POLL_SECONDS))
    return False


def run_shell(
    command: str,
    timeout_seconds: float,
    cwd: Path | None = None,
    env: dict[str, str] | None = None,
    max_buffer_bytes: int = MAX_BUFFER_BYTES,
) -> CommandResult:
    """Run an opaque shell command line under a hard wall-clock deadline.

    The command string is handed to the platform shell verbatim. Nothing here parses or
    sanitizes it; callers own the trust decision. Output is read incrementally and the
    process tree is killed as soon as the combined output passes ``max_buffer_bytes``.
    Descendants that escaped the process group and still hold the pipes are abandoned
    after a short grace period; the deadline never waits for them.
    """
    started = time.monotonic()
    deadline = started + timeout_seconds
    popen_kwargs: dict[str, object] = {
        "cwd": cwd,
        "env": command_env(env),
        "stdout": subprocess.PIPE,
        "stderr": subprocess.PIPE,
        "stdin": subprocess.DEVNULL,
    }
    try:
        if os.name == "nt":
            proc = subprocess.Popen(command, shell=True, creationflags=getattr(subprocess, "CREATE_NO_WINDOW", 0), **popen_kwargs)  # type: ignore[call-overload]
        else:
            proc = subprocess.Popen([posix_shell(), "-c", command], start_new_session=True, **popen_kwargs)  # type: ignore[call-overload]
    except OSError as exc:
        return CommandResult(None, "", "", int((time.monotonic() - started) * 1000), error=str(exc))

    collector = _OutputCollector(max_buffer_bytes)
    collector.start(proc)
    timed_out = _wait_for_exit(proc, collector, deadline)
    if timed_out or collector.overflow.is_set():
        _kill_tree(proc)
        proc.wait()
        collector.join(time.monotonic() + KILL_GRACE_SECONDS)
    elif not collector.join(deadline):
        # the shell exited but a background child still holds the pipes open
        timed_out = True
        _kill_tree(proc)
        collector.join(time.monotonic() + KILL_GRACE_SECONDS)
    duration_ms = int((time.monotonic() - started) * 1000)
    stdout = collector.text("stdout")
    stderr = collector.text("stderr")

    if timed_out:
        return CommandResult(proc.returncode, stdout, stderr, duration_ms, timed_out=True)
    if collector.overflow.is_set():
        return CommandResult(proc.returncode, "", "", duration_ms, error=f"output exceeded {max_buffer_bytes} bytes")
    if proc.returncode is not None and proc.returncode < 0:
        return CommandResult(proc.returncode, stdout, stderr, duration_ms, signal_name=_signal_name(proc.returncode))
    return CommandResult(proc.returncode, stdout, stderr, duration_ms)
