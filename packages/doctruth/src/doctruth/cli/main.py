from __future__ import annotations

import argparse
import sys
import traceback
from pathlib import Path

from .. import __version__
from ..change.detector import ChangeDetector, format_diff
from ..config.defaults import init_config
from ..core.context import DEFAULT_CONFIG_NAME, DEFAULT_TIMEOUT_SECONDS, RunContext
from ..core.errors import TruthError
from ..core.exit_codes import ERR_FAILED, OK
from ..reporting.render import FORMATS
from ..runner import TruthRunner
from ..watch import Watcher
from .output import check_summary, generation_summary, render_error


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="doctruth", description="Universal Documentation Truth System")
    p.add_argument("--version", action="version", version=f"doctruth {__version__}")
    p.add_argument("-c", "--config", default=DEFAULT_CONFIG_NAME, help="path to config file")
    p.add_argument("-o", "--output", help="output file path")
    p.add_argument("-f", "--format", choices=FORMATS, default="markdown", help="output format")
    p.add_argument("--cwd", help="run from an explicit project directory")
    mode = p.add_mutually_exclusive_group()
    mode.add_argument("--check", action="store_true", help="check if truth has changed (exit 1 if changed)")
    mode.add_argument("--watch", action="store_true", help="watch for changes and regenerate")
    mode.add_argument("--init", action="store_true", help="initialize a new .doctruth.yml config")
    p.add_argument("--preset", help="preset to use with --init")
    p.add_argument("--diff", action="store_true", help="show diff when checking changes")
    p.add_argument("--semantic", action="store_true", help="ignore generation timestamp and duration when checking")
    p.add_argument("--watch-interval", type=float, default=1.0, help="seconds between watch polls")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="verbose output")
    vg.add_argument("--silent", action="store_true", help="silent mode - no console output")
    p.add_argument("--no-color", dest="color", action="store_false", help="disable colored output")
    p.add_argument("--log-json", action="store_true", help="emit log events as JSON lines")
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_SECONDS, help="command timeout in seconds")
    p.add_argument("--fail-on-error", action="store_true", help="exit with error if any command fails")
    return p


def _emit(ctx: RunContext, lines: list[str] | str) -> None:
    if ctx.silent:
        return
    print("\n".join(lines) if isinstance(lines, list) else lines)


def _run_generate(runner: TruthRunner) -> int:
    result = runner.generate()
    _emit(runner.ctx, generation_summary(len(result.errors)))
    if runner.fail_on_error and result.errors:
        return ERR_FAILED
    return OK


def _run_check(runner: TruthRunner, show_diff: bool, semantic: bool) -> int:
    report = ChangeDetector(runner).check(semantic=semantic)
    if show_diff and report.diff:
        _emit(runner.ctx, format_diff(report.diff, runner.render_options))
    _emit(runner.ctx, check_summary(report.changed))
    return ERR_FAILED if report.changed else OK


def _run_watch(runner: TruthRunner, interval_seconds: float) -> int:
    try:
        Watcher(runner, interval_seconds=interval_seconds).run()
    except KeyboardInterrupt:
        _emit(runner.ctx, "Stopped watching")
    return OK


def main(argv: list[str] | None = None) -> int:
    ns = build_parser().parse_args(argv)
    try:
        ctx = RunContext.from_args(
            config=ns.config,
            output=ns.output,
            output_format=ns.format,
            timeout_seconds=ns.timeout,
            silent=ns.silent,
            verbose=ns.verbose,
            fail_on_error=ns.fail_on_error,
            color=ns.color,
            log_json=ns.log_json,
            cwd=Path(ns.cwd) if ns.cwd else None,
        )
        if ns.init:
            init_config(ctx, ns.preset)
            return OK
        runner = TruthRunner.from_context(ctx)
        if ns.check:
            return _run_check(runner, ns.diff, ns.semantic)
        if ns.watch:
            return _run_watch(runner, ns.watch_interval)
        return _run_generate(runner)
    except TruthError as exc:
        if not ns.silent:
            print(render_error(as_json=ns.log_json, message=str(exc), code=exc.code, kind=exc.kind), file=sys.stderr)
            if ns.verbose:
                traceback.print_exc(file=sys.stderr)
        return exc.code


def cli_entry() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    cli_entry()
