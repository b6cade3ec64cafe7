from __future__ import annotations

import time
from typing import Callable

from ..config.model import TruthConfig
from ..core.clock import format_duration, utc_now_iso
from ..core.context import RunContext
from ..core.logging import log_event
from ..execution.executor import CommandExecutor
from .model import ErrorRecord, ResultTree, TruthMeta
from .sections import SECTIONS, SectionRun


class TruthAssembler:
    def __init__(
        self,
        ctx: RunContext,
        executor: CommandExecutor | None = None,
        clock: Callable[[], str] = utc_now_iso,
        timer: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.ctx = ctx
        self.executor = executor
        self.clock = clock
        self.timer = timer

    def _executor_for(self, config: TruthConfig) -> CommandExecutor:
        if self.executor is not None:
            return self.executor
        return CommandExecutor(self.ctx, fail_fast=self.ctx.fail_on_error or config.fail_on_error)

    def generate(self, config: TruthConfig) -> tuple[ResultTree, tuple[ErrorRecord, ...]]:
        started = self.timer()
        generated = self.clock()
        run = SectionRun(config=config, executor=self._executor_for(config))
        sections: dict[str, tuple[object, ...]] = {}
        for spec in SECTIONS:
            if not config.has_section(spec.key):
                continue
            log_event(self.ctx, "info", "assembler", spec.label, count=len(config.directives(spec.key)))
            rows = []
            for directive in config.directives(spec.key):
                log_event(self.ctx, "debug", "assembler", "directive", section=spec.field, name=directive.get("name"))
                rows.append(spec.handler(run, directive))
            sections[spec.field] = tuple(rows)
        meta = TruthMeta(
            project=str(config.project or self.ctx.cwd.name),
            generated=generated,
            version=config.version,
            generation_time=format_duration(self.timer() - started),
        )
        tree = ResultTree(meta=meta, **sections)  # type: ignore[arg-type]
        return tree, tuple(run.errors)
