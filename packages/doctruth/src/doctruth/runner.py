from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config.loader import load_config, resolve_output_path
from .config.model import TruthConfig
from .core.context import RunContext
from .core.logging import log_event
from .reporting.render import RenderOptions, render
from .reporting.writer import save_report
from .truth.assembler import TruthAssembler
from .truth.model import ErrorRecord, ResultTree


@dataclass(frozen=True)
class Generation:
    tree: ResultTree
    errors: tuple[ErrorRecord, ...]
    path: Path
    content: str


class TruthRunner:
    """Entry point shared by the CLI, the change detector and the watcher.

    ``generate`` holds no state between calls, so it can be invoked repeatedly.
    """

    def __init__(self, ctx: RunContext, config: TruthConfig, assembler: TruthAssembler | None = None) -> None:
        self.ctx = ctx
        self.config = config
        self.assembler = assembler or TruthAssembler(ctx)

    @classmethod
    def from_context(cls, ctx: RunContext) -> "TruthRunner":
        return cls(ctx, load_config(ctx))

    @property
    def output_path(self) -> Path:
        return resolve_output_path(self.ctx, self.config)

    @property
    def render_options(self) -> RenderOptions:
        return RenderOptions(config_path=str(self.ctx.config_path), color=self.ctx.color)

    @property
    def fail_on_error(self) -> bool:
        return self.ctx.fail_on_error or self.config.fail_on_error

    def generate(self) -> Generation:
        tree, errors = self.assembler.generate(self.config)
        content = render(tree, errors, self.ctx.output_format, self.render_options)
        path = save_report(self.ctx, self.output_path, content)
        log_event(
            self.ctx,
            "info",
            "runner",
            "generated",
            errors=len(errors),
            duration=tree.meta.generation_time,
            format=self.ctx.output_format,
        )
        return Generation(tree=tree, errors=errors, path=path, content=content)
