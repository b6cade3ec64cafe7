from __future__ import annotations

from dataclasses import dataclass

from ..core.context import DEFAULT_CONFIG_NAME
from ..truth.model import ErrorRecord, ResultTree
from .html import render_html
from .markdown import render_markdown, title_for
from .structured import render_json

FORMATS: tuple[str, ...] = ("markdown", "json", "html")


@dataclass(frozen=True)
class RenderOptions:
    config_path: str = DEFAULT_CONFIG_NAME
    color: bool = False


def render(
    tree: ResultTree,
    errors: tuple[ErrorRecord, ...] | list[ErrorRecord],
    fmt: str = "markdown",
    options: RenderOptions | None = None,
) -> str:
    if fmt not in FORMATS:
        raise ValueError(f"unknown report format `{fmt}`: expected one of {', '.join(FORMATS)}")
    opts = options or RenderOptions()
    rows = tuple(errors)
    if fmt == "json":
        return render_json(tree, rows)
    markdown = render_markdown(tree, rows, opts.config_path)
    if fmt == "html":
        return render_html(markdown, title_for(tree.meta))
    return markdown
