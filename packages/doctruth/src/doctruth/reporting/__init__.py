"""Report rendering (markdown, json, html) and persistence."""

from __future__ import annotations

from .render import FORMATS, RenderOptions, render
from .writer import save_report

__all__ = ["FORMATS", "RenderOptions", "render", "save_report"]
