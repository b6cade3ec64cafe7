from __future__ import annotations

from .detector import ChangeDetector, ChangeReport, DiffLine, format_diff, positional_diff

__all__ = ["ChangeDetector", "ChangeReport", "DiffLine", "format_diff", "positional_diff"]
