from __future__ import annotations

from .executor import CommandExecutor, classify
from .taxonomy import is_error

__all__ = ["CommandExecutor", "classify", "is_error"]
