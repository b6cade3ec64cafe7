"""Runtime primitives shared by every doctruth layer."""

from __future__ import annotations

from .context import RunContext
from .errors import TruthError

__all__ = ["RunContext", "TruthError"]
