"""Assembly of command output into the result tree."""

from __future__ import annotations

from .assembler import TruthAssembler
from .model import ErrorRecord, ResultTree
from .validation import evaluate_validation

__all__ = ["ErrorRecord", "ResultTree", "TruthAssembler", "evaluate_validation"]
