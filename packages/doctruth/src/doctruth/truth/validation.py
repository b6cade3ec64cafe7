from __future__ import annotations

import re
from typing import Any, Mapping

from ..config.schema import success_pattern
from ..execution.taxonomy import is_error

FAILURE_MARKERS: tuple[str, ...] = ("✗", "✘", "FAIL")
SUCCESS_MARKERS: tuple[str, ...] = ("✓", "✔", "PASS", "OK")


def evaluate_validation(output: str, validation: Mapping[str, Any] | None = None) -> bool:
    if any(marker in output for marker in FAILURE_MARKERS):
        return False
    if is_error(output):
        return False
    pattern = success_pattern(dict(validation or {}))
    if pattern:
        return re.search(pattern, output) is not None
    if any(marker in output for marker in SUCCESS_MARKERS):
        return True
    return len(output) > 0
