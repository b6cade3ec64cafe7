from __future__ import annotations

import re

SENTINEL_PREFIXES: tuple[str, ...] = ("[ERROR", "[TIMEOUT", "[KILLED", "[EXIT CODE", "[STDERR")
ENVIRONMENT_FAILURE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"command not found", re.IGNORECASE),
    re.compile(r"no such file", re.IGNORECASE),
    re.compile(r"permission denied", re.IGNORECASE),
    re.compile(r"cannot find", re.IGNORECASE),
    re.compile(r"fatal:", re.IGNORECASE),
)


def is_sentinel(output: str) -> bool:
    return output.startswith(SENTINEL_PREFIXES)


def is_error(output: str | None) -> bool:
    """Classify captured output as a failure by content, never by exit code."""
    if not output:
        return False
    if is_sentinel(output):
        return True
    return any(pattern.search(output) for pattern in ENVIRONMENT_FAILURE_PATTERNS)
