from __future__ import annotations

from typing import Any, Mapping

REPLACE_SENTINEL = "!replace"


def merge_configs(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge ``override`` on top of ``base``.

    Scalars in ``override`` win, lists concatenate (base first) unless the override list
    starts with ``!replace``, mappings merge recursively and ``None`` means "keep base".
    Neither argument is mutated.
    """
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if value is None:
            continue
        if isinstance(value, list):
            if value and value[0] == REPLACE_SENTINEL:
                merged[key] = list(value[1:])
            else:
                prior = base.get(key)
                merged[key] = [*(prior if isinstance(prior, list) else []), *value]
        elif isinstance(value, Mapping):
            prior = base.get(key)
            merged[key] = merge_configs(prior if isinstance(prior, Mapping) else {}, value)
        else:
            merged[key] = value
    return merged
