from __future__ import annotations

import json
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema

from ..core.errors import KIND_CONFIG_PARSE_ERROR, TruthError
from ..core.exit_codes import ERR_CONFIG

CONFIG_SCHEMA_PATH = Path(__file__).resolve().parents[1] / "schemas" / "config.schema.json"
DIRECTIVE_KEYS = ("truth_sources", "validations", "working_examples", "benchmarks", "platform")


@lru_cache(maxsize=1)
def load_config_schema() -> dict[str, Any]:
    return json.loads(CONFIG_SCHEMA_PATH.read_text(encoding="utf-8"))


def success_pattern(directive: dict[str, Any]) -> str | None:
    return directive.get("successPattern") or directive.get("success_pattern")


def validate_config(config: dict[str, Any], source: Path) -> None:
    try:
        jsonschema.validate(config, load_config_schema())
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        raise TruthError(f"invalid config {source} at {loc}: {exc.message}", ERR_CONFIG, kind=KIND_CONFIG_PARSE_ERROR) from exc
    for idx, directive in enumerate(config.get("validations") or []):
        pattern = success_pattern(directive)
        if pattern is None:
            continue
        try:
            re.compile(pattern)
        except re.error as exc:
            raise TruthError(
                f"invalid config {source} at validations/{idx}/successPattern: {exc}",
                ERR_CONFIG,
                kind=KIND_CONFIG_PARSE_ERROR,
            ) from exc
