from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..core.context import DEFAULT_OUTPUT, RunContext
from ..core.errors import KIND_CONFIG_NOT_FOUND, KIND_CONFIG_PARSE_ERROR, TruthError
from ..core.exit_codes import ERR_CONFIG
from ..core.logging import log_event
from .merge import merge_configs
from .model import TruthConfig
from .presets import find_preset, preset_search_path
from .schema import validate_config


def load_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle)
    except (yaml.YAMLError, UnicodeDecodeError, OSError) as exc:
        raise TruthError(f"failed to parse {path}: {exc}", ERR_CONFIG, kind=KIND_CONFIG_PARSE_ERROR) from exc


def load_document(path: Path) -> dict[str, Any]:
    data = load_yaml(path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TruthError(f"failed to parse {path}: root must be a mapping", ERR_CONFIG, kind=KIND_CONFIG_PARSE_ERROR)
    return data


def resolve_presets(ctx: RunContext, document: dict[str, Any]) -> dict[str, Any]:
    name = document.get("extends")
    base: dict[str, Any] = {}
    if name:
        preset_path = find_preset(str(name), ctx.cwd)
        if preset_path is None:
            searched = ",".join(str(p) for p in preset_search_path(ctx.cwd))
            log_event(ctx, "warning", "config", "preset-missing", preset=name, searched=searched)
        else:
            base = load_document(preset_path)
            base.pop("extends", None)
            log_event(ctx, "debug", "config", "preset-extended", preset=name, path=str(preset_path))
    return merge_configs(base, document)


def load_config(ctx: RunContext) -> TruthConfig:
    path = ctx.resolve(ctx.config_path)
    if not path.is_file():
        raise TruthError(f"Configuration file not found: {ctx.config_path}", ERR_CONFIG, kind=KIND_CONFIG_NOT_FOUND)
    config = resolve_presets(ctx, load_document(path))
    if ctx.output:
        config["output"] = ctx.output
    validate_config(config, path)
    log_event(ctx, "info", "config", "loaded", path=str(ctx.config_path))
    return TruthConfig.build(path, config)


def resolve_output_path(ctx: RunContext, config: TruthConfig) -> Path:
    return ctx.resolve(config.output or ctx.output or DEFAULT_OUTPUT)
