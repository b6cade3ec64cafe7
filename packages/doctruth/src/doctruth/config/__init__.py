"""Configuration loading, preset inheritance and validation."""

from __future__ import annotations

from .loader import load_config, resolve_output_path
from .merge import REPLACE_SENTINEL, merge_configs
from .model import TruthConfig

__all__ = ["REPLACE_SENTINEL", "TruthConfig", "load_config", "merge_configs", "resolve_output_path"]
