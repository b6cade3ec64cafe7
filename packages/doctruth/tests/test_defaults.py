from __future__ import annotations

from pathlib import Path

import yaml

from doctruth.config.defaults import auto_detect_config, default_config, init_config
from doctruth.config.schema import validate_config


def _source_names(config: dict) -> list[str]:
    return [row["name"] for row in config["truth_sources"]]


def test_default_config_uses_directory_name(project: Path) -> None:
    config = default_config(project)
    assert config["project"] == "project"
    assert config["output"] == "CURRENT_TRUTH.md"
    validate_config(config, project / ".doctruth.yml")


def test_auto_detect_adds_ecosystem_sources(project: Path) -> None:
    (project / "pyproject.toml").write_text("", encoding="utf-8")
    (project / "go.mod").write_text("", encoding="utf-8")
    names = _source_names(auto_detect_config(project))
    assert "Python Version" in names
    assert "Go Version" in names
    assert "Node Version" not in names


def test_auto_detect_does_not_share_state(project: Path) -> None:
    (project / "Cargo.toml").write_text("", encoding="utf-8")
    first = auto_detect_config(project)
    first["truth_sources"][-1]["name"] = "mutated"
    assert "mutated" not in _source_names(auto_detect_config(project))


def test_init_config_round_trips(make_ctx) -> None:
    ctx = make_ctx()
    target = init_config(ctx)
    assert target == ctx.cwd / ".doctruth.yml"
    loaded = yaml.safe_load(target.read_text(encoding="utf-8"))
    assert loaded == auto_detect_config(ctx.cwd)


def test_init_config_refuses_to_overwrite(make_ctx, project: Path) -> None:
    (project / ".doctruth.yml").write_text("keep\n", encoding="utf-8")
    assert init_config(make_ctx()) is None
    assert (project / ".doctruth.yml").read_text(encoding="utf-8") == "keep\n"


def test_init_config_unknown_preset_falls_back(make_ctx) -> None:
    ctx = make_ctx()
    target = init_config(ctx, preset="cobol")
    assert yaml.safe_load(target.read_text(encoding="utf-8")) == default_config(ctx.cwd)
