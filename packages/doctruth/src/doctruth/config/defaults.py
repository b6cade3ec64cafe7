from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..core.context import DEFAULT_CONFIG_NAME, DEFAULT_OUTPUT, RunContext
from ..core.fs import write_text_file
from ..core.logging import log_event
from .loader import load_document
from .presets import BUNDLED_PRESETS_DIR

ECOSYSTEM_SOURCES: tuple[tuple[tuple[str, ...], list[dict[str, Any]]], ...] = (
    (
        ("package.json",),
        [
            {"name": "Node Version", "command": "node --version", "essential": True},
            {"name": "NPM Scripts", "command": 'npm run 2>/dev/null | grep "  " || echo "No scripts"'},
            {"name": "Dependencies", "command": "npm list --depth=0 2>/dev/null | head -20"},
        ],
    ),
    (
        ("requirements.txt", "setup.py", "pyproject.toml"),
        [
            {"name": "Python Version", "command": "python --version", "essential": True},
            {"name": "Installed Packages", "command": "pip list 2>/dev/null | head -20"},
        ],
    ),
    (
        ("go.mod",),
        [
            {"name": "Go Version", "command": "go version", "essential": True},
            {"name": "Go Modules", "command": "go list -m all | head -20"},
        ],
    ),
    (
        ("Cargo.toml",),
        [
            {"name": "Rust Version", "command": "rustc --version", "essential": True},
            {"name": "Cargo Dependencies", "command": "cargo tree --depth=1 2>/dev/null | head -20"},
        ],
    ),
)


def default_config(cwd: Path) -> dict[str, Any]:
    project = cwd.name
    return {
        "version": 1,
        "project": project,
        "output": DEFAULT_OUTPUT,
        "meta": {
            "description": f"Documentation truth for {project}",
            "fail_on_error": False,
            "timeout_seconds": 10,
        },
        "truth_sources": [
            {"name": "Project Files", "command": "ls -la | head -20", "essential": True},
            {"name": "Git Status", "command": 'git status --short 2>/dev/null || echo "Not a git repository"'},
            {"name": "Recent Git Commits", "command": 'git log --oneline -10 2>/dev/null || echo "No git history"'},
        ],
        "validations": [
            {
                "name": "Git repository exists",
                "command": '[ -d .git ] && echo "✓ Git initialized" || echo "✗ Not a git repo"',
                "required": False,
            }
        ],
        "working_examples": [
            {"name": "Generate Truth", "command": 'echo "doctruth"'},
            {"name": "Check for Changes", "command": 'echo "doctruth --check"'},
        ],
        "platform": [
            {"name": "Operating System", "command": 'uname -s 2>/dev/null || echo "Windows"'},
            {"name": "Current Directory", "command": "pwd || cd"},
        ],
    }


def auto_detect_config(cwd: Path) -> dict[str, Any]:
    config = default_config(cwd)
    for markers, sources in ECOSYSTEM_SOURCES:
        if any((cwd / marker).exists() for marker in markers):
            config["truth_sources"].extend(dict(item) for item in sources)
    return config


def dump_config(config: dict[str, Any]) -> str:
    return yaml.safe_dump(config, sort_keys=False, allow_unicode=True, indent=2, width=120)


def init_config(ctx: RunContext, preset: str | None = None) -> Path | None:
    target = ctx.resolve(DEFAULT_CONFIG_NAME)
    if target.exists():
        log_event(ctx, "warning", "init", "config-exists", path=DEFAULT_CONFIG_NAME)
        return None
    config: dict[str, Any]
    if preset:
        preset_path = BUNDLED_PRESETS_DIR / f"{preset}.yml"
        if preset_path.is_file():
            config = load_document(preset_path)
            log_event(ctx, "info", "init", "preset-used", preset=preset)
        else:
            log_event(ctx, "warning", "init", "preset-missing", preset=preset)
            config = default_config(ctx.cwd)
    else:
        config = auto_detect_config(ctx.cwd)
    write_text_file(target, dump_config(config))
    log_event(ctx, "info", "init", "config-created", path=DEFAULT_CONFIG_NAME)
    return target
