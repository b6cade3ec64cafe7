from __future__ import annotations

import socket
from pathlib import Path
from typing import Callable

import pytest
import yaml
from hypothesis import settings

from doctruth.core.context import RunContext

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

settings.register_profile("doctruth", deadline=None, max_examples=60)
settings.load_profile("doctruth")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def no_network_for_unit(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    if request.node.get_closest_marker("integration") or request.node.get_closest_marker("slow"):
        return

    def _blocked(*_args: object, **_kwargs: object) -> socket.socket:
        raise RuntimeError("network disabled in unit tests")

    def _blocked_connect(*_args: object, **_kwargs: object) -> None:
        raise RuntimeError("network disabled in unit tests")

    monkeypatch.setattr(socket, "create_connection", _blocked)
    monkeypatch.setattr(socket.socket, "connect", _blocked_connect)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def make_ctx(project: Path) -> Callable[..., RunContext]:
    def _make(**overrides: object) -> RunContext:
        params: dict[str, object] = {"run_id": "pytest-run", "cwd": project, "silent": True, "color": False}
        params.update(overrides)
        return RunContext.from_args(**params)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def write_config(project: Path) -> Callable[..., Path]:
    def _write(payload: dict[str, object] | str, name: str = ".doctruth.yml") -> Path:
        path = project / name
        path.parent.mkdir(parents=True, exist_ok=True)
        text = payload if isinstance(payload, str) else yaml.safe_dump(payload, sort_keys=False, allow_unicode=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
