from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class TruthConfig:
    """Fully resolved configuration; read-only once loading finishes."""

    path: Path
    data: Mapping[str, Any]

    @classmethod
    def build(cls, path: Path, data: dict[str, Any]) -> "TruthConfig":
        return cls(path=path, data=MappingProxyType(dict(data)))

    @property
    def meta(self) -> Mapping[str, Any]:
        meta = self.data.get("meta")
        return meta if isinstance(meta, Mapping) else {}

    @property
    def project(self) -> str | None:
        return self.data.get("project")

    @property
    def version(self) -> Any:
        return self.data.get("version") or 1

    @property
    def output(self) -> str | None:
        return self.data.get("output")

    @property
    def timeout_seconds(self) -> float | None:
        value = self.meta.get("timeout_seconds")
        return float(value) if value else None

    @property
    def fail_on_error(self) -> bool:
        return bool(self.meta.get("fail_on_error", False))

    @property
    def watch_paths(self) -> list[str]:
        return list(self.data.get("watch_paths") or [])

    def has_section(self, key: str) -> bool:
        return self.data.get(key) is not None

    def directives(self, key: str) -> list[Mapping[str, Any]]:
        return list(self.data.get(key) or [])
