from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal

ErrorType = Literal["essential", "validation"]


@dataclass(frozen=True)
class SourceResult:
    name: str
    command: str
    output: str
    essential: bool = False
    category: str = "general"


@dataclass(frozen=True)
class ValidationResult:
    name: str
    command: str
    output: str
    passed: bool
    required: bool = False


@dataclass(frozen=True)
class ExampleResult:
    name: str
    command: str
    description: str = ""


@dataclass(frozen=True)
class BenchmarkResult:
    name: str
    value: str
    unit: str = ""


@dataclass(frozen=True)
class PlatformResult:
    name: str
    value: str


@dataclass(frozen=True)
class ErrorRecord:
    type: ErrorType
    source: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class TruthMeta:
    project: str
    generated: str
    version: Any
    generation_time: str


@dataclass(frozen=True)
class ResultTree:
    meta: TruthMeta
    sources: tuple[SourceResult, ...] | None = None
    validations: tuple[ValidationResult, ...] | None = None
    examples: tuple[ExampleResult, ...] | None = None
    benchmarks: tuple[BenchmarkResult, ...] | None = None
    platform: tuple[PlatformResult, ...] | None = None

    SECTION_FIELDS = ("sources", "validations", "examples", "benchmarks", "platform")

    @property
    def passed_validations(self) -> int:
        return sum(1 for row in self.validations or () if row.passed)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"meta": asdict(self.meta)}
        for field in self.SECTION_FIELDS:
            rows = getattr(self, field)
            if rows is not None:
                payload[field] = [asdict(row) for row in rows]
        return payload
