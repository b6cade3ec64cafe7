from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from ..config.model import TruthConfig
from ..execution.executor import CommandExecutor
from ..execution.taxonomy import is_error
from .model import (
    BenchmarkResult,
    ErrorRecord,
    ExampleResult,
    PlatformResult,
    SourceResult,
    ValidationResult,
)
from .validation import evaluate_validation

ECHO_WRAPPER = re.compile(r"^echo\s+['\"]?|['\"]?$")


@dataclass
class SectionRun:
    """Mutable state owned by a single generate call."""

    config: TruthConfig
    executor: CommandExecutor
    errors: list[ErrorRecord] = field(default_factory=list)

    def execute(self, directive: Mapping[str, Any]) -> str:
        timeout = directive.get("timeout") or self.config.timeout_seconds
        return self.executor.run(str(directive["command"]), timeout)


SectionHandler = Callable[[SectionRun, Mapping[str, Any]], object]


def collect_source(run: SectionRun, directive: Mapping[str, Any]) -> SourceResult:
    output = run.execute(directive)
    result = SourceResult(
        name=str(directive["name"]),
        command=str(directive["command"]),
        output=output,
        essential=bool(directive.get("essential", False)),
        category=str(directive.get("category") or "general"),
    )
    if result.essential and is_error(output):
        run.errors.append(ErrorRecord("essential", result.name, output))
    return result


def collect_validation(run: SectionRun, directive: Mapping[str, Any]) -> ValidationResult:
    output = run.execute(directive)
    result = ValidationResult(
        name=str(directive["name"]),
        command=str(directive["command"]),
        output=output,
        passed=evaluate_validation(output, directive),
        required=bool(directive.get("required", False)),
    )
    if result.required and not result.passed:
        run.errors.append(ErrorRecord("validation", result.name, "Required validation failed"))
    return result


def collect_example(run: SectionRun, directive: Mapping[str, Any]) -> ExampleResult:
    output = run.execute(directive)
    return ExampleResult(
        name=str(directive["name"]),
        command=ECHO_WRAPPER.sub("", output),
        description=str(directive.get("description") or ""),
    )


def collect_benchmark(run: SectionRun, directive: Mapping[str, Any]) -> BenchmarkResult:
    return BenchmarkResult(
        name=str(directive["name"]),
        value=run.execute(directive),
        unit=str(directive.get("unit") or ""),
    )


def collect_platform(run: SectionRun, directive: Mapping[str, Any]) -> PlatformResult:
    return PlatformResult(name=str(directive["name"]), value=run.execute(directive))


@dataclass(frozen=True)
class SectionSpec:
    key: str
    field: str
    label: str
    handler: SectionHandler


SECTIONS: tuple[SectionSpec, ...] = (
    SectionSpec("truth_sources", "sources", "collect-sources", collect_source),
    SectionSpec("validations", "validations", "run-validations", collect_validation),
    SectionSpec("working_examples", "examples", "document-examples", collect_example),
    SectionSpec("benchmarks", "benchmarks", "run-benchmarks", collect_benchmark),
    SectionSpec("platform", "platform", "collect-platform", collect_platform),
)
