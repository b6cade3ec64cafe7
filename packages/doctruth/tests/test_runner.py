from __future__ import annotations

import pytest
from helpers import FIXED_TS, FakeExecutor, make_config

from doctruth.core.errors import KIND_OUTPUT_WRITE_FAILURE, TruthError
from doctruth.core.exit_codes import ERR_ARTIFACT
from doctruth.runner import TruthRunner
from doctruth.truth.assembler import TruthAssembler


def _runner(ctx, payload: dict[str, object]) -> TruthRunner:
    assembler = TruthAssembler(ctx, executor=FakeExecutor(default="value"), clock=lambda: FIXED_TS, timer=lambda: 0.0)
    return TruthRunner(ctx, make_config(payload), assembler=assembler)


def test_generate_writes_rendered_content(make_ctx) -> None:
    runner = _runner(make_ctx(), {"project": "R", "platform": [{"name": "P", "command": "x"}]})
    result = runner.generate()
    assert result.path == runner.output_path
    assert result.path.read_text(encoding="utf-8") == result.content
    assert result.content.startswith("# R - Current Truth\n")


def test_generate_is_repeatable(make_ctx) -> None:
    runner = _runner(make_ctx(), {"project": "R", "platform": [{"name": "P", "command": "x"}]})
    assert runner.generate().content == runner.generate().content


def test_config_output_is_used(make_ctx) -> None:
    ctx = make_ctx()
    runner = _runner(ctx, {"output": "docs/T.md"})
    assert runner.generate().path == ctx.cwd / "docs" / "T.md"


def test_fail_on_error_from_config_meta(make_ctx) -> None:
    assert _runner(make_ctx(), {"meta": {"fail_on_error": True}}).fail_on_error is True
    assert _runner(make_ctx(fail_on_error=True), {}).fail_on_error is True
    assert _runner(make_ctx(), {}).fail_on_error is False


def test_unwritable_output_raises_artifact_error(make_ctx, project) -> None:
    (project / "blocked").write_text("file, not a dir", encoding="utf-8")
    runner = _runner(make_ctx(output="blocked/T.md"), {})
    with pytest.raises(TruthError) as excinfo:
        runner.generate()
    assert excinfo.value.code == ERR_ARTIFACT
    assert excinfo.value.kind == KIND_OUTPUT_WRITE_FAILURE


def test_project_name_defaults_to_directory(make_ctx) -> None:
    ctx = make_ctx()
    assert _runner(ctx, {}).generate().tree.meta.project == ctx.cwd.name
