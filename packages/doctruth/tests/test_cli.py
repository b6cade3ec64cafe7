from __future__ import annotations

import json
from pathlib import Path

import pytest
from helpers import posix_only

from doctruth import __version__
from doctruth.cli.main import build_parser, main
from doctruth.core.exit_codes import ERR_COMMAND, ERR_CONFIG, ERR_FAILED, ERR_USAGE, OK

ECHO_CONFIG = {
    "project": "Cli",
    "truth_sources": [{"name": "Echo", "command": "echo hi", "essential": True}],
    "validations": [{"name": "Always", "command": "echo '✓ fine'"}],
}


def _main(project: Path, *args: str) -> int:
    return main(["--cwd", str(project), "--no-color", *args])


def test_version_flag(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == f"doctruth {__version__}"


def test_check_and_watch_are_exclusive(project: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _main(project, "--check", "--watch")
    assert excinfo.value.code == ERR_USAGE


def test_missing_config_exit_code(project: Path, capsys) -> None:
    assert _main(project) == ERR_CONFIG
    assert "❌ Error: Configuration file not found: .doctruth.yml" in capsys.readouterr().err


def test_missing_config_json_error(project: Path, capsys) -> None:
    assert _main(project, "--log-json") == ERR_CONFIG
    payload = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert payload["status"] == "error"
    assert payload["errors"][0]["kind"] == "config_not_found"


def test_undecodable_config_exit_code(project: Path, capsys) -> None:
    (project / ".doctruth.yml").write_bytes(b"project: caf\xe9\n")
    assert _main(project) == ERR_CONFIG
    assert "❌ Error: failed to parse" in capsys.readouterr().err


def test_non_positive_timeout_is_usage_error(project: Path, write_config) -> None:
    write_config(ECHO_CONFIG)
    assert _main(project, "--silent", "--timeout", "0") == ERR_USAGE


def test_init_creates_config_once(project: Path) -> None:
    (project / "package.json").write_text("{}", encoding="utf-8")
    assert _main(project, "--init", "--silent") == OK
    target = project / ".doctruth.yml"
    text = target.read_text(encoding="utf-8")
    assert "Node Version" in text
    target.write_text("project: mine\n", encoding="utf-8")
    assert _main(project, "--init", "--silent") == OK
    assert target.read_text(encoding="utf-8") == "project: mine\n"


def test_init_with_preset(project: Path) -> None:
    assert _main(project, "--init", "--preset", "rust", "--silent") == OK
    assert "cargo" in (project / ".doctruth.yml").read_text(encoding="utf-8")


@pytest.mark.integration
@posix_only
def test_generate_writes_report(project: Path, write_config, capsys) -> None:
    write_config(ECHO_CONFIG)
    assert _main(project) == OK
    out = capsys.readouterr().out
    assert "✅ Truth generated successfully" in out
    report = (project / "CURRENT_TRUTH.md").read_text(encoding="utf-8")
    assert report.startswith("# Cli - Current Truth\n")
    assert "#### Echo [ESSENTIAL]\n```bash\n$ echo hi\nhi\n```" in report
    assert "## Status: 1/1 validations passed" in report


@pytest.mark.integration
@posix_only
def test_generate_json_to_custom_output(project: Path, write_config) -> None:
    write_config(ECHO_CONFIG)
    assert _main(project, "--silent", "-f", "json", "-o", "out/truth.json") == OK
    payload = json.loads((project / "out" / "truth.json").read_text(encoding="utf-8"))
    assert payload["sources"][0]["output"] == "hi"
    assert payload["errors"] == []


@pytest.mark.integration
@posix_only
def test_warnings_are_counted(project: Path, write_config, capsys) -> None:
    write_config({"truth_sources": [{"name": "Broken", "command": "exit 3", "essential": True}]})
    assert _main(project) == OK
    assert "⚠️  1 warnings encountered" in capsys.readouterr().out
    assert "[EXIT CODE: 3]" in (project / "CURRENT_TRUTH.md").read_text(encoding="utf-8")


@pytest.mark.integration
@posix_only
def test_fail_on_error_aborts_on_failed_command(project: Path, write_config, capsys) -> None:
    write_config({"truth_sources": [{"name": "Broken", "command": "exit 3"}]})
    assert _main(project, "--fail-on-error") == ERR_COMMAND
    assert "Command failed: exit 3" in capsys.readouterr().err
    assert not (project / "CURRENT_TRUTH.md").exists()


@pytest.mark.integration
@posix_only
def test_fail_on_error_with_failed_required_validation(project: Path, write_config) -> None:
    write_config({"validations": [{"name": "Gate", "command": "echo '✗ nope'", "required": True}]})
    assert _main(project, "--silent") == OK
    assert _main(project, "--silent", "--fail-on-error") == ERR_FAILED


@pytest.mark.integration
@posix_only
def test_check_cycle(project: Path, write_config, capsys) -> None:
    write_config(ECHO_CONFIG)
    assert _main(project, "--check") == ERR_FAILED
    assert "Truth has changed" in capsys.readouterr().out
    assert _main(project, "--silent") == OK
    assert _main(project, "--check", "--semantic") == OK
    assert "Truth unchanged" in capsys.readouterr().out


@pytest.mark.integration
@posix_only
def test_check_diff_shows_changed_lines(project: Path, write_config, capsys) -> None:
    write_config(ECHO_CONFIG)
    assert _main(project, "--silent") == OK
    write_config({**ECHO_CONFIG, "truth_sources": [{"name": "Echo", "command": "echo bye", "essential": True}]})
    assert _main(project, "--check", "--diff", "--semantic") == ERR_FAILED
    out = capsys.readouterr().out
    assert "Differences found:" in out
    assert "+ bye" in out
