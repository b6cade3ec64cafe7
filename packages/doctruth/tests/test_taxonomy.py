from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from doctruth.execution.taxonomy import is_error


@pytest.mark.parametrize(
    "output",
    [
        "[ERROR: test]",
        "[TIMEOUT: Command exceeded 1s]",
        "[KILLED: Signal SIGTERM]",
        "[EXIT CODE: 42]",
        "[STDERR: boom]",
        "bash: foo: command not found",
        "ls: x: No such file or directory",
        "permission denied",
        "Permission Denied",
        "Fatal: x",
        "fatal: not a git repository",
        "Cannot find module 'x'",
    ],
)
def test_error_outputs(output: str) -> None:
    assert is_error(output)


@pytest.mark.parametrize("output", ["Normal output", "Success", "", None, "error count: 0", "prefix [ERROR: in middle]"])
def test_non_error_outputs(output: str | None) -> None:
    assert not is_error(output)


@given(st.sampled_from(["permission denied", "fatal:", "command not found"]), st.text(max_size=20), st.text(max_size=20))
def test_phrases_match_anywhere_in_any_case(phrase: str, prefix: str, suffix: str) -> None:
    assert is_error(prefix + phrase.upper() + suffix)
