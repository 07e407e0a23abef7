"""Tests for formatting and writing generated code."""

import shutil

import pytest

from rootx_gen.codegen.core.errors import OutputError
from rootx_gen.output import format_source, write_output

CODE = "package store\n"


def test_no_formatter_returns_code_unchanged():
    assert format_source(CODE, None) == CODE
    assert format_source(CODE, "") == CODE


@pytest.mark.skipif(shutil.which("cat") is None, reason="cat not available")
def test_formatter_receives_code_on_stdin():
    assert format_source(CODE, "cat") == CODE


def test_missing_formatter():
    with pytest.raises(OutputError, match="Formatter not found"):
        format_source(CODE, "rootx-gen-no-such-formatter")


@pytest.mark.skipif(shutil.which("false") is None, reason="false not available")
def test_failing_formatter():
    with pytest.raises(OutputError, match="failed"):
        format_source(CODE, "false")


def test_write_to_file(tmp_path):
    target = tmp_path / "gen" / "queries.go"

    write_output(CODE, target)

    assert target.read_text() == CODE


def test_write_to_stdout(capsys):
    write_output(CODE)

    assert capsys.readouterr().out == CODE
