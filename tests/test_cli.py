"""End-to-end tests for the command line entry point."""

import json

import pytest
from click.testing import CliRunner

from snippet_test.cli import main

from conftest import PYTHON_RUNNER


@pytest.fixture
def docs_project(tmp_path, monkeypatch):
    (tmp_path / "doctest.config.yaml").write_text(
        f"runners:\n  python: '{PYTHON_RUNNER}'\ntimeout: 10\n",
        encoding="utf-8",
    )
    docs = tmp_path / "docs"
    docs.mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _write(path, text):
    path.write_text(text, encoding="utf-8")


def test_all_blocks_pass(docs_project):
    _write(docs_project / "docs" / "ok.md", "```python\nprint('hi')\n```\n\n```text\nnot run\n```\n")

    result = CliRunner().invoke(main, [])

    assert result.exit_code == 0, result.output
    assert "Doctest: 2 blocks, 1 passed, 0 failed, 1 skipped, 0 timed out" in result.output


def test_failure_sets_exit_code_and_prints_details(docs_project):
    _write(docs_project / "docs" / "bad.md", "# Bad\n\n```python\nraise SystemExit('boom')\n```\n")

    result = CliRunner().invoke(main, [])

    assert result.exit_code == 1
    assert "docs/bad.md:3 [python] failed" in result.output
    assert "boom" in result.output


def test_fail_on_unknown_flag(docs_project):
    _write(docs_project / "docs" / "odd.md", "```cobol\nDISPLAY 'X'.\n```\n")

    assert CliRunner().invoke(main, []).exit_code == 0
    assert CliRunner().invoke(main, ["--fail-on-unknown"]).exit_code == 1


def test_positional_globs_replace_include(docs_project):
    _write(docs_project / "docs" / "a.md", "```python\nprint('a')\n```\n")
    _write(docs_project / "docs" / "b.md", "```python\nraise SystemExit(1)\n```\n")

    result = CliRunner().invoke(main, ["docs/a.md"])

    assert result.exit_code == 0
    assert "1 blocks, 1 passed" in result.output


def test_no_files_matched(docs_project):
    result = CliRunner().invoke(main, ["--files", "nothing/**/*.md"])

    assert result.exit_code == 0
    assert "Doctest: no files matched" in result.output


def test_json_output_and_saved_report(docs_project):
    _write(docs_project / "docs" / "ok.md", "```python\nprint('hi')\n```\n")
    report_path = docs_project / "reports" / "doctest.json"

    result = CliRunner().invoke(main, ["--json", "--save-report", str(report_path)])

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["success"] is True
    assert payload["data"]["passed"] == 1
    assert json.loads(report_path.read_text(encoding="utf-8"))["results"][0]["stdout"] == "hi\n"


def test_bad_config_path_exits_with_config_error(docs_project):
    result = CliRunner().invoke(main, ["--config", "nope.toml"])

    assert result.exit_code == 2
