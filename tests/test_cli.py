"""Tests for the command line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from allure_recorder import __version__
from allure_recorder.attachments import AttachmentType
from allure_recorder.cli import app
from allure_recorder.context import ExecutionContext
from allure_recorder.reporting import TestResult
from allure_recorder.writer import FileSink

runner = CliRunner()


@pytest.fixture
def recorded(tmp_path: Path) -> TestResult:
    """Record one failing test with nested steps into tmp_path."""
    context = ExecutionContext(FileSink(tmp_path))
    context.start_test("checkout", suite="shop")
    context.start_step("pay", {"amount": 12})
    context.start_step("call bank")
    context.add_attachment("response", "<svg></svg>", AttachmentType.SVG)
    context.end_step(error="declined")
    context.end_step(error="declined")
    return context.end_test(error="declined")


def test_version() -> None:
    """--version prints the package version."""
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_validate_valid_directory(tmp_path: Path, recorded: TestResult) -> None:
    """A directory written by the recorder validates."""
    result = runner.invoke(app, ["validate", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "All result files are valid" in result.output


def test_validate_reports_invalid_documents(tmp_path: Path, recorded: TestResult) -> None:
    """Broken documents fail validation with a non-zero exit."""
    (tmp_path / "broken-result.json").write_text(json.dumps({"uuid": "x"}))
    (tmp_path / "garbage-result.json").write_text("{not json")

    result = runner.invoke(app, ["validate", str(tmp_path)])

    assert result.exit_code == 1
    assert "2 invalid result file(s)" in result.output


def test_validate_missing_attachment(tmp_path: Path, recorded: TestResult) -> None:
    """Deleted attachment files are caught unless the check is disabled."""
    for svg in tmp_path.glob("*.svg"):
        svg.unlink()

    assert runner.invoke(app, ["validate", str(tmp_path)]).exit_code == 1
    assert runner.invoke(app, ["validate", str(tmp_path), "--no-check-attachments"]).exit_code == 0


def test_validate_empty_directory(tmp_path: Path) -> None:
    """An empty directory is reported."""
    result = runner.invoke(app, ["validate", str(tmp_path)])

    assert result.exit_code == 1
    assert "No result files found" in result.output


def test_show_renders_step_tree(tmp_path: Path, recorded: TestResult) -> None:
    """show prints the test, its steps and attachments."""
    result = runner.invoke(app, ["show", str(tmp_path / recorded.filename)])

    assert result.exit_code == 0, result.output
    assert "checkout" in result.output
    assert "shop" in result.output
    assert "pay" in result.output
    assert "call bank" in result.output
    assert "declined" in result.output
    assert "response" in result.output


def test_show_rejects_non_result_json(tmp_path: Path) -> None:
    """A JSON file that is not a result document is rejected."""
    path = tmp_path / "other.json"
    path.write_text("[1, 2]")

    result = runner.invoke(app, ["show", str(path)])

    assert result.exit_code == 1
    assert "Cannot read result" in result.output


def test_show_escapes_bracketed_names(tmp_path: Path) -> None:
    """Parametrized-style names with brackets are printed literally."""
    context = ExecutionContext(FileSink(tmp_path))
    context.start_test("check_login[admin]", suite="auth[smoke]")
    context.start_step("open [login] page", {"role": "[admin]"})
    context.end_step(error="[red]not a tag[/red]")
    recorded = context.end_test()

    result = runner.invoke(app, ["show", str(tmp_path / recorded.filename)])

    assert result.exit_code == 0, result.output
    assert "check_login[admin]" in result.output
    assert "auth[smoke]" in result.output
    assert "open [login] page" in result.output
    assert "[red]not a tag[/red]" in result.output


def test_validate_escapes_bracketed_names(tmp_path: Path) -> None:
    """Test names that look like markup do not break the results table."""
    context = ExecutionContext(FileSink(tmp_path))
    context.start_test("check[/x]")
    context.end_test()

    result = runner.invoke(app, ["validate", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "All result files are valid" in result.output


@pytest.mark.parametrize("steps", [["x"], 5])
def test_show_rejects_malformed_steps(tmp_path: Path, recorded: TestResult, steps) -> None:
    """Malformed nested data is reported without a traceback."""
    path = tmp_path / recorded.filename
    data = json.loads(path.read_text())
    data["steps"] = steps
    path.write_text(json.dumps(data))

    result = runner.invoke(app, ["show", str(path)])

    assert result.exit_code == 1
    assert "Cannot read result" in result.output


def test_config_shows_effective_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """config prints file settings with the environment override applied."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ALLURE_RESULTS_DIR", raising=False)
    config_file = tmp_path / "recorder.yaml"
    config_file.write_text("results_dir: out\nlabels:\n  team: qa\n")

    result = runner.invoke(app, ["config", "--config", str(config_file)])
    assert result.exit_code == 0, result.output
    assert "out" in result.output
    assert "team" in result.output

    result = runner.invoke(
        app, ["config", "--config", str(config_file)], env={"ALLURE_RESULTS_DIR": "env-dir"}
    )
    assert "env-dir" in result.output


def test_config_invalid_file(tmp_path: Path) -> None:
    """An invalid config file exits non-zero."""
    config_file = tmp_path / "recorder.yaml"
    config_file.write_text("indent: -3\n")

    result = runner.invoke(app, ["config", "--config", str(config_file)])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_info() -> None:
    """info describes the tool."""
    result = runner.invoke(app, ["info"])

    assert result.exit_code == 0
    assert "allure-recorder" in result.output
