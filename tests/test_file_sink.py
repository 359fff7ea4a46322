"""Tests for the file sink."""

import json
from pathlib import Path

import pytest

from allure_recorder.config import RecorderConfig
from allure_recorder.context import ExecutionContext
from allure_recorder.errors import SinkError
from allure_recorder.reporting import ResultValidator
from allure_recorder.writer import FileSink, create_sink


def test_creates_directory_and_writes_result(tmp_path: Path) -> None:
    """The results directory is created on first write."""
    results_dir = tmp_path / "build" / "allure-results"
    context = ExecutionContext(FileSink(results_dir))
    context.start_test("login", suite="auth")
    result = context.end_test()

    path = results_dir / f"{result.uuid}-result.json"
    assert path.exists()
    data = json.loads(path.read_text())
    assert data["uuid"] == result.uuid
    assert data["name"] == "login"
    assert data["status"] == "passed"


def test_attachment_files(tmp_path: Path) -> None:
    """Attachments are written as <uuid>.<ext> and referenced by filename."""
    sink = FileSink(tmp_path)

    first = sink.persist_attachment(b"hello", "txt")
    second = sink.persist_attachment(b"hello", "txt")

    assert first != second
    assert first.endswith(".txt")
    assert "/" not in first
    assert (tmp_path / first).read_bytes() == b"hello"


def test_written_documents_validate(tmp_path: Path) -> None:
    """A recorded test produces a valid document with existing attachments."""
    context = ExecutionContext(FileSink(tmp_path))
    context.start_test("checkout")
    context.start_step("pay")
    context.add_attachment("receipt", {"total": 12})
    context.end_step(error=AssertionError("declined"))
    result = context.end_test(error="declined")

    data = json.loads((tmp_path / result.filename).read_text())
    validation = ResultValidator(data, attachments_dir=tmp_path).validate()

    assert validation.is_valid, str(validation)
    assert data["steps"][0]["status"] == "failed"


def test_compact_output(tmp_path: Path) -> None:
    """indent=None writes single-line JSON."""
    context = ExecutionContext(FileSink(tmp_path, indent=None))
    context.start_test("t")
    result = context.end_test()

    assert "\n" not in (tmp_path / result.filename).read_text()


def test_unwritable_directory_raises(tmp_path: Path) -> None:
    """Persistence failures are fatal, not swallowed."""
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    sink = FileSink(blocker)

    with pytest.raises(SinkError) as exc_info:
        sink.persist_attachment(b"x", "txt")

    assert isinstance(exc_info.value.__cause__, OSError)
    assert exc_info.value.path == str(blocker)


def test_create_sink_from_config(tmp_path: Path) -> None:
    """The factory builds a file sink for the configured directory."""
    sink = create_sink(RecorderConfig(results_dir=str(tmp_path / "out"), indent=4))

    assert isinstance(sink, FileSink)
    assert sink.results_dir == tmp_path / "out"
    assert sink.indent == 4
