"""Tests for result document validation."""

from pathlib import Path

from allure_recorder.context import ExecutionContext
from allure_recorder.reporting import ResultValidator
from allure_recorder.writer import MemorySink


def _document() -> dict:
    context = ExecutionContext(MemorySink())
    context.start_test("login", suite="auth")
    context.start_step("outer")
    context.start_step("inner")
    context.add_attachment("log", "text")
    context.end_step()
    context.end_step()
    return context.end_test().to_dict()


def test_recorded_document_is_valid() -> None:
    """Documents produced by the recorder pass validation."""
    assert ResultValidator(_document()).validate().is_valid


def test_missing_required_fields() -> None:
    """Each missing required key is reported."""
    result = ResultValidator({"uuid": "x"}).validate()

    paths = {e.path for e in result.errors}
    assert {"historyId", "name", "status", "stage", "start", "stop"} <= paths


def test_invalid_status_and_stage() -> None:
    """Status and stage must use the known values."""
    document = _document()
    document["status"] = "error"
    document["steps"][0]["stage"] = "pending"

    paths = [e.path for e in ResultValidator(document).validate().errors]

    assert paths == ["status", "steps[0].stage"]


def test_nested_step_times() -> None:
    """A finished nested step cannot stop before it starts."""
    document = _document()
    inner = document["steps"][0]["steps"][0]
    inner["stop"] = inner["start"] - 1

    errors = ResultValidator(document).validate().errors

    assert [e.path for e in errors] == ["steps[0].steps[0].stop"]


def test_attachment_fields() -> None:
    """Attachments need name, source and type strings."""
    document = _document()
    document["attachments"] = [{"name": "x", "source": "x.txt"}]

    errors = ResultValidator(document).validate().errors

    assert [e.path for e in errors] == ["attachments[0].type"]


def test_attachment_files_must_exist(tmp_path: Path) -> None:
    """With a directory given, attachment sources must exist in it."""
    document = _document()

    errors = ResultValidator(document, attachments_dir=tmp_path).validate().errors

    assert [e.path for e in errors] == ["steps[0].steps[0].attachments[0].source"]
    assert errors[0].message == "Attachment file not found"


def test_bad_label_entries() -> None:
    """Labels must be name/value objects."""
    document = _document()
    document["labels"].append({"name": "owner"})

    errors = ResultValidator(document).validate().errors

    assert [e.path for e in errors] == ["labels[1]"]
