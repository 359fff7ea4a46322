"""Tests for the result document wire format."""

from allure_recorder.reporting import (
    Attachment,
    Label,
    Parameter,
    Stage,
    Status,
    StatusDetails,
    TestResult,
    TestStep,
)


def _result(**overrides) -> TestResult:
    fields = dict(
        uuid="6f1c1d4e-0000-4000-8000-000000000001",
        history_id="abc",
        name="login",
        status=Status.PASSED,
        start=1000,
        stop=2000,
    )
    fields.update(overrides)
    return TestResult(**fields)


def test_result_document_shape() -> None:
    """Result documents use the Allure field names."""
    step = TestStep(name="open", status=Status.PASSED, stage=Stage.FINISHED, start=1100, stop=1200)
    step.attachments.append(Attachment("page", "p.html", "text/html"))
    result = _result(
        labels=(Label("suite", "auth"),),
        parameters=(Parameter("user", "alice"),),
        steps=(step,),
    )

    data = result.to_dict()

    assert list(data) == [
        "uuid", "historyId", "name", "status", "stage", "start", "stop",
        "labels", "parameters", "links", "steps", "attachments",
    ]
    assert data["status"] == "passed"
    assert data["stage"] == "finished"
    assert data["labels"] == [{"name": "suite", "value": "auth"}]
    assert data["steps"][0]["attachments"] == [
        {"name": "page", "source": "p.html", "type": "text/html"}
    ]
    assert data["steps"][0]["steps"] == []
    assert "statusDetails" not in data["steps"][0]


def test_status_details_are_sparse() -> None:
    """Only the detail fields that are set are written."""
    data = _result(status=Status.FAILED, status_details=StatusDetails(message="boom")).to_dict()

    assert data["statusDetails"] == {"message": "boom"}


def test_optional_fields() -> None:
    """Description and fullName appear only when set."""
    data = _result(full_name="auth.login", description="Checks login").to_dict()

    assert data["fullName"] == "auth.login"
    assert data["description"] == "Checks login"


def test_filename_uses_uuid() -> None:
    """Results are stored as <uuid>-result.json."""
    assert _result().filename == "6f1c1d4e-0000-4000-8000-000000000001-result.json"


def test_from_dict_rebuilds_nested_steps() -> None:
    """Parsed documents rebuild the step tree."""
    inner = TestStep(name="inner", status=Status.FAILED, stage=Stage.FINISHED,
                     status_details=StatusDetails(message="x"), start=1, stop=2)
    outer = TestStep(name="outer", stage=Stage.FINISHED, start=0, stop=3, steps=[inner],
                     parameters=[Parameter("n", "1")])
    original = _result(steps=(outer,), status=Status.FAILED)

    parsed = TestResult.from_dict(original.to_dict())

    assert parsed == original


def test_step_finish_never_goes_back_in_time() -> None:
    """A stop reading earlier than start is clamped to start."""
    step = TestStep(name="s", start=500)
    step.finish(400, Status.PASSED)

    assert step.stop == 500
    assert step.stage == Stage.FINISHED
