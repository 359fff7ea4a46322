"""Tests for outcome classification."""

import unittest

import pytest

from allure_recorder.reporting import (
    GENERIC_STEP_FAILURE,
    Status,
    StatusDetails,
    resolve_outcome,
)


def _raised(error: BaseException) -> BaseException:
    """Raise and catch an error so it carries a traceback."""
    try:
        raise error
    except BaseException as e:
        return e


def test_no_error_passes() -> None:
    """None means the test passed, with no details."""
    assert resolve_outcome(None) == (Status.PASSED, None)


def test_string_payload_is_verbatim() -> None:
    """String payloads become the message unchanged."""
    assert resolve_outcome("boom") == (Status.FAILED, StatusDetails(message="boom"))


def test_assertion_error_fails_with_trace() -> None:
    """Assertion errors fail and carry a formatted traceback."""
    status, details = resolve_outcome(_raised(AssertionError("expected 5, got 3")))

    assert status == Status.FAILED
    assert details.message == "AssertionError: expected 5, got 3"
    assert "Traceback" in details.trace
    assert "expected 5, got 3" in details.trace


def test_other_exceptions_are_broken() -> None:
    """Errors other than assertions mark the outcome broken."""
    status, details = resolve_outcome(_raised(ConnectionError("refused")))

    assert status == Status.BROKEN
    assert details.message == "ConnectionError: refused"


def test_exception_without_message_uses_type_name() -> None:
    """An exception with empty text is named by its type."""
    _, details = resolve_outcome(ValueError())

    assert details.message == "ValueError"
    assert details.trace is None


def test_unittest_skip_is_skipped() -> None:
    """unittest.SkipTest maps to skipped."""
    status, details = resolve_outcome(unittest.SkipTest("not on CI"))

    assert status == Status.SKIPPED
    assert details.message == "SkipTest: not on CI"


def test_pytest_skip_is_skipped() -> None:
    """pytest.skip() maps to skipped."""
    with pytest.raises(pytest.skip.Exception) as exc_info:
        pytest.skip("later")

    status, _ = resolve_outcome(exc_info.value)
    assert status == Status.SKIPPED


def test_pytest_fail_is_failed() -> None:
    """pytest.fail() maps to failed, like an assertion."""
    with pytest.raises(pytest.fail.Exception) as exc_info:
        pytest.fail("wrong total")

    status, details = resolve_outcome(exc_info.value)
    assert status == Status.FAILED
    assert "wrong total" in details.message


def test_keyboard_interrupt_is_broken() -> None:
    """BaseException subclasses are classified too."""
    status, _ = resolve_outcome(KeyboardInterrupt())
    assert status == Status.BROKEN


def test_unknown_payload_uses_generic_message() -> None:
    """Unknown payload shapes degrade to the supplied generic message."""
    assert resolve_outcome({"code": 1}) == (Status.FAILED, StatusDetails(message="Test failed"))
    assert resolve_outcome(3.5, GENERIC_STEP_FAILURE)[1].message == "Step failed"
