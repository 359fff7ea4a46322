"""
Classification of a test or step outcome into the status model.

An outcome is whatever the lifecycle layer hands to end_test/end_step:
None for success, a string error payload, or a raised exception. Any
other shape collapses to a fixed generic message. Classification never
raises.
"""

from __future__ import annotations

import traceback
import unittest
from typing import Any

from .models import Status, StatusDetails

GENERIC_TEST_FAILURE = "Test failed"
GENERIC_STEP_FAILURE = "Step failed"


def resolve_outcome(
    error: Any = None,
    generic_message: str = GENERIC_TEST_FAILURE,
) -> tuple[Status, StatusDetails | None]:
    """
    Derive the status and failure detail for an outcome.

    Args:
        error: None on success, otherwise the error payload
        generic_message: Message used when the payload has no usable shape

    Returns:
        Tuple of (Status, StatusDetails or None)

    Example:
        resolve_outcome("boom")
        # (Status.FAILED, StatusDetails(message="boom"))
    """
    if error is None:
        return Status.PASSED, None

    if isinstance(error, str):
        return Status.FAILED, StatusDetails(message=error)

    if isinstance(error, BaseException):
        return _status_for_exception(error), StatusDetails(
            message=_exception_message(error),
            trace=_format_trace(error),
        )

    return Status.FAILED, StatusDetails(message=generic_message)


def _status_for_exception(error: BaseException) -> Status:
    if _is_pytest_outcome(error, "Skipped") or isinstance(error, unittest.SkipTest):
        return Status.SKIPPED
    if isinstance(error, AssertionError) or _is_pytest_outcome(error, "Failed"):
        return Status.FAILED
    return Status.BROKEN


def _is_pytest_outcome(error: BaseException, name: str) -> bool:
    # pytest.skip() and pytest.fail() raise _pytest.outcomes exceptions,
    # BaseException subclasses outside the Exception hierarchy
    error_type = type(error)
    return error_type.__name__ == name and error_type.__module__.startswith("_pytest")


def _exception_message(error: BaseException) -> str:
    text = str(error)
    name = type(error).__name__
    return f"{name}: {text}" if text else name


def _format_trace(error: BaseException) -> str | None:
    if error.__traceback__ is None:
        return None
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))
