"""
Exceptions raised by the recorder.

Test and step failures are never raised from here; they are captured
into the result document. These exceptions report misuse of the
recorder itself or a sink that cannot persist.
"""

from __future__ import annotations


class RecorderError(Exception):
    """Base class for all recorder errors."""


class StepStackError(RecorderError):
    """A step was ended without a matching open step."""


class NoActiveTestError(RecorderError):
    """A helper was called with no execution context bound."""

    def __init__(self, operation: str):
        super().__init__(
            f"Cannot {operation}: no test is running in this thread or task"
        )
        self.operation = operation


class SinkError(RecorderError):
    """A result or attachment could not be persisted."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
