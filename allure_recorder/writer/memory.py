"""
In-memory sink.

Keeps results and attachment bytes in process, for embedding the
recorder in other tools and for tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import ResultSink

if TYPE_CHECKING:
    from ..reporting.models import TestResult


class MemorySink(ResultSink):
    """Sink storing everything in dictionaries."""

    def __init__(self):
        self.results: list[TestResult] = []
        self.attachments: dict[str, bytes] = {}

    def persist_result(self, result: TestResult) -> None:
        self.results.append(result)

    def persist_attachment(self, content: bytes, extension: str) -> str:
        filename = self.attachment_filename(extension)
        self.attachments[filename] = content
        return filename

    @property
    def last_result(self) -> TestResult | None:
        return self.results[-1] if self.results else None

    def clear(self) -> None:
        self.results.clear()
        self.attachments.clear()
