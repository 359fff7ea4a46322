"""
Base sink interface for persisting results.

This module defines the abstract base class that all sinks
must follow.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..reporting.models import TestResult


class ResultSink(ABC):
    """
    Abstract base class for result sinks.

    A sink receives finished result documents and raw attachment bytes
    from the execution context and stores them somewhere a report
    generator can read them later.
    """

    @abstractmethod
    def persist_result(self, result: TestResult) -> None:
        """
        Store one finished test result.

        Args:
            result: The assembled result document

        Raises:
            SinkError: If the result cannot be stored
        """
        pass

    @abstractmethod
    def persist_attachment(self, content: bytes, extension: str) -> str:
        """
        Store raw attachment bytes under a fresh unique name.

        Args:
            content: The attachment bytes
            extension: File extension without the leading dot

        Returns:
            The reference (filename) embedded in the result document

        Raises:
            SinkError: If the attachment cannot be stored
        """
        pass

    @staticmethod
    def attachment_filename(extension: str) -> str:
        """Generate a unique `<uuid>.<extension>` attachment filename."""
        return f"{uuid.uuid4()}.{extension}"
