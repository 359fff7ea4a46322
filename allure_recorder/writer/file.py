"""
File sink writing Allure result directories.

Each result is written as `<uuid>-result.json` and each attachment as
`<uuid>.<extension>` in a single results directory, which is created
on first write.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import SinkError
from .base import ResultSink

if TYPE_CHECKING:
    from ..reporting.models import TestResult

logger = logging.getLogger(__name__)


class FileSink(ResultSink):
    """
    Sink writing results and attachments to a directory.

    Write failures raise SinkError; nothing is retried or dropped.

    Example:
        sink = FileSink("allure-results")
        source = sink.persist_attachment(b"hello", "txt")
        # allure-results/<uuid>.txt
    """

    def __init__(self, results_dir: str | Path, indent: int | None = 2):
        self.results_dir = Path(results_dir)
        self.indent = indent

    def persist_result(self, result: TestResult) -> None:
        path = self._ensure_dir() / result.filename
        self._write(path, result.to_json(indent=self.indent).encode("utf-8"))
        logger.debug(f"Wrote result {result.name!r} to {path}")

    def persist_attachment(self, content: bytes, extension: str) -> str:
        filename = self.attachment_filename(extension)
        path = self._ensure_dir() / filename
        self._write(path, content)
        logger.debug(f"Wrote attachment ({len(content)} bytes) to {path}")
        return filename

    def _ensure_dir(self) -> Path:
        try:
            self.results_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SinkError(
                f"Failed to create results directory {self.results_dir}: {e}",
                path=str(self.results_dir),
            ) from e
        return self.results_dir

    def _write(self, path: Path, data: bytes) -> None:
        try:
            path.write_bytes(data)
        except OSError as e:
            raise SinkError(f"Failed to write {path}: {e}", path=str(path)) from e

    def __repr__(self) -> str:
        return f"FileSink(results_dir={str(self.results_dir)!r})"
