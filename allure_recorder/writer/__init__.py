"""
Result Sinks

This package provides the persistence side of the recorder: sinks
receive finished result documents and attachment bytes.

Usage:
    from allure_recorder.writer import FileSink, create_sink

    # Create from config (file + ALLURE_RESULTS_DIR)
    sink = create_sink()

    # Or create directly
    sink = FileSink("allure-results")
"""

# Factory
from .factory import create_sink

# Base
from .base import ResultSink

# Implementations
from .file import FileSink
from .memory import MemorySink

__all__ = [
    # Factory
    "create_sink",
    # Base
    "ResultSink",
    # Implementations
    "FileSink",
    "MemorySink",
]
