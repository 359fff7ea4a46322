"""
Sink factory for creating sinks from configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import ResultSink
from .file import FileSink

if TYPE_CHECKING:
    from ..config import RecorderConfig


def create_sink(config: RecorderConfig | None = None) -> ResultSink:
    """
    Create a sink from a RecorderConfig.

    Args:
        config: Recorder configuration. When omitted, the configuration is
            loaded with load_config() (config file plus environment).

    Returns:
        A FileSink writing to the configured results directory

    Raises:
        ValueError: If the configuration file is invalid

    Example:
        config, _ = load_config()
        sink = create_sink(config)
    """
    if config is None:
        from ..config import load_config

        config, validation = load_config()
        if config is None:
            raise ValueError(f"Invalid recorder configuration:\n{validation}")

    return FileSink(config.results_dir, indent=config.indent)
