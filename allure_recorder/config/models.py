"""
Typed configuration for the recorder.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_RESULTS_DIR = "allure-results"
DEFAULT_CONFIG_FILE = "allure-recorder.yaml"
RESULTS_DIR_ENV = "ALLURE_RESULTS_DIR"


@dataclass
class RecorderConfig:
    """Fully parsed and validated recorder configuration."""
    results_dir: str = DEFAULT_RESULTS_DIR
    indent: int | None = 2  # None writes compact JSON
    labels: dict[str, str] = field(default_factory=dict)  # applied to every test
