"""
Recorder Configuration

This package loads and validates the recorder configuration.

Usage:
    from allure_recorder.config import load_config

    # Load from file (or defaults when no file exists)
    config, result = load_config()
    if not result.is_valid:
        print(result)

    # ALLURE_RESULTS_DIR always overrides results_dir
"""

# Public API
from .loader import load_config, load_config_yaml

# Models
from .models import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_RESULTS_DIR,
    RESULTS_DIR_ENV,
    RecorderConfig,
)

# Validation
from .validation import ConfigValidator, ValidationError, ValidationResult

__all__ = [
    # Loader functions
    "load_config",
    "load_config_yaml",
    # Models
    "RecorderConfig",
    "DEFAULT_CONFIG_FILE",
    "DEFAULT_RESULTS_DIR",
    "RESULTS_DIR_ENV",
    # Validation
    "ConfigValidator",
    "ValidationError",
    "ValidationResult",
]
