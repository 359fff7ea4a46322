"""
Configuration loader for the recorder.

This module provides the public API for loading and validating the
recorder configuration from a YAML file or string, with environment
overrides applied on top.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .models import DEFAULT_CONFIG_FILE, RESULTS_DIR_ENV, RecorderConfig
from .validation import ConfigValidator, ValidationResult

logger = logging.getLogger(__name__)


def load_config(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> tuple[RecorderConfig | None, ValidationResult]:
    """
    Load and validate the recorder configuration.

    Args:
        path: Path to a YAML config file. When omitted, DEFAULT_CONFIG_FILE
            in the working directory is used if it exists, otherwise the
            built-in defaults.
        environ: Environment mapping for overrides (defaults to os.environ)

    Returns:
        Tuple of (RecorderConfig or None, ValidationResult)
        If validation fails, RecorderConfig will be None.

    Example:
        config, result = load_config("allure-recorder.yaml")
        if not result.is_valid:
            print(result)
            sys.exit(1)
    """
    environ = os.environ if environ is None else environ

    if path is None:
        default = Path(DEFAULT_CONFIG_FILE)
        if not default.exists():
            return _apply_env(RecorderConfig(), environ), ValidationResult()
        path = default

    path = Path(path)

    # Check file exists
    if not path.exists():
        result = ValidationResult()
        result.add_error(
            str(path),
            "File not found",
            suggestion="Check the file path is correct"
        )
        return None, result

    # Parse YAML
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error(
            str(path),
            f"Invalid YAML syntax: {e}",
            suggestion="Check YAML formatting (indentation, colons, etc.)"
        )
        return None, result

    logger.debug(f"Loaded recorder config from {path}")
    return _from_data(data, str(path), environ)


def load_config_yaml(
    yaml_string: str,
    environ: Mapping[str, str] | None = None,
) -> tuple[RecorderConfig | None, ValidationResult]:
    """
    Validate a configuration from a YAML string (useful for testing).

    Args:
        yaml_string: YAML content as a string
        environ: Environment mapping for overrides (defaults to os.environ)

    Returns:
        Tuple of (RecorderConfig or None, ValidationResult)
    """
    environ = os.environ if environ is None else environ
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error("yaml", f"Invalid YAML syntax: {e}")
        return None, result

    return _from_data(data, "yaml", environ)


def _from_data(
    data: Any,
    origin: str,
    environ: Mapping[str, str],
) -> tuple[RecorderConfig | None, ValidationResult]:
    # An empty file is a valid, all-defaults config
    if data is None:
        data = {}

    if not isinstance(data, dict):
        result = ValidationResult()
        result.add_error(
            origin,
            "Config must be a YAML object (not a list or scalar)",
            value=type(data).__name__
        )
        return None, result

    validator = ConfigValidator(data)
    result = validator.validate()

    if not result.is_valid:
        return None, result

    config = RecorderConfig(
        results_dir=data.get("results_dir", RecorderConfig.results_dir),
        indent=data.get("indent", RecorderConfig.indent),
        labels={name: str(value) for name, value in (data.get("labels") or {}).items()},
    )
    return _apply_env(config, environ), result


def _apply_env(config: RecorderConfig, environ: Mapping[str, str]) -> RecorderConfig:
    results_dir = environ.get(RESULTS_DIR_ENV)
    if results_dir:
        logger.debug(f"{RESULTS_DIR_ENV} overrides results_dir: {results_dir}")
        config.results_dir = results_dir
    return config
