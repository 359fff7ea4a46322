"""
Validation for recorder configuration files.

This module contains the validation result types shared by the
configuration loader and the result document validator, and the
checks applied to a raw parsed YAML configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


# ─────────────────────────────────────────────────────────────────────────────
# Validation Result Types
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ValidationError:
    """Represents a single validation error with context."""
    path: str  # e.g., "labels.owner"
    message: str
    value: Any = None
    suggestion: str | None = None

    def __str__(self) -> str:
        parts = [f"❌ {self.path}: {self.message}"]
        if self.value is not None:
            parts.append(f"   Got: {repr(self.value)}")
        if self.suggestion:
            parts.append(f"   💡 {self.suggestion}")
        return "\n".join(parts)


@dataclass
class ValidationResult:
    """Result of a validation pass."""
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(
        self,
        path: str,
        message: str,
        value: Any = None,
        suggestion: str | None = None
    ) -> None:
        self.errors.append(ValidationError(path, message, value, suggestion))

    def extend(self, other: ValidationResult, prefix: str = "") -> None:
        """Merge another result's errors, optionally prefixing their paths."""
        for error in other.errors:
            path = f"{prefix}{error.path}" if prefix else error.path
            self.errors.append(ValidationError(path, error.message, error.value, error.suggestion))

    def __str__(self) -> str:
        if self.is_valid:
            return "✅ Validation passed"
        lines = [f"Validation failed with {len(self.errors)} error(s):\n"]
        lines.extend(str(e) for e in self.errors)
        return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Config Validator
# ─────────────────────────────────────────────────────────────────────────────

class ConfigValidator:
    """Validates raw parsed YAML against the configuration schema."""

    KNOWN_KEYS = {"results_dir", "indent", "labels"}

    def __init__(self, data: dict[str, Any]):
        self.data = data
        self.result = ValidationResult()

    def validate(self) -> ValidationResult:
        """Run all validation checks and return result."""
        self._validate_keys()
        self._validate_results_dir()
        self._validate_indent()
        self._validate_labels()
        return self.result

    def _validate_keys(self) -> None:
        unknown = set(self.data.keys()) - self.KNOWN_KEYS
        for key in sorted(unknown, key=str):
            self.result.add_error(
                str(key),
                f"Unknown field '{key}'",
                suggestion=f"Valid fields are: {', '.join(sorted(self.KNOWN_KEYS))}"
            )

    def _validate_results_dir(self) -> None:
        if "results_dir" not in self.data:
            return
        results_dir = self.data["results_dir"]
        if not isinstance(results_dir, str):
            self.result.add_error(
                "results_dir",
                "Must be a string",
                value=results_dir
            )
        elif not results_dir.strip():
            self.result.add_error(
                "results_dir",
                "Cannot be empty",
                suggestion="Use 'results_dir: allure-results'"
            )

    def _validate_indent(self) -> None:
        if "indent" not in self.data:
            return
        indent = self.data["indent"]
        # bool is an int subclass; reject it explicitly
        if indent is None:
            return
        if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
            self.result.add_error(
                "indent",
                "Must be a non-negative integer or null",
                value=indent,
                suggestion="Use 'indent: 2', or 'indent: null' for compact output"
            )

    def _validate_labels(self) -> None:
        labels = self.data.get("labels")
        if labels is None:
            return
        if not isinstance(labels, dict):
            self.result.add_error(
                "labels",
                "Must be an object (label name to value)",
                value=labels
            )
            return

        for name, value in labels.items():
            if not isinstance(name, str) or not name.strip():
                self.result.add_error(
                    "labels",
                    "Label names must be non-empty strings",
                    value=name
                )
            elif not isinstance(value, (str, int, float)) or isinstance(value, bool):
                self.result.add_error(
                    f"labels.{name}",
                    "Label values must be strings or numbers",
                    value=value
                )
