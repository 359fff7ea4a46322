"""
Structural validation of result documents.

Checks a parsed `<uuid>-result.json` document against the shape report
generators expect. Used by the `validate` CLI command.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..config.validation import ValidationError, ValidationResult
from .models import Stage, Status


class ResultValidator:
    """Validates a parsed result document."""

    REQUIRED_KEYS = {"uuid", "historyId", "name", "status", "stage", "start", "stop"}
    LIST_KEYS = ("labels", "parameters", "links", "steps", "attachments")
    VALID_STATUSES = {s.value for s in Status}
    VALID_STAGES = {s.value for s in Stage}

    def __init__(self, data: dict[str, Any], attachments_dir: str | Path | None = None):
        """
        Args:
            data: The parsed result document
            attachments_dir: If given, attachment sources must exist here
        """
        self.data = data
        self.attachments_dir = Path(attachments_dir) if attachments_dir is not None else None
        self.result = ValidationResult()

    def validate(self) -> ValidationResult:
        """Run all validation checks and return result."""
        missing = self.REQUIRED_KEYS - set(self.data.keys())
        for key in sorted(missing):
            self.result.add_error(key, f"Required field '{key}' is missing")
        if missing:
            return self.result

        for key in ("uuid", "historyId", "name"):
            if not isinstance(self.data[key], str) or not self.data[key]:
                self.result.add_error(key, "Must be a non-empty string", value=self.data[key])

        self._validate_outcome("", self.data)

        for key in self.LIST_KEYS:
            value = self.data.get(key, [])
            if not isinstance(value, list):
                self.result.add_error(key, "Must be a list", value=value)

        self._validate_pairs("labels", self.data.get("labels"))
        self._validate_pairs("parameters", self.data.get("parameters"))
        self._validate_steps("steps", self.data.get("steps"))
        self._validate_attachments("attachments", self.data.get("attachments"))
        return self.result

    def _validate_outcome(self, prefix: str, node: dict[str, Any]) -> None:
        status = node.get("status")
        if status not in self.VALID_STATUSES:
            self.result.add_error(
                f"{prefix}status",
                "Invalid status",
                value=status,
                suggestion=f"Valid statuses: {', '.join(sorted(self.VALID_STATUSES))}"
            )

        stage = node.get("stage")
        if stage not in self.VALID_STAGES:
            self.result.add_error(
                f"{prefix}stage",
                "Invalid stage",
                value=stage,
                suggestion=f"Valid stages: {', '.join(sorted(self.VALID_STAGES))}"
            )

        start, stop = node.get("start"), node.get("stop")
        if not _is_int(start):
            self.result.add_error(f"{prefix}start", "Must be an integer (epoch ms)", value=start)
        if not _is_int(stop):
            self.result.add_error(f"{prefix}stop", "Must be an integer (epoch ms)", value=stop)
        elif _is_int(start) and stage == Stage.FINISHED.value and stop < start:
            self.result.add_error(
                f"{prefix}stop",
                "Must not be earlier than start",
                value=stop
            )

        details = node.get("statusDetails")
        if details is not None and not isinstance(details, dict):
            self.result.add_error(f"{prefix}statusDetails", "Must be an object", value=details)

    def _validate_pairs(self, path: str, items: Any) -> None:
        if not isinstance(items, list):
            return
        for i, item in enumerate(items):
            if not isinstance(item, dict) or not {"name", "value"} <= set(item.keys()):
                self.result.add_error(
                    f"{path}[{i}]",
                    "Must be an object with 'name' and 'value'",
                    value=item
                )

    def _validate_steps(self, path: str, steps: Any) -> None:
        if not isinstance(steps, list):
            return
        for i, step in enumerate(steps):
            step_path = f"{path}[{i}]"
            if not isinstance(step, dict):
                self.result.add_error(step_path, "Must be an object", value=step)
                continue
            if not isinstance(step.get("name"), str):
                self.result.add_error(f"{step_path}.name", "Must be a string", value=step.get("name"))
            self._validate_outcome(f"{step_path}.", step)
            for key in ("steps", "attachments", "parameters"):
                if not isinstance(step.get(key, []), list):
                    self.result.add_error(f"{step_path}.{key}", "Must be a list", value=step.get(key))
            self._validate_pairs(f"{step_path}.parameters", step.get("parameters", []))
            self._validate_attachments(f"{step_path}.attachments", step.get("attachments", []))
            self._validate_steps(f"{step_path}.steps", step.get("steps", []))

    def _validate_attachments(self, path: str, attachments: Any) -> None:
        if not isinstance(attachments, list):
            return
        for i, attachment in enumerate(attachments):
            item_path = f"{path}[{i}]"
            if not isinstance(attachment, dict):
                self.result.add_error(item_path, "Must be an object", value=attachment)
                continue
            for key in ("name", "source", "type"):
                if not isinstance(attachment.get(key), str):
                    self.result.add_error(f"{item_path}.{key}", "Must be a string", value=attachment.get(key))
            source = attachment.get("source")
            if self.attachments_dir is not None and isinstance(source, str):
                if not (self.attachments_dir / source).exists():
                    self.result.add_error(
                        f"{item_path}.source",
                        "Attachment file not found",
                        value=source,
                        suggestion=f"Expected it in {self.attachments_dir}"
                    )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


__all__ = ["ResultValidator", "ValidationError", "ValidationResult"]
