"""
Result document models.

This module defines the entity graph written for one finished test:
the result itself, its nested steps, attachments, labels, parameters
and links. Field names in to_dict() are the Allure wire format.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Status(str, Enum):
    """Terminal outcome of a test or step."""
    PASSED = "passed"
    FAILED = "failed"
    BROKEN = "broken"
    SKIPPED = "skipped"


class Stage(str, Enum):
    """Whether a test or step is still running."""
    RUNNING = "running"
    FINISHED = "finished"


# ─────────────────────────────────────────────────────────────────────────────
# Leaf records
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class StatusDetails:
    """Failure detail attached to a non-passed outcome."""
    message: str | None = None
    trace: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.message is not None:
            result["message"] = self.message
        if self.trace is not None:
            result["trace"] = self.trace
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StatusDetails:
        return cls(message=data.get("message"), trace=data.get("trace"))


@dataclass(frozen=True)
class Attachment:
    """A file persisted by the sink and referenced from a step or test."""
    name: str
    source: str  # filename returned by the sink
    type: str  # MIME type

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "source": self.source, "type": self.type}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Attachment:
        return cls(name=data["name"], source=data["source"], type=data["type"])


@dataclass(frozen=True)
class Label:
    name: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class Parameter:
    name: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class Link:
    url: str
    name: str = ""
    type: str = "link"  # "link", "issue" or "tms"

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name or self.url, "url": self.url, "type": self.type}


# ─────────────────────────────────────────────────────────────────────────────
# Steps
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class TestStep:
    """
    Record of a single step.

    A step is created running by the execution context and finished
    exactly once. It exclusively owns its child steps and attachments.
    """
    __test__ = False

    name: str
    status: Status = Status.PASSED
    status_details: StatusDetails | None = None
    stage: Stage = Stage.RUNNING
    start: int = 0
    stop: int = 0  # 0 while running
    steps: list[TestStep] = field(default_factory=list)
    attachments: list[Attachment] = field(default_factory=list)
    parameters: list[Parameter] = field(default_factory=list)

    @property
    def is_running(self) -> bool:
        return self.stage == Stage.RUNNING

    def finish(self, stop: int, status: Status, details: StatusDetails | None = None) -> None:
        """Mark the step finished with the given outcome."""
        self.stop = max(stop, self.start)
        self.stage = Stage.FINISHED
        self.status = status
        self.status_details = details

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        result: dict[str, Any] = {
            "name": self.name,
            "status": self.status.value,
        }
        if self.status_details is not None:
            result["statusDetails"] = self.status_details.to_dict()
        result.update({
            "stage": self.stage.value,
            "start": self.start,
            "stop": self.stop,
            "steps": [step.to_dict() for step in self.steps],
            "attachments": [a.to_dict() for a in self.attachments],
            "parameters": [p.to_dict() for p in self.parameters],
        })
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TestStep:
        details = data.get("statusDetails")
        return cls(
            name=data["name"],
            status=Status(data["status"]),
            status_details=StatusDetails.from_dict(details) if details else None,
            stage=Stage(data.get("stage", Stage.FINISHED.value)),
            start=data.get("start", 0),
            stop=data.get("stop", 0),
            steps=[cls.from_dict(s) for s in data.get("steps", [])],
            attachments=[Attachment.from_dict(a) for a in data.get("attachments", [])],
            parameters=[Parameter(p["name"], str(p["value"])) for p in data.get("parameters", [])],
        )


# ─────────────────────────────────────────────────────────────────────────────
# Test result
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TestResult:
    """
    Complete record of one finished test.

    Built once by ExecutionContext.end_test() and handed to the sink.
    Sequences are tuples so the document cannot change after assembly.
    """
    __test__ = False

    uuid: str
    history_id: str
    name: str
    status: Status
    start: int
    stop: int
    full_name: str | None = None
    description: str | None = None
    status_details: StatusDetails | None = None
    stage: Stage = Stage.FINISHED
    labels: tuple[Label, ...] = ()
    parameters: tuple[Parameter, ...] = ()
    links: tuple[Link, ...] = ()
    steps: tuple[TestStep, ...] = ()
    attachments: tuple[Attachment, ...] = ()

    @property
    def filename(self) -> str:
        """Name of the file this result is persisted under."""
        return f"{self.uuid}-result.json"

    @property
    def duration_ms(self) -> int:
        return self.stop - self.start

    def label(self, name: str) -> str | None:
        """Return the value of the first label with the given name."""
        for label in self.labels:
            if label.name == name:
                return label.value
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        result: dict[str, Any] = {
            "uuid": self.uuid,
            "historyId": self.history_id,
            "name": self.name,
        }
        if self.full_name is not None:
            result["fullName"] = self.full_name
        if self.description is not None:
            result["description"] = self.description
        result["status"] = self.status.value
        if self.status_details is not None:
            result["statusDetails"] = self.status_details.to_dict()
        result.update({
            "stage": self.stage.value,
            "start": self.start,
            "stop": self.stop,
            "labels": [label.to_dict() for label in self.labels],
            "parameters": [p.to_dict() for p in self.parameters],
            "links": [link.to_dict() for link in self.links],
            "steps": [step.to_dict() for step in self.steps],
            "attachments": [a.to_dict() for a in self.attachments],
        })
        return result

    def to_json(self, indent: int | None = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TestResult:
        """Rebuild a result from a parsed result document."""
        details = data.get("statusDetails")
        return cls(
            uuid=data["uuid"],
            history_id=data.get("historyId", ""),
            name=data["name"],
            full_name=data.get("fullName"),
            description=data.get("description"),
            status=Status(data["status"]),
            status_details=StatusDetails.from_dict(details) if details else None,
            stage=Stage(data.get("stage", Stage.FINISHED.value)),
            start=data.get("start", 0),
            stop=data.get("stop", 0),
            labels=tuple(Label(label["name"], str(label["value"])) for label in data.get("labels", [])),
            parameters=tuple(Parameter(p["name"], str(p["value"])) for p in data.get("parameters", [])),
            links=tuple(
                Link(url=link["url"], name=link.get("name", ""), type=link.get("type", "link"))
                for link in data.get("links", [])
            ),
            steps=tuple(TestStep.from_dict(s) for s in data.get("steps", [])),
            attachments=tuple(Attachment.from_dict(a) for a in data.get("attachments", [])),
        )
