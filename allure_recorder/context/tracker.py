"""
Execution context for one in-flight test.

The ExecutionContext owns the mutable state of a running test: the
stack of open steps, the finished top-level steps, the test-level
attachments and the result metadata. When the test ends it assembles
an immutable TestResult and hands it to the sink.

One context serves one test at a time. Concurrent tests each need
their own context; nothing here is locked.
"""

from __future__ import annotations

import hashlib
import logging
import uuid
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Union

from ..attachments import AttachmentType, prepare
from ..errors import StepStackError
from ..reporting.models import (
    Attachment,
    Label,
    Link,
    Parameter,
    Status,
    StatusDetails,
    TestResult,
    TestStep,
)
from ..reporting.outcome import GENERIC_STEP_FAILURE, GENERIC_TEST_FAILURE, resolve_outcome
from ..writer.base import ResultSink

logger = logging.getLogger(__name__)

DANGLING_STEP_MESSAGE = "Step was still running when the test ended"

ParametersLike = Union[Mapping[str, Any], Iterable[Union[Parameter, tuple[str, Any]]], None]


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def compute_history_id(full_name: str, parameters: Iterable[Parameter] = ()) -> str:
    """
    Compute a stable history id for a test.

    The same full name and parameter values always produce the same id,
    so a report generator can correlate one logical test across runs.

    Args:
        full_name: Suite-qualified test name
        parameters: Test-level parameters

    Returns:
        md5 hex digest
    """
    digest = hashlib.md5(full_name.encode("utf-8"))
    for param in sorted(parameters, key=lambda p: p.name):
        digest.update(f"\x00{param.name}={param.value}".encode("utf-8"))
    return digest.hexdigest()


def to_parameters(parameters: ParametersLike) -> list[Parameter]:
    """Normalize a mapping or sequence of pairs into Parameter records."""
    if parameters is None:
        return []
    if isinstance(parameters, Mapping):
        items: Iterable[Any] = parameters.items()
    else:
        items = parameters

    result: list[Parameter] = []
    for item in items:
        if isinstance(item, Parameter):
            result.append(item)
        else:
            name, value = item
            result.append(Parameter(str(name), value if isinstance(value, str) else str(value)))
    return result


class ExecutionContext:
    """
    Live state of one running test.

    Example:
        context = ExecutionContext(FileSink("allure-results"))
        context.start_test("login works", suite="auth")

        context.start_step("open page")
        context.add_attachment("page", "<html></html>", AttachmentType.HTML)
        context.end_step()

        result = context.end_test()
        print(result.status)  # Status.PASSED
    """

    def __init__(
        self,
        sink: ResultSink,
        clock: Callable[[], int] | None = None,
        default_labels: Mapping[str, str] | None = None,
    ):
        """
        Args:
            sink: Receives attachments as they are added and the result at the end
            clock: Returns the current time in epoch ms (defaults to wall clock)
            default_labels: Labels added to every test recorded by this context
        """
        self.sink = sink
        self._clock = clock or now_ms
        self.default_labels = dict(default_labels or {})
        self._reset("")

    def _reset(self, name: str) -> None:
        self.uuid = str(uuid.uuid4())
        self.name = name
        self.suite: str | None = None
        self.description: str | None = None
        self.start = self._clock()
        self._open_steps: list[TestStep] = []
        self._steps: list[TestStep] = []
        self._attachments: list[Attachment] = []
        self._labels: list[Label] = []
        self._links: list[Link] = []
        self._parameters: list[Parameter] = []
        self._active = False

    # ─────────────────────────────────────────────────────────────────────
    # Introspection
    # ─────────────────────────────────────────────────────────────────────

    @property
    def is_active(self) -> bool:
        """True between start_test() and end_test()."""
        return self._active

    @property
    def full_name(self) -> str:
        return f"{self.suite}.{self.name}" if self.suite else self.name

    @property
    def open_steps(self) -> tuple[TestStep, ...]:
        """Currently open steps, outermost first."""
        return tuple(self._open_steps)

    @property
    def current_step(self) -> TestStep | None:
        """The innermost open step, if any."""
        return self._open_steps[-1] if self._open_steps else None

    @property
    def steps(self) -> tuple[TestStep, ...]:
        """Finished top-level steps recorded so far."""
        return tuple(self._steps)

    @property
    def attachments(self) -> tuple[Attachment, ...]:
        """Test-level attachments recorded so far."""
        return tuple(self._attachments)

    # ─────────────────────────────────────────────────────────────────────
    # Test lifecycle
    # ─────────────────────────────────────────────────────────────────────

    def start_test(
        self,
        name: str,
        suite: str | None = None,
        module_path: str | None = None,
        description: str | None = None,
    ) -> None:
        """
        Begin a new test, discarding any state left from a previous one.

        Args:
            name: Test name shown in the report
            suite: Suite name; takes precedence over module_path
            module_path: Module path the suite is derived from when no
                suite is given ("a::b" and "a.b" both become "a.b")
            description: Optional description
        """
        if self._active:
            logger.warning(
                f"Test {self.name!r} was never ended; discarding it to start {name!r}"
            )
        self._reset(name)
        if suite:
            self.suite = suite
        elif module_path:
            self.suite = module_path.replace("::", ".")
        self.description = description
        self._active = True
        logger.debug(f"Started test {self.full_name!r} ({self.uuid})")

    def end_test(self, name: str | None = None, error: Any = None) -> TestResult:
        """
        Finish the test and hand the assembled result to the sink.

        Steps still open are closed as broken first, so a result is always
        produced even when instrumentation did not unwind cleanly.

        Args:
            name: Overrides the name given to start_test()
            error: None on success, otherwise the failure payload
                (exception, message string or any other value)

        Returns:
            The TestResult that was persisted

        Raises:
            SinkError: If the sink cannot persist the result
        """
        while self._open_steps:
            dangling = self._open_steps[-1]
            logger.warning(f"Closing unfinished step {dangling.name!r} as broken")
            self._close_step(Status.BROKEN, StatusDetails(message=DANGLING_STEP_MESSAGE))

        if name is not None:
            self.name = name

        stop = max(self._clock(), self.start)
        status, details = resolve_outcome(error, GENERIC_TEST_FAILURE)

        result = TestResult(
            uuid=self.uuid,
            history_id=compute_history_id(self.full_name, self._parameters),
            name=self.name,
            full_name=self.full_name,
            description=self.description,
            status=status,
            status_details=details,
            start=self.start,
            stop=stop,
            labels=tuple(self._build_labels()),
            parameters=tuple(self._parameters),
            links=tuple(self._links),
            steps=tuple(self._steps),
            attachments=tuple(self._attachments),
        )
        self._active = False
        logger.debug(f"Ended test {result.full_name!r}: {status.value}")

        self.sink.persist_result(result)
        return result

    def _build_labels(self) -> list[Label]:
        labels: list[Label] = []
        if self.suite:
            labels.append(Label("suite", self.suite))
        for label_name, value in self.default_labels.items():
            labels.append(Label(label_name, value))
        labels.extend(self._labels)
        return labels

    # ─────────────────────────────────────────────────────────────────────
    # Steps
    # ─────────────────────────────────────────────────────────────────────

    def start_step(self, name: str, parameters: ParametersLike = None) -> TestStep:
        """
        Open a step nested inside the current innermost open step.

        Args:
            name: Step name
            parameters: Mapping or (name, value) pairs recorded on the step

        Returns:
            The running step
        """
        step = TestStep(
            name=name,
            start=self._clock(),
            parameters=to_parameters(parameters),
        )
        self._open_steps.append(step)
        logger.debug(f"Started step {name!r} at depth {len(self._open_steps)}")
        return step

    def end_step(self, error: Any = None) -> TestStep:
        """
        Close the innermost open step.

        The closed step becomes a child of the step below it on the stack,
        or a top-level step of the test when the stack is now empty.

        Args:
            error: None on success, otherwise the failure payload

        Returns:
            The finished step

        Raises:
            StepStackError: If no step is open
        """
        if not self._open_steps:
            raise StepStackError("end_step() called with no open step")
        status, details = resolve_outcome(error, GENERIC_STEP_FAILURE)
        return self._close_step(status, details)

    def _close_step(self, status: Status, details: StatusDetails | None) -> TestStep:
        step = self._open_steps.pop()
        step.finish(self._clock(), status, details)

        if self._open_steps:
            self._open_steps[-1].steps.append(step)
        else:
            self._steps.append(step)

        logger.debug(f"Ended step {step.name!r}: {status.value}")
        return step

    # ─────────────────────────────────────────────────────────────────────
    # Attachments
    # ─────────────────────────────────────────────────────────────────────

    def add_attachment(
        self,
        name: str,
        content: Any,
        attachment_type: AttachmentType | None = None,
    ) -> Attachment:
        """
        Persist an attachment and record it on the innermost open step,
        or on the test when no step is open.

        Args:
            name: Display name
            content: str, bytes, dict/list (stored as JSON) or TypedAttachment
            attachment_type: Explicit category overriding the payload default

        Returns:
            The recorded Attachment

        Raises:
            TypeError: If the payload type is not supported
            SinkError: If the sink cannot persist the bytes
        """
        data, resolved = prepare(content, attachment_type)
        source = self.sink.persist_attachment(data, resolved.extension)
        attachment = Attachment(name=name, source=source, type=resolved.mime_type)

        step = self.current_step
        if step is not None:
            step.attachments.append(attachment)
        else:
            self._attachments.append(attachment)
        return attachment

    def add_attachment_file(
        self,
        path: str | Path,
        name: str | None = None,
        attachment_type: AttachmentType | None = None,
    ) -> Attachment:
        """
        Attach an existing file, inferring its category from the extension.

        Unknown extensions are stored as text.
        """
        path = Path(path)
        if attachment_type is None:
            attachment_type = AttachmentType.from_extension(path.suffix) or AttachmentType.TEXT
        return self.add_attachment(name or path.name, path.read_bytes(), attachment_type)

    # ─────────────────────────────────────────────────────────────────────
    # Metadata
    # ─────────────────────────────────────────────────────────────────────

    def add_label(self, name: str, value: str) -> None:
        self._labels.append(Label(name, str(value)))

    def add_link(self, url: str, name: str | None = None, link_type: str = "link") -> None:
        self._links.append(Link(url=url, name=name or url, type=link_type))

    def add_parameter(self, name: str, value: Any) -> None:
        """Record a test-level parameter (also feeds the history id)."""
        self._parameters.extend(to_parameters([(name, value)]))

    def set_description(self, description: str) -> None:
        self.description = description

    def __repr__(self) -> str:
        state = "active" if self._active else "idle"
        return (
            f"ExecutionContext(test={self.full_name!r}, {state}, "
            f"open_steps={len(self._open_steps)})"
        )
