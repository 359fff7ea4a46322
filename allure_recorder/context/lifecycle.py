"""
Decorators and context managers that instrument test code.

Each wrapper acquires a test or step on an ExecutionContext, runs the
user code, records an abnormal termination as the outcome, always runs
the end-of-scope bookkeeping, then re-raises the original exception
unchanged.

The context for the running test is bound to a ContextVar, so every
thread and asyncio task sees only its own test. Code that prefers
explicit wiring can pass `context=` everywhere instead.
"""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any, TypeVar

from ..attachments import AttachmentType
from ..errors import NoActiveTestError
from ..reporting.models import Attachment
from ..writer.base import ResultSink
from .tracker import ExecutionContext, ParametersLike, to_parameters

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_CURRENT: ContextVar[ExecutionContext | None] = ContextVar("allure_recorder_context", default=None)

# Process-wide defaults used when a test does not bring its own context
_default_sink: ResultSink | None = None
_default_labels: dict[str, str] = {}


# ─────────────────────────────────────────────────────────────────────────────
# Defaults & binding
# ─────────────────────────────────────────────────────────────────────────────

def configure(config: Any = None, sink: ResultSink | None = None) -> ResultSink:
    """
    Set the sink and default labels used by new contexts.

    Args:
        config: RecorderConfig; loaded with load_config() when omitted
        sink: Sink to use instead of one built from the config

    Returns:
        The sink now in use

    Raises:
        ValueError: If the configuration file is invalid
    """
    global _default_sink, _default_labels
    from ..config import load_config
    from ..writer import create_sink

    if config is None:
        config, validation = load_config()
        if config is None:
            raise ValueError(f"Invalid recorder configuration:\n{validation}")

    _default_sink = sink if sink is not None else create_sink(config)
    _default_labels = dict(config.labels)
    logger.debug(f"Recorder configured with {_default_sink!r}")
    return _default_sink


def new_context(sink: ResultSink | None = None) -> ExecutionContext:
    """Create a fresh ExecutionContext on the given or default sink."""
    if sink is None:
        sink = _default_sink if _default_sink is not None else configure()
    return ExecutionContext(sink, default_labels=_default_labels)


def current_context(operation: str = "record") -> ExecutionContext:
    """
    Return the context bound to the current thread or task.

    Raises:
        NoActiveTestError: If no test is running here
    """
    context = _CURRENT.get()
    if context is None:
        raise NoActiveTestError(operation)
    return context


@contextmanager
def context_scope(context: ExecutionContext) -> Iterator[ExecutionContext]:
    """Bind a context for the duration of a block."""
    token = _CURRENT.set(context)
    try:
        yield context
    finally:
        _CURRENT.reset(token)


# ─────────────────────────────────────────────────────────────────────────────
# Tests
# ─────────────────────────────────────────────────────────────────────────────

@contextmanager
def record_test(
    name: str,
    suite: str | None = None,
    module_path: str | None = None,
    description: str | None = None,
    context: ExecutionContext | None = None,
    sink: ResultSink | None = None,
) -> Iterator[ExecutionContext]:
    """
    Record one test around a block.

    Example:
        with record_test("checkout", suite="shop") as ctx:
            with step("add to cart"):
                ...
    """
    if context is None:
        context = new_context(sink)
    context.start_test(name, suite=suite, module_path=module_path, description=description)

    error: BaseException | None = None
    token = _CURRENT.set(context)
    try:
        yield context
    except BaseException as e:
        error = e
        raise
    finally:
        _CURRENT.reset(token)
        context.end_test(error=error)


def allure_test(
    title: str | Callable[..., Any] | None = None,
    *,
    suite: str | None = None,
    description: str | None = None,
    context: ExecutionContext | None = None,
    sink: ResultSink | None = None,
) -> Any:
    """
    Decorate a test function so each call is recorded as one test.

    The title defaults to the function name, the suite to the function's
    module and the description to its docstring. Works on plain and
    async functions, with or without arguments:

        @allure_test
        def test_login(): ...

        @allure_test("Checkout works", suite="shop")
        async def test_checkout(): ...
    """
    if callable(title):
        return allure_test()(title)

    def decorator(func: F) -> F:
        name = title or func.__name__
        test_description = description if description is not None else inspect.getdoc(func)

        def scope() -> Any:
            return record_test(
                name,
                suite=wrapper.allure_suite,
                module_path=func.__module__,
                description=test_description,
                context=context,
                sink=sink,
            )

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def wrapper(*args: Any, **kwargs: Any) -> Any:
                with scope():
                    return await func(*args, **kwargs)
        else:
            @functools.wraps(func)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                with scope():
                    return func(*args, **kwargs)

        wrapper.allure_suite = suite
        wrapper.__allure_test__ = True
        return wrapper  # type: ignore[return-value]

    return decorator


def allure_suite(name: str) -> Callable[[type], type]:
    """
    Class decorator assigning a suite to every @allure_test method that
    does not name its own.
    """
    def decorator(cls: type) -> type:
        for attr in vars(cls).values():
            if getattr(attr, "__allure_test__", False) and attr.allure_suite is None:
                attr.allure_suite = name
        return cls

    return decorator


# ─────────────────────────────────────────────────────────────────────────────
# Steps
# ─────────────────────────────────────────────────────────────────────────────

class StepContext:
    """
    A step usable as a context manager or a decorator.

    As a context manager it yields the ExecutionContext the step was
    opened on. As a decorator each call opens a fresh step and records
    the call's arguments as step parameters.
    """

    def __init__(
        self,
        title: str | None,
        parameters: ParametersLike = None,
        context: ExecutionContext | None = None,
    ):
        self.title = title
        self.parameters = to_parameters(parameters)
        self._context = context

    def __enter__(self) -> ExecutionContext:
        if not self.title:
            raise ValueError("A step used as a context manager needs a title")
        context = self._context or current_context("start a step")
        context.start_step(self.title, self.parameters)
        return context

    def __exit__(self, exc_type: Any, exc: BaseException | None, tb: Any) -> bool:
        # No per-entry state: one step object may be entered concurrently
        context = self._context or current_context("end a step")
        context.end_step(error=exc)
        return False

    def __call__(self, func: F) -> F:
        title = self.title or func.__name__
        bound_context = self._context

        def scope(args: tuple[Any, ...], kwargs: dict[str, Any]) -> StepContext:
            arguments = _bind_arguments(func, args, kwargs)
            parameters = [(name, repr(value)) for name, value in arguments.items()]
            return StepContext(_format_title(title, arguments), parameters, bound_context)

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def wrapper(*args: Any, **kwargs: Any) -> Any:
                with scope(args, kwargs):
                    return await func(*args, **kwargs)
        else:
            @functools.wraps(func)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                with scope(args, kwargs):
                    return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]


def step(
    title: str | Callable[..., Any] | None = None,
    parameters: ParametersLike = None,
    context: ExecutionContext | None = None,
) -> Any:
    """
    Open a step.

        with step("Log in", {"user": "alice"}):
            ...

        @step("Add {item}")
        def add_item(item): ...

        @step
        def checkout(): ...
    """
    if callable(title):
        return StepContext(None, context=context)(title)
    return StepContext(title, parameters, context)


def _bind_arguments(func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]) -> dict[str, Any]:
    try:
        bound = inspect.signature(func).bind(*args, **kwargs)
    except (TypeError, ValueError):
        # The call itself will raise; the step records that failure
        return {}
    bound.apply_defaults()
    return {
        name: value
        for name, value in bound.arguments.items()
        if name not in ("self", "cls")
    }


def _format_title(title: str, arguments: dict[str, Any]) -> str:
    if "{" not in title:
        return title
    try:
        return title.format(**arguments)
    except Exception as e:
        logger.debug(f"Step title {title!r} not formatted: {type(e).__name__}: {e}")
        return title


# ─────────────────────────────────────────────────────────────────────────────
# Helpers on the bound context
# ─────────────────────────────────────────────────────────────────────────────

def attach(
    name: str,
    content: Any,
    attachment_type: AttachmentType | None = None,
) -> Attachment:
    """Attach a payload to the innermost open step or the running test."""
    return current_context("attach").add_attachment(name, content, attachment_type)


def attach_file(
    path: str | Path,
    name: str | None = None,
    attachment_type: AttachmentType | None = None,
) -> Attachment:
    """Attach an existing file to the innermost open step or the running test."""
    return current_context("attach a file").add_attachment_file(path, name, attachment_type)


def label(name: str, value: str) -> None:
    current_context("add a label").add_label(name, value)


def link(url: str, name: str | None = None, link_type: str = "link") -> None:
    current_context("add a link").add_link(url, name, link_type)


def parameter(name: str, value: Any) -> None:
    current_context("add a parameter").add_parameter(name, value)


def description(text: str) -> None:
    current_context("set a description").set_description(text)
