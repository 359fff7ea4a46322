"""
Execution Context Tracking

This package records a running test: the ExecutionContext holds its
state, and the lifecycle helpers wrap test and step code around it.

Usage:
    from allure_recorder.context import allure_test, attach, step

    @step("Log in as {user}")
    def log_in(user):
        attach("credentials", {"user": user})

    @allure_test("Login works", suite="auth")
    def check_login():
        log_in("alice")
        with step("Verify dashboard"):
            ...
"""

# Tracker
from .tracker import (
    DANGLING_STEP_MESSAGE,
    ExecutionContext,
    compute_history_id,
    now_ms,
)

# Lifecycle helpers
from .lifecycle import (
    StepContext,
    allure_suite,
    allure_test,
    attach,
    attach_file,
    configure,
    context_scope,
    current_context,
    description,
    label,
    link,
    new_context,
    parameter,
    record_test,
    step,
)

__all__ = [
    # Tracker
    "DANGLING_STEP_MESSAGE",
    "ExecutionContext",
    "compute_history_id",
    "now_ms",
    # Lifecycle
    "StepContext",
    "allure_suite",
    "allure_test",
    "attach",
    "attach_file",
    "configure",
    "context_scope",
    "current_context",
    "description",
    "label",
    "link",
    "new_context",
    "parameter",
    "record_test",
    "step",
]
