"""
Result Documents

This package defines the result document written for each finished
test and the classification of outcomes into statuses.

Features:
    - TestResult / TestStep / Attachment entity graph
    - Allure JSON wire format via to_dict() / to_json()
    - Parsing of existing result files via from_dict()
    - Outcome classification (passed / failed / broken / skipped)
    - Structural validation of result documents

Usage:
    from allure_recorder.reporting import Status, resolve_outcome

    status, details = resolve_outcome("boom")
    assert status == Status.FAILED
    assert details.message == "boom"
"""

# Models
from .models import (
    Attachment,
    Label,
    Link,
    Parameter,
    Stage,
    Status,
    StatusDetails,
    TestResult,
    TestStep,
)

# Outcome classification
from .outcome import GENERIC_STEP_FAILURE, GENERIC_TEST_FAILURE, resolve_outcome

# Validation
from .validation import ResultValidator, ValidationError, ValidationResult

__all__ = [
    # Models
    "Attachment",
    "Label",
    "Link",
    "Parameter",
    "Stage",
    "Status",
    "StatusDetails",
    "TestResult",
    "TestStep",
    # Outcome
    "GENERIC_STEP_FAILURE",
    "GENERIC_TEST_FAILURE",
    "resolve_outcome",
    # Validation
    "ResultValidator",
    "ValidationError",
    "ValidationResult",
]
