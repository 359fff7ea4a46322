"""
allure-recorder - Allure result recorder for Python tests

This package records test executions as Allure result documents:
one JSON file per test, with nested steps and attachment side-files.

Subpackages:
    - context: ExecutionContext tracker plus test/step decorators
    - reporting: Result document models, outcome classification, validation
    - attachments: Attachment categories (MIME type + extension)
    - writer: Sinks persisting results and attachments
    - config: YAML configuration with environment overrides

Usage:
    from allure_recorder import allure_test, attach, step

    @step("Add {a} and {b}")
    def add(a, b):
        return a + b

    @allure_test("Addition works", suite="math")
    def check_addition():
        assert add(1, 2) == 3
        attach("numbers", {"a": 1, "b": 2})

    check_addition()  # writes allure-results/<uuid>-result.json
"""

__version__ = "0.1.0"

# Re-export errors for convenience
from .errors import (
    NoActiveTestError,
    RecorderError,
    SinkError,
    StepStackError,
)

# Re-export attachments for convenience
from .attachments import (
    AttachmentType,
    TypedAttachment,
)

# Re-export reporting for convenience
from .reporting import (
    # Models
    Attachment,
    Label,
    Link,
    Parameter,
    Stage,
    Status,
    StatusDetails,
    TestResult,
    TestStep,
    # Outcome
    resolve_outcome,
    # Validation
    ResultValidator,
    ValidationError,
    ValidationResult,
)

# Re-export writer for convenience
from .writer import (
    FileSink,
    MemorySink,
    ResultSink,
    create_sink,
)

# Re-export config for convenience
from .config import (
    RecorderConfig,
    load_config,
)

# Re-export context for convenience
from .context import (
    # Tracker
    ExecutionContext,
    compute_history_id,
    # Lifecycle
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
    # Package info
    "__version__",
    # Errors
    "NoActiveTestError",
    "RecorderError",
    "SinkError",
    "StepStackError",
    # Attachments
    "AttachmentType",
    "TypedAttachment",
    # Reporting - Models
    "Attachment",
    "Label",
    "Link",
    "Parameter",
    "Stage",
    "Status",
    "StatusDetails",
    "TestResult",
    "TestStep",
    # Reporting - Outcome
    "resolve_outcome",
    # Reporting - Validation
    "ResultValidator",
    "ValidationError",
    "ValidationResult",
    # Writer
    "FileSink",
    "MemorySink",
    "ResultSink",
    "create_sink",
    # Config
    "RecorderConfig",
    "load_config",
    # Context - Tracker
    "ExecutionContext",
    "compute_history_id",
    # Context - Lifecycle
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
