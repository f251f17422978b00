"""Exception hierarchy for the import pipeline.

Validation problems are never raised; they are returned as
``ValidationViolation`` values. Exceptions here cover preconditions,
coercion, persistence and state-machine misuse.
"""


class WorkloadImportError(Exception):
    """Base class for all import pipeline errors."""


class InvalidFileError(WorkloadImportError):
    """Uploaded file is not of the accepted tabular content type."""

    def __init__(self, name: str, content_type: str | None) -> None:
        self.name = name
        self.content_type = content_type
        super().__init__("Please select a valid CSV file")


class ConversionError(WorkloadImportError, ValueError):
    """A cell value could not be coerced to its field's type."""

    def __init__(self, row: int, field: str, value: str) -> None:
        self.row = row
        self.field = field
        self.value = value
        super().__init__(f"Row {row}: cannot convert {field}={value!r} to a number")


class ImportFailedError(WorkloadImportError):
    """The bulk-write collaborator rejected the batch."""

    def __init__(self, entity: str, reason: str) -> None:
        self.entity = entity
        self.reason = reason
        super().__init__(f"Import of {entity} failed: {reason}")


class InvalidTransitionError(WorkloadImportError, RuntimeError):
    """An import session was asked to make an illegal state change."""


class NotAuthenticatedError(WorkloadImportError):
    """No caller identity is available for a write."""
