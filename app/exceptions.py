"""Application exceptions."""

from dataclasses import dataclass
from typing import Any, Sequence


@dataclass(frozen=True, slots=True)
class FieldViolation:
    """A single rejected field value with a human-readable message."""

    field: str
    rejected_value: Any
    message: str


class AppError(Exception):
    """Base exception for application errors."""


class ModelError(AppError):
    """Base exception for model/database operations."""


class RecordNotFoundError(ModelError):
    """Raised when a lookup by id or unique key does not resolve."""

    def __init__(self, model_name: str, field: str, value: Any):
        self.model_name = model_name
        self.field = field
        self.value = value
        super().__init__(f"{model_name} not found with {field}: {value}")


class IntegrityViolationError(ModelError):
    """Raised when the database rejects a write (unique/FK constraint)."""

    def __init__(self, model_name: str, detail: str):
        self.model_name = model_name
        self.detail = detail
        super().__init__(f"Integrity constraint violation on {model_name}: {detail}")


class DatabaseConnectionError(ModelError):
    """Raised when the database is unreachable or a statement times out."""


class InvalidFilterError(ModelError):
    """Raised when invalid filter is provided."""


class DomainError(AppError):
    """Base exception for business-rule violations raised by services."""


class RecordAlreadyExistsError(DomainError):
    """Raised when a create or link would break a uniqueness rule."""

    def __init__(self, model_name: str, field: str, value: Any):
        self.model_name = model_name
        self.field = field
        self.value = value
        super().__init__(f"{model_name} already exists with {field}: {value}")


class IllegalStateError(DomainError):
    """Raised when an operation does not apply to the current state.

    Examples are enrolling a student twice or detaching details from an
    instructor that has none.
    """

    def __init__(self, model_name: str, message: str):
        self.model_name = model_name
        super().__init__(message)


class ValidationFailedError(DomainError):
    """Raised when field-level validation rejects input values."""

    def __init__(self, errors: Sequence[FieldViolation]):
        self.errors = list(errors)
        fields = ", ".join(error.field for error in self.errors)
        super().__init__(f"Validation failed for fields: {fields}")
