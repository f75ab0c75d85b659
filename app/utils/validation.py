"""Explicit field validation executed by services before persistence.

Collects every violation instead of stopping at the first one so the
boundary layer can report all rejected fields at once.
"""

from typing import Any, List, Optional

from email_validator import EmailNotValidError, validate_email

from app.exceptions import FieldViolation, ValidationFailedError

RATING_MIN = 1
RATING_MAX = 5


class FieldValidator:
    """Accumulates field violations and raises them together.

    Usage:
        validator = FieldValidator()
        validator.text("first_name", first_name, max_length=100)
        validator.email("email", email)
        validator.raise_if_invalid()
    """

    def __init__(self) -> None:
        self.errors: List[FieldViolation] = []

    def reject(self, field: str, value: Any, message: str) -> None:
        self.errors.append(FieldViolation(field, value, message))

    def text(
        self,
        field: str,
        value: Optional[str],
        *,
        max_length: Optional[int] = None,
        min_length: int = 1,
        required: bool = True,
    ) -> None:
        """Check a string field for presence and length."""
        if value is None or (isinstance(value, str) and not value.strip()):
            if required:
                self.reject(field, value, f"{field} is required")
            return
        if not isinstance(value, str):
            self.reject(field, value, f"{field} must be a string")
            return
        if max_length is None:
            if len(value) < min_length:
                self.reject(
                    field, value, f"{field} must be at least {min_length} characters"
                )
        elif len(value) < min_length or len(value) > max_length:
            self.reject(
                field,
                value,
                f"{field} must be between {min_length} and {max_length} characters",
            )

    def email(self, field: str, value: Optional[str], *, max_length: int = 255) -> None:
        """Check an email address for presence, length and syntax."""
        self.text(field, value, max_length=max_length)
        if not value or any(error.field == field for error in self.errors):
            return
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            self.reject(field, value, f"{field} should be a valid email address")

    def int_range(self, field: str, value: Any, *, minimum: int, maximum: int) -> None:
        """Check an integer field is present and within inclusive bounds."""
        if value is None:
            self.reject(field, value, f"{field} is required")
            return
        if isinstance(value, bool) or not isinstance(value, int):
            self.reject(field, value, f"{field} must be an integer")
            return
        if not minimum <= value <= maximum:
            self.reject(field, value, f"{field} must be between {minimum} and {maximum}")

    def required(self, field: str, value: Any) -> None:
        if value is None:
            self.reject(field, value, f"{field} is required")

    def raise_if_invalid(self) -> None:
        if self.errors:
            raise ValidationFailedError(self.errors)
