"""Input checks shared by the services."""

import re
from typing import Any

from backoffice.domain.exceptions import FieldError, ValidationError

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MAX_PAGE_SIZE = 100


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_PATTERN.match(email))


def check_id(value: int | None, label: str) -> int:
    """Reject missing or non-positive ids with ``Invalid {label} ID``."""
    if not value or value < 1:
        raise ValidationError(f"Invalid {label} ID")
    return value


def check_pagination(page: int, limit: int) -> None:
    if page < 1:
        raise ValidationError("Page must be greater than 0")
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise ValidationError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")


def check_email(
    errors: list[FieldError], field: str, value: str | None, label: str, *, updating: bool = False
) -> None:
    """Append a field error when ``value`` is empty or malformed."""
    if not value:
        suffix = "cannot be empty" if updating else "is required"
        errors.append(FieldError(field, f"{label} {suffix}"))
    elif not is_valid_email(value):
        errors.append(FieldError(field, "Invalid email format"))


def check_not_negative(errors: list[FieldError], field: str, value: Any, label: str) -> None:
    if value is not None and value < 0:
        errors.append(FieldError(field, f"{label} cannot be negative"))
