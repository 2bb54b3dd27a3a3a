"""Domain-specific exceptions, framework-independent.

Two families:

* ``AppError``: expected, operational failures (bad input, missing rows,
  conflicts, auth). Their message is safe to show to back-office staff.
* ``InfrastructureError``: infrastructure or invariant failures. Their message is
  logged but never shown.
"""

from dataclasses import dataclass
from typing import Any


class AppError(Exception):
    """Base class for all operational application errors."""

    code = "APP_ERROR"

    def __init__(self, message: str, details: Any = None):
        self.message = message
        self.details = details
        super().__init__(message)


# ── Validation ───────────────────────────────────────────────────────


class ValidationError(AppError):
    """Raised when input or a business rule check fails."""

    code = "VALIDATION_ERROR"


@dataclass
class FieldError:
    """One failed field check, addressable by the form that sent it."""

    field: str
    message: str


class FieldValidationError(ValidationError):
    """Raised when one or more individual fields fail validation."""

    def __init__(self, fields: list[FieldError], message: str = "Validation failed"):
        self.fields = fields
        super().__init__(message, details={"fields": [f.__dict__ for f in fields]})


# ── Not found ────────────────────────────────────────────────────────


class NotFoundError(AppError):
    """Raised when a requested entity does not exist."""

    code = "NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: int | str | None = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        if entity_id is None:
            message = f"{entity_type} not found"
        else:
            message = f"{entity_type} with id '{entity_id}' not found"
        super().__init__(message, details={"entity": entity_type, "id": entity_id})


class ClientNotFoundError(NotFoundError):
    def __init__(self, client_id: int):
        super().__init__("Client", client_id)


class ContractNotFoundError(NotFoundError):
    def __init__(self, contract_id: int):
        super().__init__("Contract", contract_id)


class CaseNotFoundError(NotFoundError):
    def __init__(self, case_id: int | str):
        super().__init__("Case", case_id)


class InteractionNotFoundError(NotFoundError):
    def __init__(self, interaction_id: int):
        super().__init__("Interaction", interaction_id)


class AdminNotFoundError(NotFoundError):
    def __init__(self, admin_id: str):
        super().__init__("Admin user", admin_id)


# ── Conflicts ────────────────────────────────────────────────────────


class ConflictError(AppError):
    """Raised when a change conflicts with existing data."""

    code = "CONFLICT"


class EmailAlreadyExistsError(ConflictError):
    """Raised when another admin user already holds the email."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(
            f"User with email '{email}' already exists", details={"email": email}
        )


# ── Authentication / authorization ───────────────────────────────────


class AuthenticationError(AppError):
    code = "AUTHENTICATION_ERROR"
    status_code = 401

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)


class AuthorizationError(AppError):
    code = "AUTHORIZATION_ERROR"
    status_code = 403

    def __init__(self, message: str = "You are not authorized to perform this action"):
        super().__init__(message)


# ── System ───────────────────────────────────────────────────────────


class InfrastructureError(Exception):
    """Base class for infrastructure-level failures. Never shown to users."""

    code = "SYSTEM_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvariantViolationError(InfrastructureError):
    """Raised when a should-never-happen consistency check fails."""

    code = "INVARIANT_VIOLATION"
