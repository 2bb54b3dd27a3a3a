"""Application service (use case) for back-office staff accounts.

Admins are deactivated rather than deleted. Passwords are hashed through
the :class:`PasswordHasher` port and never returned.
"""

import logging
import re

from backoffice.application.interfaces import AdminRepository, PasswordHasher
from backoffice.application.schemas.admin import AdminCreate, AdminUpdate
from backoffice.application.schemas.common import PaginationMeta
from backoffice.application.services.validation import check_email, check_pagination
from backoffice.domain.entities import Admin, AdminRole, AdminSession
from backoffice.domain.exceptions import (
    AdminNotFoundError,
    AuthenticationError,
    AuthorizationError,
    EmailAlreadyExistsError,
    FieldError,
    FieldValidationError,
    ValidationError,
)

logger = logging.getLogger(__name__)

PASSWORD_RULE = "Password must be at least 8 characters with uppercase, lowercase, and number"
_MIN_ID_LENGTH = 10


def is_strong_password(password: str) -> bool:
    return (
        len(password) >= 8
        and re.search(r"[a-z]", password) is not None
        and re.search(r"[A-Z]", password) is not None
        and re.search(r"\d", password) is not None
    )


class AdminService:
    """Orchestrates admin account logic. Depends on the repository and hasher ports (DI)."""

    def __init__(self, repository: AdminRepository, hasher: PasswordHasher):
        self._repository = repository
        self._hasher = hasher

    async def list_active_admins(self) -> list[Admin]:
        return await self._repository.list_active()

    async def list_admins(
        self,
        *,
        page: int = 1,
        limit: int = 25,
        search: str | None = None,
        role: AdminRole | None = None,
        is_active: bool | None = None,
    ) -> tuple[list[Admin], PaginationMeta]:
        check_pagination(page, limit)
        search = search.strip() if search else None
        admins = await self._repository.get_all(
            search=search,
            role=role,
            is_active=is_active,
            skip=(page - 1) * limit,
            limit=limit,
        )
        total = await self._repository.count(search=search, role=role, is_active=is_active)
        return admins, PaginationMeta.build(page, limit, total)

    async def get_admin(self, admin_id: str) -> Admin:
        if not admin_id or len(admin_id) < _MIN_ID_LENGTH:
            raise ValidationError("Invalid admin ID format")
        admin = await self._repository.get_by_id(admin_id)
        if admin is None:
            raise AdminNotFoundError(admin_id)
        return admin

    async def get_session(self, admin_id: str | None) -> AdminSession:
        """Resolve the id forwarded by the auth gateway to an active admin."""
        if not admin_id:
            raise AuthenticationError("Not authenticated")
        admin = await self._repository.get_by_id(admin_id)
        if admin is None or not admin.is_active:
            logger.warning("Rejected session for unknown or inactive admin %s", admin_id)
            raise AuthenticationError("Not authenticated")
        return AdminSession(
            admin_id=admin.id, email=admin.email, name=admin.name, role=admin.role
        )

    @staticmethod
    def authorize(session: AdminSession, required: AdminRole) -> AdminSession:
        if not session.can(required):
            logger.warning(
                "Admin %s (%s) denied %s access", session.admin_id, session.role.value, required.value
            )
            raise AuthorizationError()
        return session

    async def create_admin(self, data: AdminCreate) -> Admin:
        errors: list[FieldError] = []
        if not data.name:
            errors.append(FieldError("name", "Name is required"))
        check_email(errors, "email", data.email, "Email")
        if not data.password:
            errors.append(FieldError("password", "Password is required"))
        elif not is_strong_password(data.password):
            errors.append(FieldError("password", PASSWORD_RULE))
        if data.role is None:
            errors.append(FieldError("role", "Role is required"))
        if errors:
            raise FieldValidationError(errors)

        await self._check_duplicate_email(data.email)
        admin = await self._repository.create(
            Admin(
                email=data.email,
                name=data.name,
                password_hash=self._hasher.hash(data.password),
                role=data.role,
            )
        )
        logger.info("Created %s admin %s", admin.role.value, admin.email)
        return admin

    async def update_admin(self, admin_id: str, data: AdminUpdate) -> Admin:
        admin = await self.get_admin(admin_id)
        changes = data.model_dump(exclude_unset=True)

        errors: list[FieldError] = []
        if "name" in changes and not changes["name"]:
            errors.append(FieldError("name", "Name cannot be empty"))
        if "email" in changes:
            check_email(errors, "email", changes["email"], "Email", updating=True)
        if "role" in changes and changes["role"] is None:
            errors.append(FieldError("role", "Role cannot be empty"))
        if "is_active" in changes and changes["is_active"] is None:
            errors.append(FieldError("is_active", "Active flag cannot be empty"))
        password = changes.pop("password", None)
        if password and not is_strong_password(password):
            errors.append(FieldError("password", PASSWORD_RULE))
        if errors:
            raise FieldValidationError(errors)

        if changes.get("email") and changes["email"] != admin.email:
            await self._check_duplicate_email(changes["email"], exclude_id=admin_id)

        for name, value in changes.items():
            setattr(admin, name, value)
        if password:
            admin.password_hash = self._hasher.hash(password)

        updated = await self._repository.update(admin)
        logger.info("Updated admin %s", admin_id)
        return updated

    async def deactivate_admin(self, admin_id: str) -> Admin:
        return await self._set_active(admin_id, False)

    async def reactivate_admin(self, admin_id: str) -> Admin:
        return await self._set_active(admin_id, True)

    async def _set_active(self, admin_id: str, active: bool) -> Admin:
        admin = await self.get_admin(admin_id)
        admin.is_active = active
        updated = await self._repository.update(admin)
        logger.info("Admin %s %s", admin_id, "reactivated" if active else "deactivated")
        return updated

    async def _check_duplicate_email(self, email: str, exclude_id: str | None = None) -> None:
        if await self._repository.get_by_email(email, exclude_id=exclude_id) is not None:
            raise EmailAlreadyExistsError(email)
