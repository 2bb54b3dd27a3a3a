"""Domain entity for back-office staff accounts."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4


class AdminRole(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    READ_ONLY = "READ_ONLY"


_ROLE_RANK = {
    AdminRole.READ_ONLY: 1,
    AdminRole.ADMIN: 2,
    AdminRole.SUPER_ADMIN: 3,
}


def role_at_least(role: AdminRole, required: AdminRole) -> bool:
    """True when ``role`` carries every permission of ``required``."""
    return _ROLE_RANK[role] >= _ROLE_RANK[required]


@dataclass
class Admin:
    """A staff member allowed into the back-office. Deactivated, never deleted."""

    email: str
    name: str
    password_hash: str
    role: AdminRole = AdminRole.ADMIN
    id: str = field(default_factory=lambda: str(uuid4()))
    is_active: bool = True
    last_login: datetime | None = None
    failed_login_attempts: int = 0
    last_failed_attempt: datetime | None = None
    locked_until: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class AdminSession:
    """The authenticated staff member behind the current request."""

    admin_id: str
    email: str
    name: str
    role: AdminRole

    def can(self, required: AdminRole) -> bool:
        return role_at_least(self.role, required)
