"""Pydantic DTOs for back-office staff accounts. Password hashes never leave the service."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from backoffice.application.schemas.common import PaginationMeta
from backoffice.domain.entities import AdminRole


class AdminCreate(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""
    role: AdminRole | None = None


class AdminUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: AdminRole | None = None
    is_active: bool | None = None


class AdminResponse(BaseModel):
    id: str
    email: str
    name: str
    role: AdminRole
    is_active: bool
    last_login: datetime | None
    failed_login_attempts: int
    last_failed_attempt: datetime | None
    locked_until: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AdminSummary(BaseModel):
    """Minimal shape used to populate "assigned to" pickers."""

    id: str
    name: str
    email: str

    model_config = {"from_attributes": True}


class AdminListResponse(BaseModel):
    admins: list[AdminResponse]
    pagination: PaginationMeta
