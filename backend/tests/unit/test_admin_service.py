"""Unit tests for AdminService and the passlib hasher adapter."""

from dataclasses import replace

import pytest

from backoffice.application.schemas.admin import AdminCreate, AdminUpdate
from backoffice.application.services import AdminService
from backoffice.application.services.admin_service import PASSWORD_RULE, is_strong_password
from backoffice.domain.entities import Admin, AdminRole, AdminSession
from backoffice.domain.exceptions import (
    AdminNotFoundError,
    AuthenticationError,
    AuthorizationError,
    EmailAlreadyExistsError,
    FieldValidationError,
    ValidationError,
)
from backoffice.infrastructure.security.password_hasher import PasslibPasswordHasher


class FakeAdminRepository:
    def __init__(self):
        self.admins: dict[str, Admin] = {}

    async def get_by_id(self, admin_id: str) -> Admin | None:
        admin = self.admins.get(admin_id)
        return replace(admin) if admin else None

    async def get_by_email(self, email: str, exclude_id: str | None = None) -> Admin | None:
        for admin in self.admins.values():
            if admin.email.lower() == email.lower() and admin.id != exclude_id:
                return replace(admin)
        return None

    async def list_active(self) -> list[Admin]:
        return sorted((a for a in self.admins.values() if a.is_active), key=lambda a: a.name)

    async def get_all(self, *, search=None, role=None, is_active=None, skip=0, limit=25):
        admins = [
            a
            for a in self.admins.values()
            if (role is None or a.role is role) and (is_active is None or a.is_active is is_active)
        ]
        return admins[skip : skip + limit]

    async def count(self, *, search=None, role=None, is_active=None) -> int:
        return len(await self.get_all(role=role, is_active=is_active, limit=1000))

    async def create(self, admin: Admin) -> Admin:
        self.admins[admin.id] = replace(admin)
        return admin

    async def update(self, admin: Admin) -> Admin:
        self.admins[admin.id] = replace(admin)
        return admin


@pytest.fixture
def hasher() -> PasslibPasswordHasher:
    return PasslibPasswordHasher()


@pytest.fixture
def service(hasher) -> AdminService:
    return AdminService(FakeAdminRepository(), hasher)


def _admin(**overrides) -> AdminCreate:
    values = {
        "name": "Sam Carter",
        "email": "sam@argan.test",
        "password": "Secret123",
        "role": AdminRole.ADMIN,
    }
    values.update(overrides)
    return AdminCreate(**values)


@pytest.mark.parametrize(
    ("password", "strong"),
    [
        ("Secret123", True),
        ("secret123", False),
        ("SECRET123", False),
        ("SecretOne", False),
        ("Sec12", False),
    ],
)
def test_password_strength(password, strong):
    assert is_strong_password(password) is strong


def test_hasher_round_trip(hasher):
    digest = hasher.hash("Secret123")

    assert digest != "Secret123"
    assert hasher.verify("Secret123", digest)
    assert not hasher.verify("Secret124", digest)


@pytest.mark.asyncio
async def test_create_admin_hashes_password(service, hasher):
    admin = await service.create_admin(_admin())

    assert admin.password_hash != "Secret123"
    assert hasher.verify("Secret123", admin.password_hash)
    assert len(admin.id) == 36


@pytest.mark.asyncio
async def test_create_admin_validates_fields(service):
    with pytest.raises(FieldValidationError) as exc_info:
        await service.create_admin(AdminCreate(email="bad", password="weak"))

    messages = {f.field: f.message for f in exc_info.value.fields}
    assert messages["name"] == "Name is required"
    assert messages["email"] == "Invalid email format"
    assert messages["password"] == PASSWORD_RULE
    assert messages["role"] == "Role is required"


@pytest.mark.asyncio
async def test_duplicate_admin_email(service):
    await service.create_admin(_admin())

    with pytest.raises(EmailAlreadyExistsError):
        await service.create_admin(_admin(name="Other", email="SAM@argan.test"))


@pytest.mark.asyncio
async def test_update_admin_rehashes_new_password(service, hasher):
    admin = await service.create_admin(_admin())

    updated = await service.update_admin(
        admin.id, AdminUpdate(password="Another456", role=AdminRole.SUPER_ADMIN)
    )

    assert updated.role is AdminRole.SUPER_ADMIN
    assert hasher.verify("Another456", updated.password_hash)


@pytest.mark.asyncio
async def test_update_admin_rejects_weak_password(service):
    admin = await service.create_admin(_admin())

    with pytest.raises(FieldValidationError):
        await service.update_admin(admin.id, AdminUpdate(password="weak"))


@pytest.mark.asyncio
async def test_deactivate_and_reactivate(service):
    admin = await service.create_admin(_admin())

    assert (await service.deactivate_admin(admin.id)).is_active is False
    assert await service.list_active_admins() == []
    assert (await service.reactivate_admin(admin.id)).is_active is True


@pytest.mark.asyncio
async def test_get_admin_checks_id_format(service):
    with pytest.raises(ValidationError, match="Invalid admin ID format"):
        await service.get_admin("short")
    with pytest.raises(AdminNotFoundError):
        await service.get_admin("00000000-0000-0000-0000-000000000000")


@pytest.mark.asyncio
async def test_session_requires_active_admin(service):
    admin = await service.create_admin(_admin())

    session = await service.get_session(admin.id)
    assert session.role is AdminRole.ADMIN
    assert session.can(AdminRole.READ_ONLY)
    assert not session.can(AdminRole.SUPER_ADMIN)

    await service.deactivate_admin(admin.id)
    with pytest.raises(AuthenticationError):
        await service.get_session(admin.id)
    with pytest.raises(AuthenticationError):
        await service.get_session(None)


def test_authorize_enforces_role_hierarchy():
    reader = AdminSession(
        admin_id="a1", email="r@argan.test", name="Reader", role=AdminRole.READ_ONLY
    )

    assert AdminService.authorize(reader, AdminRole.READ_ONLY) is reader
    with pytest.raises(AuthorizationError) as exc_info:
        AdminService.authorize(reader, AdminRole.ADMIN)
    assert exc_info.value.status_code == 403


@pytest.mark.asyncio
async def test_list_admins_filters_by_role(service):
    await service.create_admin(_admin())
    await service.create_admin(
        _admin(name="Root", email="root@argan.test", role=AdminRole.SUPER_ADMIN)
    )

    admins, pagination = await service.list_admins(role=AdminRole.SUPER_ADMIN)

    assert [a.name for a in admins] == ["Root"]
    assert pagination.total_count == 1
