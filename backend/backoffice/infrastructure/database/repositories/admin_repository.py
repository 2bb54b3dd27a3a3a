"""SQLAlchemy implementation of the admin repository port."""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.interfaces import AdminRepository
from backoffice.domain.entities import Admin, AdminRole
from backoffice.infrastructure.database.base import utcnow
from backoffice.infrastructure.database.models import AdminModel


class SQLAlchemyAdminRepository(AdminRepository):
    """Implements the AdminRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: AdminModel) -> Admin:
        return Admin(
            id=model.id,
            email=model.email,
            name=model.name,
            password_hash=model.password_hash,
            role=AdminRole(model.role),
            is_active=model.is_active,
            last_login=model.last_login,
            failed_login_attempts=model.failed_login_attempts,
            last_failed_attempt=model.last_failed_attempt,
            locked_until=model.locked_until,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _filtered(self, stmt, search: str | None, role: AdminRole | None, is_active: bool | None):
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(AdminModel.email.ilike(pattern), AdminModel.name.ilike(pattern)))
        if role is not None:
            stmt = stmt.where(AdminModel.role == role.value)
        if is_active is not None:
            stmt = stmt.where(AdminModel.is_active.is_(is_active))
        return stmt

    async def get_by_id(self, admin_id: str) -> Admin | None:
        model = await self._session.get(AdminModel, admin_id)
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str, exclude_id: str | None = None) -> Admin | None:
        stmt = select(AdminModel).where(func.lower(AdminModel.email) == email.strip().lower())
        if exclude_id is not None:
            stmt = stmt.where(AdminModel.id != exclude_id)
        model = (await self._session.execute(stmt.limit(1))).scalars().first()
        return self._to_entity(model) if model else None

    async def list_active(self) -> list[Admin]:
        stmt = select(AdminModel).where(AdminModel.is_active.is_(True)).order_by(AdminModel.name)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_all(
        self,
        *,
        search: str | None = None,
        role: AdminRole | None = None,
        is_active: bool | None = None,
        skip: int = 0,
        limit: int = 25,
    ) -> list[Admin]:
        stmt = self._filtered(select(AdminModel), search, role, is_active)
        stmt = stmt.order_by(AdminModel.created_at.desc(), AdminModel.id).offset(skip).limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def count(
        self,
        *,
        search: str | None = None,
        role: AdminRole | None = None,
        is_active: bool | None = None,
    ) -> int:
        stmt = self._filtered(select(func.count(AdminModel.id)), search, role, is_active)
        return (await self._session.execute(stmt)).scalar_one()

    async def create(self, admin: Admin) -> Admin:
        model = AdminModel(
            id=admin.id,
            email=admin.email,
            name=admin.name,
            password_hash=admin.password_hash,
            role=admin.role.value,
            is_active=admin.is_active,
            failed_login_attempts=admin.failed_login_attempts,
            created_at=admin.created_at,
            updated_at=admin.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, admin: Admin) -> Admin:
        model = await self._session.get(AdminModel, admin.id)
        if model is None:
            raise ValueError(f"Admin {admin.id} not found in database")
        model.email = admin.email
        model.name = admin.name
        model.password_hash = admin.password_hash
        model.role = admin.role.value
        model.is_active = admin.is_active
        model.last_login = admin.last_login
        model.failed_login_attempts = admin.failed_login_attempts
        model.last_failed_attempt = admin.last_failed_attempt
        model.locked_until = admin.locked_until
        model.updated_at = utcnow()
        await self._session.flush()
        return self._to_entity(model)
