"""Concrete repository implementation for Client backed by SQLAlchemy."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Select, distinct, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.interfaces import ClientRepository
from backoffice.domain.entities import (
    Client,
    ClientStatus,
    ClientType,
    PaymentMethod,
    ServiceTier,
)
from backoffice.infrastructure.database.models import ClientModel
from backoffice.infrastructure.database.repositories.client_detail_repositories import (
    SQLAlchemyAddressRepository,
    SQLAlchemyAuditRepository,
    SQLAlchemyContactRepository,
)

_ACTIVE = ClientStatus.ACTIVE.value

# Scalar columns copied verbatim between entity and model
_PLAIN_FIELDS = (
    "company_name",
    "business_id",
    "sector",
    "monthly_retainer",
    "contact_name",
    "contact_email",
    "contact_phone",
    "address_line_1",
    "address_line_2",
    "city",
    "postcode",
    "country",
    "contract_start_date",
    "contract_renewal_date",
    "welcome_email_sent",
    "direct_debit_setup",
    "direct_debit_confirmed",
    "recurring_invoice_setup",
    "contract_added_to_xero",
    "dpa_signed_gdpr",
    "first_invoice_sent",
    "first_payment_made",
    "external_audit",
    "last_price_increase",
    "created_by",
)


class SQLAlchemyClientRepository(ClientRepository):
    """Implements the ClientRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ClientModel) -> Client:
        """Map ORM model → domain entity (children are loaded separately)."""
        return Client(
            id=model.id,
            client_type=ClientType(model.client_type),
            service_tier=ServiceTier(model.service_tier),
            status=ClientStatus(model.status),
            payment_method=PaymentMethod(model.payment_method) if model.payment_method else None,
            created_at=model.created_at,
            updated_at=model.updated_at,
            **{name: getattr(model, name) for name in _PLAIN_FIELDS},
        )

    def _apply(self, model: ClientModel, entity: Client) -> None:
        for name in _PLAIN_FIELDS:
            setattr(model, name, getattr(entity, name))
        model.client_type = entity.client_type.value
        model.service_tier = entity.service_tier.value
        model.status = entity.status.value
        model.payment_method = entity.payment_method.value if entity.payment_method else None
        model.updated_at = entity.updated_at

    def _filtered(self, stmt: Select, search: str | None) -> Select:
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    ClientModel.company_name.ilike(pattern),
                    ClientModel.contact_email.ilike(pattern),
                    ClientModel.contact_name.ilike(pattern),
                )
            )
        return stmt

    async def get_by_id(self, client_id: int) -> Client | None:
        model = await self._session.get(ClientModel, client_id)
        if model is None:
            return None
        client = self._to_entity(model)
        client.contacts = await SQLAlchemyContactRepository(self._session).list_for_client(
            client_id
        )
        client.addresses = await SQLAlchemyAddressRepository(self._session).list_for_client(
            client_id
        )
        client.audits = await SQLAlchemyAuditRepository(self._session).list_for_client(client_id)
        return client

    async def get_all(
        self,
        *,
        search: str | None = None,
        skip: int = 0,
        limit: int = 25,
    ) -> list[Client]:
        stmt = self._filtered(select(ClientModel), search)
        stmt = (
            stmt.order_by(ClientModel.status, ClientModel.company_name, ClientModel.id)
            .offset(skip)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def count(self, *, search: str | None = None) -> int:
        stmt = self._filtered(select(func.count(ClientModel.id)), search)
        return (await self._session.execute(stmt)).scalar_one()

    async def find_active_by_email(
        self, email: str, exclude_id: int | None = None
    ) -> Client | None:
        stmt = select(ClientModel).where(
            func.lower(ClientModel.contact_email) == email.lower(),
            ClientModel.status == _ACTIVE,
        )
        if exclude_id is not None:
            stmt = stmt.where(ClientModel.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def create(self, client: Client) -> Client:
        model = ClientModel(created_at=client.created_at)
        self._apply(model, client)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, client: Client) -> Client:
        model = await self._session.get(ClientModel, client.id)
        if model is None:
            raise ValueError(f"Client {client.id} not found in database")
        self._apply(model, client)
        await self._session.flush()
        updated = self._to_entity(model)
        updated.contacts = client.contacts
        updated.addresses = client.addresses
        updated.audits = client.audits
        updated.contracts = client.contracts
        return updated

    async def get_unique_sectors(self) -> list[str]:
        stmt = (
            select(distinct(ClientModel.sector))
            .where(ClientModel.sector.is_not(None))
            .order_by(ClientModel.sector)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    # ── Dashboard rollups ─────────────────────────────────────────────

    async def count_by_status(self, status: ClientStatus) -> int:
        stmt = select(func.count(ClientModel.id)).where(ClientModel.status == status.value)
        return (await self._session.execute(stmt)).scalar_one()

    async def count_active_by_tier(self) -> dict[ServiceTier, int]:
        stmt = (
            select(ClientModel.service_tier, func.count(ClientModel.id))
            .where(ClientModel.status == _ACTIVE)
            .group_by(ClientModel.service_tier)
        )
        result = await self._session.execute(stmt)
        return {ServiceTier(tier): count for tier, count in result.all()}

    async def sum_active_retainers(self) -> Decimal:
        stmt = select(func.coalesce(func.sum(ClientModel.monthly_retainer), 0)).where(
            ClientModel.status == _ACTIVE
        )
        total = (await self._session.execute(stmt)).scalar_one()
        return Decimal(str(total))

    async def count_active_renewals_between(self, start: date, end: date) -> int:
        stmt = select(func.count(ClientModel.id)).where(
            ClientModel.status == _ACTIVE,
            ClientModel.contract_renewal_date >= start,
            ClientModel.contract_renewal_date <= end,
        )
        return (await self._session.execute(stmt)).scalar_one()

    async def get_recent_active(self, limit: int) -> list[Client]:
        stmt = (
            select(ClientModel)
            .where(ClientModel.status == _ACTIVE)
            .order_by(ClientModel.created_at.desc(), ClientModel.id.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]
