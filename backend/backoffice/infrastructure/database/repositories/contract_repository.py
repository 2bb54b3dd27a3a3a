"""Concrete repository implementation for Contract backed by SQLAlchemy."""

from sqlalchemy import case, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.interfaces import ContractRepository
from backoffice.domain.entities import Contract, ContractStatus, HoursPeriod, RateUnit
from backoffice.domain.entities.contract import STATUS_SORT_ORDER
from backoffice.infrastructure.database.base import utcnow
from backoffice.infrastructure.database.models import ContractModel

_ACTIVE = ContractStatus.ACTIVE.value

_PLAIN_FIELDS = (
    "client_id",
    "contract_number",
    "version",
    "contract_start_date",
    "contract_renewal_date",
    "hr_admin_inclusive_hours",
    "employment_law_inclusive_hours",
    "hr_admin_rate",
    "hr_admin_rate_not_needed",
    "employment_law_rate",
    "employment_law_rate_not_needed",
    "mileage_rate",
    "mileage_rate_not_needed",
    "overnight_rate",
    "overnight_rate_not_needed",
    "signed_contract_received",
    "contract_uploaded",
    "contract_sent_to_client",
    "payment_terms_agreed",
    "doc_url",
    "signed_contract_url",
)

_PERIOD_FIELDS = ("hr_admin_inclusive_hours_period", "employment_law_inclusive_hours_period")
_UNIT_FIELDS = ("hr_admin_rate_unit", "employment_law_rate_unit")

_status_rank = case(
    {status.value: rank for status, rank in STATUS_SORT_ORDER.items()},
    value=ContractModel.status,
    else_=len(STATUS_SORT_ORDER),
)


class SQLAlchemyContractRepository(ContractRepository):
    """Implements the ContractRepository port using SQLAlchemy async sessions.

    Never commits; the request-scoped session owns the transaction.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ContractModel) -> Contract:
        """Map ORM model → domain entity."""
        values = {name: getattr(model, name) for name in _PLAIN_FIELDS}
        for name in _PERIOD_FIELDS:
            raw = getattr(model, name)
            values[name] = HoursPeriod(raw) if raw else None
        for name in _UNIT_FIELDS:
            raw = getattr(model, name)
            values[name] = RateUnit(raw) if raw else None
        return Contract(
            id=model.id,
            status=ContractStatus(model.status),
            inclusive_services_in_scope=list(model.inclusive_services_in_scope or []),
            inclusive_services_out_of_scope=list(model.inclusive_services_out_of_scope or []),
            created_at=model.created_at,
            updated_at=model.updated_at,
            **values,
        )

    def _apply(self, model: ContractModel, entity: Contract) -> None:
        for name in _PLAIN_FIELDS:
            setattr(model, name, getattr(entity, name))
        for name in _PERIOD_FIELDS + _UNIT_FIELDS:
            value = getattr(entity, name)
            setattr(model, name, value.value if value else None)
        model.status = entity.status.value
        model.inclusive_services_in_scope = list(entity.inclusive_services_in_scope)
        model.inclusive_services_out_of_scope = list(entity.inclusive_services_out_of_scope)
        model.updated_at = entity.updated_at

    async def get_by_id(self, contract_id: int) -> Contract | None:
        model = await self._session.get(ContractModel, contract_id)
        return self._to_entity(model) if model else None

    async def list_for_client(
        self, client_id: int, status: ContractStatus | None = None
    ) -> list[Contract]:
        stmt = select(ContractModel).where(ContractModel.client_id == client_id)
        if status is not None:
            stmt = stmt.where(ContractModel.status == status.value)
        stmt = stmt.order_by(_status_rank, ContractModel.version.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_active_for_client(self, client_id: int) -> Contract | None:
        stmt = (
            select(ContractModel)
            .where(ContractModel.client_id == client_id, ContractModel.status == _ACTIVE)
            .order_by(ContractModel.created_at.desc())
            .limit(1)
        )
        model = (await self._session.execute(stmt)).scalars().first()
        return self._to_entity(model) if model else None

    async def count_active(self, client_id: int) -> int:
        stmt = select(func.count(ContractModel.id)).where(
            ContractModel.client_id == client_id, ContractModel.status == _ACTIVE
        )
        return (await self._session.execute(stmt)).scalar_one()

    async def max_version(self, client_id: int) -> int:
        stmt = select(func.coalesce(func.max(ContractModel.version), 0)).where(
            ContractModel.client_id == client_id
        )
        return (await self._session.execute(stmt)).scalar_one()

    async def archive_active(self, client_id: int) -> int:
        stmt = (
            update(ContractModel)
            .where(ContractModel.client_id == client_id, ContractModel.status == _ACTIVE)
            .values(status=ContractStatus.ARCHIVED.value, updated_at=utcnow())
        )
        result = await self._session.execute(stmt)
        return result.rowcount or 0

    async def create(self, contract: Contract) -> Contract:
        model = ContractModel(created_at=contract.created_at)
        self._apply(model, contract)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, contract: Contract) -> Contract:
        model = await self._session.get(ContractModel, contract.id)
        if model is None:
            raise ValueError(f"Contract {contract.id} not found in database")
        self._apply(model, contract)
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, contract_id: int) -> bool:
        model = await self._session.get(ContractModel, contract_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
