"""SQLAlchemy repositories for client contacts, addresses and audits."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.interfaces import (
    AddressRepository,
    AuditRepository,
    ContactRepository,
)
from backoffice.domain.entities import (
    AddressType,
    AuditInterval,
    ClientAddress,
    ClientAudit,
    ClientContact,
    ContactType,
)
from backoffice.infrastructure.database.base import utcnow
from backoffice.infrastructure.database.models import (
    ClientAddressModel,
    ClientAuditModel,
    ClientContactModel,
)


class SQLAlchemyContactRepository(ContactRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ClientContactModel) -> ClientContact:
        return ClientContact(
            id=model.id,
            client_id=model.client_id,
            type=ContactType(model.type),
            name=model.name,
            email=model.email,
            phone=model.phone,
            role=model.role,
            description=model.description,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def get_by_id(self, contact_id: int) -> ClientContact | None:
        model = await self._session.get(ClientContactModel, contact_id)
        return self._to_entity(model) if model else None

    async def list_for_client(self, client_id: int) -> list[ClientContact]:
        stmt = (
            select(ClientContactModel)
            .where(ClientContactModel.client_id == client_id)
            .order_by(ClientContactModel.type.desc(), ClientContactModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, contact: ClientContact) -> ClientContact:
        model = ClientContactModel(
            client_id=contact.client_id,
            type=contact.type.value,
            name=contact.name,
            email=contact.email,
            phone=contact.phone,
            role=contact.role,
            description=contact.description,
            created_at=contact.created_at,
            updated_at=contact.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, contact: ClientContact) -> ClientContact:
        model = await self._session.get(ClientContactModel, contact.id)
        if model is None:
            raise ValueError(f"Contact {contact.id} not found in database")
        model.type = contact.type.value
        model.name = contact.name
        model.email = contact.email
        model.phone = contact.phone
        model.role = contact.role
        model.description = contact.description
        model.updated_at = utcnow()
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, contact_id: int) -> bool:
        model = await self._session.get(ClientContactModel, contact_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True


class SQLAlchemyAddressRepository(AddressRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ClientAddressModel) -> ClientAddress:
        return ClientAddress(
            id=model.id,
            client_id=model.client_id,
            type=AddressType(model.type),
            address_line_1=model.address_line_1,
            address_line_2=model.address_line_2,
            city=model.city,
            postcode=model.postcode,
            country=model.country,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def get_by_id(self, address_id: int) -> ClientAddress | None:
        model = await self._session.get(ClientAddressModel, address_id)
        return self._to_entity(model) if model else None

    async def list_for_client(self, client_id: int) -> list[ClientAddress]:
        stmt = (
            select(ClientAddressModel)
            .where(ClientAddressModel.client_id == client_id)
            .order_by(ClientAddressModel.type.desc(), ClientAddressModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, address: ClientAddress) -> ClientAddress:
        model = ClientAddressModel(
            client_id=address.client_id,
            type=address.type.value,
            address_line_1=address.address_line_1,
            address_line_2=address.address_line_2,
            city=address.city,
            postcode=address.postcode,
            country=address.country,
            created_at=address.created_at,
            updated_at=address.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, address: ClientAddress) -> ClientAddress:
        model = await self._session.get(ClientAddressModel, address.id)
        if model is None:
            raise ValueError(f"Address {address.id} not found in database")
        model.type = address.type.value
        model.address_line_1 = address.address_line_1
        model.address_line_2 = address.address_line_2
        model.city = address.city
        model.postcode = address.postcode
        model.country = address.country
        model.updated_at = utcnow()
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, address_id: int) -> bool:
        model = await self._session.get(ClientAddressModel, address_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True


class SQLAlchemyAuditRepository(AuditRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ClientAuditModel) -> ClientAudit:
        return ClientAudit(
            id=model.id,
            client_id=model.client_id,
            audited_by=model.audited_by,
            interval=AuditInterval(model.interval),
            next_audit_date=model.next_audit_date,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def get_by_id(self, audit_id: int) -> ClientAudit | None:
        model = await self._session.get(ClientAuditModel, audit_id)
        return self._to_entity(model) if model else None

    async def list_for_client(self, client_id: int) -> list[ClientAudit]:
        stmt = (
            select(ClientAuditModel)
            .where(ClientAuditModel.client_id == client_id)
            .order_by(ClientAuditModel.next_audit_date, ClientAuditModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, audit: ClientAudit) -> ClientAudit:
        model = ClientAuditModel(
            client_id=audit.client_id,
            audited_by=audit.audited_by,
            interval=audit.interval.value,
            next_audit_date=audit.next_audit_date,
            created_at=audit.created_at,
            updated_at=audit.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, audit: ClientAudit) -> ClientAudit:
        model = await self._session.get(ClientAuditModel, audit.id)
        if model is None:
            raise ValueError(f"Audit {audit.id} not found in database")
        model.audited_by = audit.audited_by
        model.interval = audit.interval.value
        model.next_audit_date = audit.next_audit_date
        model.updated_at = utcnow()
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, audit_id: int) -> bool:
        model = await self._session.get(ClientAuditModel, audit_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
