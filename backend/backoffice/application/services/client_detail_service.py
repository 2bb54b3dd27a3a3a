"""Application services for the records a client owns directly: contacts, addresses, audits."""

import logging

from backoffice.application.interfaces import (
    AddressRepository,
    AuditRepository,
    ClientRepository,
    ContactRepository,
)
from backoffice.application.schemas.client import (
    AddressCreate,
    AddressUpdate,
    AuditCreate,
    AuditUpdate,
    ContactCreate,
    ContactUpdate,
)
from backoffice.application.services.validation import check_email, check_id
from backoffice.domain.entities import ClientAddress, ClientAudit, ClientContact
from backoffice.domain.exceptions import (
    ClientNotFoundError,
    FieldError,
    FieldValidationError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_DEFAULT_COUNTRY = "United Kingdom"


async def _require_client(clients: ClientRepository, client_id: int) -> None:
    check_id(client_id, "client")
    if await clients.get_by_id(client_id) is None:
        raise ClientNotFoundError(client_id)


def _check_not_emptied(changes: dict, fields: dict[str, str]) -> None:
    errors = [
        FieldError(name, f"{label} cannot be empty")
        for name, label in fields.items()
        if name in changes and not changes[name]
    ]
    if errors:
        raise FieldValidationError(errors)


class ContactService:
    def __init__(self, contact_repository: ContactRepository, client_repository: ClientRepository):
        self._contacts = contact_repository
        self._clients = client_repository

    async def create_contact(self, client_id: int, data: ContactCreate) -> ClientContact:
        errors: list[FieldError] = []
        if not data.name:
            errors.append(FieldError("name", "Name is required"))
        check_email(errors, "email", data.email, "Email")
        if errors:
            raise FieldValidationError(errors)

        await _require_client(self._clients, client_id)
        contact = await self._contacts.create(
            ClientContact(
                client_id=client_id,
                type=data.type,
                name=data.name,
                email=data.email,
                phone=data.phone or None,
                role=data.role or None,
                description=data.description or None,
            )
        )
        logger.info("Added %s contact %s to client %s", contact.type.value, contact.id, client_id)
        return contact

    async def update_contact(self, contact_id: int, data: ContactUpdate) -> ClientContact:
        contact = await self._get(contact_id)
        changes = data.model_dump(exclude_unset=True)
        _check_not_emptied(changes, {"name": "Name", "type": "Contact type"})
        if "email" in changes:
            errors: list[FieldError] = []
            check_email(errors, "email", changes["email"], "Email", updating=True)
            if errors:
                raise FieldValidationError(errors)

        for name, value in changes.items():
            setattr(contact, name, value)
        return await self._contacts.update(contact)

    async def delete_contact(self, contact_id: int) -> None:
        contact = await self._get(contact_id)
        await self._contacts.delete(contact_id)
        logger.info("Deleted contact %s of client %s", contact_id, contact.client_id)

    async def _get(self, contact_id: int) -> ClientContact:
        check_id(contact_id, "contact")
        contact = await self._contacts.get_by_id(contact_id)
        if contact is None:
            raise NotFoundError("Contact", contact_id)
        return contact


class AddressService:
    def __init__(self, address_repository: AddressRepository, client_repository: ClientRepository):
        self._addresses = address_repository
        self._clients = client_repository

    async def create_address(self, client_id: int, data: AddressCreate) -> ClientAddress:
        if not data.address_line_1 or not data.city or not data.postcode:
            raise ValidationError("Address Line 1, city, and postcode are required")

        await _require_client(self._clients, client_id)
        address = await self._addresses.create(
            ClientAddress(
                client_id=client_id,
                type=data.type,
                address_line_1=data.address_line_1,
                address_line_2=data.address_line_2 or None,
                city=data.city,
                postcode=data.postcode,
                country=data.country or _DEFAULT_COUNTRY,
            )
        )
        logger.info("Added %s address %s to client %s", address.type.value, address.id, client_id)
        return address

    async def update_address(self, address_id: int, data: AddressUpdate) -> ClientAddress:
        address = await self._get(address_id)
        changes = data.model_dump(exclude_unset=True)
        _check_not_emptied(
            changes,
            {
                "type": "Address type",
                "address_line_1": "Address Line 1",
                "city": "City",
                "postcode": "Postcode",
            },
        )
        if "country" in changes and not changes["country"]:
            changes["country"] = _DEFAULT_COUNTRY

        for name, value in changes.items():
            setattr(address, name, value)
        return await self._addresses.update(address)

    async def delete_address(self, address_id: int) -> None:
        address = await self._get(address_id)
        await self._addresses.delete(address_id)
        logger.info("Deleted address %s of client %s", address_id, address.client_id)

    async def _get(self, address_id: int) -> ClientAddress:
        check_id(address_id, "address")
        address = await self._addresses.get_by_id(address_id)
        if address is None:
            raise NotFoundError("Address", address_id)
        return address


class AuditService:
    def __init__(self, audit_repository: AuditRepository, client_repository: ClientRepository):
        self._audits = audit_repository
        self._clients = client_repository

    async def create_audit(self, client_id: int, data: AuditCreate) -> ClientAudit:
        errors: list[FieldError] = []
        if not data.audited_by:
            errors.append(FieldError("audited_by", "Audited by is required"))
        if data.interval is None:
            errors.append(FieldError("interval", "Audit interval is required"))
        if data.next_audit_date is None:
            errors.append(FieldError("next_audit_date", "Next audit date is required"))
        if errors:
            raise FieldValidationError(errors)

        await _require_client(self._clients, client_id)
        audit = await self._audits.create(
            ClientAudit(
                client_id=client_id,
                audited_by=data.audited_by,
                interval=data.interval,
                next_audit_date=data.next_audit_date,
            )
        )
        logger.info("Added audit %s to client %s", audit.id, client_id)
        return audit

    async def update_audit(self, audit_id: int, data: AuditUpdate) -> ClientAudit:
        audit = await self._get(audit_id)
        changes = data.model_dump(exclude_unset=True)
        _check_not_emptied(
            changes,
            {
                "audited_by": "Audited by",
                "interval": "Audit interval",
                "next_audit_date": "Next audit date",
            },
        )
        for name, value in changes.items():
            setattr(audit, name, value)
        return await self._audits.update(audit)

    async def delete_audit(self, audit_id: int) -> None:
        audit = await self._get(audit_id)
        await self._audits.delete(audit_id)
        logger.info("Deleted audit %s of client %s", audit_id, audit.client_id)

    async def _get(self, audit_id: int) -> ClientAudit:
        check_id(audit_id, "audit")
        audit = await self._audits.get_by_id(audit_id)
        if audit is None:
            raise NotFoundError("Audit", audit_id)
        return audit
