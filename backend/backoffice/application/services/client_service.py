"""Application service (use case) for client records.

Clients are never physically deleted. Creating one also creates its
service contact, optional invoice contact, audit schedule and first
ACTIVE contract, all in the caller's transaction.
"""

import logging
from datetime import date, timedelta

from backoffice.application.interfaces import (
    AuditRepository,
    ClientRepository,
    ContactRepository,
    ContractRepository,
)
from backoffice.application.schemas.client import ClientCreate, ClientUpdate
from backoffice.application.schemas.common import PaginationMeta
from backoffice.application.services.contract_service import check_services, contract_terms
from backoffice.application.services.validation import (
    check_email,
    check_id,
    check_not_negative,
    check_pagination,
)
from backoffice.domain.entities import (
    Client,
    ClientAudit,
    ClientContact,
    ClientStatus,
    ContactType,
    Contract,
    ContractStatus,
    build_contract_number,
)
from backoffice.domain.exceptions import (
    ClientNotFoundError,
    FieldError,
    FieldValidationError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_DEFAULT_CONTRACT_LENGTH = timedelta(days=365)


class ClientService:
    """Orchestrates client CRUD logic. Depends on repository ports (DI)."""

    def __init__(
        self,
        client_repository: ClientRepository,
        contact_repository: ContactRepository,
        audit_repository: AuditRepository,
        contract_repository: ContractRepository,
    ):
        self._clients = client_repository
        self._contacts = contact_repository
        self._audits = audit_repository
        self._contracts = contract_repository

    async def get_unique_sectors(self) -> list[str]:
        """Sector suggestions for the client form. Never fails: [] on error."""
        try:
            return await self._clients.get_unique_sectors()
        except Exception:
            logger.exception("Failed to load client sectors")
            return []

    async def list_clients(
        self,
        *,
        page: int = 1,
        limit: int = 25,
        search: str | None = None,
    ) -> tuple[list[Client], PaginationMeta]:
        check_pagination(page, limit)
        search = search.strip() if search else None
        clients = await self._clients.get_all(
            search=search, skip=(page - 1) * limit, limit=limit
        )
        total = await self._clients.count(search=search)
        return clients, PaginationMeta.build(page, limit, total)

    async def get_client(self, client_id: int) -> Client:
        """A client with its contacts, addresses, audits and contracts."""
        check_id(client_id, "client")
        client = await self._clients.get_by_id(client_id)
        if client is None:
            raise ClientNotFoundError(client_id)
        client.contracts = await self._contracts.list_for_client(client_id)
        return client

    async def create_client(
        self, data: ClientCreate, created_by: str | None = None
    ) -> Client:
        errors: list[FieldError] = []
        if not data.company_name:
            errors.append(FieldError("company_name", "Company name is required"))
        if not data.contact_name:
            errors.append(FieldError("contact_name", "Contact name is required"))
        check_email(errors, "contact_email", data.contact_email, "Contact email")
        if data.service_tier is None:
            errors.append(FieldError("service_tier", "Service tier is required"))
        check_not_negative(errors, "monthly_retainer", data.monthly_retainer, "Monthly retainer")
        if data.invoice_contact_email and not data.invoice_contact_name:
            errors.append(FieldError("invoice_contact_name", "Invoice contact name is required"))
        if data.invoice_contact_name:
            check_email(
                errors, "invoice_contact_email", data.invoice_contact_email, "Invoice contact email"
            )
        if data.external_audit:
            for index, record in enumerate(data.audit_records):
                if not (record.audited_by and record.interval and record.next_audit_date):
                    errors.append(
                        FieldError(
                            f"audit_records.{index}",
                            "Audited by, interval and next audit date are required",
                        )
                    )
        if (
            data.contract_start_date
            and data.contract_renewal_date
            and data.contract_renewal_date <= data.contract_start_date
        ):
            errors.append(
                FieldError("contract_renewal_date", "Contract renewal date must be after start date")
            )
        check_services(errors, "inclusive_services_in_scope", data.inclusive_services_in_scope)
        check_services(
            errors, "inclusive_services_out_of_scope", data.inclusive_services_out_of_scope
        )
        if errors:
            raise FieldValidationError(errors)

        await self._check_duplicate_email(data.contact_email)

        client = Client(
            client_type=data.client_type,
            company_name=data.company_name,
            business_id=data.business_id or None,
            sector=data.sector or None,
            service_tier=data.service_tier,
            monthly_retainer=data.monthly_retainer,
            contact_name=data.contact_name,
            contact_email=data.contact_email,
            contact_phone=data.contact_phone or None,
            address_line_1=data.address_line_1 or None,
            address_line_2=data.address_line_2 or None,
            city=data.city or None,
            postcode=data.postcode or None,
            country=data.country or None,
            contract_start_date=data.contract_start_date,
            contract_renewal_date=data.contract_renewal_date,
            status=data.status,
            external_audit=data.external_audit,
            created_by=created_by,
        )
        client.apply_payment_method(data.payment_method)
        client = await self._clients.create(client)

        client.contacts.append(
            await self._contacts.create(
                ClientContact(
                    client_id=client.id,
                    type=ContactType.SERVICE,
                    name=data.contact_name,
                    email=data.contact_email,
                    phone=data.contact_phone or None,
                    role=data.contact_role or None,
                )
            )
        )
        if data.invoice_contact_name and data.invoice_contact_email:
            client.contacts.append(
                await self._contacts.create(
                    ClientContact(
                        client_id=client.id,
                        type=ContactType.INVOICE,
                        name=data.invoice_contact_name,
                        email=data.invoice_contact_email,
                        phone=data.invoice_contact_phone or None,
                        role=data.invoice_contact_role or None,
                    )
                )
            )

        if data.external_audit:
            for record in data.audit_records:
                client.audits.append(
                    await self._audits.create(
                        ClientAudit(
                            client_id=client.id,
                            audited_by=record.audited_by,
                            interval=record.interval,
                            next_audit_date=record.next_audit_date,
                        )
                    )
                )

        start = data.contract_start_date or date.today()
        contract = Contract(
            client_id=client.id,
            contract_start_date=start,
            contract_renewal_date=data.contract_renewal_date or start + _DEFAULT_CONTRACT_LENGTH,
            contract_number=build_contract_number(client.id, 1),
            version=1,
            status=ContractStatus.ACTIVE,
            **contract_terms(data),
        )
        client.contracts.append(await self._contracts.create(contract))

        logger.info(
            "Created client %s (%s) with contract %s",
            client.id,
            client.company_name,
            contract.contract_number,
        )
        return client

    async def update_client(self, client_id: int, data: ClientUpdate) -> Client:
        check_id(client_id, "client")
        client = await self._clients.get_by_id(client_id)
        if client is None:
            raise ClientNotFoundError(client_id)

        changes = data.model_dump(exclude_unset=True)

        errors: list[FieldError] = []
        for name, label in (
            ("company_name", "Company name"),
            ("contact_name", "Contact name"),
            ("service_tier", "Service tier"),
            ("client_type", "Client type"),
        ):
            if name in changes and not changes[name]:
                errors.append(FieldError(name, f"{label} cannot be empty"))
        if "external_audit" in changes and changes["external_audit"] is None:
            errors.append(FieldError("external_audit", "External audit cannot be empty"))
        if "contact_email" in changes:
            check_email(
                errors, "contact_email", changes["contact_email"], "Contact email", updating=True
            )
        check_not_negative(
            errors, "monthly_retainer", changes.get("monthly_retainer"), "Monthly retainer"
        )
        if errors:
            raise FieldValidationError(errors)

        new_email = changes.get("contact_email")
        if new_email and new_email != client.contact_email:
            await self._check_duplicate_email(new_email, exclude_id=client_id)

        payment_changed = (
            "payment_method" in changes and changes["payment_method"] != client.payment_method
        )
        for name, value in changes.items():
            if name != "payment_method":
                setattr(client, name, value)
        if payment_changed:
            client.apply_payment_method(changes["payment_method"])

        client.touch()
        updated = await self._clients.update(client)
        logger.info("Updated client %s fields: %s", client_id, ", ".join(sorted(changes)))
        return updated

    async def delete_client(
        self, client_id: int, target_status: ClientStatus | None = None
    ) -> Client:
        """Soft delete / reactivate toggle.

        ACTIVE clients move to ``target_status`` (PENDING or INACTIVE,
        INACTIVE by default); PENDING and INACTIVE clients move back to ACTIVE.
        """
        check_id(client_id, "client")
        if target_status is ClientStatus.ACTIVE:
            raise ValidationError("Target status must be PENDING or INACTIVE")

        client = await self._clients.get_by_id(client_id)
        if client is None:
            raise ClientNotFoundError(client_id)

        previous = client.status
        client.status = client.toggled_status(target_status)
        client.touch()
        updated = await self._clients.update(client)
        logger.info(
            "Client %s status %s -> %s", client_id, previous.value, updated.status.value
        )
        return updated

    async def _check_duplicate_email(self, email: str, exclude_id: int | None = None) -> None:
        existing = await self._clients.find_active_by_email(email, exclude_id=exclude_id)
        if existing is not None:
            logger.warning("Duplicate client email rejected: %s", email)
            if exclude_id is not None:
                raise ValidationError(f"Another client with email {email} already exists")
            raise ValidationError(f"A client with email {email} already exists")
