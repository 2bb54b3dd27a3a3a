"""Unit tests for ClientService and the client detail services."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from backoffice.application.schemas.client import (
    AuditCreate,
    ClientCreate,
    ClientUpdate,
    ContactCreate,
    ContactUpdate,
)
from backoffice.application.services import ClientService, ContactService
from backoffice.domain.entities import (
    AuditInterval,
    Client,
    ClientStatus,
    ContactType,
    ContractStatus,
    PaymentMethod,
    ServiceTier,
)
from backoffice.domain.exceptions import (
    ClientNotFoundError,
    FieldValidationError,
    NotFoundError,
    ValidationError,
)


# ── Fakes ────────────────────────────────────────────────────────────


class FakeClientRepository:
    def __init__(self):
        self.clients: dict[int, Client] = {}
        self.fail_sectors = False

    async def get_by_id(self, client_id: int) -> Client | None:
        client = self.clients.get(client_id)
        return replace(client, contacts=[], audits=[], contracts=[]) if client else None

    async def get_all(self, *, search=None, skip=0, limit=25) -> list[Client]:
        return list(self.clients.values())[skip : skip + limit]

    async def count(self, *, search=None) -> int:
        return len(self.clients)

    async def find_active_by_email(self, email: str, exclude_id: int | None = None):
        for client in self.clients.values():
            if (
                client.contact_email.lower() == email.lower()
                and client.status is ClientStatus.ACTIVE
                and client.id != exclude_id
            ):
                return client
        return None

    async def create(self, client: Client) -> Client:
        client.id = len(self.clients) + 1
        self.clients[client.id] = replace(client)
        return client

    async def update(self, client: Client) -> Client:
        self.clients[client.id] = replace(client)
        return client

    async def get_unique_sectors(self) -> list[str]:
        if self.fail_sectors:
            raise ConnectionError("database unavailable")
        return sorted({c.sector for c in self.clients.values() if c.sector is not None})


class FakeStore:
    """Generic store for contacts, audits and contracts."""

    def __init__(self):
        self.items: dict[int, object] = {}

    async def get_by_id(self, item_id: int):
        return self.items.get(item_id)

    async def create(self, item):
        item.id = len(self.items) + 1
        self.items[item.id] = item
        return item

    async def update(self, item):
        self.items[item.id] = item
        return item

    async def delete(self, item_id: int) -> bool:
        return self.items.pop(item_id, None) is not None

    async def list_for_client(self, client_id: int, status=None):
        return [i for i in self.items.values() if i.client_id == client_id]


@pytest.fixture
def clients() -> FakeClientRepository:
    return FakeClientRepository()


@pytest.fixture
def contracts() -> FakeStore:
    return FakeStore()


@pytest.fixture
def service(clients, contracts) -> ClientService:
    return ClientService(clients, FakeStore(), FakeStore(), contracts)


def _new_client(**overrides) -> ClientCreate:
    values = {
        "company_name": "Acme Ltd",
        "contact_name": "Jo Bloggs",
        "contact_email": "jo@acme.test",
        "service_tier": ServiceTier.TIER_1,
        "monthly_retainer": Decimal("450.00"),
    }
    values.update(overrides)
    return ClientCreate(**values)


# ── Creation ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_create_client_builds_contact_and_first_contract(service, contracts):
    client = await service.create_client(
        _new_client(
            contract_start_date=date(2025, 1, 1),
            contract_renewal_date=date(2026, 1, 1),
            invoice_contact_name="Accounts",
            invoice_contact_email="accounts@acme.test",
        ),
        created_by="Sam",
    )

    assert client.id == 1
    assert client.created_by == "Sam"
    assert [c.type for c in client.contacts] == [ContactType.SERVICE, ContactType.INVOICE]
    [contract] = client.contracts
    assert contract.version == 1
    assert contract.status is ContractStatus.ACTIVE
    assert contract.contract_number == "CON-1-001-001"
    assert list(contracts.items) == [contract.id]


@pytest.mark.asyncio
async def test_create_client_defaults_contract_dates(service):
    client = await service.create_client(_new_client())

    [contract] = client.contracts
    assert contract.contract_start_date == date.today()
    assert (contract.contract_renewal_date - contract.contract_start_date).days == 365


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("method", "expected"),
    [
        (PaymentMethod.DIRECT_DEBIT, (False, False, None)),
        (PaymentMethod.INVOICE, (None, None, False)),
        (None, (None, None, None)),
    ],
)
async def test_payment_flags_follow_method(service, method, expected):
    client = await service.create_client(_new_client(payment_method=method))

    assert (
        client.direct_debit_setup,
        client.direct_debit_confirmed,
        client.recurring_invoice_setup,
    ) == expected


@pytest.mark.asyncio
async def test_create_client_collects_field_errors(service):
    with pytest.raises(FieldValidationError) as exc_info:
        await service.create_client(
            ClientCreate(contact_email="not-an-email", monthly_retainer=Decimal("-1"))
        )

    messages = {f.field: f.message for f in exc_info.value.fields}
    assert messages["company_name"] == "Company name is required"
    assert messages["contact_email"] == "Invalid email format"
    assert messages["service_tier"] == "Service tier is required"
    assert messages["monthly_retainer"] == "Monthly retainer cannot be negative"


@pytest.mark.asyncio
async def test_create_client_rejects_unknown_contract_services(service):
    with pytest.raises(FieldValidationError) as exc_info:
        await service.create_client(_new_client(inclusive_services_in_scope=["Payroll"]))

    assert [f.field for f in exc_info.value.fields] == ["inclusive_services_in_scope"]


@pytest.mark.asyncio
async def test_audit_records_are_validated_when_external_audit(service):
    with pytest.raises(FieldValidationError) as exc_info:
        await service.create_client(
            _new_client(external_audit=True, audit_records=[AuditCreate(audited_by="ISO")])
        )

    assert [f.field for f in exc_info.value.fields] == ["audit_records.0"]


@pytest.mark.asyncio
async def test_audit_records_are_created(service):
    client = await service.create_client(
        _new_client(
            external_audit=True,
            audit_records=[
                AuditCreate(
                    audited_by="ISO",
                    interval=AuditInterval.ANNUALLY,
                    next_audit_date=date(2025, 9, 1),
                )
            ],
        )
    )

    assert [a.audited_by for a in client.audits] == ["ISO"]


# ── Duplicate e-mails ────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_duplicate_active_email_is_rejected(service):
    await service.create_client(_new_client())

    with pytest.raises(ValidationError) as exc_info:
        await service.create_client(_new_client(company_name="Other", contact_email="JO@acme.test"))

    assert "JO@acme.test" in exc_info.value.message


@pytest.mark.asyncio
async def test_inactive_client_email_can_be_reused(service):
    first = await service.create_client(_new_client())
    await service.delete_client(first.id)

    second = await service.create_client(_new_client(company_name="Acme Again"))
    assert second.id == 2


@pytest.mark.asyncio
async def test_update_to_own_email_skips_duplicate_check(service):
    client = await service.create_client(_new_client())

    updated = await service.update_client(
        client.id, ClientUpdate(contact_email="jo@acme.test", city="Leeds")
    )
    assert updated.city == "Leeds"


@pytest.mark.asyncio
async def test_update_to_another_clients_email_is_rejected(service):
    await service.create_client(_new_client())
    other = await service.create_client(_new_client(contact_email="sam@other.test"))

    with pytest.raises(ValidationError, match="Another client with email jo@acme.test"):
        await service.update_client(other.id, ClientUpdate(contact_email="jo@acme.test"))


# ── Updates and soft delete ──────────────────────────────────────────


@pytest.mark.asyncio
async def test_update_payment_method_resets_flags(service):
    client = await service.create_client(_new_client(payment_method=PaymentMethod.INVOICE))

    updated = await service.update_client(
        client.id, ClientUpdate(payment_method=PaymentMethod.DIRECT_DEBIT)
    )

    assert updated.direct_debit_setup is False
    assert updated.recurring_invoice_setup is None


def test_update_schema_rejects_unknown_fields():
    with pytest.raises(ValueError):
        ClientUpdate(created_by="someone")


def test_update_schema_has_no_status_field():
    with pytest.raises(ValueError):
        ClientUpdate(status=ClientStatus.INACTIVE)


@pytest.mark.asyncio
async def test_update_rejects_null_external_audit(service):
    client = await service.create_client(_new_client())

    with pytest.raises(FieldValidationError) as exc_info:
        await service.update_client(client.id, ClientUpdate(external_audit=None))

    assert [f.field for f in exc_info.value.fields] == ["external_audit"]


@pytest.mark.asyncio
async def test_update_can_turn_external_audit_off(service):
    client = await service.create_client(_new_client())

    updated = await service.update_client(client.id, ClientUpdate(external_audit=False))

    assert updated.external_audit is False


@pytest.mark.asyncio
async def test_delete_client_toggles_status(service):
    client = await service.create_client(_new_client())

    paused = await service.delete_client(client.id, ClientStatus.PENDING)
    assert paused.status is ClientStatus.PENDING

    reactivated = await service.delete_client(client.id)
    assert reactivated.status is ClientStatus.ACTIVE

    deactivated = await service.delete_client(client.id)
    assert deactivated.status is ClientStatus.INACTIVE


@pytest.mark.asyncio
async def test_delete_client_rejects_active_target(service):
    client = await service.create_client(_new_client())

    with pytest.raises(ValidationError):
        await service.delete_client(client.id, ClientStatus.ACTIVE)


@pytest.mark.asyncio
async def test_get_client_not_found(service):
    with pytest.raises(ClientNotFoundError):
        await service.get_client(404)


@pytest.mark.asyncio
async def test_invalid_client_id(service):
    with pytest.raises(ValidationError, match="Invalid client ID"):
        await service.get_client(0)


# ── Listing and sectors ──────────────────────────────────────────────


@pytest.mark.asyncio
async def test_unique_sectors_sorted_and_distinct(service, clients):
    for index, sector in enumerate(["Tech", "Tech", "Health", None]):
        await service.create_client(
            _new_client(contact_email=f"c{index}@example.com", sector=sector)
        )

    assert await service.get_unique_sectors() == ["Health", "Tech"]


@pytest.mark.asyncio
async def test_unique_sectors_returns_empty_on_failure(service, clients):
    clients.fail_sectors = True

    assert await service.get_unique_sectors() == []


@pytest.mark.asyncio
async def test_list_clients_paginates(service):
    for index in range(3):
        await service.create_client(_new_client(contact_email=f"c{index}@example.com"))

    page, pagination = await service.list_clients(page=2, limit=2)

    assert len(page) == 1
    assert pagination.total_count == 3
    assert pagination.total_pages == 2
    assert pagination.has_prev and not pagination.has_next


@pytest.mark.asyncio
@pytest.mark.parametrize(("page", "limit"), [(0, 10), (1, 0), (1, 101)])
async def test_list_clients_rejects_bad_paging(service, page, limit):
    with pytest.raises(ValidationError):
        await service.list_clients(page=page, limit=limit)


# ── Contacts ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_contact_crud(service, clients):
    client = await service.create_client(_new_client())
    contacts = ContactService(FakeStore(), clients)

    contact = await contacts.create_contact(
        client.id, ContactCreate(name="Pat", email="pat@acme.test")
    )
    updated = await contacts.update_contact(contact.id, ContactUpdate(role="Payroll"))
    assert updated.role == "Payroll"

    with pytest.raises(FieldValidationError):
        await contacts.update_contact(contact.id, ContactUpdate(email=""))

    await contacts.delete_contact(contact.id)
    with pytest.raises(NotFoundError, match="Contact"):
        await contacts.delete_contact(contact.id)
