"""Unit tests for the ContractService lifecycle rules."""

from dataclasses import replace
from datetime import date

import pytest

from backoffice.application.schemas.contract import (
    ContractCreate,
    ContractUpdate,
    DocumentUrlsUpdate,
)
from backoffice.application.services import ContractService
from backoffice.domain.entities import Client, Contract, ContractStatus, ServiceTier
from backoffice.domain.exceptions import (
    ClientNotFoundError,
    ContractNotFoundError,
    FieldValidationError,
    ValidationError,
)


# ── Fakes ────────────────────────────────────────────────────────────


class FakeClientRepository:
    def __init__(self, client_ids: list[int]):
        self._clients = {
            cid: Client(
                id=cid,
                company_name=f"Client {cid}",
                contact_name="Jo Bloggs",
                contact_email=f"client{cid}@example.com",
                service_tier=ServiceTier.TIER_1,
            )
            for cid in client_ids
        }

    async def get_by_id(self, client_id: int) -> Client | None:
        return self._clients.get(client_id)


class FakeContractRepository:
    """In-memory contract store; hands out copies like a real session would."""

    def __init__(self):
        self._contracts: dict[int, Contract] = {}
        self._next_id = 1

    def seed(self, **kwargs) -> Contract:
        contract = Contract(
            contract_start_date=date(2024, 1, 1),
            contract_renewal_date=date(2025, 1, 1),
            **kwargs,
        )
        contract.id = self._next_id
        self._next_id += 1
        self._contracts[contract.id] = contract
        return replace(contract)

    def statuses(self, client_id: int) -> list[ContractStatus]:
        return [c.status for c in self._contracts.values() if c.client_id == client_id]

    async def get_by_id(self, contract_id: int) -> Contract | None:
        contract = self._contracts.get(contract_id)
        return replace(contract) if contract else None

    async def list_for_client(self, client_id, status=None) -> list[Contract]:
        return [
            replace(c)
            for c in self._contracts.values()
            if c.client_id == client_id and (status is None or c.status is status)
        ]

    async def get_active_for_client(self, client_id: int) -> Contract | None:
        for c in self._contracts.values():
            if c.client_id == client_id and c.is_active:
                return replace(c)
        return None

    async def count_active(self, client_id: int) -> int:
        return self.statuses(client_id).count(ContractStatus.ACTIVE)

    async def max_version(self, client_id: int) -> int:
        return max(
            (c.version for c in self._contracts.values() if c.client_id == client_id),
            default=0,
        )

    async def archive_active(self, client_id: int) -> int:
        archived = 0
        for c in self._contracts.values():
            if c.client_id == client_id and c.is_active:
                c.status = ContractStatus.ARCHIVED
                archived += 1
        return archived

    async def create(self, contract: Contract) -> Contract:
        contract.id = self._next_id
        self._next_id += 1
        self._contracts[contract.id] = replace(contract)
        return contract

    async def update(self, contract: Contract) -> Contract:
        if contract.id not in self._contracts:
            raise ValueError(f"Contract {contract.id} not found")
        self._contracts[contract.id] = replace(contract)
        return contract

    async def delete(self, contract_id: int) -> bool:
        return self._contracts.pop(contract_id, None) is not None


@pytest.fixture
def contracts() -> FakeContractRepository:
    return FakeContractRepository()


@pytest.fixture
def service(contracts: FakeContractRepository) -> ContractService:
    return ContractService(contracts, FakeClientRepository([1, 5]))


def _create(client_id: int = 5, **kwargs) -> ContractCreate:
    return ContractCreate(
        client_id=client_id,
        contract_start_date=date(2025, 1, 1),
        contract_renewal_date=date(2026, 1, 1),
        **kwargs,
    )


# ── Creation ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_replace_existing_archives_active_and_numbers_next_version(service, contracts):
    contracts.seed(client_id=5, version=1, status=ContractStatus.ARCHIVED)
    v2 = contracts.seed(client_id=5, version=2, status=ContractStatus.ACTIVE)

    created = await service.create_contract(_create(replace_existing=True))

    assert created.version == 3
    assert created.status is ContractStatus.ACTIVE
    assert created.contract_number == "CON-1-005-003"
    assert (await contracts.get_by_id(v2.id)).status is ContractStatus.ARCHIVED
    assert await contracts.count_active(5) == 1


@pytest.mark.asyncio
async def test_second_active_contract_is_refused(service, contracts):
    contracts.seed(client_id=5, version=1, status=ContractStatus.ACTIVE)

    with pytest.raises(ValidationError, match="already has an ACTIVE contract"):
        await service.create_contract(_create())

    assert contracts.statuses(5) == [ContractStatus.ACTIVE]


@pytest.mark.asyncio
async def test_draft_can_be_created_next_to_active(service, contracts):
    contracts.seed(client_id=5, version=1, status=ContractStatus.ACTIVE)

    draft = await service.create_contract(_create(status=ContractStatus.DRAFT))

    assert draft.status is ContractStatus.DRAFT
    assert draft.version == 2
    assert await contracts.count_active(5) == 1


@pytest.mark.asyncio
async def test_missing_dates_are_reported_per_field(service):
    with pytest.raises(FieldValidationError) as exc_info:
        await service.create_contract(ContractCreate(client_id=5))

    assert exc_info.value.message == "Missing required fields"
    assert {f.field for f in exc_info.value.fields} == {
        "contract_start_date",
        "contract_renewal_date",
    }


@pytest.mark.asyncio
async def test_renewal_must_follow_start(service):
    data = ContractCreate(
        client_id=5,
        contract_start_date=date(2025, 6, 1),
        contract_renewal_date=date(2025, 6, 1),
    )
    with pytest.raises(ValidationError, match="renewal date must be after start date"):
        await service.create_contract(data)


@pytest.mark.asyncio
async def test_unknown_client_is_rejected(service):
    with pytest.raises(ClientNotFoundError):
        await service.create_contract(_create(client_id=42))


@pytest.mark.asyncio
async def test_unset_flags_and_lists_get_defaults(service):
    created = await service.create_contract(_create(mileage_rate_not_needed=None))

    assert created.mileage_rate_not_needed is False
    assert created.inclusive_services_in_scope == []


# ── Status transitions ───────────────────────────────────────────────


@pytest.mark.asyncio
async def test_set_active_contract_refuses_draft(service, contracts):
    draft = contracts.seed(client_id=5, version=1, status=ContractStatus.DRAFT)

    with pytest.raises(ValidationError) as exc_info:
        await service.set_active_contract(5, draft.id)

    assert exc_info.value.message == (
        "Cannot set DRAFT contracts as ACTIVE. Please complete the contract first."
    )


@pytest.mark.asyncio
async def test_set_active_contract_swaps_active_version(service, contracts):
    old = contracts.seed(client_id=5, version=1, status=ContractStatus.ARCHIVED)
    current = contracts.seed(client_id=5, version=2, status=ContractStatus.ACTIVE)

    activated = await service.set_active_contract(5, old.id)

    assert activated.status is ContractStatus.ACTIVE
    assert (await contracts.get_by_id(current.id)).status is ContractStatus.ARCHIVED
    assert await contracts.count_active(5) == 1


@pytest.mark.asyncio
async def test_set_active_contract_checks_ownership(service, contracts):
    other = contracts.seed(client_id=1, version=1, status=ContractStatus.ARCHIVED)

    with pytest.raises(ValidationError, match="does not belong to this client"):
        await service.set_active_contract(5, other.id)


@pytest.mark.asyncio
async def test_finalize_promotes_draft(service, contracts):
    contracts.seed(client_id=5, version=1, status=ContractStatus.ACTIVE)
    draft = contracts.seed(client_id=5, version=2, status=ContractStatus.DRAFT)

    finalized = await service.finalize_contract(draft.id)

    assert finalized.status is ContractStatus.ACTIVE
    assert sorted(s.value for s in contracts.statuses(5)) == ["ACTIVE", "ARCHIVED"]


@pytest.mark.asyncio
async def test_finalize_rejects_non_draft(service, contracts):
    active = contracts.seed(client_id=5, version=1, status=ContractStatus.ACTIVE)

    with pytest.raises(ValidationError, match="Only DRAFT"):
        await service.finalize_contract(active.id)


@pytest.mark.asyncio
async def test_activation_sequence_keeps_single_active(service, contracts):
    await service.create_contract(_create())
    draft = await service.create_contract(_create(status=ContractStatus.DRAFT))
    await service.finalize_contract(draft.id)
    await service.create_contract(_create(replace_existing=True))
    await service.set_active_contract(5, draft.id)

    assert await contracts.count_active(5) == 1


# ── Edits and deletion ───────────────────────────────────────────────


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "deletable"),
    [
        (ContractStatus.DRAFT, True),
        (ContractStatus.ACTIVE, False),
        (ContractStatus.ARCHIVED, False),
    ],
)
async def test_delete_only_drafts(service, contracts, status, deletable):
    contract = contracts.seed(client_id=5, version=1, status=status)

    if deletable:
        await service.delete_contract(contract.id)
        assert await contracts.get_by_id(contract.id) is None
    else:
        with pytest.raises(ValidationError, match="Only DRAFT contracts can be deleted"):
            await service.delete_contract(contract.id)
        assert await contracts.get_by_id(contract.id) is not None


@pytest.mark.asyncio
async def test_archived_contract_is_read_only(service, contracts):
    archived = contracts.seed(client_id=5, version=1, status=ContractStatus.ARCHIVED)

    with pytest.raises(ValidationError, match="read-only"):
        await service.update_contract(archived.id, ContractUpdate(mileage_rate=1))
    with pytest.raises(ValidationError, match="read-only"):
        await service.update_services_in_scope(archived.id, ["HR Admin Support"])


@pytest.mark.asyncio
async def test_document_urls_editable_when_archived(service, contracts):
    archived = contracts.seed(client_id=5, version=1, status=ContractStatus.ARCHIVED)

    updated = await service.update_document_urls(
        archived.id, DocumentUrlsUpdate(signed_contract_url="https://files.example.com/c.pdf")
    )

    assert updated.signed_contract_url == "https://files.example.com/c.pdf"


@pytest.mark.asyncio
async def test_update_contract_applies_only_sent_fields(service, contracts):
    contract = contracts.seed(client_id=5, version=1, status=ContractStatus.DRAFT, mileage_rate=2)

    updated = await service.update_contract(
        contract.id, ContractUpdate(contract_renewal_date=date(2026, 6, 1))
    )

    assert updated.contract_renewal_date == date(2026, 6, 1)
    assert updated.mileage_rate == 2


def test_update_schema_rejects_status():
    with pytest.raises(ValueError):
        ContractUpdate(status="ACTIVE")


@pytest.mark.asyncio
async def test_get_contract_not_found(service):
    with pytest.raises(ContractNotFoundError):
        await service.get_contract(999)


# ── Scoped services ──────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_services_must_come_from_catalogue(service, contracts):
    contract = contracts.seed(client_id=5, version=1, status=ContractStatus.ACTIVE)

    updated = await service.update_services_in_scope(
        contract.id, ["HR Admin Support", "Service Analytics"]
    )
    assert updated.inclusive_services_in_scope == ["HR Admin Support", "Service Analytics"]

    with pytest.raises(FieldValidationError) as exc_info:
        await service.update_services_out_of_scope(contract.id, ["Payroll"])
    assert exc_info.value.fields[0].field == "inclusive_services_out_of_scope"
    assert "Payroll" in exc_info.value.fields[0].message


@pytest.mark.asyncio
async def test_create_and_update_reject_unknown_services(service, contracts):
    with pytest.raises(FieldValidationError):
        await service.create_contract(_create(inclusive_services_in_scope=["Case Management"]))

    contract = contracts.seed(client_id=5, version=1, status=ContractStatus.DRAFT)
    with pytest.raises(FieldValidationError):
        await service.update_contract(
            contract.id, ContractUpdate(inclusive_services_out_of_scope=["HR Admin Support"])
        )
