"""SQLAlchemy repositories and services against an in-memory SQLite database."""

from collections.abc import AsyncIterator
from datetime import date, timedelta
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from backoffice.application.schemas.case import (
    CaseCreate,
    CaseFileCreate,
    CaseUpdate,
    InteractionCreate,
)
from backoffice.application.schemas.contract import ContractCreate
from backoffice.application.services import (
    CaseService,
    ClientService,
    ContractService,
    DashboardService,
)
from backoffice.domain.entities import (
    ActionParty,
    Client,
    ClientStatus,
    Contract,
    ContractStatus,
    ServiceTier,
)
from backoffice.infrastructure.database import Base
from backoffice.infrastructure.database.repositories import (
    SQLAlchemyAuditRepository,
    SQLAlchemyCaseFileRepository,
    SQLAlchemyCaseRepository,
    SQLAlchemyClientRepository,
    SQLAlchemyContactRepository,
    SQLAlchemyContractRepository,
    SQLAlchemyInteractionRepository,
)


@pytest_asyncio.fixture
async def session() -> AsyncIterator[AsyncSession]:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        yield session
    await engine.dispose()


async def _add_client(session: AsyncSession, name: str = "Acme", **kwargs) -> Client:
    values = {
        "company_name": name,
        "contact_name": "Jo",
        "contact_email": f"{name.lower().replace(' ', '')}@example.com",
        "service_tier": ServiceTier.TIER_1,
    }
    values.update(kwargs)
    return await SQLAlchemyClientRepository(session).create(Client(**values))


def _case_service(session: AsyncSession) -> CaseService:
    return CaseService(
        SQLAlchemyCaseRepository(session),
        SQLAlchemyInteractionRepository(session),
        SQLAlchemyCaseFileRepository(session),
        SQLAlchemyClientRepository(session),
    )


def _contract_service(session: AsyncSession) -> ContractService:
    return ContractService(
        SQLAlchemyContractRepository(session), SQLAlchemyClientRepository(session)
    )


async def _log(service: CaseService, case_id: int, party: ActionParty, due: date | None = None):
    return await service.create_interaction(
        InteractionCreate(
            case_id=case_id,
            party1_name="Sam",
            party1_type=ActionParty.ARGAN,
            party2_name="Jo",
            party2_type=ActionParty.CLIENT,
            content="Meeting notes",
            action_required="Follow up",
            action_required_by=party,
            action_required_by_date=due,
        )
    )


# ── Contracts ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_replace_existing_keeps_one_active_contract(session):
    client = await _add_client(session)
    service = _contract_service(session)
    start, renewal = date(2025, 1, 1), date(2026, 1, 1)

    first = await service.create_contract(
        ContractCreate(client_id=client.id, contract_start_date=start, contract_renewal_date=renewal)
    )
    second = await service.create_contract(
        ContractCreate(
            client_id=client.id,
            contract_start_date=start,
            contract_renewal_date=renewal,
            replace_existing=True,
            inclusive_services_in_scope=["HR Admin Support"],
        )
    )

    contracts = await service.list_client_contracts(client.id)
    assert [(c.version, c.status) for c in contracts] == [
        (2, ContractStatus.ACTIVE),
        (1, ContractStatus.ARCHIVED),
    ]
    assert second.contract_number == "CON-1-001-002"
    assert second.inclusive_services_in_scope == ["HR Admin Support"]
    assert (await service.get_contract(first.id)).is_archived


@pytest.mark.asyncio
async def test_partial_index_rejects_second_active_contract(session):
    client = await _add_client(session)
    repository = SQLAlchemyContractRepository(session)

    for version in (1, 2):
        contract = Contract(
            client_id=client.id,
            contract_start_date=date(2025, 1, 1),
            contract_renewal_date=date(2026, 1, 1),
            contract_number=f"CON-1-001-00{version}",
            version=version,
            status=ContractStatus.ACTIVE,
        )
        if version == 1:
            await repository.create(contract)
        else:
            with pytest.raises(IntegrityError):
                await repository.create(contract)


@pytest.mark.asyncio
async def test_draft_finalize_and_delete(session):
    client = await _add_client(session)
    service = _contract_service(session)
    dates = {"contract_start_date": date(2025, 1, 1), "contract_renewal_date": date(2026, 1, 1)}

    await service.create_contract(ContractCreate(client_id=client.id, **dates))
    draft = await service.create_contract(
        ContractCreate(client_id=client.id, status=ContractStatus.DRAFT, **dates)
    )
    spare = await service.create_contract(
        ContractCreate(client_id=client.id, status=ContractStatus.DRAFT, **dates)
    )

    await service.finalize_contract(draft.id)
    await service.delete_contract(spare.id)

    statuses = [c.status for c in await service.list_client_contracts(client.id)]
    assert statuses == [ContractStatus.ACTIVE, ContractStatus.ARCHIVED]


# ── Cases and the active action ──────────────────────────────────────


@pytest.mark.asyncio
async def test_active_action_swap_leaves_one_flag(session):
    client = await _add_client(session)
    service = _case_service(session)
    case = await service.create_case(
        CaseCreate(client_id=client.id, title="Grievance", escalated_by="Jo")
    )
    first = await _log(service, case.id, ActionParty.CLIENT)
    second = await _log(service, case.id, ActionParty.EMPLOYEE)
    third = await _log(service, case.id, ActionParty.ARGAN)

    for interaction in (first, third, second, second):
        await service.set_active_action(interaction.id)

    flags = {i.id: i.is_active_action for i in await service.list_interactions(case.id)}
    assert flags == {first.id: False, second.id: True, third.id: False}
    assert (await service.get_case(case.id)).action_required_by is ActionParty.EMPLOYEE

    await service.unset_active_action(second.id)
    assert await SQLAlchemyInteractionRepository(session).count_active(case.id) == 0
    assert (await service.get_case(case.id)).action_required_by is None


@pytest.mark.asyncio
async def test_case_update_does_not_touch_action_party(session):
    client = await _add_client(session)
    service = _case_service(session)
    case = await service.create_case(
        CaseCreate(client_id=client.id, title="Grievance", escalated_by="Jo")
    )
    interaction = await _log(service, case.id, ActionParty.CONTRACTOR)
    await service.set_active_action(interaction.id)

    await service.update_case(case.id, CaseUpdate(assigned_to="Sam"))

    reloaded = await service.get_case(case.id)
    assert reloaded.assigned_to == "Sam"
    assert reloaded.action_required_by is ActionParty.CONTRACTOR


@pytest.mark.asyncio
async def test_case_counts_and_cascading_delete(session):
    client = await _add_client(session)
    service = _case_service(session)
    case = await service.create_case(
        CaseCreate(client_id=client.id, title="Absence", escalated_by="Jo")
    )
    interaction = await _log(service, case.id, ActionParty.CLIENT)
    await service.create_file(
        CaseFileCreate(
            case_id=case.id,
            interaction_id=interaction.id,
            file_name="fit-note.pdf",
            file_url="https://files.example.com/fit-note.pdf",
            file_size=2048,
            file_tags=["medical"],
        ),
        uploaded_by="Sam",
    )

    loaded = await service.get_case(case.id)
    assert (loaded.interaction_count, loaded.file_count) == (1, 1)
    assert (await service.get_interaction(interaction.id)).file_count == 1
    [case_file] = await service.list_files(case.id)
    assert case_file.file_tags == ["medical"]

    await service.delete_case(case.id)

    assert await SQLAlchemyCaseRepository(session).get_by_id(case.id) is None
    assert await SQLAlchemyInteractionRepository(session).get_by_id(interaction.id) is None
    assert await SQLAlchemyCaseFileRepository(session).get_by_id(case_file.id) is None


@pytest.mark.asyncio
async def test_case_references_are_per_client(session):
    acme = await _add_client(session, "Acme")
    globex = await _add_client(session, "Globex")
    service = _case_service(session)

    refs = []
    for client in (acme, acme, globex):
        case = await service.create_case(
            CaseCreate(client_id=client.id, title="Case", escalated_by="Jo")
        )
        refs.append(case.case_id)

    assert refs == ["CASE-0001", "CASE-0002", "CASE-0001"]


# ── Clients and dashboard ────────────────────────────────────────────


@pytest.mark.asyncio
async def test_unique_sectors(session):
    for name, sector in (("A", "Tech"), ("B", "Tech"), ("C", "Health"), ("D", None)):
        await _add_client(session, name, sector=sector)
    service = ClientService(
        SQLAlchemyClientRepository(session),
        SQLAlchemyContactRepository(session),
        SQLAlchemyAuditRepository(session),
        SQLAlchemyContractRepository(session),
    )

    assert await service.get_unique_sectors() == ["Health", "Tech"]


@pytest.mark.asyncio
async def test_client_search_and_ordering(session):
    await _add_client(session, "Zeta Corp")
    await _add_client(session, "Alpha Ltd", contact_name="Morgan")
    await _add_client(session, "Beta Ltd", status=ClientStatus.INACTIVE)
    repository = SQLAlchemyClientRepository(session)

    names = [c.company_name for c in await repository.get_all()]
    assert names == ["Alpha Ltd", "Zeta Corp", "Beta Ltd"]

    found = await repository.get_all(search="morgan")
    assert [c.company_name for c in found] == ["Alpha Ltd"]
    assert await repository.count(search="ltd") == 2


@pytest.mark.asyncio
async def test_dashboard_rollups(session):
    today = date.today()
    acme = await _add_client(
        session,
        "Acme",
        monthly_retainer=Decimal("500.00"),
        contract_renewal_date=today + timedelta(days=5),
    )
    await _add_client(session, "Globex", service_tier=ServiceTier.AD_HOC)
    await _add_client(
        session, "Initech", status=ClientStatus.INACTIVE, monthly_retainer=Decimal("900")
    )

    cases = _case_service(session)
    case = await cases.create_case(CaseCreate(client_id=acme.id, title="Late", escalated_by="Jo"))
    overdue = await _log(cases, case.id, ActionParty.ARGAN, due=today - timedelta(days=3))
    await _log(cases, case.id, ActionParty.CLIENT, due=today + timedelta(days=3))
    await cases.set_active_action(overdue.id)

    dashboard = DashboardService(
        SQLAlchemyClientRepository(session), SQLAlchemyInteractionRepository(session)
    )
    metrics = await dashboard.get_dashboard_metrics()

    assert metrics.total_active_clients == 2
    assert metrics.total_monthly_revenue == Decimal("500.00")
    assert metrics.upcoming_renewals == 1
    assert metrics.service_tier_breakdown.TIER_1 == 1
    assert metrics.service_tier_breakdown.AD_HOC == 1

    [action] = await dashboard.get_actions_with_deadlines()
    assert action.interaction_id == overdue.id
    assert action.client_name == "Acme"
    assert action.case_id == "CASE-0001"
    assert action.is_overdue is True
