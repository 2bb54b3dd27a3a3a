"""FastAPI dependency injection: wires infrastructure to the application layer.

Every provider takes the request's AsyncSession, so all services used by
one request share a single transaction.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.services import (
    AddressService,
    AdminService,
    AuditService,
    CaseService,
    ClientService,
    ContactService,
    ContractService,
    DashboardService,
    OnboardingService,
)
from backoffice.config import get_settings
from backoffice.domain.entities import AdminRole, AdminSession
from backoffice.domain.exceptions import AuthenticationError, AuthorizationError
from backoffice.infrastructure.database.repositories import (
    SQLAlchemyAddressRepository,
    SQLAlchemyAdminRepository,
    SQLAlchemyAuditRepository,
    SQLAlchemyCaseFileRepository,
    SQLAlchemyCaseRepository,
    SQLAlchemyClientRepository,
    SQLAlchemyContactRepository,
    SQLAlchemyContractRepository,
    SQLAlchemyInteractionRepository,
)
from backoffice.infrastructure.database.session import get_db_session
from backoffice.infrastructure.security.password_hasher import PasslibPasswordHasher


async def get_client_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ClientService, None]:
    """Provides a ClientService with client, contact, audit and contract repositories."""
    yield ClientService(
        client_repository=SQLAlchemyClientRepository(session),
        contact_repository=SQLAlchemyContactRepository(session),
        audit_repository=SQLAlchemyAuditRepository(session),
        contract_repository=SQLAlchemyContractRepository(session),
    )


async def get_contact_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ContactService, None]:
    yield ContactService(SQLAlchemyContactRepository(session), SQLAlchemyClientRepository(session))


async def get_address_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AddressService, None]:
    yield AddressService(SQLAlchemyAddressRepository(session), SQLAlchemyClientRepository(session))


async def get_audit_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AuditService, None]:
    yield AuditService(SQLAlchemyAuditRepository(session), SQLAlchemyClientRepository(session))


async def get_contract_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ContractService, None]:
    """Provides a ContractService with its repositories wired up."""
    yield ContractService(
        contract_repository=SQLAlchemyContractRepository(session),
        client_repository=SQLAlchemyClientRepository(session),
    )


async def get_case_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CaseService, None]:
    """Provides a CaseService with case, interaction, file and client repositories."""
    yield CaseService(
        case_repository=SQLAlchemyCaseRepository(session),
        interaction_repository=SQLAlchemyInteractionRepository(session),
        file_repository=SQLAlchemyCaseFileRepository(session),
        client_repository=SQLAlchemyClientRepository(session),
    )


async def get_dashboard_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[DashboardService, None]:
    """Provides a DashboardService using the configured renewal window."""
    settings = get_settings()
    yield DashboardService(
        client_repository=SQLAlchemyClientRepository(session),
        interaction_repository=SQLAlchemyInteractionRepository(session),
        renewal_window_days=settings.upcoming_renewal_days,
        recent_clients_limit=settings.recent_clients_limit,
    )


async def get_onboarding_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[OnboardingService, None]:
    yield OnboardingService(
        client_repository=SQLAlchemyClientRepository(session),
        contract_repository=SQLAlchemyContractRepository(session),
    )


async def get_admin_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AdminService, None]:
    """Provides an AdminService with the passlib hasher."""
    yield AdminService(SQLAlchemyAdminRepository(session), PasslibPasswordHasher())


# ── Session / authorization ─────────────────────────────────────────


async def require_admin_session(
    request: Request,
    service: AdminService = Depends(get_admin_service),
) -> AdminSession:
    """Resolve the admin id forwarded by the auth gateway, or answer 401."""
    admin_id = request.headers.get(get_settings().admin_id_header)
    try:
        return await service.get_session(admin_id)
    except AuthenticationError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


def require_role(required: AdminRole) -> Callable[..., Awaitable[AdminSession]]:
    """Dependency factory: the current session, if its role is at least ``required``."""

    async def _check(
        session: AdminSession = Depends(require_admin_session),
    ) -> AdminSession:
        try:
            return AdminService.authorize(session, required)
        except AuthorizationError as e:
            raise HTTPException(status_code=e.status_code, detail=e.message) from e

    return _check


require_writer = require_role(AdminRole.ADMIN)
require_super_admin = require_role(AdminRole.SUPER_ADMIN)
