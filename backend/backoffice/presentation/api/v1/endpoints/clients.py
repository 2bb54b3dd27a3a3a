"""Client record endpoints: listing, detail, creation, update and soft delete."""

from fastapi import APIRouter, Depends, Query

from backoffice.application.schemas.client import (
    ClientCreate,
    ClientDetailResponse,
    ClientListResponse,
    ClientResponse,
    ClientStatusChange,
    ClientUpdate,
)
from backoffice.application.services import ClientService
from backoffice.domain.entities import AdminSession
from backoffice.infrastructure.dependencies import (
    get_client_service,
    require_admin_session,
    require_writer,
)
from backoffice.presentation.api.actions import ActionResponse, ActionRunner, get_action_runner

router = APIRouter(prefix="/clients", tags=["Clients"])


def _client(client) -> ClientResponse:
    return ClientResponse.model_validate(client, from_attributes=True)


def _client_detail(client) -> ClientDetailResponse:
    return ClientDetailResponse.model_validate(client, from_attributes=True)


@router.get("", response_model=ActionResponse[ClientListResponse])
async def list_clients(
    page: int = Query(1),
    limit: int = Query(25),
    search: str | None = Query(None, description="Company name, contact name or email"),
    service: ClientService = Depends(get_client_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    """Paginated client listing, ordered by status then company name."""

    def present(result) -> ClientListResponse:
        clients, pagination = result
        return ClientListResponse(clients=[_client(c) for c in clients], pagination=pagination)

    return await runner.run(
        "list_clients",
        lambda: service.list_clients(page=page, limit=limit, search=search),
        present,
    )


@router.get("/sectors", response_model=ActionResponse[list[str]])
async def get_unique_sectors(
    service: ClientService = Depends(get_client_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    """Distinct sectors already in use, for form suggestions."""
    return await runner.run("get_unique_sectors", service.get_unique_sectors)


@router.get("/{client_id}", response_model=ActionResponse[ClientDetailResponse])
async def get_client(
    client_id: int,
    service: ClientService = Depends(get_client_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    return await runner.run("get_client", lambda: service.get_client(client_id), _client_detail)


@router.post("", response_model=ActionResponse[ClientDetailResponse])
async def create_client(
    data: ClientCreate,
    service: ClientService = Depends(get_client_service),
    runner: ActionRunner = Depends(get_action_runner),
    session: AdminSession = Depends(require_writer),
):
    """Create a client with its contacts, audits and first ACTIVE contract."""
    return await runner.run(
        "create_client",
        lambda: service.create_client(data, created_by=session.name),
        _client_detail,
    )


@router.patch("/{client_id}", response_model=ActionResponse[ClientResponse])
async def update_client(
    client_id: int,
    data: ClientUpdate,
    service: ClientService = Depends(get_client_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run(
        "update_client", lambda: service.update_client(client_id, data), _client
    )


@router.post("/{client_id}/toggle-status", response_model=ActionResponse[ClientResponse])
async def delete_client(
    client_id: int,
    data: ClientStatusChange | None = None,
    service: ClientService = Depends(get_client_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    """Soft delete an ACTIVE client, or reactivate a PENDING/INACTIVE one."""
    target = data.target_status if data else None
    return await runner.run(
        "delete_client", lambda: service.delete_client(client_id, target), _client
    )
