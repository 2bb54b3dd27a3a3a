"""Contract lifecycle endpoints."""

from fastapi import APIRouter, Depends, Query

from backoffice.application.schemas.contract import (
    ContractCreate,
    ContractResponse,
    ContractUpdate,
    DocumentUrlsUpdate,
    ServicesUpdate,
    SetActiveContract,
)
from backoffice.application.services import ContractService
from backoffice.domain.entities import AdminSession, ContractStatus
from backoffice.infrastructure.dependencies import (
    get_contract_service,
    require_admin_session,
    require_writer,
)
from backoffice.presentation.api.actions import ActionResponse, ActionRunner, get_action_runner

router = APIRouter(tags=["Contracts"])


def _contract(contract) -> ContractResponse | None:
    if contract is None:
        return None
    return ContractResponse.model_validate(contract, from_attributes=True)


@router.get(
    "/clients/{client_id}/contracts", response_model=ActionResponse[list[ContractResponse]]
)
async def list_client_contracts(
    client_id: int,
    status: ContractStatus | None = Query(None),
    service: ContractService = Depends(get_contract_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    """All versions for a client: ACTIVE first, then DRAFT, then ARCHIVED."""
    return await runner.run(
        "list_client_contracts",
        lambda: service.list_client_contracts(client_id, status),
        lambda contracts: [_contract(c) for c in contracts],
    )


@router.get(
    "/clients/{client_id}/contracts/active",
    response_model=ActionResponse[ContractResponse | None],
)
async def get_active_contract(
    client_id: int,
    service: ContractService = Depends(get_contract_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    return await runner.run(
        "get_active_contract", lambda: service.get_active_contract(client_id), _contract
    )


@router.get("/clients/{client_id}/contracts/has-active", response_model=ActionResponse[bool])
async def has_active_contract(
    client_id: int,
    service: ContractService = Depends(get_contract_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    return await runner.run("has_active_contract", lambda: service.has_active_contract(client_id))


@router.get("/contracts/{contract_id}", response_model=ActionResponse[ContractResponse])
async def get_contract(
    contract_id: int,
    service: ContractService = Depends(get_contract_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    return await runner.run("get_contract", lambda: service.get_contract(contract_id), _contract)


@router.post("/contracts", response_model=ActionResponse[ContractResponse])
async def create_contract(
    data: ContractCreate,
    service: ContractService = Depends(get_contract_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    """Create the next contract version, optionally replacing the ACTIVE one."""
    return await runner.run("create_contract", lambda: service.create_contract(data), _contract)


@router.patch("/contracts/{contract_id}", response_model=ActionResponse[ContractResponse])
async def update_contract(
    contract_id: int,
    data: ContractUpdate,
    service: ContractService = Depends(get_contract_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run(
        "update_contract", lambda: service.update_contract(contract_id, data), _contract
    )


@router.put(
    "/contracts/{contract_id}/services-in-scope",
    response_model=ActionResponse[ContractResponse],
)
async def update_services_in_scope(
    contract_id: int,
    data: ServicesUpdate,
    service: ContractService = Depends(get_contract_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run(
        "update_services_in_scope",
        lambda: service.update_services_in_scope(contract_id, data.services),
        _contract,
    )


@router.put(
    "/contracts/{contract_id}/services-out-of-scope",
    response_model=ActionResponse[ContractResponse],
)
async def update_services_out_of_scope(
    contract_id: int,
    data: ServicesUpdate,
    service: ContractService = Depends(get_contract_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run(
        "update_services_out_of_scope",
        lambda: service.update_services_out_of_scope(contract_id, data.services),
        _contract,
    )


@router.patch(
    "/contracts/{contract_id}/documents", response_model=ActionResponse[ContractResponse]
)
async def update_document_urls(
    contract_id: int,
    data: DocumentUrlsUpdate,
    service: ContractService = Depends(get_contract_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run(
        "update_document_urls",
        lambda: service.update_document_urls(contract_id, data),
        _contract,
    )


@router.post("/contracts/set-active", response_model=ActionResponse[ContractResponse])
async def set_active_contract(
    data: SetActiveContract,
    service: ContractService = Depends(get_contract_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    """Re-activate an ARCHIVED version, archiving the client's current ACTIVE one."""
    return await runner.run(
        "set_active_contract",
        lambda: service.set_active_contract(data.client_id, data.contract_id),
        _contract,
    )


@router.post(
    "/contracts/{contract_id}/finalize", response_model=ActionResponse[ContractResponse]
)
async def finalize_contract(
    contract_id: int,
    service: ContractService = Depends(get_contract_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run(
        "finalize_contract", lambda: service.finalize_contract(contract_id), _contract
    )


@router.delete("/contracts/{contract_id}", response_model=ActionResponse[None])
async def delete_contract(
    contract_id: int,
    service: ContractService = Depends(get_contract_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    """Delete a DRAFT contract. Other statuses are refused."""
    return await runner.run("delete_contract", lambda: service.delete_contract(contract_id))
