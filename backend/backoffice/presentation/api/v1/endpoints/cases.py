"""Case, interaction and case-file endpoints, including the active-action toggle."""

from fastapi import APIRouter, Depends, Query

from backoffice.application.schemas.case import (
    CaseCreate,
    CaseFileCreate,
    CaseFileResponse,
    CaseResponse,
    CaseUpdate,
    InteractionCreate,
    InteractionResponse,
    InteractionUpdate,
)
from backoffice.application.services import CaseService
from backoffice.domain.entities import AdminSession
from backoffice.infrastructure.dependencies import (
    get_case_service,
    require_admin_session,
    require_writer,
)
from backoffice.presentation.api.actions import ActionResponse, ActionRunner, get_action_runner

router = APIRouter(tags=["Cases"])


def _case(case) -> CaseResponse:
    return CaseResponse.model_validate(case, from_attributes=True)


def _interaction(interaction) -> InteractionResponse:
    return InteractionResponse.model_validate(interaction, from_attributes=True)


def _file(case_file) -> CaseFileResponse:
    return CaseFileResponse.model_validate(case_file, from_attributes=True)


# ── Cases ────────────────────────────────────────────────────────────


@router.get("/clients/{client_id}/cases", response_model=ActionResponse[list[CaseResponse]])
async def list_client_cases(
    client_id: int,
    service: CaseService = Depends(get_case_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    return await runner.run(
        "list_client_cases",
        lambda: service.list_client_cases(client_id),
        lambda cases: [_case(c) for c in cases],
    )


@router.get(
    "/clients/{client_id}/cases/{reference}", response_model=ActionResponse[CaseResponse]
)
async def get_case_by_reference(
    client_id: int,
    reference: str,
    service: CaseService = Depends(get_case_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    """Look a case up by its ``CASE-NNNN`` reference within a client."""
    return await runner.run(
        "get_case_by_reference",
        lambda: service.get_case_by_reference(client_id, reference),
        _case,
    )


@router.get("/cases/{case_id}", response_model=ActionResponse[CaseResponse])
async def get_case(
    case_id: int,
    service: CaseService = Depends(get_case_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    return await runner.run("get_case", lambda: service.get_case(case_id), _case)


@router.post("/cases", response_model=ActionResponse[CaseResponse])
async def create_case(
    data: CaseCreate,
    service: CaseService = Depends(get_case_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run("create_case", lambda: service.create_case(data), _case)


@router.patch("/cases/{case_id}", response_model=ActionResponse[CaseResponse])
async def update_case(
    case_id: int,
    data: CaseUpdate,
    service: CaseService = Depends(get_case_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run("update_case", lambda: service.update_case(case_id, data), _case)


@router.delete("/cases/{case_id}", response_model=ActionResponse[None])
async def delete_case(
    case_id: int,
    service: CaseService = Depends(get_case_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    """Delete a case with its interactions and file records."""
    return await runner.run("delete_case", lambda: service.delete_case(case_id))


# ── Interactions ─────────────────────────────────────────────────────


@router.get(
    "/cases/{case_id}/interactions", response_model=ActionResponse[list[InteractionResponse]]
)
async def list_interactions(
    case_id: int,
    service: CaseService = Depends(get_case_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    """A case's timeline, newest first."""
    return await runner.run(
        "list_interactions",
        lambda: service.list_interactions(case_id),
        lambda interactions: [_interaction(i) for i in interactions],
    )


@router.get("/interactions/{interaction_id}", response_model=ActionResponse[InteractionResponse])
async def get_interaction(
    interaction_id: int,
    service: CaseService = Depends(get_case_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    return await runner.run(
        "get_interaction", lambda: service.get_interaction(interaction_id), _interaction
    )


@router.post("/interactions", response_model=ActionResponse[InteractionResponse])
async def create_interaction(
    data: InteractionCreate,
    service: CaseService = Depends(get_case_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run(
        "create_interaction", lambda: service.create_interaction(data), _interaction
    )


@router.patch(
    "/interactions/{interaction_id}", response_model=ActionResponse[InteractionResponse]
)
async def update_interaction(
    interaction_id: int,
    data: InteractionUpdate,
    service: CaseService = Depends(get_case_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run(
        "update_interaction",
        lambda: service.update_interaction(interaction_id, data),
        _interaction,
    )


@router.delete("/interactions/{interaction_id}", response_model=ActionResponse[None])
async def delete_interaction(
    interaction_id: int,
    service: CaseService = Depends(get_case_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run(
        "delete_interaction", lambda: service.delete_interaction(interaction_id)
    )


@router.post(
    "/interactions/{interaction_id}/active-action",
    response_model=ActionResponse[InteractionResponse],
)
async def set_active_action(
    interaction_id: int,
    service: CaseService = Depends(get_case_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    """Make this interaction its case's single active action."""
    return await runner.run(
        "set_active_action", lambda: service.set_active_action(interaction_id), _interaction
    )


@router.delete(
    "/interactions/{interaction_id}/active-action",
    response_model=ActionResponse[InteractionResponse],
)
async def unset_active_action(
    interaction_id: int,
    service: CaseService = Depends(get_case_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run(
        "unset_active_action",
        lambda: service.unset_active_action(interaction_id),
        _interaction,
    )


# ── Files ────────────────────────────────────────────────────────────


@router.get("/cases/{case_id}/files", response_model=ActionResponse[list[CaseFileResponse]])
async def list_files(
    case_id: int,
    interaction_id: int | None = Query(None, description="Only files attached to this interaction"),
    service: CaseService = Depends(get_case_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    return await runner.run(
        "list_files",
        lambda: service.list_files(case_id, interaction_id),
        lambda files: [_file(f) for f in files],
    )


@router.post("/case-files", response_model=ActionResponse[CaseFileResponse])
async def create_file(
    data: CaseFileCreate,
    service: CaseService = Depends(get_case_service),
    runner: ActionRunner = Depends(get_action_runner),
    session: AdminSession = Depends(require_writer),
):
    """Record a file already uploaded to object storage."""
    return await runner.run(
        "create_file", lambda: service.create_file(data, uploaded_by=session.name), _file
    )


@router.delete("/case-files/{file_id}", response_model=ActionResponse[None])
async def delete_file(
    file_id: int,
    service: CaseService = Depends(get_case_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run("delete_file", lambda: service.delete_file(file_id))
