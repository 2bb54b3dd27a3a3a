"""Back-office staff account endpoints. Managing admins requires SUPER_ADMIN."""

from fastapi import APIRouter, Depends, Query

from backoffice.application.schemas.admin import (
    AdminCreate,
    AdminListResponse,
    AdminResponse,
    AdminSummary,
    AdminUpdate,
)
from backoffice.application.services import AdminService
from backoffice.domain.entities import AdminRole, AdminSession
from backoffice.infrastructure.dependencies import (
    get_admin_service,
    require_admin_session,
    require_super_admin,
)
from backoffice.presentation.api.actions import ActionResponse, ActionRunner, get_action_runner

router = APIRouter(prefix="/admins", tags=["Admins"])


def _admin(admin) -> AdminResponse:
    return AdminResponse.model_validate(admin, from_attributes=True)


@router.get("/me", response_model=ActionResponse[AdminSummary])
async def get_current_admin(
    session: AdminSession = Depends(require_admin_session),
):
    return ActionResponse.ok(
        AdminSummary(id=session.admin_id, name=session.name, email=session.email)
    )


@router.get("/active", response_model=ActionResponse[list[AdminSummary]])
async def list_active_admins(
    service: AdminService = Depends(get_admin_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    """Active admins by name, for "assigned to" pickers."""
    return await runner.run(
        "list_active_admins",
        service.list_active_admins,
        lambda admins: [AdminSummary.model_validate(a, from_attributes=True) for a in admins],
    )


@router.get("", response_model=ActionResponse[AdminListResponse])
async def list_admins(
    page: int = Query(1),
    limit: int = Query(25),
    search: str | None = Query(None),
    role: AdminRole | None = Query(None),
    is_active: bool | None = Query(None),
    service: AdminService = Depends(get_admin_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_super_admin),
):
    def present(result) -> AdminListResponse:
        admins, pagination = result
        return AdminListResponse(admins=[_admin(a) for a in admins], pagination=pagination)

    return await runner.run(
        "list_admins",
        lambda: service.list_admins(
            page=page, limit=limit, search=search, role=role, is_active=is_active
        ),
        present,
    )


@router.get("/{admin_id}", response_model=ActionResponse[AdminResponse])
async def get_admin(
    admin_id: str,
    service: AdminService = Depends(get_admin_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_super_admin),
):
    return await runner.run("get_admin", lambda: service.get_admin(admin_id), _admin)


@router.post("", response_model=ActionResponse[AdminResponse])
async def create_admin(
    data: AdminCreate,
    service: AdminService = Depends(get_admin_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_super_admin),
):
    return await runner.run("create_admin", lambda: service.create_admin(data), _admin)


@router.patch("/{admin_id}", response_model=ActionResponse[AdminResponse])
async def update_admin(
    admin_id: str,
    data: AdminUpdate,
    service: AdminService = Depends(get_admin_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_super_admin),
):
    return await runner.run("update_admin", lambda: service.update_admin(admin_id, data), _admin)


@router.post("/{admin_id}/deactivate", response_model=ActionResponse[AdminResponse])
async def deactivate_admin(
    admin_id: str,
    service: AdminService = Depends(get_admin_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_super_admin),
):
    return await runner.run(
        "deactivate_admin", lambda: service.deactivate_admin(admin_id), _admin
    )


@router.post("/{admin_id}/reactivate", response_model=ActionResponse[AdminResponse])
async def reactivate_admin(
    admin_id: str,
    service: AdminService = Depends(get_admin_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_super_admin),
):
    return await runner.run(
        "reactivate_admin", lambda: service.reactivate_admin(admin_id), _admin
    )
