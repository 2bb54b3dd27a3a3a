"""Onboarding checklist endpoints."""

from fastapi import APIRouter, Depends

from backoffice.application.schemas.onboarding import OnboardingFieldUpdate, OnboardingStatus
from backoffice.application.services import OnboardingService
from backoffice.domain.entities import AdminSession
from backoffice.infrastructure.dependencies import (
    get_onboarding_service,
    require_admin_session,
    require_writer,
)
from backoffice.presentation.api.actions import ActionResponse, ActionRunner, get_action_runner

router = APIRouter(prefix="/clients/{client_id}/onboarding", tags=["Onboarding"])


@router.get("", response_model=ActionResponse[OnboardingStatus])
async def get_onboarding(
    client_id: int,
    service: OnboardingService = Depends(get_onboarding_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    return await runner.run("get_onboarding", lambda: service.get_onboarding(client_id))


@router.patch("", response_model=ActionResponse[OnboardingStatus])
async def update_onboarding_field(
    client_id: int,
    data: OnboardingFieldUpdate,
    service: OnboardingService = Depends(get_onboarding_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    """Flip one checklist item on the client or on its ACTIVE contract."""
    return await runner.run(
        "update_onboarding_field",
        lambda: service.update_onboarding_field(client_id, data.target, data.field, data.value),
    )
