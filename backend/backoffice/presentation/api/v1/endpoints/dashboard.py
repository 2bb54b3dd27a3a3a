"""Read-only dashboard rollups."""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query

from backoffice.application.schemas.dashboard import (
    ActionWithDeadline,
    DashboardMetrics,
    RecentClient,
    ServiceTierBreakdown,
)
from backoffice.application.services import DashboardService
from backoffice.domain.entities import AdminSession
from backoffice.infrastructure.dependencies import get_dashboard_service, require_admin_session
from backoffice.presentation.api.actions import ActionResponse, ActionRunner, get_action_runner

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/metrics", response_model=ActionResponse[DashboardMetrics])
async def get_dashboard_metrics(
    service: DashboardService = Depends(get_dashboard_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    return await runner.run("get_dashboard_metrics", service.get_dashboard_metrics)


@router.get("/recent-clients", response_model=ActionResponse[list[RecentClient]])
async def get_recent_clients(
    limit: int | None = Query(None, ge=1, le=100),
    service: DashboardService = Depends(get_dashboard_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    return await runner.run(
        "get_recent_clients",
        lambda: service.get_recent_clients(limit),
        lambda clients: [RecentClient.model_validate(c, from_attributes=True) for c in clients],
    )


@router.get("/service-tiers", response_model=ActionResponse[ServiceTierBreakdown])
async def get_service_tier_breakdown(
    service: DashboardService = Depends(get_dashboard_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    return await runner.run("get_service_tier_breakdown", service.get_service_tier_breakdown)


@router.get("/upcoming-renewals", response_model=ActionResponse[int])
async def get_upcoming_renewals(
    days_ahead: int | None = Query(None, ge=0),
    service: DashboardService = Depends(get_dashboard_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    return await runner.run(
        "get_upcoming_renewals", lambda: service.get_upcoming_renewals(days_ahead)
    )


@router.get("/revenue", response_model=ActionResponse[Decimal])
async def get_total_monthly_revenue(
    service: DashboardService = Depends(get_dashboard_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    return await runner.run("get_total_monthly_revenue", service.get_total_monthly_revenue)


@router.get("/active-clients", response_model=ActionResponse[int])
async def get_active_clients_count(
    service: DashboardService = Depends(get_dashboard_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    return await runner.run("get_active_clients_count", service.get_active_clients_count)


@router.get("/actions", response_model=ActionResponse[list[ActionWithDeadline]])
async def get_actions_with_deadlines(
    service: DashboardService = Depends(get_dashboard_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_admin_session),
):
    """Active actions with a due date, soonest first."""
    return await runner.run("get_actions_with_deadlines", service.get_actions_with_deadlines)
