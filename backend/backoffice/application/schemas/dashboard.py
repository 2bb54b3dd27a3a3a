"""Pydantic DTOs for the dashboard rollups."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel

from backoffice.domain.entities import ActionParty, ClientStatus, ServiceTier


class ServiceTierBreakdown(BaseModel):
    TIER_1: int = 0
    DOC_ONLY: int = 0
    AD_HOC: int = 0


class DashboardMetrics(BaseModel):
    total_active_clients: int
    service_tier_breakdown: ServiceTierBreakdown
    total_monthly_revenue: Decimal
    upcoming_renewals: int


class RecentClient(BaseModel):
    id: int
    company_name: str
    service_tier: ServiceTier
    status: ClientStatus

    model_config = {"from_attributes": True}


class ActionWithDeadline(BaseModel):
    interaction_id: int
    case_numeric_id: int
    case_id: str
    case_title: str
    client_id: int
    client_name: str
    client_tier: str
    action_required: str | None
    action_required_by: ActionParty | None
    action_required_by_date: date
    is_overdue: bool
