"""Read-only rollups for the back-office home page."""

from collections.abc import Callable
from datetime import date, timedelta
from decimal import Decimal

from backoffice.application.interfaces import ClientRepository, InteractionRepository
from backoffice.application.schemas.dashboard import (
    ActionWithDeadline,
    DashboardMetrics,
    ServiceTierBreakdown,
)
from backoffice.application.services.validation import check_pagination
from backoffice.domain.entities import Client, ClientStatus


class DashboardService:
    def __init__(
        self,
        client_repository: ClientRepository,
        interaction_repository: InteractionRepository,
        *,
        renewal_window_days: int = 30,
        recent_clients_limit: int = 5,
        today: Callable[[], date] = date.today,
    ):
        self._clients = client_repository
        self._interactions = interaction_repository
        self._renewal_window_days = renewal_window_days
        self._recent_clients_limit = recent_clients_limit
        self._today = today

    async def get_dashboard_metrics(self) -> DashboardMetrics:
        return DashboardMetrics(
            total_active_clients=await self.get_active_clients_count(),
            service_tier_breakdown=await self.get_service_tier_breakdown(),
            total_monthly_revenue=await self.get_total_monthly_revenue(),
            upcoming_renewals=await self.get_upcoming_renewals(),
        )

    async def get_recent_clients(self, limit: int | None = None) -> list[Client]:
        if limit is None:
            limit = self._recent_clients_limit
        check_pagination(1, limit)
        return await self._clients.get_recent_active(limit)

    async def get_service_tier_breakdown(self) -> ServiceTierBreakdown:
        counts = await self._clients.count_active_by_tier()
        return ServiceTierBreakdown(**{tier.value: count for tier, count in counts.items()})

    async def get_upcoming_renewals(self, days_ahead: int | None = None) -> int:
        """ACTIVE clients renewing between today and ``days_ahead`` days from now."""
        today = self._today()
        window = self._renewal_window_days if days_ahead is None else days_ahead
        return await self._clients.count_active_renewals_between(
            today, today + timedelta(days=window)
        )

    async def get_total_monthly_revenue(self) -> Decimal:
        return await self._clients.sum_active_retainers()

    async def get_active_clients_count(self) -> int:
        return await self._clients.count_by_status(ClientStatus.ACTIVE)

    async def get_actions_with_deadlines(self) -> list[ActionWithDeadline]:
        """Active actions that carry a due date, soonest first, overdue ones flagged."""
        today = self._today()
        deadlines = await self._interactions.list_active_with_deadlines()
        return [
            ActionWithDeadline(
                interaction_id=item.interaction_id,
                case_numeric_id=item.case_numeric_id,
                case_id=item.case_id,
                case_title=item.case_title,
                client_id=item.client_id,
                client_name=item.client_name,
                client_tier=item.client_tier,
                action_required=item.action_required,
                action_required_by=item.action_required_by,
                action_required_by_date=item.action_required_by_date,
                is_overdue=item.is_overdue(today),
            )
            for item in deadlines
        ]
