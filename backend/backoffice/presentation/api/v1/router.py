"""V1 API router: aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from backoffice.presentation.api.v1.endpoints.health import router as health_router
from backoffice.presentation.api.v1.endpoints.admins import router as admins_router
from backoffice.presentation.api.v1.endpoints.cases import router as cases_router
from backoffice.presentation.api.v1.endpoints.client_details import router as client_details_router
from backoffice.presentation.api.v1.endpoints.clients import router as clients_router
from backoffice.presentation.api.v1.endpoints.contracts import router as contracts_router
from backoffice.presentation.api.v1.endpoints.dashboard import router as dashboard_router
from backoffice.presentation.api.v1.endpoints.onboarding import router as onboarding_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(clients_router)
router.include_router(client_details_router)
router.include_router(contracts_router)
router.include_router(cases_router)
router.include_router(onboarding_router)
router.include_router(dashboard_router)
router.include_router(admins_router)
