from .admin_service import AdminService
from .case_service import CaseService
from .client_detail_service import AddressService, AuditService, ContactService
from .client_service import ClientService
from .contract_service import ContractService
from .dashboard_service import DashboardService
from .onboarding_service import OnboardingService

__all__ = [
    "AdminService",
    "CaseService",
    "AddressService",
    "AuditService",
    "ContactService",
    "ClientService",
    "ContractService",
    "DashboardService",
    "OnboardingService",
]
