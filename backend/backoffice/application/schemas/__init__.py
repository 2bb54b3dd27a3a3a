from .common import PaginationMeta
from .contract import (
    ContractCreate,
    ContractResponse,
    ContractUpdate,
    DocumentUrlsUpdate,
    ServicesUpdate,
    SetActiveContract,
)
from .client import (
    AddressCreate,
    AddressResponse,
    AddressUpdate,
    AuditCreate,
    AuditResponse,
    AuditUpdate,
    ClientCreate,
    ClientDetailResponse,
    ClientListResponse,
    ClientResponse,
    ClientStatusChange,
    ClientUpdate,
    ContactCreate,
    ContactResponse,
    ContactUpdate,
)
from .case import (
    CaseCreate,
    CaseFileCreate,
    CaseFileResponse,
    CaseResponse,
    CaseUpdate,
    InteractionCreate,
    InteractionResponse,
    InteractionUpdate,
)
from .admin import AdminCreate, AdminListResponse, AdminResponse, AdminSummary, AdminUpdate
from .dashboard import ActionWithDeadline, DashboardMetrics, RecentClient, ServiceTierBreakdown
from .onboarding import (
    ClientChecklist,
    ContractChecklist,
    OnboardingFieldUpdate,
    OnboardingStatus,
    OnboardingTarget,
)

__all__ = [
    "PaginationMeta",
    "ContractCreate",
    "ContractResponse",
    "ContractUpdate",
    "DocumentUrlsUpdate",
    "ServicesUpdate",
    "SetActiveContract",
    "AddressCreate",
    "AddressResponse",
    "AddressUpdate",
    "AuditCreate",
    "AuditResponse",
    "AuditUpdate",
    "ClientCreate",
    "ClientDetailResponse",
    "ClientListResponse",
    "ClientResponse",
    "ClientStatusChange",
    "ClientUpdate",
    "ContactCreate",
    "ContactResponse",
    "ContactUpdate",
    "CaseCreate",
    "CaseFileCreate",
    "CaseFileResponse",
    "CaseResponse",
    "CaseUpdate",
    "InteractionCreate",
    "InteractionResponse",
    "InteractionUpdate",
    "AdminCreate",
    "AdminListResponse",
    "AdminResponse",
    "AdminSummary",
    "AdminUpdate",
    "ActionWithDeadline",
    "DashboardMetrics",
    "RecentClient",
    "ServiceTierBreakdown",
    "ClientChecklist",
    "ContractChecklist",
    "OnboardingFieldUpdate",
    "OnboardingStatus",
    "OnboardingTarget",
]
