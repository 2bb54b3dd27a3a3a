from .admin import Admin, AdminRole, AdminSession, role_at_least
from .case import (
    ActionDeadline,
    ActionParty,
    Case,
    CaseFile,
    CaseStatus,
    Interaction,
    next_case_reference,
)
from .client import (
    AddressType,
    AuditInterval,
    Client,
    ClientAddress,
    ClientAudit,
    ClientContact,
    ClientStatus,
    ClientType,
    ContactType,
    PaymentMethod,
    ServiceTier,
)
from .contract import (
    AVAILABLE_SERVICES_IN_SCOPE,
    AVAILABLE_SERVICES_OUT_OF_SCOPE,
    Contract,
    ContractStatus,
    HoursPeriod,
    RateUnit,
    build_contract_number,
)

__all__ = [
    "Admin",
    "AdminRole",
    "AdminSession",
    "role_at_least",
    "ActionDeadline",
    "ActionParty",
    "Case",
    "CaseFile",
    "CaseStatus",
    "Interaction",
    "next_case_reference",
    "AddressType",
    "AuditInterval",
    "Client",
    "ClientAddress",
    "ClientAudit",
    "ClientContact",
    "ClientStatus",
    "ClientType",
    "ContactType",
    "PaymentMethod",
    "ServiceTier",
    "AVAILABLE_SERVICES_IN_SCOPE",
    "AVAILABLE_SERVICES_OUT_OF_SCOPE",
    "Contract",
    "ContractStatus",
    "HoursPeriod",
    "RateUnit",
    "build_contract_number",
]
