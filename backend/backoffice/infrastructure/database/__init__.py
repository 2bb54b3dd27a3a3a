from .base import Base
from .session import engine, async_session_factory, get_db_session
from .models import (
    AdminModel,
    CaseFileModel,
    CaseModel,
    ClientAddressModel,
    ClientAuditModel,
    ClientContactModel,
    ClientModel,
    ContractModel,
    InteractionModel,
)

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "AdminModel",
    "CaseFileModel",
    "CaseModel",
    "ClientAddressModel",
    "ClientAuditModel",
    "ClientContactModel",
    "ClientModel",
    "ContractModel",
    "InteractionModel",
]
