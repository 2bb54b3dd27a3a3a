from .client_models import (
    ClientAddressModel,
    ClientAuditModel,
    ClientContactModel,
    ClientModel,
)
from .contract_model import ContractModel
from .case_models import CaseFileModel, CaseModel, InteractionModel
from .admin_model import AdminModel

__all__ = [
    "ClientAddressModel",
    "ClientAuditModel",
    "ClientContactModel",
    "ClientModel",
    "ContractModel",
    "CaseFileModel",
    "CaseModel",
    "InteractionModel",
    "AdminModel",
]
