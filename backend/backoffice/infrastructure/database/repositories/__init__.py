from .admin_repository import SQLAlchemyAdminRepository
from .case_repository import (
    SQLAlchemyCaseFileRepository,
    SQLAlchemyCaseRepository,
    SQLAlchemyInteractionRepository,
)
from .client_detail_repositories import (
    SQLAlchemyAddressRepository,
    SQLAlchemyAuditRepository,
    SQLAlchemyContactRepository,
)
from .client_repository import SQLAlchemyClientRepository
from .contract_repository import SQLAlchemyContractRepository

__all__ = [
    "SQLAlchemyAdminRepository",
    "SQLAlchemyCaseFileRepository",
    "SQLAlchemyCaseRepository",
    "SQLAlchemyInteractionRepository",
    "SQLAlchemyAddressRepository",
    "SQLAlchemyAuditRepository",
    "SQLAlchemyContactRepository",
    "SQLAlchemyClientRepository",
    "SQLAlchemyContractRepository",
]
