from .client_repository import ClientRepository
from .contact_repository import ContactRepository
from .address_repository import AddressRepository
from .audit_repository import AuditRepository
from .contract_repository import ContractRepository
from .case_repository import CaseRepository
from .interaction_repository import InteractionRepository
from .case_file_repository import CaseFileRepository
from .admin_repository import AdminRepository
from .password_hasher import PasswordHasher

__all__ = [
    "ClientRepository",
    "ContactRepository",
    "AddressRepository",
    "AuditRepository",
    "ContractRepository",
    "CaseRepository",
    "InteractionRepository",
    "CaseFileRepository",
    "AdminRepository",
    "PasswordHasher",
]
