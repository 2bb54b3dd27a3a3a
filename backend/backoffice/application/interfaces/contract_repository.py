"""Abstract repository interface (port) for Contract persistence."""

from abc import ABC, abstractmethod

from backoffice.domain.entities import Contract, ContractStatus


class ContractRepository(ABC):
    """Port for contract persistence, implemented in the infrastructure layer.

    Implementations must not commit: the contract lifecycle rules run
    several of these calls inside the caller's transaction.
    """

    @abstractmethod
    async def get_by_id(self, contract_id: int) -> Contract | None:
        ...

    @abstractmethod
    async def list_for_client(
        self, client_id: int, status: ContractStatus | None = None
    ) -> list[Contract]:
        """ACTIVE first, then DRAFT, then ARCHIVED; newest version first within each."""
        ...

    @abstractmethod
    async def get_active_for_client(self, client_id: int) -> Contract | None:
        ...

    @abstractmethod
    async def count_active(self, client_id: int) -> int:
        ...

    @abstractmethod
    async def max_version(self, client_id: int) -> int:
        """Highest version number used by the client, 0 when none."""
        ...

    @abstractmethod
    async def archive_active(self, client_id: int) -> int:
        """Flip every ACTIVE contract of the client to ARCHIVED. Returns the row count."""
        ...

    @abstractmethod
    async def create(self, contract: Contract) -> Contract:
        ...

    @abstractmethod
    async def update(self, contract: Contract) -> Contract:
        ...

    @abstractmethod
    async def delete(self, contract_id: int) -> bool:
        ...
