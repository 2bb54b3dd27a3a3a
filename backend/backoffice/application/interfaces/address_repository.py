"""Abstract repository interface (port) for client addresses."""

from abc import ABC, abstractmethod

from backoffice.domain.entities import ClientAddress


class AddressRepository(ABC):
    """Port for client address persistence."""

    @abstractmethod
    async def get_by_id(self, address_id: int) -> ClientAddress | None:
        ...

    @abstractmethod
    async def list_for_client(self, client_id: int) -> list[ClientAddress]:
        ...

    @abstractmethod
    async def create(self, address: ClientAddress) -> ClientAddress:
        ...

    @abstractmethod
    async def update(self, address: ClientAddress) -> ClientAddress:
        ...

    @abstractmethod
    async def delete(self, address_id: int) -> bool:
        """Delete an address. Returns True if deleted, False if not found."""
        ...
