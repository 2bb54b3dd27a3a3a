"""Abstract repository interface (port) for client contacts."""

from abc import ABC, abstractmethod

from backoffice.domain.entities import ClientContact


class ContactRepository(ABC):
    """Port for client contact persistence."""

    @abstractmethod
    async def get_by_id(self, contact_id: int) -> ClientContact | None:
        ...

    @abstractmethod
    async def list_for_client(self, client_id: int) -> list[ClientContact]:
        ...

    @abstractmethod
    async def create(self, contact: ClientContact) -> ClientContact:
        ...

    @abstractmethod
    async def update(self, contact: ClientContact) -> ClientContact:
        ...

    @abstractmethod
    async def delete(self, contact_id: int) -> bool:
        """Delete a contact. Returns True if deleted, False if not found."""
        ...
