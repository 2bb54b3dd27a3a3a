"""Abstract repository interface (port) for client audit schedules."""

from abc import ABC, abstractmethod

from backoffice.domain.entities import ClientAudit


class AuditRepository(ABC):
    """Port for client audit persistence."""

    @abstractmethod
    async def get_by_id(self, audit_id: int) -> ClientAudit | None:
        ...

    @abstractmethod
    async def list_for_client(self, client_id: int) -> list[ClientAudit]:
        ...

    @abstractmethod
    async def create(self, audit: ClientAudit) -> ClientAudit:
        ...

    @abstractmethod
    async def update(self, audit: ClientAudit) -> ClientAudit:
        ...

    @abstractmethod
    async def delete(self, audit_id: int) -> bool:
        """Delete an audit. Returns True if deleted, False if not found."""
        ...
