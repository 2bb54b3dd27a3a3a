"""Abstract repository interface (port) for Client persistence."""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal

from backoffice.domain.entities import Client, ClientStatus, ServiceTier


class ClientRepository(ABC):
    """Port for client persistence, implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, client_id: int) -> Client | None:
        """Retrieve a client with its contacts, addresses and audits."""
        ...

    @abstractmethod
    async def get_all(
        self,
        *,
        search: str | None = None,
        skip: int = 0,
        limit: int = 25,
    ) -> list[Client]:
        """Retrieve clients ordered by status then company name.

        ``search`` matches company name, contact email or contact name,
        case-insensitively.
        """
        ...

    @abstractmethod
    async def count(self, *, search: str | None = None) -> int:
        """Count the clients :meth:`get_all` would page over."""
        ...

    @abstractmethod
    async def find_active_by_email(
        self, email: str, exclude_id: int | None = None
    ) -> Client | None:
        """Find an ACTIVE client using ``email``, ignoring ``exclude_id``."""
        ...

    @abstractmethod
    async def create(self, client: Client) -> Client:
        """Persist a new client (without children) and return it with its ID."""
        ...

    @abstractmethod
    async def update(self, client: Client) -> Client:
        """Write back the scalar fields of an existing client."""
        ...

    @abstractmethod
    async def get_unique_sectors(self) -> list[str]:
        """Distinct non-null sectors, sorted ascending."""
        ...

    # ── Dashboard rollups ─────────────────────────────────────────────

    @abstractmethod
    async def count_by_status(self, status: ClientStatus) -> int:
        ...

    @abstractmethod
    async def count_active_by_tier(self) -> dict[ServiceTier, int]:
        """ACTIVE client counts per service tier (tiers with no clients omitted)."""
        ...

    @abstractmethod
    async def sum_active_retainers(self) -> Decimal:
        ...

    @abstractmethod
    async def count_active_renewals_between(self, start: date, end: date) -> int:
        """ACTIVE clients whose renewal date falls in ``[start, end]``."""
        ...

    @abstractmethod
    async def get_recent_active(self, limit: int) -> list[Client]:
        """Newest ACTIVE clients first."""
        ...
