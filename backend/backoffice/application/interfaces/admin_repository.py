"""Abstract repository interface (port) for back-office staff accounts."""

from abc import ABC, abstractmethod

from backoffice.domain.entities import Admin, AdminRole


class AdminRepository(ABC):
    """Port for admin persistence, implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, admin_id: str) -> Admin | None:
        ...

    @abstractmethod
    async def get_by_email(self, email: str, exclude_id: str | None = None) -> Admin | None:
        """Case-insensitive email lookup, ignoring ``exclude_id``."""
        ...

    @abstractmethod
    async def list_active(self) -> list[Admin]:
        """Active admins ordered by name."""
        ...

    @abstractmethod
    async def get_all(
        self,
        *,
        search: str | None = None,
        role: AdminRole | None = None,
        is_active: bool | None = None,
        skip: int = 0,
        limit: int = 25,
    ) -> list[Admin]:
        """Newest first. ``search`` matches email or name."""
        ...

    @abstractmethod
    async def count(
        self,
        *,
        search: str | None = None,
        role: AdminRole | None = None,
        is_active: bool | None = None,
    ) -> int:
        ...

    @abstractmethod
    async def create(self, admin: Admin) -> Admin:
        ...

    @abstractmethod
    async def update(self, admin: Admin) -> Admin:
        ...
