"""Abstract repository interface (port) for Case persistence."""

from abc import ABC, abstractmethod

from backoffice.domain.entities import ActionParty, Case


class CaseRepository(ABC):
    """Port for case persistence.

    Returned cases carry ``interaction_count`` and ``file_count`` computed
    at read time.
    """

    @abstractmethod
    async def get_by_id(self, case_id: int) -> Case | None:
        ...

    @abstractmethod
    async def get_by_reference(self, client_id: int, reference: str) -> Case | None:
        """Look a case up by its per-client ``CASE-NNNN`` reference."""
        ...

    @abstractmethod
    async def list_for_client(self, client_id: int) -> list[Case]:
        """Newest first."""
        ...

    @abstractmethod
    async def last_reference_for_client(self, client_id: int) -> str | None:
        """Reference of the most recently created case of the client."""
        ...

    @abstractmethod
    async def create(self, case: Case) -> Case:
        ...

    @abstractmethod
    async def update(self, case: Case) -> Case:
        ...

    @abstractmethod
    async def set_action_required_by(
        self, case_id: int, party: ActionParty | None
    ) -> None:
        ...

    @abstractmethod
    async def delete(self, case_id: int) -> bool:
        """Delete a case together with its interactions and files."""
        ...
