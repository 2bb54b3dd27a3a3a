"""Abstract repository interface (port) for case interactions."""

from abc import ABC, abstractmethod

from backoffice.domain.entities import ActionDeadline, Interaction


class InteractionRepository(ABC):
    """Port for interaction persistence and the per-case active-action flag."""

    @abstractmethod
    async def get_by_id(self, interaction_id: int) -> Interaction | None:
        ...

    @abstractmethod
    async def list_for_case(self, case_id: int) -> list[Interaction]:
        """Newest first, each with its ``file_count``."""
        ...

    @abstractmethod
    async def create(self, interaction: Interaction) -> Interaction:
        ...

    @abstractmethod
    async def update(self, interaction: Interaction) -> Interaction:
        ...

    @abstractmethod
    async def delete(self, interaction_id: int) -> bool:
        """Delete an interaction together with its files."""
        ...

    @abstractmethod
    async def activate(self, case_id: int, interaction_id: int) -> None:
        """Make ``interaction_id`` the only active action of ``case_id``.

        Must be a single atomic statement so that two concurrent calls can
        never leave two interactions flagged.
        """
        ...

    @abstractmethod
    async def deactivate(self, interaction_id: int) -> None:
        ...

    @abstractmethod
    async def count_active(self, case_id: int) -> int:
        ...

    @abstractmethod
    async def list_active_with_deadlines(self) -> list[ActionDeadline]:
        """Active actions that carry a due date, soonest first."""
        ...
