"""Abstract repository interface (port) for case file records."""

from abc import ABC, abstractmethod

from backoffice.domain.entities import CaseFile


class CaseFileRepository(ABC):
    """Port for case file metadata. The file bytes live in external storage."""

    @abstractmethod
    async def get_by_id(self, file_id: int) -> CaseFile | None:
        ...

    @abstractmethod
    async def list_for_case(
        self, case_id: int, interaction_id: int | None = None
    ) -> list[CaseFile]:
        """Newest first; narrowed to one interaction when ``interaction_id`` is given."""
        ...

    @abstractmethod
    async def create(self, case_file: CaseFile) -> CaseFile:
        ...

    @abstractmethod
    async def delete(self, file_id: int) -> bool:
        ...
