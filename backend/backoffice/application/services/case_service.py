"""Application service (use case) for cases, their interactions and files.

Within a case at most one interaction is the *active action*, the
follow-up the case is waiting on. The case's ``action_required_by``
mirrors the party that owes it.
"""

import logging

from backoffice.application.interfaces import (
    CaseFileRepository,
    CaseRepository,
    ClientRepository,
    InteractionRepository,
)
from backoffice.application.schemas.case import (
    CaseCreate,
    CaseFileCreate,
    CaseUpdate,
    InteractionCreate,
    InteractionUpdate,
)
from backoffice.application.services.validation import check_id
from backoffice.domain.entities import Case, CaseFile, Interaction, next_case_reference
from backoffice.domain.exceptions import (
    CaseNotFoundError,
    ClientNotFoundError,
    FieldError,
    FieldValidationError,
    InteractionNotFoundError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class CaseService:
    """Orchestrates case, interaction and file logic. Depends on repository ports (DI)."""

    def __init__(
        self,
        case_repository: CaseRepository,
        interaction_repository: InteractionRepository,
        file_repository: CaseFileRepository,
        client_repository: ClientRepository,
    ):
        self._cases = case_repository
        self._interactions = interaction_repository
        self._files = file_repository
        self._clients = client_repository

    # ── Cases ────────────────────────────────────────────────────────

    async def list_client_cases(self, client_id: int) -> list[Case]:
        check_id(client_id, "client")
        return await self._cases.list_for_client(client_id)

    async def get_case(self, case_id: int) -> Case:
        check_id(case_id, "case")
        case = await self._cases.get_by_id(case_id)
        if case is None:
            raise CaseNotFoundError(case_id)
        return case

    async def get_case_by_reference(self, client_id: int, reference: str) -> Case:
        check_id(client_id, "client")
        case = await self._cases.get_by_reference(client_id, reference)
        if case is None:
            raise CaseNotFoundError(reference)
        return case

    async def create_case(self, data: CaseCreate) -> Case:
        errors: list[FieldError] = []
        if not data.title.strip():
            errors.append(FieldError("title", "Title is required"))
        if not data.escalated_by.strip():
            errors.append(FieldError("escalated_by", "Escalated by is required"))
        if errors:
            raise FieldValidationError(errors)

        check_id(data.client_id, "client")
        if await self._clients.get_by_id(data.client_id) is None:
            raise ClientNotFoundError(data.client_id)

        last = await self._cases.last_reference_for_client(data.client_id)
        case = await self._cases.create(
            Case(
                client_id=data.client_id,
                case_id=next_case_reference(last),
                title=data.title.strip(),
                escalated_by=data.escalated_by,
                assigned_to=data.assigned_to or None,
                status=data.status,
                description=data.description or None,
            )
        )
        logger.info("Opened case %s for client %s", case.case_id, case.client_id)
        return case

    async def update_case(self, case_id: int, data: CaseUpdate) -> Case:
        case = await self.get_case(case_id)
        changes = data.model_dump(exclude_unset=True)

        errors = [
            FieldError(name, f"{label} cannot be empty")
            for name, label in (
                ("title", "Title"),
                ("escalated_by", "Escalated by"),
                ("status", "Status"),
            )
            if name in changes and not changes[name]
        ]
        if errors:
            raise FieldValidationError(errors)

        previous_status = case.status
        for name, value in changes.items():
            setattr(case, name, value)
        updated = await self._cases.update(case)
        if updated.status is not previous_status:
            logger.info(
                "Case %s status %s -> %s",
                updated.case_id,
                previous_status.value,
                updated.status.value,
            )
        return updated

    async def delete_case(self, case_id: int) -> None:
        case = await self.get_case(case_id)
        await self._cases.delete(case_id)
        logger.info(
            "Deleted case %s with %d interaction(s) and %d file(s)",
            case.case_id,
            case.interaction_count,
            case.file_count,
        )

    # ── Interactions ─────────────────────────────────────────────────

    async def list_interactions(self, case_id: int) -> list[Interaction]:
        await self.get_case(case_id)
        return await self._interactions.list_for_case(case_id)

    async def get_interaction(self, interaction_id: int) -> Interaction:
        check_id(interaction_id, "interaction")
        interaction = await self._interactions.get_by_id(interaction_id)
        if interaction is None:
            raise InteractionNotFoundError(interaction_id)
        return interaction

    async def create_interaction(self, data: InteractionCreate) -> Interaction:
        errors: list[FieldError] = []
        if not data.party1_name.strip():
            errors.append(FieldError("party1_name", "First party name is required"))
        if data.party1_type is None:
            errors.append(FieldError("party1_type", "First party type is required"))
        if not data.party2_name.strip():
            errors.append(FieldError("party2_name", "Second party name is required"))
        if data.party2_type is None:
            errors.append(FieldError("party2_type", "Second party type is required"))
        if not data.content.strip():
            errors.append(FieldError("content", "Content is required"))
        if errors:
            raise FieldValidationError(errors)

        await self.get_case(data.case_id)
        interaction = await self._interactions.create(
            Interaction(
                case_id=data.case_id,
                party1_name=data.party1_name,
                party1_type=data.party1_type,
                party2_name=data.party2_name,
                party2_type=data.party2_type,
                content=data.content,
                action_required=data.action_required or None,
                action_required_by_date=data.action_required_by_date,
            )
        )
        logger.info("Logged interaction %s on case %s", interaction.id, data.case_id)
        return interaction

    async def update_interaction(
        self, interaction_id: int, data: InteractionUpdate
    ) -> Interaction:
        interaction = await self.get_interaction(interaction_id)
        changes = data.model_dump(exclude_unset=True)

        errors = [
            FieldError(name, f"{label} cannot be empty")
            for name, label in (
                ("party1_name", "First party name"),
                ("party1_type", "First party type"),
                ("party2_name", "Second party name"),
                ("party2_type", "Second party type"),
                ("content", "Content"),
            )
            if name in changes and not changes[name]
        ]
        if errors:
            raise FieldValidationError(errors)

        for name, value in changes.items():
            setattr(interaction, name, value)
        updated = await self._interactions.update(interaction)

        if updated.is_active_action and "action_required_by" in changes:
            await self._cases.set_action_required_by(
                updated.case_id, updated.action_required_by
            )
        return updated

    async def delete_interaction(self, interaction_id: int) -> None:
        interaction = await self.get_interaction(interaction_id)
        await self._interactions.delete(interaction_id)
        if interaction.is_active_action:
            await self._cases.set_action_required_by(interaction.case_id, None)
        logger.info("Deleted interaction %s of case %s", interaction_id, interaction.case_id)

    # ── Active action ────────────────────────────────────────────────

    async def set_active_action(self, interaction_id: int) -> Interaction:
        """Flag ``interaction_id`` as its case's active action, unflagging any other."""
        interaction = await self.get_interaction(interaction_id)
        await self._interactions.activate(interaction.case_id, interaction.id)
        await self._cases.set_action_required_by(
            interaction.case_id, interaction.action_required_by
        )
        interaction.is_active_action = True
        logger.info(
            "Interaction %s is now the active action of case %s",
            interaction.id,
            interaction.case_id,
        )
        return interaction

    async def unset_active_action(self, interaction_id: int) -> Interaction:
        interaction = await self.get_interaction(interaction_id)
        was_active = interaction.is_active_action
        await self._interactions.deactivate(interaction.id)
        if was_active:
            await self._cases.set_action_required_by(interaction.case_id, None)
            logger.info(
                "Cleared active action %s of case %s", interaction.id, interaction.case_id
            )
        interaction.is_active_action = False
        return interaction

    # ── Files ────────────────────────────────────────────────────────

    async def list_files(
        self, case_id: int, interaction_id: int | None = None
    ) -> list[CaseFile]:
        await self.get_case(case_id)
        return await self._files.list_for_case(case_id, interaction_id)

    async def create_file(self, data: CaseFileCreate, uploaded_by: str) -> CaseFile:
        """Record a file already uploaded to external storage."""
        errors: list[FieldError] = []
        if not data.file_name.strip():
            errors.append(FieldError("file_name", "File name is required"))
        if not data.file_url.strip():
            errors.append(FieldError("file_url", "File URL is required"))
        if data.file_size < 0:
            errors.append(FieldError("file_size", "File size cannot be negative"))
        if errors:
            raise FieldValidationError(errors)

        await self.get_case(data.case_id)
        if data.interaction_id is not None:
            interaction = await self.get_interaction(data.interaction_id)
            if interaction.case_id != data.case_id:
                raise ValidationError("Interaction does not belong to this case")

        case_file = await self._files.create(
            CaseFile(
                case_id=data.case_id,
                interaction_id=data.interaction_id,
                file_name=data.file_name,
                file_url=data.file_url,
                file_size=data.file_size,
                uploaded_by=uploaded_by,
                file_title=data.file_title or None,
                file_description=data.file_description or None,
                file_tags=list(data.file_tags),
            )
        )
        logger.info("Attached file %s to case %s", case_file.file_name, data.case_id)
        return case_file

    async def delete_file(self, file_id: int) -> None:
        check_id(file_id, "file")
        case_file = await self._files.get_by_id(file_id)
        if case_file is None:
            raise NotFoundError("File", file_id)
        await self._files.delete(file_id)
        logger.info("Removed file %s from case %s", file_id, case_file.case_id)
