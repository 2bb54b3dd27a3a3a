"""SQLAlchemy repositories for cases, interactions and case files.

Interaction and file counts are computed with correlated sub-queries at
read time rather than stored.
"""

from sqlalchemy import case, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.application.interfaces import (
    CaseFileRepository,
    CaseRepository,
    InteractionRepository,
)
from backoffice.domain.entities import (
    ActionDeadline,
    ActionParty,
    Case,
    CaseFile,
    CaseStatus,
    Interaction,
)
from backoffice.infrastructure.database.base import utcnow
from backoffice.infrastructure.database.models import (
    CaseFileModel,
    CaseModel,
    ClientModel,
    InteractionModel,
)


def _party(raw: str | None) -> ActionParty | None:
    return ActionParty(raw) if raw else None


_case_interaction_count = (
    select(func.count(InteractionModel.id))
    .where(InteractionModel.case_id == CaseModel.id)
    .correlate(CaseModel)
    .scalar_subquery()
    .label("interaction_count")
)
_case_file_count = (
    select(func.count(CaseFileModel.id))
    .where(CaseFileModel.case_id == CaseModel.id)
    .correlate(CaseModel)
    .scalar_subquery()
    .label("file_count")
)
_interaction_file_count = (
    select(func.count(CaseFileModel.id))
    .where(CaseFileModel.interaction_id == InteractionModel.id)
    .correlate(InteractionModel)
    .scalar_subquery()
    .label("file_count")
)


class SQLAlchemyCaseRepository(CaseRepository):
    """Implements the CaseRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(
        self, model: CaseModel, interaction_count: int = 0, file_count: int = 0
    ) -> Case:
        return Case(
            id=model.id,
            case_id=model.case_id,
            client_id=model.client_id,
            title=model.title,
            status=CaseStatus(model.status),
            escalated_by=model.escalated_by,
            assigned_to=model.assigned_to,
            action_required_by=_party(model.action_required_by),
            description=model.description,
            interaction_count=interaction_count,
            file_count=file_count,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _with_counts(self):
        return select(CaseModel, _case_interaction_count, _case_file_count)

    async def get_by_id(self, case_id: int) -> Case | None:
        stmt = self._with_counts().where(CaseModel.id == case_id)
        row = (await self._session.execute(stmt)).one_or_none()
        return self._to_entity(*row) if row else None

    async def get_by_reference(self, client_id: int, reference: str) -> Case | None:
        stmt = self._with_counts().where(
            CaseModel.client_id == client_id, CaseModel.case_id == reference
        )
        row = (await self._session.execute(stmt)).one_or_none()
        return self._to_entity(*row) if row else None

    async def list_for_client(self, client_id: int) -> list[Case]:
        stmt = (
            self._with_counts()
            .where(CaseModel.client_id == client_id)
            .order_by(CaseModel.created_at.desc(), CaseModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(*row) for row in result.all()]

    async def last_reference_for_client(self, client_id: int) -> str | None:
        stmt = (
            select(CaseModel.case_id)
            .where(CaseModel.client_id == client_id)
            .order_by(CaseModel.id.desc())
            .limit(1)
        )
        return (await self._session.execute(stmt)).scalars().first()

    async def create(self, case: Case) -> Case:
        model = CaseModel(
            case_id=case.case_id,
            client_id=case.client_id,
            title=case.title,
            status=case.status.value,
            escalated_by=case.escalated_by,
            assigned_to=case.assigned_to,
            action_required_by=case.action_required_by.value if case.action_required_by else None,
            description=case.description,
            created_at=case.created_at,
            updated_at=case.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, case: Case) -> Case:
        model = await self._session.get(CaseModel, case.id)
        if model is None:
            raise ValueError(f"Case {case.id} not found in database")
        model.title = case.title
        model.status = case.status.value
        model.escalated_by = case.escalated_by
        model.assigned_to = case.assigned_to
        # action_required_by is owned by set_action_required_by
        model.description = case.description
        model.updated_at = utcnow()
        await self._session.flush()
        return self._to_entity(model, case.interaction_count, case.file_count)

    async def set_action_required_by(self, case_id: int, party: ActionParty | None) -> None:
        stmt = (
            update(CaseModel)
            .where(CaseModel.id == case_id)
            .values(action_required_by=party.value if party else None, updated_at=utcnow())
        )
        await self._session.execute(stmt)

    async def delete(self, case_id: int) -> bool:
        model = await self._session.get(CaseModel, case_id)
        if model is None:
            return False
        # Children first: SQLite only honours ON DELETE CASCADE with foreign_keys=ON
        await self._session.execute(delete(CaseFileModel).where(CaseFileModel.case_id == case_id))
        await self._session.execute(
            delete(InteractionModel).where(InteractionModel.case_id == case_id)
        )
        await self._session.delete(model)
        await self._session.flush()
        return True


class SQLAlchemyInteractionRepository(InteractionRepository):
    """Implements the InteractionRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: InteractionModel, file_count: int = 0) -> Interaction:
        return Interaction(
            id=model.id,
            case_id=model.case_id,
            party1_name=model.party1_name,
            party1_type=ActionParty(model.party1_type),
            party2_name=model.party2_name,
            party2_type=ActionParty(model.party2_type),
            content=model.content,
            action_required=model.action_required,
            action_required_by=_party(model.action_required_by),
            action_required_by_date=model.action_required_by_date,
            is_active_action=model.is_active_action,
            file_count=file_count,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def get_by_id(self, interaction_id: int) -> Interaction | None:
        stmt = select(InteractionModel, _interaction_file_count).where(
            InteractionModel.id == interaction_id
        )
        row = (await self._session.execute(stmt)).one_or_none()
        return self._to_entity(*row) if row else None

    async def list_for_case(self, case_id: int) -> list[Interaction]:
        stmt = (
            select(InteractionModel, _interaction_file_count)
            .where(InteractionModel.case_id == case_id)
            .order_by(InteractionModel.created_at.desc(), InteractionModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(*row) for row in result.all()]

    async def create(self, interaction: Interaction) -> Interaction:
        model = InteractionModel(
            case_id=interaction.case_id,
            party1_name=interaction.party1_name,
            party1_type=interaction.party1_type.value,
            party2_name=interaction.party2_name,
            party2_type=interaction.party2_type.value,
            content=interaction.content,
            action_required=interaction.action_required,
            action_required_by=(
                interaction.action_required_by.value if interaction.action_required_by else None
            ),
            action_required_by_date=interaction.action_required_by_date,
            is_active_action=False,
            created_at=interaction.created_at,
            updated_at=interaction.updated_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, interaction: Interaction) -> Interaction:
        # activate() may have expired the flag on this row
        model = await self._session.get(
            InteractionModel, interaction.id, populate_existing=True
        )
        if model is None:
            raise ValueError(f"Interaction {interaction.id} not found in database")
        model.party1_name = interaction.party1_name
        model.party1_type = interaction.party1_type.value
        model.party2_name = interaction.party2_name
        model.party2_type = interaction.party2_type.value
        model.content = interaction.content
        model.action_required = interaction.action_required
        model.action_required_by = (
            interaction.action_required_by.value if interaction.action_required_by else None
        )
        model.action_required_by_date = interaction.action_required_by_date
        model.updated_at = utcnow()
        await self._session.flush()
        return self._to_entity(model, interaction.file_count)

    async def delete(self, interaction_id: int) -> bool:
        model = await self._session.get(InteractionModel, interaction_id)
        if model is None:
            return False
        await self._session.execute(
            delete(CaseFileModel).where(CaseFileModel.interaction_id == interaction_id)
        )
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def activate(self, case_id: int, interaction_id: int) -> None:
        # Serialise swaps on the same case; SQLite ignores FOR UPDATE and
        # serialises writers on its own.
        await self._session.execute(
            select(CaseModel.id).where(CaseModel.id == case_id).with_for_update()
        )
        stmt = (
            update(InteractionModel)
            .where(
                InteractionModel.case_id == case_id,
                or_(
                    InteractionModel.is_active_action.is_(True),
                    InteractionModel.id == interaction_id,
                ),
            )
            .values(
                is_active_action=case((InteractionModel.id == interaction_id, True), else_=False),
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session="fetch")
        )
        await self._session.execute(stmt)

    async def deactivate(self, interaction_id: int) -> None:
        stmt = (
            update(InteractionModel)
            .where(InteractionModel.id == interaction_id)
            .values(is_active_action=False, updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        await self._session.execute(stmt)

    async def count_active(self, case_id: int) -> int:
        stmt = select(func.count(InteractionModel.id)).where(
            InteractionModel.case_id == case_id,
            InteractionModel.is_active_action.is_(True),
        )
        return (await self._session.execute(stmt)).scalar_one()

    async def list_active_with_deadlines(self) -> list[ActionDeadline]:
        stmt = (
            select(InteractionModel, CaseModel, ClientModel)
            .join(CaseModel, InteractionModel.case_id == CaseModel.id)
            .join(ClientModel, CaseModel.client_id == ClientModel.id)
            .where(
                InteractionModel.is_active_action.is_(True),
                InteractionModel.action_required_by_date.is_not(None),
            )
            .order_by(InteractionModel.action_required_by_date, InteractionModel.id)
        )
        result = await self._session.execute(stmt)
        return [
            ActionDeadline(
                interaction_id=interaction.id,
                case_numeric_id=case_model.id,
                case_id=case_model.case_id,
                case_title=case_model.title,
                client_id=client.id,
                client_name=client.company_name,
                client_tier=client.service_tier,
                action_required=interaction.action_required,
                action_required_by=_party(interaction.action_required_by),
                action_required_by_date=interaction.action_required_by_date,
            )
            for interaction, case_model, client in result.all()
        ]


class SQLAlchemyCaseFileRepository(CaseFileRepository):
    """Implements the CaseFileRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: CaseFileModel) -> CaseFile:
        return CaseFile(
            id=model.id,
            case_id=model.case_id,
            interaction_id=model.interaction_id,
            file_name=model.file_name,
            file_url=model.file_url,
            file_size=model.file_size,
            uploaded_by=model.uploaded_by,
            file_title=model.file_title,
            file_description=model.file_description,
            file_tags=list(model.file_tags or []),
            uploaded_at=model.uploaded_at,
        )

    async def get_by_id(self, file_id: int) -> CaseFile | None:
        model = await self._session.get(CaseFileModel, file_id)
        return self._to_entity(model) if model else None

    async def list_for_case(
        self, case_id: int, interaction_id: int | None = None
    ) -> list[CaseFile]:
        stmt = select(CaseFileModel).where(CaseFileModel.case_id == case_id)
        if interaction_id is not None:
            stmt = stmt.where(CaseFileModel.interaction_id == interaction_id)
        stmt = stmt.order_by(CaseFileModel.uploaded_at.desc(), CaseFileModel.id.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, case_file: CaseFile) -> CaseFile:
        model = CaseFileModel(
            case_id=case_file.case_id,
            interaction_id=case_file.interaction_id,
            file_name=case_file.file_name,
            file_url=case_file.file_url,
            file_size=case_file.file_size,
            uploaded_by=case_file.uploaded_by,
            file_title=case_file.file_title,
            file_description=case_file.file_description,
            file_tags=list(case_file.file_tags),
            uploaded_at=case_file.uploaded_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, file_id: int) -> bool:
        model = await self._session.get(CaseFileModel, file_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
