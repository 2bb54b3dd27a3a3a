"""Pydantic DTOs for cases, interactions and case files."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from backoffice.domain.entities import ActionParty, CaseStatus


# ── Cases ────────────────────────────────────────────────────────────


class CaseCreate(BaseModel):
    client_id: int
    title: str = Field("", examples=["Disciplinary hearing: warehouse shift lead"])
    escalated_by: str = ""
    assigned_to: str | None = None
    status: CaseStatus = CaseStatus.OPEN
    description: str | None = None


class CaseUpdate(BaseModel):
    """Allow-listed case fields. ``action_required_by`` follows the active interaction."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    status: CaseStatus | None = None
    escalated_by: str | None = None
    assigned_to: str | None = None
    description: str | None = None


class CaseResponse(BaseModel):
    id: int
    case_id: str
    client_id: int
    title: str
    status: CaseStatus
    escalated_by: str
    assigned_to: str | None
    action_required_by: ActionParty | None
    description: str | None
    interaction_count: int
    file_count: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ── Interactions ─────────────────────────────────────────────────────


class InteractionCreate(BaseModel):
    case_id: int
    party1_name: str = ""
    party1_type: ActionParty | None = None
    party2_name: str = ""
    party2_type: ActionParty | None = None
    content: str = ""
    action_required: str | None = None
    action_required_by: ActionParty | None = None
    action_required_by_date: date | None = None


class InteractionUpdate(BaseModel):
    """Allow-listed interaction fields. The active flag has its own actions."""

    model_config = ConfigDict(extra="forbid")

    party1_name: str | None = None
    party1_type: ActionParty | None = None
    party2_name: str | None = None
    party2_type: ActionParty | None = None
    content: str | None = None
    action_required: str | None = None
    action_required_by: ActionParty | None = None
    action_required_by_date: date | None = None


class InteractionResponse(BaseModel):
    id: int
    case_id: int
    party1_name: str
    party1_type: ActionParty
    party2_name: str
    party2_type: ActionParty
    content: str
    action_required: str | None
    action_required_by: ActionParty | None
    action_required_by_date: date | None
    is_active_action: bool
    file_count: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ── Files ────────────────────────────────────────────────────────────


class CaseFileCreate(BaseModel):
    case_id: int
    interaction_id: int | None = None
    file_name: str = ""
    file_url: str = ""
    file_size: int = 0
    file_title: str | None = None
    file_description: str | None = None
    file_tags: list[str] = Field(default_factory=list)


class CaseFileResponse(BaseModel):
    id: int
    case_id: int
    interaction_id: int | None
    file_name: str
    file_url: str
    file_size: int
    uploaded_by: str
    file_title: str | None
    file_description: str | None
    file_tags: list[str]
    uploaded_at: datetime

    model_config = {"from_attributes": True}
