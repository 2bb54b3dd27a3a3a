"""Domain entities for client cases, their interaction log and attached files."""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum


class CaseStatus(str, Enum):
    OPEN = "OPEN"
    AWAITING = "AWAITING"
    CLOSED = "CLOSED"


class ActionParty(str, Enum):
    """Who a case party is, and who owes the next action."""

    ARGAN = "ARGAN"
    CLIENT = "CLIENT"
    CONTRACTOR = "CONTRACTOR"
    EMPLOYEE = "EMPLOYEE"
    THIRD_PARTY = "THIRD_PARTY"


_CASE_REFERENCE = re.compile(r"^CASE-(\d+)$")


def next_case_reference(last_reference: str | None) -> str:
    """Return the reference following ``last_reference`` (``CASE-0001`` first).

    >>> next_case_reference(None)
    'CASE-0001'
    >>> next_case_reference("CASE-0041")
    'CASE-0042'
    """
    number = 1
    if last_reference:
        match = _CASE_REFERENCE.match(last_reference)
        if match:
            number = int(match.group(1)) + 1
    return f"CASE-{number:04d}"


@dataclass
class Case:
    """A piece of HR casework raised for a client."""

    client_id: int
    title: str
    escalated_by: str
    case_id: str = ""
    id: int | None = None
    status: CaseStatus = CaseStatus.OPEN
    assigned_to: str | None = None
    action_required_by: ActionParty | None = None
    description: str | None = None
    interaction_count: int = 0
    file_count: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class Interaction:
    """One entry in a case's timeline between two parties.

    Invariant: at most one interaction per case has ``is_active_action``
    set; that is the follow-up the case is currently waiting on.
    """

    case_id: int
    party1_name: str
    party1_type: ActionParty
    party2_name: str
    party2_type: ActionParty
    content: str
    id: int | None = None
    action_required: str | None = None
    action_required_by: ActionParty | None = None
    action_required_by_date: date | None = None
    is_active_action: bool = False
    file_count: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class CaseFile:
    """Metadata for a file held in external object storage."""

    case_id: int
    file_name: str
    file_url: str
    file_size: int
    uploaded_by: str
    id: int | None = None
    interaction_id: int | None = None
    file_title: str | None = None
    file_description: str | None = None
    file_tags: list[str] = field(default_factory=list)
    uploaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class ActionDeadline:
    """Read model: an active action with a due date, for the dashboard."""

    interaction_id: int
    case_numeric_id: int
    case_id: str
    case_title: str
    client_id: int
    client_name: str
    client_tier: str
    action_required: str | None
    action_required_by: ActionParty | None
    action_required_by_date: date

    def is_overdue(self, today: date) -> bool:
        return self.action_required_by_date < today
