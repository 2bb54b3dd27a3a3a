"""Domain entity for versioned client contracts."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum


class ContractStatus(str, Enum):
    """Lifecycle states of a contract: DRAFT → ACTIVE → ARCHIVED (one-way)."""

    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


class RateUnit(str, Enum):
    HOURLY = "HOURLY"
    DAILY = "DAILY"


class HoursPeriod(str, Enum):
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"


# Listing order: ACTIVE first, then DRAFT, then ARCHIVED
STATUS_SORT_ORDER = {
    ContractStatus.ACTIVE: 0,
    ContractStatus.DRAFT: 1,
    ContractStatus.ARCHIVED: 2,
}

AVAILABLE_SERVICES_IN_SCOPE = (
    "HR Admin Support",
    "Employment Law Support",
    "Employee Support",
    "Auto Policy Review and Updates",
    "Service Analytics",
)

AVAILABLE_SERVICES_OUT_OF_SCOPE = (
    "Case Management",
    "On Site Support",
    "External Audit Reviews",
)

# Client numbers are grouped in batches of 999 so the position stays 3 digits
_CLIENTS_PER_BATCH = 999


def build_contract_number(client_id: int, sequence: int) -> str:
    """Human-readable contract number: ``CON-{batch}-{position:03}-{sequence:03}``.

    >>> build_contract_number(5, 3)
    'CON-1-005-003'
    >>> build_contract_number(1000, 1)
    'CON-2-001-001'
    """
    batch = (client_id - 1) // _CLIENTS_PER_BATCH + 1
    position = (client_id - 1) % _CLIENTS_PER_BATCH + 1
    return f"CON-{batch}-{position:03d}-{sequence:03d}"


@dataclass
class Contract:
    """A versioned service agreement between the consultancy and a client.

    Invariant: at most one contract per client is ACTIVE at any time.
    Only DRAFT contracts may be deleted; ARCHIVED contracts are read-only.
    """

    client_id: int
    contract_start_date: date
    contract_renewal_date: date
    contract_number: str = ""
    version: int = 1
    status: ContractStatus = ContractStatus.ACTIVE
    id: int | None = None

    # Pricing terms
    hr_admin_inclusive_hours: Decimal | None = None
    hr_admin_inclusive_hours_period: HoursPeriod | None = None
    employment_law_inclusive_hours: Decimal | None = None
    employment_law_inclusive_hours_period: HoursPeriod | None = None
    hr_admin_rate: Decimal | None = None
    hr_admin_rate_unit: RateUnit | None = None
    hr_admin_rate_not_needed: bool = False
    employment_law_rate: Decimal | None = None
    employment_law_rate_unit: RateUnit | None = None
    employment_law_rate_not_needed: bool = False
    mileage_rate: Decimal | None = None
    mileage_rate_not_needed: bool = False
    overnight_rate: Decimal | None = None
    overnight_rate_not_needed: bool = False

    # Scoped services
    inclusive_services_in_scope: list[str] = field(default_factory=list)
    inclusive_services_out_of_scope: list[str] = field(default_factory=list)

    # Onboarding checklist
    signed_contract_received: bool = False
    contract_uploaded: bool = False
    contract_sent_to_client: bool = False
    payment_terms_agreed: bool = False

    doc_url: str | None = None
    signed_contract_url: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_draft(self) -> bool:
        return self.status is ContractStatus.DRAFT

    @property
    def is_active(self) -> bool:
        return self.status is ContractStatus.ACTIVE

    @property
    def is_archived(self) -> bool:
        return self.status is ContractStatus.ARCHIVED

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
