"""Pydantic DTOs for the contract lifecycle."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from backoffice.domain.entities import ContractStatus, HoursPeriod, RateUnit


class ContractTerms(BaseModel):
    """Pricing terms and scoped services shared by create and update."""

    hr_admin_inclusive_hours: Decimal | None = None
    hr_admin_inclusive_hours_period: HoursPeriod | None = None
    employment_law_inclusive_hours: Decimal | None = None
    employment_law_inclusive_hours_period: HoursPeriod | None = None
    hr_admin_rate: Decimal | None = None
    hr_admin_rate_unit: RateUnit | None = None
    hr_admin_rate_not_needed: bool | None = None
    employment_law_rate: Decimal | None = None
    employment_law_rate_unit: RateUnit | None = None
    employment_law_rate_not_needed: bool | None = None
    mileage_rate: Decimal | None = None
    mileage_rate_not_needed: bool | None = None
    overnight_rate: Decimal | None = None
    overnight_rate_not_needed: bool | None = None
    inclusive_services_in_scope: list[str] | None = None
    inclusive_services_out_of_scope: list[str] | None = None


class ContractCreate(ContractTerms):
    client_id: int | None = Field(None, examples=[5])
    contract_start_date: date | None = Field(None, examples=["2025-01-01"])
    contract_renewal_date: date | None = Field(None, examples=["2026-01-01"])
    status: ContractStatus = ContractStatus.ACTIVE
    replace_existing: bool = False


class ContractUpdate(ContractTerms):
    """Allow-listed contract fields. ``status`` is deliberately absent."""

    model_config = ConfigDict(extra="forbid")

    contract_start_date: date | None = None
    contract_renewal_date: date | None = None


class ServicesUpdate(BaseModel):
    services: list[str]


class DocumentUrlsUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    doc_url: str | None = None
    signed_contract_url: str | None = None


class SetActiveContract(BaseModel):
    client_id: int
    contract_id: int


class ContractResponse(BaseModel):
    id: int
    client_id: int
    contract_number: str
    version: int
    status: ContractStatus
    contract_start_date: date
    contract_renewal_date: date
    hr_admin_inclusive_hours: Decimal | None
    hr_admin_inclusive_hours_period: HoursPeriod | None
    employment_law_inclusive_hours: Decimal | None
    employment_law_inclusive_hours_period: HoursPeriod | None
    hr_admin_rate: Decimal | None
    hr_admin_rate_unit: RateUnit | None
    hr_admin_rate_not_needed: bool
    employment_law_rate: Decimal | None
    employment_law_rate_unit: RateUnit | None
    employment_law_rate_not_needed: bool
    mileage_rate: Decimal | None
    mileage_rate_not_needed: bool
    overnight_rate: Decimal | None
    overnight_rate_not_needed: bool
    inclusive_services_in_scope: list[str]
    inclusive_services_out_of_scope: list[str]
    signed_contract_received: bool
    contract_uploaded: bool
    contract_sent_to_client: bool
    payment_terms_agreed: bool
    doc_url: str | None
    signed_contract_url: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
