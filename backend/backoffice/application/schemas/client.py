"""Pydantic DTOs (Data Transfer Objects) for clients and their contacts, addresses and audits.

Required-field and format checks live in the services so that every
problem can be reported against its field at once; the schemas only pin
down types. ``*Update`` schemas are the per-entity field allow-lists:
unknown fields are rejected and only fields the caller actually sent are
applied.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from backoffice.application.schemas.common import PaginationMeta
from backoffice.application.schemas.contract import ContractResponse
from backoffice.domain.entities import (
    AddressType,
    AuditInterval,
    ClientStatus,
    ClientType,
    ContactType,
    HoursPeriod,
    PaymentMethod,
    RateUnit,
    ServiceTier,
)


# ── Contacts ─────────────────────────────────────────────────────────


class ContactCreate(BaseModel):
    type: ContactType = ContactType.SERVICE
    name: str = ""
    email: str = ""
    phone: str | None = None
    role: str | None = None
    description: str | None = None


class ContactUpdate(BaseModel):
    """Allow-listed contact fields, all optional."""

    model_config = ConfigDict(extra="forbid")

    type: ContactType | None = None
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    role: str | None = None
    description: str | None = None


class ContactResponse(BaseModel):
    id: int
    client_id: int
    type: ContactType
    name: str
    email: str
    phone: str | None
    role: str | None
    description: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ── Addresses ────────────────────────────────────────────────────────


class AddressCreate(BaseModel):
    type: AddressType = AddressType.SERVICE
    address_line_1: str = ""
    address_line_2: str | None = None
    city: str = ""
    postcode: str = ""
    country: str | None = None


class AddressUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: AddressType | None = None
    address_line_1: str | None = None
    address_line_2: str | None = None
    city: str | None = None
    postcode: str | None = None
    country: str | None = None


class AddressResponse(BaseModel):
    id: int
    client_id: int
    type: AddressType
    address_line_1: str
    address_line_2: str | None
    city: str
    postcode: str
    country: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ── Audits ───────────────────────────────────────────────────────────


class AuditCreate(BaseModel):
    audited_by: str = ""
    interval: AuditInterval | None = None
    next_audit_date: date | None = None


class AuditUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    audited_by: str | None = None
    interval: AuditInterval | None = None
    next_audit_date: date | None = None


class AuditResponse(BaseModel):
    id: int
    client_id: int
    audited_by: str
    interval: AuditInterval
    next_audit_date: date
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ── Clients ──────────────────────────────────────────────────────────


class ClientCreate(BaseModel):
    """Everything captured by the new-client form, including the first contract."""

    client_type: ClientType = ClientType.COMPANY
    company_name: str = Field("", examples=["Acme Manufacturing Ltd"])
    business_id: str | None = None
    sector: str | None = Field(None, examples=["Manufacturing"])
    service_tier: ServiceTier | None = None
    monthly_retainer: Decimal | None = None
    status: ClientStatus = ClientStatus.ACTIVE
    payment_method: PaymentMethod | None = None

    # Service (primary) contact
    contact_name: str = ""
    contact_email: str = ""
    contact_phone: str | None = None
    contact_role: str | None = None

    # Optional invoice contact
    invoice_contact_name: str | None = None
    invoice_contact_email: str | None = None
    invoice_contact_phone: str | None = None
    invoice_contact_role: str | None = None

    address_line_1: str | None = None
    address_line_2: str | None = None
    city: str | None = None
    postcode: str | None = None
    country: str | None = None

    external_audit: bool = False
    audit_records: list[AuditCreate] = Field(default_factory=list)

    # First contract
    contract_start_date: date | None = None
    contract_renewal_date: date | None = None
    hr_admin_inclusive_hours: Decimal | None = None
    hr_admin_inclusive_hours_period: HoursPeriod | None = None
    employment_law_inclusive_hours: Decimal | None = None
    employment_law_inclusive_hours_period: HoursPeriod | None = None
    hr_admin_rate: Decimal | None = None
    hr_admin_rate_unit: RateUnit | None = None
    employment_law_rate: Decimal | None = None
    employment_law_rate_unit: RateUnit | None = None
    mileage_rate: Decimal | None = None
    overnight_rate: Decimal | None = None
    inclusive_services_in_scope: list[str] = Field(default_factory=list)
    inclusive_services_out_of_scope: list[str] = Field(default_factory=list)


class ClientUpdate(BaseModel):
    """Allow-listed client fields. Status changes go through delete/reactivate."""

    model_config = ConfigDict(extra="forbid")

    client_type: ClientType | None = None
    company_name: str | None = None
    business_id: str | None = None
    sector: str | None = None
    service_tier: ServiceTier | None = None
    monthly_retainer: Decimal | None = None
    contact_name: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    address_line_1: str | None = None
    address_line_2: str | None = None
    city: str | None = None
    postcode: str | None = None
    country: str | None = None
    contract_start_date: date | None = None
    contract_renewal_date: date | None = None
    payment_method: PaymentMethod | None = None
    external_audit: bool | None = None
    last_price_increase: date | None = None


class ClientStatusChange(BaseModel):
    """Target status when deactivating an ACTIVE client."""

    target_status: ClientStatus | None = None


class ClientResponse(BaseModel):
    id: int
    client_type: ClientType
    company_name: str
    business_id: str | None
    sector: str | None
    service_tier: ServiceTier
    monthly_retainer: Decimal | None
    contact_name: str
    contact_email: str
    contact_phone: str | None
    address_line_1: str | None
    address_line_2: str | None
    city: str | None
    postcode: str | None
    country: str | None
    contract_start_date: date | None
    contract_renewal_date: date | None
    status: ClientStatus
    payment_method: PaymentMethod | None
    welcome_email_sent: bool
    direct_debit_setup: bool | None
    direct_debit_confirmed: bool | None
    recurring_invoice_setup: bool | None
    contract_added_to_xero: bool
    dpa_signed_gdpr: bool
    first_invoice_sent: bool
    first_payment_made: bool
    external_audit: bool
    last_price_increase: date | None
    created_by: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ClientDetailResponse(ClientResponse):
    """A client together with everything it owns except cases."""

    contacts: list[ContactResponse] = []
    addresses: list[AddressResponse] = []
    audits: list[AuditResponse] = []
    contracts: list[ContractResponse] = []


class ClientListResponse(BaseModel):
    clients: list[ClientResponse]
    pagination: PaginationMeta
