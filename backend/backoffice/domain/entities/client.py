"""Domain entities for clients and the records they own directly."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum

from .contract import Contract


class ClientType(str, Enum):
    COMPANY = "COMPANY"
    INDIVIDUAL = "INDIVIDUAL"


class ServiceTier(str, Enum):
    """Subscription level driving default pricing."""

    TIER_1 = "TIER_1"
    DOC_ONLY = "DOC_ONLY"
    AD_HOC = "AD_HOC"


class ClientStatus(str, Enum):
    ACTIVE = "ACTIVE"
    PENDING = "PENDING"
    INACTIVE = "INACTIVE"


class PaymentMethod(str, Enum):
    DIRECT_DEBIT = "DIRECT_DEBIT"
    INVOICE = "INVOICE"


class ContactType(str, Enum):
    SERVICE = "SERVICE"
    INVOICE = "INVOICE"


class AddressType(str, Enum):
    SERVICE = "SERVICE"
    INVOICE = "INVOICE"


class AuditInterval(str, Enum):
    QUARTERLY = "QUARTERLY"
    ANNUALLY = "ANNUALLY"
    TWO_YEARS = "TWO_YEARS"
    THREE_YEARS = "THREE_YEARS"
    FIVE_YEARS = "FIVE_YEARS"


@dataclass
class ClientContact:
    client_id: int
    type: ContactType
    name: str
    email: str
    phone: str | None = None
    role: str | None = None
    description: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class ClientAddress:
    client_id: int
    type: AddressType
    address_line_1: str
    city: str
    postcode: str
    address_line_2: str | None = None
    country: str = "United Kingdom"
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class ClientAudit:
    """An external auditor reviewing the client on a fixed interval."""

    client_id: int
    audited_by: str
    interval: AuditInterval
    next_audit_date: date
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class Client:
    """A company or individual the consultancy provides HR services to.

    Clients are never physically deleted: "deleting" one flips its status
    to INACTIVE (or PENDING) and reactivating flips it back to ACTIVE.

    The direct debit / recurring invoice onboarding flags are tri-state:
    ``None`` means "not applicable for this payment method", ``False``
    means pending and ``True`` means done.
    """

    company_name: str
    contact_name: str
    contact_email: str
    service_tier: ServiceTier
    id: int | None = None
    client_type: ClientType = ClientType.COMPANY
    business_id: str | None = None
    sector: str | None = None
    monthly_retainer: Decimal | None = None
    contact_phone: str | None = None
    address_line_1: str | None = None
    address_line_2: str | None = None
    city: str | None = None
    postcode: str | None = None
    country: str | None = "United Kingdom"
    contract_start_date: date | None = None
    contract_renewal_date: date | None = None
    status: ClientStatus = ClientStatus.ACTIVE
    payment_method: PaymentMethod | None = None
    welcome_email_sent: bool = False
    direct_debit_setup: bool | None = None
    direct_debit_confirmed: bool | None = None
    recurring_invoice_setup: bool | None = None
    contract_added_to_xero: bool = False
    dpa_signed_gdpr: bool = False
    first_invoice_sent: bool = False
    first_payment_made: bool = False
    external_audit: bool = False
    last_price_increase: date | None = None
    created_by: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    contacts: list[ClientContact] = field(default_factory=list)
    addresses: list[ClientAddress] = field(default_factory=list)
    audits: list[ClientAudit] = field(default_factory=list)
    contracts: list[Contract] = field(default_factory=list)

    def apply_payment_method(self, method: PaymentMethod | None) -> None:
        """Reset the payment onboarding flags for the chosen method."""
        self.payment_method = method
        if method is PaymentMethod.DIRECT_DEBIT:
            self.direct_debit_setup = False
            self.direct_debit_confirmed = False
            self.recurring_invoice_setup = None
        elif method is PaymentMethod.INVOICE:
            self.direct_debit_setup = None
            self.direct_debit_confirmed = None
            self.recurring_invoice_setup = False
        else:
            self.direct_debit_setup = None
            self.direct_debit_confirmed = None
            self.recurring_invoice_setup = None

    def toggled_status(self, target: ClientStatus | None = None) -> ClientStatus:
        """Status a soft delete / reactivate toggle moves this client to."""
        if self.status is ClientStatus.ACTIVE:
            return target or ClientStatus.INACTIVE
        return ClientStatus.ACTIVE

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
