"""Pydantic DTOs for the client onboarding checklist."""

from enum import Enum

from pydantic import BaseModel


class OnboardingTarget(str, Enum):
    CLIENT = "client"
    CONTRACT = "contract"


class ClientChecklist(BaseModel):
    welcome_email_sent: bool
    direct_debit_setup: bool | None
    direct_debit_confirmed: bool | None
    recurring_invoice_setup: bool | None
    contract_added_to_xero: bool
    dpa_signed_gdpr: bool
    first_invoice_sent: bool
    first_payment_made: bool

    model_config = {"from_attributes": True}


class ContractChecklist(BaseModel):
    contract_id: int
    signed_contract_received: bool
    contract_uploaded: bool
    contract_sent_to_client: bool
    payment_terms_agreed: bool


class OnboardingStatus(BaseModel):
    client_id: int
    client: ClientChecklist
    contract: ContractChecklist | None
    completed: int
    total: int


class OnboardingFieldUpdate(BaseModel):
    target: OnboardingTarget = OnboardingTarget.CLIENT
    field: str
    value: bool
