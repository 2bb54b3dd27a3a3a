"""Endpoints for the contacts, addresses and audits a client owns."""

from fastapi import APIRouter, Depends

from backoffice.application.schemas.client import (
    AddressCreate,
    AddressResponse,
    AddressUpdate,
    AuditCreate,
    AuditResponse,
    AuditUpdate,
    ContactCreate,
    ContactResponse,
    ContactUpdate,
)
from backoffice.application.services import AddressService, AuditService, ContactService
from backoffice.domain.entities import AdminSession
from backoffice.infrastructure.dependencies import (
    get_address_service,
    get_audit_service,
    get_contact_service,
    require_writer,
)
from backoffice.presentation.api.actions import ActionResponse, ActionRunner, get_action_runner

router = APIRouter(prefix="/clients", tags=["Client details"])


def _contact(contact) -> ContactResponse:
    return ContactResponse.model_validate(contact, from_attributes=True)


def _address(address) -> AddressResponse:
    return AddressResponse.model_validate(address, from_attributes=True)


def _audit(audit) -> AuditResponse:
    return AuditResponse.model_validate(audit, from_attributes=True)


# ── Contacts ─────────────────────────────────────────────────────────


@router.post("/{client_id}/contacts", response_model=ActionResponse[ContactResponse])
async def create_contact(
    client_id: int,
    data: ContactCreate,
    service: ContactService = Depends(get_contact_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run(
        "create_contact", lambda: service.create_contact(client_id, data), _contact
    )


@router.patch("/contacts/{contact_id}", response_model=ActionResponse[ContactResponse])
async def update_contact(
    contact_id: int,
    data: ContactUpdate,
    service: ContactService = Depends(get_contact_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run(
        "update_contact", lambda: service.update_contact(contact_id, data), _contact
    )


@router.delete("/contacts/{contact_id}", response_model=ActionResponse[None])
async def delete_contact(
    contact_id: int,
    service: ContactService = Depends(get_contact_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run("delete_contact", lambda: service.delete_contact(contact_id))


# ── Addresses ────────────────────────────────────────────────────────


@router.post("/{client_id}/addresses", response_model=ActionResponse[AddressResponse])
async def create_address(
    client_id: int,
    data: AddressCreate,
    service: AddressService = Depends(get_address_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run(
        "create_address", lambda: service.create_address(client_id, data), _address
    )


@router.patch("/addresses/{address_id}", response_model=ActionResponse[AddressResponse])
async def update_address(
    address_id: int,
    data: AddressUpdate,
    service: AddressService = Depends(get_address_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run(
        "update_address", lambda: service.update_address(address_id, data), _address
    )


@router.delete("/addresses/{address_id}", response_model=ActionResponse[None])
async def delete_address(
    address_id: int,
    service: AddressService = Depends(get_address_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run("delete_address", lambda: service.delete_address(address_id))


# ── Audits ───────────────────────────────────────────────────────────


@router.post("/{client_id}/audits", response_model=ActionResponse[AuditResponse])
async def create_audit(
    client_id: int,
    data: AuditCreate,
    service: AuditService = Depends(get_audit_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run("create_audit", lambda: service.create_audit(client_id, data), _audit)


@router.patch("/audits/{audit_id}", response_model=ActionResponse[AuditResponse])
async def update_audit(
    audit_id: int,
    data: AuditUpdate,
    service: AuditService = Depends(get_audit_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run("update_audit", lambda: service.update_audit(audit_id, data), _audit)


@router.delete("/audits/{audit_id}", response_model=ActionResponse[None])
async def delete_audit(
    audit_id: int,
    service: AuditService = Depends(get_audit_service),
    runner: ActionRunner = Depends(get_action_runner),
    _: AdminSession = Depends(require_writer),
):
    return await runner.run("delete_audit", lambda: service.delete_audit(audit_id))
