"""Application service (use case) for the contract lifecycle.

Contracts move ``DRAFT → ACTIVE → ARCHIVED``; an ARCHIVED version can be
made ACTIVE again, but nothing returns to DRAFT. A client never has more
than one ACTIVE contract. Every path that activates a contract
archives the current one first and then re-counts; all of it runs in the
caller's transaction so a failed count rolls the whole change back.
"""

import logging
from datetime import date
from typing import Any

from pydantic import BaseModel

from backoffice.application.interfaces import ClientRepository, ContractRepository
from backoffice.application.schemas.contract import (
    ContractCreate,
    ContractTerms,
    ContractUpdate,
    DocumentUrlsUpdate,
)
from backoffice.application.services.validation import check_id
from backoffice.domain.entities import (
    AVAILABLE_SERVICES_IN_SCOPE,
    AVAILABLE_SERVICES_OUT_OF_SCOPE,
    Contract,
    ContractStatus,
    build_contract_number,
)
from backoffice.domain.exceptions import (
    ClientNotFoundError,
    ContractNotFoundError,
    FieldError,
    FieldValidationError,
    InvariantViolationError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_LIST_FIELDS = ("inclusive_services_in_scope", "inclusive_services_out_of_scope")
_FLAG_FIELDS = tuple(
    name for name in ContractTerms.model_fields if name.endswith("_not_needed")
)
_SERVICE_CATALOGUES = {
    "inclusive_services_in_scope": AVAILABLE_SERVICES_IN_SCOPE,
    "inclusive_services_out_of_scope": AVAILABLE_SERVICES_OUT_OF_SCOPE,
}


def contract_terms(data: BaseModel, *, only_set: bool = False) -> dict[str, Any]:
    """Pricing/scope fields of ``data`` ready to assign onto a Contract."""
    values = data.model_dump(
        include=set(ContractTerms.model_fields), exclude_unset=only_set
    )
    terms: dict[str, Any] = {}
    for name, value in values.items():
        if value is None and name in _LIST_FIELDS:
            value = []
        elif value is None and name in _FLAG_FIELDS:
            value = False
        elif value is None and not only_set:
            continue
        terms[name] = value
    return terms


def check_services(errors: list[FieldError], name: str, services: list[str] | None) -> None:
    """Scoped services must be picked from the matching catalogue."""
    unknown = [s for s in services or [] if s not in _SERVICE_CATALOGUES[name]]
    if unknown:
        errors.append(FieldError(name, f"Unknown services: {', '.join(unknown)}"))


def _require_known_services(name: str, services: list[str]) -> None:
    errors: list[FieldError] = []
    check_services(errors, name, services)
    if errors:
        raise FieldValidationError(errors)


def check_renewal_after_start(start: date, renewal: date) -> None:
    if renewal <= start:
        raise ValidationError("Contract renewal date must be after start date")


class ContractService:
    """Orchestrates contract creation, edits and activation. Depends on repository ports (DI)."""

    def __init__(
        self,
        contract_repository: ContractRepository,
        client_repository: ClientRepository,
    ):
        self._contracts = contract_repository
        self._clients = client_repository

    # ── Queries ──────────────────────────────────────────────────────

    async def list_client_contracts(
        self, client_id: int, status: ContractStatus | None = None
    ) -> list[Contract]:
        return await self._contracts.list_for_client(client_id, status)

    async def get_contract(self, contract_id: int) -> Contract:
        check_id(contract_id, "contract")
        contract = await self._contracts.get_by_id(contract_id)
        if contract is None:
            raise ContractNotFoundError(contract_id)
        return contract

    async def has_active_contract(self, client_id: int) -> bool:
        return await self._contracts.count_active(client_id) > 0

    async def get_active_contract(self, client_id: int) -> Contract | None:
        return await self._contracts.get_active_for_client(client_id)

    # ── Creation ─────────────────────────────────────────────────────

    async def create_contract(self, data: ContractCreate) -> Contract:
        """Create a new contract version for a client.

        With ``replace_existing`` the client's ACTIVE contract is archived
        first. Without it, a second ACTIVE contract is refused.
        """
        errors: list[FieldError] = []
        if not data.client_id:
            errors.append(FieldError("client_id", "Client ID is required"))
        if data.contract_start_date is None:
            errors.append(FieldError("contract_start_date", "Contract start date is required"))
        if data.contract_renewal_date is None:
            errors.append(
                FieldError("contract_renewal_date", "Contract renewal date is required")
            )
        if errors:
            raise FieldValidationError(errors, "Missing required fields")

        for name in _LIST_FIELDS:
            check_services(errors, name, getattr(data, name))
        if errors:
            raise FieldValidationError(errors)

        check_renewal_after_start(data.contract_start_date, data.contract_renewal_date)

        client_id = data.client_id
        if await self._clients.get_by_id(client_id) is None:
            raise ClientNotFoundError(client_id)

        if data.replace_existing:
            archived = await self._contracts.archive_active(client_id)
            if archived:
                logger.info("Archived %d active contract(s) of client %s", archived, client_id)
        elif data.status is ContractStatus.ACTIVE and await self.has_active_contract(client_id):
            logger.warning("Refused second ACTIVE contract for client %s", client_id)
            raise ValidationError(
                "Client already has an ACTIVE contract. "
                "Replace the existing contract or create a DRAFT."
            )

        version = await self._contracts.max_version(client_id) + 1
        contract = Contract(
            client_id=client_id,
            contract_start_date=data.contract_start_date,
            contract_renewal_date=data.contract_renewal_date,
            contract_number=build_contract_number(client_id, version),
            version=version,
            status=data.status,
            **contract_terms(data),
        )
        created = await self._contracts.create(contract)
        if created.is_active:
            await self._ensure_single_active(client_id)

        logger.info(
            "Created contract %s (v%d, %s) for client %s",
            created.contract_number,
            created.version,
            created.status.value,
            client_id,
        )
        return created

    # ── Edits ────────────────────────────────────────────────────────

    async def update_contract(self, contract_id: int, data: ContractUpdate) -> Contract:
        contract = await self._get_editable(contract_id)
        changes = data.model_dump(exclude_unset=True)

        errors: list[FieldError] = []
        for name, label in (
            ("contract_start_date", "Contract start date"),
            ("contract_renewal_date", "Contract renewal date"),
        ):
            if name in changes and changes[name] is None:
                errors.append(FieldError(name, f"{label} cannot be empty"))
        for name in _LIST_FIELDS:
            if name in changes:
                check_services(errors, name, changes[name])
        if errors:
            raise FieldValidationError(errors)

        check_renewal_after_start(
            changes.get("contract_start_date", contract.contract_start_date),
            changes.get("contract_renewal_date", contract.contract_renewal_date),
        )

        for name in ("contract_start_date", "contract_renewal_date"):
            if name in changes:
                setattr(contract, name, changes[name])
        for name, value in contract_terms(data, only_set=True).items():
            setattr(contract, name, value)

        contract.touch()
        return await self._contracts.update(contract)

    async def update_services_in_scope(self, contract_id: int, services: list[str]) -> Contract:
        _require_known_services("inclusive_services_in_scope", services)
        contract = await self._get_editable(contract_id)
        contract.inclusive_services_in_scope = list(services)
        contract.touch()
        return await self._contracts.update(contract)

    async def update_services_out_of_scope(
        self, contract_id: int, services: list[str]
    ) -> Contract:
        _require_known_services("inclusive_services_out_of_scope", services)
        contract = await self._get_editable(contract_id)
        contract.inclusive_services_out_of_scope = list(services)
        contract.touch()
        return await self._contracts.update(contract)

    async def update_document_urls(
        self, contract_id: int, data: DocumentUrlsUpdate
    ) -> Contract:
        """Attach document links. Allowed in every status, including ARCHIVED."""
        contract = await self.get_contract(contract_id)
        for name, value in data.model_dump(exclude_unset=True).items():
            setattr(contract, name, value)
        contract.touch()
        return await self._contracts.update(contract)

    # ── Status transitions ───────────────────────────────────────────

    async def set_active_contract(self, client_id: int, contract_id: int) -> Contract:
        """Make an existing, non-draft contract the client's ACTIVE one."""
        check_id(client_id, "client")
        contract = await self.get_contract(contract_id)

        if contract.client_id != client_id:
            raise ValidationError("Contract does not belong to this client")
        if contract.is_draft:
            logger.warning("Refused to activate DRAFT contract %s", contract_id)
            raise ValidationError(
                "Cannot set DRAFT contracts as ACTIVE. Please complete the contract first."
            )
        if contract.is_active:
            return contract

        return await self._activate(contract)

    async def finalize_contract(self, contract_id: int) -> Contract:
        """Promote a completed DRAFT to ACTIVE, archiving the previous ACTIVE contract."""
        contract = await self.get_contract(contract_id)
        if not contract.is_draft:
            raise ValidationError("Only DRAFT contracts can be finalized")

        return await self._activate(contract)

    async def delete_contract(self, contract_id: int) -> None:
        contract = await self.get_contract(contract_id)
        if not contract.is_draft:
            logger.warning(
                "Refused to delete %s contract %s", contract.status.value, contract_id
            )
            raise ValidationError(
                "Cannot delete contracts that are not in DRAFT status. "
                "Only DRAFT contracts can be deleted."
            )
        await self._contracts.delete(contract_id)
        logger.info("Deleted draft contract %s", contract.contract_number)

    # ── Internals ────────────────────────────────────────────────────

    async def _get_editable(self, contract_id: int) -> Contract:
        contract = await self.get_contract(contract_id)
        if contract.is_archived:
            raise ValidationError("ARCHIVED contracts are read-only")
        return contract

    async def _activate(self, contract: Contract) -> Contract:
        archived = await self._contracts.archive_active(contract.client_id)
        contract.status = ContractStatus.ACTIVE
        contract.touch()
        activated = await self._contracts.update(contract)
        await self._ensure_single_active(contract.client_id)
        logger.info(
            "Activated contract %s for client %s (archived %d)",
            activated.contract_number,
            activated.client_id,
            archived,
        )
        return activated

    async def _ensure_single_active(self, client_id: int) -> None:
        active = await self._contracts.count_active(client_id)
        if active != 1:
            logger.error("Client %s has %d active contracts", client_id, active)
            raise InvariantViolationError(
                f"Invalid state: Client {client_id} has {active} active contracts"
            )
