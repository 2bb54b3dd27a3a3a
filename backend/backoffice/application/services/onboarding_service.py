"""Application service for the client onboarding checklist.

The checklist spans two records: payment and admin steps live on the
client, contract paperwork lives on the client's ACTIVE contract. Each
call flips exactly one allow-listed boolean.
"""

import logging

from backoffice.application.interfaces import ClientRepository, ContractRepository
from backoffice.application.schemas.onboarding import (
    ClientChecklist,
    ContractChecklist,
    OnboardingStatus,
    OnboardingTarget,
)
from backoffice.application.services.validation import check_id
from backoffice.domain.entities import Client, Contract
from backoffice.domain.exceptions import ClientNotFoundError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

CLIENT_FIELDS = tuple(ClientChecklist.model_fields)
CONTRACT_FIELDS = tuple(name for name in ContractChecklist.model_fields if name != "contract_id")

# Tri-state client flags: None means "not applicable for the payment method"
_OPTIONAL_CLIENT_FIELDS = frozenset(
    {"direct_debit_setup", "direct_debit_confirmed", "recurring_invoice_setup"}
)


class OnboardingService:
    def __init__(
        self,
        client_repository: ClientRepository,
        contract_repository: ContractRepository,
    ):
        self._clients = client_repository
        self._contracts = contract_repository

    async def get_onboarding(self, client_id: int) -> OnboardingStatus:
        client = await self._get_client(client_id)
        contract = await self._contracts.get_active_for_client(client_id)
        return self._status(client, contract)

    async def update_onboarding_field(
        self,
        client_id: int,
        target: OnboardingTarget,
        field: str,
        value: bool,
    ) -> OnboardingStatus:
        client = await self._get_client(client_id)
        contract = await self._contracts.get_active_for_client(client_id)

        if target is OnboardingTarget.CLIENT:
            if field not in CLIENT_FIELDS:
                raise ValidationError("Invalid client field")
            if field in _OPTIONAL_CLIENT_FIELDS and getattr(client, field) is None:
                raise ValidationError(
                    f"{field} does not apply to this client's payment method"
                )
            setattr(client, field, value)
            client.touch()
            client = await self._clients.update(client)
        else:
            if field not in CONTRACT_FIELDS:
                raise ValidationError("Invalid contract field")
            if contract is None:
                raise NotFoundError("Active contract")
            setattr(contract, field, value)
            contract.touch()
            contract = await self._contracts.update(contract)

        logger.info(
            "Onboarding %s.%s=%s for client %s", target.value, field, value, client_id
        )
        return self._status(client, contract)

    async def _get_client(self, client_id: int) -> Client:
        check_id(client_id, "client")
        client = await self._clients.get_by_id(client_id)
        if client is None:
            raise ClientNotFoundError(client_id)
        return client

    @staticmethod
    def _status(client: Client, contract: Contract | None) -> OnboardingStatus:
        client_list = ClientChecklist.model_validate(client)
        values = [v for v in client_list.model_dump().values() if v is not None]

        contract_list = None
        if contract is not None:
            contract_list = ContractChecklist(
                contract_id=contract.id,
                **{name: getattr(contract, name) for name in CONTRACT_FIELDS},
            )
            values.extend(getattr(contract, name) for name in CONTRACT_FIELDS)

        return OnboardingStatus(
            client_id=client.id,
            client=client_list,
            contract=contract_list,
            completed=sum(1 for v in values if v),
            total=len(values),
        )
