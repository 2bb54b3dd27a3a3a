"""Unit tests for the pure domain helpers."""

import pytest

from backoffice.domain.entities import (
    AdminRole,
    Client,
    ClientStatus,
    ServiceTier,
    build_contract_number,
    next_case_reference,
    role_at_least,
)


@pytest.mark.parametrize(
    ("client_id", "sequence", "expected"),
    [
        (5, 3, "CON-1-005-003"),
        (999, 1, "CON-1-999-001"),
        (1000, 1, "CON-2-001-001"),
        (1, 12, "CON-1-001-012"),
    ],
)
def test_build_contract_number(client_id, sequence, expected):
    assert build_contract_number(client_id, sequence) == expected


@pytest.mark.parametrize(
    ("last", "expected"),
    [
        (None, "CASE-0001"),
        ("CASE-0041", "CASE-0042"),
        ("CASE-9999", "CASE-10000"),
        ("legacy-ref", "CASE-0001"),
    ],
)
def test_next_case_reference(last, expected):
    assert next_case_reference(last) == expected


def test_role_hierarchy():
    assert role_at_least(AdminRole.SUPER_ADMIN, AdminRole.ADMIN)
    assert role_at_least(AdminRole.ADMIN, AdminRole.ADMIN)
    assert not role_at_least(AdminRole.READ_ONLY, AdminRole.ADMIN)


@pytest.mark.parametrize(
    ("current", "target", "expected"),
    [
        (ClientStatus.ACTIVE, None, ClientStatus.INACTIVE),
        (ClientStatus.ACTIVE, ClientStatus.PENDING, ClientStatus.PENDING),
        (ClientStatus.PENDING, None, ClientStatus.ACTIVE),
        (ClientStatus.INACTIVE, ClientStatus.PENDING, ClientStatus.ACTIVE),
    ],
)
def test_client_status_toggle(current, target, expected):
    client = Client(
        company_name="Acme",
        contact_name="Jo",
        contact_email="jo@acme.test",
        service_tier=ServiceTier.AD_HOC,
        status=current,
    )
    assert client.toggled_status(target) is expected
