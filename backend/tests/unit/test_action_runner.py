"""Unit tests for the action envelope and error conversion."""

import pytest
from sqlalchemy.exc import OperationalError

from backoffice.domain.exceptions import (
    ClientNotFoundError,
    FieldError,
    FieldValidationError,
    InvariantViolationError,
)
from backoffice.presentation.api.actions import (
    SYSTEM_ERROR_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    ActionRunner,
)


class FakeSession:
    def __init__(self):
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


def _raising(exc: Exception):
    async def action():
        raise exc

    return action


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.mark.asyncio
async def test_success_commits_and_presents(session):
    async def action():
        return 41

    response = await ActionRunner(session).run("answer", action, lambda value: value + 1)

    assert response.success is True
    assert response.data == 42
    assert response.error is None
    assert (session.commits, session.rollbacks) == (1, 0)


@pytest.mark.asyncio
async def test_app_error_message_is_returned(session):
    response = await ActionRunner(session).run("get_client", _raising(ClientNotFoundError(7)))

    assert response.success is False
    assert response.error == "Client with id '7' not found"
    assert (session.commits, session.rollbacks) == (0, 1)


@pytest.mark.asyncio
async def test_field_errors_are_listed(session):
    exc = FieldValidationError([FieldError("contact_email", "Invalid email format")])

    response = await ActionRunner(session).run("create_client", _raising(exc))

    assert response.error == "Validation failed"
    assert [(f.field, f.message) for f in response.field_errors] == [
        ("contact_email", "Invalid email format")
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc",
    [
        InvariantViolationError("Invalid state: Client 5 has 2 active contracts"),
        OperationalError("SELECT 1", {}, Exception("connection refused")),
    ],
)
async def test_system_errors_are_masked(session, exc):
    response = await ActionRunner(session).run("set_active_contract", _raising(exc))

    assert response.error == SYSTEM_ERROR_MESSAGE
    assert session.rollbacks == 1


@pytest.mark.asyncio
async def test_unexpected_errors_are_masked(session):
    response = await ActionRunner(session).run("boom", _raising(KeyError("secret")))

    assert response.error == UNEXPECTED_ERROR_MESSAGE
    assert "secret" not in response.model_dump_json()
