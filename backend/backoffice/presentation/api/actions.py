"""Action envelope shared by every v1 endpoint.

Actions never raise across the HTTP boundary. Each one answers 200 with
``{success, data, error, field_errors}``; the runner turns exceptions into
that envelope and rolls the request's transaction back on failure.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from fastapi import Depends
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.domain.exceptions import AppError, FieldValidationError, InfrastructureError
from backoffice.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)

T = TypeVar("T")

SYSTEM_ERROR_MESSAGE = "A system error occurred. Please try again."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


class FieldErrorResponse(BaseModel):
    field: str
    message: str


class ActionResponse(BaseModel, Generic[T]):
    success: bool
    data: T | None = None
    error: str | None = None
    field_errors: list[FieldErrorResponse] | None = None

    @classmethod
    def ok(cls, data: Any = None) -> "ActionResponse":
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls, error: str, field_errors: list[FieldErrorResponse] | None = None
    ) -> "ActionResponse":
        return cls(success=False, error=error, field_errors=field_errors)


class ActionRunner:
    """Runs one action inside the request's transaction.

    Commits when the action succeeds; on any failure rolls back, logs, and
    returns a failed envelope instead of raising.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def run(
        self,
        name: str,
        action: Callable[[], Awaitable[T]],
        present: Callable[[T], Any] | None = None,
    ) -> ActionResponse:
        try:
            result = await action()
            await self._session.commit()
        except AppError as e:
            await self._session.rollback()
            logger.info("%s rejected (%s): %s", name, e.code, e.message)
            field_errors = None
            if isinstance(e, FieldValidationError):
                field_errors = [
                    FieldErrorResponse(field=f.field, message=f.message) for f in e.fields
                ]
            return ActionResponse.fail(e.message, field_errors)
        except (InfrastructureError, SQLAlchemyError):
            await self._session.rollback()
            logger.exception("%s failed with a system error", name)
            return ActionResponse.fail(SYSTEM_ERROR_MESSAGE)
        except Exception:
            await self._session.rollback()
            logger.exception("%s failed unexpectedly", name)
            return ActionResponse.fail(UNEXPECTED_ERROR_MESSAGE)

        return ActionResponse.ok(present(result) if present else result)


async def get_action_runner(
    session: AsyncSession = Depends(get_db_session),
) -> ActionRunner:
    return ActionRunner(session)
