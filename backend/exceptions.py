"""
Ledger exceptions and the handler that turns them into HTTP responses.

Read-only balance and statistics operations never raise these to the caller
(see utils/boundary.py); membership-scoped operations do.
"""

from typing import Any, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse


class LedgerError(Exception):
    """Base class for errors that must reach the caller."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnauthenticatedError(LedgerError):
    """Raised when an operation requires a resolved user and none is present."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message)


class AuthorizationError(LedgerError):
    """Raised when a user asks for a group ledger they are not a member of."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "You are not a member of this group"):
        super().__init__(message)


class NotFoundError(LedgerError):
    """Raised when an explicitly requested resource does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, resource_id: Optional[Any] = None):
        self.resource = resource
        self.resource_id = resource_id
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with ID {resource_id} not found"
        super().__init__(message)


async def ledger_exception_handler(request: Request, exc: LedgerError) -> JSONResponse:
    headers = None
    if isinstance(exc, UnauthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers
    )
