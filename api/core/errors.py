"""
Domain errors and their HTTP mapping.

Services raise these; only `register_exception_handlers` knows about status
codes. Every error carries a stable `kind` so clients can branch on the cause.
"""

from __future__ import annotations

import enum

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class AuthFailureKind(str, enum.Enum):
    INVALID_OR_EXPIRED = "invalid_or_expired"
    NO_SUCH_USER = "no_such_user"
    BAD_CREDENTIAL = "bad_credential"


_AUTH_MESSAGES = {
    AuthFailureKind.INVALID_OR_EXPIRED: "Authentication token is invalid, please log in.",
    AuthFailureKind.NO_SUCH_USER: "No user with that email.",
    AuthFailureKind.BAD_CREDENTIAL: "Incorrect password.",
}


class AppError(Exception):
    kind = "error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class AuthFailure(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, kind: AuthFailureKind, message: str | None = None) -> None:
        super().__init__(message or _AUTH_MESSAGES[kind])
        self.kind = kind.value
        self.failure = kind


class InvalidDateInput(AppError):
    kind = "invalid_date_input"
    status_code = status.HTTP_400_BAD_REQUEST


class SurveyNotFound(AppError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class StoreFailure(AppError):
    """
    The data store could not complete an operation.

    The message is for logs; clients only see a generic detail.
    """

    kind = "store_failure"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class DuplicateRecord(StoreFailure):
    kind = "duplicate_record"


def _error_response(exc: AppError, detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": detail, "kind": str(exc.kind)},
    )


async def _handle_store_failure(_: Request, exc: StoreFailure) -> JSONResponse:
    return _error_response(exc, "Data store is unavailable.")


async def _handle_app_error(_: Request, exc: AppError) -> JSONResponse:
    return _error_response(exc, exc.message)


def register_exception_handlers(app: FastAPI) -> None:
    # Starlette resolves handlers along the MRO, so the subclass wins.
    app.add_exception_handler(StoreFailure, _handle_store_failure)
    app.add_exception_handler(AppError, _handle_app_error)
