"""
Auth business logic.

Services return domain values and raise domain errors; routers decide how
they travel over HTTP (cookie, status code).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.errors import AuthFailure, AuthFailureKind, DuplicateRecord, StoreFailure
from core.store import Store

from . import schemas, security

logger = logging.getLogger(__name__)

DEFAULT_USERNAME = "noname"


@dataclass(frozen=True)
class SessionGrant:
    account: schemas.AccountResponse
    token: str


def _to_account_response(account_row: dict) -> schemas.AccountResponse:
    return schemas.AccountResponse(
        id=int(account_row["id"]),
        email=str(account_row["email"]),
        username=str(account_row.get("username") or DEFAULT_USERNAME),
        created_at=account_row.get("created_at"),
    )


def _grant(account_row: dict) -> SessionGrant:
    token = security.issue_token(int(account_row["id"]))
    return SessionGrant(account=_to_account_response(account_row), token=token)


async def login(store: Store, email: str, password: str) -> SessionGrant:
    account_row = await store.accounts.find_account_by_email(email)
    if account_row is None:
        logger.info("login_rejected reason=no_such_user")
        raise AuthFailure(AuthFailureKind.NO_SUCH_USER)

    if not security.verify_password(password, str(account_row.get("password_hash") or "")):
        logger.info("login_rejected reason=bad_credential account_id=%s", account_row["id"])
        raise AuthFailure(AuthFailureKind.BAD_CREDENTIAL)

    return _grant(account_row)


async def sign_up(
    store: Store,
    email: str,
    password: str,
    username: str | None = None,
) -> SessionGrant | None:
    """
    Create an account and issue its session.

    Returns None on any store failure; the boundary only reports success as
    a boolean, so the cause goes to the log.
    """
    try:
        password_hash = security.hash_password(password)
    except ValueError as exc:
        logger.info("signup_failed reason=invalid_password error=%s", exc)
        return None

    try:
        account_row = await store.accounts.insert_account(
            email=email,
            username=(username or "").strip() or DEFAULT_USERNAME,
            password_hash=password_hash,
        )
    except DuplicateRecord:
        logger.info("signup_failed reason=duplicate_email")
        return None
    except StoreFailure as exc:
        logger.warning("signup_failed reason=store_failure error=%s", exc.message)
        return None

    return _grant(account_row)
