"""
Auth security helpers: password hashing and session tokens.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

import bcrypt
import jwt

from core import settings
from core.errors import AuthFailure, AuthFailureKind

TOKEN_TYPE = "session"
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class Identity:
    subject_id: int


def now_epoch_s() -> int:
    return int(time.time())


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise ValueError("Password is empty.")
    if len(password) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password is longer than {MAX_PASSWORD_BYTES} bytes.")
    return bcrypt.hashpw(password, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def issue_token(subject_id: int, *, issued_at: int | None = None) -> str:
    issued_at = now_epoch_s() if issued_at is None else issued_at
    payload = {
        "sub": str(subject_id),
        "type": TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + settings.session_token_ttl_s(),
    }
    return jwt.encode(payload, settings.jwt_secret(), algorithm=settings.jwt_algorithm())


def resolve_identity(raw_token: str | None) -> Identity:
    """
    Verify signature and expiry of a session token.

    Trust is purely cryptographic; the account is not looked up.
    """
    raw = (raw_token or "").strip()
    if not raw:
        raise AuthFailure(AuthFailureKind.INVALID_OR_EXPIRED)

    try:
        payload = jwt.decode(
            raw,
            settings.jwt_secret(),
            algorithms=[settings.jwt_algorithm()],
            options={"require": ["sub", "exp"]},
        )
    except jwt.InvalidTokenError as exc:
        raise AuthFailure(AuthFailureKind.INVALID_OR_EXPIRED) from exc

    if str(payload.get("type") or "") != TOKEN_TYPE:
        raise AuthFailure(AuthFailureKind.INVALID_OR_EXPIRED)

    subject = str(payload.get("sub") or "").strip()
    if not subject.isdigit():
        raise AuthFailure(AuthFailureKind.INVALID_OR_EXPIRED)
    return Identity(subject_id=int(subject))
