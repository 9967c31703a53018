"""
Per-request session decisions and cookie delivery.

Request states: unauthenticated -> bypassed | rejected | authenticated.
There is no renewal or logout; token expiry is the only way a session ends.
"""

from __future__ import annotations

import enum
import logging

from fastapi import Response

from core import settings

logger = logging.getLogger(__name__)


class AuthRequirement(str, enum.Enum):
    BYPASS = "bypass"
    REQUIRE = "require"


def decide_auth_requirement(operation_name: str | None) -> AuthRequirement:
    if operation_name and operation_name in settings.auth_bypass_operations():
        return AuthRequirement.BYPASS
    return AuthRequirement.REQUIRE


def set_session_cookie(response: Response, token: str) -> None:
    production = settings.is_production()
    response.set_cookie(
        key=settings.session_cookie_name(),
        value=token,
        max_age=settings.session_cookie_max_age_s(),
        httponly=True,
        secure=production,
        # Cross-site delivery needs SameSite=None together with Secure.
        samesite="none" if production else None,
    )


def warn_on_lifetime_mismatch() -> bool:
    """
    Log when the cookie outlives the token it carries.

    Such a cookie is still sent after the token expired and the request is
    rejected as unauthenticated. Returns True when a mismatch was found.
    """
    token_ttl = settings.session_token_ttl_s()
    cookie_max_age = settings.session_cookie_max_age_s()
    if cookie_max_age <= token_ttl:
        return False
    logger.warning(
        "session_lifetime_mismatch cookie_max_age_s=%s token_ttl_s=%s",
        cookie_max_age,
        token_ttl,
    )
    return True
