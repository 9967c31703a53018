"""
Auth dependencies for FastAPI routes.

`session_context` runs once per request on every router that carries it. It
looks at the matched route's operation name: allowlisted operations get an
anonymous context, everything else needs a valid session cookie.
"""

from __future__ import annotations

from fastapi import Depends, Request

from core import settings
from core.errors import AuthFailure, AuthFailureKind

from .security import Identity, resolve_identity
from .session import AuthRequirement, decide_auth_requirement


def operation_name(request: Request) -> str | None:
    route = request.scope.get("route")
    name = getattr(route, "name", None)
    if name:
        return str(name)
    endpoint = request.scope.get("endpoint")
    return getattr(endpoint, "__name__", None)


def read_session_cookie(request: Request) -> str:
    return request.cookies.get(settings.session_cookie_name(), "")


async def session_context(request: Request) -> Identity | None:
    if decide_auth_requirement(operation_name(request)) is AuthRequirement.BYPASS:
        return None
    return resolve_identity(read_session_cookie(request))


async def get_current_identity(
    identity: Identity | None = Depends(session_context),
) -> Identity:
    if identity is None:
        # A bypassed operation asked for an identity it cannot have.
        raise AuthFailure(AuthFailureKind.INVALID_OR_EXPIRED)
    return identity
