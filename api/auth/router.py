"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from core.store import Store, get_store

from . import schemas, service, session

router = APIRouter(prefix="/auth")


@router.post("/login", name="SignIn", response_model=schemas.AccountResponse)
async def login(
    request: schemas.SignInRequest,
    response: Response,
    store: Store = Depends(get_store),
) -> schemas.AccountResponse:
    grant = await service.login(store, request.email, request.password)
    session.set_session_cookie(response, grant.token)
    return grant.account


@router.post("/signup", name="SignUp", response_model=bool)
async def sign_up(
    request: schemas.SignUpRequest,
    response: Response,
    store: Store = Depends(get_store),
) -> bool:
    grant = await service.sign_up(store, request.email, request.password, request.username)
    if grant is None:
        return False
    session.set_session_cookie(response, grant.token)
    return True
