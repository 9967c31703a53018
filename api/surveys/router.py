"""
Survey API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth.dependencies import get_current_identity
from auth.security import Identity
from core.store import Store, get_store

from . import schemas, service

router = APIRouter(prefix="/surveys")


@router.get("", name="surveys", response_model=list[schemas.SurveyResponse])
async def list_surveys(
    created_at: str | None = Query(default=None, alias="createdAt"),
    identity: Identity = Depends(get_current_identity),
    store: Store = Depends(get_store),
) -> list[schemas.SurveyResponse]:
    """
    Current user's surveys created on one local calendar day (today by default).
    """
    window = service.day_window_for(created_at)
    return await service.list_owned_surveys(store, identity.subject_id, window)


@router.get("/{survey_id}", name="survey", response_model=schemas.SurveyResponse)
async def get_survey(
    survey_id: int,
    _: Identity = Depends(get_current_identity),
    store: Store = Depends(get_store),
) -> schemas.SurveyResponse:
    return await service.get_survey_by_id(store, survey_id)


@router.post("", name="addSurvey", response_model=schemas.SurveyResponse)
async def add_survey(
    payload: schemas.SurveyInput,
    identity: Identity = Depends(get_current_identity),
    store: Store = Depends(get_store),
) -> schemas.SurveyResponse:
    return await service.create_survey(store, identity.subject_id, payload)
