"""
Survey gateway: maps API operations to store operations.

The owner is always the session identity. `get_survey_by_id` is not scoped by
owner; any authenticated caller can read any survey by id.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from core import settings
from core.errors import SurveyNotFound
from core.store import Store

from . import dates, schemas

logger = logging.getLogger(__name__)


def _to_survey_response(row: dict) -> schemas.SurveyResponse:
    return schemas.SurveyResponse(
        id=int(row["id"]),
        owner=int(row["owner_id"]),
        name=str(row["name"]),
        registration_number=str(row["registration_number"]),
        gender=str(row["gender"]),
        result=str(row["result"]),
        signature_data_url=str(row["signature_data_url"]),
        signed_by=str(row["signed_by"]),
        relationship=str(row["relationship"]),
        type=schemas.SurveyType(str(row["type"])),
        doctor=row.get("doctor"),
        operation=row.get("operation"),
        created_at=row["created_at"],
    )


def day_window_for(created_at: str | date | datetime | None) -> dates.DayWindow:
    tz_name = settings.survey_timezone()
    if created_at is None:
        return dates.today_window(tz_name)
    return dates.resolve_day_window(created_at, tz_name)


async def list_owned_surveys(
    store: Store,
    owner_id: int,
    window: dates.DayWindow,
) -> list[schemas.SurveyResponse]:
    rows = await store.surveys.list_surveys_by_owner_in_range(
        owner_id=owner_id,
        start_utc=window.start_utc,
        end_utc=window.end_utc,
    )
    surveys = [_to_survey_response(row) for row in rows]
    # Guard the contract even if a store ignores the filter.
    return [
        survey
        for survey in surveys
        if survey.owner == owner_id and window.contains(survey.created_at)
    ]


async def get_survey_by_id(store: Store, survey_id: int) -> schemas.SurveyResponse:
    row = await store.surveys.find_survey_by_id(survey_id)
    if row is None:
        raise SurveyNotFound(f"Survey {survey_id} not found.")
    return _to_survey_response(row)


async def create_survey(
    store: Store,
    owner_id: int,
    fields: schemas.SurveyInput,
) -> schemas.SurveyResponse:
    row = await store.surveys.insert_survey(
        owner_id=owner_id,
        fields=fields.model_dump(mode="json"),
    )
    logger.info("survey_created survey_id=%s owner_id=%s", row["id"], owner_id)
    return _to_survey_response(row)
