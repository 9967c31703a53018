"""
Survey API schemas.

Wire names are camelCase (`registrationNumber`); attributes are snake_case.
"""

from __future__ import annotations

import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SurveyType(str, enum.Enum):
    A = "A"
    B = "B"
    C = "C"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SurveyInput(_CamelModel):
    # Unknown keys (including any `owner`) are dropped; owner comes from the session.
    name: str = Field(..., min_length=1, max_length=200)
    registration_number: str = Field(..., min_length=1, max_length=64)
    gender: str = Field(..., min_length=1, max_length=32)
    result: str = Field(..., min_length=1)
    signature_data_url: str = Field(..., min_length=1)
    signed_by: str = Field(..., min_length=1, max_length=200)
    relationship: str = Field(..., min_length=1, max_length=100)
    type: SurveyType
    doctor: str | None = Field(default=None, max_length=200)
    operation: str | None = Field(default=None, max_length=200)


class SurveyResponse(_CamelModel):
    id: int
    owner: int
    name: str
    registration_number: str
    gender: str
    result: str
    signature_data_url: str
    signed_by: str
    relationship: str
    type: SurveyType
    doctor: str | None = None
    operation: str | None = None
    created_at: datetime
