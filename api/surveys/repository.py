"""
Survey persistence (raw SQL).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from core.db import Database
from core.errors import StoreFailure

_SURVEY_COLUMNS = """
    id, owner_id, name, registration_number, gender, result,
    signature_data_url, signed_by, relationship, type, doctor, operation,
    created_at
"""


class SurveyRepository:
    def __init__(self, database: Database) -> None:
        self.database = database

    async def insert_survey(self, *, owner_id: int, fields: dict[str, Any]) -> dict:
        row = await self.database.fetch_one(
            f"""
            INSERT INTO surveys (
                owner_id, name, registration_number, gender, result,
                signature_data_url, signed_by, relationship, type, doctor, operation
            )
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11)
            RETURNING {_SURVEY_COLUMNS}
            """,
            owner_id,
            fields["name"],
            fields["registration_number"],
            fields["gender"],
            fields["result"],
            fields["signature_data_url"],
            fields["signed_by"],
            fields["relationship"],
            fields["type"],
            fields.get("doctor"),
            fields.get("operation"),
        )
        if row is None:
            raise StoreFailure("Failed to insert survey.")
        return row

    async def list_surveys_by_owner_in_range(
        self,
        *,
        owner_id: int,
        start_utc: datetime,
        end_utc: datetime,
    ) -> list[dict]:
        """
        Surveys of one owner created within `[start_utc, end_utc]`, newest first.
        """
        return await self.database.fetch_all(
            f"""
            SELECT {_SURVEY_COLUMNS}
            FROM surveys
            WHERE owner_id = $1
              AND created_at >= $2
              AND created_at <= $3
            ORDER BY created_at DESC, id DESC
            """,
            owner_id,
            start_utc,
            end_utc,
        )

    async def find_survey_by_id(self, survey_id: int) -> dict | None:
        return await self.database.fetch_one(
            f"""
            SELECT {_SURVEY_COLUMNS}
            FROM surveys
            WHERE id = $1
            """,
            survey_id,
        )
