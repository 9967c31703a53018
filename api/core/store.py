"""
Data-store capability handed to services.

A `Store` bundles the per-feature repositories over one `Database`. The app
keeps a single instance on `app.state.store`; tests build one from in-memory
repositories that satisfy the same protocols.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from fastapi import Request

from .db import Database


@runtime_checkable
class AccountStore(Protocol):
    async def insert_account(self, *, email: str, username: str, password_hash: str) -> dict: ...

    async def find_account_by_email(self, email: str) -> dict | None: ...


@runtime_checkable
class SurveyStore(Protocol):
    async def insert_survey(self, *, owner_id: int, fields: dict[str, Any]) -> dict: ...

    async def list_surveys_by_owner_in_range(
        self,
        *,
        owner_id: int,
        start_utc: datetime,
        end_utc: datetime,
    ) -> list[dict]: ...

    async def find_survey_by_id(self, survey_id: int) -> dict | None: ...


@dataclass(frozen=True)
class Store:
    accounts: AccountStore
    surveys: SurveyStore

    @classmethod
    def from_database(cls, database: Database) -> "Store":
        from auth.repository import AccountRepository
        from surveys.repository import SurveyRepository

        return cls(
            accounts=AccountRepository(database),
            surveys=SurveyRepository(database),
        )


def get_store(request: Request) -> Store:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Store is not initialized. Is the app lifespan running?")
    return store
