"""Shared fixtures: an in-memory store and a test client over it."""

from datetime import datetime, timezone
from itertools import count

import pytest
from fastapi.testclient import TestClient

from core.errors import DuplicateRecord, StoreFailure
from core.store import Store


class InMemoryAccounts:
    def __init__(self):
        self.rows = {}
        self._ids = count(1)

    async def insert_account(self, *, email, username, password_hash):
        email = email.strip().lower()
        if email in self.rows:
            raise DuplicateRecord(f"duplicate key value: {email}")
        row = {
            "id": next(self._ids),
            "email": email,
            "username": username,
            "password_hash": password_hash,
            "created_at": datetime.now(timezone.utc),
        }
        self.rows[email] = row
        return dict(row)

    async def find_account_by_email(self, email):
        row = self.rows.get(email.strip().lower())
        return dict(row) if row else None


class InMemorySurveys:
    def __init__(self):
        self.rows = []
        self._ids = count(1)
        self.now = lambda: datetime.now(timezone.utc)

    def add(self, *, owner_id, created_at, **overrides):
        fields = dict(SURVEY_FIELDS_DB)
        fields.update(overrides)
        row = {"id": next(self._ids), "owner_id": owner_id, "created_at": created_at, **fields}
        self.rows.append(row)
        return row

    async def insert_survey(self, *, owner_id, fields):
        return dict(self.add(owner_id=owner_id, created_at=self.now(), **fields))

    async def list_surveys_by_owner_in_range(self, *, owner_id, start_utc, end_utc):
        rows = [
            dict(row)
            for row in self.rows
            if row["owner_id"] == owner_id and start_utc <= row["created_at"] <= end_utc
        ]
        return sorted(rows, key=lambda r: (r["created_at"], r["id"]), reverse=True)

    async def find_survey_by_id(self, survey_id):
        for row in self.rows:
            if row["id"] == survey_id:
                return dict(row)
        return None


class BrokenRepository:
    """Every call fails like an unreachable database."""

    def __getattr__(self, name):
        async def fail(*args, **kwargs):
            raise StoreFailure("connection refused")

        return fail


SURVEY_FIELDS_DB = {
    "name": "Jane",
    "registration_number": "900101-2345678",
    "gender": "F",
    "result": "agree",
    "signature_data_url": "data:image/png;base64,iVBORw0KGgo=",
    "signed_by": "Jane",
    "relationship": "self",
    "type": "A",
    "doctor": None,
    "operation": None,
}

SURVEY_INPUT = {
    "name": "Jane",
    "registrationNumber": "900101-2345678",
    "gender": "F",
    "result": "agree",
    "signatureDataUrl": "data:image/png;base64,iVBORw0KGgo=",
    "signedBy": "Jane",
    "relationship": "self",
    "type": "B",
    "doctor": "Dr. Kim",
}


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    monkeypatch.delenv("APP_ENV", raising=False)
    monkeypatch.delenv("SESSION_TOKEN_TTL_S", raising=False)
    monkeypatch.delenv("SESSION_COOKIE_MAX_AGE_S", raising=False)
    monkeypatch.delenv("AUTH_BYPASS_OPERATIONS", raising=False)
    monkeypatch.delenv("SURVEY_TIMEZONE", raising=False)


@pytest.fixture
def store():
    return Store(accounts=InMemoryAccounts(), surveys=InMemorySurveys())


@pytest.fixture
def broken_store():
    return Store(accounts=BrokenRepository(), surveys=BrokenRepository())


@pytest.fixture
def client(store):
    from main import create_app

    with TestClient(create_app(store)) as test_client:
        yield test_client
