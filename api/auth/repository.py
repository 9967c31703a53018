"""
Account persistence (raw SQL).
"""

from __future__ import annotations

from core.db import Database
from core.errors import StoreFailure

_ACCOUNT_COLUMNS = "id, email, username, password_hash, created_at"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AccountRepository:
    def __init__(self, database: Database) -> None:
        self.database = database

    async def insert_account(self, *, email: str, username: str, password_hash: str) -> dict:
        row = await self.database.fetch_one(
            f"""
            INSERT INTO accounts (email, username, password_hash)
            VALUES ($1, $2, $3)
            RETURNING {_ACCOUNT_COLUMNS}
            """,
            normalize_email(email),
            username,
            password_hash,
        )
        if row is None:
            raise StoreFailure("Failed to create account.")
        return row

    async def find_account_by_email(self, email: str) -> dict | None:
        return await self.database.fetch_one(
            f"""
            SELECT {_ACCOUNT_COLUMNS}
            FROM accounts
            WHERE email = $1
            """,
            normalize_email(email),
        )
