"""
User persistence (raw SQL).
"""

from __future__ import annotations

from core.db import Database
from core.errors import StoreError


async def list_users(db: Database) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, username, password
        FROM users
        ORDER BY id
        """
    )


async def create_user(db: Database, *, username: str, password: str) -> int:
    row = await db.fetch_one(
        """
        INSERT INTO users (username, password)
        VALUES ($1, $2)
        RETURNING id
        """,
        username,
        password,
    )
    if row is None:
        raise StoreError("Insert into users returned no id.")
    return int(row["id"])


async def update_user(db: Database, user_id: int, *, username: str, password: str) -> int:
    return await db.execute(
        """
        UPDATE users
        SET username = $1,
            password = $2
        WHERE id = $3
        """,
        username,
        password,
        user_id,
    )


async def delete_user(db: Database, user_id: int) -> int:
    return await db.execute(
        """
        DELETE FROM users
        WHERE id = $1
        """,
        user_id,
    )
