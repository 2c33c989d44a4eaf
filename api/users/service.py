"""
User business logic: presence checks and store outcome translation.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core.db import Database, is_storable_id
from core.errors import StoreError

from . import repository, schemas

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Username and password are required"
NOT_FOUND = "User not found"


def _require_fields(payload: schemas.UserPayload) -> tuple[str, str]:
    if not payload.username or not payload.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_FIELDS)
    return payload.username, payload.password


def _store_failure(message: str, exc: StoreError) -> HTTPException:
    logger.error("%s: %s", message, exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


async def list_users(db: Database) -> list[dict]:
    try:
        rows = await repository.list_users(db)
    except StoreError as exc:
        raise _store_failure("Failed to fetch users", exc) from exc
    return [
        {
            "id": int(row["id"]),
            "username": row["username"],
            "password": row["password"],
        }
        for row in rows
    ]


async def create_user(db: Database, payload: schemas.UserPayload) -> dict:
    username, password = _require_fields(payload)
    try:
        user_id = await repository.create_user(db, username=username, password=password)
    except StoreError as exc:
        raise _store_failure("Failed to add user", exc) from exc
    return {"message": "User added successfully!", "userId": user_id}


async def update_user(db: Database, user_id: int, payload: schemas.UserPayload) -> dict:
    username, password = _require_fields(payload)
    if not is_storable_id(user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    try:
        updated = await repository.update_user(db, user_id, username=username, password=password)
    except StoreError as exc:
        raise _store_failure("Failed to update user", exc) from exc
    if updated == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return {"message": "User updated successfully"}


async def delete_user(db: Database, user_id: int) -> dict:
    if not is_storable_id(user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    try:
        deleted = await repository.delete_user(db, user_id)
    except StoreError as exc:
        raise _store_failure("Failed to delete user", exc) from exc
    if deleted == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return {"message": "User deleted successfully"}
