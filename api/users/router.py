"""
User API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.db import Database, get_db

from . import schemas, service

router = APIRouter(prefix="/api/users")


@router.get("")
async def list_users(db: Database = Depends(get_db)) -> list[dict]:
    return await service.list_users(db)


@router.post("")
async def create_user(
    payload: schemas.UserPayload,
    db: Database = Depends(get_db),
) -> dict:
    """
    Create a user. Answers 200 (not 201) with the store-assigned id.
    """
    return await service.create_user(db, payload)


@router.put("/{user_id}")
async def update_user(
    user_id: int,
    payload: schemas.UserPayload,
    db: Database = Depends(get_db),
) -> dict:
    return await service.update_user(db, user_id, payload)


@router.delete("/{user_id}")
async def delete_user(user_id: int, db: Database = Depends(get_db)) -> dict:
    return await service.delete_user(db, user_id)
