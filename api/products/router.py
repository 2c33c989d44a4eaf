"""
Product API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.db import Database, get_db

from . import schemas, service

router = APIRouter(prefix="/api/products")


@router.get("")
async def list_products(db: Database = Depends(get_db)) -> list[dict]:
    return await service.list_products(db)


@router.post("")
async def create_product(
    payload: schemas.ProductPayload,
    db: Database = Depends(get_db),
) -> dict:
    return await service.create_product(db, payload)


@router.put("/{product_id}")
async def update_product(
    product_id: int,
    payload: schemas.ProductPayload,
    db: Database = Depends(get_db),
) -> dict:
    """
    Full replace of every mutable field; an omitted description is stored as null.
    """
    return await service.update_product(db, product_id, payload)


@router.delete("/{product_id}")
async def delete_product(product_id: int, db: Database = Depends(get_db)) -> dict:
    return await service.delete_product(db, product_id)
