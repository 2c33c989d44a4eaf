"""
Product business logic.

Scope:
- presence checks for the required product fields
- translating store outcomes (rows, affected-row counts, failures) into responses
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status

from core.db import Database, is_storable_id
from core.errors import StoreError

from . import repository, schemas

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Name, category, price, and quantity are required"
NOT_FOUND = "Product not found"


def _require_fields(payload: schemas.ProductPayload) -> dict[str, Any]:
    # price and quantity may legitimately be 0; only the strings must be non-empty.
    if not payload.name or not payload.category or payload.price is None or payload.quantity is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_FIELDS)
    return {
        "name": payload.name,
        "description": payload.description,
        "category": payload.category,
        "price": payload.price,
        "quantity": payload.quantity,
    }


def _store_failure(message: str, exc: StoreError) -> HTTPException:
    logger.error("%s: %s", message, exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


def _to_product(row: dict) -> dict[str, Any]:
    price = row["price"]
    return {
        "id": int(row["id"]),
        "name": row["name"],
        "description": row["description"],
        "category": row["category"],
        "price": float(price) if price is not None else None,
        "quantity": row["quantity"],
    }


async def list_products(db: Database) -> list[dict]:
    try:
        rows = await repository.list_products(db)
    except StoreError as exc:
        raise _store_failure("Failed to fetch products", exc) from exc
    return [_to_product(row) for row in rows]


async def create_product(db: Database, payload: schemas.ProductPayload) -> dict:
    fields = _require_fields(payload)
    try:
        product_id = await repository.create_product(db, **fields)
    except StoreError as exc:
        raise _store_failure("Failed to add product", exc) from exc
    return {"message": "Product added successfully!", "productId": product_id}


async def update_product(db: Database, product_id: int, payload: schemas.ProductPayload) -> dict:
    fields = _require_fields(payload)
    if not is_storable_id(product_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    try:
        updated = await repository.update_product(db, product_id, **fields)
    except StoreError as exc:
        raise _store_failure("Failed to update product", exc) from exc
    if updated == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return {"message": "Product updated successfully"}


async def delete_product(db: Database, product_id: int) -> dict:
    if not is_storable_id(product_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    try:
        deleted = await repository.delete_product(db, product_id)
    except StoreError as exc:
        raise _store_failure("Failed to delete product", exc) from exc
    if deleted == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return {"message": "Product deleted successfully"}
