"""
Product persistence (raw SQL).
"""

from __future__ import annotations

from decimal import Decimal

from core.db import Database
from core.errors import StoreError


async def list_products(db: Database) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT id, name, description, category, price, quantity
        FROM products
        ORDER BY id
        """
    )


async def create_product(
    db: Database,
    *,
    name: str,
    description: str | None,
    category: str,
    price: Decimal,
    quantity: int,
) -> int:
    row = await db.fetch_one(
        """
        INSERT INTO products (name, description, category, price, quantity)
        VALUES ($1, $2, $3, $4, $5)
        RETURNING id
        """,
        name,
        description,
        category,
        price,
        quantity,
    )
    if row is None:
        raise StoreError("Insert into products returned no id.")
    return int(row["id"])


async def update_product(
    db: Database,
    product_id: int,
    *,
    name: str,
    description: str | None,
    category: str,
    price: Decimal,
    quantity: int,
) -> int:
    return await db.execute(
        """
        UPDATE products
        SET name = $1,
            description = $2,
            category = $3,
            price = $4,
            quantity = $5
        WHERE id = $6
        """,
        name,
        description,
        category,
        price,
        quantity,
        product_id,
    )


async def delete_product(db: Database, product_id: int) -> int:
    return await db.execute(
        """
        DELETE FROM products
        WHERE id = $1
        """,
        product_id,
    )
