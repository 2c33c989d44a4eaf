"""
Product API schemas (request models).
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel


class ProductPayload(BaseModel):
    # Presence is checked by the service so a missing field maps to 400, not 422.
    name: str | None = None
    description: str | None = None
    category: str | None = None
    price: Decimal | None = None
    quantity: int | None = None
