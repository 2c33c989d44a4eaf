"""
User API schemas (request models).
"""

from __future__ import annotations

from pydantic import BaseModel


class UserPayload(BaseModel):
    # Presence is checked by the service so a missing field maps to 400, not 422.
    username: str | None = None
    password: str | None = None
