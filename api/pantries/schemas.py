"""
Pantry API schemas.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000


class Pantry(BaseModel):
    id: int
    name: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PantryCreateRequest(BaseModel):
    name: str | None = None
    description: str | None = None


class PantryCreatedResponse(BaseModel):
    message: str
    pantry: Pantry
