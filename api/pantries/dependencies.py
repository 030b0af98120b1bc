"""
Repository dependencies for pantry routes.
"""

from __future__ import annotations

from fastapi import Depends

from core.db import Database, get_db

from .repository import PantryRepository


def get_pantry_repository(db: Database = Depends(get_db)) -> PantryRepository:
    return PantryRepository(db)
