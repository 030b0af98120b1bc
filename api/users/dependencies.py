"""
Repository dependencies for user routes.
"""

from __future__ import annotations

from fastapi import Depends

from core.db import Database, get_db

from .repository import UserRepository


def get_user_repository(db: Database = Depends(get_db)) -> UserRepository:
    return UserRepository(db)
