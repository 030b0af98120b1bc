"""
Pantry persistence (raw SQL).

Callers pass already-normalized values (trimmed name, `None` for an empty
description).
"""

from __future__ import annotations

from core.db import Database

from .schemas import Pantry

_COLUMNS = "id, name, description, created_at, updated_at"


def _to_pantry(row: dict) -> Pantry:
    return Pantry(
        id=int(row["id"]),
        name=str(row["name"]),
        description=row.get("description"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class PantryRepository:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def create(self, *, name: str, description: str | None) -> Pantry:
        row = await self._db.fetch_one(
            f"""
            INSERT INTO pantries (name, description, created_at, updated_at)
            VALUES ($1, $2, now(), now())
            RETURNING {_COLUMNS}
            """,
            name,
            description,
        )
        if row is None:
            raise RuntimeError("Failed to create pantry.")
        return _to_pantry(row)

    async def get_all(self) -> list[Pantry]:
        rows = await self._db.fetch_all(
            f"""
            SELECT {_COLUMNS}
            FROM pantries
            ORDER BY id ASC
            """
        )
        return [_to_pantry(row) for row in rows]

    async def get_by_id(self, pantry_id: int) -> Pantry | None:
        row = await self._db.fetch_one(
            f"""
            SELECT {_COLUMNS}
            FROM pantries
            WHERE id = $1
            """,
            pantry_id,
        )
        return _to_pantry(row) if row is not None else None
