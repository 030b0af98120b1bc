"""
User persistence (raw SQL).

Store faults from `core.db` are not caught here.
"""

from __future__ import annotations

from core.db import Database

from .schemas import User, UserRole

_PUBLIC_COLUMNS = "id, name, email, role, created_at"


def _to_user(row: dict) -> User:
    return User(
        id=int(row["id"]),
        name=str(row["name"]),
        email=str(row["email"]),
        role=row.get("role"),
        created_at=row.get("created_at"),
    )


class UserRepository:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def create(self, *, name: str, email: str, password: str, role: UserRole) -> User:
        # TODO: hash the password before insert once an auth scheme is chosen.
        row = await self._db.fetch_one(
            f"""
            INSERT INTO users (name, email, password, role)
            VALUES ($1, $2, $3, $4)
            RETURNING {_PUBLIC_COLUMNS}
            """,
            name,
            email,
            password,
            role.value,
        )
        if row is None:
            raise RuntimeError("Failed to create user.")
        return _to_user(row)

    async def get_by_id(self, user_id: int) -> User | None:
        row = await self._db.fetch_one(
            f"""
            SELECT {_PUBLIC_COLUMNS}
            FROM users
            WHERE id = $1
            """,
            user_id,
        )
        return _to_user(row) if row is not None else None

    async def list_all(self) -> list[User]:
        rows = await self._db.fetch_all(
            f"""
            SELECT {_PUBLIC_COLUMNS}
            FROM users
            ORDER BY created_at DESC, id DESC
            """
        )
        return [_to_user(row) for row in rows]

    async def update(
        self,
        user_id: int,
        *,
        name: str,
        email: str,
        role: UserRole | None = None,
    ) -> User | None:
        """
        Overwrite name, email and (when given) role. The password is not updatable here.
        """
        row = await self._db.fetch_one(
            f"""
            UPDATE users
            SET name = $1,
                email = $2,
                role = COALESCE($3::user_role, role)
            WHERE id = $4
            RETURNING {_PUBLIC_COLUMNS}
            """,
            name,
            email,
            role.value if role is not None else None,
            user_id,
        )
        return _to_user(row) if row is not None else None
