"""
Idempotent schema bootstrap, run on every process start.

Only the `user_role` enum and the `users` table are created here. The
`pantries` table is provisioned out of band and is treated as a
precondition of the pantry endpoints (see `pantries_table_exists`).
"""

from __future__ import annotations

import logging

from .db import Database
from .errors import InitializationError, StoreError

logger = logging.getLogger(__name__)

# duplicate_object
_DUPLICATE_OBJECT = "42710"

CREATE_USER_ROLE_TYPE = "CREATE TYPE user_role AS ENUM ('client', 'chef')"

CREATE_USERS_TABLE = """
CREATE TABLE IF NOT EXISTS users (
    id SERIAL PRIMARY KEY,
    name VARCHAR(100) NOT NULL,
    email VARCHAR(100) UNIQUE NOT NULL,
    password VARCHAR(255) NOT NULL,
    role user_role DEFAULT 'client',
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
)
"""


async def _ensure_user_role_type(db: Database) -> None:
    try:
        await db.execute(CREATE_USER_ROLE_TYPE)
    except StoreError as exc:
        if exc.sqlstate != _DUPLICATE_OBJECT:
            raise
        logger.debug("schema_type_exists name=user_role")


async def initialize(db: Database) -> None:
    try:
        await _ensure_user_role_type(db)
        await db.execute(CREATE_USERS_TABLE)
    except StoreError as exc:
        logger.error("schema_init_failed error=%s", exc)
        raise InitializationError(exc) from exc
    logger.info("schema_init_complete tables=users")


async def pantries_table_exists(db: Database) -> bool:
    row = await db.fetch_one("SELECT to_regclass('public.pantries') IS NOT NULL AS present")
    return bool(row and row["present"])
