"""
User API schemas (records and request bodies).
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 100
PASSWORD_MAX_LENGTH = 255


class UserRole(str, Enum):
    client = "client"
    chef = "chef"


class User(BaseModel):
    """
    Public projection of a `users` row. The password column is never part of it.
    """

    id: int
    name: str
    email: str
    role: UserRole | None = None
    created_at: datetime | None = None


# Request fields are optional so that required-ness is reported by the
# controller with a field-specific message instead of a generic 422.
class UserCreateRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: UserRole | None = None


class UserUpdateRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    role: UserRole | None = None
