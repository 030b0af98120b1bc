"""
User request handling: validation, repository calls and outcome mapping.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core.errors import ConstraintViolation, StoreError, ValidationError
from core.validation import is_storable_id, parse_id, require_text

from . import schemas
from .repository import UserRepository

logger = logging.getLogger(__name__)


def _internal_error(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": "Internal server error", "message": message},
    )


def _email_conflict() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail={"error": "Conflict", "message": "Email is already registered."},
    )


def _not_found(user_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"error": "Not found", "message": f"User with ID {user_id} not found"},
    )


def _validate_email(email: str | None) -> str:
    value = require_text(email, field="email", label="Email", max_length=schemas.EMAIL_MAX_LENGTH)
    if "@" not in value:
        raise ValidationError("email", "Email must be a valid email address")
    return value


async def create_user(
    payload: schemas.UserCreateRequest,
    *,
    repository: UserRepository,
) -> schemas.User:
    name = require_text(payload.name, field="name", label="Name", max_length=schemas.NAME_MAX_LENGTH)
    email = _validate_email(payload.email)
    # Passwords are stored as given, so no trimming.
    password = payload.password or ""
    if not password:
        raise ValidationError("password", "Password is required", error="Missing required field")
    if len(password) > schemas.PASSWORD_MAX_LENGTH:
        raise ValidationError(
            "password",
            f"Password must be at most {schemas.PASSWORD_MAX_LENGTH} characters",
        )
    role = payload.role or schemas.UserRole.client

    try:
        return await repository.create(name=name, email=email, password=password, role=role)
    except ConstraintViolation as exc:
        logger.info("user_create_conflict email=%s constraint=%s", email, exc.constraint)
        raise _email_conflict() from exc
    except StoreError as exc:
        logger.exception("user_create_failed email=%s", email)
        raise _internal_error("Could not create user") from exc


async def get_user(raw_id: str, *, repository: UserRepository) -> schemas.User:
    user_id = parse_id(raw_id, label="User")
    if not is_storable_id(user_id):
        # No SERIAL key can match.
        raise _not_found(user_id)
    try:
        user = await repository.get_by_id(user_id)
    except StoreError as exc:
        logger.exception("user_get_failed user_id=%s", user_id)
        raise _internal_error("Could not retrieve user") from exc
    if user is None:
        raise _not_found(user_id)
    return user


async def list_users(*, repository: UserRepository) -> list[schemas.User]:
    try:
        return await repository.list_all()
    except StoreError as exc:
        logger.exception("user_list_failed")
        raise _internal_error("Could not retrieve users") from exc


async def update_user(
    raw_id: str,
    payload: schemas.UserUpdateRequest,
    *,
    repository: UserRepository,
) -> schemas.User:
    user_id = parse_id(raw_id, label="User")
    name = require_text(payload.name, field="name", label="Name", max_length=schemas.NAME_MAX_LENGTH)
    email = _validate_email(payload.email)

    if not is_storable_id(user_id):
        raise _not_found(user_id)

    try:
        user = await repository.update(user_id, name=name, email=email, role=payload.role)
    except ConstraintViolation as exc:
        logger.info("user_update_conflict user_id=%s constraint=%s", user_id, exc.constraint)
        raise _email_conflict() from exc
    except StoreError as exc:
        logger.exception("user_update_failed user_id=%s", user_id)
        raise _internal_error("Could not update user") from exc
    if user is None:
        raise _not_found(user_id)
    return user
