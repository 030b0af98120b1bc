"""
Pantry request handling.

Controllers only know the repository, never SQL. Store faults are logged
and answered with a generic 500 body.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from core.errors import StoreError
from core.validation import is_storable_id, optional_text, parse_id, require_text

from . import schemas
from .repository import PantryRepository

logger = logging.getLogger(__name__)


def _internal_error(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": "Internal server error", "message": message},
    )


def _not_found(pantry_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"error": "Not found", "message": f"Pantry with ID {pantry_id} not found"},
    )


async def get_all_pantries(*, repository: PantryRepository) -> list[schemas.Pantry]:
    try:
        return await repository.get_all()
    except StoreError as exc:
        logger.exception("pantry_list_failed")
        raise _internal_error("Could not retrieve pantries") from exc


async def get_pantry_by_id(raw_id: str, *, repository: PantryRepository) -> schemas.Pantry:
    pantry_id = parse_id(raw_id, label="Pantry")
    if not is_storable_id(pantry_id):
        raise _not_found(pantry_id)

    try:
        pantry = await repository.get_by_id(pantry_id)
    except StoreError as exc:
        logger.exception("pantry_get_failed pantry_id=%s", pantry_id)
        raise _internal_error("Could not retrieve pantry") from exc

    if pantry is None:
        raise _not_found(pantry_id)
    return pantry


async def create_pantry(
    payload: schemas.PantryCreateRequest,
    *,
    repository: PantryRepository,
) -> schemas.PantryCreatedResponse:
    name = require_text(
        payload.name,
        field="name",
        label="Pantry name",
        max_length=schemas.NAME_MAX_LENGTH,
    )
    description = optional_text(
        payload.description,
        field="description",
        label="Pantry description",
        max_length=schemas.DESCRIPTION_MAX_LENGTH,
    )

    try:
        pantry = await repository.create(name=name, description=description)
    except StoreError as exc:
        logger.exception("pantry_create_failed name=%s", name)
        raise _internal_error("Could not create pantry") from exc

    logger.info("pantry_created pantry_id=%s", pantry.id)
    return schemas.PantryCreatedResponse(message="Pantry created successfully", pantry=pantry)
