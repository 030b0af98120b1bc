"""
Pantry API endpoints.

The `pantries` table is not created by `core.schema`; it must exist before
these endpoints are used.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from . import schemas, service
from .dependencies import get_pantry_repository
from .repository import PantryRepository

router = APIRouter(prefix="/pantries")


@router.get("", response_model=list[schemas.Pantry])
async def get_all_pantries(
    repository: PantryRepository = Depends(get_pantry_repository),
) -> list[schemas.Pantry]:
    return await service.get_all_pantries(repository=repository)


@router.get("/{pantry_id}", response_model=schemas.Pantry)
async def get_pantry_by_id(
    pantry_id: str,
    repository: PantryRepository = Depends(get_pantry_repository),
) -> schemas.Pantry:
    # Declared as str so a non-numeric id is reported by the controller, not FastAPI.
    return await service.get_pantry_by_id(pantry_id, repository=repository)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=schemas.PantryCreatedResponse)
async def create_pantry(
    payload: schemas.PantryCreateRequest,
    repository: PantryRepository = Depends(get_pantry_repository),
) -> schemas.PantryCreatedResponse:
    return await service.create_pantry(payload, repository=repository)
