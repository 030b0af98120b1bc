"""
User API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from . import schemas, service
from .dependencies import get_user_repository
from .repository import UserRepository

router = APIRouter(prefix="/users")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=schemas.User)
async def create_user(
    payload: schemas.UserCreateRequest,
    repository: UserRepository = Depends(get_user_repository),
) -> schemas.User:
    return await service.create_user(payload, repository=repository)


@router.get("/{user_id}", response_model=schemas.User)
async def get_user(
    user_id: str,
    repository: UserRepository = Depends(get_user_repository),
) -> schemas.User:
    return await service.get_user(user_id, repository=repository)


@router.get("", response_model=list[schemas.User])
async def list_users(
    repository: UserRepository = Depends(get_user_repository),
) -> list[schemas.User]:
    return await service.list_users(repository=repository)


@router.put("/{user_id}", response_model=schemas.User)
async def update_user(
    user_id: str,
    payload: schemas.UserUpdateRequest,
    repository: UserRepository = Depends(get_user_repository),
) -> schemas.User:
    """
    Update name, email and role. A `password` field in the body is ignored.
    """
    return await service.update_user(user_id, payload, repository=repository)
