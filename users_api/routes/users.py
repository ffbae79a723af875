"""
Users API - User Route Handlers
===============================

What:  The four CRUD endpoints under /api/v1/users.
How:   Each handler receives the users collection through Depends(),
       delegates to UserService, and returns a schema that FastAPI
       serializes. Errors are raised as application exceptions and turned
       into responses by the global handlers in main.py.

Route Inventory:
    GET    /api/v1/users        → list all users
    POST   /api/v1/users        → create a user
    PUT    /api/v1/users/{id}   → update firstName/lastName
    DELETE /api/v1/users/{id}   → delete a user
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from pymongo.asynchronous.collection import AsyncCollection

from users_api.database import get_users_collection
from users_api.schemas.user import (
    ErrorResponse,
    InsertResult,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from users_api.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Users"])


@router.get(
    "/users",
    response_model=List[UserResponse],
    responses={500: {"description": "Database error", "model": ErrorResponse}},
    summary="List all users",
)
async def list_users(
    collection: AsyncCollection = Depends(get_users_collection),
) -> List[UserResponse]:
    return await user_service.list_users(collection)


@router.post(
    "/users",
    response_model=InsertResult,
    responses={
        400: {"description": "Malformed request body", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Create a user",
)
async def create_user(
    payload: UserCreate,
    collection: AsyncCollection = Depends(get_users_collection),
) -> InsertResult:
    """
    Insert a new user.

    Returns the default 200 with the insert acknowledgement, which carries
    the identifier MongoDB assigned.
    """
    return await user_service.create_user(collection, payload)


@router.put(
    "/users/{user_id}",
    response_model=UserResponse,
    responses={
        400: {"description": "Malformed ID or body", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Update a user's first and last name",
)
async def update_user(
    user_id: str,
    payload: UserUpdate,
    collection: AsyncCollection = Depends(get_users_collection),
) -> UserResponse:
    return await user_service.update_user(collection, user_id, payload)


@router.delete(
    "/users/{user_id}",
    response_model=str,
    responses={
        400: {"description": "Malformed ID", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
        500: {"description": "Database error", "model": ErrorResponse},
    },
    summary="Delete a user",
)
async def delete_user(
    user_id: str,
    collection: AsyncCollection = Depends(get_users_collection),
) -> str:
    """Permanently remove a user; responds with the JSON string "record deleted"."""
    return await user_service.delete_user(collection, user_id)
