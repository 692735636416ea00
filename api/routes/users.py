"""
Users API Routes.

Provides endpoints for listing, retrieving, and adding user records.
"""

import logging
from typing import List

from fastapi import APIRouter, Path, status

from api.dependencies import DBSessionDep
from api.models.requests import UserCreate
from api.models.responses import UserCreatedResponse, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "",
    response_model=List[UserResponse],
    summary="List users",
    description="All users, most recently created first.",
)
async def list_users(db: DBSessionDep) -> List[UserResponse]:
    rows = await db.list_users()
    return [UserResponse.model_validate(row) for row in rows]


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user",
    responses={404: {"description": "User not found"}},
)
async def get_user(
    db: DBSessionDep,
    user_id: int = Path(..., description="User identifier"),
) -> UserResponse:
    row = await db.get_user(user_id)
    return UserResponse.model_validate(row)


@router.post(
    "",
    response_model=UserCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a user",
    responses={
        409: {"description": "A user with this email already exists"},
        422: {"description": "Missing or malformed fields"},
    },
)
async def create_user(user: UserCreate, db: DBSessionDep) -> UserCreatedResponse:
    user_id = await db.create_user(user)
    return UserCreatedResponse(id=user_id)
