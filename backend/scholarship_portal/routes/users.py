"""
Scholarship Portal Backend — User Route Handlers
=================================================

Routes:
    POST   /users                 signup (returns "User already exists" marker on duplicates)
    GET    /users                 list users
    PATCH  /users/{id}/role       set role, returns the updated user
    DELETE /users/{id}            delete (404 when unknown)
    GET    /user-role/{email}     {"role": ...} or 404
"""

from typing import Any, Dict, List, Union
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_portal.database import get_db_session
from scholarship_portal.schemas.common import (
    DeleteResult,
    DuplicateInsertResult,
    ErrorResponse,
    InsertResult,
)
from scholarship_portal.schemas.user import RoleResponse, RoleUpdate, UserCreate
from scholarship_portal.services.user_service import user_service

router = APIRouter(tags=["Users"])


@router.post(
    "/users",
    response_model=Union[InsertResult, DuplicateInsertResult],
    responses={409: {"description": "Concurrent signup with the same email", "model": ErrorResponse}},
    summary="Register a user",
    description=(
        "Inserts the user unless one with the same email exists, in which case "
        '{"message": "User already exists", "insertedId": null} is returned.'
    ),
)
async def create_user(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db_session),
) -> Union[InsertResult, DuplicateInsertResult]:
    return await user_service.create_user(db, payload)


@router.get("/users", summary="List users")
async def list_users(db: AsyncSession = Depends(get_db_session)) -> List[Dict[str, Any]]:
    return await user_service.list_users(db)


@router.patch(
    "/users/{user_id}/role",
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Change a user's role",
)
async def update_user_role(
    user_id: UUID,
    payload: RoleUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    return await user_service.update_role(db, user_id, payload.role)


@router.delete(
    "/users/{user_id}",
    response_model=DeleteResult,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Delete a user",
)
async def delete_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResult:
    return await user_service.delete_user(db, user_id)


@router.get(
    "/user-role/{email}",
    response_model=RoleResponse,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Look up a user's role by email",
)
async def get_user_role(
    email: str,
    db: AsyncSession = Depends(get_db_session),
) -> RoleResponse:
    return await user_service.get_role(db, email)
