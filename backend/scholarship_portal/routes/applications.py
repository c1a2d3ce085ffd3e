"""
Scholarship Portal Backend — Application Route Handlers
========================================================

Routes:
    POST   /applied-scholarships                         submit an application
    GET    /applications                                 all applications
    GET    /applications/{email}                         filter on userEmail
    GET    /applied-scholarships/{email}                 filter on email
    DELETE /applications/{id}                            delete (404 when unknown)
    PUT    /applications/{applicationId}/cancel          applicationStatus → "rejected"
    POST   /applications/{applicationId}/feedback        set feedback
    PUT    /applications/{id}                            arbitrary field update

The two email filters read different fields on purpose; see
services/application_service.py.
"""

from typing import Any, Dict, List
from uuid import UUID

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_portal.database import get_db_session
from scholarship_portal.schemas.application import ApplicationCreate, FeedbackUpdate
from scholarship_portal.schemas.common import (
    DeleteResult,
    ErrorResponse,
    InsertResult,
    MessageResponse,
    UpdateResult,
)
from scholarship_portal.services.application_service import application_service

router = APIRouter(tags=["Applications"])


@router.post(
    "/applied-scholarships",
    response_model=InsertResult,
    summary="Submit a scholarship application",
)
async def create_application(
    payload: ApplicationCreate,
    db: AsyncSession = Depends(get_db_session),
) -> InsertResult:
    return await application_service.create_application(db, payload)


@router.get("/applications", summary="List all applications")
async def list_applications(db: AsyncSession = Depends(get_db_session)) -> List[Dict[str, Any]]:
    return await application_service.list_applications(db)


@router.get("/applications/{email}", summary="List applications by userEmail")
async def applications_by_user_email(
    email: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[Dict[str, Any]]:
    return await application_service.by_user_email(db, email)


@router.get("/applied-scholarships/{email}", summary="List applications by email")
async def applied_scholarships_by_email(
    email: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[Dict[str, Any]]:
    return await application_service.by_email(db, email)


@router.delete(
    "/applications/{application_id}",
    response_model=DeleteResult,
    responses={404: {"description": "Application not found", "model": ErrorResponse}},
    summary="Delete an application",
)
async def delete_application(
    application_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResult:
    return await application_service.delete_application(db, application_id)


@router.put(
    "/applications/{application_id}/cancel",
    response_model=UpdateResult,
    summary="Reject an application",
)
async def cancel_application(
    application_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> UpdateResult:
    return await application_service.cancel(db, application_id)


@router.post(
    "/applications/{application_id}/feedback",
    response_model=UpdateResult,
    summary="Leave feedback on an application",
)
async def set_application_feedback(
    application_id: UUID,
    payload: FeedbackUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> UpdateResult:
    return await application_service.set_feedback(db, application_id, payload.feedback)


@router.put(
    "/applications/{application_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Nothing was modified", "model": ErrorResponse}},
    summary="Update an application",
)
async def update_application(
    application_id: UUID,
    fields: Dict[str, Any] = Body(..., description="Fields to set on the application"),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await application_service.update_application(db, application_id, fields)
