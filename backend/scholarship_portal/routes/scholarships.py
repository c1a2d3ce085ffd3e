"""
Scholarship Portal Backend — Scholarship Route Handlers
========================================================

Routes:
    GET    /top-scholarships              list, fees ascending then newest post
    GET    /top-scholarships/{id}         one document or null
    POST   /scholarships                  create
    PUT    /update-scholarships/{id}      upsert the named field set
    DELETE /top-scholarships/{id}         delete (404 when unknown)
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_portal.database import get_db_session
from scholarship_portal.schemas.common import DeleteResult, ErrorResponse, InsertResult, UpdateResult
from scholarship_portal.schemas.scholarship import ScholarshipCreate, ScholarshipUpdate
from scholarship_portal.services.scholarship_service import scholarship_service

router = APIRouter(tags=["Scholarships"])


@router.get(
    "/top-scholarships",
    summary="List scholarships",
    description="All scholarships ordered by application fees (lowest first), then post date (newest first).",
)
async def list_top_scholarships(
    db: AsyncSession = Depends(get_db_session),
) -> List[Dict[str, Any]]:
    return await scholarship_service.list_top(db)


@router.get(
    "/top-scholarships/{scholarship_id}",
    summary="Get a scholarship by ID",
    description="Returns the scholarship document, or null when no scholarship has this ID.",
)
async def get_scholarship(
    scholarship_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> Optional[Dict[str, Any]]:
    return await scholarship_service.get_scholarship(db, scholarship_id)


@router.post(
    "/scholarships",
    response_model=InsertResult,
    summary="Add a scholarship",
)
async def create_scholarship(
    payload: ScholarshipCreate,
    db: AsyncSession = Depends(get_db_session),
) -> InsertResult:
    return await scholarship_service.create_scholarship(db, payload)


@router.put(
    "/update-scholarships/{scholarship_id}",
    response_model=UpdateResult,
    summary="Update (or create) a scholarship",
    description=(
        "Sets the named scholarship fields; `country` updates university_location.country. "
        "Other body fields are ignored. An unknown ID creates the scholarship."
    ),
)
async def update_scholarship(
    scholarship_id: UUID,
    payload: ScholarshipUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> UpdateResult:
    return await scholarship_service.update_scholarship(db, scholarship_id, payload)


@router.delete(
    "/top-scholarships/{scholarship_id}",
    response_model=DeleteResult,
    responses={404: {"description": "Scholarship not found", "model": ErrorResponse}},
    summary="Delete a scholarship",
)
async def delete_scholarship(
    scholarship_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> DeleteResult:
    return await scholarship_service.delete_scholarship(db, scholarship_id)
