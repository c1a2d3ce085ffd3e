"""
Scholarship Portal Backend — Review Route Handlers
===================================================

Routes:
    GET  /reviews                                  all reviews
    GET  /reviews/{email}                          reviews written by a user
    GET  /reviews/scholarship/{scholarship_id}     reviews of a scholarship (404 when none)
    POST /reviews                                  add a review
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_portal.database import get_db_session
from scholarship_portal.schemas.common import ErrorResponse, InsertResult
from scholarship_portal.schemas.review import ReviewCreate
from scholarship_portal.services.review_service import review_service

router = APIRouter(tags=["Reviews"])


@router.get("/reviews", summary="List all reviews")
async def list_reviews(db: AsyncSession = Depends(get_db_session)) -> List[Dict[str, Any]]:
    return await review_service.list_reviews(db)


@router.get(
    "/reviews/scholarship/{scholarship_id}",
    responses={404: {"description": "No reviews for this scholarship", "model": ErrorResponse}},
    summary="List reviews of a scholarship",
)
async def reviews_by_scholarship(
    scholarship_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[Dict[str, Any]]:
    return await review_service.reviews_by_scholarship(db, scholarship_id)


@router.get("/reviews/{email}", summary="List reviews written by a user")
async def reviews_by_email(
    email: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[Dict[str, Any]]:
    return await review_service.reviews_by_email(db, email)


@router.post("/reviews", response_model=InsertResult, summary="Add a review")
async def create_review(
    payload: ReviewCreate,
    db: AsyncSession = Depends(get_db_session),
) -> InsertResult:
    return await review_service.create_review(db, payload)
