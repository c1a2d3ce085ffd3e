"""
Scholarship Portal Backend — Review Service
============================================
"""

from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_portal.exceptions import NotFoundError
from scholarship_portal.models.review import Review
from scholarship_portal.schemas.common import InsertResult, document_fields
from scholarship_portal.schemas.review import ReviewCreate
from scholarship_portal.services.document_service import DocumentService


class ReviewService(DocumentService[Review]):
    model = Review
    resource = "review"

    async def list_reviews(self, db: AsyncSession) -> List[Dict[str, Any]]:
        return await self.find(db)

    async def reviews_by_email(self, db: AsyncSession, email: str) -> List[Dict[str, Any]]:
        return await self.find(db, Review.email == email)

    async def reviews_by_scholarship(self, db: AsyncSession, scholarship_id: str) -> List[Dict[str, Any]]:
        """Reviews of one scholarship; none at all is a NotFoundError."""
        reviews = await self.find(db, Review.scholarship_id == scholarship_id)
        if not reviews:
            raise NotFoundError(
                resource="review",
                message="No reviews found for this scholarship ID",
                context={"scholarship_id": scholarship_id},
            )
        return reviews

    async def create_review(self, db: AsyncSession, payload: ReviewCreate) -> InsertResult:
        return await self.insert_one(db, document_fields(payload))


review_service = ReviewService()
