"""
Scholarship Portal Backend — Scholarship Service
=================================================

What:  Listing, lookup, creation, upsert and deletion of scholarships.
Who:   Called by the scholarship route handlers.

Top scholarships ordering:
    application_fees ASC (missing fees first), then post_date DESC
    (missing dates last), mirroring a document-store sort of
    {application_fees: 1, post_date: -1}.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_portal.models.scholarship import Scholarship
from scholarship_portal.schemas.common import (
    DeleteResult,
    InsertResult,
    UpdateResult,
    document_fields,
)
from scholarship_portal.schemas.scholarship import ScholarshipCreate, ScholarshipUpdate
from scholarship_portal.services.document_service import DocumentService


class ScholarshipService(DocumentService[Scholarship]):
    model = Scholarship
    resource = "scholarship"

    async def list_top(self, db: AsyncSession) -> List[Dict[str, Any]]:
        return await self.find(
            db,
            order_by=(
                Scholarship.application_fees.asc().nulls_first(),
                Scholarship.post_date.desc().nulls_last(),
            ),
        )

    async def get_scholarship(self, db: AsyncSession, scholarship_id: UUID) -> Optional[Dict[str, Any]]:
        """The scholarship document, or None when the id is unknown."""
        return await self.find_one(db, scholarship_id)

    async def create_scholarship(self, db: AsyncSession, payload: ScholarshipCreate) -> InsertResult:
        return await self.insert_one(db, document_fields(payload))

    async def update_scholarship(
        self,
        db: AsyncSession,
        scholarship_id: UUID,
        payload: ScholarshipUpdate,
    ) -> UpdateResult:
        """
        Upsert the named scholarship fields.

        Every named field is written; a field missing from the body is set
        to null. `country` lands in `university_location.country` without
        touching other location keys.
        """
        fields = payload.model_dump()
        fields["university_location.country"] = fields.pop("country")
        return await self.update_one(db, scholarship_id, fields, upsert=True)

    async def delete_scholarship(self, db: AsyncSession, scholarship_id: UUID) -> DeleteResult:
        return await self.delete_one(db, scholarship_id)


scholarship_service = ScholarshipService()
