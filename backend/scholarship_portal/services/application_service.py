"""
Scholarship Portal Backend — Application Service
=================================================

What:  Operations on applied scholarships (a user's applications).
Who:   Called by the application route handlers.

Email filters:
    by_user_email()  → matches the `userEmail` field (GET /applications/{email})
    by_email()       → matches the `email` field (GET /applied-scholarships/{email})
    Existing clients write one or the other depending on the screen, so both
    are kept rather than merged.
"""

from typing import Any, Dict, List, Mapping
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_portal.exceptions import NotFoundError
from scholarship_portal.models.applied_scholarship import STATUS_REJECTED, AppliedScholarship
from scholarship_portal.schemas.common import (
    DeleteResult,
    InsertResult,
    MessageResponse,
    UpdateResult,
    document_fields,
)
from scholarship_portal.schemas.application import ApplicationCreate
from scholarship_portal.services.document_service import DocumentService


class ApplicationService(DocumentService[AppliedScholarship]):
    model = AppliedScholarship
    resource = "applied scholarship"

    async def create_application(self, db: AsyncSession, payload: ApplicationCreate) -> InsertResult:
        return await self.insert_one(db, document_fields(payload))

    async def list_applications(self, db: AsyncSession) -> List[Dict[str, Any]]:
        return await self.find(db)

    async def by_user_email(self, db: AsyncSession, email: str) -> List[Dict[str, Any]]:
        return await self.find(db, AppliedScholarship.user_email == email)

    async def by_email(self, db: AsyncSession, email: str) -> List[Dict[str, Any]]:
        return await self.find(db, AppliedScholarship.email == email)

    async def delete_application(self, db: AsyncSession, application_id: UUID) -> DeleteResult:
        return await self.delete_one(db, application_id)

    async def cancel(self, db: AsyncSession, application_id: UUID) -> UpdateResult:
        return await self.update_one(db, application_id, {"applicationStatus": STATUS_REJECTED})

    async def set_feedback(self, db: AsyncSession, application_id: UUID, feedback: Any) -> UpdateResult:
        return await self.update_one(db, application_id, {"feedback": feedback})

    async def update_application(
        self,
        db: AsyncSession,
        application_id: UUID,
        fields: Mapping[str, Any],
    ) -> MessageResponse:
        """
        Apply an arbitrary field set.

        Succeeds only when a document actually changed; an unknown id or an
        update that leaves every value as-is is reported as not found.
        """
        result = await self.update_one(db, application_id, fields)
        if result.modified_count != 1:
            raise NotFoundError(
                resource=self.resource,
                message="Applied scholarship not found",
                context={"application_id": str(application_id), "matched": result.matched_count},
            )
        return MessageResponse(message="Applied scholarship updated successfully")


application_service = ApplicationService()
