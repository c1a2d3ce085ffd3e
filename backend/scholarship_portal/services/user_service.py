"""
Scholarship Portal Backend — User Service
==========================================

What:  Signup with duplicate detection, listing, role management, deletion.
Who:   Called by the user route handlers.

Signup flow (POST /users):
    1. Look up an existing user by email
    2. Found → return {"message": "User already exists", "insertedId": null}
    3. Not found → insert

    Steps 1 and 3 are not atomic. Two concurrent signups with the same email
    can both pass step 1; the unique index on users.email rejects the second
    insert, which surfaces as ConflictError (409).
"""

import logging
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_portal.exceptions import NotFoundError
from scholarship_portal.models.user import User
from scholarship_portal.schemas.common import (
    DeleteResult,
    DuplicateInsertResult,
    InsertResult,
    document_fields,
)
from scholarship_portal.schemas.user import RoleResponse, UserCreate
from scholarship_portal.services.document_service import DocumentService

logger = logging.getLogger(__name__)

USER_EXISTS_MESSAGE = "User already exists"


class UserService(DocumentService[User]):
    model = User
    resource = "user"

    async def find_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        with self._translate_errors("fetch", email=email):
            result = await db.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()

    async def create_user(
        self, db: AsyncSession, payload: UserCreate
    ) -> Union[InsertResult, DuplicateInsertResult]:
        existing = await self.find_by_email(db, payload.email)
        if existing is not None:
            logger.info("Signup skipped, user %s already exists", existing.id)
            return DuplicateInsertResult(message=USER_EXISTS_MESSAGE)
        return await self.insert_one(db, document_fields(payload))

    async def list_users(self, db: AsyncSession) -> List[Dict[str, Any]]:
        return await self.find(db)

    async def update_role(self, db: AsyncSession, user_id: UUID, role: str) -> Dict[str, Any]:
        """Set the role and return the updated user document."""
        user = await self.get_or_404(db, user_id)
        if user.apply_fields({"role": role}):
            with self._translate_errors("update", document_id=str(user_id)):
                await db.flush()
            logger.info("User %s role set to %r", user_id, role)
        return user.to_document()

    async def delete_user(self, db: AsyncSession, user_id: UUID) -> DeleteResult:
        return await self.delete_one(db, user_id)

    async def get_role(self, db: AsyncSession, email: str) -> RoleResponse:
        user = await self.find_by_email(db, email)
        if user is None:
            raise NotFoundError(resource="user", message="User not found", context={"email": email})
        return RoleResponse(role=user.to_document().get("role"))


user_service = UserService()
