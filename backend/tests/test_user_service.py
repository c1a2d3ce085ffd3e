"""
Scholarship Portal Backend — User Service Tests
================================================

What we test:
    ✅ Signup inserts once, then answers with the "User already exists" marker
    ✅ A signup race hitting the unique email index becomes ConflictError
    ✅ Role change returns the updated document; unknown id is NotFoundError
    ✅ Role lookup by email
"""

from unittest.mock import AsyncMock, patch
from uuid import UUID, uuid4

import pytest

from scholarship_portal.exceptions import ConflictError, NotFoundError
from scholarship_portal.schemas.common import DuplicateInsertResult, InsertResult
from scholarship_portal.schemas.user import UserCreate
from scholarship_portal.services.user_service import USER_EXISTS_MESSAGE, UserService


class TestUserSignup:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_first_signup_inserts(self, db_session):
        result = await self.service.create_user(
            db_session, UserCreate(email="ada@example.com", name="Ada", role="user")
        )

        assert isinstance(result, InsertResult)
        users = await self.service.list_users(db_session)
        assert [u["_id"] for u in users] == [result.inserted_id]
        assert users[0]["email"] == "ada@example.com"

    @pytest.mark.asyncio
    async def test_duplicate_email_returns_marker(self, db_session):
        await self.service.create_user(db_session, UserCreate(email="ada@example.com"))

        result = await self.service.create_user(db_session, UserCreate(email="ada@example.com", name="Other"))

        assert isinstance(result, DuplicateInsertResult)
        assert result.message == USER_EXISTS_MESSAGE
        assert result.model_dump(by_alias=True) == {"message": "User already exists", "insertedId": None}
        assert len(await self.service.list_users(db_session)) == 1

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_is_conflict(self, db_session):
        await self.service.create_user(db_session, UserCreate(email="ada@example.com"))

        # Both requests passed the existence check before either inserted
        with patch.object(self.service, "find_by_email", AsyncMock(return_value=None)):
            with pytest.raises(ConflictError):
                await self.service.create_user(db_session, UserCreate(email="ada@example.com"))

    @pytest.mark.asyncio
    async def test_extra_profile_fields_are_kept(self, db_session):
        result = await self.service.create_user(
            db_session, UserCreate(email="lin@example.com", country="Peru")
        )

        user = await self.service.find_one(db_session, UUID(result.inserted_id))
        assert user["country"] == "Peru"


class TestUserRoles:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_update_role_returns_document(self, db_session):
        created = await self.service.create_user(db_session, UserCreate(email="mod@example.com", role="user"))

        document = await self.service.update_role(db_session, UUID(created.inserted_id), "moderator")

        assert document["_id"] == created.inserted_id
        assert document["role"] == "moderator"
        role = await self.service.get_role(db_session, "mod@example.com")
        assert role.role == "moderator"

    @pytest.mark.asyncio
    async def test_role_of_any_shape_is_kept(self, db_session):
        created = await self.service.create_user(
            db_session, UserCreate(email="team@example.com", role=["reviewer", "moderator"])
        )
        long_role = "scholarship committee member " * 3

        assert (await self.service.get_role(db_session, "team@example.com")).role == ["reviewer", "moderator"]
        document = await self.service.update_role(db_session, UUID(created.inserted_id), long_role)

        assert document["role"] == long_role
        assert (await self.service.get_role(db_session, "team@example.com")).role == long_role

    @pytest.mark.asyncio
    async def test_update_role_unknown_user(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.update_role(db_session, uuid4(), "admin")

    @pytest.mark.asyncio
    async def test_get_role_unknown_email(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_role(db_session, "ghost@example.com")
        assert exc_info.value.message == "User not found"

    @pytest.mark.asyncio
    async def test_delete_user(self, db_session):
        created = await self.service.create_user(db_session, UserCreate(email="bye@example.com"))

        result = await self.service.delete_user(db_session, UUID(created.inserted_id))

        assert result.deleted_count == 1
        assert await self.service.find_by_email(db_session, "bye@example.com") is None
