"""
Scholarship Portal Backend — Application Service Tests
======================================================

What we test:
    ✅ userEmail and email filters read different fields
    ✅ Cancel sets applicationStatus to "rejected"
    ✅ Feedback and generic updates, including the not-modified case
"""

from uuid import UUID, uuid4

import pytest

from scholarship_portal.exceptions import NotFoundError, ValidationError
from scholarship_portal.schemas.application import ApplicationCreate
from scholarship_portal.services.application_service import ApplicationService


class TestApplicationQueries:

    def setup_method(self):
        self.service = ApplicationService()

    @pytest.mark.asyncio
    async def test_email_filters_are_independent(self, db_session):
        await self.service.create_application(
            db_session,
            ApplicationCreate.model_validate({"userEmail": "student@example.com", "scholarship_id": "s1"}),
        )
        await self.service.create_application(
            db_session,
            ApplicationCreate.model_validate({"email": "student@example.com", "scholarship_id": "s2"}),
        )

        by_user_email = await self.service.by_user_email(db_session, "student@example.com")
        by_email = await self.service.by_email(db_session, "student@example.com")

        assert [a["scholarship_id"] for a in by_user_email] == ["s1"]
        assert [a["scholarship_id"] for a in by_email] == ["s2"]
        assert by_user_email[0]["userEmail"] == "student@example.com"

    @pytest.mark.asyncio
    async def test_list_in_insertion_order(self, db_session):
        for name in ("first", "second", "third"):
            await self.service.create_application(
                db_session, ApplicationCreate.model_validate({"scholarship_id": name, "degree": "BSc"})
            )

        applications = await self.service.list_applications(db_session)

        assert [a["scholarship_id"] for a in applications] == ["first", "second", "third"]
        assert applications[0]["degree"] == "BSc"


class TestApplicationUpdates:

    def setup_method(self):
        self.service = ApplicationService()

    async def _create(self, db, **fields) -> UUID:
        result = await self.service.create_application(db, ApplicationCreate.model_validate(fields))
        return UUID(result.inserted_id)

    @pytest.mark.asyncio
    async def test_cancel_rejects(self, db_session):
        application_id = await self._create(db_session, applicationStatus="pending")

        result = await self.service.cancel(db_session, application_id)
        document = await self.service.find_one(db_session, application_id)

        assert (result.matched_count, result.modified_count) == (1, 1)
        assert document["applicationStatus"] == "rejected"

    @pytest.mark.asyncio
    async def test_cancel_twice_modifies_nothing(self, db_session):
        application_id = await self._create(db_session, applicationStatus="pending")
        await self.service.cancel(db_session, application_id)

        result = await self.service.cancel(db_session, application_id)

        assert (result.matched_count, result.modified_count) == (1, 0)

    @pytest.mark.asyncio
    async def test_cancel_unknown_matches_nothing(self, db_session):
        result = await self.service.cancel(db_session, uuid4())

        assert (result.matched_count, result.modified_count) == (0, 0)

    @pytest.mark.asyncio
    async def test_set_feedback(self, db_session):
        application_id = await self._create(db_session, userEmail="s@example.com")

        result = await self.service.set_feedback(db_session, application_id, "Missing transcript")
        document = await self.service.find_one(db_session, application_id)

        assert result.modified_count == 1
        assert document["feedback"] == "Missing transcript"

    @pytest.mark.asyncio
    async def test_generic_update(self, db_session):
        application_id = await self._create(db_session, applicationStatus="pending")

        response = await self.service.update_application(
            db_session,
            application_id,
            {"_id": "ignored", "applicationStatus": "processing", "phone": "555-0100"},
        )
        document = await self.service.find_one(db_session, application_id)

        assert response.message == "Applied scholarship updated successfully"
        assert document["_id"] == str(application_id)
        assert document["applicationStatus"] == "processing"
        assert document["phone"] == "555-0100"

    @pytest.mark.asyncio
    async def test_generic_update_without_change_is_not_found(self, db_session):
        application_id = await self._create(db_session, applicationStatus="pending")

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.update_application(db_session, application_id, {"applicationStatus": "pending"})
        assert exc_info.value.message == "Applied scholarship not found"

    @pytest.mark.asyncio
    async def test_structured_value_for_text_field(self, db_session):
        application_id = await self._create(db_session, email="s@example.com", feedback="none yet")

        await self.service.update_application(
            db_session, application_id, {"feedback": {"text": "good", "score": 4}}
        )
        document = await self.service.find_one(db_session, application_id)

        assert document["feedback"] == {"text": "good", "score": 4}

    @pytest.mark.asyncio
    async def test_nested_path_replaces_scalar(self, db_session):
        application_id = await self._create(db_session, email="s@example.com")

        await self.service.update_application(db_session, application_id, {"email.primary": "p@example.com"})
        document = await self.service.find_one(db_session, application_id)

        assert document["email"] == {"primary": "p@example.com"}
        assert await self.service.by_email(db_session, "s@example.com") == []

    @pytest.mark.asyncio
    async def test_nested_nan_is_rejected(self, db_session):
        application_id = await self._create(db_session, email="s@example.com")

        with pytest.raises(ValidationError) as exc_info:
            await self.service.update_application(db_session, application_id, {"scores": {"gpa": [3.5, float("nan")]}})
        document = await self.service.find_one(db_session, application_id)

        assert exc_info.value.field == "scores"
        assert "scores" not in document

    @pytest.mark.asyncio
    async def test_delete_unknown_is_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.delete_application(db_session, uuid4())
