"""
Scholarship Portal Backend — Scholarship Service Tests
=======================================================

What:  Tests for listing order, lookup, upsert and deletion of scholarships.
How:   Runs against the in-memory SQLite database from conftest.
"""

from uuid import UUID, uuid4

import pytest

from scholarship_portal.exceptions import NotFoundError
from scholarship_portal.schemas.scholarship import ScholarshipCreate, ScholarshipUpdate
from scholarship_portal.services.scholarship_service import ScholarshipService


class TestScholarshipListing:

    def setup_method(self):
        self.service = ScholarshipService()

    async def _create(self, db, **fields):
        result = await self.service.create_scholarship(db, ScholarshipCreate(**fields))
        return UUID(result.inserted_id)

    @pytest.mark.asyncio
    async def test_orders_by_fees_then_newest_post(self, db_session):
        expensive = await self._create(db_session, university_name="A", application_fees=80, post_date="2024-01-01")
        cheap_old = await self._create(db_session, university_name="B", application_fees=20, post_date="2024-01-01")
        cheap_new = await self._create(db_session, university_name="C", application_fees=20, post_date="2024-03-01")
        no_fees = await self._create(db_session, university_name="D")

        documents = await self.service.list_top(db_session)

        assert [d["_id"] for d in documents] == [str(i) for i in (no_fees, cheap_new, cheap_old, expensive)]

    @pytest.mark.asyncio
    async def test_documents_keep_extra_fields(self, db_session):
        scholarship_id = await self._create(
            db_session,
            university_name="Kyoto University",
            university_location={"country": "Japan", "city": "Kyoto"},
            rank=12,
        )

        document = await self.service.get_scholarship(db_session, scholarship_id)

        assert document["_id"] == str(scholarship_id)
        assert document["university_location"] == {"country": "Japan", "city": "Kyoto"}
        assert document["rank"] == 12
        # Unset typed fields are absent, not null
        assert "stipend" not in document

    @pytest.mark.asyncio
    async def test_values_of_any_type_round_trip(self, db_session):
        scholarship_id = await self._create(
            db_session,
            stipend="Full tuition",
            post_date=20240101,
            application_fees="15",
            service_charge=5,
            university_location="Remote",
        )

        document = await self.service.get_scholarship(db_session, scholarship_id)

        assert document["stipend"] == "Full tuition"
        assert document["post_date"] == 20240101
        assert document["application_fees"] == "15"
        assert document["service_charge"] == 5
        assert isinstance(document["service_charge"], int)
        assert document["university_location"] == "Remote"

    @pytest.mark.asyncio
    async def test_non_numeric_fees_sort_with_missing_fees(self, db_session):
        numeric = await self._create(db_session, application_fees=10)
        textual = await self._create(db_session, application_fees="ask the office")

        documents = await self.service.list_top(db_session)

        assert [d["_id"] for d in documents] == [str(textual), str(numeric)]

    @pytest.mark.asyncio
    async def test_unknown_id_returns_none(self, db_session):
        assert await self.service.get_scholarship(db_session, uuid4()) is None


class TestScholarshipUpdate:

    def setup_method(self):
        self.service = ScholarshipService()

    @pytest.mark.asyncio
    async def test_absent_named_fields_are_nulled(self, db_session):
        created = await self.service.create_scholarship(
            db_session,
            ScholarshipCreate(university_name="Old", stipend=500, application_fees=30, rank=7),
        )

        result = await self.service.update_scholarship(
            db_session, UUID(created.inserted_id), ScholarshipUpdate(university_name="New")
        )
        document = await self.service.get_scholarship(db_session, UUID(created.inserted_id))

        assert result.matched_count == 1
        assert result.modified_count == 1
        assert document["university_name"] == "New"
        assert document["stipend"] is None
        assert document["application_fees"] is None
        assert document["university_location"] == {"country": None}
        # Fields outside the named set are left alone
        assert document["rank"] == 7

    @pytest.mark.asyncio
    async def test_country_updates_nested_location(self, db_session):
        created = await self.service.create_scholarship(
            db_session,
            ScholarshipCreate(university_location={"country": "Canada", "city": "Toronto"}),
        )

        await self.service.update_scholarship(
            db_session, UUID(created.inserted_id), ScholarshipUpdate(country="Japan")
        )
        document = await self.service.get_scholarship(db_session, UUID(created.inserted_id))

        assert document["university_location"] == {"country": "Japan", "city": "Toronto"}
        assert "country" not in document

    @pytest.mark.asyncio
    async def test_ignores_fields_outside_named_set(self, db_session):
        created = await self.service.create_scholarship(db_session, ScholarshipCreate(university_name="X"))

        payload = ScholarshipUpdate.model_validate({"subject_name": "Physics", "rank": 3})
        await self.service.update_scholarship(db_session, UUID(created.inserted_id), payload)
        document = await self.service.get_scholarship(db_session, UUID(created.inserted_id))

        assert document["subject_name"] == "Physics"
        assert "rank" not in document

    @pytest.mark.asyncio
    async def test_unchanged_values_report_zero_modified(self, db_session):
        created = await self.service.create_scholarship(db_session, ScholarshipCreate(degree_name="Masters"))
        payload = ScholarshipUpdate(degree_name="Masters", country="Norway")
        await self.service.update_scholarship(db_session, UUID(created.inserted_id), payload)

        result = await self.service.update_scholarship(db_session, UUID(created.inserted_id), payload)

        assert result.matched_count == 1
        assert result.modified_count == 0

    @pytest.mark.asyncio
    async def test_unknown_id_is_upserted(self, db_session):
        new_id = uuid4()

        result = await self.service.update_scholarship(
            db_session, new_id, ScholarshipUpdate(university_name="Fresh", country="Chile")
        )
        document = await self.service.get_scholarship(db_session, new_id)

        assert result.matched_count == 0
        assert result.upserted_count == 1
        assert result.upserted_id == str(new_id)
        assert document["university_name"] == "Fresh"
        assert document["university_location"] == {"country": "Chile"}


class TestScholarshipDelete:

    def setup_method(self):
        self.service = ScholarshipService()

    @pytest.mark.asyncio
    async def test_delete_existing(self, db_session):
        created = await self.service.create_scholarship(db_session, ScholarshipCreate(university_name="X"))

        result = await self.service.delete_scholarship(db_session, UUID(created.inserted_id))

        assert result.deleted_count == 1
        assert await self.service.get_scholarship(db_session, UUID(created.inserted_id)) is None

    @pytest.mark.asyncio
    async def test_delete_unknown_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.delete_scholarship(db_session, uuid4())
