"""
Scholarship Portal Backend — Review Service Tests
==================================================

What we test:
    ✅ Reviews by email and by scholarship (empty is NotFoundError)
    ✅ Review fields are stored as sent
"""

import pytest

from scholarship_portal.exceptions import NotFoundError
from scholarship_portal.schemas.review import ReviewCreate
from scholarship_portal.services.review_service import ReviewService


class TestReviews:

    def setup_method(self):
        self.service = ReviewService()

    @pytest.mark.asyncio
    async def test_filters(self, db_session):
        await self.service.create_review(
            db_session, ReviewCreate(email="a@example.com", scholarship_id="s1", rating=5)
        )
        await self.service.create_review(
            db_session, ReviewCreate(email="b@example.com", scholarship_id="s1", rating=3)
        )
        await self.service.create_review(
            db_session, ReviewCreate(email="a@example.com", scholarship_id="s2", rating=4)
        )

        assert len(await self.service.list_reviews(db_session)) == 3
        assert [r["scholarship_id"] for r in await self.service.reviews_by_email(db_session, "a@example.com")] == [
            "s1",
            "s2",
        ]
        assert [r["email"] for r in await self.service.reviews_by_scholarship(db_session, "s1")] == [
            "a@example.com",
            "b@example.com",
        ]

    @pytest.mark.asyncio
    async def test_no_reviews_for_scholarship(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.reviews_by_scholarship(db_session, "unreviewed")
        assert exc_info.value.message == "No reviews found for this scholarship ID"

    @pytest.mark.asyncio
    async def test_unknown_email_is_empty_list(self, db_session):
        assert await self.service.reviews_by_email(db_session, "nobody@example.com") == []

    @pytest.mark.asyncio
    async def test_rating_kept_as_sent(self, db_session):
        await self.service.create_review(
            db_session, ReviewCreate(email="a@example.com", scholarship_id="s1", rating="4/5", comment=["clear", "fair"])
        )

        review = (await self.service.reviews_by_scholarship(db_session, "s1"))[0]

        assert review["rating"] == "4/5"
        assert review["comment"] == ["clear", "fair"]
