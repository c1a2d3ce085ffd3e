"""
Scholarship Portal Backend — Review Model
==========================================

What:  ORM model for the `reviews` collection.

A review references its author by `email` and its scholarship by
`scholarship_id`. Neither reference is a foreign key; the scholarship id is
stored verbatim as the client sent it.
"""

from typing import Optional

from sqlalchemy import Float, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from scholarship_portal.database import Base
from scholarship_portal.models.document import DocumentMixin


class Review(DocumentMixin, Base):
    __tablename__ = "reviews"

    email: Mapped[Optional[str]] = mapped_column(String(320))
    scholarship_id: Mapped[Optional[str]] = mapped_column(String(64))
    rating: Mapped[Optional[float]] = mapped_column(Float)
    comment: Mapped[Optional[str]] = mapped_column(Text)

    __table_args__ = (
        Index("idx_reviews_email", "email"),
        Index("idx_reviews_scholarship_id", "scholarship_id"),
    )

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, email='{self.email}', scholarship_id='{self.scholarship_id}')>"
