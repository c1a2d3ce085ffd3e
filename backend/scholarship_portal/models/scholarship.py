"""
Scholarship Portal Backend — Scholarship Model
===============================================

What:  ORM model for the `scholarships` collection.
Who:   Used by ScholarshipService for CRUD and by Alembic for schema management.

Query Patterns:
    - Top scholarships: ORDER BY application_fees ASC, post_date DESC
      → idx_scholarships_fees_post_date
      A fee or post date of another JSON type is NULL here and sorts with
      the missing ones; the document still carries the value as sent.
    - Single scholarship: WHERE id = :uuid → primary key
"""

from typing import Any, Dict, Optional

from sqlalchemy import Float, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from scholarship_portal.database import Base
from scholarship_portal.models.document import DocumentJSON, DocumentMixin


class Scholarship(DocumentMixin, Base):
    """A scholarship offered by a university."""

    __tablename__ = "scholarships"

    university_name: Mapped[Optional[str]] = mapped_column(String(255))
    university_logo: Mapped[Optional[str]] = mapped_column(Text)
    # Nested object, e.g. {"country": "Canada", "city": "Toronto"}
    university_location: Mapped[Optional[Dict[str, Any]]] = mapped_column(DocumentJSON)

    scholarship_category: Mapped[Optional[str]] = mapped_column(String(100))
    scholarship_description: Mapped[Optional[str]] = mapped_column(Text)
    degree_name: Mapped[Optional[str]] = mapped_column(String(100))
    subject_name: Mapped[Optional[str]] = mapped_column(String(255))

    # Dates are client-supplied strings (ISO 8601 sorts correctly as text)
    application_deadline: Mapped[Optional[str]] = mapped_column(String(64))
    post_date: Mapped[Optional[str]] = mapped_column(String(64))

    stipend: Mapped[Optional[float]] = mapped_column(Float)
    service_charge: Mapped[Optional[float]] = mapped_column(Float)
    application_fees: Mapped[Optional[float]] = mapped_column(Float)

    __table_args__ = (
        Index("idx_scholarships_fees_post_date", "application_fees", "post_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Scholarship(id={self.id}, university='{self.university_name}', "
            f"fees={self.application_fees})>"
        )
