"""
Scholarship Portal Backend — Applied Scholarship Model
=======================================================

What:  ORM model for the `applied_scholarships` collection (applications).

Field naming:
    Applications arrive with camelCase keys. `userEmail` and `email` are both
    kept as separate fields because existing clients filter on each of them
    through different endpoints:
        GET /applications/{email}          → userEmail
        GET /applied-scholarships/{email}  → email

Status:
    `applicationStatus` is free text. The only transition the API performs
    itself is cancel → "rejected".
"""

from typing import ClassVar, Dict, Optional

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from scholarship_portal.database import Base
from scholarship_portal.models.document import DocumentMixin

STATUS_REJECTED = "rejected"


class AppliedScholarship(DocumentMixin, Base):
    """A user's application to a scholarship."""

    __tablename__ = "applied_scholarships"

    wire_aliases: ClassVar[Dict[str, str]] = {
        "user_email": "userEmail",
        "application_status": "applicationStatus",
    }

    user_email: Mapped[Optional[str]] = mapped_column("userEmail", String(320))
    email: Mapped[Optional[str]] = mapped_column(String(320))
    scholarship_id: Mapped[Optional[str]] = mapped_column(String(64))
    application_status: Mapped[Optional[str]] = mapped_column("applicationStatus", String(50))
    feedback: Mapped[Optional[str]] = mapped_column(Text)

    __table_args__ = (
        Index("idx_applied_scholarships_user_email", "userEmail"),
        Index("idx_applied_scholarships_email", "email"),
    )

    def __repr__(self) -> str:
        return (
            f"<AppliedScholarship(id={self.id}, userEmail='{self.user_email}', "
            f"status='{self.application_status}')>"
        )
