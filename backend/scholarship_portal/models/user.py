"""
Scholarship Portal Backend — User Model
========================================

What:  ORM model for the `users` collection.

Uniqueness:
    The application checks for an existing email before inserting, but that
    read-then-write is not atomic. The unique index `uq_users_email` is the
    actual guarantee: a concurrent duplicate fails with an IntegrityError,
    which UserService reports as a ConflictError (409).

Role:
    Free text supplied by the client (e.g. "user", "moderator", "admin").
    No enumeration is enforced.
"""

from typing import Optional

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from scholarship_portal.database import Base
from scholarship_portal.models.document import DocumentMixin


class User(DocumentMixin, Base):
    """A portal account, keyed naturally by email."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(320), nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(255))
    photo: Mapped[Optional[str]] = mapped_column(Text)
    role: Mapped[Optional[str]] = mapped_column(String(50))

    __table_args__ = (
        Index("uq_users_email", "email", unique=True),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
