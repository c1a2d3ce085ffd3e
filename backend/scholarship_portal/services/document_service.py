"""
Scholarship Portal Backend — Document Service (Collection Operations)
======================================================================

What:  Generic find / insert / update / delete over one collection table.
How:   Each collection service subclasses DocumentService with its model.
       Every operation is a single statement against a single table, and
       results mirror document-store acknowledgments (insertedId,
       matchedCount, modifiedCount, deletedCount).
Who:   ScholarshipService, UserService, ReviewService, ApplicationService.

Error Handling Strategy:
    - NaN or ±Infinity in a document → ValidationError (400)
    - IntegrityError on write   → ConflictError (409)
    - Any other SQLAlchemyError → DatabaseError (500, details logged)
    - Our own exceptions pass through unchanged

Writes flush inside the service so constraint violations surface here,
not later in the session dependency's commit.
"""

import logging
import math
from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, List, Mapping, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from scholarship_portal.exceptions import ConflictError, DatabaseError, NotFoundError, ValidationError
from scholarship_portal.models.document import DocumentMixin
from scholarship_portal.schemas.common import DeleteResult, InsertResult, UpdateResult

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=DocumentMixin)


def _has_non_finite(value: Any) -> bool:
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(_has_non_finite(v) for v in value.values())
    if isinstance(value, (list, tuple)):
        return any(_has_non_finite(v) for v in value)
    return False


def require_finite(fields: Mapping[str, Any]) -> None:
    """Raise ValidationError if NaN or ±Infinity appears anywhere in `fields`."""
    for key, value in fields.items():
        if _has_non_finite(value):
            raise ValidationError(message="Numbers must be finite.", field=key)


class DocumentService(Generic[ModelT]):
    """
    Stateless collection operations; the session is passed on every call.

    Subclasses set:
        model:     the mapped DocumentMixin class
        resource:  human-readable name used in log lines and 404 messages
    """

    model: Type[ModelT]
    resource: str = "document"

    @contextmanager
    def _translate_errors(self, operation: str, **context: Any) -> Iterator[None]:
        try:
            yield
        except IntegrityError as e:
            logger.warning("Conflict during %s %s: %s", self.resource, operation, str(e.orig))
            raise ConflictError(
                message=f"The {self.resource} conflicts with an existing document",
                context={"operation": operation, **context},
            )
        except SQLAlchemyError as e:
            logger.error(
                "Database error during %s %s: %s", self.resource, operation, str(e), exc_info=True
            )
            raise DatabaseError(
                message=f"Could not {operation} the {self.resource}. Please try again.",
                context={"operation": operation, "error_type": type(e).__name__, **context},
            )

    # ── Reads ─────────────────────────────────────────────────────────────

    async def find(self, db: AsyncSession, *criteria: Any, order_by: Any = None) -> List[Dict[str, Any]]:
        """
        Documents matching every criterion, in insertion order unless
        `order_by` is given.
        """
        query = select(self.model).where(*criteria)
        if order_by is None:
            order_by = (self.model.created_at.asc(),)
        query = query.order_by(*order_by)

        with self._translate_errors("list"):
            result = await db.execute(query)
            rows = result.scalars().all()
        return [row.to_document() for row in rows]

    async def get(self, db: AsyncSession, document_id: UUID) -> Optional[ModelT]:
        """The row with `document_id`, or None."""
        with self._translate_errors("fetch", document_id=str(document_id)):
            return await db.get(self.model, document_id)

    async def find_one(self, db: AsyncSession, document_id: UUID) -> Optional[Dict[str, Any]]:
        row = await self.get(db, document_id)
        return row.to_document() if row is not None else None

    async def get_or_404(self, db: AsyncSession, document_id: UUID) -> ModelT:
        row = await self.get(db, document_id)
        if row is None:
            raise NotFoundError(resource=self.resource, resource_id=str(document_id))
        return row

    # ── Writes ────────────────────────────────────────────────────────────

    async def insert_one(self, db: AsyncSession, fields: Mapping[str, Any]) -> InsertResult:
        """Insert a new document built from wire-keyed fields."""
        require_finite(fields)
        row = self.model()
        row.apply_fields(fields)
        with self._translate_errors("create"):
            db.add(row)
            await db.flush()
        logger.info("Inserted %s %s", self.resource, row.id)
        return InsertResult(inserted_id=str(row.id))

    async def update_one(
        self,
        db: AsyncSession,
        document_id: UUID,
        fields: Mapping[str, Any],
        upsert: bool = False,
    ) -> UpdateResult:
        """
        Apply `fields` to one document ($set semantics).

        Without upsert, an unknown id matches nothing and nothing is written.
        With upsert, an unknown id creates a new document carrying that id.
        modifiedCount is 0 when every value was already equal.
        """
        require_finite(fields)
        row = await self.get(db, document_id)

        if row is None:
            if not upsert:
                return UpdateResult(matched_count=0, modified_count=0)
            row = self.model(id=document_id)
            row.apply_fields(fields)
            with self._translate_errors("create", document_id=str(document_id)):
                db.add(row)
                await db.flush()
            logger.info("Upserted %s %s", self.resource, document_id)
            return UpdateResult(
                matched_count=0,
                modified_count=0,
                upserted_count=1,
                upserted_id=str(document_id),
            )

        modified = row.apply_fields(fields)
        if modified:
            with self._translate_errors("update", document_id=str(document_id)):
                await db.flush()
            logger.info("Updated %s %s (%s)", self.resource, document_id, ", ".join(fields))
        return UpdateResult(matched_count=1, modified_count=int(modified))

    async def delete_one(self, db: AsyncSession, document_id: UUID) -> DeleteResult:
        """Delete one document; an unknown id is a NotFoundError."""
        with self._translate_errors("delete", document_id=str(document_id)):
            result = await db.execute(delete(self.model).where(self.model.id == document_id))

        if result.rowcount != 1:
            raise NotFoundError(resource=self.resource, resource_id=str(document_id))

        logger.info("Deleted %s %s", self.resource, document_id)
        return DeleteResult(deleted_count=1)
