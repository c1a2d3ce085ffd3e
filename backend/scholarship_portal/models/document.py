"""
Scholarship Portal Backend — Document Mapping Mixin
====================================================

What:  Shared columns and document conversion for every collection table.
How:   The client document is stored verbatim in the `body` JSON column, so
       any shape and any value type round-trips unchanged. Each collection
       model also declares typed columns for the fields it filters or sorts
       on. Those columns are copies of the body values, set only when the
       value has the column's type (a string fee such as "Full tuition"
       leaves `application_fees` NULL but stays in the document).

Wire format:
    {"_id": "<uuid>", <body fields in insertion order>}

    A model can expose a column under a different wire key through
    `wire_aliases` (attribute → wire key).
"""

import uuid
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, List, Mapping, Tuple

from sqlalchemy import JSON, DateTime, Float, String, Uuid
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeEngine

# JSON on every backend, JSONB on PostgreSQL
DocumentJSON = JSON().with_variant(JSONB(), "postgresql")

# Columns managed by the server, never set from a client document
RESERVED_ATTRIBUTES = frozenset({"id", "body", "created_at"})
IDENTIFIER_KEYS = frozenset({"_id", "id"})

_MISSING = object()


def column_accepts(column_type: TypeEngine, value: Any) -> bool:
    """Whether `value` can be bound to a column of `column_type` as-is."""
    if value is None:
        return True
    if isinstance(column_type, String):
        return isinstance(value, str) and (column_type.length is None or len(value) <= column_type.length)
    if isinstance(column_type, Float):
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return isinstance(column_type, JSON)


class DocumentMixin:
    """
    Mixin giving a mapped class document semantics.

    Provides:
        - id:          server-generated UUID, exposed as `_id`
        - body:        the document as the client wrote it
        - created_at:  insertion timestamp (list ordering only, not exposed)
        - to_document() / apply_fields() for wire conversion
    """

    wire_aliases: ClassVar[Dict[str, str]] = {}

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    body: Mapped[Dict[str, Any]] = mapped_column(
        DocumentJSON,
        nullable=False,
        default=dict,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @classmethod
    def indexed_fields(cls) -> Dict[str, Tuple[str, TypeEngine]]:
        """Wire key → (attribute name, column type) for every typed column."""
        return {
            cls.wire_aliases.get(attr.key, attr.key): (attr.key, attr.columns[0].type)
            for attr in sa_inspect(cls).column_attrs
            if attr.key not in RESERVED_ATTRIBUTES
        }

    def to_document(self) -> Dict[str, Any]:
        """Serialize the row into its wire document."""
        document: Dict[str, Any] = {"_id": str(self.id)}
        document.update(self.body or {})
        return document

    def apply_fields(self, fields: Mapping[str, Any]) -> bool:
        """
        Set document fields from a wire-keyed mapping ($set semantics).

        Dotted keys ("university_location.country") set a value inside a
        nested object. Identifier keys are ignored. Returns True if any
        value changed.
        """
        body = dict(self.body or {})
        changed = False

        for key, value in fields.items():
            if key in IDENTIFIER_KEYS:
                continue
            key, _, nested_path = key.partition(".")
            if nested_path:
                value = _with_path(body.get(key), nested_path.split("."), value)
            if body.get(key, _MISSING) != value:
                body[key] = value
                changed = True

        if changed:
            # Reassign so SQLAlchemy detects the JSON change
            self.body = body
            self._sync_columns()
        return changed

    def _sync_columns(self) -> None:
        body = self.body or {}
        for wire_key, (attribute, column_type) in self.indexed_fields().items():
            value = body.get(wire_key)
            setattr(self, attribute, value if column_accepts(column_type, value) else None)


def _with_path(container: Any, path: List[str], value: Any) -> Dict[str, Any]:
    """Copy of `container` with `value` stored at the nested `path`."""
    updated = dict(container) if isinstance(container, dict) else {}
    head, rest = path[0], path[1:]
    updated[head] = _with_path(updated.get(head), rest, value) if rest else value
    return updated
