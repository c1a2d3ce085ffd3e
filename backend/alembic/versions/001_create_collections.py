"""Create collection tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the four collection tables (scholarships, users, reviews,
       applied_scholarships) with their lookup indexes.
How:   Every table shares the document columns: UUID primary key, `body`
       JSONB holding the client document verbatim, and `created_at` for
       insertion ordering.

Rollback: downgrade() drops all four tables (destructive).
"""

from typing import List, Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _document_columns() -> List[sa.Column]:
    """Columns every collection table carries."""
    return [
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
            comment="Document identifier, exposed as _id",
        ),
        sa.Column(
            "body",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
            comment="Client document, stored verbatim",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="Insertion time (UTC), used for list ordering",
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "scholarships",
        *_document_columns(),
        sa.Column("university_name", sa.String(255), nullable=True),
        sa.Column("university_logo", sa.Text(), nullable=True),
        sa.Column("university_location", postgresql.JSONB(), nullable=True),
        sa.Column("scholarship_category", sa.String(100), nullable=True),
        sa.Column("scholarship_description", sa.Text(), nullable=True),
        sa.Column("degree_name", sa.String(100), nullable=True),
        sa.Column("subject_name", sa.String(255), nullable=True),
        sa.Column("application_deadline", sa.String(64), nullable=True),
        sa.Column("post_date", sa.String(64), nullable=True),
        sa.Column("stipend", sa.Float(), nullable=True),
        sa.Column("service_charge", sa.Float(), nullable=True),
        sa.Column("application_fees", sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    # Serves GET /top-scholarships ordering
    op.create_index(
        "idx_scholarships_fees_post_date",
        "scholarships",
        ["application_fees", "post_date"],
    )

    op.create_table(
        "users",
        *_document_columns(),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("photo", sa.Text(), nullable=True),
        sa.Column("role", sa.String(50), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    # Turns a concurrent duplicate signup into an IntegrityError
    op.create_index("uq_users_email", "users", ["email"], unique=True)

    op.create_table(
        "reviews",
        *_document_columns(),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("scholarship_id", sa.String(64), nullable=True),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_reviews_email", "reviews", ["email"])
    op.create_index("idx_reviews_scholarship_id", "reviews", ["scholarship_id"])

    op.create_table(
        "applied_scholarships",
        *_document_columns(),
        sa.Column("userEmail", sa.String(320), nullable=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("scholarship_id", sa.String(64), nullable=True),
        sa.Column("applicationStatus", sa.String(50), nullable=True),
        sa.Column("feedback", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_applied_scholarships_user_email", "applied_scholarships", ["userEmail"])
    op.create_index("idx_applied_scholarships_email", "applied_scholarships", ["email"])


def downgrade() -> None:
    """Drop every collection table. All portal data is lost."""
    op.drop_index("idx_applied_scholarships_email", table_name="applied_scholarships")
    op.drop_index("idx_applied_scholarships_user_email", table_name="applied_scholarships")
    op.drop_table("applied_scholarships")

    op.drop_index("idx_reviews_scholarship_id", table_name="reviews")
    op.drop_index("idx_reviews_email", table_name="reviews")
    op.drop_table("reviews")

    op.drop_index("uq_users_email", table_name="users")
    op.drop_table("users")

    op.drop_index("idx_scholarships_fees_post_date", table_name="scholarships")
    op.drop_table("scholarships")
