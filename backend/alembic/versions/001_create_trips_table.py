"""Create trips table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `trips` table, one row per (user_id, trip_id).
How:   Composite primary key; JSON columns for the photo key list and the
       optional map pins; CHECK constraint on visibility.

Rollback: downgrade() drops the table (all trip rows are lost; photo objects
in the bucket are unaffected).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the trips table with its constraints and the public-feed index."""
    op.create_table(
        "trips",
        sa.Column(
            "user_id",
            sa.String(128),
            nullable=False,
            comment="Owner id issued by the identity provider",
        ),
        sa.Column(
            "trip_id",
            sa.String(128),
            nullable=False,
            comment="Client-generated trip id, unique per owner",
        ),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "image_urls",
            sa.JSON(),
            nullable=False,
            server_default=sa.text("'[]'"),
            comment="Ordered object keys; first element is the cover photo",
        ),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column(
            "visibility",
            sa.String(16),
            nullable=False,
            server_default=sa.text("'public'"),
            comment="public | private",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When the trip was created (UTC)",
        ),
        sa.Column(
            "locations",
            sa.JSON(),
            nullable=True,
            comment="Optional map pins: [{id, lat, lng, label}]",
        ),
        sa.PrimaryKeyConstraint("user_id", "trip_id"),
        sa.CheckConstraint(
            "visibility IN ('public', 'private')",
            name="ck_trips_visibility",
        ),
    )

    # Serves GET /public-trips: WHERE visibility = 'public' ORDER BY created_at DESC
    op.create_index(
        "idx_trips_visibility_created_at",
        "trips",
        ["visibility", sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_trips_visibility_created_at", table_name="trips")
    op.drop_table("trips")
