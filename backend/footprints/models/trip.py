"""
Footprints Backend — Trip SQLAlchemy Model
===========================================

What:  ORM model representing the `trips` table.
How:   Inherits from the declarative Base; Alembic reads this for migrations.
Who:   Used by TripService for every trip operation.

Table Design:
    - (user_id, trip_id) composite primary key: one row per trip per owner.
      trip_id is generated by the client, so the pair is the only identity.
    - image_urls: ordered JSON list of object keys (legacy rows may hold full
      URLs). The first element is the trip's cover photo.
    - locations: optional JSON list of map pins {id, lat, lng, label}.
    - visibility: 'public' | 'private', enforced by a CHECK constraint.
    - created_at: UTC with timezone; defaults to now when the client omits it.

Index on (visibility, created_at DESC):
    Serves GET /public-trips, the only query that is not a key lookup.
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, CheckConstraint, Date, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from footprints.database import Base

VISIBILITY_PUBLIC = "public"
VISIBILITY_PRIVATE = "private"
VISIBILITY_VALUES = (VISIBILITY_PUBLIC, VISIBILITY_PRIVATE)

# Column widths; request schemas enforce the same limits so oversize input is a 400
ID_MAX_LENGTH = 128
LABEL_MAX_LENGTH = 255


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Trip(Base):
    """
    One journal entry owned by a user.

    Lifecycle:
        1. Written by CreateTrip (a second write with the same key overwrites)
        2. Visibility changed by UpdateTrip
        3. Removed by DeleteTrip (hard delete; photo objects stay in the bucket)

    Query Patterns:
        - Owner's trips:  WHERE user_id = :uid            → primary key prefix
        - Single trip:    WHERE user_id = :uid AND trip_id = :tid
        - Public trips:   WHERE visibility = 'public'     → idx_trips_visibility_created_at
    """

    __tablename__ = "trips"

    # ── Key ───────────────────────────────────────────────────────────────
    user_id: Mapped[str] = mapped_column(
        String(ID_MAX_LENGTH),
        primary_key=True,
        comment="Owner id issued by the identity provider",
    )
    trip_id: Mapped[str] = mapped_column(
        String(ID_MAX_LENGTH),
        primary_key=True,
        comment="Client-generated trip id, unique per owner",
    )

    # ── Descriptive Fields ────────────────────────────────────────────────
    title: Mapped[Optional[str]] = mapped_column(String(LABEL_MAX_LENGTH), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(LABEL_MAX_LENGTH), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ── Photos ────────────────────────────────────────────────────────────
    # Format: ["trips/u1/t1/beach.jpg", ...]; never the bytes themselves
    image_urls: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered object keys; first element is the cover photo",
    )

    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    visibility: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=VISIBILITY_PUBLIC,
        comment="public | private",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When the trip was created (UTC)",
    )

    # ── Map Pins ──────────────────────────────────────────────────────────
    locations: Mapped[Optional[List[Dict[str, Any]]]] = mapped_column(
        JSON,
        nullable=True,
        default=None,
        comment="Optional map pins: [{id, lat, lng, label}]",
    )

    __table_args__ = (
        CheckConstraint(
            "visibility IN ('public', 'private')",
            name="ck_trips_visibility",
        ),
        Index("idx_trips_visibility_created_at", "visibility", created_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Trip(user_id='{self.user_id}', trip_id='{self.trip_id}', "
            f"visibility='{self.visibility}')>"
        )
