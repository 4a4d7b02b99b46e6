"""
Footprints Backend — Trip Service (Business Logic)
===================================================

What:  Create, list, read, change visibility of, and delete trips.
How:   One SQLAlchemy statement per operation against the `trips` table;
       photo keys are turned into signed read URLs through StorageService.
Who:   Called by the /Trips and /public-trips route handlers.
When:  For every trip request.

Photo resolution per endpoint:
    ┌──────────────────────┬───────────────────────────────────────────┐
    │ list_trips           │ cover photo only (ImageUrls[0])           │
    │ list_public_trips    │ cover photo only (ImageUrls[0])           │
    │ get_trip             │ every photo, in order                     │
    │ create / update      │ none; keys returned as stored             │
    └──────────────────────┴───────────────────────────────────────────┘

Resolution failures never fail the request: the affected trip (listing)
or photo (detail) keeps its stored value and a warning is logged.

TripService is stateless; the session and storage client are passed in
on every call.
"""

import asyncio
import logging
from typing import List, Optional

from sqlalchemy import delete, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from footprints.exceptions import (
    DatabaseError,
    InvalidImageKeyError,
    NotFoundError,
    StorageServiceError,
)
from footprints.models.trip import VISIBILITY_PUBLIC, Trip, utcnow
from footprints.schemas.trip import TripCreate, TripResponse, TripVisibilityUpdate
from footprints.services.storage_service import StorageService

logger = logging.getLogger(__name__)


def _to_response(trip: Trip, image_urls: Optional[List[str]] = None) -> TripResponse:
    """Build the wire representation; `image_urls` replaces the stored list when given."""
    return TripResponse(
        user_id=trip.user_id,
        trip_id=trip.trip_id,
        title=trip.title,
        location=trip.location,
        description=trip.description,
        image_urls=list(image_urls if image_urls is not None else (trip.image_urls or [])),
        start_date=trip.start_date,
        end_date=trip.end_date,
        visibility=trip.visibility,
        created_at=trip.created_at,
        locations=trip.locations,
    )


class TripService:
    """
    Business logic layer for trip operations.

    Error Handling Strategy:
        SQLAlchemy failures are logged and wrapped in DatabaseError (generic
        500). NotFoundError propagates untouched. Storage failures are
        absorbed per trip/photo, as described in the module docstring.
    """

    # ── Writes ────────────────────────────────────────────────────────────

    async def create_trip(self, db: AsyncSession, payload: TripCreate) -> TripResponse:
        """
        Write the full record for (UserID, TripID).

        Unconditional: an existing trip with the same key is overwritten.
        Defaults: ImageUrls → [], Visibility → "public", CreatedAt → now (UTC).
        """
        trip = Trip(
            user_id=payload.user_id,
            trip_id=payload.trip_id,
            title=payload.title,
            location=payload.location,
            description=payload.description,
            image_urls=list(payload.image_urls or []),
            start_date=payload.start_date,
            end_date=payload.end_date,
            visibility=payload.visibility or VISIBILITY_PUBLIC,
            created_at=payload.created_at or utcnow(),
            locations=(
                [pin.model_dump() for pin in payload.locations]
                if payload.locations is not None
                else None
            ),
        )
        try:
            trip = await db.merge(trip)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error(
                "Database error creating trip %s/%s: %s",
                payload.user_id, payload.trip_id, e, exc_info=True,
            )
            raise DatabaseError(
                context={"user_id": payload.user_id, "trip_id": payload.trip_id},
            ) from e

        logger.info(
            "Trip stored: %s/%s (visibility=%s, photos=%d)",
            trip.user_id, trip.trip_id, trip.visibility, len(trip.image_urls),
        )
        return _to_response(trip)

    async def update_visibility(
        self, db: AsyncSession, payload: TripVisibilityUpdate
    ) -> TripResponse:
        """
        Change only the Visibility attribute of an existing trip.

        Raises:
            NotFoundError: no trip with this (UserID, TripID) (→ 404)
            DatabaseError: query or flush failed (→ 500)
        """
        try:
            trip = await db.get(Trip, (payload.user_id, payload.trip_id))
            if trip is None:
                raise NotFoundError(
                    resource="trip",
                    resource_id=f"{payload.user_id}/{payload.trip_id}",
                )
            trip.visibility = payload.visibility
            await db.flush()
        except SQLAlchemyError as e:
            logger.error(
                "Database error updating trip %s/%s: %s",
                payload.user_id, payload.trip_id, e, exc_info=True,
            )
            raise DatabaseError(
                context={"user_id": payload.user_id, "trip_id": payload.trip_id},
            ) from e

        logger.info(
            "Trip %s/%s visibility set to %s",
            payload.user_id, payload.trip_id, payload.visibility,
        )
        return _to_response(trip)

    async def delete_trip(self, db: AsyncSession, user_id: str, trip_id: str) -> None:
        """
        Remove one trip in a single conditional statement.

        Zero affected rows means the trip did not exist. Photo objects in
        the bucket are left in place.

        Raises:
            NotFoundError: no trip with this key (→ 404)
        """
        try:
            result = await db.execute(
                delete(Trip).where(Trip.user_id == user_id, Trip.trip_id == trip_id)
            )
        except SQLAlchemyError as e:
            logger.error("Database error deleting trip %s/%s: %s", user_id, trip_id, e, exc_info=True)
            raise DatabaseError(context={"user_id": user_id, "trip_id": trip_id}) from e

        if result.rowcount == 0:
            raise NotFoundError(resource="trip", resource_id=f"{user_id}/{trip_id}")
        logger.info("Trip deleted: %s/%s", user_id, trip_id)

    # ── Reads ─────────────────────────────────────────────────────────────

    async def get_trip(
        self,
        db: AsyncSession,
        storage: StorageService,
        user_id: str,
        trip_id: str,
    ) -> TripResponse:
        """
        Fetch one trip with every photo resolved to a signed read URL.

        Query plan:
            SELECT * FROM trips WHERE user_id = :uid AND trip_id = :tid
            → primary key lookup

        Raises:
            NotFoundError: trip does not exist (→ 404)
            DatabaseError: query failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Trip).where(Trip.user_id == user_id, Trip.trip_id == trip_id)
            )
            trip = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching trip %s/%s: %s", user_id, trip_id, e, exc_info=True)
            raise DatabaseError(context={"user_id": user_id, "trip_id": trip_id}) from e

        if trip is None:
            raise NotFoundError(resource="trip", resource_id=f"{user_id}/{trip_id}")

        stored = list(trip.image_urls or [])
        resolved = await asyncio.gather(
            *(self._resolve_or_keep(storage, value) for value in stored)
        )
        return _to_response(trip, image_urls=list(resolved))

    async def list_trips(
        self, db: AsyncSession, storage: StorageService, user_id: str
    ) -> List[TripResponse]:
        """Every trip owned by `user_id`, any visibility, newest first."""
        query = (
            select(Trip)
            .where(Trip.user_id == user_id)
            .order_by(desc(Trip.created_at))
        )
        trips = await self._fetch(db, query, scope=f"user {user_id}")
        return await self._with_covers(storage, trips)

    async def list_public_trips(
        self, db: AsyncSession, storage: StorageService
    ) -> List[TripResponse]:
        """
        Every public trip across all owners, newest first.

        Query plan:
            SELECT * FROM trips WHERE visibility = 'public'
            ORDER BY created_at DESC
            → idx_trips_visibility_created_at
        """
        query = (
            select(Trip)
            .where(Trip.visibility == VISIBILITY_PUBLIC)
            .order_by(desc(Trip.created_at))
        )
        trips = await self._fetch(db, query, scope="public")
        return await self._with_covers(storage, trips)

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _fetch(self, db: AsyncSession, query, scope: str) -> List[Trip]:
        try:
            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing %s trips: %s", scope, e, exc_info=True)
            raise DatabaseError(
                message="Could not retrieve trips. Please try again.",
                context={"scope": scope},
            ) from e

    async def _with_covers(
        self, storage: StorageService, trips: List[Trip]
    ) -> List[TripResponse]:
        return list(await asyncio.gather(*(self._with_cover(storage, t) for t in trips)))

    async def _with_cover(self, storage: StorageService, trip: Trip) -> TripResponse:
        stored = list(trip.image_urls or [])
        if not stored:
            return _to_response(trip)
        try:
            cover = await storage.resolve_image_url(stored[0])
        except (InvalidImageKeyError, StorageServiceError) as e:
            logger.warning(
                "Cover photo for trip %s/%s not resolved: %s",
                trip.user_id, trip.trip_id, e,
            )
            return _to_response(trip)
        return _to_response(trip, image_urls=[cover] + stored[1:])

    async def _resolve_or_keep(self, storage: StorageService, stored: str) -> str:
        try:
            return await storage.resolve_image_url(stored)
        except (InvalidImageKeyError, StorageServiceError) as e:
            logger.warning("Photo %r not resolved, keeping stored value: %s", stored, e)
            return stored


# ── Singleton Instance ────────────────────────────────────────────────────
trip_service = TripService()
