"""
Footprints Backend — Trip Service Unit Tests
=============================================

What:  TripService against an in-memory trip table and a real signer.
How:   The db_session/storage fixtures from conftest.py; mock_db_session and
       AsyncMock storage where a failure has to be forced.

What we test:
    ✅ Create applies defaults and overwrites on the same key
    ✅ Detail resolves every photo; bad photos keep their stored value
    ✅ Listings sort newest first and resolve only the cover
    ✅ Public listing excludes private trips
    ✅ Update changes visibility only; missing trip → NotFoundError
    ✅ Delete is conditional; missing trip → NotFoundError
    ✅ SQLAlchemy failures become DatabaseError
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from footprints.exceptions import DatabaseError, NotFoundError, StorageServiceError
from footprints.schemas.trip import TripCreate, TripVisibilityUpdate
from footprints.services.trip_service import TripService


def _create(user_id="u1", trip_id="t1", **fields) -> TripCreate:
    return TripCreate(user_id=user_id, trip_id=trip_id, **fields)


def _at(day: int) -> datetime:
    return datetime(2024, 6, day, 12, 0, tzinfo=timezone.utc)


class TestTripServiceCreate:

    def setup_method(self):
        self.service = TripService()

    @pytest.mark.asyncio
    async def test_defaults_applied(self, db_session):
        result = await self.service.create_trip(db_session, _create(title="Trip"))

        assert result.title == "Trip"
        assert result.visibility == "public"
        assert result.image_urls == []
        assert result.created_at is not None
        assert result.locations is None

    @pytest.mark.asyncio
    async def test_same_key_overwrites(self, db_session, storage):
        await self.service.create_trip(db_session, _create(title="First", visibility="private"))
        await self.service.create_trip(db_session, _create(title="Second"))

        trips = await self.service.list_trips(db_session, storage, "u1")

        assert len(trips) == 1
        assert trips[0].title == "Second"
        assert trips[0].visibility == "public"

    @pytest.mark.asyncio
    async def test_locations_stored_as_plain_pins(self, db_session):
        result = await self.service.create_trip(
            db_session,
            _create(locations=[{"lat": 48.85, "lng": 2.35, "label": "Paris"}]),
        )

        assert result.locations[0].lat == 48.85
        assert result.locations[0].label == "Paris"


class TestTripServiceGet:

    def setup_method(self):
        self.service = TripService()

    @pytest.mark.asyncio
    async def test_every_photo_resolved_in_order(self, db_session, storage):
        await self.service.create_trip(
            db_session,
            _create(image_urls=["trips/u1/t1/a.jpg", "trips/u1/t1/b.HEIC"]),
        )

        result = await self.service.get_trip(db_session, storage, "u1", "t1")

        first, second = result.image_urls
        assert "trips/u1/t1/a.jpg" in first and "X-Amz-Signature=" in first
        assert "trips/u1/t1/b.HEIC" in second and "response-content-type=image%2Fheic" in second

    @pytest.mark.asyncio
    async def test_unresolvable_photo_keeps_stored_value(self, db_session, storage):
        await self.service.create_trip(
            db_session,
            _create(image_urls=["trips/u1/t1/a.jpg", ""]),
        )

        result = await self.service.get_trip(db_session, storage, "u1", "t1")

        assert "X-Amz-Signature=" in result.image_urls[0]
        assert result.image_urls[1] == ""

    @pytest.mark.asyncio
    async def test_missing_trip(self, db_session, storage):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_trip(db_session, storage, "u1", "nope")
        assert exc_info.value.message == "Trip not found"

    @pytest.mark.asyncio
    async def test_storage_failure_keeps_stored_values(self, db_session):
        await self.service.create_trip(db_session, _create(image_urls=["trips/u1/t1/a.jpg"]))
        storage = MagicMock()
        storage.resolve_image_url = AsyncMock(side_effect=StorageServiceError())

        result = await self.service.get_trip(db_session, storage, "u1", "t1")

        assert result.image_urls == ["trips/u1/t1/a.jpg"]


class TestTripServiceList:

    def setup_method(self):
        self.service = TripService()

    @pytest.mark.asyncio
    async def test_newest_first_any_visibility(self, db_session, storage):
        await self.service.create_trip(db_session, _create(trip_id="old", created_at=_at(1)))
        await self.service.create_trip(
            db_session, _create(trip_id="new", created_at=_at(3), visibility="private")
        )
        await self.service.create_trip(db_session, _create(trip_id="mid", created_at=_at(2)))
        await self.service.create_trip(db_session, _create(user_id="u2", trip_id="other"))

        trips = await self.service.list_trips(db_session, storage, "u1")

        assert [t.trip_id for t in trips] == ["new", "mid", "old"]

    @pytest.mark.asyncio
    async def test_only_cover_resolved(self, db_session, storage):
        await self.service.create_trip(
            db_session,
            _create(image_urls=["trips/u1/t1/cover.png", "trips/u1/t1/second.png"]),
        )

        trip = (await self.service.list_trips(db_session, storage, "u1"))[0]

        assert "X-Amz-Signature=" in trip.image_urls[0]
        assert trip.image_urls[1] == "trips/u1/t1/second.png"

    @pytest.mark.asyncio
    async def test_cover_failure_returns_trip_unmodified(self, db_session, storage):
        await self.service.create_trip(
            db_session, _create(image_urls=["", "trips/u1/t1/second.png"])
        )

        trip = (await self.service.list_trips(db_session, storage, "u1"))[0]

        assert trip.image_urls == ["", "trips/u1/t1/second.png"]

    @pytest.mark.asyncio
    async def test_public_excludes_private(self, db_session, storage):
        await self.service.create_trip(db_session, _create(trip_id="pub", created_at=_at(1)))
        await self.service.create_trip(db_session, _create(trip_id="priv", visibility="private"))
        await self.service.create_trip(
            db_session, _create(user_id="u2", trip_id="pub2", created_at=_at(2))
        )

        trips = await self.service.list_public_trips(db_session, storage)

        assert [(t.user_id, t.trip_id) for t in trips] == [("u2", "pub2"), ("u1", "pub")]

    @pytest.mark.asyncio
    async def test_query_failure_wrapped(self, mock_db_session, storage):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("gone"))

        with pytest.raises(DatabaseError):
            await self.service.list_public_trips(mock_db_session, storage)


class TestTripServiceUpdate:

    def setup_method(self):
        self.service = TripService()

    @pytest.mark.asyncio
    async def test_visibility_only(self, db_session):
        await self.service.create_trip(
            db_session, _create(title="Keep me", image_urls=["trips/u1/t1/a.jpg"])
        )

        result = await self.service.update_visibility(
            db_session, TripVisibilityUpdate(user_id="u1", trip_id="t1", visibility="private")
        )

        assert result.visibility == "private"
        assert result.title == "Keep me"
        assert result.image_urls == ["trips/u1/t1/a.jpg"]

    @pytest.mark.asyncio
    async def test_missing_trip(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.update_visibility(
                db_session, TripVisibilityUpdate(user_id="u1", trip_id="nope", visibility="public")
            )


class TestTripServiceDelete:

    def setup_method(self):
        self.service = TripService()

    @pytest.mark.asyncio
    async def test_delete_then_missing(self, db_session, storage):
        await self.service.create_trip(db_session, _create())

        await self.service.delete_trip(db_session, "u1", "t1")

        with pytest.raises(NotFoundError):
            await self.service.get_trip(db_session, storage, "u1", "t1")

    @pytest.mark.asyncio
    async def test_missing_trip(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.delete_trip(db_session, "u1", "nope")

    @pytest.mark.asyncio
    async def test_statement_failure_wrapped(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("DELETE", {}, Exception("gone"))

        with pytest.raises(DatabaseError):
            await self.service.delete_trip(mock_db_session, "u1", "t1")
