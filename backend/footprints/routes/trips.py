"""
Footprints Backend — Trip Route Handlers
=========================================

What:  CRUD on trips plus the public feed.
How:   Validates ids and bodies, delegates to TripService, returns JSON.
Who:   Called by the frontend trip list, trip detail, editor and explore pages.

Paths keep the frontend's casing (/Trips, /public-trips) and the wire
field names are PascalCase (see schemas/trip.py).
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from footprints.database import get_db_session
from footprints.exceptions import ValidationError
from footprints.schemas.trip import (
    ErrorResponse,
    MessageResponse,
    TripCreate,
    TripKey,
    TripResponse,
    TripVisibilityUpdate,
)
from footprints.services.storage_service import StorageService, get_storage_service
from footprints.services.trip_service import trip_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Trips"])

_ERRORS = {
    400: {"description": "Invalid request", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}
_ERRORS_WITH_404 = {
    **_ERRORS,
    404: {"description": "Trip not found", "model": ErrorResponse},
}


def _require_user_id(user_id: Optional[str]) -> str:
    if user_id is None or not user_id.strip():
        raise ValidationError(message="userId is required", field="userId")
    return user_id.strip()


@router.post(
    "/Trips",
    response_model=TripResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
    summary="Create a trip",
    description=(
        "Stores the full trip record. Writing the same UserID/TripID again "
        "overwrites the earlier record."
    ),
)
async def create_trip(
    payload: TripCreate,
    db: AsyncSession = Depends(get_db_session),
) -> TripResponse:
    return await trip_service.create_trip(db=db, payload=payload)


@router.get(
    "/Trips",
    response_model=List[TripResponse],
    response_model_by_alias=True,
    responses=_ERRORS,
    summary="List a user's trips",
    description="All trips of one owner, public and private, newest first. Cover photos are signed.",
)
async def list_trips(
    user_id: Optional[str] = Query(default=None, alias="userId", description="Owner id"),
    db: AsyncSession = Depends(get_db_session),
    storage: StorageService = Depends(get_storage_service),
) -> List[TripResponse]:
    owner = _require_user_id(user_id)
    return await trip_service.list_trips(db=db, storage=storage, user_id=owner)


@router.get(
    "/Trips/{trip_id}",
    response_model=TripResponse,
    response_model_by_alias=True,
    responses=_ERRORS_WITH_404,
    summary="Get one trip",
    description="Full trip record with every photo replaced by a signed read URL.",
)
async def get_trip(
    trip_id: str,
    user_id: Optional[str] = Query(default=None, alias="userId", description="Owner id"),
    db: AsyncSession = Depends(get_db_session),
    storage: StorageService = Depends(get_storage_service),
) -> TripResponse:
    """
    Who:     Trip detail page.

    Both ids are required; a blank path segment is rejected the same way
    as a missing userId.
    """
    owner = _require_user_id(user_id)
    if not trip_id.strip():
        raise ValidationError(message="Trip id is required", field="tripId")
    return await trip_service.get_trip(
        db=db, storage=storage, user_id=owner, trip_id=trip_id.strip()
    )


@router.put(
    "/Trips",
    response_model=TripResponse,
    response_model_by_alias=True,
    responses=_ERRORS_WITH_404,
    summary="Change a trip's visibility",
    description="Sets Visibility to 'public' or 'private'. Other fields are left unchanged.",
)
async def update_trip(
    payload: TripVisibilityUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> TripResponse:
    return await trip_service.update_visibility(db=db, payload=payload)


@router.delete(
    "/Trips",
    response_model=MessageResponse,
    responses=_ERRORS_WITH_404,
    summary="Delete a trip",
    description="Removes the trip record. Uploaded photo objects are not deleted.",
)
async def delete_trip(
    payload: TripKey,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await trip_service.delete_trip(db=db, user_id=payload.user_id, trip_id=payload.trip_id)
    return MessageResponse(message="Trip deleted successfully")


@router.get(
    "/public-trips",
    response_model=List[TripResponse],
    response_model_by_alias=True,
    responses={500: _ERRORS[500]},
    summary="List public trips",
    description="Every public trip across all users, newest first. Cover photos are signed.",
)
async def list_public_trips(
    db: AsyncSession = Depends(get_db_session),
    storage: StorageService = Depends(get_storage_service),
) -> List[TripResponse]:
    return await trip_service.list_public_trips(db=db, storage=storage)
