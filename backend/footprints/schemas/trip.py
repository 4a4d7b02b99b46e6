"""
Footprints Backend — Trip Request/Response Schemas
===================================================

What:  Pydantic models defining the trip API contract.
How:   FastAPI validates request bodies against these models and serializes
       responses through them. Wire names follow the frontend's PascalCase
       keys (UserID, TripID, ImageUrls, ...) via aliases; Python code uses
       snake_case attribute names.

Schema failures surface as HTTP 400 (see the RequestValidationError handler
in main.py), with the offending field listed in `details`.
"""

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from footprints.models.trip import ID_MAX_LENGTH, LABEL_MAX_LENGTH

Visibility = Literal["public", "private"]

_ALIASED = ConfigDict(populate_by_name=True, extra="ignore")


class LocationPin(BaseModel):
    """
    What:  A map pin attached to a trip.
    Who:   Created by the frontend map picker; rendered on the trips map.
    """
    model_config = _ALIASED

    id: Optional[str] = Field(default=None, description="Client-side pin id")
    lat: float = Field(ge=-90, le=90, description="Latitude in degrees")
    lng: float = Field(ge=-180, le=180, description="Longitude in degrees")
    label: str = Field(default="", description="Text shown in the pin popup")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class TripKey(BaseModel):
    """
    What:  Identifies one trip: (UserID, TripID).
    Who:   Body of DELETE /Trips; base of the create and update bodies.
    """
    model_config = _ALIASED

    user_id: str = Field(
        alias="UserID", min_length=1, max_length=ID_MAX_LENGTH, description="Owner id"
    )
    trip_id: str = Field(
        alias="TripID", min_length=1, max_length=ID_MAX_LENGTH, description="Trip id"
    )

    @field_validator("user_id", "trip_id")
    @classmethod
    def strip_ids(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped


class TripCreate(TripKey):
    """
    What:  Body of POST /Trips.

    Only UserID and TripID are required. Defaults applied by TripService:
        ImageUrls  → []
        Visibility → "public"
        CreatedAt  → now (UTC)
    """
    title: Optional[str] = Field(default=None, alias="Title", max_length=LABEL_MAX_LENGTH)
    location: Optional[str] = Field(default=None, alias="Location", max_length=LABEL_MAX_LENGTH)
    description: Optional[str] = Field(default=None, alias="Description")
    image_urls: Optional[List[str]] = Field(
        default=None,
        alias="ImageUrls",
        description="Object keys returned by POST /upload, in display order",
    )
    start_date: Optional[date] = Field(default=None, alias="StartDate")
    end_date: Optional[date] = Field(default=None, alias="EndDate")
    visibility: Optional[Visibility] = Field(default=None, alias="Visibility")
    created_at: Optional[datetime] = Field(default=None, alias="CreatedAt")
    locations: Optional[List[LocationPin]] = Field(default=None, alias="Locations")

    @field_validator("start_date", "end_date", "created_at", "visibility", mode="before")
    @classmethod
    def empty_string_is_missing(cls, v):
        """The frontend sends "" for untouched form fields."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class TripVisibilityUpdate(TripKey):
    """
    What:  Body of PUT /Trips.

    Visibility is required and must be exactly "public" or "private".
    """
    visibility: Visibility = Field(alias="Visibility")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class TripResponse(BaseModel):
    """
    What:  Full representation of a trip.
    Who:   Returned by every trip endpoint (single object or array).

    ImageUrls holds signed read URLs where the endpoint resolved them
    (all photos on GET /Trips/{id}, the cover photo on list endpoints) and
    stored object keys everywhere else.
    """
    model_config = _ALIASED

    user_id: str = Field(alias="UserID")
    trip_id: str = Field(alias="TripID")
    title: Optional[str] = Field(default=None, alias="Title")
    location: Optional[str] = Field(default=None, alias="Location")
    description: Optional[str] = Field(default=None, alias="Description")
    image_urls: List[str] = Field(default_factory=list, alias="ImageUrls")
    start_date: Optional[date] = Field(default=None, alias="StartDate")
    end_date: Optional[date] = Field(default=None, alias="EndDate")
    visibility: Visibility = Field(alias="Visibility")
    created_at: datetime = Field(alias="CreatedAt")
    locations: Optional[List[LocationPin]] = Field(default=None, alias="Locations")


class MessageResponse(BaseModel):
    """Plain acknowledgement, e.g. after DELETE /Trips."""
    message: str


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Trip not found",
            "details": null,
            "request_id": "1f0c2a9b"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for load balancer and container probes."""
    status: str = Field(description="Overall status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Trip table connectivity: connected, disconnected")
    storage: str = Field(description="Photo bucket reachability: available, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
