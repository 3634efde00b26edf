"""Pydantic schemas for driver and passenger trips."""

from datetime import UTC, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator


class TripCreate(BaseModel):
    """
    Trip submission. user_id defaults to the authenticated caller; only an admin
    may file a trip on behalf of someone else.
    """

    user_id: int | None = Field(default=None, description="Owning user id")
    pickup_location: str = Field(..., min_length=1, max_length=255)
    destination: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    departure_time: datetime

    @field_validator("departure_time")
    @classmethod
    def to_naive_utc(cls, v: datetime) -> datetime:
        # Stored in a timezone-less column; normalize aware input to UTC first.
        if v.tzinfo is not None:
            return v.astimezone(UTC).replace(tzinfo=None)
        return v


class TripSummary(BaseModel):
    """Listing entry, joined with the owner's username."""

    id: int
    user_id: int
    username: str | None = None
    pickup_location: str
    destination: str
    price: str = Field(..., description="Price with exactly two decimals")
    departure_time: datetime


class TripDetail(TripSummary):
    """Single trip, joined with the owner's username and phone."""

    phone: str | None = None


class TripsPage(BaseModel):
    trips: list[TripSummary]
    has_more: bool


class TripCreatedResponse(BaseModel):
    id: int
    message: str = "Trip successfully inserted"
