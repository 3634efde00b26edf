"""Pydantic request/response schemas."""

from rideshare.schemas.auth import IdentityClaim, LoginRequest, LoginResponse
from rideshare.schemas.health import HealthResponse
from rideshare.schemas.trip import (
    TripCreate,
    TripCreatedResponse,
    TripDetail,
    TripsPage,
    TripSummary,
)
from rideshare.schemas.user import (
    MessageResponse,
    UserCreate,
    UserCreatedResponse,
    UserPublic,
    UsersPage,
    UserUpdate,
    UserUpdatedResponse,
)

__all__ = [
    "HealthResponse",
    "IdentityClaim",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "TripCreate",
    "TripCreatedResponse",
    "TripDetail",
    "TripSummary",
    "TripsPage",
    "UserCreate",
    "UserCreatedResponse",
    "UserPublic",
    "UserUpdate",
    "UserUpdatedResponse",
    "UsersPage",
]
