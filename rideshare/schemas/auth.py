"""Request/response schemas for login and the identity carried in bearer tokens."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from rideshare.schemas.user import UserPublic


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., description="Username")
    password: str = Field(..., description="Password")


class LoginResponse(BaseModel):
    """Public user projection plus a bearer token."""

    user: UserPublic
    token: str = Field(..., description="JWT access token")
    message: str = "Successfully logged in"


class IdentityClaim(BaseModel):
    """Decoded token payload. Frozen: the claim never changes after issuance."""

    model_config = ConfigDict(frozen=True)

    username: str
    id: int
    admin: bool = False
    exp: datetime
    iat: datetime | None = None
