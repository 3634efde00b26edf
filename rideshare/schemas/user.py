"""Pydantic schemas for user accounts."""

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """
    Account creation payload.

    Every field is optional at the schema level; AccountDirectory.create decides
    which ones are required so a missing field is reported as a 400 with a stable
    message instead of a field-by-field validation dump.
    """

    username: str | None = None
    password: str | None = None
    firstname: str | None = None
    lastname: str | None = None
    email: str | None = None
    phone: str | None = None


class UserUpdate(BaseModel):
    """Partial update; only fields present in the request are applied."""

    username: str | None = Field(default=None, min_length=1)
    password: str | None = Field(default=None, min_length=1)
    firstname: str | None = Field(default=None, min_length=1)
    lastname: str | None = Field(default=None, min_length=1)
    email: str | None = None
    phone: str | None = None
    admin: bool | None = None


class UserPublic(BaseModel):
    """Outward view of a user (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    firstname: str
    lastname: str
    email: str | None = None
    phone: str | None = None
    admin: bool


class UserCreatedResponse(BaseModel):
    id: int
    user: UserPublic
    token: str
    message: str = "Successfully Created User"


class UserUpdatedResponse(BaseModel):
    """
    Response for PUT /users/{id}.

    A user updating their own account gets a fresh token, since the old one
    names the previous username and stops verifying after a rename.
    """

    message: str = "Successfully updated user"
    token: str | None = None


class UsersPage(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserPublic]
    has_more: bool


class MessageResponse(BaseModel):
    message: str
