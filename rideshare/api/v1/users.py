"""User account routes: registration, lookup, admin listing, update and delete."""

from typing import Annotated

from fastapi import APIRouter, Depends

from rideshare.api.v1.auth import (
    get_accounts,
    get_token_service,
    require_admin,
    require_login,
)
from rideshare.core.errors import NotFound, Unauthorized
from rideshare.core.security import TokenService
from rideshare.schemas.auth import IdentityClaim
from rideshare.schemas.user import (
    MessageResponse,
    UserCreate,
    UserCreatedResponse,
    UserPublic,
    UsersPage,
    UserUpdate,
    UserUpdatedResponse,
)
from rideshare.services.accounts import AccountDirectory
from rideshare.services.pagination import PageRequest, page_params

router = APIRouter()


def _ensure_self_or_admin(identity: IdentityClaim, user_id: int) -> None:
    if not identity.admin and identity.id != user_id:
        raise Unauthorized("Not authorized")


@router.post("", response_model=UserCreatedResponse)
def create_user(
    body: UserCreate,
    accounts: Annotated[AccountDirectory, Depends(get_accounts)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> UserCreatedResponse:
    """Register a new (non-admin) user and log them in."""
    user_id = accounts.create(body)
    user = accounts.get_by_id(user_id)
    return UserCreatedResponse(
        id=user_id,
        user=UserPublic.model_validate(user),
        token=tokens.issue(user),
    )


@router.get("", response_model=UsersPage)
def list_users(
    _admin: Annotated[IdentityClaim, Depends(require_admin)],
    accounts: Annotated[AccountDirectory, Depends(get_accounts)],
    page: Annotated[PageRequest, Depends(page_params)],
) -> UsersPage:
    """List users in id order (admin only)."""
    result = accounts.list(page)
    return UsersPage(users=result.items, has_more=result.has_more)


@router.delete("", response_model=MessageResponse)
def reset_users(
    _admin: Annotated[IdentityClaim, Depends(require_admin)],
    accounts: Annotated[AccountDirectory, Depends(get_accounts)],
) -> MessageResponse:
    """Remove every trip and every non-admin account (admin only)."""
    accounts.reset()
    return MessageResponse(message="User database has been reset")


@router.get("/{user_id}", response_model=UserPublic)
def get_user(
    user_id: int,
    accounts: Annotated[AccountDirectory, Depends(get_accounts)],
) -> UserPublic:
    user = accounts.get_by_id(user_id)
    if user is None:
        raise NotFound("User not found")
    return UserPublic.model_validate(user)


@router.put("/{user_id}", response_model=UserUpdatedResponse)
def update_user(
    user_id: int,
    body: UserUpdate,
    identity: Annotated[IdentityClaim, Depends(require_login)],
    accounts: Annotated[AccountDirectory, Depends(get_accounts)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> UserUpdatedResponse:
    """
    Update any subset of a user's fields (the user themselves or an admin).

    Tokens are bound to the username, so a self-update returns a re-issued
    token; the caller's previous token is rejected once the username changes.
    """
    _ensure_self_or_admin(identity, user_id)
    fields = body.model_dump(exclude_unset=True)
    if "admin" in fields and not identity.admin:
        raise Unauthorized("needs admin permissions")
    if fields.get("admin") is None:
        fields.pop("admin", None)
    user = accounts.update(user_id, fields)
    if identity.id == user_id:
        return UserUpdatedResponse(token=tokens.issue(user))
    return UserUpdatedResponse()


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    identity: Annotated[IdentityClaim, Depends(require_login)],
    accounts: Annotated[AccountDirectory, Depends(get_accounts)],
) -> MessageResponse:
    """Delete a user and their trips (the user themselves or an admin)."""
    _ensure_self_or_admin(identity, user_id)
    accounts.delete(user_id)
    return MessageResponse(message="User is deleted")
