"""Authorization gate decisions and the login flow."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from rideshare.core.errors import AuthFailure, Unauthenticated
from rideshare.core.security import TokenService, verify_password
from rideshare.schemas.auth import IdentityClaim, LoginResponse
from rideshare.schemas.user import UserPublic
from rideshare.services.accounts import AccountDirectory

logger = logging.getLogger(__name__)

DEFAULT_DENIAL = "Authentication failed"
# Same text for unknown user and wrong password so neither can be told apart.
LOGIN_FAILURE = "Invalid username or password"

Predicate = Callable[[IdentityClaim], bool]


@dataclass(frozen=True)
class Authorized:
    identity: IdentityClaim


@dataclass(frozen=True)
class Denied:
    status_code: int
    message: str


GateDecision = Authorized | Denied


def always(identity: IdentityClaim) -> bool:
    return True


def is_admin(identity: IdentityClaim) -> bool:
    return identity.admin


def authorize(
    token: str | None,
    tokens: TokenService,
    subject_exists: Callable[[str], bool],
    predicate: Predicate,
    message: str | None = None,
) -> GateDecision:
    """
    Decide whether a bearer token may pass a gate.

    401 when the token is missing, malformed, expired or names a deleted user;
    403 when the identity is valid but fails the predicate.
    """
    if not token:
        return Denied(401, message or DEFAULT_DENIAL)
    try:
        identity = tokens.verify(token)
        tokens.ensure_fresh(identity, subject_exists)
    except AuthFailure as e:
        logger.debug("Rejected bearer token: %s", e.message)
        return Denied(401, message or DEFAULT_DENIAL)
    if not predicate(identity):
        logger.debug("Identity %s failed gate predicate", identity.username)
        return Denied(403, message or DEFAULT_DENIAL)
    return Authorized(identity)


def login(
    accounts: AccountDirectory, tokens: TokenService, username: str, password: str
) -> LoginResponse:
    """Check credentials and return a token with the public user projection."""
    user = accounts.get_by_name(username)
    if user is None or not verify_password(password, user.password_hash):
        raise Unauthenticated(LOGIN_FAILURE)
    return LoginResponse(
        user=UserPublic.model_validate(user),
        token=tokens.issue(user),
    )
