"""Password hashing and the bearer token service."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

import bcrypt
import jwt
from pydantic import ValidationError

from rideshare.core.config import Settings
from rideshare.core.errors import ExpiredToken, MalformedToken, UnknownSubject
from rideshare.schemas.auth import IdentityClaim

logger = logging.getLogger(__name__)


def hash_password(plain_password: str, rounds: int) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; longer input would raise in recent bcrypt releases.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class TokenSubject(Protocol):
    """Anything carrying the fields embedded in a token (e.g. the User model)."""

    username: str
    id: int
    admin: bool


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenService:
    """
    Issues and verifies signed, time-limited bearer tokens.

    verify() only checks signature and structure. Expiry and subject existence are
    judged by ensure_fresh() so a deleted account loses access before its token
    reaches the stated expiration.
    """

    def __init__(
        self, settings: Settings, clock: Callable[[], datetime] = _utcnow
    ) -> None:
        self._secret = settings.JWT_SECRET.get_secret_value()
        self._algorithm = settings.JWT_ALGORITHM
        self._ttl = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
        self._clock = clock

    def issue(self, subject: TokenSubject) -> str:
        """Create a JWT carrying username, id, admin, exp and iat."""
        now = self._clock()
        payload: dict[str, Any] = {
            "username": subject.username,
            "id": subject.id,
            "admin": bool(subject.admin),
            "exp": now + self._ttl,
            "iat": now,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> IdentityClaim:
        """Decode a token into its identity claim. Raises MalformedToken."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "require": ["exp"]},
            )
        except jwt.PyJWTError as e:
            raise MalformedToken() from e
        try:
            return IdentityClaim.model_validate(payload)
        except ValidationError as e:
            raise MalformedToken("Invalid token payload") from e

    def ensure_fresh(
        self, claim: IdentityClaim, subject_exists: Callable[[str], bool]
    ) -> None:
        """Raise ExpiredToken or UnknownSubject if the claim can no longer be honored."""
        if claim.exp < self._clock():
            raise ExpiredToken()
        if not subject_exists(claim.username):
            logger.debug("Token presented for missing user %s", claim.username)
            raise UnknownSubject()
