"""Account directory: user CRUD, paginated listing and cascading delete."""

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rideshare.core.errors import Conflict, InvalidInput, NotFound
from rideshare.core.security import hash_password
from rideshare.models import DriverTrip, PassengerTrip, User
from rideshare.schemas.user import UserCreate, UserPublic
from rideshare.services.pagination import Page, PageRequest, fetch_page

if TYPE_CHECKING:
    from rideshare.core.config import Settings

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("firstname", "lastname", "password", "username")


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


class AccountDirectory:
    """User records backed by one request-scoped session."""

    def __init__(self, db: Session, settings: "Settings") -> None:
        self.db = db
        self._rounds = settings.BCRYPT_ROUNDS

    def create(self, user: UserCreate) -> int:
        """
        Persist a new, non-admin user with a hashed password and return its id.

        Raises InvalidInput when a required field is missing or empty and Conflict
        when the username (or email) is already taken.
        """
        if any(not getattr(user, field) for field in REQUIRED_FIELDS):
            raise InvalidInput(
                "Invalid user information, one or more field(s) missing"
            )
        if self.get_by_name(user.username) is not None:
            raise Conflict("Username already existed")

        record = User(
            username=user.username,
            password_hash=hash_password(user.password, self._rounds),
            firstname=user.firstname,
            lastname=user.lastname,
            email=_blank_to_none(user.email),
            phone=_blank_to_none(user.phone),
            admin=False,
        )
        self.db.add(record)
        self._commit("Username or email already existed")
        logger.info("Created user id=%s username=%s", record.id, record.username)
        return record.id

    def get_by_id(self, user_id: int) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_name(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()

    def exists(self, username: str) -> bool:
        return self.get_by_name(username) is not None

    def list(self, request: PageRequest) -> Page[UserPublic]:
        """One page of users in ascending id order, without password hashes."""
        rows, has_more = fetch_page(self.db.query(User).order_by(User.id), request)
        return Page[UserPublic](
            items=[UserPublic.model_validate(u) for u in rows], has_more=has_more
        )

    def update(self, user_id: int, fields: dict[str, Any]) -> User:
        """
        Merge the given fields into the user; a new password is re-hashed.

        Raises InvalidInput when a required field is set to null or empty, NotFound
        for an unknown id and Conflict when the username or email is taken.
        """
        fields = dict(fields)
        if any(
            name in fields and not fields[name] for name in REQUIRED_FIELDS
        ):
            raise InvalidInput("Invalid user information, required field(s) empty")
        for name in ("email", "phone"):
            if name in fields:
                fields[name] = _blank_to_none(fields[name])
        user = self.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        password = fields.pop("password", None)
        if password:
            user.password_hash = hash_password(password, self._rounds)
        for name, value in fields.items():
            setattr(user, name, value)
        self._commit("Username or email already existed")
        return user

    def set_admin(self, user_id: int, state: bool) -> None:
        user = self.get_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        user.admin = state
        self.db.commit()
        logger.info("Set admin=%s for user id=%s", state, user_id)

    def delete(self, user_id: int) -> bool:
        """
        Delete the user and every trip they own, in a single transaction.

        Trips go first so the foreign keys never dangle. Returns False if there
        was no such user (the trips delete is then a no-op).
        """
        try:
            trips_deleted = 0
            for model in (PassengerTrip, DriverTrip):
                trips_deleted += (
                    self.db.query(model)
                    .filter(model.user_id == user_id)
                    .delete(synchronize_session=False)
                )
            users_deleted = (
                self.db.query(User)
                .filter(User.id == user_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        if users_deleted:
            logger.info(
                "Deleted user id=%s with %s trip(s)", user_id, trips_deleted
            )
        return bool(users_deleted)

    def reset(self) -> int:
        """Remove every trip and every non-admin account. Returns users removed."""
        try:
            for model in (PassengerTrip, DriverTrip):
                self.db.query(model).delete(synchronize_session=False)
            users_deleted = (
                self.db.query(User)
                .filter(User.admin.is_(False))
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        logger.info("Directory reset: users_deleted=%s", users_deleted)
        return users_deleted

    def _commit(self, conflict_message: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Uniqueness violation on users: %s", e.orig)
            raise Conflict(conflict_message) from e
