"""Shared fixtures: an in-memory SQLite store and an app wired to it."""

from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from rideshare.core.config import Settings, get_settings
from rideshare.core.database import get_db
from rideshare.models import Base
from rideshare.schemas.user import UserCreate
from rideshare.services.accounts import AccountDirectory

TEST_SECRET = "test sauce, long enough for an HS256 key"

TEST_SETTINGS = Settings(
    DATABASE_URL="sqlite://",
    JWT_SECRET=TEST_SECRET,
    JWT_EXPIRE_MINUTES=1,
    BCRYPT_ROUNDS=4,
)


def make_session_factory() -> sessionmaker:
    """Fresh, empty database shared by every session the factory hands out."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_user(i: int, **overrides: object) -> UserCreate:
    fields = {
        "username": f"username-{i}",
        "password": f"password-{i}",
        "firstname": f"firstname-{i}",
        "lastname": f"lastname-{i}",
        "email": f"email-{i}@example.com",
        "phone": f"15078360{i:02d}",
    }
    fields.update(overrides)
    return UserCreate(**fields)


def seed_admin(db: Session) -> int:
    """Create the 'admin' account (id 1 on an empty database)."""
    accounts = AccountDirectory(db, TEST_SETTINGS)
    admin_id = accounts.create(
        UserCreate(
            username="admin",
            password="adminpassword",
            firstname="The",
            lastname="Admin",
            email="admin@admin.co",
        )
    )
    accounts.set_admin(admin_id, True)
    return admin_id


def make_client(session_factory: sessionmaker) -> TestClient:
    """TestClient whose get_db and get_settings point at the test store."""
    from rideshare.main import app

    def override_get_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: TEST_SETTINGS
    return TestClient(app)


def clear_overrides() -> None:
    from rideshare.main import app

    app.dependency_overrides.clear()
