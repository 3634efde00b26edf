"""ORM model for rider and driver accounts."""

from sqlalchemy import Boolean, Column, Integer, String

from rideshare.models.base import Base


class User(Base):
    """
    User account for JWT authentication.

    admin: grants access to the account directory listing and reset.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=True, unique=True)
    password_hash = Column(String(255), nullable=False)
    firstname = Column(String(255), nullable=False)
    lastname = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=True)
    admin = Column(Boolean, nullable=False, default=False)
