"""SQLAlchemy ORM models."""

from rideshare.models.base import Base
from rideshare.models.trip import DriverTrip, PassengerTrip
from rideshare.models.user import User

__all__ = ["Base", "DriverTrip", "PassengerTrip", "User"]
