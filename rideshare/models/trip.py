"""ORM models for the two trip ledgers: driver offers and passenger requests."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import declared_attr

from rideshare.models.base import Base


class TripColumns:
    """Columns shared by both ledgers; the tables themselves stay disjoint."""

    id = Column(Integer, primary_key=True, autoincrement=True)
    pickup_location = Column(String(255), nullable=False, index=True)
    destination = Column(String(255), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    departure_time = Column(DateTime, nullable=False)

    @declared_attr
    def user_id(cls):
        return Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    @declared_attr
    def __table_args__(cls):
        # Identical resubmissions are rejected by the store as a conflict.
        return (
            UniqueConstraint(
                "user_id",
                "pickup_location",
                "destination",
                "price",
                "departure_time",
                name=f"uq_{cls.__tablename__}_natural_key",
            ),
        )


class DriverTrip(TripColumns, Base):
    """A seat offered by a driver."""

    __tablename__ = "driver_trips"


class PassengerTrip(TripColumns, Base):
    """A ride requested by a passenger."""

    __tablename__ = "passenger_trips"
