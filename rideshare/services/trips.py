"""Trip ledger: add, look up and list driver offers or passenger requests."""

import logging
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rideshare.core.errors import Conflict, InvalidInput
from rideshare.models import DriverTrip, PassengerTrip, User
from rideshare.schemas.trip import TripCreate, TripDetail, TripSummary
from rideshare.services.pagination import Page, PageRequest, fetch_page

logger = logging.getLogger(__name__)

TripModel = type[DriverTrip] | type[PassengerTrip]


def format_price(price: Decimal | float | int) -> str:
    """Render a price with exactly two decimals, e.g. 12.5 -> '12.50'."""
    return f"{Decimal(price):.2f}"


class TripLedger:
    """
    One trip collection. The driver and passenger ledgers are the same class over
    different tables, so their pagination and filters cannot drift apart.
    """

    def __init__(self, db: Session, model: TripModel) -> None:
        self.db = db
        self.model = model

    def add(self, owner_id: int, trip: TripCreate) -> int:
        """Insert a trip for an existing user and return its id."""
        if self.db.query(User.id).filter(User.id == owner_id).first() is None:
            raise InvalidInput("Trip owner does not exist")
        record = self.model(
            user_id=owner_id,
            pickup_location=trip.pickup_location,
            destination=trip.destination,
            price=trip.price,
            departure_time=trip.departure_time,
        )
        self.db.add(record)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(
                "Rejected duplicate trip in %s: %s", self.model.__tablename__, e.orig
            )
            raise Conflict("Trip already exists") from e
        logger.info(
            "Inserted %s id=%s for user id=%s",
            self.model.__tablename__,
            record.id,
            owner_id,
        )
        return record.id

    def get_by_id(self, trip_id: int) -> TripDetail | None:
        row = (
            self.db.query(self.model, User.username, User.phone)
            .outerjoin(User, self.model.user_id == User.id)
            .filter(self.model.id == trip_id)
            .first()
        )
        if row is None:
            return None
        trip, username, phone = row
        return TripDetail(**self._fields(trip), username=username, phone=phone)

    def list(self, request: PageRequest) -> Page[TripSummary]:
        return self._list(request)

    def list_by_destination(
        self, destination: str, request: PageRequest
    ) -> Page[TripSummary]:
        return self._list(request, destination=destination)

    def list_by_pickup(
        self, pickup_location: str, request: PageRequest
    ) -> Page[TripSummary]:
        return self._list(request, pickup_location=pickup_location)

    def list_by_route(
        self, pickup_location: str, destination: str, request: PageRequest
    ) -> Page[TripSummary]:
        return self._list(
            request, pickup_location=pickup_location, destination=destination
        )

    def _list(
        self,
        request: PageRequest,
        pickup_location: str | None = None,
        destination: str | None = None,
    ) -> Page[TripSummary]:
        query = self.db.query(self.model, User.username).outerjoin(
            User, self.model.user_id == User.id
        )
        if pickup_location is not None:
            query = query.filter(self.model.pickup_location == pickup_location)
        if destination is not None:
            query = query.filter(self.model.destination == destination)
        rows, has_more = fetch_page(query.order_by(self.model.id), request)
        return Page[TripSummary](
            items=[
                TripSummary(**self._fields(trip), username=username)
                for trip, username in rows
            ],
            has_more=has_more,
        )

    @staticmethod
    def _fields(trip: DriverTrip | PassengerTrip) -> dict:
        return {
            "id": trip.id,
            "user_id": trip.user_id,
            "pickup_location": trip.pickup_location,
            "destination": trip.destination,
            "price": format_price(trip.price),
            "departure_time": trip.departure_time,
        }
