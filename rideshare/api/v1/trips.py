"""Trip routes. The driver and passenger ledgers are served by the same router factory."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from rideshare.api.v1.auth import require_login
from rideshare.core.database import get_db
from rideshare.core.errors import NotFound, Unauthorized
from rideshare.models import DriverTrip, PassengerTrip
from rideshare.schemas.auth import IdentityClaim
from rideshare.schemas.trip import (
    TripCreate,
    TripCreatedResponse,
    TripDetail,
    TripsPage,
)
from rideshare.services.pagination import PageRequest, page_params
from rideshare.services.trips import TripLedger, TripModel


def ledger_dependency(model: TripModel) -> Callable[[Session], TripLedger]:
    def dependency(db: Annotated[Session, Depends(get_db)]) -> TripLedger:
        return TripLedger(db, model)

    return dependency


get_driver_ledger = ledger_dependency(DriverTrip)
get_passenger_ledger = ledger_dependency(PassengerTrip)


def build_ledger_router(get_ledger: Callable[..., TripLedger]) -> APIRouter:
    """Routes for one ledger; every route requires an authenticated identity."""
    ledger_router = APIRouter()

    @ledger_router.post("", response_model=TripCreatedResponse)
    def add_trip(
        body: TripCreate,
        identity: Annotated[IdentityClaim, Depends(require_login)],
        ledger: Annotated[TripLedger, Depends(get_ledger)],
    ) -> TripCreatedResponse:
        """Insert a trip owned by the caller (or by user_id, for admins)."""
        owner_id = body.user_id if body.user_id is not None else identity.id
        if owner_id != identity.id and not identity.admin:
            raise Unauthorized("Cannot create trips for another user")
        return TripCreatedResponse(id=ledger.add(owner_id, body))

    @ledger_router.get("", response_model=TripsPage)
    def list_trips(
        _user: Annotated[IdentityClaim, Depends(require_login)],
        ledger: Annotated[TripLedger, Depends(get_ledger)],
        page: Annotated[PageRequest, Depends(page_params)],
        pickup_location: Annotated[str | None, Query(min_length=1)] = None,
        destination: Annotated[str | None, Query(min_length=1)] = None,
    ) -> TripsPage:
        """List trips in id order, optionally filtered by pickup and/or destination."""
        if pickup_location is not None and destination is not None:
            result = ledger.list_by_route(pickup_location, destination, page)
        elif pickup_location is not None:
            result = ledger.list_by_pickup(pickup_location, page)
        elif destination is not None:
            result = ledger.list_by_destination(destination, page)
        else:
            result = ledger.list(page)
        return TripsPage(trips=result.items, has_more=result.has_more)

    @ledger_router.get("/{trip_id}", response_model=TripDetail)
    def get_trip(
        trip_id: int,
        _user: Annotated[IdentityClaim, Depends(require_login)],
        ledger: Annotated[TripLedger, Depends(get_ledger)],
    ) -> TripDetail:
        trip = ledger.get_by_id(trip_id)
        if trip is None:
            raise NotFound("Trip not found")
        return trip

    return ledger_router


router = APIRouter()
router.include_router(build_ledger_router(get_driver_ledger), prefix="/driver")
router.include_router(build_ledger_router(get_passenger_ledger), prefix="/passenger")
