"""Trip ledgers against an in-memory SQLite store."""

import unittest
from datetime import datetime
from decimal import Decimal

from rideshare.core.errors import Conflict, InvalidInput
from rideshare.models import DriverTrip, PassengerTrip
from rideshare.schemas.trip import TripCreate
from rideshare.services.accounts import AccountDirectory
from rideshare.services.pagination import PageRequest
from rideshare.services.trips import TripLedger, format_price
from tests.support import TEST_SETTINGS, make_session_factory, make_user

TRIPS = 35


def make_trip(i: int) -> TripCreate:
    return TripCreate(
        pickup_location=f"location-{i % 10}",
        destination=f"location-{(i + 1) % 11}",
        price=Decimal(i),
        departure_time=datetime(2026, 11, 1, 0, 0, i % 10),
    )


class TestFormatPrice(unittest.TestCase):
    def test_two_decimals(self) -> None:
        self.assertEqual(format_price(Decimal("12.5")), "12.50")
        self.assertEqual(format_price(7), "7.00")
        self.assertEqual(format_price(Decimal("0")), "0.00")


class LedgerTestCase(unittest.TestCase):
    """User i owns trip i in both ledgers."""

    def setUp(self) -> None:
        self.db = make_session_factory()()
        accounts = AccountDirectory(self.db, TEST_SETTINGS)
        for i in range(1, TRIPS + 1):
            accounts.create(make_user(i))
        self.drivers = TripLedger(self.db, DriverTrip)
        self.passengers = TripLedger(self.db, PassengerTrip)
        for i in range(1, TRIPS + 1):
            self.drivers.add(i, make_trip(i))
            self.passengers.add(i, make_trip(i))

    def tearDown(self) -> None:
        self.db.close()


class TestAdd(LedgerTestCase):
    def test_ledgers_number_trips_independently(self) -> None:
        self.assertEqual(self.drivers.add(1, make_trip(100)), TRIPS + 1)
        self.assertEqual(self.passengers.add(1, make_trip(100)), TRIPS + 1)

    def test_duplicate_trip_is_conflict(self) -> None:
        with self.assertRaises(Conflict):
            self.drivers.add(1, make_trip(1))
        with self.assertRaises(Conflict):
            self.passengers.add(1, make_trip(1))

    def test_unknown_owner_is_invalid(self) -> None:
        with self.assertRaises(InvalidInput):
            self.drivers.add(999, make_trip(1))


class TestGetById(LedgerTestCase):
    def test_joined_with_owner(self) -> None:
        trip = self.passengers.get_by_id(5)
        self.assertEqual(trip.id, 5)
        self.assertEqual(trip.user_id, 5)
        self.assertEqual(trip.username, "username-5")
        self.assertEqual(trip.phone, "1507836005")
        self.assertEqual(trip.pickup_location, "location-5")
        self.assertEqual(trip.destination, "location-6")
        self.assertEqual(trip.price, "5.00")
        self.assertEqual(trip.departure_time, datetime(2026, 11, 1, 0, 0, 5))

    def test_absent_trip_is_none(self) -> None:
        self.assertIsNone(self.drivers.get_by_id(TRIPS + 1))


class TestList(LedgerTestCase):
    def test_first_page_in_ascending_id_order(self) -> None:
        result = self.drivers.list(PageRequest(page=0, size=10))
        self.assertEqual([t.id for t in result.items], list(range(1, 11)))
        self.assertEqual(result.items[0].username, "username-1")
        self.assertEqual(result.items[0].price, "1.00")
        self.assertTrue(result.has_more)

    def test_middle_page(self) -> None:
        result = self.passengers.list(PageRequest(page=3, size=6))
        self.assertEqual([t.id for t in result.items], list(range(19, 25)))

    def test_last_page_is_partial(self) -> None:
        result = self.drivers.list(PageRequest(page=3, size=10))
        self.assertEqual([t.id for t in result.items], list(range(31, 36)))
        self.assertFalse(result.has_more)

    def test_by_destination(self) -> None:
        result = self.drivers.list_by_destination("location-3", PageRequest())
        self.assertEqual([t.id for t in result.items], [2, 13, 24, 35])
        self.assertEqual(
            [t.username for t in result.items],
            ["username-2", "username-13", "username-24", "username-35"],
        )
        self.assertFalse(result.has_more)

    def test_by_pickup(self) -> None:
        result = self.passengers.list_by_pickup("location-2", PageRequest())
        self.assertEqual([t.id for t in result.items], [2, 12, 22, 32])

    def test_by_route(self) -> None:
        result = self.drivers.list_by_route("location-2", "location-3", PageRequest())
        self.assertEqual([t.id for t in result.items], [2])

    def test_filtered_listing_is_paginated(self) -> None:
        first = self.drivers.list_by_pickup("location-2", PageRequest(page=0, size=2))
        second = self.drivers.list_by_pickup("location-2", PageRequest(page=1, size=2))
        self.assertEqual([t.id for t in first.items], [2, 12])
        self.assertEqual([t.id for t in second.items], [22, 32])
        # Exactly full final page: has_more is still reported.
        self.assertTrue(second.has_more)


if __name__ == "__main__":
    unittest.main()
