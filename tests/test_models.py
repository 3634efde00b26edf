"""ORM mapping: the model package imports and maps the three tables."""

import importlib
import unittest

from sqlalchemy import UniqueConstraint


class TestMapping(unittest.TestCase):
    def test_models_import_and_register_tables(self) -> None:
        models = importlib.import_module("rideshare.models")
        self.assertEqual(
            set(models.Base.metadata.tables),
            {"users", "driver_trips", "passenger_trips"},
        )

    def test_trip_tables_have_their_own_owner_column(self) -> None:
        from rideshare.models import DriverTrip, PassengerTrip

        for model in (DriverTrip, PassengerTrip):
            with self.subTest(table=model.__tablename__):
                column = model.__table__.c.user_id
                self.assertFalse(column.nullable)
                self.assertEqual(
                    [fk.target_fullname for fk in column.foreign_keys], ["users.id"]
                )
        self.assertIsNot(DriverTrip.__table__.c.user_id, PassengerTrip.__table__.c.user_id)

    def test_trip_natural_key_is_unique_per_table(self) -> None:
        from rideshare.models import DriverTrip, PassengerTrip

        for model in (DriverTrip, PassengerTrip):
            with self.subTest(table=model.__tablename__):
                names = {
                    c.name
                    for c in model.__table__.constraints
                    if isinstance(c, UniqueConstraint)
                }
                self.assertIn(f"uq_{model.__tablename__}_natural_key", names)


if __name__ == "__main__":
    unittest.main()
