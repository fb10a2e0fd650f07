"""Tests for accounts.core.database session helpers."""

import unittest
from unittest.mock import MagicMock, patch

from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from accounts.core import database


class TestGetDb(unittest.TestCase):
    """get_db yields one session and always closes it."""

    def test_yields_and_closes(self) -> None:
        session = MagicMock()
        with patch.object(database, "SessionLocal", return_value=session):
            gen = database.get_db()
            self.assertIs(next(gen), session)
            session.close.assert_not_called()
            with self.assertRaises(StopIteration):
                next(gen)
        session.close.assert_called_once()

    def test_closes_when_caller_fails(self) -> None:
        session = MagicMock()
        with patch.object(database, "SessionLocal", return_value=session):
            gen = database.get_db()
            next(gen)
            with self.assertRaises(RuntimeError):
                gen.throw(RuntimeError("request failed"))
        session.close.assert_called_once()


class TestCheckDbConnected(unittest.TestCase):
    """check_db_connected runs SELECT 1 and reports reachability."""

    def test_reachable_sqlite(self) -> None:
        engine = create_engine("sqlite://")
        try:
            with Session(engine) as db:
                self.assertTrue(database.check_db_connected(db))
        finally:
            engine.dispose()

    def test_unreachable_database(self) -> None:
        db = MagicMock()
        db.execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))
        self.assertFalse(database.check_db_connected(db))


if __name__ == "__main__":
    unittest.main()
