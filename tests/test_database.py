"""Tests for inkpost.core.database: engine construction and the connectivity probe."""

import threading
import unittest
from unittest.mock import MagicMock

from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from inkpost.core.database import check_db_connected, make_engine


class TestMakeEngine(unittest.TestCase):
    """SQLite engines may be used from threads other than the one that connected."""

    def test_sqlite_connection_usable_from_another_thread(self) -> None:
        engine = make_engine("sqlite://", poolclass=StaticPool)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        results: list[int] = []

        def worker() -> None:
            with engine.connect() as conn:
                results.append(conn.execute(text("SELECT 1")).scalar_one())

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()
        self.assertEqual(results, [1])

    def test_extra_connect_args_are_kept(self) -> None:
        engine = make_engine("sqlite://", connect_args={"timeout": 5})
        with engine.connect() as conn:
            self.assertEqual(conn.execute(text("SELECT 1")).scalar_one(), 1)


class TestCheckDbConnected(unittest.TestCase):
    def test_connected(self) -> None:
        with Session(make_engine("sqlite://")) as db:
            self.assertTrue(check_db_connected(db))

    def test_store_error_reports_disconnected(self) -> None:
        db = MagicMock()
        db.execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))
        self.assertFalse(check_db_connected(db))


if __name__ == "__main__":
    unittest.main()
