"""
Tests for the psycopg helpers.

Run with: pytest src/databuilder/db_test.py -v
"""

from unittest.mock import MagicMock, patch

import pytest

from databuilder import config as cfg
from databuilder import db


class TestConnectionOverride:
    """Tests for the test-only connection override"""

    def test_fetch_one_uses_override(self, fake_connection):
        fake_connection.fake_cursor.fetchone.return_value = {"id": 1}

        row = db.fetch_one("SELECT * FROM animals WHERE id = %s", (1,))

        assert row == {"id": 1}
        fake_connection.fake_cursor.execute.assert_called_once_with(
            "SELECT * FROM animals WHERE id = %s", (1,)
        )
        fake_connection.commit.assert_not_called()
        fake_connection.close.assert_not_called()

    def test_fetch_all_uses_override(self, fake_connection):
        fake_connection.fake_cursor.fetchall.return_value = [{"id": 1}, {"id": 2}]

        assert db.fetch_all("SELECT * FROM animals") == [{"id": 1}, {"id": 2}]


class TestGetConnection:
    """Tests for get_connection() without an override"""

    @pytest.fixture
    def database_url(self, monkeypatch):
        monkeypatch.setattr(cfg.config, "database_url", "postgresql://localhost/databuilder_test")

    def test_missing_database_url(self, monkeypatch):
        monkeypatch.setattr(cfg.config, "database_url", None)

        with pytest.raises(RuntimeError, match="DATABASE_URL"):
            with db.get_connection():
                pass

    def test_commits_and_closes(self, database_url):
        conn = MagicMock()

        with patch("databuilder.db.psycopg.connect", return_value=conn) as connect:
            with db.get_connection() as got:
                assert got is conn

        connect.assert_called_once_with("postgresql://localhost/databuilder_test")
        conn.commit.assert_called_once()
        conn.close.assert_called_once()

    def test_rolls_back_on_error(self, database_url):
        conn = MagicMock()

        with patch("databuilder.db.psycopg.connect", return_value=conn):
            with pytest.raises(ValueError):
                with db.get_connection():
                    raise ValueError("boom")

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
        conn.close.assert_called_once()
