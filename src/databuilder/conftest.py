# src/databuilder/conftest.py
"""
Pytest configuration and shared fixtures.

Tests are co-located with implementation files using the *_test.py suffix.
This file provides fixtures available to all tests in the package.
"""

import os

# Set environment BEFORE importing any package modules
os.environ["DATABUILDER_ENV"] = "test"

from unittest.mock import MagicMock

import pytest

from databuilder import db
from databuilder.cache import RepoCache
from databuilder.schema import put

# =============================================================================
# Cache Fixtures
# =============================================================================


@pytest.fixture
def start() -> RepoCache:
    """An empty repo cache."""
    return RepoCache.empty()


@pytest.fixture
def fake_animal() -> dict:
    """An animal whose association hasn't been loaded."""
    return {"id": "bossie_id", "association": "unloaded"}


@pytest.fixture
def animal_cache(start) -> RepoCache:
    """
    A cache with two animals and a procedure.

    Values are plain strings so tests can compare them directly.
    """
    cache = put(start, "animal", "bossie", "bossie")
    cache = put(cache, "animal", "jake", "jake")
    return put(cache, "procedure", "haltering", "haltering")


def tag_loader(schema, value: dict) -> dict:
    """Loader that marks a value as fully loaded."""
    return {**value, "association": {"note": "association loaded"}}


@pytest.fixture
def loader():
    return tag_loader


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def fake_connection():
    """
    Provide a mock psycopg connection installed as the db override.

    The cursor used by db.fetch_one()/fetch_all() is available as
    `fake_connection.fake_cursor`.
    """
    conn = MagicMock()
    cursor = MagicMock()
    conn.cursor.return_value.__enter__.return_value = cursor
    conn.fake_cursor = cursor

    db.set_connection_override(conn)

    yield conn

    db.clear_connection_override()
