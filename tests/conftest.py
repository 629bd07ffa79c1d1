"""
Shared fixtures: an in-memory SQLite connection that looks enough like a
psycopg2 one for RelationalCatalogStore, and a fast deterministic hasher.
"""

import hashlib
import re
import sqlite3

import pytest

from repositories.catalog_store import RelationalCatalogStore

_PYFORMAT = re.compile(r"%\((\w+)\)s")

SQLITE_SCHEMA = """
CREATE TABLE users (
    user_id     INTEGER PRIMARY KEY AUTOINCREMENT,
    username    TEXT UNIQUE NOT NULL,
    password    TEXT NOT NULL,
    email       TEXT,
    created_at  TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
CREATE TABLE albums (
    album_id          INTEGER PRIMARY KEY AUTOINCREMENT,
    album_name        TEXT NOT NULL,
    album_artist      TEXT NOT NULL,
    album_uri         TEXT UNIQUE NOT NULL,
    album_image_link  TEXT
);
CREATE TABLE liked_albums (
    user_id   INTEGER NOT NULL REFERENCES users(user_id),
    album_id  INTEGER NOT NULL REFERENCES albums(album_id),
    PRIMARY KEY (user_id, album_id)
);
CREATE TABLE passed_albums (
    user_id   INTEGER NOT NULL REFERENCES users(user_id),
    album_id  INTEGER NOT NULL REFERENCES albums(album_id),
    PRIMARY KEY (user_id, album_id)
);
CREATE TABLE recommended_albums (
    user_id   INTEGER NOT NULL REFERENCES users(user_id),
    album_id  INTEGER NOT NULL REFERENCES albums(album_id),
    PRIMARY KEY (user_id, album_id)
);
"""


class _SQLiteCursor:
    """Cursor wrapper: context manager + psycopg2 named placeholders."""

    def __init__(self, cur: sqlite3.Cursor):
        self._cur = cur

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self._cur.close()

    def execute(self, sql, params=None):
        self._cur.execute(_PYFORMAT.sub(r":\1", sql), params or {})

    def fetchone(self):
        return self._cur.fetchone()

    def fetchall(self):
        return self._cur.fetchall()

    @property
    def rowcount(self):
        return self._cur.rowcount


class SQLiteConnection:
    """DB-API connection adapter over sqlite3 with the catalog schema loaded."""

    Error = sqlite3.Error
    IntegrityError = sqlite3.IntegrityError
    OperationalError = sqlite3.OperationalError
    InterfaceError = sqlite3.InterfaceError

    def __init__(self):
        self.raw = sqlite3.connect(":memory:")
        self.raw.execute("PRAGMA foreign_keys = ON")
        self.raw.executescript(SQLITE_SCHEMA)
        self.closed = False
        self.close_calls = 0

    def cursor(self):
        return _SQLiteCursor(self.raw.cursor())

    def commit(self):
        self.raw.commit()

    def rollback(self):
        self.raw.rollback()

    def close(self):
        self.close_calls += 1
        self.closed = True
        self.raw.close()


class FakeHasher:
    """Deterministic sha256 hasher so tests don't pay for key stretching."""

    def hash(self, plaintext):
        return "sha256$" + hashlib.sha256(plaintext.encode()).hexdigest()

    def verify(self, digest, plaintext):
        return digest == self.hash(plaintext)


@pytest.fixture
def connection():
    return SQLiteConnection()


@pytest.fixture
def store(connection):
    with RelationalCatalogStore(connection, hasher=FakeHasher()) as s:
        yield s


@pytest.fixture
def alice(store):
    return store.register("alice", "pw1", "a@x.com")
