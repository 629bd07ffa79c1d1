"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Users table: accounts; password holds the hasher's digest, never plaintext
CREATE TABLE IF NOT EXISTS users (
    user_id         SERIAL PRIMARY KEY,
    username        VARCHAR(100) UNIQUE NOT NULL,
    password        VARCHAR(255) NOT NULL,
    email           VARCHAR(255),
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Albums table: the catalog; album_uri is the natural key for lookups
CREATE TABLE IF NOT EXISTS albums (
    album_id          SERIAL PRIMARY KEY,
    album_name        VARCHAR(255) NOT NULL,
    album_artist      VARCHAR(255) NOT NULL,
    album_uri         VARCHAR(255) UNIQUE NOT NULL,
    album_image_link  TEXT
);

-- Bridging tables: one per relationship tag, one row per (user, album)
CREATE TABLE IF NOT EXISTS liked_albums (
    user_id     INT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
    album_id    INT NOT NULL REFERENCES albums(album_id) ON DELETE CASCADE,
    PRIMARY KEY (user_id, album_id)
);

CREATE TABLE IF NOT EXISTS passed_albums (
    user_id     INT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
    album_id    INT NOT NULL REFERENCES albums(album_id) ON DELETE CASCADE,
    PRIMARY KEY (user_id, album_id)
);

CREATE TABLE IF NOT EXISTS recommended_albums (
    user_id     INT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
    album_id    INT NOT NULL REFERENCES albums(album_id) ON DELETE CASCADE,
    PRIMARY KEY (user_id, album_id)
);

-- The primary keys cover user_id lookups; album_id needs its own for the joins
CREATE INDEX IF NOT EXISTS idx_liked_album ON liked_albums(album_id);
CREATE INDEX IF NOT EXISTS idx_passed_album ON passed_albums(album_id);
CREATE INDEX IF NOT EXISTS idx_recommended_album ON recommended_albums(album_id);
"""


def create_tables(conn) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).

    Args:
        conn: An open psycopg2 connection. It is not closed here.
    """
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise


if __name__ == "__main__":
    from config import DATABASE_URL
    from db.connection import open_connection, close_connection

    connection = open_connection(DATABASE_URL)
    try:
        create_tables(connection)
    finally:
        close_connection(connection)
    print("Database schema created successfully.")
