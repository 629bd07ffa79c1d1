"""
repositories/catalog_store.py
-----------------------------
Data access layer for accounts, the album catalog, and the
user <-> album bridging tables (liked, passed, recommended).

Failure signalling differs per operation and is part of the contract:
    - Lookups that must find a row raise NotFound.
    - login raises NotFound / InvalidCredentials.
    - change_password, change_email and remove_relationship return a bool.
      change_email additionally turns any store failure into False.
    - Everything else lets translated store errors propagate.
"""

from typing import Optional, Union

from db.connection import close_connection, open_connection
from db.errors import (
    CatalogStoreError,
    InvalidCredentials,
    NotFound,
    StoreConnectionError,
    translate_db_error,
)
from models.album import Album
from models.relationship import BRIDGE_TABLES, RelationshipTag
from models.user import User
from security.passwords import CryptContextHasher, PasswordHasher
from utils.logger import get_logger

logger = get_logger(__name__)

_ALBUM_COLUMNS = (
    "albums.album_id, albums.album_name, albums.album_artist, "
    "albums.album_uri, albums.album_image_link"
)


class RelationalCatalogStore:
    """
    Owns one database connection and runs every catalog query over it.

    Each public method is its own transaction: committed on success,
    rolled back on failure. There is no locking, so one instance must not
    be shared between threads without external serialization.

    Usage:
        with RelationalCatalogStore.open(DATABASE_URL) as store:
            user_id = store.register("alice", "pw1", "a@x.com")
    """

    def __init__(self, conn, hasher: Optional[PasswordHasher] = None):
        """
        Args:
            conn: An open DB-API connection. The store takes ownership and
                  closes it in close().
            hasher: Password hasher; defaults to CryptContextHasher().
        """
        self._conn = conn
        self._hasher = hasher or CryptContextHasher()
        self._closed = False

    @classmethod
    def open(cls, dsn: str, hasher: Optional[PasswordHasher] = None) -> "RelationalCatalogStore":
        """
        Connect to `dsn` and return a store owning that connection.

        Raises:
            StoreConnectionError: If the target is unreachable, rejects
                the credentials, or the DSN is malformed.
        """
        return cls(open_connection(dsn), hasher)

    # ── LIFECYCLE ─────────────────────────────────────────

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Close the underlying connection. Further calls are no-ops."""
        if self._closed:
            return
        self._closed = True
        close_connection(self._conn)

    def __enter__(self) -> "RelationalCatalogStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ── ACCOUNTS ──────────────────────────────────────────

    def get_user_id(self, username: str) -> int:
        """
        Look up a user_id by exact (case-sensitive) username.

        Raises:
            NotFound: If no user has that username.
        """
        sql = "SELECT user_id FROM users WHERE username = %(username)s;"
        row = self._execute(sql, {"username": username}, fetch="one")
        if row is None:
            raise NotFound(f"Unable to retrieve user_id for {username}")
        return row[0]

    def get_user(self, username: str) -> User:
        """
        Fetch the full account row, digest included.

        Raises:
            NotFound: If no user has that username.
        """
        sql = """
            SELECT user_id, username, password, email, created_at
            FROM users WHERE username = %(username)s;
        """
        row = self._execute(sql, {"username": username}, fetch="one")
        if row is None:
            raise NotFound(f"Username {username} does not exist")
        return User(id=row[0], username=row[1], password=row[2], email=row[3], created_at=row[4])

    def register(self, username: str, password: str, email: Optional[str]) -> int:
        """
        Create an account and return its generated user_id.

        The password is hashed before it reaches the store. Existing
        usernames are not checked here; the UNIQUE constraint rejects them.

        Raises:
            ConstraintViolation: If the username is already taken.
        """
        sql = """
            INSERT INTO users (username, password, email)
            VALUES (%(username)s, %(password)s, %(email)s)
            RETURNING user_id;
        """
        params = {"username": username, "password": self._hasher.hash(password), "email": email}
        user_id = self._execute(sql, params, fetch="one")[0]
        logger.info(f"Registered user {username} as #{user_id}")
        return user_id

    def login(self, username: str, password: str) -> int:
        """
        Check credentials and return the user_id.

        Raises:
            NotFound: If the username does not exist.
            InvalidCredentials: If the password does not match.
        """
        user = self.get_user(username)
        if not self._hasher.verify(user.password, password):
            logger.warning(f"Rejected login for {username}: invalid password")
            raise InvalidCredentials(f"Invalid password for {username}")
        return user.id

    def change_password(self, user_id: int, old_password: str, new_password: str) -> bool:
        """
        Replace the password if `old_password` verifies.

        Returns:
            True if exactly one row was updated. False if the old password
            is wrong or the user does not exist; the store is not written.
        """
        sql = "SELECT password FROM users WHERE user_id = %(user_id)s;"
        row = self._execute(sql, {"user_id": user_id}, fetch="one")
        if row is None or not self._hasher.verify(row[0], old_password):
            logger.warning(f"Refused password change for user #{user_id}")
            return False

        sql = "UPDATE users SET password = %(password)s WHERE user_id = %(user_id)s;"
        params = {"user_id": user_id, "password": self._hasher.hash(new_password)}
        return self._execute(sql, params) == 1

    def change_email(self, user_id: int, new_email: str) -> bool:
        """
        Set a new email address.

        Returns:
            True if exactly one row changed. Store failures are logged and
            reported as False rather than raised.
        """
        sql = "UPDATE users SET email = %(email)s WHERE user_id = %(user_id)s;"
        try:
            return self._execute(sql, {"user_id": user_id, "email": new_email}) == 1
        except CatalogStoreError as e:
            logger.warning(f"Could not change email for user #{user_id}: {e}")
            return False

    def get_email(self, user_id: int) -> str:
        """
        Raises:
            NotFound: If the user does not exist or has no email.
        """
        sql = "SELECT email FROM users WHERE user_id = %(user_id)s;"
        row = self._execute(sql, {"user_id": user_id}, fetch="one")
        if row is None or row[0] is None:
            raise NotFound(f"Cannot find email for user #{user_id}")
        return row[0]

    # ── CATALOG ───────────────────────────────────────────

    def insert_album(self, album: Album) -> None:
        """
        Insert an album. No duplicate check is made here.

        Raises:
            ConstraintViolation: If the URI already exists.
        """
        sql = """
            INSERT INTO albums (album_name, album_uri, album_artist, album_image_link)
            VALUES (%(name)s, %(uri)s, %(artist)s, %(image_link)s);
        """
        self._execute(sql, {
            "name": album.name,
            "uri": album.uri,
            "artist": album.artist,
            "image_link": album.image_link,
        })
        logger.info(f"Inserted album {album}")

    def get_album(self, album_uri: str) -> Album:
        """
        Fetch an album by URI.

        Raises:
            NotFound: If no album has that URI.
        """
        sql = f"SELECT {_ALBUM_COLUMNS} FROM albums WHERE album_uri = %(album_uri)s LIMIT 1;"
        row = self._execute(sql, {"album_uri": album_uri}, fetch="one")
        if row is None:
            raise NotFound(f"Cannot find album {album_uri}")
        return self._row_to_album(row)

    # ── RELATIONSHIPS ─────────────────────────────────────

    def add_relationship(
        self, user_id: int, album_key: Union[int, str], tag: RelationshipTag
    ) -> None:
        """
        Bridge a user and an album under `tag`.

        Args:
            user_id: The user.
            album_key: An album_id (int) or an album URI (str). The URI is
                resolved with a subquery in the same statement.
            tag: Which bridging table to insert into.

        Raises:
            ConstraintViolation: If the user or album does not exist, or the
                pair is already bridged under this tag.
        """
        table = self._table_for(tag)
        if isinstance(album_key, bool) or not isinstance(album_key, (int, str)):
            raise TypeError(f"album_key must be an album id or URI, got {album_key!r}")

        if isinstance(album_key, int):
            sql = f"INSERT INTO {table} (user_id, album_id) VALUES (%(user_id)s, %(album_key)s);"
        else:
            sql = f"""
                INSERT INTO {table} (user_id, album_id)
                VALUES (%(user_id)s, (SELECT album_id FROM albums WHERE album_uri = %(album_key)s));
            """
        self._execute(sql, {"user_id": user_id, "album_key": album_key})

    def list_relationships(
        self,
        user_id: int,
        tag: RelationshipTag,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[Album]:
        """
        Albums bridged to the user under `tag`.

        Rows come back in the store's natural order (no ORDER BY), so page
        boundaries are only stable while the bridging table is not modified.

        Args:
            limit: Page size; None returns every row.
            offset: Rows to skip (None means 0); only allowed together with `limit`.
        """
        table = self._table_for(tag)
        sql = (
            f"SELECT {_ALBUM_COLUMNS} FROM albums "
            f"JOIN {table} ON {table}.album_id = albums.album_id "
            f"WHERE {table}.user_id = %(user_id)s"
        )
        params: dict = {"user_id": user_id}
        offset = offset or 0

        if limit is not None:
            if limit < 0 or offset < 0:
                raise ValueError("limit and offset must be non-negative")
            sql += " LIMIT %(limit)s OFFSET %(offset)s"
            params.update(limit=limit, offset=offset)
        elif offset:
            raise ValueError("offset requires a limit")

        rows = self._execute(sql + ";", params, fetch="all")
        return [self._row_to_album(r) for r in rows]

    def remove_relationship(self, user_id: int, album_uri: str, tag: RelationshipTag) -> bool:
        """
        Un-bridge a user and an album under `tag`.

        Returns:
            True if exactly one row was deleted, False otherwise.
        """
        table = self._table_for(tag)
        sql = f"""
            DELETE FROM {table}
            WHERE user_id = %(user_id)s
              AND album_id = (SELECT album_id FROM albums WHERE album_uri = %(album_uri)s);
        """
        return self._execute(sql, {"user_id": user_id, "album_uri": album_uri}) == 1

    def get_all_interacted_albums(self, user_id: int) -> list[Album]:
        """
        Every album the user has any relationship with, once each.

        LEFT JOINs keep an album whenever any single bridging table matches;
        an INNER JOIN would drop users missing from even one of them.
        """
        joins = " ".join(
            f"LEFT JOIN {t} ON {t}.album_id = albums.album_id" for t in BRIDGE_TABLES.values()
        )
        where = " OR ".join(f"{t}.user_id = %(user_id)s" for t in BRIDGE_TABLES.values())
        sql = f"SELECT DISTINCT {_ALBUM_COLUMNS} FROM albums {joins} WHERE {where};"
        rows = self._execute(sql, {"user_id": user_id}, fetch="all")
        return [self._row_to_album(r) for r in rows]

    # ── HELPERS ───────────────────────────────────────────

    def _execute(self, sql: str, params: dict, fetch: Optional[str] = None):
        """
        Run one statement as its own transaction.

        Args:
            fetch: "one" for a single row (or None), "all" for a list of
                   rows, None for the affected row count.

        Raises:
            StoreConnectionError: If the store is closed or the link dropped.
            ConstraintViolation / QueryError: Translated driver errors.
        """
        if self._closed:
            raise StoreConnectionError("Store is closed")

        conn = self._conn
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                if fetch == "one":
                    result = cur.fetchone()
                elif fetch == "all":
                    result = cur.fetchall()
                else:
                    result = cur.rowcount
            conn.commit()
            return result
        except conn.Error as e:
            self._rollback()
            logger.error(f"Query failed: {e}")
            raise translate_db_error(conn, e) from e

    def _rollback(self) -> None:
        try:
            self._conn.rollback()
        except self._conn.Error as e:
            logger.warning(f"Rollback failed: {e}")

    @staticmethod
    def _table_for(tag: RelationshipTag) -> str:
        """Resolve a tag (or its string value) to its fixed bridging table."""
        return RelationshipTag(tag).table

    @staticmethod
    def _row_to_album(row: tuple) -> Album:
        """Convert a database row tuple to an Album domain object."""
        return Album(
            id=row[0],
            name=row[1],
            artist=row[2],
            uri=row[3],
            image_link=row[4],
        )
