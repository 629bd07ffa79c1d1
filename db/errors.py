"""
db/errors.py
------------
Exception taxonomy for the catalog store.

Driver (DB-API) exceptions never leave the data layer untranslated:
`translate_db_error` maps them onto the classes below and callers
chain the original with ``raise ... from exc``.
"""


class CatalogStoreError(Exception):
    """Base class for every error raised by the catalog store."""


class NotFound(CatalogStoreError):
    """A lookup that must match a row matched nothing."""


class InvalidCredentials(CatalogStoreError):
    """The supplied password does not verify against the stored digest."""


class ConstraintViolation(CatalogStoreError):
    """The store rejected a write (foreign key, unique, not-null...)."""


class StoreConnectionError(CatalogStoreError):
    """The connection could not be opened, was lost, or is already closed."""


class QueryError(CatalogStoreError):
    """Any other failure reported by the store while running a statement."""


def translate_db_error(conn, exc: Exception) -> CatalogStoreError:
    """
    Map a DB-API exception onto the store taxonomy.

    DB-API 2.0 connections expose their driver's exception classes as
    attributes (``conn.IntegrityError`` etc.), so this works for psycopg2
    and for any other compliant driver without importing it.

    Args:
        conn: The connection the statement ran on.
        exc: The exception raised by the driver.

    Returns:
        The translated exception (not raised).
    """
    if isinstance(exc, conn.IntegrityError):
        return ConstraintViolation(str(exc).strip())
    if isinstance(exc, (conn.OperationalError, conn.InterfaceError)):
        return StoreConnectionError(str(exc).strip())
    return QueryError(str(exc).strip())
