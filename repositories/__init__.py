"""
repositories/ - Data Access Layer
==================================
RelationalCatalogStore encapsulates every SQL query for accounts, albums
and the user/album bridging tables, and returns domain model objects.
"""

from repositories.catalog_store import RelationalCatalogStore

__all__ = ["RelationalCatalogStore"]
