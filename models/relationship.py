"""
models/relationship.py
----------------------
Relationship tags between a user and an album.

Each tag lives in its own bridging table. The table name is looked up
from BRIDGE_TABLES, never formatted from caller input, so it is the only
value ever interpolated into SQL text.
"""

from enum import Enum


class RelationshipTag(str, Enum):
    LIKED = "liked"
    PASSED = "passed"
    RECOMMENDED = "recommended"

    @property
    def table(self) -> str:
        """Name of the bridging table backing this tag."""
        return BRIDGE_TABLES[self]


BRIDGE_TABLES: dict[RelationshipTag, str] = {
    RelationshipTag.LIKED: "liked_albums",
    RelationshipTag.PASSED: "passed_albums",
    RelationshipTag.RECOMMENDED: "recommended_albums",
}
