"""
models/album.py
---------------
Domain model for catalog albums.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Album:
    """
    Represents a single album in the catalog.

    Attributes:
        name: Album title.
        artist: Performing artist.
        uri: External URI (e.g. ``spotify:album:...``), unique per album.
        image_link: URL of the cover art.
        id: Database primary key (None for new records). Ignored by ``==``
            so an album read back from the store equals the one inserted.
    """
    name: str
    artist: str
    uri: str
    image_link: Optional[str] = None
    id: Optional[int] = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"{self.name} - {self.artist} ({self.uri})"
