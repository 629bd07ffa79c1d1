"""
models/user.py
--------------
Domain model for user accounts.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class User:
    """
    Represents an account row.

    Attributes:
        username: Unique, case-sensitive login name.
        password: The hasher's digest. Plaintext is never stored here.
        email: Contact address (uniqueness not enforced).
        id: Database primary key (None for new records).
        created_at: Timestamp when the record was created.
    """
    username: str
    password: str = field(repr=False)
    email: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
