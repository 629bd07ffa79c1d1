"""
security/passwords.py
---------------------
Password hashing for user accounts.

The store only depends on the PasswordHasher protocol; CryptContextHasher
is the production implementation, backed by passlib.
"""

from typing import Optional, Protocol

from passlib.context import CryptContext

from config import PASSWORD_SCHEMES


class PasswordHasher(Protocol):
    """Anything that can turn a plaintext into a digest and check it later."""

    def hash(self, plaintext: str) -> str: ...

    def verify(self, digest: str, plaintext: str) -> bool: ...


class CryptContextHasher:
    """
    PasswordHasher backed by a passlib CryptContext.

    Args:
        schemes: passlib scheme names, preferred first. Defaults to
                 PASSWORD_SCHEMES from config. Digests produced by any listed
                 scheme still verify; new digests use the first one.
    """

    def __init__(self, schemes: Optional[list[str]] = None):
        self._context = CryptContext(schemes=schemes or PASSWORD_SCHEMES, deprecated="auto")

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def verify(self, digest: Optional[str], plaintext: str) -> bool:
        """Return False for a missing or unrecognised digest instead of raising."""
        if not digest:
            return False
        try:
            return self._context.verify(plaintext, digest)
        except ValueError:
            return False
