"""Password hashing.

New hashes use ``bcrypt_sha256``: the password is pre-hashed with SHA-256,
so characters past bcrypt's 72-byte limit still count. Plain ``bcrypt``
hashes (``$2a$``/``$2b$``, as written by older account stores) still
verify, and are flagged for rehashing.
"""

import secrets
from functools import lru_cache

from passlib.context import CryptContext

_context = CryptContext(schemes=["bcrypt_sha256", "bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return _context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return _context.verify(plain_password, hashed_password)


def needs_update(hashed_password: str) -> bool:
    """True for hashes made with a deprecated scheme or outdated cost."""
    return _context.needs_update(hashed_password)


@lru_cache(maxsize=1)
def _decoy_hash() -> str:
    return hash_password(secrets.token_urlsafe(16))


def verify_against_decoy(plain_password: str) -> bool:
    """Spend the same hashing work as a real check, for logins with no matching account."""
    return _context.verify(plain_password, _decoy_hash())
