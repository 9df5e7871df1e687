"""Credentials — salted password hashing and constant-time verification.

Invariants:
    - Plain passwords are never stored or compared directly
    - verify_password runs a full hash comparison even for unknown users
      (login timing does not reveal whether an email is registered)
    - The stand-in hash for unknown users uses the same method as real hashes,
      so both paths cost the same
"""

from functools import lru_cache

from werkzeug.security import check_password_hash, generate_password_hash

DEFAULT_METHOD = "scrypt"


@lru_cache
def _dummy_hash(method: str) -> str:
    """Compared against when the email is unknown; never matches a real password."""
    return generate_password_hash("not-a-real-password", method=method)


def hash_password(password: str, method: str = DEFAULT_METHOD) -> str:
    return generate_password_hash(password, method=method)


def verify_password(
    password_hash: str | None, password: str, method: str = DEFAULT_METHOD,
) -> bool:
    """Constant-time check; password_hash=None means 'no such user'.

    method must match the one passed to hash_password for stored credentials.
    """
    if password_hash is None:
        check_password_hash(_dummy_hash(method), password)
        return False
    return check_password_hash(password_hash, password)
