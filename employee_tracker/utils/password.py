from typing import Optional, Tuple

from passlib.context import CryptContext

# "plaintext" is listed last and deprecated so rows created before hashing
# still verify and get re-hashed on the next successful login.
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "plaintext"], deprecated=["plaintext"])


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> Tuple[bool, Optional[str]]:
    """Return (matches, replacement_hash). replacement_hash is set when the stored value is outdated."""
    return pwd_context.verify_and_update(plain_password, hashed_password)
