"""Credentials — salted bcrypt hashing and verification.

Invariants:
    - Passwords are never stored or compared in plaintext
    - Every hash gets a fresh random salt (two hashes of one password differ)
    - A malformed stored hash raises CredentialFaultError, never returns True
    - Plaintext that was never registrable (empty, over 72 bytes) never matches

Design Decisions:
    - bcrypt over hashlib/pbkdf2: deliberately slow, salt embedded in the hash string
    - Cost factor is a parameter (settings.bcrypt_rounds) so tests can run at cost 4
"""

import bcrypt

from recordstore.core.domain_types import DEFAULT_BCRYPT_ROUNDS, MAX_PASSWORD_BYTES
from recordstore.core.errors import CredentialFaultError, PasswordHashingError


def hash_password(plaintext: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash plaintext with a fresh salt. Raises PasswordHashingError."""
    try:
        salt = bcrypt.gensalt(rounds=rounds)
        hashed = bcrypt.hashpw(plaintext.encode("utf-8"), salt)
    except (ValueError, TypeError) as e:
        raise PasswordHashingError(str(e)) from e
    return hashed.decode("utf-8")


def verify_password(plaintext: str, stored_hash: str) -> bool:
    """True only when plaintext matches stored_hash."""
    candidate = plaintext.encode("utf-8")
    # checkpw may truncate at 72 bytes instead of rejecting
    if not candidate or len(candidate) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(candidate, stored_hash.encode("utf-8"))
    except ValueError as e:
        raise CredentialFaultError() from e
