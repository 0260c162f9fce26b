"""Credentials — bcrypt hashing and verification.

Invariants:
    - Hashes never equal the plaintext
    - Same password hashed twice gives different hashes (salted), both verify
    - Wrong password does not verify
    - Empty or over-72-byte plaintext never verifies, even against its prefix
    - Malformed stored hash raises CredentialFaultError (not a crash, not True)
    - Invalid cost factor raises PasswordHashingError
"""

import pytest

from recordstore.core.credentials import hash_password, verify_password
from recordstore.core.errors import CredentialFaultError, PasswordHashingError


def test_hash_is_not_plaintext():
    hashed = hash_password("secret", rounds=4)
    assert hashed != "secret"
    assert hashed.startswith("$2")


def test_hash_uses_requested_cost():
    assert hash_password("secret", rounds=5).split("$")[2] == "05"


def test_same_password_hashes_differ_and_both_verify():
    first = hash_password("secret", rounds=4)
    second = hash_password("secret", rounds=4)
    assert first != second
    assert verify_password("secret", first)
    assert verify_password("secret", second)


def test_wrong_password_does_not_verify():
    hashed = hash_password("secret", rounds=4)
    assert verify_password("wrong", hashed) is False


def test_over_long_password_does_not_match_its_prefix():
    prefix = "p" * 72
    hashed = hash_password(prefix, rounds=4)
    assert verify_password(prefix, hashed)
    assert verify_password(prefix + "extra", hashed) is False


def test_empty_password_does_not_verify():
    hashed = hash_password("secret", rounds=4)
    assert verify_password("", hashed) is False


def test_unicode_password_roundtrips():
    hashed = hash_password("pässwörd-密码", rounds=4)
    assert verify_password("pässwörd-密码", hashed)


def test_plaintext_stored_password_is_a_credential_fault():
    """Snapshots from the plaintext variant hold no bcrypt hash."""
    with pytest.raises(CredentialFaultError):
        verify_password("secret", "secret")


def test_invalid_cost_factor_raises_hashing_error():
    with pytest.raises(PasswordHashingError) as exc_info:
        hash_password("secret", rounds=2)
    assert exc_info.value.http_status == 500
    assert "2" not in exc_info.value.message
