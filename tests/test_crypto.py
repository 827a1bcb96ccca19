import hashlib

import pytest
from cryptography.hazmat.primitives import hashes

from srpauth.core.crypto import (
    bytes_to_int, compute_hash, derive_salted_password, int_to_bytes,
    secure_equals, secure_zero, xor_bytes
)
from srpauth.core.errors import CryptoSetupError


def test_compute_hash_is_sequential_update():
    """Hashing words in order equals hashing their concatenation."""
    words = [b"alpha", b"", b"bravo", bytearray(b"charlie")]

    expected = hashlib.sha512(b"alphabravocharlie").digest()
    assert compute_hash(hashes.SHA512(), *words) == expected


def test_compute_hash_reference_vector():
    assert compute_hash(hashes.SHA512(), b"a", b"bc").hex().startswith("ddaf35a193617aba")


def test_salted_password_matches_pbkdf2_hmac_sha512():
    salt = bytes(range(16))
    derived = derive_salted_password(b"Secret123", salt, 4096)

    assert len(derived) == 64
    assert derived == hashlib.pbkdf2_hmac("sha512", b"Secret123", salt, 4096, 64)


@pytest.mark.parametrize("iterations", [0, -1])
def test_salted_password_rejects_bad_iterations(iterations):
    with pytest.raises(CryptoSetupError):
        derive_salted_password(b"pw", b"salt", iterations)


@pytest.mark.parametrize("value, encoded", [
    (0, b""),
    (1, b"\x01"),
    (255, b"\xff"),
    (256, b"\x01\x00"),
    (0x8000, b"\x80\x00"),
])
def test_int_to_bytes_is_minimal_unsigned(value, encoded):
    """No leading zero byte, even when the high bit is set."""
    assert int_to_bytes(value) == encoded
    assert bytes_to_int(encoded) == value


def test_int_to_bytes_rejects_negative():
    with pytest.raises(ValueError):
        int_to_bytes(-1)


def test_leading_zero_bytes_are_ignored_on_parse():
    assert bytes_to_int(b"\x00\x00\x01\x02") == 0x0102


def test_xor_bytes():
    assert xor_bytes(b"\x0f\xf0", b"\xff\xff") == b"\xf0\x0f"
    with pytest.raises(ValueError):
        xor_bytes(b"\x00", b"\x00\x00")


def test_secure_equals():
    assert secure_equals(b"proof", bytearray(b"proof"))
    assert not secure_equals(b"proof", b"proog")
    assert not secure_equals(b"proof", b"proof!")
    assert not secure_equals(b"", b"x")


def test_secure_zero_clears_bytearray():
    data = bytearray(b"secret")
    secure_zero(data)

    assert data == bytearray(6)


def test_secure_zero_ignores_immutable_and_none():
    secure_zero(b"secret")
    secure_zero(None)
