"""
Cryptographic primitives: SHA-512 composition, PBKDF2, integer codecs.
Thin helpers over the cryptography package used by the SRP handshake.
"""

import hmac

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .errors import CryptoSetupError
from .protocol import SALTED_PASSWORD_LENGTH


def compute_hash(algorithm, *words):
    """
    Feed each word into a fresh digest in order, then finalize once.

    Args:
        algorithm: cryptography HashAlgorithm instance (e.g. hashes.SHA512())
        *words: Byte strings to hash, in order

    Returns:
        Digest bytes
    """
    digest = hashes.Hash(algorithm)
    for word in words:
        digest.update(bytes(word))
    return digest.finalize()


def derive_salted_password(password, salt, iterations, length=SALTED_PASSWORD_LENGTH,
                           algorithm=None):
    """
    Derive the salted password with PBKDF2-HMAC.

    Args:
        password: Encoded password bytes
        salt: Server-issued salt
        iterations: Positive iteration count
        length: Output length in bytes (64 by default)
        algorithm: HMAC hash (SHA-512 by default)

    Returns:
        Derived key bytes

    Raises:
        CryptoSetupError if the KDF rejects its inputs
    """
    if iterations <= 0:
        raise CryptoSetupError(f"Iteration count must be positive, got {iterations}")

    kdf = PBKDF2HMAC(
        algorithm=algorithm or hashes.SHA512(),
        length=length,
        salt=bytes(salt),
        iterations=iterations,
    )
    try:
        return kdf.derive(bytes(password))
    except (ValueError, TypeError, OverflowError) as e:
        raise CryptoSetupError(f"Key derivation failed: {e}") from e


def int_to_bytes(value):
    """Unsigned big-endian encoding with no leading zero bytes (0 -> b'')"""
    if value < 0:
        raise ValueError("Only non-negative integers have an unsigned encoding")
    return value.to_bytes((value.bit_length() + 7) // 8, byteorder='big')


def bytes_to_int(data):
    """Parse unsigned big-endian bytes"""
    return int.from_bytes(data, byteorder='big')


def pad(value, length):
    """Left-pad an integer to a fixed big-endian width"""
    return value.to_bytes(length, byteorder='big')


def xor_bytes(a, b):
    """Bytewise XOR of two equal-length byte strings"""
    if len(a) != len(b):
        raise ValueError("XOR operands must have equal length")
    return bytes(x ^ y for x, y in zip(a, b))


def secure_equals(a, b):
    """Constant-time comparison; differing lengths compare unequal"""
    return hmac.compare_digest(bytes(a), bytes(b))


def secure_zero(data):
    """
    Attempt to securely zero memory (best-effort in Python).

    Args:
        data: bytes or bytearray to zero
    """
    if isinstance(data, bytearray):
        for i in range(len(data)):
            data[i] = 0
    # For bytes (immutable), we can't truly zero in Python
