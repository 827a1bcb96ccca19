"""
SRP-6a client arithmetic over an RFC 5054 group.

    x = H(s | H(I | ":" | P))
    A = g^a mod N
    u = H(PAD(A) | PAD(B))
    S = (B - k * g^x) ^ (a + u * x) mod N

P is the PBKDF2 salted password, never the raw password.
"""

import secrets

from .crypto import bytes_to_int, compute_hash
from .errors import CryptoSetupError

# Upper bound on the private exponent size in bits
MAX_PRIVATE_BITS = 256


def calculate_x(algorithm, salt, identity, password):
    """Private key x = H(s | H(I | ":" | P))"""
    inner = compute_hash(algorithm, identity, b':', password)
    return bytes_to_int(compute_hash(algorithm, salt, inner))


def calculate_u(algorithm, constants, A, B):
    """Scrambling parameter u = H(PAD(A) | PAD(B))"""
    return bytes_to_int(compute_hash(algorithm, constants.pad(A), constants.pad(B)))


def validate_public_value(N, value):
    """Reject peer public values that are 0 mod N"""
    value = value % N
    if value == 0:
        raise CryptoSetupError("Invalid public value: 0 mod N")
    return value


class Srp6Client:
    """
    Group context bound to one SrpConstants instance.

    Holds the private ephemeral value between generate_client_credentials()
    and calculate_secret(); call clear() once the handshake is over.
    """

    def __init__(self, constants):
        self.constants = constants
        self.x = None
        self.a = None
        self.A = None

    def select_private_value(self):
        """Random a in [2^(min(256, |N|/2) - 1), N - 1]"""
        N = self.constants.N
        min_bits = min(MAX_PRIVATE_BITS, N.bit_length() // 2)
        low = 1 << (min_bits - 1)
        return low + secrets.randbelow(N - low)

    def generate_client_credentials(self, algorithm, salt, identity, password):
        """
        Pick the private ephemeral value and compute A.

        Args:
            algorithm: Digest instance
            salt: Server salt
            identity: Encoded username
            password: Salted password bytes

        Returns:
            Client public value A as an int
        """
        N = self.constants.N
        self.x = calculate_x(algorithm, salt, identity, password)
        self.a = self.select_private_value()
        self.A = pow(self.constants.g, self.a, N)
        return self.A

    def calculate_secret(self, algorithm, server_b):
        """
        Compute the premaster secret S from the server's public value.

        Raises:
            CryptoSetupError if called out of order or B/u are degenerate
        """
        if self.A is None:
            raise CryptoSetupError("Client credentials must be generated before the secret")

        N = self.constants.N
        g = self.constants.g
        B = validate_public_value(N, server_b)
        u = calculate_u(algorithm, self.constants, self.A, B)
        if u == 0:
            raise CryptoSetupError("Invalid scrambling parameter u = 0")

        base = (B - self.constants.k * pow(g, self.x, N)) % N
        return pow(base, self.a + u * self.x, N)

    def clear(self):
        """Drop ephemeral state"""
        self.x = None
        self.a = None
        self.A = None
