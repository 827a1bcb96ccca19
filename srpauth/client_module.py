"""
SRP Client - password authentication without sending the password
SRP-6a + PBKDF2-HMAC-SHA512 + SHA-512 proofs
"""

import socket
import threading
import unicodedata

from .core.crypto import (
    bytes_to_int, compute_hash, derive_salted_password, int_to_bytes,
    secure_equals, secure_zero
)
from .core.errors import ProtocolFormatError, TransportError
from .core.groups import lookup
from .core.params import ServerParameters, compare_parameters
from .core.protocol import (
    FramedStream, LengthEncoding,
    DEFAULT_PORT, DEFAULT_TIMEOUT, MAX_FIELD_LENGTH, MAX_ITERATIONS
)
from .core.srp6 import Srp6Client


def generate_client_proof(algorithm, kb2, identity, salt, pub_a, pub_b, key):
    # M = H(H(N) xor H(g), H(I), s, A, B, K)
    return compute_hash(algorithm, kb2, compute_hash(algorithm, identity), salt, pub_a, pub_b, key)


def generate_server_proof(algorithm, pub_a, client_proof, key):
    # H(A, M, K)
    return compute_hash(algorithm, pub_a, client_proof, key)


class SrpClient:
    """
    Authenticates a username/password against an SRP server over a stream.

    The salted password and group context are cached between calls and only
    recomputed when the server changes salt/iterations or strength. A single
    instance serialises its handshakes.
    """

    def __init__(self, username, password, verbose=False, console=None,
                 max_field_length=MAX_FIELD_LENGTH, max_iterations=MAX_ITERATIONS):
        self.username = unicodedata.normalize('NFKC', username)
        self.password = unicodedata.normalize('NFKC', password)
        self.username_bytes = self.username.encode('utf-8')
        self.password_bytes = self.password.encode('utf-8')

        self.verbose = verbose
        self.console = console
        self.max_field_length = max_field_length
        self.max_iterations = max_iterations

        # Cached server context
        self._params = None
        self._salted_password = None
        self._constants = None
        self._srp = None

        self.last_session_key = None
        self._lock = threading.Lock()

    def log(self, message):
        """Print only in verbose mode"""
        if not self.verbose:
            return
        if self.console is not None:
            self.console.print(f"[dim]{message}[/dim]")
        else:
            print(message)

    def update_server_parameters(self, strength, salt, iterations):
        """
        Refresh the cached context for the parameters the server just sent.

        Returns:
            ParameterChanges describing what was recomputed

        Raises:
            ProtocolFormatError for an iteration count above max_iterations;
            CryptoSetupError for an unknown strength or a failing KDF. The
            cache is left untouched in both cases
        """
        with self._lock:
            return self._update_server_parameters(strength, salt, iterations)

    def _update_server_parameters(self, strength, salt, iterations):
        if iterations > self.max_iterations:
            raise ProtocolFormatError(
                f"Iteration count too large: {iterations} (max: {self.max_iterations})")

        new = ServerParameters(strength, bytes(salt), iterations)
        changes = compare_parameters(self._params, new)

        constants = self._constants
        salted_password = self._salted_password

        if changes.needs_group_reselect:
            constants = lookup(strength)
            self.log(f"Selected group {constants.strength.name} ({constants.algorithm.name})")

        if changes.needs_key_derivation:
            self.log(f"Deriving salted password ({iterations} iterations)...")
            salted_password = derive_salted_password(self.password_bytes, new.salt, iterations)

        if changes.needs_group_reselect:
            self._srp = Srp6Client(constants)
        self._constants = constants
        self._salted_password = salted_password
        self._params = ServerParameters(constants.strength, new.salt, iterations)
        return changes

    def authenticate_as_client(self, stream):
        """
        Run the full handshake over stream.

        Args:
            stream: FramedStream, or a binary file-like object to wrap in one

        Returns:
            True if the server proved knowledge of the session key, else False

        Raises:
            TransportError, ProtocolFormatError, CryptoSetupError
        """
        if not isinstance(stream, FramedStream):
            stream = FramedStream(stream, max_field_length=self.max_field_length)

        with self._lock:
            return self._handshake(stream)

    def _handshake(self, stream):
        self.last_session_key = None
        srp = None
        secret = None
        key = None
        try:
            self.log("Sending username...")
            stream.write_with_length(self.username_bytes)
            stream.flush()

            self.log("Receiving server parameters...")
            salt = stream.read_bytes()
            iterations = stream.read_int32()
            strength = stream.read_int32()
            self._update_server_parameters(strength, salt, iterations)

            algorithm = self._constants.algorithm
            srp = self._srp

            self.log("Sending public value A...")
            pub_a = srp.generate_client_credentials(
                algorithm, salt, self.username_bytes, self._salted_password)
            pub_a_bytes = int_to_bytes(pub_a)
            stream.write_with_length(pub_a_bytes)
            stream.flush()

            self.log("Receiving public value B...")
            pub_b_bytes = stream.read_bytes()
            pub_b = bytes_to_int(pub_b_bytes)

            self.log("Deriving session key...")
            secret = bytearray(int_to_bytes(srp.calculate_secret(algorithm, pub_b)))
            key = bytearray(compute_hash(algorithm, secret))

            self.log("Sending client proof...")
            client_proof = generate_client_proof(
                algorithm, self._constants.kb2, self.username_bytes,
                salt, pub_a_bytes, pub_b_bytes, key
            )
            stream.write_with_length(client_proof)
            stream.flush()

            expected_server_proof = generate_server_proof(algorithm, pub_a_bytes, client_proof, key)
            server_proof = stream.read_bytes()

            if not secure_equals(expected_server_proof, server_proof):
                self.log("Server proof mismatch")
                return False

            self.last_session_key = bytes(key)
            self.log("Server proof verified")
            return True
        finally:
            if srp is not None:
                srp.clear()
            secure_zero(secret)
            secure_zero(key)

    def authenticate(self, host, port=DEFAULT_PORT, timeout=DEFAULT_TIMEOUT,
                     length_encoding=LengthEncoding.FIXED):
        """
        Connect to host:port and authenticate.

        Raises:
            TransportError if the connection cannot be established
        """
        self.log(f"Connecting to {host}:{port}...")
        try:
            sock = socket.create_connection((host, port), timeout=timeout)
        except OSError as e:
            raise TransportError(f"Could not connect to {host}:{port}: {e}") from e

        stream = FramedStream.from_socket(
            sock, length_encoding=length_encoding, max_field_length=self.max_field_length)
        try:
            return self.authenticate_as_client(stream)
        finally:
            try:
                stream.close()
            except TransportError as e:
                self.log(f"Close failed: {e}")
            sock.close()
