"""
Shared fixtures: a scripted SRP server running on one end of a socketpair.
"""

import io
import socket
import threading

import pytest

from srpauth.core.crypto import (
    bytes_to_int, compute_hash, derive_salted_password, int_to_bytes
)
from srpauth.core.groups import lookup
from srpauth.core.protocol import FramedStream, LengthEncoding, SrpStrength
from srpauth.core.srp6 import calculate_u, calculate_x

USERNAME = "alice"
PASSWORD = "Secret123"
SALT = bytes(range(16))
ITERATIONS = 4096
STRENGTH = SrpStrength.BITS_1024

SERVER_PRIVATE = int.from_bytes(bytes(range(100, 132)), "big")
CLIENT_PRIVATE = int.from_bytes(bytes(range(200, 232)), "big")


class ScriptedServer:
    """Server half of the handshake, with optional faults"""

    def __init__(self, password=PASSWORD, salt=SALT, iterations=ITERATIONS,
                 strength=STRENGTH, b=SERVER_PRIVATE, tamper_proof=False,
                 length_encoding=LengthEncoding.FIXED):
        self.password = password.encode("utf-8")
        self.salt = salt
        self.iterations = iterations
        self.strength = strength
        self.b = b
        self.tamper_proof = tamper_proof
        self.length_encoding = length_encoding

        self.identity = None
        self.client_proof = None
        self.client_proof_valid = None
        self.session_key = None
        self.error = None

    def serve(self, sock):
        stream = FramedStream.from_socket(sock, length_encoding=self.length_encoding)
        try:
            self._run(stream)
        except Exception as e:
            self.error = e
        finally:
            try:
                stream.close()
            finally:
                sock.close()

    def _run(self, stream):
        constants = lookup(self.strength)
        algorithm = constants.algorithm
        N, g = constants.N, constants.g

        self.identity = stream.read_bytes()
        stream.write_with_length(self.salt)
        stream.write_int32(self.iterations)
        stream.write_int32(int(self.strength))
        stream.flush()

        salted = derive_salted_password(self.password, self.salt, self.iterations)
        x = calculate_x(algorithm, self.salt, self.identity, salted)
        v = pow(g, x, N)

        pub_a_bytes = stream.read_bytes()
        A = bytes_to_int(pub_a_bytes)

        B = (constants.k * v + pow(g, self.b, N)) % N
        pub_b_bytes = int_to_bytes(B)
        stream.write_with_length(pub_b_bytes)
        stream.flush()

        u = calculate_u(algorithm, constants, A, B)
        S = pow(A * pow(v, u, N), self.b, N)
        K = compute_hash(algorithm, int_to_bytes(S))
        self.session_key = K

        self.client_proof = stream.read_bytes()
        expected = compute_hash(
            algorithm, constants.kb2, compute_hash(algorithm, self.identity),
            self.salt, pub_a_bytes, pub_b_bytes, K
        )
        self.client_proof_valid = expected == self.client_proof

        server_proof = bytearray(compute_hash(algorithm, pub_a_bytes, self.client_proof, K))
        if self.tamper_proof:
            server_proof[0] ^= 0x01
        stream.write_with_length(bytes(server_proof))
        stream.flush()


def run_handshake(client, server, length_encoding=LengthEncoding.FIXED):
    """Authenticate client against server over a fresh socketpair"""
    client_sock, server_sock = socket.socketpair()
    client_sock.settimeout(10)
    server_sock.settimeout(10)

    thread = threading.Thread(target=server.serve, args=(server_sock,), daemon=True)
    thread.start()

    stream = FramedStream.from_socket(client_sock, length_encoding=length_encoding)
    try:
        return client.authenticate_as_client(stream)
    finally:
        stream.close()
        client_sock.close()
        thread.join(timeout=10)


class ScriptedStream:
    """In-memory stream: reads come from a prepared buffer, writes are recorded"""

    def __init__(self, inbound=b""):
        self.inbound = io.BytesIO(inbound)
        self.outbound = io.BytesIO()
        self.flushes = 0

    def read(self, n):
        return self.inbound.read(n)

    def write(self, data):
        return self.outbound.write(data)

    def flush(self):
        self.flushes += 1


@pytest.fixture
def pinned_client_randomness(monkeypatch):
    """Make every client ephemeral value deterministic"""
    from srpauth.core.srp6 import Srp6Client
    monkeypatch.setattr(Srp6Client, "select_private_value", lambda self: CLIENT_PRIVATE)
    return CLIENT_PRIVATE
