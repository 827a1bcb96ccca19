"""
Wire format constants and framing for the SRP client handshake.

Message order (client view):
    C->S  username              [len][bytes]
    S->C  salt                  [len][bytes]
    S->C  iterations            [4B signed int]
    S->C  strength              [4B signed int]
    C->S  A                     [len][unsigned big-endian]
    S->C  B                     [len][unsigned big-endian]
    C->S  M1                    [len][digest]
    S->C  M2                    [len][digest]

Fixed framing uses network byte order throughout. Seven-bit framing follows
.NET BinaryWriter: varint length prefixes and little-endian int32 fields.
"""

import struct
from enum import IntEnum

from .errors import ProtocolFormatError, TransportError

# Maximum field size for DoS protection
MAX_FIELD_LENGTH = 65536

# Longest 7-bit varint that can carry a 32-bit length
MAX_VARINT_BYTES = 5

# Upper bound on the server-declared PBKDF2 iteration count
MAX_ITERATIONS = 10000000

SALTED_PASSWORD_LENGTH = 64

DEFAULT_PORT = 5000
DEFAULT_TIMEOUT = 300

_INT32 = struct.Struct('!i')
_UINT32 = struct.Struct('!I')
_INT32_LE = struct.Struct('<i')


class SrpStrength(IntEnum):
    """Group selector sent by the server. Values are the prime size in bits"""
    BITS_1024 = 1024
    BITS_1536 = 1536
    BITS_2048 = 2048
    BITS_3072 = 3072
    BITS_4096 = 4096
    BITS_6144 = 6144
    BITS_8192 = 8192


class LengthEncoding(IntEnum):
    """Framing convention for length prefixes and int32 fields"""
    FIXED = 0x01      # 4-byte big-endian lengths, big-endian int32
    SEVEN_BIT = 0x02  # 7-bit varint lengths, little-endian int32


def encode_7bit(value):
    """Encode a non-negative length as a 7-bit varint"""
    if value < 0:
        raise ProtocolFormatError(f"Negative length: {value}")
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


class FramedStream:
    """
    Length-prefixed field and int32 framing over a binary stream.

    Wraps any object with read(n)/write(b)/flush(). OSError raised by the
    underlying object surfaces as TransportError, implausible headers as
    ProtocolFormatError.
    """

    def __init__(self, raw, length_encoding=LengthEncoding.FIXED,
                 max_field_length=MAX_FIELD_LENGTH):
        self.raw = raw
        self.length_encoding = LengthEncoding(length_encoding)
        self.max_field_length = max_field_length

    @classmethod
    def from_socket(cls, sock, **kwargs):
        """Build a framed stream over a connected socket"""
        return cls(sock.makefile("rwb"), **kwargs)

    def close(self):
        """Close the file wrapper (the socket itself stays owned by the caller)"""
        try:
            self.raw.close()
        except OSError as e:
            raise TransportError(f"Close failed: {e}") from e

    # ------------------------------------------------------------------
    # Raw I/O

    def read_exact(self, n):
        """Read exactly n bytes, failing on a short stream"""
        data = b''
        while len(data) < n:
            try:
                chunk = self.raw.read(n - len(data))
            except OSError as e:
                raise TransportError(f"Read failed after {len(data)}/{n} bytes: {e}") from e
            if not chunk:
                raise TransportError(f"Connection closed after {len(data)}/{n} bytes")
            data += chunk
        return data

    def write(self, data):
        try:
            self.raw.write(data)
        except OSError as e:
            raise TransportError(f"Write failed: {e}") from e

    def flush(self):
        try:
            self.raw.flush()
        except OSError as e:
            raise TransportError(f"Flush failed: {e}") from e

    # ------------------------------------------------------------------
    # Fields

    def _int32(self):
        if self.length_encoding == LengthEncoding.SEVEN_BIT:
            return _INT32_LE
        return _INT32

    def write_int32(self, value):
        """Write a 4-byte signed integer in the stream's byte order"""
        try:
            self.write(self._int32().pack(value))
        except struct.error as e:
            raise ProtocolFormatError(f"Value does not fit in int32: {value}") from e

    def read_int32(self):
        """Read a 4-byte signed integer in the stream's byte order"""
        return self._int32().unpack(self.read_exact(4))[0]

    def write_with_length(self, data):
        """Write a length header followed by the raw bytes"""
        length = len(data)
        if length > self.max_field_length:
            raise ProtocolFormatError(
                f"Field too large: {length} (max: {self.max_field_length})")

        if self.length_encoding == LengthEncoding.SEVEN_BIT:
            header = encode_7bit(length)
        else:
            header = _UINT32.pack(length)
        self.write(header + bytes(data))

    def read_bytes(self):
        """Read a length-prefixed field"""
        if self.length_encoding == LengthEncoding.SEVEN_BIT:
            length = self._read_7bit()
        else:
            length = _UINT32.unpack(self.read_exact(4))[0]

        if length > self.max_field_length:
            raise ProtocolFormatError(
                f"Field length too large: {length} (max: {self.max_field_length})")
        if length == 0:
            return b''
        return self.read_exact(length)

    def _read_7bit(self):
        value = 0
        for i in range(MAX_VARINT_BYTES):
            byte = self.read_exact(1)[0]
            value |= (byte & 0x7F) << (7 * i)
            if not byte & 0x80:
                return value
        raise ProtocolFormatError("Length varint longer than 5 bytes")
