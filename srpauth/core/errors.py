"""
Error taxonomy for the SRP client handshake.
Transport, framing and cryptographic setup faults are kept apart so callers
can decide on retry policy. A failed proof is not an error.
"""


class SrpError(Exception):
    """Base class for every fault raised by srpauth"""


class TransportError(SrpError, ConnectionError):
    """Stream read/write/flush failed or the peer closed mid-handshake"""


class ProtocolFormatError(SrpError, ValueError):
    """Peer sent data that does not fit the wire format"""


class CryptoSetupError(SrpError):
    """Key derivation or group arithmetic cannot proceed"""
