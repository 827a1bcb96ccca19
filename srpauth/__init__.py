"""
srpauth - SRP-6a password authentication client
Version 1.0.0
"""

__version__ = "1.0.0"
__author__ = "Your Name"
__license__ = "MIT"

from .client_module import SrpClient
from .core.errors import SrpError, TransportError, ProtocolFormatError, CryptoSetupError
from .core.protocol import SrpStrength, LengthEncoding, FramedStream

__all__ = [
    "SrpClient", "SrpStrength", "LengthEncoding", "FramedStream",
    "SrpError", "TransportError", "ProtocolFormatError", "CryptoSetupError",
]
