"""
Error taxonomy for the SecureEncryption crypto engine.

Every failure raised by the engines, the codec or the service derives
from CryptoError so a front end can catch one type and turn it into a
message.  Input-shaped failures also derive from ValueError.
"""


class CryptoError(Exception):
    """Base class for every engine failure."""


class InputError(CryptoError, ValueError):
    """Empty plaintext, malformed text, wrong-sized input."""


class EncodingError(InputError):
    """Key material or ciphertext text is not valid base64."""


class KeyFormatError(InputError):
    """Key material cannot be turned into a usable key."""


class PlaintextTooLarge(InputError):
    """Plaintext exceeds the RSA padding capacity for the key size."""

    def __init__(self, length: int, limit: int):
        super().__init__(
            f"Plaintext is {length} bytes, limit for this key is {limit}"
        )
        self.length = length
        self.limit  = limit


class AuthenticationFailure(CryptoError):
    """AEAD tag verification failed (wrong key or tampered data)."""


class PaddingError(CryptoError):
    """CBC padding is invalid after decryption."""


class DecryptionFailure(CryptoError):
    """Generic rejection of an asymmetric decryption."""


class RandomGenerationFailure(CryptoError):
    """The secure random source is unavailable."""
