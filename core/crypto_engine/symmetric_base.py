"""
Abstract base class for the symmetric ciphers in SecureEncryption.

Every cipher (AES-GCM, ChaCha20-Poly1305, AES-CBC) implements this
interface so the engine can treat them uniformly.  A cipher instance
wraps exactly one freshly generated key; the engine builds a new one
for every call.
"""

from abc import ABC, abstractmethod

from cryptography.exceptions import InvalidTag

from utils.random_gen import SecureRandom

from .errors import AuthenticationFailure, InputError, KeyFormatError


class SymmetricCipher(ABC):
    """
    One key, one algorithm: the unit the engine drives.

    encrypt() returns the opaque ciphertext blob:
        AEAD ciphers  → nonce + ciphertext_with_tag
        CBC  ciphers  → ciphertext only (the IV travels with the key)

    decrypt() accepts that blob and returns plaintext.
    """

    @abstractmethod
    def encrypt(self, plaintext: bytes) -> bytes:
        """Seal plaintext into the blob format described above."""

    @abstractmethod
    def decrypt(self, data: bytes) -> bytes:
        """Open a blob from encrypt(), raising on tamper or bad padding."""

    @property
    @abstractmethod
    def key_material(self) -> bytes:
        """Bytes the caller needs to decrypt later."""

    @property
    @abstractmethod
    def cipher_name(self) -> str:
        """Display name, e.g. "AES-256-CBC"."""

    @property
    @abstractmethod
    def key_size(self) -> int:
        """Raw key length in bytes, IV excluded."""

    @property
    @abstractmethod
    def iv_size(self) -> int:
        """Nonce or IV length in bytes."""

    @property
    @abstractmethod
    def is_aead(self) -> bool:
        """Whether tampering is detected on decrypt."""

    @property
    def key_size_bits(self) -> int:
        return self.key_size * 8

    def info(self) -> dict:
        """Return cipher metadata for display."""
        return {
            "name":        self.cipher_name,
            "key_bits":    self.key_size_bits,
            "iv_bytes":    self.iv_size,
            "aead":        self.is_aead,
            "auth_method": "Built-in" if self.is_aead else "None",
        }


class AEADCipher(SymmetricCipher):
    """
    Shared seal/open for the AEAD ciphers.

    Output format:  [nonce 12B][ciphertext][tag 16B]

    Subclasses set AEAD_CLASS (AESGCM, ChaCha20Poly1305) and NAME.
    """
    AEAD_CLASS = None
    NAME       = ""
    KEY_SIZE   = 32
    NONCE_SIZE = 12
    TAG_SIZE   = 16

    def __init__(self, key: bytes, random=None):
        if len(key) != self.KEY_SIZE:
            raise KeyFormatError(
                f"{self.NAME} key must be {self.KEY_SIZE} bytes, "
                f"got {len(key)}"
            )
        self._key    = key
        self._random = random or SecureRandom()
        self._aead   = self.AEAD_CLASS(key)

    def encrypt(self, plaintext: bytes) -> bytes:
        nonce = self._random.generate_nonce(self.NONCE_SIZE)
        ct    = self._aead.encrypt(nonce, plaintext, None)
        return nonce + ct                       # nonce ‖ ct+tag

    def decrypt(self, data: bytes) -> bytes:
        if len(data) < self.NONCE_SIZE + self.TAG_SIZE:
            raise InputError(
                f"{self.NAME} ciphertext must be at least "
                f"{self.NONCE_SIZE + self.TAG_SIZE} bytes, got {len(data)}"
            )
        nonce = data[:self.NONCE_SIZE]
        ct    = data[self.NONCE_SIZE:]
        try:
            return self._aead.decrypt(nonce, ct, None)
        except InvalidTag:
            raise AuthenticationFailure(
                "Authentication failed: wrong key or tampered ciphertext"
            ) from None

    @property
    def key_material(self) -> bytes:
        return self._key

    @property
    def cipher_name(self) -> str:
        return self.NAME

    @property
    def key_size(self) -> int:
        return self.KEY_SIZE

    @property
    def iv_size(self) -> int:
        return self.NONCE_SIZE

    @property
    def is_aead(self) -> bool:
        return True
