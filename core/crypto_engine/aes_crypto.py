"""
AES-256 symmetric encryption: GCM (authenticated) and CBC + PKCS#7.
"""

from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives import padding as sym_padding

from .symmetric_base import AEADCipher, SymmetricCipher
from .errors import InputError, KeyFormatError, PaddingError


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  AES-GCM (AEAD)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class AESGCMCipher(AEADCipher):
    """
    AES-256 in Galois/Counter Mode (authenticated encryption).

    Output format:  [nonce 12B][ciphertext + GCM tag 16B]
    """
    AEAD_CLASS = AESGCM
    NAME       = "AES-256-GCM"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  AES-CBC + PKCS7 (unauthenticated)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class AESCBCCipher(SymmetricCipher):
    """
    AES-256 in CBC mode with PKCS#7 padding.

    Output format:  [ciphertext padded]
    Key material:   [key 32B][IV 16B]

    There is no MAC.  A modified ciphertext can decrypt to garbage
    without any error as long as the final block still unpads.
    """
    KEY_SIZE   = 32
    IV_SIZE    = 16
    BLOCK_BITS = 128

    def __init__(self, key: bytes, iv: bytes):
        if len(key) != self.KEY_SIZE:
            raise KeyFormatError(
                f"AES-CBC key must be {self.KEY_SIZE} bytes, got {len(key)}"
            )
        if len(iv) != self.IV_SIZE:
            raise KeyFormatError(
                f"AES-CBC IV must be {self.IV_SIZE} bytes, got {len(iv)}"
            )
        self._key = key
        self._iv  = iv

    @classmethod
    def from_key_material(cls, key_material: bytes) -> "AESCBCCipher":
        """Split key ‖ IV; the blob must be exactly 48 bytes."""
        expected = cls.KEY_SIZE + cls.IV_SIZE
        if len(key_material) != expected:
            raise KeyFormatError(
                f"AES-CBC key material must be {expected} bytes "
                f"(key + IV), got {len(key_material)}"
            )
        return cls(key_material[:cls.KEY_SIZE], key_material[cls.KEY_SIZE:])

    def encrypt(self, plaintext: bytes) -> bytes:
        padder = sym_padding.PKCS7(self.BLOCK_BITS).padder()
        padded = padder.update(plaintext) + padder.finalize()
        enc    = Cipher(algorithms.AES(self._key), modes.CBC(self._iv)).encryptor()
        return enc.update(padded) + enc.finalize()

    def decrypt(self, data: bytes) -> bytes:
        block = self.BLOCK_BITS // 8
        if not data or len(data) % block:
            raise InputError(
                f"AES-CBC ciphertext must be a non-empty multiple of "
                f"{block} bytes, got {len(data)}"
            )
        dec    = Cipher(algorithms.AES(self._key), modes.CBC(self._iv)).decryptor()
        padded = dec.update(data) + dec.finalize()
        unpad  = sym_padding.PKCS7(self.BLOCK_BITS).unpadder()
        try:
            return unpad.update(padded) + unpad.finalize()
        except ValueError:
            raise PaddingError(
                "Invalid PKCS#7 padding: wrong key or corrupted ciphertext"
            ) from None

    @property
    def key_material(self) -> bytes:
        return self._key + self._iv

    @property
    def cipher_name(self) -> str:
        return "AES-256-CBC"

    @property
    def key_size(self) -> int:
        return self.KEY_SIZE

    @property
    def iv_size(self) -> int:
        return self.IV_SIZE

    @property
    def is_aead(self) -> bool:
        return False
