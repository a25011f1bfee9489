"""
ChaCha20-Poly1305, stored under the tag "ChaChaPoly".

Same blob layout as AES-GCM: a fresh 12-byte nonce, then the ciphertext
with its 16-byte Poly1305 tag.  The 32-byte key is the whole key material.
"""

from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305

from .symmetric_base import AEADCipher


class ChaCha20Cipher(AEADCipher):
    AEAD_CLASS = ChaCha20Poly1305
    NAME       = "CHACHA20-POLY1305"

    def info(self) -> dict:
        info = super().info()
        info["security_note"] = (
            "Constant-time in software; preferred where the CPU lacks "
            "AES instructions."
        )
        return info
