"""
SymmetricCipherEngine: fresh key per call, encrypt/decrypt by variant.

Usage:
    engine = SymmetricCipherEngine()
    result = engine.encrypt(b"hello", SymmetricAlgorithm.AES_GCM)
    engine.decrypt(result.ciphertext, result.key_material,
                   SymmetricAlgorithm.AES_GCM)           # b"hello"
"""

import logging

from utils.random_gen import SecureRandom

from .base            import CryptoBase, EncryptionResult
from .algorithms      import AlgorithmCatalog, SymmetricAlgorithm
from .symmetric_base  import SymmetricCipher
from .aes_crypto      import AESGCMCipher, AESCBCCipher
from .chacha_crypto   import ChaCha20Cipher
from .errors          import KeyFormatError

logger = logging.getLogger("SecureEncryption.SymmetricEngine")


class SymmetricCipherEngine(CryptoBase):
    """
    Stateless apart from the random source.  No key is cached: every
    encrypt() draws a new key (and nonce or IV), so two calls on the same
    plaintext never produce the same ciphertext.
    """

    _AEAD_CLASSES = {
        SymmetricAlgorithm.AES_GCM:           AESGCMCipher,
        SymmetricAlgorithm.CHACHA20_POLY1305: ChaCha20Cipher,
    }

    def __init__(self, random: SecureRandom | None = None):
        self.random = random or SecureRandom()

    def encrypt(self, plaintext: bytes,
                algorithm: SymmetricAlgorithm) -> EncryptionResult:
        algorithm = AlgorithmCatalog.parse_symmetric(algorithm)
        cipher    = self._new_cipher(algorithm)
        ct        = cipher.encrypt(plaintext)
        logger.debug(
            "Encrypted %d bytes with %s (aead=%s)",
            len(plaintext), cipher.cipher_name, cipher.is_aead,
        )
        return EncryptionResult(ciphertext=ct, key_material=cipher.key_material)

    def decrypt(self, ciphertext: bytes, key_material: bytes,
                algorithm: SymmetricAlgorithm) -> bytes:
        algorithm = AlgorithmCatalog.parse_symmetric(algorithm)
        cipher    = self._cipher_for(algorithm, key_material)
        pt        = cipher.decrypt(ciphertext)
        logger.debug(
            "Decrypted %d bytes with %s", len(ciphertext), cipher.cipher_name
        )
        return pt

    # ── cipher construction ──────────────────────────────────────

    def _new_cipher(self, algorithm: SymmetricAlgorithm) -> SymmetricCipher:
        key = self.random.generate_key(AlgorithmCatalog.key_size(algorithm))
        if algorithm is SymmetricAlgorithm.AES_CBC:
            iv = self.random.generate_iv(AlgorithmCatalog.iv_size(algorithm))
            return AESCBCCipher(key, iv)
        return self._AEAD_CLASSES[algorithm](key, self.random)

    def _cipher_for(self, algorithm: SymmetricAlgorithm,
                    key_material: bytes) -> SymmetricCipher:
        expected = AlgorithmCatalog.key_material_size(algorithm)
        if len(key_material) != expected:
            raise KeyFormatError(
                f"{algorithm.value} key material must be {expected} bytes, "
                f"got {len(key_material)}"
            )
        if algorithm is SymmetricAlgorithm.AES_CBC:
            return AESCBCCipher.from_key_material(key_material)
        return self._AEAD_CLASSES[algorithm](key_material)
