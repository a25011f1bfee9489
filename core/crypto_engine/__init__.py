"""
SecureEncryption Crypto Engine: algorithm catalog, key material codec,
symmetric and asymmetric engines.
"""

from .errors import (
    CryptoError, InputError, EncodingError, KeyFormatError,
    PlaintextTooLarge, AuthenticationFailure, PaddingError,
    DecryptionFailure, RandomGenerationFailure,
)
from .algorithms import (
    AlgorithmCatalog, AlgorithmSelection, EncryptionType,
    SymmetricAlgorithm, AsymmetricAlgorithm,
    SymmetricSelection, AsymmetricSelection,
    RSA_KEY_SIZES, max_plaintext_length,
)
from .key_codec import KeyMaterialCodec
from .base      import EncryptionResult

# ── Symmetric ciphers ────────────────────────────────────────────
from .symmetric_base   import SymmetricCipher
from .aes_crypto       import AESGCMCipher, AESCBCCipher
from .chacha_crypto    import ChaCha20Cipher
from .symmetric_engine import SymmetricCipherEngine

# ── Asymmetric ───────────────────────────────────────────────────
from .rsa_crypto import AsymmetricCipherEngine

__all__ = [
    # Errors
    "CryptoError", "InputError", "EncodingError", "KeyFormatError",
    "PlaintextTooLarge", "AuthenticationFailure", "PaddingError",
    "DecryptionFailure", "RandomGenerationFailure",
    # Catalog
    "AlgorithmCatalog", "AlgorithmSelection", "EncryptionType",
    "SymmetricAlgorithm", "AsymmetricAlgorithm",
    "SymmetricSelection", "AsymmetricSelection",
    "RSA_KEY_SIZES", "max_plaintext_length",
    # Codec / results
    "KeyMaterialCodec", "EncryptionResult",
    # Engines
    "SymmetricCipher", "AESGCMCipher", "AESCBCCipher", "ChaCha20Cipher",
    "SymmetricCipherEngine", "AsymmetricCipherEngine",
]
