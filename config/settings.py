import os
from dataclasses import dataclass


class Settings:
    """Centralised application configuration."""

    # ── application ──────────────────────────────────────────────
    APP_NAME    = "SecureEncryption"
    APP_VERSION = "1.0.0"

    # ── paths ────────────────────────────────────────────────────
    BASE_DIR     = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    HISTORY_FILE = os.environ.get(
        "SECUREENCRYPTION_HISTORY_FILE",
        os.path.join(os.path.expanduser("~"), ".secureencryption",
                     "history.json"),
    )

    # ── crypto defaults ──────────────────────────────────────────
    DEFAULT_SYMMETRIC_ALGORITHM  = "AES-GCM"
    DEFAULT_ASYMMETRIC_ALGORITHM = "RSA PKCS1"
    RSA_KEY_SIZE                 = 2048
    RSA_KEY_SIZES                = (2048, 4096)

    # ── authentication gate ──────────────────────────────────────
    AUTH_REASON = "Authenticate to access SecureEncryption"

    # ── logging ──────────────────────────────────────────────────
    LOG_LEVEL  = os.environ.get("SECUREENCRYPTION_LOG_LEVEL", "WARNING")
    LOG_FORMAT = "[%(asctime)s] [%(levelname)-8s] %(name)s — %(message)s"


@dataclass(frozen=True)
class EncryptionPreferences:
    """
    The user's algorithm choices, passed explicitly into each call
    instead of being read from process-wide state.
    """
    symmetric_algorithm:  str = Settings.DEFAULT_SYMMETRIC_ALGORITHM
    asymmetric_algorithm: str = Settings.DEFAULT_ASYMMETRIC_ALGORITHM
    rsa_key_size:         int = Settings.RSA_KEY_SIZE

    @classmethod
    def default(cls) -> "EncryptionPreferences":
        return cls()

    def selection(self, encryption_type):
        """Resolve the AlgorithmSelection for a Symmetric/Asymmetric choice."""
        from core.crypto_engine.algorithms import (
            AlgorithmCatalog, EncryptionType,
            SymmetricSelection, AsymmetricSelection,
        )
        kind = AlgorithmCatalog.parse_encryption_type(encryption_type)
        if kind is EncryptionType.SYMMETRIC:
            return SymmetricSelection(self.symmetric_algorithm)
        return AsymmetricSelection(self.asymmetric_algorithm, self.rsa_key_size)
