"""
Algorithm catalog: every supported variant and its fixed parameters.

Usage:
    sel = AsymmetricSelection(AsymmetricAlgorithm.RSA_OAEP, 2048)
    AlgorithmCatalog.max_plaintext_length(sel.algorithm, sel.key_size)  # 190

    for algo in AlgorithmCatalog.list_symmetric():
        print(AlgorithmCatalog.get_info(algo))
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .errors import InputError

RSA_KEY_SIZES = (2048, 4096)


class EncryptionType(str, Enum):
    SYMMETRIC  = "Symmetric"
    ASYMMETRIC = "Asymmetric"


class SymmetricAlgorithm(str, Enum):
    AES_GCM           = "AES-GCM"
    CHACHA20_POLY1305 = "ChaChaPoly"
    AES_CBC           = "AES-CBC"


class AsymmetricAlgorithm(str, Enum):
    RSA_PKCS1 = "RSA PKCS1"
    RSA_OAEP  = "RSA OAEP"


# ── Selection: closed tagged union ───────────────────────────────

@dataclass(frozen=True)
class SymmetricSelection:
    algorithm: SymmetricAlgorithm

    def __post_init__(self):
        object.__setattr__(
            self, "algorithm", AlgorithmCatalog.parse_symmetric(self.algorithm)
        )

    @property
    def encryption_type(self) -> EncryptionType:
        return EncryptionType.SYMMETRIC


@dataclass(frozen=True)
class AsymmetricSelection:
    algorithm: AsymmetricAlgorithm
    key_size:  int = 2048

    def __post_init__(self):
        object.__setattr__(
            self, "algorithm", AlgorithmCatalog.parse_asymmetric(self.algorithm)
        )
        AlgorithmCatalog.check_key_size(self.key_size)

    @property
    def encryption_type(self) -> EncryptionType:
        return EncryptionType.ASYMMETRIC


AlgorithmSelection = Union[SymmetricSelection, AsymmetricSelection]


# ── Catalog ──────────────────────────────────────────────────────

class AlgorithmCatalog:
    """
    Pure lookup table.  No mutable state.

    Symmetric entries: key size, nonce/IV size, AEAD flag, padding.
    Asymmetric entries: padding scheme and its per-message overhead,
    which fixes the maximum plaintext length for a given modulus.
    """

    _SYMMETRIC: dict[SymmetricAlgorithm, dict] = {
        SymmetricAlgorithm.AES_GCM: {
            "name":     "AES-256-GCM",
            "key_size": 32,
            "iv_size":  12,
            "aead":     True,
            "padding":  None,
        },
        SymmetricAlgorithm.CHACHA20_POLY1305: {
            "name":     "CHACHA20-POLY1305",
            "key_size": 32,
            "iv_size":  12,
            "aead":     True,
            "padding":  None,
        },
        SymmetricAlgorithm.AES_CBC: {
            "name":     "AES-256-CBC",
            "key_size": 32,
            "iv_size":  16,
            "aead":     False,
            "padding":  "PKCS7",
        },
    }

    # OAEP overhead = 2 * hash_len + 2, SHA-256 -> 66
    _ASYMMETRIC: dict[AsymmetricAlgorithm, dict] = {
        AsymmetricAlgorithm.RSA_PKCS1: {
            "name":     "RSA-PKCS1v1.5",
            "padding":  "PKCS1v15",
            "overhead": 11,
        },
        AsymmetricAlgorithm.RSA_OAEP: {
            "name":     "RSA-OAEP-SHA256",
            "padding":  "OAEP-SHA256",
            "overhead": 66,
        },
    }

    # ── parsing ──────────────────────────────────────────────────

    @staticmethod
    def parse_encryption_type(value) -> EncryptionType:
        try:
            return EncryptionType(value)
        except ValueError:
            raise InputError(
                f"Unknown encryption type: {value!r}. "
                f"Available: {[t.value for t in EncryptionType]}"
            ) from None

    @classmethod
    def parse_symmetric(cls, value) -> SymmetricAlgorithm:
        """Accept an enum member or its stored tag."""
        try:
            return SymmetricAlgorithm(value)
        except ValueError:
            raise InputError(
                f"Unknown symmetric algorithm: {value!r}. "
                f"Available: {[a.value for a in cls.list_symmetric()]}"
            ) from None

    @classmethod
    def parse_asymmetric(cls, value) -> AsymmetricAlgorithm:
        try:
            return AsymmetricAlgorithm(value)
        except ValueError:
            raise InputError(
                f"Unknown asymmetric algorithm: {value!r}. "
                f"Available: {[a.value for a in cls.list_asymmetric()]}"
            ) from None

    @staticmethod
    def check_key_size(key_size_bits) -> int:
        if (isinstance(key_size_bits, bool) or not isinstance(key_size_bits, int)
                or key_size_bits not in RSA_KEY_SIZES):
            raise InputError(
                f"RSA key size must be one of {RSA_KEY_SIZES}, "
                f"got {key_size_bits!r}"
            )
        return key_size_bits

    # ── symmetric parameters ─────────────────────────────────────

    @classmethod
    def key_size(cls, algorithm: SymmetricAlgorithm) -> int:
        return cls._SYMMETRIC[cls.parse_symmetric(algorithm)]["key_size"]

    @classmethod
    def iv_size(cls, algorithm: SymmetricAlgorithm) -> int:
        return cls._SYMMETRIC[cls.parse_symmetric(algorithm)]["iv_size"]

    @classmethod
    def is_aead(cls, algorithm: SymmetricAlgorithm) -> bool:
        return cls._SYMMETRIC[cls.parse_symmetric(algorithm)]["aead"]

    @classmethod
    def padding(cls, algorithm) -> str | None:
        if isinstance(algorithm, AsymmetricAlgorithm):
            return cls._ASYMMETRIC[algorithm]["padding"]
        return cls._SYMMETRIC[cls.parse_symmetric(algorithm)]["padding"]

    @classmethod
    def key_material_size(cls, algorithm: SymmetricAlgorithm) -> int:
        """Bytes a caller must supply to decrypt: key, plus IV for CBC."""
        algorithm = cls.parse_symmetric(algorithm)
        info = cls._SYMMETRIC[algorithm]
        if info["aead"]:
            return info["key_size"]
        return info["key_size"] + info["iv_size"]

    # ── asymmetric parameters ────────────────────────────────────

    @classmethod
    def max_plaintext_length(cls, algorithm: AsymmetricAlgorithm,
                             key_size_bits: int) -> int:
        """Largest plaintext the padding scheme fits in one RSA block."""
        algorithm = cls.parse_asymmetric(algorithm)
        cls.check_key_size(key_size_bits)
        return key_size_bits // 8 - cls._ASYMMETRIC[algorithm]["overhead"]

    # ── discovery ────────────────────────────────────────────────

    @classmethod
    def list_symmetric(cls) -> list[SymmetricAlgorithm]:
        return list(cls._SYMMETRIC)

    @classmethod
    def list_asymmetric(cls) -> list[AsymmetricAlgorithm]:
        return list(cls._ASYMMETRIC)

    @classmethod
    def get_info(cls, algorithm) -> dict:
        """Return metadata for display."""
        if isinstance(algorithm, AsymmetricAlgorithm):
            info = cls._ASYMMETRIC[algorithm]
            return {
                "tag":      algorithm.value,
                "name":     info["name"],
                "type":     EncryptionType.ASYMMETRIC.value,
                "padding":  info["padding"],
                "max_plaintext": {
                    bits: cls.max_plaintext_length(algorithm, bits)
                    for bits in RSA_KEY_SIZES
                },
            }
        algorithm = cls.parse_symmetric(algorithm)
        info = cls._SYMMETRIC[algorithm]
        return {
            "tag":       algorithm.value,
            "name":      info["name"],
            "type":      EncryptionType.SYMMETRIC.value,
            "key_bits":  info["key_size"] * 8,
            "iv_bytes":  info["iv_size"],
            "aead":      info["aead"],
            "padding":   info["padding"],
        }

    @classmethod
    def get_all_info(cls) -> list[dict]:
        return ([cls.get_info(a) for a in cls.list_symmetric()] +
                [cls.get_info(a) for a in cls.list_asymmetric()])


def max_plaintext_length(algorithm: AsymmetricAlgorithm,
                         key_size_bits: int) -> int:
    return AlgorithmCatalog.max_plaintext_length(algorithm, key_size_bits)
