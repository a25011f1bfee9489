"""
HistoryEntry: one completed encryption, write-once.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from core.crypto_engine.algorithms import (
    AlgorithmCatalog, AlgorithmSelection, AsymmetricAlgorithm,
    AsymmetricSelection, EncryptionType, SymmetricAlgorithm,
    SymmetricSelection,
)
from core.crypto_engine.errors import InputError


@dataclass(frozen=True)
class HistoryEntry:
    """
    Exactly one of {symmetric_algorithm} or {asymmetric_algorithm,
    rsa_key_size} is set, matching encryption_type.  plain_text and
    decryption_key are sensitive and kept out of repr().
    """
    id:                   uuid.UUID
    timestamp:            datetime
    plain_text:           str = field(repr=False)
    encrypted_text:       str
    decryption_key:       str = field(repr=False)
    encryption_type:      EncryptionType
    symmetric_algorithm:  SymmetricAlgorithm | None = None
    rsa_key_size:         int | None = None
    asymmetric_algorithm: AsymmetricAlgorithm | None = None

    def __post_init__(self):
        kind = AlgorithmCatalog.parse_encryption_type(self.encryption_type)
        object.__setattr__(self, "encryption_type", kind)

        if kind is EncryptionType.SYMMETRIC:
            if self.asymmetric_algorithm is not None or self.rsa_key_size is not None:
                raise InputError("Symmetric entry cannot carry RSA fields")
            if self.symmetric_algorithm is None:
                raise InputError("Symmetric entry needs a symmetric algorithm")
            object.__setattr__(
                self, "symmetric_algorithm",
                AlgorithmCatalog.parse_symmetric(self.symmetric_algorithm),
            )
        else:
            if self.symmetric_algorithm is not None:
                raise InputError("Asymmetric entry cannot carry a symmetric algorithm")
            if self.asymmetric_algorithm is None or self.rsa_key_size is None:
                raise InputError("Asymmetric entry needs an algorithm and a key size")
            object.__setattr__(
                self, "asymmetric_algorithm",
                AlgorithmCatalog.parse_asymmetric(self.asymmetric_algorithm),
            )
            AlgorithmCatalog.check_key_size(self.rsa_key_size)

        if not isinstance(self.id, uuid.UUID):
            raise InputError(f"Entry id must be a UUID, got {self.id!r}")
        if not isinstance(self.timestamp, datetime):
            raise InputError(f"Entry timestamp must be a datetime, got {self.timestamp!r}")

    # ── construction ─────────────────────────────────────────────
    @classmethod
    def create(cls, plain_text: str, encrypted_text: str,
               decryption_key: str, selection: AlgorithmSelection,
               timestamp: datetime | None = None,
               entry_id: uuid.UUID | None = None) -> "HistoryEntry":
        """Build an entry whose variant fields follow the selection."""
        common = dict(
            id=entry_id or uuid.uuid4(),
            timestamp=timestamp or datetime.now(timezone.utc),
            plain_text=plain_text,
            encrypted_text=encrypted_text,
            decryption_key=decryption_key,
            encryption_type=selection.encryption_type,
        )
        if isinstance(selection, SymmetricSelection):
            return cls(symmetric_algorithm=selection.algorithm, **common)
        if isinstance(selection, AsymmetricSelection):
            return cls(asymmetric_algorithm=selection.algorithm,
                       rsa_key_size=selection.key_size, **common)
        raise InputError(f"Unsupported selection: {selection!r}")

    @property
    def selection(self) -> AlgorithmSelection:
        if self.encryption_type is EncryptionType.SYMMETRIC:
            return SymmetricSelection(self.symmetric_algorithm)
        return AsymmetricSelection(self.asymmetric_algorithm, self.rsa_key_size)

    # ── serialisation ────────────────────────────────────────────
    def to_dict(self) -> dict:
        return {
            "id":                   str(self.id),
            "timestamp":            self.timestamp.isoformat(),
            "plain_text":           self.plain_text,
            "encrypted_text":       self.encrypted_text,
            "decryption_key":       self.decryption_key,
            "encryption_type":      self.encryption_type.value,
            "symmetric_algorithm":  _tag(self.symmetric_algorithm),
            "rsa_key_size":         self.rsa_key_size,
            "asymmetric_algorithm": _tag(self.asymmetric_algorithm),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HistoryEntry":
        try:
            return cls(
                id=uuid.UUID(data["id"]),
                timestamp=datetime.fromisoformat(data["timestamp"]),
                plain_text=data["plain_text"],
                encrypted_text=data["encrypted_text"],
                decryption_key=data["decryption_key"],
                encryption_type=data["encryption_type"],
                symmetric_algorithm=data.get("symmetric_algorithm"),
                rsa_key_size=data.get("rsa_key_size"),
                asymmetric_algorithm=data.get("asymmetric_algorithm"),
            )
        except (KeyError, TypeError, AttributeError, ValueError) as exc:
            if isinstance(exc, InputError):
                raise
            raise InputError(f"Malformed history record: {exc!r}") from exc


def _tag(algorithm) -> str | None:
    return algorithm.value if algorithm is not None else None
