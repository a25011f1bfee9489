"""
EncryptionService: the text-level boundary a front end talks to.

    service = EncryptionService(history=HistoryLedger(storage))
    out = service.encrypt("hi", SymmetricSelection(SymmetricAlgorithm.AES_GCM))
    service.decrypt(out.ciphertext_text, out.key_material_text, out.selection)

Plaintext goes in as text, ciphertext and key material come out as
base64 text.  When a ledger is attached, an entry is appended only
after the encryption fully succeeded.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from config.settings import EncryptionPreferences
from core.crypto_engine import (
    AlgorithmSelection, AsymmetricCipherEngine, AsymmetricSelection,
    EncryptionResult, KeyMaterialCodec, SymmetricCipherEngine,
    SymmetricSelection,
)
from core.crypto_engine.errors import DecryptionFailure, InputError
from history import HistoryEntry, HistoryLedger

logger = logging.getLogger("SecureEncryption.Service")


@dataclass(frozen=True)
class EncryptionOutcome:
    ciphertext_text:   str
    key_material_text: str = field(repr=False)
    selection:         AlgorithmSelection


class EncryptionService:

    def __init__(self,
                 symmetric:  SymmetricCipherEngine | None = None,
                 asymmetric: AsymmetricCipherEngine | None = None,
                 codec:      KeyMaterialCodec | None = None,
                 history:    HistoryLedger | None = None,
                 clock:      Callable[[], datetime] | None = None):
        self.symmetric  = symmetric or SymmetricCipherEngine()
        self.asymmetric = asymmetric or AsymmetricCipherEngine()
        self.codec      = codec or KeyMaterialCodec()
        self.history    = history
        self.clock      = clock or (lambda: datetime.now(timezone.utc))

    # ── encrypt ──────────────────────────────────────────────────
    def encrypt(self, plaintext: str,
                selection: AlgorithmSelection) -> EncryptionOutcome:
        if not isinstance(plaintext, str):
            raise InputError(f"Plaintext must be text, got {type(plaintext).__name__}")
        if not plaintext:
            raise InputError("Please enter text to encrypt.")

        result  = self._encrypt_bytes(plaintext.encode("utf-8"), selection)
        outcome = EncryptionOutcome(
            ciphertext_text=self.codec.encode(result.ciphertext),
            key_material_text=self.codec.encode(result.key_material),
            selection=selection,
        )
        logger.info("Encryption successful (%s)", _describe(selection))

        if self.history is not None:
            self.history.append(self.history_entry_for(plaintext, outcome))
        return outcome

    def encrypt_with_preferences(self, plaintext: str, encryption_type,
                                 preferences: EncryptionPreferences | None = None
                                 ) -> EncryptionOutcome:
        prefs = preferences or EncryptionPreferences.default()
        return self.encrypt(plaintext, prefs.selection(encryption_type))

    def _encrypt_bytes(self, data: bytes,
                       selection: AlgorithmSelection) -> EncryptionResult:
        if isinstance(selection, SymmetricSelection):
            return self.symmetric.encrypt(data, selection.algorithm)
        if isinstance(selection, AsymmetricSelection):
            return self.asymmetric.encrypt(data, selection.algorithm,
                                           selection.key_size)
        raise InputError(f"Unsupported algorithm selection: {selection!r}")

    # ── decrypt ──────────────────────────────────────────────────
    def decrypt(self, ciphertext_text: str, key_material_text: str,
                selection: AlgorithmSelection) -> str:
        if not ciphertext_text or not key_material_text:
            raise InputError(
                "Please provide both encrypted text and decryption key."
            )
        ciphertext   = self.codec.decode(ciphertext_text)
        key_material = self.codec.decode(key_material_text)

        if isinstance(selection, SymmetricSelection):
            data = self.symmetric.decrypt(ciphertext, key_material,
                                          selection.algorithm)
        elif isinstance(selection, AsymmetricSelection):
            data = self.asymmetric.decrypt(ciphertext, key_material,
                                           selection.algorithm)
        else:
            raise InputError(f"Unsupported algorithm selection: {selection!r}")

        try:
            plaintext = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecryptionFailure(
                "Decrypted data is not valid UTF-8 text"
            ) from exc
        logger.info("Decryption successful (%s)", _describe(selection))
        return plaintext

    # ── history ──────────────────────────────────────────────────
    def history_entry_for(self, plaintext: str,
                          outcome: EncryptionOutcome) -> HistoryEntry:
        return HistoryEntry.create(
            plain_text=plaintext,
            encrypted_text=outcome.ciphertext_text,
            decryption_key=outcome.key_material_text,
            selection=outcome.selection,
            timestamp=self.clock(),
        )


def _describe(selection: AlgorithmSelection) -> str:
    if isinstance(selection, AsymmetricSelection):
        return f"{selection.algorithm.value}, {selection.key_size}-bit"
    return selection.algorithm.value
