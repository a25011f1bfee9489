"""
Host capabilities the core is handed, never looks up: an authentication
gate for revealing sensitive history fields and a share target for
exporting ciphertext and key text.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from config.settings import Settings

from .entry import HistoryEntry

logger = logging.getLogger("SecureEncryption.Capabilities")

MASK = "••••••••"


class Authenticator(ABC):

    @abstractmethod
    def authenticate(self, reason: str) -> bool:
        """Return True if the user proved their identity."""


class ShareTarget(ABC):

    @abstractmethod
    def share(self, text: str):
        """Hand text to the platform share action."""


@dataclass(frozen=True)
class RevealedFields:
    plain_text:     str
    decryption_key: str

    def __repr__(self) -> str:
        return "RevealedFields(<hidden>)"


class SensitiveFieldGate:
    """Reveals plaintext and key material only after authentication."""

    def __init__(self, authenticator: Authenticator,
                 reason: str = Settings.AUTH_REASON):
        self.authenticator = authenticator
        self.reason        = reason

    def reveal(self, entry: HistoryEntry) -> RevealedFields | None:
        if not self.authenticator.authenticate(self.reason):
            logger.info("Reveal of entry %s denied", entry.id)
            return None
        return RevealedFields(entry.plain_text, entry.decryption_key)

    def reveal_all(self, entries) -> list[RevealedFields] | None:
        """One authentication for a whole listing."""
        entries = list(entries)
        if not self.authenticator.authenticate(self.reason):
            logger.info("Reveal of %d entries denied", len(entries))
            return None
        return [RevealedFields(e.plain_text, e.decryption_key) for e in entries]

    @staticmethod
    def masked() -> RevealedFields:
        return RevealedFields(MASK, MASK)


def format_share_message(ciphertext_text: str, key_material_text: str) -> str:
    return (f"Encrypted Text: {ciphertext_text}\n"
            f"Decryption Key: {key_material_text}")


def share_outcome(outcome, target: ShareTarget) -> str:
    """Share an EncryptionOutcome (or HistoryEntry) through target."""
    if isinstance(outcome, HistoryEntry):
        text = format_share_message(outcome.encrypted_text, outcome.decryption_key)
    else:
        text = format_share_message(outcome.ciphertext_text,
                                    outcome.key_material_text)
    target.share(text)
    return text
