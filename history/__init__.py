"""
SecureEncryption history: the ledger of completed encryptions and the
capabilities a host plugs in around it.
"""

from .entry        import HistoryEntry
from .ledger       import HistoryLedger
from .capabilities import (
    Authenticator, ShareTarget, SensitiveFieldGate, RevealedFields,
    format_share_message, share_outcome,
)

__all__ = [
    "HistoryEntry", "HistoryLedger",
    "Authenticator", "ShareTarget", "SensitiveFieldGate", "RevealedFields",
    "format_share_message", "share_outcome",
]
