"""
Persistence backends for the history ledger.

A backend stores an ordered list of JSON-compatible records and knows
nothing about what they mean.  The ledger calls save() once after
every mutation and load() once at startup.
"""

import json
import logging
import os
from abc import ABC, abstractmethod

logger = logging.getLogger("SecureEncryption.HistoryStorage")


class HistoryStorage(ABC):
    """Persistence hook used by HistoryLedger."""

    @abstractmethod
    def load(self) -> list[dict] | None:
        """Return the stored records, or None if nothing was stored."""

    @abstractmethod
    def save(self, records: list[dict]):
        """Replace the stored records."""


class JsonFileStorage(HistoryStorage):
    """
    Persist the ledger as a JSON list in a plain file.

    Records are written in cleartext, including plaintext and key
    material.  Writes are not atomic: a crash mid-write can lose the
    latest change.
    """

    def __init__(self, storage_path: str):
        self.storage_path = storage_path

    def load(self) -> list[dict] | None:
        if not os.path.exists(self.storage_path):
            return None
        with open(self.storage_path, "r", encoding="utf-8") as f:
            return json.load(f)

    def save(self, records: list[dict]):
        parent = os.path.dirname(self.storage_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(self.storage_path, "w", encoding="utf-8") as f:
            json.dump(records, f, indent=2)
        logger.debug("Saved %d history records to %s",
                     len(records), self.storage_path)


class MemoryStorage(HistoryStorage):
    """In-process storage; counts saves."""

    def __init__(self, records: list[dict] | None = None):
        self._records = json.loads(json.dumps(records)) if records is not None else None
        self.save_count = 0

    def load(self) -> list[dict] | None:
        if self._records is None:
            return None
        return json.loads(json.dumps(self._records))

    def save(self, records: list[dict]):
        # round-trip through JSON so the stored form is what a file would hold
        self._records = json.loads(json.dumps(records))
        self.save_count += 1

    @property
    def records(self) -> list[dict] | None:
        return self._records
