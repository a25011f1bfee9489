"""
HistoryLedger: newest-first record of completed encryptions.
"""

import json
import logging
import threading
from typing import Iterable

from utils.history_storage import HistoryStorage, MemoryStorage

from .entry import HistoryEntry

logger = logging.getLogger("SecureEncryption.History")


class HistoryLedger:
    """
    Ordered sequence of HistoryEntry, newest first.

    append() and remove_at() each persist the full sequence exactly once.
    Entries are never updated in place.  The lock serialises every
    read-modify-persist sequence so concurrent callers do not lose updates.
    """

    def __init__(self, storage: HistoryStorage | None = None,
                 autoload: bool = False):
        self.storage  = storage if storage is not None else MemoryStorage()
        self._entries: list[HistoryEntry] = []
        self._lock    = threading.Lock()
        if autoload:
            self.load()

    # ── lifecycle ────────────────────────────────────────────────
    def load(self):
        """
        Populate from storage.  A missing or unparseable persisted form
        means nothing was recorded yet: start empty, never raise.
        """
        with self._lock:
            self._entries = self._read_storage()
            logger.info("Loaded %d history entries", len(self._entries))

    def _read_storage(self) -> list[HistoryEntry]:
        try:
            records = self.storage.load()
        except (OSError, ValueError) as exc:
            logger.warning("History could not be read, starting empty: %s", exc)
            return []
        if records is None:
            return []
        if not isinstance(records, list):
            logger.warning("History has unexpected shape %s, starting empty",
                           type(records).__name__)
            return []
        try:
            return [HistoryEntry.from_dict(r) for r in records]
        except ValueError as exc:
            logger.warning("History could not be parsed, starting empty: %s", exc)
            return []

    def _persist(self):
        self.storage.save([e.to_dict() for e in self._entries])

    # ── mutations ────────────────────────────────────────────────
    def append(self, entry: HistoryEntry):
        """Insert at the front and persist."""
        if not isinstance(entry, HistoryEntry):
            raise TypeError(f"Expected HistoryEntry, got {type(entry).__name__}")
        with self._lock:
            self._entries.insert(0, entry)
            self._persist()
        logger.info("Recorded %s entry %s",
                    entry.encryption_type.value, entry.id)

    def remove_at(self, indices: Iterable[int]):
        """
        Remove the entries at the given positions (relative to the
        current order) in one batch, then persist once.  Any position
        out of range raises IndexError and nothing is removed.
        """
        positions = set(indices)
        with self._lock:
            count = len(self._entries)
            bad   = sorted(p for p in positions
                           if isinstance(p, bool) or not isinstance(p, int)
                           or not 0 <= p < count)
            if bad:
                raise IndexError(
                    f"History positions out of range (size {count}): {bad}"
                )
            self._entries = [e for i, e in enumerate(self._entries)
                             if i not in positions]
            self._persist()
        logger.info("Removed %d history entries", len(positions))

    # ── queries ──────────────────────────────────────────────────
    def list(self) -> list[HistoryEntry]:
        """Snapshot, newest first."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __getitem__(self, position: int) -> HistoryEntry:
        with self._lock:
            return self._entries[position]

    def __iter__(self):
        return iter(self.list())

    def export_json(self) -> str:
        """The persisted representation, as text."""
        with self._lock:
            return json.dumps([e.to_dict() for e in self._entries], indent=2)
