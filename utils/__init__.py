from .random_gen      import SecureRandom, DeterministicRandom
from .history_storage import HistoryStorage, JsonFileStorage, MemoryStorage

__all__ = ["SecureRandom", "DeterministicRandom",
           "HistoryStorage", "JsonFileStorage", "MemoryStorage"]
