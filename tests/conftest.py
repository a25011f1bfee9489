import pytest

from core.crypto_engine import AsymmetricCipherEngine, SymmetricCipherEngine
from core.service import EncryptionService
from history import HistoryLedger
from utils import DeterministicRandom, MemoryStorage


@pytest.fixture
def sym_engine() -> SymmetricCipherEngine:
    return SymmetricCipherEngine()


@pytest.fixture(scope="session")
def asym_engine() -> AsymmetricCipherEngine:
    return AsymmetricCipherEngine()


@pytest.fixture
def fixed_random() -> DeterministicRandom:
    return DeterministicRandom(b"tests")


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def ledger(storage: MemoryStorage) -> HistoryLedger:
    return HistoryLedger(storage)


@pytest.fixture
def service(ledger: HistoryLedger, asym_engine: AsymmetricCipherEngine) -> EncryptionService:
    return EncryptionService(asymmetric=asym_engine, history=ledger)
