import json
import threading
import uuid
from datetime import datetime, timezone

import pytest

from core.crypto_engine import (
    AsymmetricAlgorithm, AsymmetricSelection, EncryptionType, InputError,
    SymmetricAlgorithm, SymmetricSelection,
)
from history import HistoryEntry, HistoryLedger
from utils import JsonFileStorage, MemoryStorage

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_entry(text: str = "hello", selection=None) -> HistoryEntry:
    return HistoryEntry.create(
        plain_text=text,
        encrypted_text=f"ct-{text}",
        decryption_key=f"key-{text}",
        selection=selection or SymmetricSelection(SymmetricAlgorithm.AES_GCM),
        timestamp=T0,
    )


class TestHistoryEntry:
    def test_symmetric_entry_fields(self) -> None:
        e = make_entry(selection=SymmetricSelection("AES-CBC"))
        assert e.encryption_type is EncryptionType.SYMMETRIC
        assert e.symmetric_algorithm is SymmetricAlgorithm.AES_CBC
        assert e.asymmetric_algorithm is None
        assert e.rsa_key_size is None
        assert isinstance(e.id, uuid.UUID)

    def test_asymmetric_entry_fields(self) -> None:
        e = make_entry(selection=AsymmetricSelection("RSA OAEP", 4096))
        assert e.encryption_type is EncryptionType.ASYMMETRIC
        assert e.symmetric_algorithm is None
        assert e.asymmetric_algorithm is AsymmetricAlgorithm.RSA_OAEP
        assert e.rsa_key_size == 4096
        assert e.selection == AsymmetricSelection("RSA OAEP", 4096)

    def test_ids_are_unique(self) -> None:
        assert make_entry().id != make_entry().id

    def test_immutable(self) -> None:
        e = make_entry()
        with pytest.raises(AttributeError):
            e.plain_text = "changed"

    def test_repr_hides_sensitive_fields(self) -> None:
        e = make_entry("top secret")
        assert "top secret" not in repr(e)
        assert "key-top secret" not in repr(e)

    @pytest.mark.parametrize("kwargs", [
        # symmetric type with RSA fields
        dict(encryption_type="Symmetric", symmetric_algorithm="AES-GCM",
             asymmetric_algorithm="RSA OAEP", rsa_key_size=2048),
        # symmetric type with nothing set
        dict(encryption_type="Symmetric"),
        # asymmetric type with a symmetric algorithm
        dict(encryption_type="Asymmetric", symmetric_algorithm="AES-GCM",
             asymmetric_algorithm="RSA OAEP", rsa_key_size=2048),
        # asymmetric without key size
        dict(encryption_type="Asymmetric", asymmetric_algorithm="RSA OAEP"),
        # unsupported key size
        dict(encryption_type="Asymmetric", asymmetric_algorithm="RSA OAEP",
             rsa_key_size=1024),
        # unknown type tag
        dict(encryption_type="Hybrid", symmetric_algorithm="AES-GCM"),
    ])
    def test_variant_fields_must_match_type(self, kwargs: dict) -> None:
        with pytest.raises(InputError):
            HistoryEntry(id=uuid.uuid4(), timestamp=T0, plain_text="p",
                         encrypted_text="c", decryption_key="k", **kwargs)

    def test_dict_round_trip(self) -> None:
        for sel in (SymmetricSelection("ChaChaPoly"), AsymmetricSelection("RSA PKCS1", 2048)):
            e = make_entry(selection=sel)
            assert HistoryEntry.from_dict(json.loads(json.dumps(e.to_dict()))) == e

    def test_dict_uses_stored_tags(self) -> None:
        d = make_entry(selection=AsymmetricSelection("RSA PKCS1", 2048)).to_dict()
        assert d["encryption_type"] == "Asymmetric"
        assert d["asymmetric_algorithm"] == "RSA PKCS1"
        assert d["symmetric_algorithm"] is None
        assert d["timestamp"] == "2024-05-01T12:00:00+00:00"

    @pytest.mark.parametrize("record", [
        {},
        {"id": "not-a-uuid"},
        [],
    ])
    def test_from_dict_malformed(self, record) -> None:
        with pytest.raises(InputError):
            HistoryEntry.from_dict(record)

    def test_from_dict_rejects_float_key_size(self) -> None:
        record = make_entry(selection=AsymmetricSelection("RSA OAEP", 2048)).to_dict()
        record["rsa_key_size"] = 2048.0
        with pytest.raises(InputError):
            HistoryEntry.from_dict(record)


class TestLedgerOrdering:
    def test_newest_first(self, ledger: HistoryLedger) -> None:
        a, b = make_entry("A"), make_entry("B")
        ledger.append(a)
        ledger.append(b)
        assert ledger.list() == [b, a]
        assert ledger[0] == b
        assert len(ledger) == 2

    def test_list_is_a_snapshot(self, ledger: HistoryLedger) -> None:
        ledger.append(make_entry())
        snapshot = ledger.list()
        snapshot.clear()
        assert len(ledger) == 1

    def test_rejects_non_entries(self, ledger: HistoryLedger) -> None:
        with pytest.raises(TypeError):
            ledger.append({"plain_text": "x"})


class TestLedgerDeletion:
    def test_remove_at(self, ledger: HistoryLedger, storage: MemoryStorage) -> None:
        a, b = make_entry("A"), make_entry("B")
        ledger.append(a)
        ledger.append(b)
        ledger.remove_at({1})
        assert ledger.list() == [b]
        assert storage.records == [b.to_dict()]

    def test_batch_positions_refer_to_current_order(self, ledger: HistoryLedger) -> None:
        entries = [make_entry(str(i)) for i in range(5)]
        for e in entries:
            ledger.append(e)
        # current order: 4 3 2 1 0
        ledger.remove_at([0, 2, 4])
        assert ledger.list() == [entries[3], entries[1]]

    def test_out_of_range_removes_nothing(self, ledger: HistoryLedger,
                                          storage: MemoryStorage) -> None:
        ledger.append(make_entry())
        saves = storage.save_count
        with pytest.raises(IndexError):
            ledger.remove_at({0, 3})
        with pytest.raises(IndexError):
            ledger.remove_at({-1})
        assert len(ledger) == 1
        assert storage.save_count == saves


class TestLedgerPersistence:
    def test_persist_once_per_mutation(self, ledger: HistoryLedger,
                                       storage: MemoryStorage) -> None:
        ledger.append(make_entry("A"))
        assert storage.save_count == 1
        ledger.append(make_entry("B"))
        assert storage.save_count == 2
        ledger.remove_at({0, 1})
        assert storage.save_count == 3
        assert storage.records == []

    def test_queries_do_not_persist(self, ledger: HistoryLedger,
                                    storage: MemoryStorage) -> None:
        ledger.append(make_entry())
        ledger.list()
        len(ledger)
        ledger.export_json()
        assert storage.save_count == 1

    def test_load_restores_order(self, storage: MemoryStorage) -> None:
        first = HistoryLedger(storage)
        a, b = make_entry("A"), make_entry("B")
        first.append(a)
        first.append(b)

        second = HistoryLedger(storage, autoload=True)
        assert second.list() == [b, a]

    def test_load_with_nothing_stored(self) -> None:
        ledger = HistoryLedger(MemoryStorage(), autoload=True)
        assert ledger.list() == []

    @pytest.mark.parametrize("records", [
        {"not": "a list"},
        [{"id": "broken"}],
        ["just a string"],
    ])
    def test_load_unparseable_starts_empty(self, records) -> None:
        ledger = HistoryLedger(MemoryStorage(records), autoload=True)
        assert ledger.list() == []

    def test_export_json_matches_persisted_form(self, ledger: HistoryLedger,
                                                storage: MemoryStorage) -> None:
        ledger.append(make_entry())
        assert json.loads(ledger.export_json()) == storage.records


class TestJsonFileStorage:
    def test_round_trip_through_file(self, tmp_path) -> None:
        path = tmp_path / "nested" / "history.json"
        ledger = HistoryLedger(JsonFileStorage(str(path)))
        a = make_entry(selection=AsymmetricSelection("RSA OAEP", 2048))
        ledger.append(a)
        assert path.exists()

        reloaded = HistoryLedger(JsonFileStorage(str(path)), autoload=True)
        assert reloaded.list() == [a]

    def test_missing_file(self, tmp_path) -> None:
        storage = JsonFileStorage(str(tmp_path / "absent.json"))
        assert storage.load() is None
        assert HistoryLedger(storage, autoload=True).list() == []

    def test_corrupt_file_starts_empty(self, tmp_path) -> None:
        path = tmp_path / "history.json"
        path.write_text("{ this is not json", encoding="utf-8")
        assert HistoryLedger(JsonFileStorage(str(path)), autoload=True).list() == []


class TestConcurrency:
    def test_concurrent_appends_are_not_lost(self, ledger: HistoryLedger,
                                             storage: MemoryStorage) -> None:
        def worker(n):
            for i in range(25):
                ledger.append(make_entry(f"{n}-{i}"))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(ledger) == 200
        assert storage.save_count == 200
        assert len(storage.records) == 200
