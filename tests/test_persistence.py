"""Tests for the persistence bridge and blob-store backends."""
import json
import logging

import pytest

from app.sgc import actions
from app.sgc.db import make_sessionmaker
from app.sgc.models import Base
from app.sgc.persistence import SnapshotWriter, build_store, load_persisted, serialize_state
from app.sgc.records import AppState
from app.sgc.seed import get_initial_data
from app.sgc.storage import DatabaseStorage, LocalStorage, S3Storage, StorageError, storage_from_config

KEY = "sgc-data"


class MemoryStorage:
    def __init__(self, blobs=None):
        self.blobs = dict(blobs or {})
        self.saves = 0

    def load(self, key):
        return self.blobs.get(key)

    def save(self, key, blob):
        self.saves += 1
        self.blobs[key] = blob


class BrokenStorage:
    def load(self, key):
        raise OSError("disk gone")

    def save(self, key, blob):
        raise OSError("disk gone")


def test_snapshot_uses_camel_case_keys_and_omits_none():
    data = json.loads(serialize_state(get_initial_data()))
    assert set(data) == {
        "documents",
        "processes",
        "risks",
        "opportunities",
        "pdcaItems",
        "nonConformities",
        "kpis",
        "darkMode",
    }
    assert data["darkMode"] is False
    assert "fileName" in data["documents"][0]
    assert data["risks"][0]["riskLevel"] == "Medio"
    open_nc = data["nonConformities"][0]
    assert "closeDate" not in open_nc
    assert open_nc["correctiveActions"][0]["status"] == "En Progreso"


def test_serialized_snapshot_keeps_accents():
    assert "Gestión".encode("utf-8") in serialize_state(get_initial_data())


def test_first_start_uses_seed_and_saves_it():
    storage = MemoryStorage()
    store = build_store(storage, KEY)
    assert store.get_state() == get_initial_data()
    assert KEY in storage.blobs


def test_persisted_collections_win_seed_fills_gaps():
    storage = MemoryStorage({KEY: json.dumps({"documents": [], "darkMode": True}).encode()})
    store = build_store(storage, KEY)
    state = store.get_state()
    assert state.documents == ()
    assert state.dark_mode is True
    assert state.risks == get_initial_data().risks


def test_every_transition_is_saved():
    storage = MemoryStorage()
    store = build_store(storage, KEY)
    saves = storage.saves
    store.dispatch(actions.toggle_dark_mode())
    assert storage.saves == saves + 1
    assert json.loads(storage.blobs[KEY])["darkMode"] is True
    store.dispatch(actions.delete_risk("missing"))
    assert storage.saves == saves + 1


@pytest.mark.parametrize(
    "blob",
    [b"{not json", b"[1, 2]", b'{"documents": "nope"}', b'{"darkMode": "false"}', b"\xff\xfe", b""],
)
def test_malformed_snapshot_degrades_to_seed(blob, caplog):
    storage = MemoryStorage({KEY: blob})
    assert load_persisted(storage, KEY) == {}
    store = build_store(storage, KEY)
    assert store.get_state() == get_initial_data()


def test_read_failure_degrades_to_seed(caplog):
    caplog.set_level(logging.WARNING)
    assert load_persisted(BrokenStorage(), KEY) == {}
    assert "Could not read persisted state" in caplog.text


def test_write_failure_is_logged_not_raised(caplog):
    store = build_store(BrokenStorage(), KEY)
    store.dispatch(actions.toggle_dark_mode())
    assert store.get_state().dark_mode is True
    assert "Failed to persist state" in caplog.text


def test_snapshot_writer_round_trip(tmp_path):
    storage = LocalStorage(root=tmp_path)
    state = get_initial_data()
    SnapshotWriter(storage, KEY)(state)
    assert (tmp_path / f"{KEY}.json").exists()
    assert AppState.from_dict(json.loads(storage.load(KEY))) == state


def test_restart_reloads_local_snapshot(tmp_path):
    storage = LocalStorage(root=tmp_path)
    first = build_store(storage, KEY)
    first.dispatch(actions.delete_document("1"))
    second = build_store(LocalStorage(root=tmp_path), KEY)
    assert [d.id for d in second.get_state().documents] == ["2", "3", "4"]


class TestLocalStorage:
    def test_missing_key_is_none(self, tmp_path):
        assert LocalStorage(root=tmp_path).load("absent") is None

    def test_save_overwrites_without_leftover_tmp(self, tmp_path):
        storage = LocalStorage(root=tmp_path / "nested")
        storage.save(KEY, b"one")
        storage.save(KEY, b"two")
        assert storage.load(KEY) == b"two"
        assert sorted(p.name for p in (tmp_path / "nested").iterdir()) == [f"{KEY}.json"]


class TestDatabaseStorage:
    def test_save_then_load(self, tmp_path):
        sm = make_sessionmaker(f"sqlite:///{tmp_path/'state.db'}")
        Base.metadata.create_all(bind=sm.kw["bind"])
        storage = DatabaseStorage(sessions=sm)
        assert storage.load(KEY) is None
        storage.save(KEY, b"v1")
        storage.save(KEY, b"v2")
        assert storage.load(KEY) == b"v2"


class TestStorageFromConfig:
    def test_local_default(self, tmp_path):
        storage = storage_from_config({"STORAGE_BACKEND": "local", "STORAGE_ROOT": str(tmp_path)})
        assert isinstance(storage, LocalStorage)
        assert storage.root == tmp_path

    def test_s3_requires_bucket(self):
        with pytest.raises(StorageError):
            storage_from_config({"STORAGE_BACKEND": "s3"})

    def test_s3(self):
        storage = storage_from_config({"STORAGE_BACKEND": "s3", "S3_BUCKET": "qms"})
        assert isinstance(storage, S3Storage)
        assert storage.bucket == "qms"

    def test_db_requires_sessions(self):
        with pytest.raises(StorageError):
            storage_from_config({"STORAGE_BACKEND": "db"})
