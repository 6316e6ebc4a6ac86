"""
Bridge between the store and a BlobStore.

Startup: seed state, then the persisted snapshot (if any) is applied over it
with LOAD_DATA, so persisted collections win and the seed fills the rest.
After that, every state transition is written back as a full JSON snapshot.
Reads that fail mean "nothing persisted"; writes that fail are logged and
dropped.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from app.sgc.actions import load_data
from app.sgc.records import AppState, partial_state_from_dict
from app.sgc.seed import get_initial_data
from app.sgc.storage import BlobStore
from app.sgc.store import Store

logger = logging.getLogger(__name__)


def serialize_state(state: AppState) -> bytes:
    return json.dumps(state.to_dict(), ensure_ascii=False).encode("utf-8")


def load_persisted(storage: BlobStore, key: str) -> dict[str, Any]:
    """
    Persisted snapshot as AppState field values, or {} when the key is
    missing, unreadable or malformed.
    """
    try:
        blob = storage.load(key)
    except Exception as e:
        logger.warning("Could not read persisted state %r: %s", key, e)
        return {}
    if not blob:
        return {}
    try:
        return partial_state_from_dict(json.loads(blob))
    except (ValueError, TypeError) as e:
        # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
        logger.warning("Ignoring malformed persisted state %r: %s", key, e)
        return {}


class SnapshotWriter:
    """Store listener that saves each new state under `key`."""

    def __init__(self, storage: BlobStore, key: str) -> None:
        self.storage = storage
        self.key = key

    def __call__(self, state: AppState) -> None:
        try:
            self.storage.save(self.key, serialize_state(state))
        except Exception:
            logger.exception("Failed to persist state %r; keeping in-memory state", self.key)

    def __repr__(self) -> str:
        return f"SnapshotWriter(key={self.key!r})"


def attach_persistence(store: Store, storage: BlobStore, key: str, *, save_now: bool = True) -> Callable[[], None]:
    writer = SnapshotWriter(storage, key)
    unsubscribe = store.subscribe(writer)
    if save_now:
        writer(store.get_state())
    return unsubscribe


def build_store(storage: BlobStore, key: str, seed: AppState | None = None) -> Store:
    store = Store(seed if seed is not None else get_initial_data())
    persisted = load_persisted(storage, key)
    if persisted:
        store.dispatch(load_data(persisted))
        logger.info("Loaded persisted state %r (%s)", key, ", ".join(sorted(persisted)))
    else:
        logger.info("No persisted state for %r; starting from seed data", key)
    attach_persistence(store, storage, key)
    return store
