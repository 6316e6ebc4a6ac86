"""
State store: a pure reducer plus a small dispatch/subscribe container.

The reducer never raises and never mutates its input. Untouched collections
are shared by reference between the old and new state, so `is` comparisons
tell listeners which collections changed.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import fields, replace

from app.sgc.actions import ACTION_TYPES, LOAD_DATA, TOGGLE_DARK_MODE, Action
from app.sgc.records import AppState

logger = logging.getLogger(__name__)

Listener = Callable[[AppState], None]

_COLLECTION_FIELDS = frozenset(f.name for f in fields(AppState) if f.name != "dark_mode")


def _load_data(state: AppState, payload: object) -> AppState:
    if not isinstance(payload, dict):
        return state
    changes: dict[str, object] = {}
    for name, value in payload.items():
        if name in _COLLECTION_FIELDS and isinstance(value, (tuple, list)):
            changes[name] = tuple(value)
        elif name == "dark_mode":
            changes[name] = bool(value)
    return replace(state, **changes)


def reduce(state: AppState, action: object) -> AppState:
    """Return the state that follows `action`; unknown or malformed actions return `state` itself."""
    if not isinstance(action, Action):
        return state

    if action.type == TOGGLE_DARK_MODE:
        return replace(state, dark_mode=not state.dark_mode)
    if action.type == LOAD_DATA:
        return _load_data(state, action.payload)

    entry = ACTION_TYPES.get(action.type)
    if entry is None:
        return state
    verb, collection, record_cls = entry
    items = getattr(state, collection)
    payload = action.payload

    if verb == "ADD":
        if not isinstance(payload, record_cls):
            return state
        return replace(state, **{collection: items + (payload,)})

    if verb == "UPDATE":
        if not isinstance(payload, record_cls):
            return state
        if not any(item.id == payload.id for item in items):
            return state
        return replace(state, **{collection: tuple(payload if item.id == payload.id else item for item in items)})

    # DELETE
    if not isinstance(payload, str):
        return state
    kept = tuple(item for item in items if item.id != payload)
    if len(kept) == len(items):
        return state
    return replace(state, **{collection: kept})


class Store:
    """
    Single owner of the application state.

    Dispatches are serialized by a lock; listeners run inside it, in
    registration order, after each transition that produced a new state.
    A failing listener is logged and never fails the dispatch.
    """

    def __init__(self, initial_state: AppState, reducer: Callable[[AppState, object], AppState] = reduce) -> None:
        self._state = initial_state
        self._reducer = reducer
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []

    def get_state(self) -> AppState:
        return self._state

    def dispatch(self, action: Action) -> None:
        with self._lock:
            previous = self._state
            self._state = self._reducer(previous, action)
            if self._state is previous:
                return
            for listener in list(self._listeners):
                try:
                    listener(self._state)
                except Exception:
                    logger.exception("Store listener %r failed (action=%s)", listener, getattr(action, "type", action))

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe
