"""Tests for the reducer and the Store container."""
from dataclasses import replace

import pytest

from app.sgc import actions
from app.sgc.actions import Action
from app.sgc.constants import DocumentStatus, RiskLevel
from app.sgc.metrics import aggregate_counts, risk_level_from_factors
from app.sgc.records import KPI, AppState, Process, partial_state_from_dict
from app.sgc.seed import get_initial_data
from app.sgc.store import Store, reduce


def _seed() -> AppState:
    return get_initial_data()


def test_add_risk_appends_payload():
    state = _seed()
    risk = replace(
        state.risks[0],
        id="r-new",
        probability=RiskLevel.VERY_HIGH,
        impact=RiskLevel.HIGH,
        risk_level=risk_level_from_factors(RiskLevel.VERY_HIGH, RiskLevel.HIGH),
    )
    after = reduce(state, actions.add_risk(risk))
    assert len(after.risks) == len(state.risks) + 1
    assert after.risks[-1] == risk
    assert after.documents is state.documents


def test_update_missing_id_is_noop():
    state = _seed()
    ghost = replace(state.documents[0], id="does-not-exist", title="x")
    after = reduce(state, actions.update_document(ghost))
    assert after.documents == state.documents
    assert after is state


def test_update_replaces_whole_record_in_place():
    state = _seed()
    edited = replace(state.documents[1], title="Nuevo título")
    after = reduce(state, actions.update_document(edited))
    assert after.documents[1] == edited
    assert [d.id for d in after.documents] == [d.id for d in state.documents]
    assert state.documents[1].title != "Nuevo título"


def test_delete_non_conformity_leaves_other_collections_shared():
    state = _seed()
    after = reduce(state, actions.delete_non_conformity(state.non_conformities[0].id))
    assert len(after.non_conformities) == len(state.non_conformities) - 1
    for name in ("documents", "processes", "risks", "opportunities", "pdca_items", "kpis"):
        assert getattr(after, name) is getattr(state, name)


def test_delete_missing_id_is_noop():
    state = _seed()
    assert reduce(state, actions.delete_process("nope")) is state


def test_unknown_and_malformed_actions_return_input():
    state = _seed()
    assert reduce(state, Action("SOMETHING_ELSE", {"x": 1})) is state
    assert reduce(state, "ADD_DOCUMENT") is state
    assert reduce(state, None) is state
    # wrong payload shapes
    assert reduce(state, Action("ADD_DOCUMENT", {"title": "dict, not a record"})) is state
    assert reduce(state, Action("DELETE_RISK", 42)) is state
    assert reduce(state, Action("UPDATE_RISK", state.documents[0])) is state


def test_kpi_has_update_only():
    state = _seed()
    kpi: KPI = replace(state.kpis[0], current_value=1.5)
    after = reduce(state, actions.update_kpi(kpi))
    assert after.kpis[0].current_value == 1.5
    assert reduce(state, Action("ADD_KPI", kpi)) is state
    assert reduce(state, Action("DELETE_KPI", kpi.id)) is state


def test_toggle_dark_mode():
    state = _seed()
    assert state.dark_mode is False
    once = reduce(state, actions.toggle_dark_mode())
    assert once.dark_mode is True
    assert reduce(once, actions.toggle_dark_mode()).dark_mode is False


def test_load_data_replaces_collections_shallowly():
    state = _seed()
    after = reduce(state, actions.load_data({"documents": (), "dark_mode": True}))
    assert after.documents == ()
    assert after.dark_mode is True
    assert after.risks is state.risks


def test_load_data_full_snapshot_round_trip():
    captured = reduce(_seed(), actions.toggle_dark_mode())
    parsed = AppState.from_dict(captured.to_dict())
    restored = reduce(AppState(), actions.load_data({f: getattr(parsed, f) for f in parsed.__dataclass_fields__}))
    assert restored == captured
    assert restored.to_dict() == captured.to_dict()


def test_seed_scenario_active_documents():
    store = Store(_seed())
    before = aggregate_counts(store.get_state().documents, lambda d: d.status, DocumentStatus)
    assert before[DocumentStatus.ACTIVE] == 2

    doc = replace(store.get_state().documents[0], id="nuevo", status=DocumentStatus.ACTIVE)
    store.dispatch(actions.add_document(doc))

    after = aggregate_counts(store.get_state().documents, lambda d: d.status, DocumentStatus)
    assert after[DocumentStatus.ACTIVE] == 3


class TestStore:
    """Dispatch / subscribe behaviour."""

    def test_listeners_notified_in_order_with_new_state(self):
        store = Store(_seed())
        seen = []
        store.subscribe(lambda s: seen.append(("a", s.dark_mode)))
        store.subscribe(lambda s: seen.append(("b", s.dark_mode)))
        store.dispatch(actions.toggle_dark_mode())
        assert seen == [("a", True), ("b", True)]

    def test_no_notification_when_state_unchanged(self):
        store = Store(_seed())
        seen = []
        store.subscribe(seen.append)
        store.dispatch(actions.delete_document("missing"))
        assert seen == []

    def test_unsubscribe(self):
        store = Store(_seed())
        seen = []
        unsubscribe = store.subscribe(seen.append)
        unsubscribe()
        unsubscribe()
        store.dispatch(actions.toggle_dark_mode())
        assert seen == []

    def test_failing_listener_does_not_fail_dispatch(self, caplog):
        store = Store(_seed())
        seen = []

        def boom(state):
            raise RuntimeError("listener exploded")

        store.subscribe(boom)
        store.subscribe(seen.append)
        store.dispatch(actions.toggle_dark_mode())
        assert store.get_state().dark_mode is True
        assert len(seen) == 1
        assert "listener" in caplog.text.lower()


def test_record_from_dict_rejects_wrong_field_types():
    kpi = _seed().kpis[0].to_dict()
    with pytest.raises(ValueError, match="currentValue"):
        KPI.from_dict(dict(kpi, currentValue=[1]))
    process = _seed().processes[0].to_dict()
    with pytest.raises(ValueError, match="steps"):
        Process.from_dict(dict(process, steps=5))


def test_partial_state_dark_mode_must_be_bool():
    assert partial_state_from_dict({"darkMode": False}) == {"dark_mode": False}
    with pytest.raises(ValueError):
        partial_state_from_dict({"darkMode": "false"})
    with pytest.raises(ValueError):
        partial_state_from_dict({"darkMode": 1})
