"""Tests for the PDCA module."""
from datetime import date

import pytest

from app.sgc.constants import PDCAPhase, PDCAStatus, Priority
from app.sgc.modules.pdca.service import (
    create_pdca_item,
    delete_pdca_item,
    item_progress,
    pdca_stats,
    phase_stats,
    update_pdca_item,
    validate_pdca_payload,
)
from app.sgc.seed import get_initial_data
from app.sgc.store import Store

TODAY = date(2024, 5, 1)


@pytest.fixture()
def store():
    return Store(get_initial_data())


def test_seed_progress():
    assert [item_progress(i) for i in get_initial_data().pdca_items] == [40, 5, 100]


def test_create_defaults(store):
    item = create_pdca_item(store, {"title": "Reducir retrabajo", "responsible": "QA"}, today=TODAY)
    assert item.phase == PDCAPhase.PLAN
    assert item.status == PDCAStatus.PLANNED
    assert item.priority == Priority.MEDIUM
    assert item.created_date == item.last_updated == "2024-05-01"
    assert item_progress(item) == 5


def test_update_moves_phase(store):
    item = update_pdca_item(store, "2", {"phase": "Do", "status": "En Progreso"}, today=TODAY)
    assert item_progress(item) == 40
    assert item.last_updated == "2024-05-01"
    assert store.get_state().pdca_items[1] == item


def test_validate():
    assert validate_pdca_payload({"title": "t", "responsible": "r", "phase": "Plan"}) == []
    assert validate_pdca_payload({"title": "t", "responsible": "r", "phase": "Study"})[0].startswith("Invalid phase")


def test_stats(store):
    assert pdca_stats(store.get_state()) == {
        "total": 3,
        "completed": 1,
        "inProgress": 1,
        "planned": 0,
        "highPriority": 1,
    }
    rows = phase_stats(store.get_state())
    assert [r["phase"] for r in rows] == ["Plan", "Do", "Check", "Act"]
    assert rows[2] == {"phase": "Check", "total": 1, "active": 0, "completed": 1}

    delete_pdca_item(store, "3")
    assert pdca_stats(store.get_state())["completed"] == 0
