"""Tests for the processes module."""
from datetime import date

import pytest

from app.sgc.constants import ProcessStatus, Sector
from app.sgc.modules.processes.service import (
    add_step,
    build_step,
    create_process,
    delete_process,
    is_incomplete,
    parse_resources,
    process_stats,
    remove_step,
    replace_step,
    save_process,
    update_process,
    validate_process_payload,
    validate_step_payload,
)
from app.sgc.seed import get_initial_data
from app.sgc.store import Store
from app.sgc.utils import RecordNotFound

TODAY = date(2024, 5, 1)


@pytest.fixture()
def store():
    return Store(get_initial_data())


class TestParseResources:
    def test_comma_list(self):
        assert parse_resources("IDE, Frameworks, ") == ("IDE", "Frameworks")

    def test_list_input(self):
        assert parse_resources([" Jira ", ""]) == ("Jira",)

    def test_none(self):
        assert parse_resources(None) == ()


def test_validators():
    assert validate_process_payload({"sector": "Marketing"}) == [
        "Name is required.",
        "Owner is required.",
        "Invalid sector. Must be one of: Desarrollo, QA, Administración, RRHH, Dirección, Comercial",
    ]
    assert validate_step_payload({"name": "x", "responsible": "y"}) == []


def test_create_process_sets_review_dates(store):
    process = create_process(store, {"name": "Soporte", "owner": "Ana"}, today=TODAY)
    assert process.status == ProcessStatus.ACTIVE
    assert process.last_review == "2024-05-01"
    assert process.next_review == "2024-10-28"
    assert process.version == "1.0"
    assert is_incomplete(process)
    assert store.get_state().processes[-1] == process


def test_create_process_with_steps(store):
    process = create_process(
        store,
        {"name": "Soporte", "owner": "Ana", "steps": [{"name": "Triage", "resources": "Jira, Slack"}]},
        today=TODAY,
    )
    assert len(process.steps) == 1
    assert process.steps[0].resources == ("Jira", "Slack")
    assert not is_incomplete(process)


def test_step_helpers_return_new_process(store):
    original = store.get_state().processes[0]
    step = build_step({"name": "Despliegue", "responsible": "DevOps"}, step_id="1-4")

    grown = add_step(original, step)
    assert len(grown.steps) == 4
    assert len(original.steps) == 3

    swapped = replace_step(grown, 0, build_step({"name": "Análisis"}))
    assert swapped.steps[0].id == original.steps[0].id
    assert swapped.steps[0].name == "Análisis"

    shrunk = remove_step(swapped, 1)
    assert [s.id for s in shrunk.steps] == ["1-1", "1-3", "1-4"]

    with pytest.raises(IndexError):
        remove_step(shrunk, 3)

    save_process(store, shrunk)
    assert store.get_state().processes[0].steps == shrunk.steps


def test_update_process_counts_as_review(store):
    process = update_process(store, "2", {"status": "En Revisión"}, today=TODAY)
    assert process.status == ProcessStatus.IN_REVIEW
    assert process.last_review == "2024-05-01"
    assert len(process.steps) == 2


def test_update_unknown_process(store):
    with pytest.raises(RecordNotFound):
        update_process(store, "9", {}, today=TODAY)


def test_delete_process(store):
    delete_process(store, "1")
    assert [p.id for p in store.get_state().processes] == ["2"]


def test_process_stats(store):
    create_process(store, {"name": "Vacío", "owner": "x", "status": "En Revisión"}, today=TODAY)
    total = process_stats(store.get_state())[0]
    assert total == {"sector": "TOTAL", "total": 3, "active": 2, "review": 1, "incomplete": 1}


def test_process_stats_for_one_sector():
    rows = process_stats(get_initial_data(), Sector.QA)
    assert [r["sector"] for r in rows] == ["TOTAL", "QA"]
    assert rows[0] == {"sector": "TOTAL", "total": 1, "active": 1, "review": 0, "incomplete": 0}
    assert process_stats(get_initial_data(), Sector.HR)[0]["total"] == 0
