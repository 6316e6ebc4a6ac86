"""Tests for the risks & opportunities module."""
from datetime import date

import pytest

from app.sgc.constants import OpportunityStatus, Priority, RiskLevel, Sector
from app.sgc.modules.risks.service import (
    create_opportunity,
    create_risk,
    delete_opportunity,
    delete_risk,
    opportunity_stats,
    risk_matrix_ids,
    risk_stats,
    risks_by_level,
    update_opportunity,
    update_risk,
    validate_opportunity_payload,
    validate_risk_payload,
)
from app.sgc.seed import get_initial_data
from app.sgc.store import Store

TODAY = date(2024, 5, 1)


@pytest.fixture()
def store():
    return Store(get_initial_data())


def test_seed_risks_respect_matrix():
    from app.sgc.metrics import risk_level_from_factors

    for r in get_initial_data().risks:
        assert r.risk_level == risk_level_from_factors(r.probability, r.impact)


def test_create_risk_computes_level(store):
    risk = create_risk(
        store,
        {"title": "Caída de servidor", "responsible": "Ops", "probability": "Muy Alto", "impact": "Alto", "riskLevel": "Bajo"},
        today=TODAY,
    )
    assert risk.risk_level == RiskLevel.VERY_HIGH
    assert risk.identified_date == "2024-05-01"
    assert risk.review_date == "2024-07-30"
    assert store.get_state().risks[-1] == risk


def test_update_risk_recomputes_level(store):
    risk = update_risk(store, "1", {"probability": "Muy Bajo"}, today=TODAY)
    assert risk.impact == RiskLevel.HIGH
    assert risk.risk_level == RiskLevel.LOW
    assert risk.review_date == "2024-07-30"
    assert store.get_state().risks[0].risk_level == RiskLevel.LOW


def test_bad_enum_raises_value_error(store):
    with pytest.raises(ValueError):
        create_risk(store, {"title": "x", "probability": "Enorme"}, today=TODAY)
    assert len(store.get_state().risks) == 3


def test_validators():
    assert validate_risk_payload({"title": "t", "responsible": "r", "impact": "Alto"}) == []
    errors = validate_opportunity_payload({"priority": "Urgente"})
    assert errors[:2] == ["Title is required.", "Responsible is required."]
    assert errors[2].startswith("Invalid priority")


def test_risk_stats_and_levels(store):
    create_risk(store, {"title": "x", "probability": "Alto", "impact": "Alto"}, today=TODAY)
    stats = risk_stats(store.get_state())
    assert stats == {"total": 4, "high": 1, "medium": 3, "low": 0}
    assert risk_stats(store.get_state(), Sector.HR)["total"] == 1

    by_level = risks_by_level(store.get_state())
    assert list(by_level) == list(reversed(RiskLevel))
    assert by_level[RiskLevel.HIGH] == 1


def test_risks_by_level_for_one_sector():
    state = get_initial_data()
    by_level = risks_by_level(state, Sector.HR)
    assert sum(by_level.values()) == risk_stats(state, Sector.HR)["total"] == 1
    assert by_level[RiskLevel.MEDIUM] == 1


def test_risk_matrix_ids():
    grid = risk_matrix_ids(get_initial_data())
    assert grid[2][3] == ["1"]
    assert grid[2][2] == ["2"]
    assert grid[1][4] == ["3"]


def test_delete_risk(store):
    delete_risk(store, "2")
    assert [r.id for r in store.get_state().risks] == ["1", "3"]


def test_opportunity_lifecycle(store):
    opp = create_opportunity(store, {"title": "Automatizar", "responsible": "QA", "priority": "Alta"}, today=TODAY)
    assert opp.status == OpportunityStatus.IDENTIFIED
    assert opp.identified_date == "2024-05-01"

    updated = update_opportunity(store, opp.id, {"status": "Implementada", "priority": "Crítica"})
    assert updated.status == OpportunityStatus.IMPLEMENTED
    assert updated.priority == Priority.CRITICAL

    stats = opportunity_stats(store.get_state())
    assert stats["total"] == 4
    assert stats["critical"] == 1

    delete_opportunity(store, opp.id)
    assert len(store.get_state().opportunities) == 3
