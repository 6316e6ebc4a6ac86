"""
Risk and opportunity workflows.

Risk level is never trusted from input: every create/update recomputes it
from probability and impact before dispatching.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import TYPE_CHECKING

from app.sgc import actions
from app.sgc.constants import (
    OpportunityCategory,
    OpportunityStatus,
    Priority,
    RiskCategory,
    RiskLevel,
    RiskStatus,
    Sector,
)
from app.sgc.metrics import aggregate_counts, count_where, risk_level_from_factors, risk_matrix
from app.sgc.records import AppState, Opportunity, Risk
from app.sgc.utils import clean, coerce_enum, days_from, find_by_id, generate_id, invalid_enum_error, today_iso

if TYPE_CHECKING:
    from app.sgc.store import Store

# Days until the next scheduled review of a saved risk.
REVIEW_INTERVAL_DAYS = 90

HIGH_LEVELS = (RiskLevel.HIGH, RiskLevel.VERY_HIGH)
LOW_LEVELS = (RiskLevel.LOW, RiskLevel.VERY_LOW)


def _validate(payload: dict, enums: tuple) -> list[str]:
    errors = []
    if not clean(payload.get("title")):
        errors.append("Title is required.")
    if not clean(payload.get("responsible")):
        errors.append("Responsible is required.")
    for enum_cls, key, label in enums:
        err = invalid_enum_error(enum_cls, payload.get(key), label)
        if err:
            errors.append(err)
    return errors


def validate_risk_payload(payload: dict) -> list[str]:
    return _validate(
        payload,
        (
            (Sector, "sector", "sector"),
            (RiskCategory, "category", "category"),
            (RiskLevel, "probability", "probability"),
            (RiskLevel, "impact", "impact"),
            (RiskStatus, "status", "status"),
        ),
    )


def validate_opportunity_payload(payload: dict) -> list[str]:
    return _validate(
        payload,
        (
            (Sector, "sector", "sector"),
            (OpportunityCategory, "category", "category"),
            (Priority, "priority", "priority"),
            (OpportunityStatus, "status", "status"),
        ),
    )


# ---------- Risks ----------
def create_risk(store: "Store", payload: dict, *, today: date | None = None) -> Risk:
    probability = coerce_enum(RiskLevel, payload.get("probability"), RiskLevel.MEDIUM)
    impact = coerce_enum(RiskLevel, payload.get("impact"), RiskLevel.MEDIUM)
    risk = Risk(
        id=clean(payload.get("id")) or generate_id(),
        title=clean(payload.get("title")),
        description=clean(payload.get("description")),
        sector=coerce_enum(Sector, payload.get("sector"), Sector.DEVELOPMENT),
        category=coerce_enum(RiskCategory, payload.get("category"), RiskCategory.OPERATIONAL),
        probability=probability,
        impact=impact,
        risk_level=risk_level_from_factors(probability, impact),
        mitigation=clean(payload.get("mitigation")),
        responsible=clean(payload.get("responsible")),
        status=coerce_enum(RiskStatus, payload.get("status"), RiskStatus.IDENTIFIED),
        identified_date=today_iso(today),
        review_date=days_from(REVIEW_INTERVAL_DAYS, today),
    )
    store.dispatch(actions.add_risk(risk))
    return risk


def update_risk(store: "Store", risk_id: str, payload: dict, *, today: date | None = None) -> Risk:
    current = find_by_id(store.get_state().risks, risk_id)
    changes: dict[str, object] = {}
    for key in ("title", "description", "mitigation", "responsible"):
        if key in payload:
            changes[key] = clean(payload[key])
    for key, enum_cls in (
        ("sector", Sector),
        ("category", RiskCategory),
        ("probability", RiskLevel),
        ("impact", RiskLevel),
        ("status", RiskStatus),
    ):
        if key in payload:
            changes[key] = coerce_enum(enum_cls, payload[key], getattr(current, key))
    risk = replace(current, **changes)
    risk = replace(
        risk,
        risk_level=risk_level_from_factors(risk.probability, risk.impact),
        review_date=days_from(REVIEW_INTERVAL_DAYS, today),
    )
    store.dispatch(actions.update_risk(risk))
    return risk


def delete_risk(store: "Store", risk_id: str) -> None:
    store.dispatch(actions.delete_risk(risk_id))


def risk_stats(state: AppState, sector: Sector | None = None) -> dict:
    risks = [r for r in state.risks if sector is None or r.sector == sector]
    return {
        "total": len(risks),
        "high": count_where(risks, lambda r: r.risk_level in HIGH_LEVELS),
        "medium": count_where(risks, lambda r: r.risk_level == RiskLevel.MEDIUM),
        "low": count_where(risks, lambda r: r.risk_level in LOW_LEVELS),
    }


def risks_by_level(state: AppState, sector: Sector | None = None) -> dict[RiskLevel, int]:
    # highest first, the order the dashboard chart uses
    risks = [r for r in state.risks if sector is None or r.sector == sector]
    return aggregate_counts(risks, lambda r: r.risk_level, reversed(tuple(RiskLevel)))


def risk_matrix_ids(state: AppState, sector: Sector | None = None) -> list[list[list[str]]]:
    risks = [r for r in state.risks if sector is None or r.sector == sector]
    return [[[r.id for r in cell] for cell in row] for row in risk_matrix(risks)]


# ---------- Opportunities ----------
def create_opportunity(store: "Store", payload: dict, *, today: date | None = None) -> Opportunity:
    opportunity = Opportunity(
        id=clean(payload.get("id")) or generate_id(),
        title=clean(payload.get("title")),
        description=clean(payload.get("description")),
        sector=coerce_enum(Sector, payload.get("sector"), Sector.DEVELOPMENT),
        category=coerce_enum(OpportunityCategory, payload.get("category"), OpportunityCategory.PROCESS_IMPROVEMENT),
        priority=coerce_enum(Priority, payload.get("priority"), Priority.MEDIUM),
        expected_benefit=clean(payload.get("expected_benefit")),
        responsible=clean(payload.get("responsible")),
        status=coerce_enum(OpportunityStatus, payload.get("status"), OpportunityStatus.IDENTIFIED),
        identified_date=today_iso(today),
        target_date=clean(payload.get("target_date")),
    )
    store.dispatch(actions.add_opportunity(opportunity))
    return opportunity


def update_opportunity(store: "Store", opportunity_id: str, payload: dict) -> Opportunity:
    current = find_by_id(store.get_state().opportunities, opportunity_id)
    changes: dict[str, object] = {}
    for key in ("title", "description", "expected_benefit", "responsible", "target_date"):
        if key in payload:
            changes[key] = clean(payload[key])
    for key, enum_cls in (
        ("sector", Sector),
        ("category", OpportunityCategory),
        ("priority", Priority),
        ("status", OpportunityStatus),
    ):
        if key in payload:
            changes[key] = coerce_enum(enum_cls, payload[key], getattr(current, key))
    opportunity = replace(current, **changes)
    store.dispatch(actions.update_opportunity(opportunity))
    return opportunity


def delete_opportunity(store: "Store", opportunity_id: str) -> None:
    store.dispatch(actions.delete_opportunity(opportunity_id))


def opportunity_stats(state: AppState, sector: Sector | None = None) -> dict:
    opps = [o for o in state.opportunities if sector is None or o.sector == sector]
    return {
        "total": len(opps),
        "critical": count_where(opps, lambda o: o.priority == Priority.CRITICAL),
        "high": count_where(opps, lambda o: o.priority == Priority.HIGH),
        "medium": count_where(opps, lambda o: o.priority == Priority.MEDIUM),
    }
