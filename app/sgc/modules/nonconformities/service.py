"""
Non-conformity and corrective-action workflows.

Corrective actions are owned by their non-conformity; every change to an
action is dispatched as an UPDATE_NON_CONFORMITY carrying the new actions
tuple.

Two paths toward closure:
- set_action_status(): once every action is Completada the NC moves to
  En Verificación (close_date stamped).
- close_non_conformity(): manual override to Cerrada, whatever the state
  of its actions.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import TYPE_CHECKING

from app.sgc import actions
from app.sgc.constants import ActionStatus, NonConformitySource, NonConformityStatus, Sector, Severity
from app.sgc.metrics import aggregate_counts, count_where, is_action_overdue, percentage
from app.sgc.records import AppState, CorrectiveAction, NonConformity
from app.sgc.utils import clean, coerce_enum, find_by_id, generate_id, invalid_enum_error, today_iso

if TYPE_CHECKING:
    from app.sgc.store import Store

SERIOUS_SEVERITIES = (Severity.MAJOR, Severity.CRITICAL)


def validate_non_conformity_payload(payload: dict) -> list[str]:
    errors = []
    if not clean(payload.get("title")):
        errors.append("Title is required.")
    if not clean(payload.get("identified_by")):
        errors.append("Identified by is required.")
    for enum_cls, key, label in (
        (Sector, "sector", "sector"),
        (Severity, "severity", "severity"),
        (NonConformitySource, "source", "source"),
    ):
        err = invalid_enum_error(enum_cls, payload.get(key), label)
        if err:
            errors.append(err)
    return errors


def validate_action_payload(payload: dict) -> list[str]:
    errors = []
    if not clean(payload.get("description")):
        errors.append("Description is required.")
    if not clean(payload.get("responsible")):
        errors.append("Responsible is required.")
    if not clean(payload.get("target_date")):
        errors.append("Target date is required.")
    return errors


def _optional(value: object) -> str | None:
    return clean(value) or None


def _get(store: "Store", nc_id: str) -> NonConformity:
    return find_by_id(store.get_state().non_conformities, nc_id)


def _save(store: "Store", nc: NonConformity) -> NonConformity:
    store.dispatch(actions.update_non_conformity(nc))
    return nc


# ---------- Non-conformities ----------
def create_non_conformity(store: "Store", payload: dict, *, today: date | None = None) -> NonConformity:
    nc = NonConformity(
        id=clean(payload.get("id")) or generate_id(),
        title=clean(payload.get("title")),
        description=clean(payload.get("description")),
        sector=coerce_enum(Sector, payload.get("sector"), Sector.DEVELOPMENT),
        severity=coerce_enum(Severity, payload.get("severity"), Severity.MINOR),
        source=coerce_enum(NonConformitySource, payload.get("source"), NonConformitySource.INTERNAL_AUDIT),
        identified_by=clean(payload.get("identified_by")),
        identified_date=today_iso(today),
        root_cause=_optional(payload.get("root_cause")),
        status=NonConformityStatus.OPEN,
    )
    store.dispatch(actions.add_non_conformity(nc))
    return nc


def update_non_conformity(store: "Store", nc_id: str, payload: dict) -> NonConformity:
    current = _get(store, nc_id)
    changes: dict[str, object] = {}
    for key in ("title", "description", "identified_by"):
        if key in payload:
            changes[key] = clean(payload[key])
    if "root_cause" in payload:
        changes["root_cause"] = _optional(payload["root_cause"])
    for key, enum_cls in (
        ("sector", Sector),
        ("severity", Severity),
        ("source", NonConformitySource),
        ("status", NonConformityStatus),
    ):
        if key in payload:
            changes[key] = coerce_enum(enum_cls, payload[key], getattr(current, key))
    return _save(store, replace(current, **changes))


def delete_non_conformity(store: "Store", nc_id: str) -> None:
    store.dispatch(actions.delete_non_conformity(nc_id))


def close_non_conformity(store: "Store", nc_id: str, *, today: date | None = None) -> NonConformity:
    """Manual close; allowed even when corrective actions are still open."""
    nc = _get(store, nc_id)
    return _save(store, replace(nc, status=NonConformityStatus.CLOSED, close_date=today_iso(today)))


# ---------- Corrective actions ----------
def add_corrective_action(store: "Store", nc_id: str, payload: dict) -> CorrectiveAction:
    """New actions start Pendiente and put the NC into treatment."""
    nc = _get(store, nc_id)
    action = CorrectiveAction(
        id=clean(payload.get("id")) or generate_id(),
        description=clean(payload.get("description")),
        responsible=clean(payload.get("responsible")),
        target_date=clean(payload.get("target_date")),
        status=ActionStatus.PENDING,
        verification=_optional(payload.get("verification")),
        effectiveness=_optional(payload.get("effectiveness")),
    )
    _save(
        store,
        replace(
            nc,
            corrective_actions=nc.corrective_actions + (action,),
            status=NonConformityStatus.IN_TREATMENT,
        ),
    )
    return action


def edit_corrective_action(store: "Store", nc_id: str, action_id: str, payload: dict) -> CorrectiveAction:
    nc = _get(store, nc_id)
    current = find_by_id(nc.corrective_actions, action_id)
    changes: dict[str, object] = {}
    for key in ("description", "responsible", "target_date"):
        if key in payload:
            changes[key] = clean(payload[key])
    for key in ("verification", "effectiveness"):
        if key in payload:
            changes[key] = _optional(payload[key])
    action = replace(current, **changes)
    _save(
        store,
        replace(nc, corrective_actions=tuple(action if a.id == action_id else a for a in nc.corrective_actions)),
    )
    return action


def remove_corrective_action(store: "Store", nc_id: str, action_id: str) -> NonConformity:
    nc = _get(store, nc_id)
    return _save(store, replace(nc, corrective_actions=tuple(a for a in nc.corrective_actions if a.id != action_id)))


def set_action_status(
    store: "Store",
    nc_id: str,
    action_id: str,
    status: ActionStatus | str,
    *,
    today: date | None = None,
) -> NonConformity:
    nc = _get(store, nc_id)
    find_by_id(nc.corrective_actions, action_id)
    status = coerce_enum(ActionStatus, status)
    now = today_iso(today)

    updated = tuple(
        replace(
            a,
            status=status,
            completion_date=now if status == ActionStatus.COMPLETED else a.completion_date,
        )
        if a.id == action_id
        else a
        for a in nc.corrective_actions
    )
    all_completed = all(a.status == ActionStatus.COMPLETED for a in updated)
    return _save(
        store,
        replace(
            nc,
            corrective_actions=updated,
            status=NonConformityStatus.IN_VERIFICATION if all_completed else nc.status,
            close_date=now if all_completed else nc.close_date,
        ),
    )


# ---------- Stats ----------
def _filtered(state: AppState, sector: Sector | None) -> list[NonConformity]:
    return [nc for nc in state.non_conformities if sector is None or nc.sector == sector]


def has_overdue_actions(nc: NonConformity, today: date | None = None) -> bool:
    return any(is_action_overdue(a, today) for a in nc.corrective_actions)


def nc_stats(state: AppState, sector: Sector | None = None, *, today: date | None = None) -> dict:
    ncs = _filtered(state, sector)
    return {
        "total": len(ncs),
        "open": count_where(ncs, lambda nc: nc.status != NonConformityStatus.CLOSED),
        "closed": count_where(ncs, lambda nc: nc.status == NonConformityStatus.CLOSED),
        "critical": count_where(ncs, lambda nc: nc.severity in SERIOUS_SEVERITIES),
        "overdue": count_where(
            ncs,
            lambda nc: nc.status != NonConformityStatus.CLOSED and has_overdue_actions(nc, today),
        ),
    }


def action_stats(state: AppState, sector: Sector | None = None, *, today: date | None = None) -> dict:
    all_actions = [a for nc in _filtered(state, sector) for a in nc.corrective_actions]
    completed = count_where(all_actions, lambda a: a.status == ActionStatus.COMPLETED)
    return {
        "total": len(all_actions),
        "pending": count_where(all_actions, lambda a: a.status == ActionStatus.PENDING),
        "inProgress": count_where(all_actions, lambda a: a.status == ActionStatus.IN_PROGRESS),
        "completed": completed,
        "overdue": count_where(all_actions, lambda a: is_action_overdue(a, today)),
        "completionRate": percentage(completed, len(all_actions)),
    }


def counts_by_severity(state: AppState, sector: Sector | None = None) -> dict[Severity, int]:
    return aggregate_counts(_filtered(state, sector), lambda nc: nc.severity, Severity)


def counts_by_source(state: AppState, sector: Sector | None = None) -> dict[NonConformitySource, int]:
    return aggregate_counts(_filtered(state, sector), lambda nc: nc.source, NonConformitySource)
