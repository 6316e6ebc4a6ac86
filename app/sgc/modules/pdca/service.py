from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import TYPE_CHECKING

from app.sgc import actions
from app.sgc.constants import PDCAPhase, PDCAStatus, Priority, Sector
from app.sgc.metrics import count_where, pdca_progress
from app.sgc.records import AppState, PDCAItem
from app.sgc.utils import clean, coerce_enum, find_by_id, generate_id, invalid_enum_error, today_iso

if TYPE_CHECKING:
    from app.sgc.store import Store

TEXT_FIELDS = (
    "title",
    "description",
    "responsible",
    "planned_actions",
    "actual_results",
    "lessons",
    "next_steps",
    "target_date",
)


def validate_pdca_payload(payload: dict) -> list[str]:
    errors = []
    if not clean(payload.get("title")):
        errors.append("Title is required.")
    if not clean(payload.get("responsible")):
        errors.append("Responsible is required.")
    for enum_cls, key, label in (
        (Sector, "sector", "sector"),
        (PDCAPhase, "phase", "phase"),
        (PDCAStatus, "status", "status"),
        (Priority, "priority", "priority"),
    ):
        err = invalid_enum_error(enum_cls, payload.get(key), label)
        if err:
            errors.append(err)
    return errors


def item_progress(item: PDCAItem) -> int:
    return pdca_progress(item.phase, item.status)


def create_pdca_item(store: "Store", payload: dict, *, today: date | None = None) -> PDCAItem:
    now = today_iso(today)
    item = PDCAItem(
        id=clean(payload.get("id")) or generate_id(),
        title=clean(payload.get("title")),
        description=clean(payload.get("description")),
        phase=coerce_enum(PDCAPhase, payload.get("phase"), PDCAPhase.PLAN),
        sector=coerce_enum(Sector, payload.get("sector"), Sector.DEVELOPMENT),
        priority=coerce_enum(Priority, payload.get("priority"), Priority.MEDIUM),
        responsible=clean(payload.get("responsible")),
        status=coerce_enum(PDCAStatus, payload.get("status"), PDCAStatus.PLANNED),
        planned_actions=clean(payload.get("planned_actions")),
        actual_results=clean(payload.get("actual_results")),
        lessons=clean(payload.get("lessons")),
        next_steps=clean(payload.get("next_steps")),
        created_date=now,
        last_updated=now,
        target_date=clean(payload.get("target_date")),
    )
    store.dispatch(actions.add_pdca_item(item))
    return item


def update_pdca_item(store: "Store", item_id: str, payload: dict, *, today: date | None = None) -> PDCAItem:
    current = find_by_id(store.get_state().pdca_items, item_id)
    changes: dict[str, object] = {}
    for key in TEXT_FIELDS:
        if key in payload:
            changes[key] = clean(payload[key])
    for key, enum_cls in (
        ("phase", PDCAPhase),
        ("sector", Sector),
        ("priority", Priority),
        ("status", PDCAStatus),
    ):
        if key in payload:
            changes[key] = coerce_enum(enum_cls, payload[key], getattr(current, key))
    item = replace(current, **changes, last_updated=today_iso(today))
    store.dispatch(actions.update_pdca_item(item))
    return item


def delete_pdca_item(store: "Store", item_id: str) -> None:
    store.dispatch(actions.delete_pdca_item(item_id))


def phase_stats(state: AppState, sector: Sector | None = None) -> list[dict]:
    items = [i for i in state.pdca_items if sector is None or i.sector == sector]
    rows = []
    for phase in PDCAPhase:
        in_phase = [i for i in items if i.phase == phase]
        rows.append(
            {
                "phase": phase.value,
                "total": len(in_phase),
                "active": count_where(in_phase, lambda i: i.status != PDCAStatus.COMPLETED),
                "completed": count_where(in_phase, lambda i: i.status == PDCAStatus.COMPLETED),
            }
        )
    return rows


def pdca_stats(state: AppState, sector: Sector | None = None) -> dict:
    items = [i for i in state.pdca_items if sector is None or i.sector == sector]
    return {
        "total": len(items),
        "completed": count_where(items, lambda i: i.status == PDCAStatus.COMPLETED),
        "inProgress": count_where(items, lambda i: i.status == PDCAStatus.IN_PROGRESS),
        "planned": count_where(items, lambda i: i.status == PDCAStatus.PLANNED),
        "highPriority": count_where(items, lambda i: i.priority in (Priority.HIGH, Priority.CRITICAL)),
    }
