"""
Process workflows. Steps belong to their process: they are only ever
changed by building a new Process and dispatching UPDATE_PROCESS.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import TYPE_CHECKING

from app.sgc import actions
from app.sgc.constants import ProcessStatus, Sector
from app.sgc.metrics import count_where, filter_by_sector
from app.sgc.records import AppState, Process, ProcessStep
from app.sgc.utils import clean, coerce_enum, days_from, find_by_id, generate_id, invalid_enum_error, today_iso

if TYPE_CHECKING:
    from app.sgc.store import Store

# Days between reviews for a newly created process.
REVIEW_INTERVAL_DAYS = 180


def validate_process_payload(payload: dict) -> list[str]:
    errors = []
    if not clean(payload.get("name")):
        errors.append("Name is required.")
    if not clean(payload.get("owner")):
        errors.append("Owner is required.")
    for enum_cls, key, label in ((Sector, "sector", "sector"), (ProcessStatus, "status", "status")):
        err = invalid_enum_error(enum_cls, payload.get(key), label)
        if err:
            errors.append(err)
    return errors


def validate_step_payload(payload: dict) -> list[str]:
    errors = []
    if not clean(payload.get("name")):
        errors.append("Step name is required.")
    if not clean(payload.get("responsible")):
        errors.append("Step responsible is required.")
    return errors


def parse_resources(raw: str | list | tuple | None) -> tuple[str, ...]:
    """'IDE, Frameworks, ' -> ('IDE', 'Frameworks')"""
    if raw is None:
        return ()
    parts = raw.split(",") if isinstance(raw, str) else raw
    return tuple(p.strip() for p in map(str, parts) if p.strip())


def build_step(payload: dict, *, step_id: str | None = None) -> ProcessStep:
    return ProcessStep(
        id=step_id or clean(payload.get("id")) or generate_id(),
        name=clean(payload.get("name")),
        description=clean(payload.get("description")),
        responsible=clean(payload.get("responsible")),
        estimated_time=clean(payload.get("estimated_time")),
        resources=parse_resources(payload.get("resources")),
    )


def add_step(process: Process, step: ProcessStep) -> Process:
    return replace(process, steps=process.steps + (step,))


def replace_step(process: Process, index: int, step: ProcessStep) -> Process:
    """Swap the step at `index`, keeping the original step id."""
    if not 0 <= index < len(process.steps):
        raise IndexError(f"Process {process.id} has no step {index}")
    kept_id = replace(step, id=process.steps[index].id)
    return replace(process, steps=tuple(kept_id if i == index else s for i, s in enumerate(process.steps)))


def remove_step(process: Process, index: int) -> Process:
    if not 0 <= index < len(process.steps):
        raise IndexError(f"Process {process.id} has no step {index}")
    return replace(process, steps=tuple(s for i, s in enumerate(process.steps) if i != index))


def is_incomplete(process: Process) -> bool:
    return not process.steps


def create_process(store: "Store", payload: dict, *, today: date | None = None) -> Process:
    steps = payload.get("steps") or ()
    process = Process(
        id=clean(payload.get("id")) or generate_id(),
        name=clean(payload.get("name")),
        description=clean(payload.get("description")),
        sector=coerce_enum(Sector, payload.get("sector"), Sector.DEVELOPMENT),
        owner=clean(payload.get("owner")),
        status=coerce_enum(ProcessStatus, payload.get("status"), ProcessStatus.ACTIVE),
        last_review=today_iso(today),
        next_review=days_from(REVIEW_INTERVAL_DAYS, today),
        version=clean(payload.get("version")) or "1.0",
        steps=tuple(s if isinstance(s, ProcessStep) else build_step(s) for s in steps),
    )
    store.dispatch(actions.add_process(process))
    return process


def update_process(store: "Store", process_id: str, payload: dict, *, today: date | None = None) -> Process:
    """Whole-record edit; saving an edit counts as a review (last_review = today)."""
    current = find_by_id(store.get_state().processes, process_id)
    changes: dict[str, object] = {}
    for key in ("name", "description", "owner", "version"):
        if key in payload:
            changes[key] = clean(payload[key])
    if "sector" in payload:
        changes["sector"] = coerce_enum(Sector, payload["sector"], current.sector)
    if "status" in payload:
        changes["status"] = coerce_enum(ProcessStatus, payload["status"], current.status)
    if "steps" in payload:
        changes["steps"] = tuple(s if isinstance(s, ProcessStep) else build_step(s) for s in payload["steps"] or ())
    process = replace(current, **changes, last_review=today_iso(today))
    store.dispatch(actions.update_process(process))
    return process


def save_process(store: "Store", process: Process) -> Process:
    """Dispatch an already-built process (e.g. after add_step/remove_step)."""
    store.dispatch(actions.update_process(process))
    return process


def delete_process(store: "Store", process_id: str) -> None:
    store.dispatch(actions.delete_process(process_id))


def process_stats(state: AppState, sector: Sector | None = None) -> list[dict]:
    procs = filter_by_sector(state.processes, sector)
    rows = [
        {
            "sector": "TOTAL",
            "total": len(procs),
            "active": count_where(procs, lambda p: p.status == ProcessStatus.ACTIVE),
            "review": count_where(procs, lambda p: p.status == ProcessStatus.IN_REVIEW),
            "incomplete": count_where(procs, is_incomplete),
        }
    ]
    for row_sector in ((Sector(sector),) if sector else Sector):
        in_sector = [p for p in procs if p.sector == row_sector]
        rows.append(
            {
                "sector": row_sector.value,
                "total": len(in_sector),
                "active": count_where(in_sector, lambda p: p.status == ProcessStatus.ACTIVE),
                "review": count_where(in_sector, lambda p: p.status == ProcessStatus.IN_REVIEW),
                "incomplete": count_where(in_sector, is_incomplete),
            }
        )
    return rows
