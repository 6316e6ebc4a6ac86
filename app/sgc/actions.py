"""
Actions accepted by the store reducer, plus their JSON form.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.sgc.records import (
    KPI,
    Document,
    NonConformity,
    Opportunity,
    PDCAItem,
    Process,
    Record,
    Risk,
    partial_state_from_dict,
)

TOGGLE_DARK_MODE = "TOGGLE_DARK_MODE"
LOAD_DATA = "LOAD_DATA"

# Action-type stem -> (AppState collection field, record class)
ENTITY_ACTIONS: dict[str, tuple[str, type[Record]]] = {
    "DOCUMENT": ("documents", Document),
    "PROCESS": ("processes", Process),
    "RISK": ("risks", Risk),
    "OPPORTUNITY": ("opportunities", Opportunity),
    "PDCA_ITEM": ("pdca_items", PDCAItem),
    "NON_CONFORMITY": ("non_conformities", NonConformity),
}

# KPIs are a curated set: only UPDATE_KPI is exposed.
KPI_ACTIONS: dict[str, tuple[str, type[Record]]] = {"KPI": ("kpis", KPI)}


def _build_types() -> dict[str, tuple[str, str, type[Record]]]:
    types: dict[str, tuple[str, str, type[Record]]] = {}
    for stem, (collection, record_cls) in ENTITY_ACTIONS.items():
        for verb in ("ADD", "UPDATE", "DELETE"):
            types[f"{verb}_{stem}"] = (verb, collection, record_cls)
    for stem, (collection, record_cls) in KPI_ACTIONS.items():
        types[f"UPDATE_{stem}"] = ("UPDATE", collection, record_cls)
    return types


# action type -> (verb, collection field, record class)
ACTION_TYPES = _build_types()


@dataclass(frozen=True)
class Action:
    type: str
    payload: Any = None


class ActionParseError(ValueError):
    pass


def add_document(doc: Document) -> Action:
    return Action("ADD_DOCUMENT", doc)


def update_document(doc: Document) -> Action:
    return Action("UPDATE_DOCUMENT", doc)


def delete_document(document_id: str) -> Action:
    return Action("DELETE_DOCUMENT", document_id)


def add_process(process: Process) -> Action:
    return Action("ADD_PROCESS", process)


def update_process(process: Process) -> Action:
    return Action("UPDATE_PROCESS", process)


def delete_process(process_id: str) -> Action:
    return Action("DELETE_PROCESS", process_id)


def add_risk(risk: Risk) -> Action:
    return Action("ADD_RISK", risk)


def update_risk(risk: Risk) -> Action:
    return Action("UPDATE_RISK", risk)


def delete_risk(risk_id: str) -> Action:
    return Action("DELETE_RISK", risk_id)


def add_opportunity(opportunity: Opportunity) -> Action:
    return Action("ADD_OPPORTUNITY", opportunity)


def update_opportunity(opportunity: Opportunity) -> Action:
    return Action("UPDATE_OPPORTUNITY", opportunity)


def delete_opportunity(opportunity_id: str) -> Action:
    return Action("DELETE_OPPORTUNITY", opportunity_id)


def add_pdca_item(item: PDCAItem) -> Action:
    return Action("ADD_PDCA_ITEM", item)


def update_pdca_item(item: PDCAItem) -> Action:
    return Action("UPDATE_PDCA_ITEM", item)


def delete_pdca_item(item_id: str) -> Action:
    return Action("DELETE_PDCA_ITEM", item_id)


def add_non_conformity(nc: NonConformity) -> Action:
    return Action("ADD_NON_CONFORMITY", nc)


def update_non_conformity(nc: NonConformity) -> Action:
    return Action("UPDATE_NON_CONFORMITY", nc)


def delete_non_conformity(nc_id: str) -> Action:
    return Action("DELETE_NON_CONFORMITY", nc_id)


def update_kpi(kpi: KPI) -> Action:
    return Action("UPDATE_KPI", kpi)


def toggle_dark_mode() -> Action:
    return Action(TOGGLE_DARK_MODE)


def load_data(partial: dict[str, Any]) -> Action:
    """`partial` maps AppState field names to their new values."""
    return Action(LOAD_DATA, dict(partial))


def action_from_json(data: Any) -> Action:
    """
    Build an Action from its JSON form ({"type": ..., "payload": ...}).
    Unknown types are passed through untouched; the reducer ignores them.
    """
    if not isinstance(data, dict):
        raise ActionParseError("Action must be a JSON object.")
    action_type = data.get("type")
    if not isinstance(action_type, str) or not action_type.strip():
        raise ActionParseError("Action 'type' is required.")
    payload = data.get("payload")

    if action_type == TOGGLE_DARK_MODE:
        return Action(action_type)
    if action_type == LOAD_DATA:
        try:
            return Action(action_type, partial_state_from_dict(payload))
        except ValueError as e:
            raise ActionParseError(str(e)) from e

    entry = ACTION_TYPES.get(action_type)
    if entry is None:
        return Action(action_type, payload)
    verb, _collection, record_cls = entry
    if verb == "DELETE":
        if not isinstance(payload, str):
            raise ActionParseError(f"{action_type} payload must be an id string.")
        return Action(action_type, payload)
    try:
        return Action(action_type, record_cls.from_dict(payload))
    except ValueError as e:
        raise ActionParseError(str(e)) from e
