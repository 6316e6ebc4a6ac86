"""
JSON binding of the store: read the snapshot, dispatch actions, read stats.

No authentication; every caller sees and changes the one shared state.
"""
from __future__ import annotations

from enum import Enum

from flask import Blueprint, abort, current_app, jsonify, request

from app.sgc.actions import ActionParseError, action_from_json, toggle_dark_mode
from app.sgc.constants import Sector
from app.sgc.modules.dashboard.service import dashboard_summary
from app.sgc.modules.documents.service import document_stats, documents_by_status
from app.sgc.modules.kpis.service import kpi_summary
from app.sgc.modules.nonconformities.service import action_stats, counts_by_severity, counts_by_source, nc_stats
from app.sgc.modules.pdca.service import pdca_stats, phase_stats
from app.sgc.modules.processes.service import process_stats
from app.sgc.modules.risks.service import opportunity_stats, risk_matrix_ids, risk_stats, risks_by_level
from app.sgc.store import Store

bp = Blueprint("api", __name__)


def _store() -> Store:
    return current_app.extensions["sgc_store"]


def _sector_arg() -> Sector | None:
    raw = (request.args.get("sector") or "").strip()
    if not raw:
        return None
    try:
        return Sector(raw)
    except ValueError:
        abort(400, description=f"Unknown sector: {raw}")


def _plain(counts: dict) -> dict:
    return {(k.value if isinstance(k, Enum) else k): v for k, v in counts.items()}


@bp.get("/state")
def get_state():
    return jsonify(_store().get_state().to_dict())


@bp.post("/dispatch")
def dispatch():
    data = request.get_json(silent=True)
    if data is None:
        return jsonify({"error": "Request body must be JSON."}), 400
    try:
        action = action_from_json(data)
    except ActionParseError as e:
        current_app.logger.warning("Rejected action: %s", e)
        return jsonify({"error": str(e)}), 400
    store = _store()
    store.dispatch(action)
    return jsonify(store.get_state().to_dict())


@bp.post("/dark-mode")
def dark_mode():
    store = _store()
    store.dispatch(toggle_dark_mode())
    return jsonify({"darkMode": store.get_state().dark_mode})


@bp.get("/dashboard")
def dashboard():
    return jsonify(dashboard_summary(_store().get_state()))


def _documents(state, sector):
    return {"rows": document_stats(state, sector), "byStatus": _plain(documents_by_status(state, sector))}


def _processes(state, sector):
    return {"rows": process_stats(state, sector)}


def _risks(state, sector):
    return {
        **risk_stats(state, sector),
        "byLevel": _plain(risks_by_level(state, sector)),
        "matrix": risk_matrix_ids(state, sector),
    }


def _opportunities(state, sector):
    return opportunity_stats(state, sector)


def _pdca(state, sector):
    return {**pdca_stats(state, sector), "phases": phase_stats(state, sector)}


def _nonconformities(state, sector):
    return {
        **nc_stats(state, sector),
        "bySeverity": _plain(counts_by_severity(state, sector)),
        "bySource": _plain(counts_by_source(state, sector)),
    }


def _actions(state, sector):
    return action_stats(state, sector)


def _kpis(state, sector):
    return kpi_summary(state, sector)


STATS = {
    "documents": _documents,
    "processes": _processes,
    "risks": _risks,
    "opportunities": _opportunities,
    "pdca": _pdca,
    "nonconformities": _nonconformities,
    "actions": _actions,
    "kpis": _kpis,
}


@bp.get("/stats/<area>")
def stats(area: str):
    builder = STATS.get(area)
    if builder is None:
        abort(404)
    return jsonify(builder(_store().get_state(), _sector_arg()))
