from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import TYPE_CHECKING

from app.sgc import actions
from app.sgc.constants import Sector, Trend
from app.sgc.metrics import count_where, filter_by_sector, kpi_on_target, kpi_progress
from app.sgc.records import KPI, AppState
from app.sgc.utils import coerce_enum, find_by_id, today_iso

if TYPE_CHECKING:
    from app.sgc.store import Store


def validate_kpi_value(value: object) -> list[str]:
    errors = []
    if isinstance(value, bool):
        errors.append("Value must be a number.")
        return errors
    try:
        float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        errors.append("Value must be a number.")
    return errors


def update_kpi_value(
    store: "Store",
    kpi_id: str,
    value: float,
    trend: Trend | str | None = None,
    *,
    today: date | None = None,
) -> KPI:
    """KPIs are a fixed set; only their measured value (and trend) changes."""
    current = find_by_id(store.get_state().kpis, kpi_id)
    kpi = replace(
        current,
        current_value=float(value),
        trend=coerce_enum(Trend, trend, current.trend),
        last_update=today_iso(today),
    )
    store.dispatch(actions.update_kpi(kpi))
    return kpi


def kpi_card(kpi: KPI) -> dict:
    return {
        "id": kpi.id,
        "name": kpi.name,
        "sector": kpi.sector.value,
        "current": kpi.current_value,
        "target": kpi.target_value,
        "unit": kpi.unit,
        "trend": kpi.trend.value,
        "progress": kpi_progress(kpi.current_value, kpi.target_value),
        "onTarget": kpi_on_target(kpi.current_value, kpi.target_value),
    }


def kpi_summary(state: AppState, sector: Sector | None = None) -> dict:
    kpis = filter_by_sector(state.kpis, sector)
    return {
        "total": len(kpis),
        "onTarget": count_where(kpis, lambda k: kpi_on_target(k.current_value, k.target_value)),
        "improving": count_where(kpis, lambda k: k.trend == Trend.UP),
        "declining": count_where(kpis, lambda k: k.trend == Trend.DOWN),
        "cards": [kpi_card(k) for k in kpis],
    }
