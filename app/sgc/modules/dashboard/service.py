"""
Overview numbers for the landing dashboard, derived from a state snapshot.
"""
from __future__ import annotations

from app.sgc.constants import DocumentStatus, NonConformityStatus, ProcessStatus, RiskLevel, Sector
from app.sgc.labels import risk_color, sector_color, status_color, to_display_string
from app.sgc.metrics import aggregate_counts, count_where
from app.sgc.modules.kpis.service import kpi_card
from app.sgc.records import AppState

# Statuses shown in the process breakdown chart.
PROCESS_BREAKDOWN = (ProcessStatus.ACTIVE, ProcessStatus.IN_REVIEW, ProcessStatus.OBSOLETE)

HEADLINE_KPI_COUNT = 4


def dashboard_summary(state: AppState) -> dict:
    documents_by_sector = aggregate_counts(state.documents, lambda d: d.sector, Sector)
    process_counts = aggregate_counts(state.processes, lambda p: p.status, PROCESS_BREAKDOWN)
    level_counts = aggregate_counts(state.risks, lambda r: r.risk_level, RiskLevel)

    return {
        "totals": {
            "documents": len(state.documents),
            "activeDocuments": count_where(state.documents, lambda d: d.status == DocumentStatus.ACTIVE),
            "processes": len(state.processes),
            "activeProcesses": count_where(state.processes, lambda p: p.status == ProcessStatus.ACTIVE),
            "openNonConformities": count_where(
                state.non_conformities, lambda nc: nc.status != NonConformityStatus.CLOSED
            ),
            "highRisks": count_where(
                state.risks, lambda r: r.risk_level in (RiskLevel.HIGH, RiskLevel.VERY_HIGH)
            ),
        },
        "documentsBySector": [
            {"sector": to_display_string(s), "count": n, "color": sector_color(s)}
            for s, n in documents_by_sector.items()
        ],
        "processStatus": [
            {"status": to_display_string(s), "count": process_counts[s], "color": status_color(s)}
            for s in PROCESS_BREAKDOWN
        ],
        "risksByLevel": [
            {"level": to_display_string(level), "count": n, "color": risk_color(level)}
            for level, n in level_counts.items()
        ],
        "headlineKpis": [kpi_card(k) for k in state.kpis[:HEADLINE_KPI_COUNT]],
    }
