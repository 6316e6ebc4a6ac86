"""
Display labels and colour lookups for enum values.
"""
from __future__ import annotations

from enum import Enum

from app.sgc.constants import ALL_ENUMS

DISPLAY_LABELS: dict[Enum, str] = {member: str(member.value) for enum_cls in ALL_ENUMS for member in enum_cls}

STATUS_COLORS = {
    "active": "#4caf50",
    "review": "#ff9800",
    "obsolete": "#f44336",
    "draft": "#9e9e9e",
}

RISK_COLORS = {
    "muy bajo": "#4caf50",
    "bajo": "#8bc34a",
    "medio": "#ff9800",
    "alto": "#ff5722",
    "muy alto": "#f44336",
}

PRIORITY_COLORS = {
    "baja": "#4caf50",
    "media": "#ff9800",
    "alta": "#ff5722",
    "crítica": "#f44336",
}

PDCA_COLORS = {
    "plan": "#2196f3",
    "do": "#ff9800",
    "check": "#9c27b0",
    "act": "#4caf50",
}

SECTOR_COLORS = {
    "desarrollo": "#2196f3",
    "qa": "#9c27b0",
    "administración": "#4caf50",
    "rrhh": "#ff9800",
    "dirección": "#f44336",
    "comercial": "#795548",
}

# Status strings from every record type, grouped by the colour they share.
_STATUS_GROUPS = {
    "activo": "active",
    "completado": "active",
    "mitigado": "active",
    "cerrada": "active",
    "implementada": "active",
    "en revisión": "review",
    "en progreso": "review",
    "en tratamiento": "review",
    "en evaluación": "review",
    "en implementación": "review",
    "obsoleto": "obsolete",
    "cancelada": "obsolete",
    "vencida": "obsolete",
    "borrador": "draft",
    "pendiente": "draft",
    "identificado": "draft",
    "identificada": "draft",
}


def _key(value: Enum | str) -> str:
    raw = value.value if isinstance(value, Enum) else value
    return str(raw).strip().lower()


def to_display_string(value: Enum | str) -> str:
    if isinstance(value, Enum):
        return DISPLAY_LABELS.get(value, str(value.value))
    return str(value)


def status_color(status: Enum | str) -> str:
    return STATUS_COLORS[_STATUS_GROUPS.get(_key(status), "draft")]


def risk_color(level: Enum | str) -> str:
    return RISK_COLORS.get(_key(level), RISK_COLORS["medio"])


def priority_color(priority: Enum | str) -> str:
    return PRIORITY_COLORS.get(_key(priority), PRIORITY_COLORS["media"])


def pdca_color(phase: Enum | str) -> str:
    return PDCA_COLORS.get(_key(phase), PDCA_COLORS["plan"])


def sector_color(sector: Enum | str) -> str:
    return SECTOR_COLORS.get(_key(sector), SECTOR_COLORS["desarrollo"])
