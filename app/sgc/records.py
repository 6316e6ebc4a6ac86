"""
Record shapes for the quality-management state.

Records are frozen dataclasses; a change is always a new record built with
`dataclasses.replace`. `to_dict()` / `from_dict()` use the camelCase keys of
the persisted snapshot format.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable, ClassVar

from app.sgc.constants import (
    ActionStatus,
    DocumentStatus,
    DocumentType,
    NonConformitySource,
    NonConformityStatus,
    OpportunityCategory,
    OpportunityStatus,
    PDCAPhase,
    PDCAStatus,
    Priority,
    ProcessStatus,
    RiskCategory,
    RiskLevel,
    RiskStatus,
    Sector,
    Severity,
    Trend,
)


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _to_json_value(value: Any) -> Any:
    if isinstance(value, Record):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_to_json_value(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    return value


class Record:
    """Mixin giving dataclass records a snapshot (camelCase dict) form."""

    # field name -> converter applied to the raw snapshot value
    _coerce: ClassVar[dict[str, Callable[[Any], Any]]] = {}

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if value is None:
                continue
            out[camel_case(f.name)] = _to_json_value(value)
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        if not isinstance(data, dict):
            raise ValueError(f"{cls.__name__} must be a JSON object, got {type(data).__name__}")
        kwargs: dict[str, Any] = {}
        for f in fields(cls):  # type: ignore[arg-type]
            key = camel_case(f.name)
            if key not in data or data[key] is None:
                continue
            convert = cls._coerce.get(f.name)
            try:
                kwargs[f.name] = convert(data[key]) if convert else data[key]
            except (TypeError, ValueError) as e:
                raise ValueError(f"Invalid {cls.__name__}.{key}: {e}") from e
        try:
            return cls(**kwargs)
        except TypeError as e:
            raise ValueError(f"Invalid {cls.__name__} record: {e}") from e


def _str_tuple(values: Any) -> tuple[str, ...]:
    return tuple(str(v) for v in values)


@dataclass(frozen=True)
class Document(Record):
    id: str
    title: str
    description: str
    file_name: str
    file_size: str
    upload_date: str
    sector: Sector
    type: DocumentType
    status: DocumentStatus
    version: str
    author: str
    last_modified: str

    _coerce = {"sector": Sector, "type": DocumentType, "status": DocumentStatus}


@dataclass(frozen=True)
class ProcessStep(Record):
    id: str
    name: str
    description: str
    responsible: str
    estimated_time: str
    resources: tuple[str, ...] = ()

    _coerce = {"resources": _str_tuple}


def _steps(values: Any) -> tuple[ProcessStep, ...]:
    return tuple(ProcessStep.from_dict(v) for v in values)


@dataclass(frozen=True)
class Process(Record):
    id: str
    name: str
    description: str
    sector: Sector
    owner: str
    status: ProcessStatus
    last_review: str
    next_review: str
    version: str
    steps: tuple[ProcessStep, ...] = ()

    _coerce = {"sector": Sector, "status": ProcessStatus, "steps": _steps}


@dataclass(frozen=True)
class Risk(Record):
    id: str
    title: str
    description: str
    sector: Sector
    category: RiskCategory
    probability: RiskLevel
    impact: RiskLevel
    risk_level: RiskLevel
    mitigation: str
    responsible: str
    status: RiskStatus
    identified_date: str
    review_date: str

    _coerce = {
        "sector": Sector,
        "category": RiskCategory,
        "probability": RiskLevel,
        "impact": RiskLevel,
        "risk_level": RiskLevel,
        "status": RiskStatus,
    }


@dataclass(frozen=True)
class Opportunity(Record):
    id: str
    title: str
    description: str
    sector: Sector
    category: OpportunityCategory
    priority: Priority
    expected_benefit: str
    responsible: str
    status: OpportunityStatus
    identified_date: str
    target_date: str

    _coerce = {
        "sector": Sector,
        "category": OpportunityCategory,
        "priority": Priority,
        "status": OpportunityStatus,
    }


@dataclass(frozen=True)
class PDCAItem(Record):
    id: str
    title: str
    description: str
    phase: PDCAPhase
    sector: Sector
    priority: Priority
    responsible: str
    status: PDCAStatus
    planned_actions: str
    actual_results: str
    lessons: str
    next_steps: str
    created_date: str
    last_updated: str
    target_date: str
    completion_date: str | None = None
    results: str | None = None
    next_actions: str | None = None

    _coerce = {"phase": PDCAPhase, "sector": Sector, "priority": Priority, "status": PDCAStatus}


@dataclass(frozen=True)
class CorrectiveAction(Record):
    id: str
    description: str
    responsible: str
    target_date: str
    status: ActionStatus
    completion_date: str | None = None
    verification: str | None = None
    effectiveness: str | None = None

    _coerce = {"status": ActionStatus}


def _actions(values: Any) -> tuple[CorrectiveAction, ...]:
    return tuple(CorrectiveAction.from_dict(v) for v in values)


@dataclass(frozen=True)
class NonConformity(Record):
    id: str
    title: str
    description: str
    sector: Sector
    severity: Severity
    source: NonConformitySource
    identified_by: str
    identified_date: str
    status: NonConformityStatus
    corrective_actions: tuple[CorrectiveAction, ...] = ()
    root_cause: str | None = None
    close_date: str | None = None

    _coerce = {
        "sector": Sector,
        "severity": Severity,
        "source": NonConformitySource,
        "status": NonConformityStatus,
        "corrective_actions": _actions,
    }


@dataclass(frozen=True)
class KPI(Record):
    id: str
    name: str
    description: str
    sector: Sector
    current_value: float
    target_value: float
    unit: str
    frequency: str
    trend: Trend
    last_update: str

    _coerce = {"sector": Sector, "current_value": float, "target_value": float, "trend": Trend}


# AppState field name -> (snapshot key, record class)
COLLECTIONS: dict[str, tuple[str, type[Record]]] = {
    "documents": ("documents", Document),
    "processes": ("processes", Process),
    "risks": ("risks", Risk),
    "opportunities": ("opportunities", Opportunity),
    "pdca_items": ("pdcaItems", PDCAItem),
    "non_conformities": ("nonConformities", NonConformity),
    "kpis": ("kpis", KPI),
}


@dataclass(frozen=True)
class AppState:
    """Aggregate root; the unit of persistence."""

    documents: tuple[Document, ...] = ()
    processes: tuple[Process, ...] = ()
    risks: tuple[Risk, ...] = ()
    opportunities: tuple[Opportunity, ...] = ()
    pdca_items: tuple[PDCAItem, ...] = ()
    non_conformities: tuple[NonConformity, ...] = ()
    kpis: tuple[KPI, ...] = ()
    dark_mode: bool = False

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for name, (key, _cls) in COLLECTIONS.items():
            out[key] = [r.to_dict() for r in getattr(self, name)]
        out["darkMode"] = self.dark_mode
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppState":
        return cls(**partial_state_from_dict(data))


def partial_state_from_dict(data: dict[str, Any]) -> dict[str, Any]:
    """
    Parse the keys present in a (possibly partial) snapshot into AppState
    field values. Absent keys are left out; malformed content raises ValueError.
    """
    if not isinstance(data, dict):
        raise ValueError("State snapshot must be a JSON object.")
    out: dict[str, Any] = {}
    for name, (key, record_cls) in COLLECTIONS.items():
        if key not in data:
            continue
        raw = data[key]
        if not isinstance(raw, list):
            raise ValueError(f"'{key}' must be a list.")
        out[name] = tuple(record_cls.from_dict(item) for item in raw)
    if "darkMode" in data:
        if not isinstance(data["darkMode"], bool):
            raise ValueError("'darkMode' must be a boolean.")
        out["dark_mode"] = data["darkMode"]
    return out
