"""
Pure derived-value functions over records.

Nothing here touches the store or does I/O; callers pass `today` explicitly
where the answer depends on the calendar date.
"""
from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from datetime import date
from enum import Enum
from typing import Any, TypeVar

from app.sgc.constants import (
    PDCA_PHASE_PROGRESS,
    RISK_LEVEL_RANK,
    ActionStatus,
    PDCAPhase,
    PDCAStatus,
    RiskLevel,
    Sector,
)
from app.sgc.records import CorrectiveAction, Risk
from app.sgc.utils import parse_date

T = TypeVar("T")

_LEVELS = tuple(RiskLevel)


def _classify(score: int) -> RiskLevel:
    if score >= 20:
        return RiskLevel.VERY_HIGH
    if score >= 15:
        return RiskLevel.HIGH
    if score >= 9:
        return RiskLevel.MEDIUM
    if score >= 4:
        return RiskLevel.LOW
    return RiskLevel.VERY_LOW


# RISK_MATRIX[probability][impact] -> risk level
RISK_MATRIX: dict[RiskLevel, dict[RiskLevel, RiskLevel]] = {
    p: {i: _classify(RISK_LEVEL_RANK[p] * RISK_LEVEL_RANK[i]) for i in _LEVELS} for p in _LEVELS
}


def risk_score(probability: RiskLevel | str, impact: RiskLevel | str) -> int:
    return RISK_LEVEL_RANK[RiskLevel(probability)] * RISK_LEVEL_RANK[RiskLevel(impact)]


def risk_level_from_factors(probability: RiskLevel | str, impact: RiskLevel | str) -> RiskLevel:
    return RISK_MATRIX[RiskLevel(probability)][RiskLevel(impact)]


def pdca_progress(phase: PDCAPhase | str, status: PDCAStatus | str) -> int:
    """
    Phase base (25/50/75/100); Completado forces 100, En Progreso takes 10
    off the base, Planificado or Pendiente take 20 off (never below 0).
    """
    progress = PDCA_PHASE_PROGRESS[PDCAPhase(phase)]
    status = PDCAStatus(status)
    if status == PDCAStatus.COMPLETED:
        return 100
    if status == PDCAStatus.IN_PROGRESS:
        return progress - 10
    if status in (PDCAStatus.PLANNED, PDCAStatus.PENDING):
        return max(0, progress - 20)
    return progress


def is_action_overdue(action: CorrectiveAction, today: date | None = None) -> bool:
    if action.status == ActionStatus.COMPLETED:
        return False
    target = parse_date(action.target_date)
    if target is None:
        return False
    return target < (today or date.today())


def days_until(value: str | date, today: date | None = None) -> int | None:
    d = parse_date(value)
    if d is None:
        return None
    return (d - (today or date.today())).days


def days_ago(value: str | date, today: date | None = None) -> int | None:
    remaining = days_until(value, today)
    return None if remaining is None else -remaining


def date_status(value: str | date, today: date | None = None) -> str:
    """One of: overdue, current, due-soon (within 7 days), upcoming."""
    remaining = days_until(value, today)
    if remaining is None:
        return "upcoming"
    if remaining < 0:
        return "overdue"
    if remaining == 0:
        return "current"
    if remaining <= 7:
        return "due-soon"
    return "upcoming"


def task_priority(due: str | date, status: Enum | str, today: date | None = None) -> str:
    status_value = status.value if isinstance(status, Enum) else status
    state = date_status(due, today)
    if status_value == ActionStatus.OVERDUE.value or state == "overdue":
        return "high"
    if state == "due-soon":
        return "medium"
    return "low"


def aggregate_counts(
    items: Iterable[T],
    key: Callable[[T], Any],
    keys: Iterable[Any] = (),
) -> dict[Any, int]:
    """
    Group-and-count by `key`. Every value in `keys` (e.g. an Enum class) is
    present, in order, even with a zero count; unexpected values follow.
    """
    counts: dict[Any, int] = {k: 0 for k in keys}
    for item in items:
        k = key(item)
        counts[k] = counts.get(k, 0) + 1
    return counts


def count_where(items: Iterable[T], predicate: Callable[[T], bool]) -> int:
    return sum(1 for item in items if predicate(item))


def percentage(value: float, total: float) -> int:
    """value/total as a whole percentage, halves rounded up; 0 when total is 0."""
    if total == 0:
        return 0
    return int(math.floor(value / total * 100 + 0.5))


def kpi_progress(current: float, target: float) -> float:
    if target <= 0:
        return 100.0 if current >= target else 0.0
    return min(current / target * 100, 100.0)


def kpi_on_target(current: float, target: float) -> bool:
    return current >= target


def risk_matrix(risks: Iterable[Risk]) -> list[list[list[Risk]]]:
    """5x5 grid indexed [probability rank - 1][impact rank - 1]."""
    grid: list[list[list[Risk]]] = [[[] for _ in _LEVELS] for _ in _LEVELS]
    for risk in risks:
        grid[RISK_LEVEL_RANK[risk.probability] - 1][RISK_LEVEL_RANK[risk.impact] - 1].append(risk)
    return grid


def filter_by_sector(items: Sequence[T], sector: Sector | str | None) -> list[T]:
    if sector is None:
        return list(items)
    wanted = Sector(sector)
    return [item for item in items if getattr(item, "sector", None) == wanted]


def search(items: Sequence[T], term: str, fields: Sequence[str]) -> list[T]:
    term = (term or "").strip().lower()
    if not term:
        return list(items)
    out = []
    for item in items:
        for f in fields:
            value = getattr(item, f, None)
            if isinstance(value, str) and term in value.lower():
                out.append(item)
                break
    return out
