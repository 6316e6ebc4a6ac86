"""
Closed value sets for the quality-management records.

Every member's value is the string written to persisted snapshots; never
rename a value without migrating stored data.
"""
from __future__ import annotations

from enum import Enum


class Sector(str, Enum):
    DEVELOPMENT = "Desarrollo"
    QA = "QA"
    ADMINISTRATION = "Administración"
    HR = "RRHH"
    MANAGEMENT = "Dirección"
    SALES = "Comercial"


class DocumentType(str, Enum):
    PROCEDURE = "Procedimiento"
    POLICY = "Política"
    MANUAL = "Manual"
    INSTRUCTION = "Instructivo"
    FORM = "Formato"
    RECORD = "Registro"


class DocumentStatus(str, Enum):
    ACTIVE = "Activo"
    IN_REVIEW = "En Revisión"
    OBSOLETE = "Obsoleto"
    DRAFT = "Borrador"


class ProcessStatus(str, Enum):
    ACTIVE = "Activo"
    IN_REVIEW = "En Revisión"
    OBSOLETE = "Obsoleto"
    SUSPENDED = "Suspendido"


class RiskCategory(str, Enum):
    OPERATIONAL = "Operacional"
    FINANCIAL = "Financiero"
    TECHNOLOGICAL = "Tecnológico"
    REPUTATIONAL = "Reputacional"
    LEGAL = "Legal"
    ENVIRONMENTAL = "Ambiental"


class OpportunityCategory(str, Enum):
    PROCESS_IMPROVEMENT = "Mejora de Proceso"
    INNOVATION = "Innovación"
    EXPANSION = "Expansión"
    EFFICIENCY = "Eficiencia"
    CUSTOMER = "Cliente"
    TALENT = "Talento"


class RiskLevel(str, Enum):
    VERY_LOW = "Muy Bajo"
    LOW = "Bajo"
    MEDIUM = "Medio"
    HIGH = "Alto"
    VERY_HIGH = "Muy Alto"


class Priority(str, Enum):
    LOW = "Baja"
    MEDIUM = "Media"
    HIGH = "Alta"
    CRITICAL = "Crítica"


class RiskStatus(str, Enum):
    IDENTIFIED = "Identificado"
    IN_TREATMENT = "En Tratamiento"
    MITIGATED = "Mitigado"
    CLOSED = "Cerrado"


class OpportunityStatus(str, Enum):
    IDENTIFIED = "Identificada"
    IN_EVALUATION = "En Evaluación"
    IN_IMPLEMENTATION = "En Implementación"
    IMPLEMENTED = "Implementada"
    CANCELLED = "Cancelada"


class PDCAPhase(str, Enum):
    PLAN = "Plan"
    DO = "Do"
    CHECK = "Check"
    ACT = "Act"


class PDCAStatus(str, Enum):
    PENDING = "Pendiente"
    IN_PROGRESS = "En Progreso"
    COMPLETED = "Completado"
    BLOCKED = "Bloqueado"
    PLANNED = "Planificado"


class Severity(str, Enum):
    MINOR = "Menor"
    MODERATE = "Moderada"
    MAJOR = "Mayor"
    CRITICAL = "Crítica"


class NonConformitySource(str, Enum):
    INTERNAL_AUDIT = "Auditoría Interna"
    EXTERNAL_AUDIT = "Auditoría Externa"
    MANAGEMENT_REVIEW = "Revisión por la Dirección"
    CUSTOMER_COMPLAINT = "Queja de Cliente"
    SELF_DETECTION = "Autodetección"
    CONTINUOUS_IMPROVEMENT = "Mejora Continua"


class NonConformityStatus(str, Enum):
    OPEN = "Abierta"
    IN_ANALYSIS = "En Análisis"
    IN_TREATMENT = "En Tratamiento"
    IN_VERIFICATION = "En Verificación"
    CLOSED = "Cerrada"


class ActionStatus(str, Enum):
    PENDING = "Pendiente"
    IN_PROGRESS = "En Progreso"
    COMPLETED = "Completada"
    OVERDUE = "Vencida"


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


ALL_ENUMS: tuple[type[Enum], ...] = (
    Sector,
    DocumentType,
    DocumentStatus,
    ProcessStatus,
    RiskCategory,
    OpportunityCategory,
    RiskLevel,
    Priority,
    RiskStatus,
    OpportunityStatus,
    PDCAPhase,
    PDCAStatus,
    Severity,
    NonConformitySource,
    NonConformityStatus,
    ActionStatus,
    Trend,
)

# Ordinal rank used by the risk matrix (1 = lowest, 5 = highest).
RISK_LEVEL_RANK = {
    RiskLevel.VERY_LOW: 1,
    RiskLevel.LOW: 2,
    RiskLevel.MEDIUM: 3,
    RiskLevel.HIGH: 4,
    RiskLevel.VERY_HIGH: 5,
}

# Base progress for each PDCA phase, in cycle order.
PDCA_PHASE_PROGRESS = {
    PDCAPhase.PLAN: 25,
    PDCAPhase.DO: 50,
    PDCAPhase.CHECK: 75,
    PDCAPhase.ACT: 100,
}

# Key under which the whole application state is persisted.
DEFAULT_STATE_KEY = "sgc-data"
