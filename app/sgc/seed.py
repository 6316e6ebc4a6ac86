"""
Example records used when no persisted snapshot exists (and to fill any
collection a snapshot does not carry).
"""
from __future__ import annotations

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
from app.sgc.records import (
    KPI,
    AppState,
    CorrectiveAction,
    Document,
    NonConformity,
    Opportunity,
    PDCAItem,
    Process,
    ProcessStep,
    Risk,
)

SEED_DOCUMENTS = (
    Document(
        id="1",
        title="Manual de Calidad",
        description="Manual principal del Sistema de Gestión de la Calidad",
        file_name="manual-calidad-v3.1.pdf",
        file_size="2.4 MB",
        upload_date="2024-01-15",
        sector=Sector.MANAGEMENT,
        type=DocumentType.MANUAL,
        status=DocumentStatus.ACTIVE,
        version="3.1",
        author="María González",
        last_modified="2024-01-15",
    ),
    Document(
        id="2",
        title="Procedimiento de Desarrollo de Software",
        description="Procedimiento para el ciclo de vida del desarrollo de software",
        file_name="proc-desarrollo-sw-v2.3.pdf",
        file_size="1.8 MB",
        upload_date="2024-02-10",
        sector=Sector.DEVELOPMENT,
        type=DocumentType.PROCEDURE,
        status=DocumentStatus.ACTIVE,
        version="2.3",
        author="Carlos Rodríguez",
        last_modified="2024-02-10",
    ),
    Document(
        id="3",
        title="Política de Testing",
        description="Política para asegurar la calidad en las pruebas de software",
        file_name="politica-testing-v1.5.pdf",
        file_size="850 KB",
        upload_date="2024-01-20",
        sector=Sector.QA,
        type=DocumentType.POLICY,
        status=DocumentStatus.IN_REVIEW,
        version="1.5",
        author="Ana López",
        last_modified="2024-01-20",
    ),
    Document(
        id="4",
        title="Instructivo de Reclutamiento",
        description="Instructivo para el proceso de selección de personal",
        file_name="inst-reclutamiento-v1.2.pdf",
        file_size="1.2 MB",
        upload_date="2024-03-05",
        sector=Sector.HR,
        type=DocumentType.INSTRUCTION,
        status=DocumentStatus.IN_REVIEW,
        version="1.2",
        author="Laura Martínez",
        last_modified="2024-03-05",
    ),
)

SEED_PROCESSES = (
    Process(
        id="1",
        name="Desarrollo de Software",
        description="Proceso integral para el desarrollo de aplicaciones de software",
        sector=Sector.DEVELOPMENT,
        owner="Carlos Rodríguez",
        status=ProcessStatus.ACTIVE,
        last_review="2024-01-15",
        next_review="2024-07-15",
        version="2.1",
        steps=(
            ProcessStep(
                id="1-1",
                name="Análisis de Requerimientos",
                description="Relevamiento y documentación de requerimientos del cliente",
                responsible="Analista Funcional",
                estimated_time="2-3 días",
                resources=("Documento de requerimientos", "Entrevistas con cliente"),
            ),
            ProcessStep(
                id="1-2",
                name="Diseño de Arquitectura",
                description="Definición de la arquitectura técnica de la solución",
                responsible="Arquitecto de Software",
                estimated_time="1-2 días",
                resources=("Herramientas de diseño", "Patrones de arquitectura"),
            ),
            ProcessStep(
                id="1-3",
                name="Implementación",
                description="Codificación de la solución según especificaciones",
                responsible="Desarrollador",
                estimated_time="5-10 días",
                resources=("IDE", "Frameworks", "Librerías"),
            ),
        ),
    ),
    Process(
        id="2",
        name="Testing y QA",
        description="Proceso de aseguramiento de la calidad del software",
        sector=Sector.QA,
        owner="Ana López",
        status=ProcessStatus.ACTIVE,
        last_review="2024-02-01",
        next_review="2024-08-01",
        version="1.8",
        steps=(
            ProcessStep(
                id="2-1",
                name="Planificación de Pruebas",
                description="Diseño del plan de pruebas y casos de test",
                responsible="QA Lead",
                estimated_time="1-2 días",
                resources=("Casos de prueba", "Herramientas de testing"),
            ),
            ProcessStep(
                id="2-2",
                name="Ejecución de Pruebas",
                description="Ejecución de casos de prueba manuales y automatizados",
                responsible="QA Tester",
                estimated_time="3-5 días",
                resources=("Ambiente de testing", "Datos de prueba"),
            ),
        ),
    ),
)

SEED_RISKS = (
    Risk(
        id="1",
        title="Falla en Servidores de Producción",
        description="Riesgo de caída de servidores que afecte la disponibilidad del servicio",
        sector=Sector.DEVELOPMENT,
        category=RiskCategory.TECHNOLOGICAL,
        probability=RiskLevel.MEDIUM,
        impact=RiskLevel.HIGH,
        risk_level=RiskLevel.MEDIUM,
        mitigation="Implementar redundancia y monitoreo 24/7",
        responsible="Jefe de Infraestructura",
        status=RiskStatus.IN_TREATMENT,
        identified_date="2024-01-10",
        review_date="2024-04-10",
    ),
    Risk(
        id="2",
        title="Rotación de Personal Clave",
        description="Pérdida de conocimiento crítico por salida de empleados senior",
        sector=Sector.HR,
        category=RiskCategory.OPERATIONAL,
        probability=RiskLevel.MEDIUM,
        impact=RiskLevel.MEDIUM,
        risk_level=RiskLevel.MEDIUM,
        mitigation="Programa de mentorías y documentación del conocimiento",
        responsible="Gerente de RRHH",
        status=RiskStatus.IDENTIFIED,
        identified_date="2024-02-05",
        review_date="2024-05-05",
    ),
    Risk(
        id="3",
        title="Vulnerabilidades de Seguridad",
        description="Potenciales brechas de seguridad en las aplicaciones desarrolladas",
        sector=Sector.QA,
        category=RiskCategory.TECHNOLOGICAL,
        probability=RiskLevel.LOW,
        impact=RiskLevel.VERY_HIGH,
        risk_level=RiskLevel.MEDIUM,
        mitigation="Auditorías de seguridad regulares y capacitación en desarrollo seguro",
        responsible="Security Officer",
        status=RiskStatus.MITIGATED,
        identified_date="2024-01-20",
        review_date="2024-04-20",
    ),
)

SEED_OPPORTUNITIES = (
    Opportunity(
        id="1",
        title="Automatización de Pruebas",
        description="Implementar herramientas de testing automatizado para mejorar eficiencia",
        sector=Sector.QA,
        category=OpportunityCategory.EFFICIENCY,
        priority=Priority.HIGH,
        expected_benefit="Reducción del 40% en tiempo de testing y mejora en cobertura",
        responsible="Ana López",
        status=OpportunityStatus.IN_IMPLEMENTATION,
        identified_date="2024-01-15",
        target_date="2024-06-30",
    ),
    Opportunity(
        id="2",
        title="Capacitación en Metodologías Ágiles",
        description="Formar equipos en Scrum y Kanban para mejorar productividad",
        sector=Sector.DEVELOPMENT,
        category=OpportunityCategory.PROCESS_IMPROVEMENT,
        priority=Priority.MEDIUM,
        expected_benefit="Mejora en tiempos de entrega y satisfacción del cliente",
        responsible="Carlos Rodríguez",
        status=OpportunityStatus.IDENTIFIED,
        identified_date="2024-02-01",
        target_date="2024-08-31",
    ),
    Opportunity(
        id="3",
        title="Programa de Retención de Talento",
        description="Desarrollar beneficios adicionales para retener empleados clave",
        sector=Sector.HR,
        category=OpportunityCategory.TALENT,
        priority=Priority.HIGH,
        expected_benefit="Reducción del 30% en rotación de personal",
        responsible="Laura Martínez",
        status=OpportunityStatus.IN_EVALUATION,
        identified_date="2024-02-10",
        target_date="2024-12-31",
    ),
)

SEED_PDCA_ITEMS = (
    PDCAItem(
        id="1",
        title="Mejora en Proceso de Testing",
        description="Optimizar el proceso de testing para reducir defectos",
        phase=PDCAPhase.DO,
        sector=Sector.QA,
        priority=Priority.HIGH,
        responsible="Ana López",
        status=PDCAStatus.IN_PROGRESS,
        planned_actions="Incorporar testing automatizado en el pipeline de integración",
        actual_results="Implementación de nuevas herramientas de testing automatizado",
        lessons="",
        next_steps="",
        created_date="2024-01-15",
        last_updated="2024-01-15",
        target_date="2024-06-15",
        results="Implementación de nuevas herramientas de testing automatizado",
    ),
    PDCAItem(
        id="2",
        title="Estandarización de Documentación",
        description="Unificar formatos y plantillas de documentos técnicos",
        phase=PDCAPhase.PLAN,
        sector=Sector.DEVELOPMENT,
        priority=Priority.MEDIUM,
        responsible="Carlos Rodríguez",
        status=PDCAStatus.PENDING,
        planned_actions="Relevar plantillas existentes y definir un formato único",
        actual_results="",
        lessons="",
        next_steps="",
        created_date="2024-03-01",
        last_updated="2024-03-01",
        target_date="2024-09-01",
    ),
    PDCAItem(
        id="3",
        title="Evaluación de Satisfacción del Cliente",
        description="Implementar encuestas regulares de satisfacción",
        phase=PDCAPhase.CHECK,
        sector=Sector.SALES,
        priority=Priority.MEDIUM,
        responsible="Roberto Silva",
        status=PDCAStatus.COMPLETED,
        planned_actions="Encuesta trimestral a clientes activos",
        actual_results="Índice de satisfacción del 92%, identificadas 3 áreas de mejora",
        lessons="Las encuestas breves obtienen mayor tasa de respuesta",
        next_steps="Implementar plan de acción para áreas identificadas",
        created_date="2024-01-01",
        last_updated="2024-03-25",
        target_date="2024-03-31",
        completion_date="2024-03-25",
        results="Índice de satisfacción del 92%, identificadas 3 áreas de mejora",
        next_actions="Implementar plan de acción para áreas identificadas",
    ),
)

SEED_NON_CONFORMITIES = (
    NonConformity(
        id="1",
        title="Falta de Validación en Formularios",
        description="Se detectó falta de validación en formularios de entrada de datos",
        sector=Sector.DEVELOPMENT,
        severity=Severity.MODERATE,
        source=NonConformitySource.INTERNAL_AUDIT,
        identified_by="Ana López",
        identified_date="2024-02-15",
        root_cause="Ausencia de checklist de validación en el proceso de desarrollo",
        status=NonConformityStatus.IN_TREATMENT,
        corrective_actions=(
            CorrectiveAction(
                id="1-1",
                description="Crear checklist de validaciones obligatorias",
                responsible="Carlos Rodríguez",
                target_date="2024-04-01",
                status=ActionStatus.IN_PROGRESS,
            ),
            CorrectiveAction(
                id="1-2",
                description="Capacitar equipo en mejores prácticas de validación",
                responsible="Tech Lead",
                target_date="2024-04-15",
                status=ActionStatus.PENDING,
            ),
        ),
    ),
    NonConformity(
        id="2",
        title="Documentos Desactualizados",
        description="Se encontraron procedimientos con versiones obsoletas en uso",
        sector=Sector.ADMINISTRATION,
        severity=Severity.MINOR,
        source=NonConformitySource.MANAGEMENT_REVIEW,
        identified_by="María González",
        identified_date="2024-01-30",
        root_cause="Falta de proceso de control de versiones documentales",
        status=NonConformityStatus.CLOSED,
        close_date="2024-03-15",
        corrective_actions=(
            CorrectiveAction(
                id="2-1",
                description="Implementar sistema de control de versiones",
                responsible="Responsable de Calidad",
                target_date="2024-03-01",
                completion_date="2024-02-28",
                status=ActionStatus.COMPLETED,
                verification="Sistema implementado y funcionando correctamente",
                effectiveness="Reducción del 95% en uso de documentos obsoletos",
            ),
        ),
    ),
)

SEED_KPIS = (
    KPI(
        id="1",
        name="Defectos por Release",
        description="Cantidad de defectos encontrados por versión liberada",
        sector=Sector.QA,
        current_value=3.2,
        target_value=2.0,
        unit="defectos",
        frequency="Por release",
        trend=Trend.DOWN,
        last_update="2024-03-15",
    ),
    KPI(
        id="2",
        name="Tiempo de Resolución de Issues",
        description="Tiempo promedio para resolver issues críticos",
        sector=Sector.DEVELOPMENT,
        current_value=4.5,
        target_value=3.0,
        unit="horas",
        frequency="Semanal",
        trend=Trend.DOWN,
        last_update="2024-03-20",
    ),
    KPI(
        id="3",
        name="Satisfacción del Cliente",
        description="Índice de satisfacción basado en encuestas",
        sector=Sector.SALES,
        current_value=92.0,
        target_value=95.0,
        unit="%",
        frequency="Mensual",
        trend=Trend.UP,
        last_update="2024-03-01",
    ),
    KPI(
        id="4",
        name="Rotación de Personal",
        description="Porcentaje anual de rotación de empleados",
        sector=Sector.HR,
        current_value=8.5,
        target_value=5.0,
        unit="%",
        frequency="Anual",
        trend=Trend.STABLE,
        last_update="2024-02-29",
    ),
    KPI(
        id="5",
        name="Cobertura de Testing",
        description="Porcentaje de código cubierto por pruebas automatizadas",
        sector=Sector.QA,
        current_value=78.0,
        target_value=85.0,
        unit="%",
        frequency="Por sprint",
        trend=Trend.UP,
        last_update="2024-03-18",
    ),
    KPI(
        id="6",
        name="Cumplimiento de Deadlines",
        description="Porcentaje de proyectos entregados a tiempo",
        sector=Sector.DEVELOPMENT,
        current_value=85.0,
        target_value=90.0,
        unit="%",
        frequency="Mensual",
        trend=Trend.UP,
        last_update="2024-03-20",
    ),
)


def get_initial_data() -> AppState:
    return AppState(
        documents=SEED_DOCUMENTS,
        processes=SEED_PROCESSES,
        risks=SEED_RISKS,
        opportunities=SEED_OPPORTUNITIES,
        pdca_items=SEED_PDCA_ITEMS,
        non_conformities=SEED_NON_CONFORMITIES,
        kpis=SEED_KPIS,
        dark_mode=False,
    )
