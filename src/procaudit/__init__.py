"""
ProcAudit - Procedural Compliance and Bias Triage for Proceedings

ProcAudit checks a reconstructed sequence of procedural events from a
legal or administrative proceeding against a procedural checklist, and
compares the case against its institution's peer cases for statistical
anomalies. It produces TRIAGE SIGNALS, not findings: a human reviewer
decides.

Key Features:
- Configurable case-type catalogs (required steps, forbidden actions)
- Deterministic fuzzy step matching and case-type selection
- Missing-step, wrong-order, forbidden-action, early-decision and
  missing-justification checks
- Bounded compliance/risk scores and a severity tier
- z-score, procedural-inconsistency and per-official bias indicators

Quick Start:
    from procaudit import (
        InMemoryCaseStore, ProceedingAnalyzer, ProcedureEvent, load_catalog,
    )

    store = InMemoryCaseStore()
    store.register_case("CASE-001", "District Court 3", [
        ProcedureEvent(step_number=1, action="Hearing opened"),
        ProcedureEvent(step_number=2, action="Decision announced"),
    ])
    analyzer = ProceedingAnalyzer(
        catalog=load_catalog("case_types.yaml"),
        events=store, cases=store, reports=store,
    )
    report = analyzer.analyze_compliance("CASE-001")

Version: 0.1.0
"""
from __future__ import annotations

__version__ = "0.1.0"

# =============================================================================
# Core Models (Re-exported for convenience)
# =============================================================================
from .models import (
    BiasAnalysisResult,
    BiasIndicator,
    BiasType,
    CaseSummary,
    CaseTypeDefinition,
    ComplianceResult,
    InstitutionStats,
    PopulationStats,
    ProcedureEvent,
    ScoreCard,
    Severity,
    TieBreakPolicy,
    Violation,
    ViolationType,
)

# =============================================================================
# Services
# =============================================================================
from .catalogs import CaseTypeRegistry, load_catalog, load_catalog_from_string
from .config import AnalysisSettings
from .engine import (
    BiasDetector,
    CaseTypeSelector,
    ComplianceChecker,
    ProceedingAnalyzer,
    ScoreAggregator,
    StepMatcher,
)
from .store import CaseRecord, InMemoryCaseStore

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    CaseNotFoundError,
    CaseTypeNotFoundError,
    CatalogLoadError,
    CatalogValidationError,
    InvalidEventError,
    MissingComplianceReportError,
    ProcAuditError,
)

__all__ = [
    "__version__",
    # Models
    "BiasAnalysisResult",
    "BiasIndicator",
    "BiasType",
    "CaseSummary",
    "CaseTypeDefinition",
    "ComplianceResult",
    "InstitutionStats",
    "PopulationStats",
    "ProcedureEvent",
    "ScoreCard",
    "Severity",
    "TieBreakPolicy",
    "Violation",
    "ViolationType",
    # Services
    "AnalysisSettings",
    "BiasDetector",
    "CaseRecord",
    "CaseTypeRegistry",
    "CaseTypeSelector",
    "ComplianceChecker",
    "InMemoryCaseStore",
    "ProceedingAnalyzer",
    "ScoreAggregator",
    "StepMatcher",
    "load_catalog",
    "load_catalog_from_string",
    # Exceptions
    "ProcAuditError",
    "CatalogLoadError",
    "CatalogValidationError",
    "CaseTypeNotFoundError",
    "InvalidEventError",
    "CaseNotFoundError",
    "MissingComplianceReportError",
]
