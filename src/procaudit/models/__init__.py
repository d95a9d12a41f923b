"""
ProcAudit Models

Domain models for procedural compliance and bias analysis.

Usage:
    from procaudit.models import (
        ProcedureEvent, CaseTypeDefinition, Violation,
        ComplianceResult, BiasIndicator, Severity,
    )
"""
from __future__ import annotations

# Enums
from .enums import (
    BiasType,
    Severity,
    TieBreakPolicy,
    ViolationType,
)

# Events
from .events import (
    ProcedureEvent,
    distinct_speakers,
    order_events,
)

# Case types
from .case_type import CaseTypeDefinition

# Compliance
from .compliance import (
    ComplianceResult,
    ScoreCard,
    Violation,
)

# Bias
from .bias import (
    BiasAnalysisResult,
    BiasIndicator,
    CaseSummary,
    InstitutionStats,
    PopulationStats,
)

__all__ = [
    # Enums
    "BiasType",
    "Severity",
    "TieBreakPolicy",
    "ViolationType",
    # Events
    "ProcedureEvent",
    "distinct_speakers",
    "order_events",
    # Case types
    "CaseTypeDefinition",
    # Compliance
    "ComplianceResult",
    "ScoreCard",
    "Violation",
    # Bias
    "BiasAnalysisResult",
    "BiasIndicator",
    "CaseSummary",
    "InstitutionStats",
    "PopulationStats",
]
