"""
ProcAudit Bias Models

Models for the cross-case bias/anomaly engine.

Key components:
- CaseSummary: A peer case as supplied by the case store
- PopulationStats: Descriptive statistics over a peer population
- InstitutionStats: Institution-wide descriptive statistics
- BiasIndicator: One emitted bias signal
- BiasAnalysisResult: All signals for a case plus the aggregate risk

Bias detection is DETERMINISTIC (not ML/LLM): fixed thresholds over
population statistics.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from .enums import BiasType, Severity


# =============================================================================
# Peer Case Summary
# =============================================================================

@dataclass(frozen=True)
class CaseSummary:
    """
    A prior case from the same institution, used as comparison population.

    Attributes:
        case_id: Identifier of the peer case
        compliance_score: Score of its compliance report (None = not analyzed)
        event_count: Number of procedure events in the case
        officials: Distinct speakers appearing in the case
        severity_level: Aggregate severity of its compliance report
        created_at: When the case was registered (recency ordering)
    """
    case_id: str
    compliance_score: Optional[int]
    event_count: int
    officials: tuple[str, ...] = ()
    severity_level: Optional[Severity] = None
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @property
    def is_scored(self) -> bool:
        return self.compliance_score is not None

    def shares_official(self, officials: list[str]) -> bool:
        return any(o in officials for o in self.officials)


# =============================================================================
# Statistics
# =============================================================================

@dataclass(frozen=True)
class PopulationStats:
    """Mean and population standard deviation of peer compliance scores."""
    mean: float
    std_dev: float
    n: int

    def is_sufficient(self, min_n: int) -> bool:
        """Whether the sample is large enough to derive an indicator."""
        return self.n >= min_n


@dataclass(frozen=True)
class InstitutionStats:
    """Cross-case statistics for one institution."""
    institution: str
    total_cases: int
    average_compliance_score: int
    min_compliance_score: int
    max_compliance_score: int
    high_risk_cases: int
    high_risk_percentage: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "institution": self.institution,
            "total_cases": self.total_cases,
            "average_compliance_score": self.average_compliance_score,
            "min_compliance_score": self.min_compliance_score,
            "max_compliance_score": self.max_compliance_score,
            "high_risk_cases": self.high_risk_cases,
            "high_risk_percentage": self.high_risk_percentage,
        }


# =============================================================================
# Bias Indicator
# =============================================================================

@dataclass(frozen=True)
class BiasIndicator:
    """
    A single bias/anomaly signal.

    confidence and deviation_score are both required: an indicator is
    never created with one and not the other.

    Attributes:
        type: Bias category
        description: Human-readable description
        confidence: Confidence in [0, 1]
        deviation_score: Magnitude of the deviation (>= 0)
        comparison_data: Statistics the indicator was derived from
    """
    type: BiasType
    description: str
    confidence: float
    deviation_score: float
    comparison_data: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be within [0, 1], got {self.confidence}")
        if self.deviation_score < 0:
            raise ValueError(f"deviation_score must be >= 0, got {self.deviation_score}")

    @property
    def weight(self) -> float:
        """Contribution to the aggregate bias risk."""
        return self.confidence * self.deviation_score * 20

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "description": self.description,
            "confidence": self.confidence,
            "deviation_score": self.deviation_score,
            "comparison_data": dict(self.comparison_data),
        }


# =============================================================================
# Bias Analysis Result
# =============================================================================

@dataclass
class BiasAnalysisResult:
    """All bias indicators for a case and their aggregate risk."""
    case_id: str
    flags: list[BiasIndicator] = field(default_factory=list)
    overall_bias_risk: int = 0
    is_anomaly: bool = False
    comparison_summary: str = ""
    sample_size: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "case_id": self.case_id,
            "flags": [f.to_dict() for f in self.flags],
            "overall_bias_risk": self.overall_bias_risk,
            "is_anomaly": self.is_anomaly,
            "comparison_summary": self.comparison_summary,
            "sample_size": self.sample_size,
        }
