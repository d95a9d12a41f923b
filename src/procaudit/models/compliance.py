"""
ProcAudit Compliance Models

Models produced by the compliance rule engine.

Key components:
- Violation: One detected procedural violation (immutable)
- ScoreCard: Bounded compliance/risk scores and the severity tier
- ComplianceResult: Full verdict for one case, recomputed on every run
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..canon import content_hash
from .enums import Severity, ViolationType


# =============================================================================
# Violation
# =============================================================================

@dataclass(frozen=True)
class Violation:
    """
    A procedural violation detected in a case.

    Only the compliance checker creates these.

    Attributes:
        type: Kind of violation
        description: Human-readable description
        severity: Severity tier
        evidence_text: Event text that evidences the violation
        evidence_time: Timestamp label of the evidencing event
        violated_rule: The rule text that was violated
    """
    type: ViolationType
    description: str
    severity: Severity
    evidence_text: Optional[str] = None
    evidence_time: Optional[str] = None
    violated_rule: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "description": self.description,
            "severity": self.severity.value,
            "evidence_text": self.evidence_text,
            "evidence_time": self.evidence_time,
            "violated_rule": self.violated_rule,
        }


# =============================================================================
# Score Card
# =============================================================================

@dataclass(frozen=True)
class ScoreCard:
    """Aggregate scores for a violation list. Both scores are within [0, 100]."""
    compliance_score: int
    risk_score: int
    severity_level: Severity


# =============================================================================
# Compliance Result
# =============================================================================

@dataclass
class ComplianceResult:
    """
    Compliance verdict for one case.

    Derived data: recomputed on every analysis run, never updated
    incrementally.
    """
    case_id: str
    compliance_score: int
    risk_score: int
    severity_level: Severity
    violations: list[Violation] = field(default_factory=list)
    summary: str = ""
    recommendation: str = ""
    case_type_id: Optional[str] = None
    event_count: int = 0

    @property
    def has_violations(self) -> bool:
        return len(self.violations) > 0

    def violations_of(self, severity: Severity) -> list[Violation]:
        """Violations with the given severity."""
        return [v for v in self.violations if v.severity == severity]

    def to_dict(self) -> dict[str, Any]:
        return {
            "case_id": self.case_id,
            "case_type_id": self.case_type_id,
            "compliance_score": self.compliance_score,
            "risk_score": self.risk_score,
            "severity_level": self.severity_level.value,
            "violations": [v.to_dict() for v in self.violations],
            "summary": self.summary,
            "recommendation": self.recommendation,
            "event_count": self.event_count,
        }

    @property
    def content_hash(self) -> str:
        """SHA-256 of the canonical serialisation; identical inputs give identical hashes."""
        return content_hash(self.to_dict())
