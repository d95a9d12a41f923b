"""
ProcAudit Score Aggregator

Converts a violation list into bounded scores and a severity tier.

Scoring starts at compliance 100 / risk 0 and applies a fixed delta per
violation severity. Both scores are clamped to [0, 100]. The event count
is not used: checklist compliance is absolute, not relative to how
verbose a proceeding was.

Severity tier (first rule that holds):
    critical  risk >= 70  OR any critical violation
    high      risk >= 50  OR any high violation
    medium    risk >= 25
    low       otherwise

The presence rule keeps a single critical violation from being diluted
into a low tier by an otherwise low risk sum.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..models import ScoreCard, Severity, Violation


# Severity -> (compliance delta, risk delta)
SEVERITY_DELTAS: dict[Severity, tuple[int, int]] = {
    Severity.CRITICAL: (-25, 30),
    Severity.HIGH: (-15, 20),
    Severity.MEDIUM: (-8, 10),
    Severity.LOW: (-3, 5),
}

SCORE_MIN = 0
SCORE_MAX = 100

CRITICAL_RISK_THRESHOLD = 70
HIGH_RISK_THRESHOLD = 50
MEDIUM_RISK_THRESHOLD = 25


def clamp_score(value: int) -> int:
    """Clamp a score to [0, 100]."""
    return max(SCORE_MIN, min(SCORE_MAX, value))


def severity_tier(risk_score: int, violations: Iterable[Violation]) -> Severity:
    """Aggregate severity from the risk score and the worst violation present."""
    present = {v.severity for v in violations}

    if risk_score >= CRITICAL_RISK_THRESHOLD or Severity.CRITICAL in present:
        return Severity.CRITICAL
    if risk_score >= HIGH_RISK_THRESHOLD or Severity.HIGH in present:
        return Severity.HIGH
    if risk_score >= MEDIUM_RISK_THRESHOLD:
        return Severity.MEDIUM
    return Severity.LOW


@dataclass(frozen=True)
class ScoreAggregator:
    """
    Stateless scorer.

    Usage:
        card = ScoreAggregator().score(violations, len(events))
        card.compliance_score, card.risk_score, card.severity_level
    """

    def score(self, violations: list[Violation], total_event_count: int = 0) -> ScoreCard:
        """
        Score a violation list.

        Args:
            violations: Violations of one case
            total_event_count: Accepted for symmetry with the summary; not scored

        Returns:
            ScoreCard with clamped scores and severity tier
        """
        compliance = SCORE_MAX
        risk = SCORE_MIN
        for violation in violations:
            compliance_delta, risk_delta = SEVERITY_DELTAS[violation.severity]
            compliance += compliance_delta
            risk += risk_delta

        compliance = clamp_score(compliance)
        risk = clamp_score(risk)

        return ScoreCard(
            compliance_score=compliance,
            risk_score=risk,
            severity_level=severity_tier(risk, violations),
        )
