"""
ProcAudit Summary Composer

Deterministic text rendering for compliance and bias results.
Fixed templates and lookup tables only; no generated free text.
"""
from __future__ import annotations

from typing import Callable

from ..models import BiasIndicator, Severity, Violation, ViolationType


# =============================================================================
# Recommendation Table
# =============================================================================

# Ordered (predicate over the violation list, sentence). Every rule that
# holds contributes its sentence, in table order.
RECOMMENDATION_RULES: tuple[tuple[Callable[[list[Violation]], bool], str], ...] = (
    (
        lambda vs: any(v.type == ViolationType.MISSING_STEP for v in vs),
        "Review case file to confirm all required steps were documented",
    ),
    (
        lambda vs: any(v.type == ViolationType.WRONG_ORDER for v in vs),
        "Verify the sequence of procedural steps against the required order",
    ),
    (
        lambda vs: any(v.type == ViolationType.INFORMAL_DECISION for v in vs),
        "Escalate for supervisor review due to procedural irregularities",
    ),
    (
        lambda vs: any(v.type == ViolationType.NO_JUSTIFICATION for v in vs),
        "Request legal justification for decisions made",
    ),
    (
        lambda vs: any(v.severity == Severity.CRITICAL for v in vs),
        "URGENT: This case requires immediate human review",
    ),
)

CLEAN_RECOMMENDATION = "No action required. Process appears to comply with procedures."
FALLBACK_RECOMMENDATION = "Review the reported violations against the applicable procedure."


def compose_summary(violations: list[Violation], event_count: int) -> str:
    """One-paragraph summary naming violation counts."""
    head = f"Analysis complete. {event_count} events processed."
    if not violations:
        return f"{head} No procedural violations detected."

    critical = sum(1 for v in violations if v.severity == Severity.CRITICAL)
    high = sum(1 for v in violations if v.severity == Severity.HIGH)

    summary = f"{head} Found {len(violations)} violation(s)."
    if critical:
        summary += f" {critical} critical issue(s) require immediate attention."
    if high:
        summary += f" {high} high-severity issue(s) detected."
    return summary


def compose_recommendation(violations: list[Violation]) -> str:
    """Recommendation sentences selected by the rule table."""
    if not violations:
        return CLEAN_RECOMMENDATION

    sentences = [text for applies, text in RECOMMENDATION_RULES if applies(violations)]
    if not sentences:
        return FALLBACK_RECOMMENDATION
    return ". ".join(sentences) + "."


def compose_comparison_summary(flags: list[BiasIndicator], sample_size: int) -> str:
    """Summary of a bias analysis against its peer sample."""
    head = f"Compared against {sample_size} similar cases."
    if not flags:
        return f"{head} No significant anomalies detected."

    issues = "; ".join(f.description for f in flags)
    return f"{head} Detected {len(flags)} potential concern(s): {issues}"
