"""
ProcAudit Compliance Checker

Detects procedural violations in one proceeding.

Each check is a pure function (events, ruleset) -> list[Violation]. The
checker concatenates them; no check reads another's output, so the
violation set does not depend on execution order.

Checks:
1. Missing steps       - required step with no matching event (catalog)
2. Wrong order         - local inversions among found required steps (catalog)
3. Forbidden actions   - event matching a forbidden action (catalog)
4. Early decision      - decision before evidence review (always runs)
5. No justification    - decision without legal reference (always runs)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..models import (
    CaseTypeDefinition,
    ProcedureEvent,
    Severity,
    Violation,
    ViolationType,
    order_events,
)
from .step_matcher import StepMatcher

logger = logging.getLogger(__name__)


# =============================================================================
# Keyword Tables
# =============================================================================

DECISION_KEYWORDS = ("decision", "ruling")
EVIDENCE_KEYWORDS = ("evidence", "review")

# Ordered: first matching rule wins. Catalog steps carry no explicit
# severity, so it is inferred from domain vocabulary.
STEP_SEVERITY_RULES: tuple[tuple[tuple[str, ...], Severity], ...] = (
    (("rights", "notify"), Severity.CRITICAL),
    (("hearing", "evidence"), Severity.HIGH),
    (("document", "record"), Severity.MEDIUM),
)
DEFAULT_STEP_SEVERITY = Severity.LOW


def step_severity(step: str) -> Severity:
    """Severity of a missing required step, from keywords in its text."""
    text = step.lower()
    for keywords, severity in STEP_SEVERITY_RULES:
        if any(k in text for k in keywords):
            return severity
    return DEFAULT_STEP_SEVERITY


# =============================================================================
# Individual Checks
# =============================================================================

def check_missing_steps(
    events: list[ProcedureEvent],
    required_steps: tuple[str, ...],
    matcher: StepMatcher,
) -> list[Violation]:
    """One missing_step violation per required step no event matches."""
    violations: list[Violation] = []
    for step in required_steps:
        if any(matcher.matches(e.action, step) for e in events):
            continue
        violations.append(Violation(
            type=ViolationType.MISSING_STEP,
            description=f'Required step missing: "{step}"',
            severity=step_severity(step),
            violated_rule=f"Required procedure step: {step}",
        ))
    return violations


def check_step_order(
    events: list[ProcedureEvent],
    required_steps: tuple[str, ...],
    matcher: StepMatcher,
) -> list[Violation]:
    """
    Detect local inversions of required steps.

    Each event maps to the first required step it matches. Only adjacent
    pairs of that found sequence are compared, so one misplaced step is
    reported once rather than against every step it overtook.
    """
    found: list[int] = []
    for event in order_events(events):
        index = matcher.first_match(event.action, required_steps)
        if index >= 0:
            found.append(index)

    violations: list[Violation] = []
    for previous, current in zip(found, found[1:]):
        if previous > current:
            violations.append(Violation(
                type=ViolationType.WRONG_ORDER,
                description=(
                    f'Steps performed out of order: "{required_steps[current]}" '
                    f'should come before "{required_steps[previous]}"'
                ),
                severity=Severity.MEDIUM,
                violated_rule=f"Required order: {required_steps[current]} -> {required_steps[previous]}",
            ))
    return violations


def check_forbidden_actions(
    events: list[ProcedureEvent],
    forbidden_actions: tuple[str, ...],
    matcher: StepMatcher,
) -> list[Violation]:
    """One violation per (event, forbidden action) match."""
    violations: list[Violation] = []
    for event in order_events(events):
        for forbidden in forbidden_actions:
            if not matcher.matches(event.action, forbidden):
                continue
            violations.append(Violation(
                type=ViolationType.INFORMAL_DECISION,
                description=f'Forbidden action detected: "{forbidden}"',
                severity=Severity.HIGH,
                evidence_text=event.action,
                evidence_time=event.timestamp_label,
                violated_rule=f"Forbidden action: {forbidden}",
            ))
    return violations


def _earliest(events: list[ProcedureEvent], keywords: tuple[str, ...]) -> Optional[ProcedureEvent]:
    candidates = [e for e in events if e.mentions(*keywords)]
    if not candidates:
        return None
    return min(candidates, key=lambda e: e.step_number)


def check_early_decision(events: list[ProcedureEvent]) -> list[Violation]:
    """Flag a decision/ruling that precedes the first evidence review."""
    decision = _earliest(events, DECISION_KEYWORDS)
    evidence = _earliest(events, EVIDENCE_KEYWORDS)

    if decision is None or evidence is None:
        return []
    if decision.step_number >= evidence.step_number:
        return []

    return [Violation(
        type=ViolationType.INFORMAL_DECISION,
        description="Decision appears to have been made before evidence was formally reviewed",
        severity=Severity.CRITICAL,
        evidence_text=(
            f"Decision at step {decision.step_number}, "
            f"evidence review at step {evidence.step_number}"
        ),
        evidence_time=decision.timestamp_label,
    )]


def check_legal_justification(events: list[ProcedureEvent]) -> list[Violation]:
    """One no_justification violation per decision lacking a legal reference."""
    return [
        Violation(
            type=ViolationType.NO_JUSTIFICATION,
            description="Decision made without citing legal basis",
            severity=Severity.MEDIUM,
            evidence_text=event.action,
            evidence_time=event.timestamp_label,
        )
        for event in order_events(events)
        if event.mentions(*DECISION_KEYWORDS) and not event.has_legal_reference
    ]


# =============================================================================
# Compliance Checker
# =============================================================================

@dataclass
class ComplianceChecker:
    """
    Runs every violation detector over a proceeding.

    Usage:
        checker = ComplianceChecker()
        violations = checker.check(events, case_type)   # case_type may be None
    """
    matcher: StepMatcher = field(default_factory=StepMatcher)

    def check(
        self,
        events: list[ProcedureEvent],
        case_type: Optional[CaseTypeDefinition] = None,
    ) -> list[Violation]:
        """
        Detect violations.

        Args:
            events: Procedure events (any order; sorted by step number)
            case_type: Resolved checklist, or None for type-independent checks only

        Returns:
            Violations in detector order
        """
        ordered = order_events(events)
        violations: list[Violation] = []

        if case_type is not None:
            violations.extend(check_missing_steps(ordered, case_type.required_steps, self.matcher))
            violations.extend(check_step_order(ordered, case_type.required_steps, self.matcher))
            violations.extend(check_forbidden_actions(ordered, case_type.forbidden_actions, self.matcher))

        violations.extend(check_early_decision(ordered))
        violations.extend(check_legal_justification(ordered))

        logger.debug(
            "Compliance check over %d events (case type %s): %d violations",
            len(ordered),
            case_type.id if case_type else None,
            len(violations),
        )
        return violations
