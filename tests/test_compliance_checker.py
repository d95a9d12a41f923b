"""
Tests for the compliance checker.

Tests cover:
- Missing required steps and their inferred severity
- Local order inversions
- Forbidden actions
- Decision before evidence review
- Decisions without legal basis
- Determinism
"""
import random

import pytest

from procaudit.engine import ComplianceChecker, step_severity
from procaudit.engine.compliance_checker import (
    check_early_decision,
    check_legal_justification,
    check_missing_steps,
    check_step_order,
)
from procaudit.engine.step_matcher import StepMatcher
from procaudit.models import Severity, ViolationType

from tests.conftest import make_case_type, make_event, make_events


# =============================================================================
# Step Severity Tests
# =============================================================================

class TestStepSeverity:
    """Tests for keyword-inferred severity of missing steps."""

    @pytest.mark.parametrize("step,expected", [
        ("Rights reading", Severity.CRITICAL),
        ("Notify subject of proceedings", Severity.CRITICAL),
        ("Conduct formal hearing", Severity.HIGH),
        ("Present defense evidence", Severity.HIGH),
        ("Document chain of custody", Severity.MEDIUM),
        ("Record complaint or report", Severity.MEDIUM),
        ("Deliberation", Severity.LOW),
    ])
    def test_keyword_severity(self, step, expected):
        """Test each keyword group maps to its severity."""
        assert step_severity(step) == expected

    def test_first_rule_wins(self):
        """Test a step matching several groups takes the earliest rule."""
        assert step_severity("Notify of hearing and record it") == Severity.CRITICAL
        assert step_severity("Collect and document evidence") == Severity.HIGH


# =============================================================================
# Missing Step Tests
# =============================================================================

class TestMissingSteps:
    """Tests for the missing-step detector."""

    def test_missing_rights_step_is_critical(self):
        """Test a missing rights step is a critical violation."""
        events = make_events("Hearing opened")
        violations = check_missing_steps(events, ("Rights reading", "Hearing opened"), StepMatcher())

        assert len(violations) == 1
        assert violations[0].type == ViolationType.MISSING_STEP
        assert violations[0].severity == Severity.CRITICAL
        assert "Rights reading" in violations[0].description
        assert violations[0].violated_rule == "Required procedure step: Rights reading"

    def test_missing_document_step_is_medium(self):
        """Test a missing documentation step is a medium violation."""
        violations = check_missing_steps(
            make_events("Hearing opened"),
            ("Document the outcome",),
            StepMatcher(),
        )
        assert [v.severity for v in violations] == [Severity.MEDIUM]

    def test_all_steps_present(self):
        """Test no violations when every step is matched."""
        events = make_events("Rights reading done", "Hearing opened")
        assert check_missing_steps(events, ("Rights reading", "Hearing opened"), StepMatcher()) == []

    def test_blank_events_do_not_satisfy_steps(self):
        """Test an event with blank text never satisfies a step."""
        events = [make_event(1, "   ")]
        violations = check_missing_steps(events, ("Hearing opened",), StepMatcher())
        assert len(violations) == 1


# =============================================================================
# Step Order Tests
# =============================================================================

class TestStepOrder:
    """Tests for the wrong-order detector."""

    def test_swapped_pair_reported_once(self):
        """Test B before A with required order [A, B] gives one wrong_order."""
        events = [make_event(1, "Beta step"), make_event(2, "Alpha step")]
        violations = check_step_order(events, ("Alpha step", "Beta step"), StepMatcher())

        assert len(violations) == 1
        assert violations[0].type == ViolationType.WRONG_ORDER
        assert violations[0].severity == Severity.MEDIUM

    def test_in_order_sequence_is_clean(self):
        """Test the canonical sequence produces no order violations."""
        events = make_events("Alpha step", "Beta step", "Gamma step")
        assert check_step_order(events, ("Alpha step", "Beta step", "Gamma step"), StepMatcher()) == []

    def test_step_number_is_authoritative(self):
        """Test order follows step_number even when timestamp labels disagree."""
        events = [
            make_event(2, "Alpha step", timestamp_label="00:01:00"),
            make_event(1, "Beta step", timestamp_label="00:05:00"),
        ]
        violations = check_step_order(events, ("Alpha step", "Beta step"), StepMatcher())
        assert len(violations) == 1

    def test_only_adjacent_inversions_count(self):
        """Test a step moved to the end is reported against its neighbour only."""
        events = make_events("Beta step", "Gamma step", "Alpha step")
        violations = check_step_order(events, ("Alpha step", "Beta step", "Gamma step"), StepMatcher())
        assert len(violations) == 1
        assert "Alpha step" in violations[0].description

    def test_unmatched_events_ignored(self):
        """Test events matching no required step do not affect order."""
        events = make_events("Alpha step", "Coffee break", "Beta step")
        assert check_step_order(events, ("Alpha step", "Beta step"), StepMatcher()) == []


# =============================================================================
# Forbidden Action Tests
# =============================================================================

class TestForbiddenActions:
    """Tests for forbidden-action detection."""

    def test_forbidden_action_detected(self):
        """Test a forbidden action is a high informal_decision with evidence."""
        case_type = make_case_type(forbidden_actions=["Private communication with one party"])
        events = [make_event(
            1,
            "Private communication with one party in chambers",
            timestamp_label="00:10:00",
        )]

        violations = ComplianceChecker().check(events, case_type)
        forbidden = [v for v in violations if v.violated_rule and v.violated_rule.startswith("Forbidden")]

        assert len(forbidden) == 1
        assert forbidden[0].type == ViolationType.INFORMAL_DECISION
        assert forbidden[0].severity == Severity.HIGH
        assert forbidden[0].evidence_text == "Private communication with one party in chambers"
        assert forbidden[0].evidence_time == "00:10:00"
        assert forbidden[0].violated_rule == "Forbidden action: Private communication with one party"


# =============================================================================
# Type-Independent Check Tests
# =============================================================================

class TestEarlyDecision:
    """Tests for decision-before-evidence detection."""

    def test_decision_before_evidence_is_critical(self):
        """Test a decision preceding evidence review is flagged."""
        events = [
            make_event(1, "Decision announced", legal_reference="Art. 1", timestamp_label="00:02:00"),
            make_event(2, "Evidence examined"),
        ]
        violations = check_early_decision(events)

        assert len(violations) == 1
        assert violations[0].type == ViolationType.INFORMAL_DECISION
        assert violations[0].severity == Severity.CRITICAL
        assert violations[0].evidence_text == "Decision at step 1, evidence review at step 2"
        assert violations[0].evidence_time == "00:02:00"

    def test_decision_after_evidence_is_clean(self):
        """Test the normal order is not flagged."""
        events = make_events("Evidence review", "Ruling issued")
        assert check_early_decision(events) == []

    def test_no_evidence_event_is_clean(self):
        """Test nothing is flagged without an evidence event."""
        assert check_early_decision(make_events("Decision announced")) == []


class TestLegalJustification:
    """Tests for decisions lacking a legal reference."""

    def test_decision_without_reference(self):
        """Test each unreferenced decision is flagged."""
        events = make_events("Decision announced", "Ruling on motion")
        violations = check_legal_justification(events)

        assert len(violations) == 2
        assert all(v.type == ViolationType.NO_JUSTIFICATION for v in violations)
        assert all(v.severity == Severity.MEDIUM for v in violations)

    def test_decision_with_reference(self):
        """Test a cited legal basis satisfies the check."""
        events = [make_event(1, "Decision announced", legal_reference="Art. 29.9")]
        assert check_legal_justification(events) == []

    def test_blank_reference_counts_as_missing(self):
        """Test a whitespace-only reference is not a legal basis."""
        events = [make_event(1, "Decision announced", legal_reference="   ")]
        assert len(check_legal_justification(events)) == 1


# =============================================================================
# Checker Tests
# =============================================================================

class TestComplianceChecker:
    """Tests for the combined checker."""

    def test_missing_rights_and_justification(self, hearing_case_type):
        """Test a hearing without rights reading yields a critical missing step and a missing justification."""
        events = make_events("Hearing opened", "Decision announced")
        violations = ComplianceChecker().check(events, hearing_case_type)

        assert [(v.type, v.severity) for v in violations] == [
            (ViolationType.MISSING_STEP, Severity.CRITICAL),
            (ViolationType.NO_JUSTIFICATION, Severity.MEDIUM),
        ]

    def test_swapped_steps_single_violation(self):
        """Test a swapped pair yields exactly one wrong_order and nothing else."""
        case_type = make_case_type(required_steps=["Alpha step", "Beta step"])
        events = [make_event(1, "Beta step"), make_event(2, "Alpha step")]

        violations = ComplianceChecker().check(events, case_type)

        assert [v.type for v in violations] == [ViolationType.WRONG_ORDER]

    def test_without_case_type_only_generic_checks(self):
        """Test no case type means only type-independent checks run."""
        events = make_events("Hearing opened", "Decision announced")
        violations = ComplianceChecker().check(events, None)
        assert [v.type for v in violations] == [ViolationType.NO_JUSTIFICATION]

    def test_empty_events(self, hearing_case_type):
        """Test no events means every required step is missing."""
        violations = ComplianceChecker().check([], hearing_case_type)
        assert len(violations) == 3
        assert all(v.type == ViolationType.MISSING_STEP for v in violations)

    def test_idempotent(self, hearing_case_type):
        """Test repeated checks give identical results."""
        events = make_events("Hearing opened", "Decision announced")
        checker = ComplianceChecker()
        assert checker.check(events, hearing_case_type) == checker.check(events, hearing_case_type)

    def test_input_order_does_not_matter(self, hearing_case_type):
        """Test shuffled input gives the same violations."""
        events = make_events("Decision announced", "Rights reading", "Evidence review", "Hearing opened")
        shuffled = list(events)
        random.Random(7).shuffle(shuffled)

        checker = ComplianceChecker()
        assert checker.check(shuffled, hearing_case_type) == checker.check(events, hearing_case_type)
