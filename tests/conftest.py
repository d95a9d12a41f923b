"""
Pytest configuration and fixtures for ProcAudit tests.

Provides helper factories and common fixtures matching actual model definitions.
"""
import pytest
from datetime import datetime, timedelta, timezone

from procaudit.catalogs import CaseTypeRegistry
from procaudit.config import AnalysisSettings
from procaudit.engine import ProceedingAnalyzer
from procaudit.models import (
    CaseSummary,
    CaseTypeDefinition,
    ComplianceResult,
    ProcedureEvent,
    Severity,
    Violation,
    ViolationType,
)
from procaudit.store import InMemoryCaseStore


BASE_TIME = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


# =============================================================================
# Factory Helpers
# =============================================================================

def make_event(
    step_number: int,
    action: str,
    speaker: str = None,
    legal_reference: str = None,
    timestamp_label: str = None,
    confidence: float = 1.0,
) -> ProcedureEvent:
    """Create a ProcedureEvent with required fields."""
    return ProcedureEvent(
        step_number=step_number,
        action=action,
        speaker=speaker,
        timestamp_label=timestamp_label,
        legal_reference=legal_reference,
        confidence=confidence,
    )


def make_events(*actions: str, speaker: str = None) -> list[ProcedureEvent]:
    """Create sequentially numbered events, one per action."""
    return [make_event(i, action, speaker=speaker) for i, action in enumerate(actions, start=1)]


def make_case_type(
    id: str = "ct-test",
    name: str = "Test Procedure",
    required_steps: list = None,
    forbidden_actions: list = None,
    time_limits: dict = None,
    description: str = None,
) -> CaseTypeDefinition:
    """Create a CaseTypeDefinition with required fields."""
    return CaseTypeDefinition(
        id=id,
        name=name,
        required_steps=tuple(required_steps or ()),
        forbidden_actions=tuple(forbidden_actions or ()),
        time_limits=time_limits or {},
        description=description,
    )


def make_violation(
    severity: Severity = Severity.MEDIUM,
    type: ViolationType = ViolationType.MISSING_STEP,
    description: str = None,
) -> Violation:
    """Create a Violation with required fields."""
    return Violation(
        type=type,
        description=description or f"{severity.value} {type.value} violation",
        severity=severity,
    )


def make_peer(
    case_id: str,
    compliance_score: int = 80,
    event_count: int = 8,
    officials: tuple = (),
    severity_level: Severity = None,
    age_days: int = 0,
) -> CaseSummary:
    """Create a peer CaseSummary; larger age_days means older."""
    return CaseSummary(
        case_id=case_id,
        compliance_score=compliance_score,
        event_count=event_count,
        officials=tuple(officials),
        severity_level=severity_level,
        created_at=BASE_TIME - timedelta(days=age_days),
    )


def make_peers(scores: list, event_count: int = 8, officials: tuple = ()) -> list[CaseSummary]:
    """Peers with the given scores, most recent first."""
    return [
        make_peer(f"PEER-{i:03d}", s, event_count=event_count, officials=officials, age_days=i)
        for i, s in enumerate(scores)
    ]


def make_report(
    case_id: str,
    compliance_score: int = 100,
    severity_level: Severity = Severity.LOW,
) -> ComplianceResult:
    """Create a stored-report stand-in with the given score."""
    return ComplianceResult(
        case_id=case_id,
        compliance_score=compliance_score,
        risk_score=100 - compliance_score,
        severity_level=severity_level,
    )


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def hearing_case_type():
    """Three-step hearing checklist."""
    return make_case_type(
        id="ct-hearing",
        name="Hearing",
        required_steps=["Rights reading", "Hearing opened", "Decision announced"],
    )


@pytest.fixture
def registry(hearing_case_type):
    """Registry holding the hearing checklist."""
    return CaseTypeRegistry([hearing_case_type])


@pytest.fixture
def store():
    """Empty in-memory case store."""
    return InMemoryCaseStore()


@pytest.fixture
def settings():
    """Default analysis settings."""
    return AnalysisSettings()


@pytest.fixture
def analyzer(registry, store, settings):
    """Analyzer wired to the in-memory store."""
    return ProceedingAnalyzer(
        catalog=registry,
        events=store,
        cases=store,
        reports=store,
        settings=settings,
    )
