"""
ProcAudit Proceeding Analyzer

Orchestrates the two analysis pipelines against the collaborator
interfaces.

Compliance pipeline:
    events + catalog -> CaseTypeSelector -> ComplianceChecker -> violations
    -> ScoreAggregator -> SummaryComposer -> ComplianceResult (persisted)

Bias pipeline (requires a stored compliance report):
    current case + peer cases -> BiasDetector -> BiasAnalysisResult
    (indicators persisted)

Every run recomputes from scratch and overwrites earlier outputs, so
re-analyzing unchanged inputs is idempotent.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..config import AnalysisSettings
from ..exceptions import MissingComplianceReportError
from ..interfaces import CaseStore, CaseTypeCatalog, EventSource, ReportSink
from ..models import (
    BiasAnalysisResult,
    CaseTypeDefinition,
    ComplianceResult,
    InstitutionStats,
    ProcedureEvent,
)
from .bias_detector import BiasDetector
from .case_type_selector import CaseTypeSelector
from .compliance_checker import ComplianceChecker
from .population_stats import institution_stats
from .score_aggregator import ScoreAggregator
from .step_matcher import StepMatcher
from .summary_composer import compose_recommendation, compose_summary

logger = logging.getLogger(__name__)

@dataclass
class ProceedingAnalyzer:
    """
    Runs compliance and bias analysis for registered cases.

    Usage:
        store = InMemoryCaseStore()
        analyzer = ProceedingAnalyzer(
            catalog=load_catalog(path),
            events=store,
            cases=store,
            reports=store,
        )
        report = analyzer.analyze_compliance("CASE-001")
        bias = analyzer.analyze_bias("CASE-001")
    """
    catalog: CaseTypeCatalog
    events: EventSource
    cases: CaseStore
    reports: ReportSink
    settings: AnalysisSettings = field(default_factory=AnalysisSettings)

    def __post_init__(self) -> None:
        self.selector = CaseTypeSelector(
            matcher=StepMatcher(prefix_length=self.settings.selector_prefix_length),
            tie_break=self.settings.tie_break,
        )
        self.checker = ComplianceChecker(
            matcher=StepMatcher(prefix_length=self.settings.match_prefix_length),
        )
        self.aggregator = ScoreAggregator()
        self.detector = BiasDetector(settings=self.settings)

    # =========================================================================
    # Compliance
    # =========================================================================

    def resolve_case_type(
        self,
        events: list[ProcedureEvent],
        case_type_id: Optional[str] = None,
    ) -> Optional[CaseTypeDefinition]:
        """
        Explicit case type if known, otherwise the best catalog match.

        An unknown explicit id is not an error: it is logged and selection
        falls back to matching.
        """
        if case_type_id:
            case_type = self.catalog.case_type(case_type_id)
            if case_type is not None:
                return case_type
            logger.warning("Unknown case type %s; selecting by match", case_type_id)

        return self.selector.select(events, self.catalog.case_types())

    def evaluate(
        self,
        case_id: str,
        events: list[ProcedureEvent],
        case_type: Optional[CaseTypeDefinition] = None,
    ) -> ComplianceResult:
        """Compliance verdict for a set of events; no collaborators touched."""
        violations = self.checker.check(events, case_type)
        card = self.aggregator.score(violations, len(events))

        return ComplianceResult(
            case_id=case_id,
            compliance_score=card.compliance_score,
            risk_score=card.risk_score,
            severity_level=card.severity_level,
            violations=violations,
            summary=compose_summary(violations, len(events)),
            recommendation=compose_recommendation(violations),
            case_type_id=case_type.id if case_type else None,
            event_count=len(events),
        )

    def analyze_compliance(
        self,
        case_id: str,
        case_type_id: Optional[str] = None,
    ) -> ComplianceResult:
        """
        Run the compliance pipeline and persist the report.

        Args:
            case_id: Registered case
            case_type_id: Optional explicit case type

        Returns:
            The stored ComplianceResult

        Raises:
            CaseNotFoundError: If the event source does not know the case
        """
        events = self.events.events(case_id)
        case_type = self.resolve_case_type(events, case_type_id)
        result = self.evaluate(case_id, events, case_type)

        self.reports.save_compliance_report(case_id, result)
        self.reports.mark_analyzed(case_id)

        logger.info(
            "Compliance analysis %s: type=%s score=%d risk=%d severity=%s violations=%d",
            case_id,
            result.case_type_id,
            result.compliance_score,
            result.risk_score,
            result.severity_level.value,
            len(result.violations),
        )
        return result

    # =========================================================================
    # Bias
    # =========================================================================

    def analyze_bias(self, case_id: str) -> BiasAnalysisResult:
        """
        Compare a case against its institution's peers and persist the indicators.

        Raises:
            CaseNotFoundError: If the case is unknown
            MissingComplianceReportError: If the case has no compliance report
        """
        record = self.cases.case_record(case_id)
        report = self.cases.compliance_report(case_id)
        if report is None:
            raise MissingComplianceReportError(
                message="Compliance analysis must be run before bias analysis",
                case_id=case_id,
            )

        events = self.events.events(case_id)
        peers = self.cases.peer_cases(
            record.institution,
            excluding=case_id,
            limit=self.settings.peer_limit,
        )

        result = self.detector.detect(
            case_id=case_id,
            current_score=report.compliance_score,
            events=events,
            peer_cases=peers,
        )
        self.reports.save_bias_indicators(case_id, result.flags)

        logger.info(
            "Bias analysis %s: peers=%d flags=%d risk=%d anomaly=%s",
            case_id,
            result.sample_size,
            len(result.flags),
            result.overall_bias_risk,
            result.is_anomaly,
        )
        return result

    # =========================================================================
    # Institution
    # =========================================================================

    def institution_statistics(self, institution: str) -> Optional[InstitutionStats]:
        """Institution-wide statistics, or None if no case there has been scored."""
        cases = self.cases.institution_cases(institution)
        return institution_stats(institution, cases)
