"""
ProcAudit Engine

Core services for procedural compliance and bias analysis.

Services:
- StepMatcher: Fuzzy prefix/substring matching of actions against steps
- CaseTypeSelector: Pick the best-matching case type from a catalog
- ComplianceChecker: Detect procedural violations
- ScoreAggregator: Violations -> compliance score, risk score, severity tier
- BiasDetector: Peer-population anomaly indicators
- ProceedingAnalyzer: Orchestrate both pipelines against collaborators

Usage:
    from procaudit.engine import (
        ComplianceChecker,
        ScoreAggregator,
        BiasDetector,
        ProceedingAnalyzer,
    )
"""
from __future__ import annotations

from .analyzer import ProceedingAnalyzer
from .bias_detector import BiasDetector, aggregate_bias_risk
from .case_type_selector import CaseTypeSelector
from .compliance_checker import (
    ComplianceChecker,
    check_early_decision,
    check_forbidden_actions,
    check_legal_justification,
    check_missing_steps,
    check_step_order,
    step_severity,
)
from .population_stats import (
    average_event_count,
    cases_for_officials,
    compute_stats,
    institution_stats,
    official_averages,
    population_std_dev,
    round_half_up,
)
from .score_aggregator import ScoreAggregator, clamp_score, severity_tier
from .step_matcher import StepMatcher, matches
from .summary_composer import (
    compose_comparison_summary,
    compose_recommendation,
    compose_summary,
)

__all__ = [
    # Matching
    "StepMatcher",
    "matches",
    "CaseTypeSelector",
    # Compliance
    "ComplianceChecker",
    "check_missing_steps",
    "check_step_order",
    "check_forbidden_actions",
    "check_early_decision",
    "check_legal_justification",
    "step_severity",
    # Scoring
    "ScoreAggregator",
    "clamp_score",
    "severity_tier",
    # Statistics
    "compute_stats",
    "population_std_dev",
    "average_event_count",
    "cases_for_officials",
    "official_averages",
    "institution_stats",
    "round_half_up",
    # Bias
    "BiasDetector",
    "aggregate_bias_risk",
    # Text
    "compose_summary",
    "compose_recommendation",
    "compose_comparison_summary",
    # Orchestration
    "ProceedingAnalyzer",
]
