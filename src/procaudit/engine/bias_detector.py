"""
ProcAudit Bias Detector

Compares one case against its peer population and emits bias indicators.

Sub-analyses (independent, each emits at most one indicator):
1. Statistical anomaly      - z-score of the compliance score (>= 5 scored peers)
2. Procedural inconsistency - far fewer events than peers (>= 3 peers)
3. Official pattern         - cases of the same officials score well below
                              the peer average (>= 3 shared, scored peers)

Too small a population is a normal outcome: the sub-analysis is skipped,
never raised.

Aggregate risk = min(round(sum(confidence * deviation * 20)), 100), so a
weak single signal contributes little while co-occurring signals compound.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..config import AnalysisSettings
from ..models import (
    BiasAnalysisResult,
    BiasIndicator,
    BiasType,
    CaseSummary,
    ProcedureEvent,
    distinct_speakers,
)
from .population_stats import (
    average_event_count,
    cases_for_officials,
    compute_stats,
    mean,
    recent_peers,
    round_half_up,
    scored_values,
)
from .summary_composer import compose_comparison_summary

logger = logging.getLogger(__name__)

ANOMALY_RISK_THRESHOLD = 50
MAX_BIAS_RISK = 100


# =============================================================================
# Aggregation
# =============================================================================

def aggregate_bias_risk(flags: list[BiasIndicator]) -> int:
    """Overall bias risk in [0, 100] (0 when there are no flags)."""
    if not flags:
        return 0
    return min(round_half_up(sum(f.weight for f in flags)), MAX_BIAS_RISK)


# =============================================================================
# Bias Detector
# =============================================================================

@dataclass
class BiasDetector:
    """
    Runs the bias sub-analyses for one case.

    Usage:
        detector = BiasDetector()
        result = detector.detect(
            case_id="CASE-001",
            current_score=report.compliance_score,
            events=events,
            peer_cases=store.peer_cases(institution, excluding="CASE-001"),
        )
    """
    settings: AnalysisSettings = field(default_factory=AnalysisSettings)

    def detect(
        self,
        case_id: str,
        current_score: int,
        events: list[ProcedureEvent],
        peer_cases: list[CaseSummary],
    ) -> BiasAnalysisResult:
        """
        Analyze a case against its peers.

        Args:
            case_id: Current case
            current_score: Compliance score of the current case
            events: Procedure events of the current case
            peer_cases: Same-institution peers, most recent first

        Returns:
            BiasAnalysisResult with zero or more indicators
        """
        peers = recent_peers(peer_cases, self.settings.peer_limit)

        flags: list[BiasIndicator] = []
        for indicator in (
            self.statistical_anomaly(current_score, peers),
            self.procedural_inconsistency(len(events), peers),
            self.official_pattern(distinct_speakers(events), peers),
        ):
            if indicator is not None:
                flags.append(indicator)

        overall = aggregate_bias_risk(flags)
        return BiasAnalysisResult(
            case_id=case_id,
            flags=flags,
            overall_bias_risk=overall,
            is_anomaly=overall > ANOMALY_RISK_THRESHOLD,
            comparison_summary=compose_comparison_summary(flags, len(peers)),
            sample_size=len(peers),
        )

    # -------------------------------------------------------------------------
    # Sub-analyses
    # -------------------------------------------------------------------------

    def statistical_anomaly(
        self,
        current_score: int,
        peers: list[CaseSummary],
    ) -> Optional[BiasIndicator]:
        """Flag a compliance score more than z_score_threshold deviations from the peer mean."""
        stats = compute_stats(peers, self.settings.peer_limit)
        if not stats.is_sufficient(self.settings.min_anomaly_peers):
            logger.debug("Statistical anomaly skipped: %d scored peers", stats.n)
            return None

        deviation = abs(current_score - stats.mean)
        z = deviation / stats.std_dev if stats.std_dev > 0 else 0.0
        if z <= self.settings.z_score_threshold:
            return None

        return BiasIndicator(
            type=BiasType.PERSONAL,
            description=(
                f"This case deviates significantly from similar cases "
                f"({round_half_up(deviation)} points from average)"
            ),
            confidence=min(0.5 + (z - self.settings.z_score_threshold) * 0.15, 0.95),
            deviation_score=z,
            comparison_data={
                "current_score": current_score,
                "average_score": round_half_up(stats.mean),
                "standard_deviation": round_half_up(stats.std_dev),
                "sample_size": stats.n,
            },
        )

    def procedural_inconsistency(
        self,
        current_events: int,
        peers: list[CaseSummary],
    ) -> Optional[BiasIndicator]:
        """Flag a case with far fewer procedural steps than its peers."""
        if len(peers) < self.settings.min_comparison_peers:
            logger.debug("Procedural inconsistency skipped: %d peers", len(peers))
            return None

        avg_events = average_event_count(peers)
        if avg_events <= 0:
            return None

        percent_diff = (avg_events - current_events) * 100 / avg_events
        if percent_diff <= self.settings.inconsistency_threshold_pct or current_events <= 0:
            return None

        return BiasIndicator(
            type=BiasType.PERSONAL,
            description=(
                f"This case had {round_half_up(percent_diff)}% fewer procedural "
                f"steps than similar cases"
            ),
            confidence=min(0.5 + (percent_diff / 100) * 0.4, 0.85),
            deviation_score=percent_diff / 20,
            comparison_data={
                "current_event_count": current_events,
                "average_event_count": round_half_up(avg_events),
                "percentage_difference": round_half_up(percent_diff),
            },
        )

    def official_pattern(
        self,
        officials: list[str],
        peers: list[CaseSummary],
    ) -> Optional[BiasIndicator]:
        """
        Flag officials whose cases score well below the peer average.

        One-directional: officials scoring above average are never flagged.
        """
        if not officials:
            return None

        official_cases = cases_for_officials(peers, officials)
        if len(official_cases) < self.settings.min_comparison_peers:
            logger.debug("Official pattern skipped: %d shared cases", len(official_cases))
            return None

        official_scores = scored_values(official_cases)
        if len(official_scores) < self.settings.min_comparison_peers:
            return None

        official_avg = mean(official_scores)
        overall_avg = mean(scored_values(peers))
        score_diff = official_avg - overall_avg

        if score_diff >= -self.settings.official_gap_threshold:
            return None

        gap = abs(score_diff)
        return BiasIndicator(
            type=BiasType.PERSONAL,
            description=(
                f"Cases handled by this official(s) average {round_half_up(gap)} "
                f"points lower than overall average"
            ),
            confidence=min(0.5 + (gap / 30) * 0.35, 0.8),
            deviation_score=gap / 10,
            comparison_data={
                "official_average": round_half_up(official_avg),
                "overall_average": round_half_up(overall_avg),
                "official_case_count": len(official_cases),
                "officials": list(officials),
            },
        )
