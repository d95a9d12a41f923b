"""
ProcAudit Population Statistics

Descriptive statistics over a peer population of prior cases.

Peer cases come from the case store most-recent-first; only the first
PEER_LIMIT are considered. Standard deviation uses the population formula
(divide by n): this is a descriptive triage signal, not an inferential
claim. Callers decide whether n is large enough via
PopulationStats.is_sufficient.
"""
from __future__ import annotations

import math
from typing import Iterable, Optional

from ..config import PEER_LIMIT
from ..models import CaseSummary, InstitutionStats, PopulationStats, Severity


HIGH_RISK_LEVELS = frozenset({Severity.HIGH, Severity.CRITICAL})


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def population_std_dev(values: list[float], center: Optional[float] = None) -> float:
    """Population standard deviation (divide by n)."""
    if not values:
        return 0.0
    mu = mean(values) if center is None else center
    return math.sqrt(sum((v - mu) ** 2 for v in values) / len(values))


def recent_peers(peer_cases: Iterable[CaseSummary], limit: int = PEER_LIMIT) -> list[CaseSummary]:
    """The first `limit` peers (input is most-recent-first)."""
    return list(peer_cases)[:limit]


def scored_values(peer_cases: Iterable[CaseSummary]) -> list[float]:
    return [float(p.compliance_score) for p in peer_cases if p.is_scored]


def compute_stats(peer_cases: Iterable[CaseSummary], limit: int = PEER_LIMIT) -> PopulationStats:
    """
    Mean and population standard deviation of peer compliance scores.

    Args:
        peer_cases: Peers from the same institution, most recent first
        limit: Population cap

    Returns:
        PopulationStats (n = number of scored peers within the cap)
    """
    scores = scored_values(recent_peers(peer_cases, limit))
    mu = mean(scores)
    return PopulationStats(
        mean=mu,
        std_dev=population_std_dev(scores, mu),
        n=len(scores),
    )


def average_event_count(peer_cases: list[CaseSummary]) -> float:
    """Average number of procedure events across peers (0.0 if none)."""
    return mean([float(p.event_count) for p in peer_cases])


def cases_for_officials(peer_cases: list[CaseSummary], officials: list[str]) -> list[CaseSummary]:
    """Peers in which at least one of the officials appears."""
    if not officials:
        return []
    return [p for p in peer_cases if p.shares_official(officials)]


def official_averages(peer_cases: list[CaseSummary]) -> dict[str, float]:
    """Average compliance score per official, across the scored peers they appear in."""
    totals: dict[str, list[float]] = {}
    for peer in peer_cases:
        if not peer.is_scored:
            continue
        for official in dict.fromkeys(peer.officials):
            totals.setdefault(official, []).append(float(peer.compliance_score))
    return {official: mean(scores) for official, scores in totals.items()}


def institution_stats(institution: str, cases: Iterable[CaseSummary]) -> Optional[InstitutionStats]:
    """
    Institution-wide statistics over every analyzed case.

    Returns None when the institution has no scored cases.
    """
    scored = [c for c in cases if c.is_scored]
    if not scored:
        return None

    scores = [c.compliance_score for c in scored]
    high_risk = sum(1 for c in scored if c.severity_level in HIGH_RISK_LEVELS)

    return InstitutionStats(
        institution=institution,
        total_cases=len(scored),
        average_compliance_score=round_half_up(mean([float(s) for s in scores])),
        min_compliance_score=min(scores),
        max_compliance_score=max(scores),
        high_risk_cases=high_risk,
        high_risk_percentage=round_half_up(high_risk / len(scored) * 100),
    )
