"""
ProcAudit Configuration

Analysis thresholds and service settings.

Defaults reproduce the documented engine behaviour; every value can be
overridden through a PA_-prefixed environment variable.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .models import TieBreakPolicy


# =============================================================================
# Defaults
# =============================================================================

DEFAULT_CATALOG_PATH = Path(__file__).parent / "catalogs" / "data" / "case_types.yaml"

PEER_LIMIT = 50
MIN_ANOMALY_PEERS = 5
MIN_COMPARISON_PEERS = 3
Z_SCORE_THRESHOLD = 2.0
INCONSISTENCY_THRESHOLD_PCT = 40.0
OFFICIAL_GAP_THRESHOLD = 15.0
MATCH_PREFIX_LENGTH = 15
SELECTOR_PREFIX_LENGTH = 10


@dataclass(frozen=True)
class AnalysisSettings:
    """
    Tunable parameters of the compliance and bias engines.

    Attributes:
        peer_limit: Max peer cases considered (most recent first)
        min_anomaly_peers: Scored peers required for the z-score check
        min_comparison_peers: Peers required for inconsistency/official checks
        z_score_threshold: z above which a case is a statistical anomaly
        inconsistency_threshold_pct: % fewer events than peers that is flagged
        official_gap_threshold: Points below peer average that flags an official
        match_prefix_length: Prefix length for step matching
        selector_prefix_length: Prefix length for case-type selection
        tie_break: Case-type selector tie-break policy
        catalog_path: Case-type catalog loaded by the service
        log_level: Service log level
    """
    peer_limit: int = PEER_LIMIT
    min_anomaly_peers: int = MIN_ANOMALY_PEERS
    min_comparison_peers: int = MIN_COMPARISON_PEERS
    z_score_threshold: float = Z_SCORE_THRESHOLD
    inconsistency_threshold_pct: float = INCONSISTENCY_THRESHOLD_PCT
    official_gap_threshold: float = OFFICIAL_GAP_THRESHOLD
    match_prefix_length: int = MATCH_PREFIX_LENGTH
    selector_prefix_length: int = SELECTOR_PREFIX_LENGTH
    tie_break: TieBreakPolicy = TieBreakPolicy.FIRST_IN_CATALOG
    catalog_path: Path = DEFAULT_CATALOG_PATH
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> AnalysisSettings:
        """Build settings from PA_* environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            peer_limit=int(env.get("PA_PEER_LIMIT", PEER_LIMIT)),
            min_anomaly_peers=int(env.get("PA_MIN_ANOMALY_PEERS", MIN_ANOMALY_PEERS)),
            min_comparison_peers=int(env.get("PA_MIN_COMPARISON_PEERS", MIN_COMPARISON_PEERS)),
            z_score_threshold=float(env.get("PA_Z_THRESHOLD", Z_SCORE_THRESHOLD)),
            inconsistency_threshold_pct=float(
                env.get("PA_INCONSISTENCY_THRESHOLD", INCONSISTENCY_THRESHOLD_PCT)
            ),
            official_gap_threshold=float(
                env.get("PA_OFFICIAL_GAP_THRESHOLD", OFFICIAL_GAP_THRESHOLD)
            ),
            match_prefix_length=int(env.get("PA_MATCH_PREFIX", MATCH_PREFIX_LENGTH)),
            selector_prefix_length=int(env.get("PA_SELECTOR_PREFIX", SELECTOR_PREFIX_LENGTH)),
            tie_break=TieBreakPolicy(env.get("PA_TIE_BREAK", TieBreakPolicy.FIRST_IN_CATALOG.value)),
            catalog_path=Path(env.get("PA_CATALOG_PATH", str(DEFAULT_CATALOG_PATH))),
            log_level=env.get("PA_LOG_LEVEL", "INFO"),
        )
