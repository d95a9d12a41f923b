"""
ProcAudit Case Type Selector

Picks the best-matching case type for a proceeding when none is given.

Scoring: for each candidate, count the (event, required step) pairs the
step matcher accepts. The strictly highest score wins. Ties follow the
configured TieBreakPolicy; the default keeps the earliest catalog entry.

No match (empty catalog, or best score zero) returns None. Callers then
run only the type-independent checks.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..config import SELECTOR_PREFIX_LENGTH
from ..models import CaseTypeDefinition, ProcedureEvent, TieBreakPolicy
from .step_matcher import StepMatcher

logger = logging.getLogger(__name__)


@dataclass
class CaseTypeSelector:
    """
    Selects a case type from a catalog by checklist overlap.

    Usage:
        selector = CaseTypeSelector()
        case_type = selector.select(events, registry.case_types())
        if case_type is None:
            ...  # type-independent checks only
    """
    matcher: StepMatcher = field(
        default_factory=lambda: StepMatcher(prefix_length=SELECTOR_PREFIX_LENGTH)
    )
    tie_break: TieBreakPolicy = TieBreakPolicy.FIRST_IN_CATALOG

    def match_score(
        self,
        events: Iterable[ProcedureEvent],
        case_type: CaseTypeDefinition,
    ) -> int:
        """Number of (event, required step) pairs that match."""
        return sum(
            1
            for event in events
            for step in case_type.required_steps
            if self.matcher.matches(event.action, step)
        )

    def select(
        self,
        events: list[ProcedureEvent],
        catalog: list[CaseTypeDefinition],
    ) -> Optional[CaseTypeDefinition]:
        """
        Pick the best-matching case type.

        Args:
            events: Events of the proceeding
            catalog: Candidate case types, in catalog order

        Returns:
            The selected case type, or None if none is identifiable
        """
        if not catalog:
            return None

        best: Optional[CaseTypeDefinition] = None
        best_score = 0
        tied = False

        for case_type in catalog:
            score = self.match_score(events, case_type)
            if score > best_score:
                best, best_score, tied = case_type, score, False
            elif score == best_score and score > 0:
                tied = True

        if best is None:
            logger.debug("No case type matched any of %d events", len(events))
            return None

        if tied and self.tie_break == TieBreakPolicy.REJECT_TIES:
            logger.debug("Case type selection ambiguous at score %d; rejecting", best_score)
            return None

        logger.debug("Selected case type %s (score %d)", best.id, best_score)
        return best
