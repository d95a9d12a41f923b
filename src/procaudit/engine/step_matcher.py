"""
ProcAudit Step Matcher

Fuzzy-matches a free-text event action against a free-text step or
forbidden-action description.

Policy (deterministic, auditable, no edit distance):
- Case-insensitive, surrounding whitespace ignored
- Substring containment in EITHER direction
- Each side truncated to a bounded prefix before the containment test,
  tolerating paraphrased endings
- Empty/whitespace-only text never matches
"""
from __future__ import annotations

from dataclasses import dataclass

from ..config import MATCH_PREFIX_LENGTH


@dataclass(frozen=True)
class StepMatcher:
    """
    Prefix/substring matcher shared by the case-type selector and the
    compliance checker.

    Usage:
        matcher = StepMatcher()
        matcher.matches("Hearing opened by the judge", "Hearing opened")  # True
    """
    prefix_length: int = MATCH_PREFIX_LENGTH

    def matches(self, candidate_action: str, step_description: str) -> bool:
        """Check whether an event action satisfies a step description."""
        action = (candidate_action or "").strip().lower()
        step = (step_description or "").strip().lower()
        if not action or not step:
            return False

        n = self.prefix_length
        return step[:n] in action or action[:n] in step

    def first_match(self, candidate_action: str, steps: tuple[str, ...] | list[str]) -> int:
        """Index of the first step the action matches, or -1."""
        for i, step in enumerate(steps):
            if self.matches(candidate_action, step):
                return i
        return -1


def matches(candidate_action: str, step_description: str) -> bool:
    """Match with the default prefix length."""
    return StepMatcher().matches(candidate_action, step_description)
