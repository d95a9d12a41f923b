"""
ProcAudit Event Models

Models for the reconstructed sequence of a proceeding.

Key components:
- ProcedureEvent: One procedural action, as produced by the (external)
  event-extraction step

Events are ordered by step_number. That ordering is the "as performed"
sequence and is authoritative for order checks even when timestamp_label
disagrees.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from ..exceptions import InvalidEventError


# =============================================================================
# Procedure Event
# =============================================================================

@dataclass(frozen=True)
class ProcedureEvent:
    """
    A single procedural action in a proceeding.

    Attributes:
        step_number: 1-based position in the performed sequence
        action: Free-text description of what happened
        speaker: Who performed or announced the action (official's name/role)
        timestamp_label: Position in the recording (free text, e.g. "00:04:12")
        legal_reference: Cited legal basis, if any
        confidence: Extraction confidence in [0, 1]
    """
    step_number: int
    action: str
    speaker: Optional[str] = None
    timestamp_label: Optional[str] = None
    legal_reference: Optional[str] = None
    confidence: float = 1.0

    def __post_init__(self) -> None:
        if self.step_number < 1:
            raise InvalidEventError(
                message=f"step_number must be >= 1, got {self.step_number}",
                details={"step_number": self.step_number},
            )
        if not 0.0 <= self.confidence <= 1.0:
            raise InvalidEventError(
                message=f"confidence must be within [0, 1], got {self.confidence}",
                details={"step_number": self.step_number, "confidence": self.confidence},
            )

    @property
    def action_lower(self) -> str:
        return self.action.lower()

    @property
    def has_legal_reference(self) -> bool:
        """True when a non-blank legal basis was cited."""
        return bool(self.legal_reference and self.legal_reference.strip())

    def mentions(self, *keywords: str) -> bool:
        """Check if the action text contains any of the keywords (case-insensitive)."""
        text = self.action_lower
        return any(k in text for k in keywords)

    def to_dict(self) -> dict[str, Any]:
        return {
            "step_number": self.step_number,
            "action": self.action,
            "speaker": self.speaker,
            "timestamp_label": self.timestamp_label,
            "legal_reference": self.legal_reference,
            "confidence": self.confidence,
        }


def order_events(events: Iterable[ProcedureEvent]) -> list[ProcedureEvent]:
    """Return events in performed order (stable sort on step_number)."""
    return sorted(events, key=lambda e: e.step_number)


def distinct_speakers(events: Iterable[ProcedureEvent]) -> list[str]:
    """Distinct non-empty speakers, in first-appearance order."""
    seen: list[str] = []
    for event in events:
        if event.speaker and event.speaker not in seen:
            seen.append(event.speaker)
    return seen
