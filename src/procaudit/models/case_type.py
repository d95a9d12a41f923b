"""
ProcAudit Case Type Models

A case type is the procedural checklist a proceeding is audited against.

Required steps, forbidden actions and time limits are free text authored
outside this system. Their ordering (for required steps) is the canonical
expected sequence.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


# =============================================================================
# Case Type Definition
# =============================================================================

@dataclass(frozen=True)
class CaseTypeDefinition:
    """
    Procedural checklist for one kind of proceeding.

    Attributes:
        id: Unique identifier (e.g., "ct-court-hearing")
        name: Human-readable name
        required_steps: Ordered list of required procedural steps
        forbidden_actions: Actions that are violations in themselves
        time_limits: Step text -> duration text (informational)
        description: Optional longer description
    """
    id: str
    name: str
    required_steps: tuple[str, ...] = ()
    forbidden_actions: tuple[str, ...] = ()
    time_limits: dict[str, str] = field(default_factory=dict, hash=False, compare=False)
    description: Optional[str] = None

    def step_index(self, step: str) -> int:
        """Catalog position of a required step (-1 if absent)."""
        try:
            return self.required_steps.index(step)
        except ValueError:
            return -1

    def time_limit_for(self, step: str) -> Optional[str]:
        return self.time_limits.get(step)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "required_steps": list(self.required_steps),
            "forbidden_actions": list(self.forbidden_actions),
            "time_limits": dict(self.time_limits),
        }
