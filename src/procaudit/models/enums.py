"""
ProcAudit Enumerations

All enumeration types used throughout the ProcAudit system.

All enums inherit from (str, Enum) for JSON serialization compatibility.
"""
from __future__ import annotations

from enum import Enum


# =============================================================================
# Severity
# =============================================================================

class Severity(str, Enum):
    """
    Severity tier attached to individual violations and to the
    aggregate result of a case.
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """Ordinal position, LOW = 0 ... CRITICAL = 3."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.LOW: 0,
    Severity.MEDIUM: 1,
    Severity.HIGH: 2,
    Severity.CRITICAL: 3,
}


# =============================================================================
# Violation Types
# =============================================================================

class ViolationType(str, Enum):
    """Kinds of procedural violation the compliance checker can emit."""
    MISSING_STEP = "missing_step"
    WRONG_ORDER = "wrong_order"
    INFORMAL_DECISION = "informal_decision"   # Also used for forbidden actions
    NO_JUSTIFICATION = "no_justification"
    RETROACTIVE = "retroactive"               # Reserved; no detector emits it yet


# =============================================================================
# Bias Types
# =============================================================================

class BiasType(str, Enum):
    """Categories of bias indicator."""
    ETHNIC = "ethnic"
    POLITICAL = "political"
    ECONOMIC = "economic"
    REGIONAL = "regional"
    PERSONAL = "personal"


# =============================================================================
# Case Type Selection
# =============================================================================

class TieBreakPolicy(str, Enum):
    """How the case-type selector resolves equal best scores."""
    FIRST_IN_CATALOG = "first_in_catalog"   # Earliest catalog entry wins
    REJECT_TIES = "reject_ties"             # Ambiguous -> no case type
