"""
ProcAudit Exception Hierarchy

Domain-specific exceptions for procedural compliance analysis.
All exceptions include error codes for tracking and logging.

Exception codes follow the pattern: PA_<CATEGORY>_<SPECIFIC>

Insufficient peer data is NOT an error: bias sub-analyses that lack a
large enough population are skipped, never raised.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ProcAuditError(Exception):
    """
    Base exception for all ProcAudit errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (PA_*)
        details: Additional context about the error
        case_id: Associated case ID if applicable
    """
    message: str
    code: str = "PA_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    case_id: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.case_id:
            parts.append(f"(case: {self.case_id})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/API responses."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.case_id:
            result["case_id"] = self.case_id
        return result


# =============================================================================
# Catalog Errors
# =============================================================================

@dataclass
class CatalogLoadError(ProcAuditError):
    """Failed to read a case-type catalog file."""
    code: str = "PA_CATALOG_LOAD_ERROR"


@dataclass
class CatalogValidationError(ProcAuditError):
    """Case-type catalog is structurally invalid (e.g. missing ids)."""
    code: str = "PA_CATALOG_VALIDATION_ERROR"


@dataclass
class CaseTypeNotFoundError(ProcAuditError):
    """Requested case type is not in the catalog."""
    code: str = "PA_CASE_TYPE_NOT_FOUND"


# =============================================================================
# Case / Event Errors
# =============================================================================

@dataclass
class InvalidEventError(ProcAuditError):
    """Procedure event violates its field constraints."""
    code: str = "PA_INVALID_EVENT"


@dataclass
class CaseNotFoundError(ProcAuditError):
    """Case is unknown to the case store."""
    code: str = "PA_CASE_NOT_FOUND"


@dataclass
class MissingComplianceReportError(ProcAuditError):
    """Bias analysis requested for a case that has no compliance baseline."""
    code: str = "PA_MISSING_COMPLIANCE_REPORT"
