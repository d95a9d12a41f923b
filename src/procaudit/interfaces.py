"""
ProcAudit Collaborator Interfaces

Protocols for the systems the analyzer reads from and writes to.
Transcription, event extraction, persistence and audit logging live
outside the core; anything satisfying these protocols can be plugged in.
procaudit.store.InMemoryCaseStore implements all of them.
"""
from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from .models import (
    BiasIndicator,
    CaseSummary,
    CaseTypeDefinition,
    ComplianceResult,
    ProcedureEvent,
)


@runtime_checkable
class EventSource(Protocol):
    """Supplies the reconstructed procedure events of a case."""

    def events(self, case_id: str) -> list[ProcedureEvent]:
        """
        Events of a case, ordered by step number.

        Raises:
            CaseNotFoundError: If the case is unknown
        """
        ...


@runtime_checkable
class CaseTypeCatalog(Protocol):
    """Read-only catalog of case types."""

    def case_types(self) -> list[CaseTypeDefinition]:
        ...

    def case_type(self, case_type_id: str) -> Optional[CaseTypeDefinition]:
        ...


@runtime_checkable
class CaseStore(Protocol):
    """Case metadata, peer lookup and stored compliance reports."""

    def case_record(self, case_id: str) -> Any:
        """
        Metadata of a case; must expose an `institution` attribute.

        Raises:
            CaseNotFoundError: If the case is unknown
        """
        ...

    def peer_cases(
        self,
        institution: str,
        excluding: str,
        limit: int = 50,
    ) -> list[CaseSummary]:
        """Other analyzed cases of the institution, most recent first."""
        ...

    def institution_cases(self, institution: str) -> list[CaseSummary]:
        """Every case of the institution, analyzed or not, most recent first."""
        ...

    def compliance_report(self, case_id: str) -> Optional[ComplianceResult]:
        ...


@runtime_checkable
class ReportSink(Protocol):
    """Persists analysis outputs."""

    def save_compliance_report(self, case_id: str, result: ComplianceResult) -> None:
        """Store the report, replacing any earlier one for the case."""
        ...

    def save_bias_indicators(self, case_id: str, flags: list[BiasIndicator]) -> None:
        """Store the indicators, replacing any earlier ones for the case."""
        ...

    def mark_analyzed(self, case_id: str) -> None:
        ...
