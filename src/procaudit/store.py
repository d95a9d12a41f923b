"""
ProcAudit In-Memory Case Store

Reference implementation of every collaborator protocol in
procaudit.interfaces: event source, case store and report sink.

Used by the HTTP service and the tests. Dictionaries are guarded by a
single lock so independent cases can be analyzed from concurrent
request handlers; analyses of the SAME case still need external
serialization.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional

from .canon import content_hash_short
from .exceptions import CaseNotFoundError
from .models import (
    BiasIndicator,
    CaseSummary,
    ComplianceResult,
    ProcedureEvent,
    distinct_speakers,
    order_events,
)

logger = logging.getLogger(__name__)


@dataclass
class CaseRecord:
    """A registered case and its latest analysis outputs."""
    case_id: str
    institution: str
    events: list[ProcedureEvent] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    report: Optional[ComplianceResult] = None
    bias_indicators: list[BiasIndicator] = field(default_factory=list)
    analyzed: bool = False
    analyzed_at: Optional[datetime] = None

    def summary(self) -> CaseSummary:
        """This case as a peer of another case."""
        return CaseSummary(
            case_id=self.case_id,
            compliance_score=self.report.compliance_score if self.report else None,
            event_count=len(self.events),
            officials=tuple(distinct_speakers(self.events)),
            severity_level=self.report.severity_level if self.report else None,
            created_at=self.created_at,
        )


class InMemoryCaseStore:
    """
    Dictionary-backed case store.

    Usage:
        store = InMemoryCaseStore()
        store.register_case("CASE-001", "District Court 3", events)
        store.events("CASE-001")
    """

    def __init__(self) -> None:
        self._cases: dict[str, CaseRecord] = {}
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register_case(
        self,
        case_id: str,
        institution: str,
        events: Iterable[ProcedureEvent],
        created_at: Optional[datetime] = None,
    ) -> CaseRecord:
        """
        Register or replace a case.

        Replacing a case discards its earlier analysis outputs, since they
        were derived from the old events.
        """
        record = CaseRecord(
            case_id=case_id,
            institution=institution,
            events=order_events(events),
        )
        if created_at is not None:
            record.created_at = created_at

        with self._lock:
            replaced = case_id in self._cases
            self._cases[case_id] = record

        logger.info(
            "%s case %s (%s, %d events)",
            "Replaced" if replaced else "Registered",
            case_id, institution, len(record.events),
        )
        return record

    def _get(self, case_id: str) -> CaseRecord:
        record = self._cases.get(case_id)
        if record is None:
            raise CaseNotFoundError(
                message=f"Case not found: {case_id}",
                case_id=case_id,
            )
        return record

    def __contains__(self, case_id: object) -> bool:
        return case_id in self._cases

    def __len__(self) -> int:
        return len(self._cases)

    # -------------------------------------------------------------------------
    # EventSource
    # -------------------------------------------------------------------------

    def events(self, case_id: str) -> list[ProcedureEvent]:
        with self._lock:
            return list(self._get(case_id).events)

    # -------------------------------------------------------------------------
    # CaseStore
    # -------------------------------------------------------------------------

    def case_record(self, case_id: str) -> CaseRecord:
        with self._lock:
            return self._get(case_id)

    def peer_cases(
        self,
        institution: str,
        excluding: str,
        limit: int = 50,
    ) -> list[CaseSummary]:
        with self._lock:
            peers = [
                r for r in self._cases.values()
                if r.institution == institution
                and r.case_id != excluding
                and r.report is not None
            ]
            peers.sort(key=lambda r: r.created_at, reverse=True)
            return [r.summary() for r in peers[:limit]]

    def institution_cases(self, institution: str) -> list[CaseSummary]:
        """Every case of an institution, most recent first."""
        with self._lock:
            records = [r for r in self._cases.values() if r.institution == institution]
            records.sort(key=lambda r: r.created_at, reverse=True)
            return [r.summary() for r in records]

    def compliance_report(self, case_id: str) -> Optional[ComplianceResult]:
        with self._lock:
            record = self._cases.get(case_id)
            return record.report if record else None

    def bias_indicators(self, case_id: str) -> list[BiasIndicator]:
        with self._lock:
            return list(self._get(case_id).bias_indicators)

    # -------------------------------------------------------------------------
    # ReportSink
    # -------------------------------------------------------------------------

    def save_compliance_report(self, case_id: str, result: ComplianceResult) -> None:
        with self._lock:
            record = self._get(case_id)
            unchanged = record.report is not None and record.report.content_hash == result.content_hash
            record.report = result
        logger.debug(
            "Stored compliance report for %s (%s%s)",
            case_id,
            content_hash_short(result.to_dict()),
            ", unchanged" if unchanged else "",
        )

    def save_bias_indicators(self, case_id: str, flags: list[BiasIndicator]) -> None:
        with self._lock:
            self._get(case_id).bias_indicators = list(flags)

    def mark_analyzed(self, case_id: str) -> None:
        with self._lock:
            record = self._get(case_id)
            record.analyzed = True
            record.analyzed_at = datetime.now(timezone.utc)
