"""Case registration and analysis endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends

from ...models import ProcedureEvent, distinct_speakers
from ..schemas.requests import ComplianceRequest, RegisterCaseRequest
from ..schemas.responses import BiasResponse, CaseRegistered, ComplianceResponse
from ..state import ServiceState, get_state

router = APIRouter(prefix="/cases", tags=["Cases"])


@router.put("/{case_id}", response_model=CaseRegistered)
async def register_case(
    case_id: str,
    request: RegisterCaseRequest,
    state: ServiceState = Depends(get_state),
):
    """
    Register a case with its reconstructed events.

    Re-registering a case replaces its events and discards earlier
    analysis outputs.
    """
    events = [ProcedureEvent(**e.model_dump()) for e in request.events]
    record = state.store.register_case(case_id, request.institution, events)
    return CaseRegistered(
        case_id=record.case_id,
        institution=record.institution,
        event_count=len(record.events),
        officials=distinct_speakers(record.events),
    )


@router.post("/{case_id}/compliance", response_model=ComplianceResponse)
async def analyze_compliance(
    case_id: str,
    request: Optional[ComplianceRequest] = None,
    state: ServiceState = Depends(get_state),
):
    """
    Run the compliance analysis and store the report.

    The case type is taken from the request when known to the catalog,
    otherwise selected by matching the events against every case type.
    """
    case_type_id = request.case_type_id if request else None
    result = state.analyzer.analyze_compliance(case_id, case_type_id)
    return ComplianceResponse(**result.to_dict(), report_hash=result.content_hash)


@router.post("/{case_id}/bias", response_model=BiasResponse)
async def analyze_bias(case_id: str, state: ServiceState = Depends(get_state)):
    """
    Compare the case against its institution's peers.

    Requires a compliance report (409 otherwise).
    """
    result = state.analyzer.analyze_bias(case_id)
    return BiasResponse(**result.to_dict())
