"""Case type catalog endpoints."""

from fastapi import APIRouter, Depends

from ..schemas.responses import CaseTypeDetail, CaseTypeSummary
from ..state import ServiceState, get_state

router = APIRouter(prefix="/case-types", tags=["Case Types"])


@router.get("", response_model=list[CaseTypeSummary])
async def list_case_types(state: ServiceState = Depends(get_state)):
    """List the loaded case types in catalog order."""
    return [
        CaseTypeSummary(
            id=ct.id,
            name=ct.name,
            required_step_count=len(ct.required_steps),
            forbidden_action_count=len(ct.forbidden_actions),
        )
        for ct in state.registry.case_types()
    ]


@router.get("/{case_type_id}", response_model=CaseTypeDetail)
async def get_case_type(case_type_id: str, state: ServiceState = Depends(get_state)):
    """Full checklist of one case type."""
    case_type = state.registry.require(case_type_id)
    return CaseTypeDetail(
        id=case_type.id,
        name=case_type.name,
        description=case_type.description,
        required_steps=list(case_type.required_steps),
        forbidden_actions=list(case_type.forbidden_actions),
        time_limits=dict(case_type.time_limits),
    )
