"""Institution statistics endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from ..schemas.responses import InstitutionStatsResponse
from ..state import ServiceState, get_state

router = APIRouter(prefix="/institutions", tags=["Institutions"])


@router.get("/{institution}/stats", response_model=InstitutionStatsResponse)
async def institution_stats(institution: str, state: ServiceState = Depends(get_state)):
    """Score distribution and high-risk share across the institution's analyzed cases."""
    stats = state.analyzer.institution_statistics(institution)
    if stats is None:
        raise HTTPException(
            status_code=404,
            detail=f"No analyzed cases for institution '{institution}'",
        )
    return InstitutionStatsResponse(**stats.to_dict())
