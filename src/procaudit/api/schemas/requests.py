"""Request schemas for the API."""

from typing import Optional

from pydantic import BaseModel, Field


class EventInput(BaseModel):
    """A reconstructed procedural event."""
    step_number: int = Field(..., description="Position in the proceeding (>= 1)")
    action: str = Field(..., description="What happened, e.g. 'Hearing opened'")
    speaker: Optional[str] = Field(default=None, description="Official or party acting")
    timestamp_label: Optional[str] = Field(default=None, description="Recording time label, e.g. '00:12:40'")
    legal_reference: Optional[str] = Field(default=None, description="Cited legal basis")
    confidence: float = Field(default=1.0, description="Extraction confidence in [0, 1]")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"step_number": 1, "action": "Hearing opened", "speaker": "Judge A"},
                {
                    "step_number": 2,
                    "action": "Decision announced",
                    "speaker": "Judge A",
                    "legal_reference": "Art. 29.9 CAO",
                },
            ]
        }
    }


class RegisterCaseRequest(BaseModel):
    """Register (or replace) a case and its events."""
    institution: str = Field(..., min_length=1, description="Institution the case belongs to")
    events: list[EventInput] = Field(default=[], description="Procedure events")


class ComplianceRequest(BaseModel):
    """Optional parameters of a compliance analysis."""
    case_type_id: Optional[str] = Field(
        default=None,
        description="Explicit case type; selected by match when omitted or unknown",
    )
