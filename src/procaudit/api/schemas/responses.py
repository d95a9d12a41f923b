"""Response schemas for the API."""

from typing import Any, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness probe response."""
    status: str
    timestamp: str
    version: str
    case_type_count: int


class CaseTypeSummary(BaseModel):
    """Case type listing entry."""
    id: str
    name: str
    required_step_count: int
    forbidden_action_count: int


class CaseTypeDetail(BaseModel):
    """Full case type checklist."""
    id: str
    name: str
    description: Optional[str] = None
    required_steps: list[str]
    forbidden_actions: list[str]
    time_limits: dict[str, str]


class CaseRegistered(BaseModel):
    """Acknowledgement of a registered case."""
    case_id: str
    institution: str
    event_count: int
    officials: list[str]


class ViolationOut(BaseModel):
    """A detected procedural violation."""
    type: str
    description: str
    severity: str
    evidence_text: Optional[str] = None
    evidence_time: Optional[str] = None
    violated_rule: Optional[str] = None


class ComplianceResponse(BaseModel):
    """Compliance verdict for a case."""
    case_id: str
    case_type_id: Optional[str] = None
    compliance_score: int
    risk_score: int
    severity_level: str  # low|medium|high|critical
    violations: list[ViolationOut]
    summary: str
    recommendation: str
    event_count: int
    report_hash: str


class BiasIndicatorOut(BaseModel):
    """A bias/anomaly signal."""
    type: str
    description: str
    confidence: float
    deviation_score: float
    comparison_data: dict[str, Any]


class BiasResponse(BaseModel):
    """Bias analysis for a case."""
    case_id: str
    flags: list[BiasIndicatorOut]
    overall_bias_risk: int
    is_anomaly: bool
    comparison_summary: str
    sample_size: int


class InstitutionStatsResponse(BaseModel):
    """Institution-wide statistics."""
    institution: str
    total_cases: int
    average_compliance_score: int
    min_compliance_score: int
    max_compliance_score: int
    high_risk_cases: int
    high_risk_percentage: int
