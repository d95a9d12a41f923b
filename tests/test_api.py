"""
Tests for the ProcAudit HTTP service.

Tests cover:
- Health and catalog endpoints
- Case registration and event validation
- Compliance and bias endpoints
- Error mapping to HTTP status codes
"""
import json
import logging

import pytest
from fastapi.testclient import TestClient

from procaudit.api.main import JSONFormatter, create_app, status_for
from procaudit.config import AnalysisSettings
from procaudit.exceptions import (
    CaseNotFoundError,
    CatalogLoadError,
    MissingComplianceReportError,
)


COURT_HEARING_EVENTS = [
    {"step_number": 1, "action": "Open session and verify attendance", "speaker": "Judge A"},
    {"step_number": 2, "action": "Read charges or claims", "speaker": "Judge A"},
    {"step_number": 3, "action": "Allow defendant/respondent to respond", "speaker": "Judge A"},
    {"step_number": 4, "action": "Present prosecution/plaintiff evidence", "speaker": "Prosecutor B"},
    {"step_number": 5, "action": "Present defense evidence", "speaker": "Counsel C"},
    {"step_number": 6, "action": "Allow closing arguments", "speaker": "Judge A"},
    {"step_number": 7, "action": "Deliberation", "speaker": "Judge A"},
    {
        "step_number": 8,
        "action": "Announce decision with legal basis",
        "speaker": "Judge A",
        "legal_reference": "Art. 29.9",
    },
]


@pytest.fixture
def client():
    """Client for a fresh service using the bundled catalog."""
    return TestClient(create_app(settings=AnalysisSettings()))


def register(client, case_id, events, institution="Court A"):
    response = client.put(f"/cases/{case_id}", json={"institution": institution, "events": events})
    assert response.status_code == 200
    return response.json()


# =============================================================================
# Health / Catalog
# =============================================================================

class TestServiceInfo:
    """Tests for info endpoints."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["case_type_count"] == 3
        assert "X-Request-ID" in response.headers

    def test_list_case_types(self, client):
        response = client.get("/case-types")
        assert response.status_code == 200
        ids = [ct["id"] for ct in response.json()]
        assert ids == ["ct-admin-offense", "ct-criminal-investigation", "ct-court-hearing"]

    def test_get_case_type(self, client):
        response = client.get("/case-types/ct-court-hearing")
        assert response.status_code == 200
        data = response.json()
        assert len(data["required_steps"]) == 8
        assert data["time_limits"]["Written decision"] == "5 days after announcement"

    def test_unknown_case_type(self, client):
        response = client.get("/case-types/ct-nope")
        assert response.status_code == 404
        assert response.json()["code"] == "PA_CASE_TYPE_NOT_FOUND"


# =============================================================================
# Cases
# =============================================================================

class TestCaseEndpoints:
    """Tests for registration and analysis endpoints."""

    def test_register_case(self, client):
        data = register(client, "CASE-001", COURT_HEARING_EVENTS)
        assert data["event_count"] == 8
        assert data["officials"] == ["Judge A", "Prosecutor B", "Counsel C"]

    def test_register_invalid_event(self, client):
        """Test domain validation failures map to 422 with the error code."""
        response = client.put("/cases/CASE-001", json={
            "institution": "Court A",
            "events": [{"step_number": 0, "action": "Hearing opened"}],
        })
        assert response.status_code == 422
        assert response.json()["code"] == "PA_INVALID_EVENT"

    def test_register_requires_institution(self, client):
        response = client.put("/cases/CASE-001", json={"events": []})
        assert response.status_code == 422

    def test_compliance_with_explicit_case_type(self, client):
        register(client, "CASE-001", COURT_HEARING_EVENTS)

        response = client.post("/cases/CASE-001/compliance", json={"case_type_id": "ct-court-hearing"})

        assert response.status_code == 200
        data = response.json()
        assert data["case_type_id"] == "ct-court-hearing"
        assert data["compliance_score"] == 100
        assert data["risk_score"] == 0
        assert data["severity_level"] == "low"
        assert data["violations"] == []
        assert len(data["report_hash"]) == 64

    def test_compliance_without_body(self, client):
        """Test events matching no catalog entry get type-independent checks only."""
        register(client, "CASE-002", [
            {"step_number": 1, "action": "Hearing opened"},
            {"step_number": 2, "action": "Decision announced"},
        ])

        response = client.post("/cases/CASE-002/compliance")

        assert response.status_code == 200
        data = response.json()
        assert data["case_type_id"] is None
        assert [v["type"] for v in data["violations"]] == ["no_justification"]
        assert data["compliance_score"] == 92

    def test_compliance_unknown_case(self, client):
        response = client.post("/cases/CASE-404/compliance")
        assert response.status_code == 404
        assert response.json() == {
            "code": "PA_CASE_NOT_FOUND",
            "message": "Case not found: CASE-404",
            "case_id": "CASE-404",
        }

    def test_bias_requires_compliance(self, client):
        register(client, "CASE-001", COURT_HEARING_EVENTS)
        response = client.post("/cases/CASE-001/bias")
        assert response.status_code == 409
        assert response.json()["code"] == "PA_MISSING_COMPLIANCE_REPORT"

    def test_bias_after_compliance(self, client):
        register(client, "CASE-001", COURT_HEARING_EVENTS)
        client.post("/cases/CASE-001/compliance")

        response = client.post("/cases/CASE-001/bias")

        assert response.status_code == 200
        data = response.json()
        assert data["flags"] == []
        assert data["sample_size"] == 0
        assert data["is_anomaly"] is False


# =============================================================================
# Institutions
# =============================================================================

class TestInstitutionEndpoints:
    def test_stats(self, client):
        register(client, "CASE-001", COURT_HEARING_EVENTS)
        client.post("/cases/CASE-001/compliance")

        response = client.get("/institutions/Court A/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["total_cases"] == 1
        assert data["average_compliance_score"] == 100

    def test_no_analyzed_cases(self, client):
        assert client.get("/institutions/Nowhere/stats").status_code == 404


# =============================================================================
# Service Internals
# =============================================================================

class TestErrorMapping:
    @pytest.mark.parametrize("error,status", [
        (CaseNotFoundError(message="x"), 404),
        (MissingComplianceReportError(message="x"), 409),
        (CatalogLoadError(message="x"), 500),
    ])
    def test_status_for(self, error, status):
        assert status_for(error) == status


class TestJSONFormatter:
    def test_format_includes_extras(self):
        record = logging.LogRecord("procaudit", logging.INFO, __file__, 1, "hello", None, None)
        record.case_id = "CASE-001"
        entry = json.loads(JSONFormatter().format(record))

        assert entry["message"] == "hello"
        assert entry["level"] == "INFO"
        assert entry["case_id"] == "CASE-001"
