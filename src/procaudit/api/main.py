"""
ProcAudit FastAPI Service

REST API over the compliance and bias engines.

Endpoints:
    GET  /health                          - Liveness probe
    GET  /case-types                      - Loaded case types
    GET  /case-types/{id}                 - One case type checklist
    PUT  /cases/{case_id}                 - Register case events
    POST /cases/{case_id}/compliance      - Run compliance analysis
    POST /cases/{case_id}/bias            - Run bias analysis
    GET  /institutions/{institution}/stats - Institution statistics

Run with:
    uvicorn procaudit.api.main:app
"""
from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..catalogs import CaseTypeRegistry
from ..config import AnalysisSettings
from ..engine import ProceedingAnalyzer
from ..exceptions import (
    CaseNotFoundError,
    CaseTypeNotFoundError,
    CatalogValidationError,
    InvalidEventError,
    MissingComplianceReportError,
    ProcAuditError,
)
from ..store import InMemoryCaseStore
from .routes import case_types, cases, institutions
from .schemas.responses import HealthResponse
from .state import ServiceState

# =============================================================================
# Logging Setup (Structured JSON)
# =============================================================================

class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if hasattr(record, "request_id"):
            log_entry["request_id"] = record.request_id
        if hasattr(record, "case_id"):
            log_entry["case_id"] = record.case_id
        if hasattr(record, "error_code"):
            log_entry["error_code"] = record.error_code
        if hasattr(record, "duration_ms"):
            log_entry["duration_ms"] = record.duration_ms
        return json.dumps(log_entry)


logger = logging.getLogger("procaudit")


def configure_logging(level: str) -> None:
    """Attach the JSON handler to the package logger (once)."""
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(isinstance(h.formatter, JSONFormatter) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)


# =============================================================================
# Error Mapping
# =============================================================================

# Most specific class first; anything else is a 500.
ERROR_STATUS: tuple[tuple[type[ProcAuditError], int], ...] = (
    (CaseNotFoundError, 404),
    (CaseTypeNotFoundError, 404),
    (MissingComplianceReportError, 409),
    (InvalidEventError, 422),
    (CatalogValidationError, 422),
)


def status_for(exc: ProcAuditError) -> int:
    for exc_type, status in ERROR_STATUS:
        if isinstance(exc, exc_type):
            return status
    return 500


# =============================================================================
# App Factory
# =============================================================================

def create_app(
    settings: Optional[AnalysisSettings] = None,
    registry: Optional[CaseTypeRegistry] = None,
    store: Optional[InMemoryCaseStore] = None,
) -> FastAPI:
    """
    Build the service.

    Args:
        settings: Analysis settings (default: from PA_* environment)
        registry: Case type catalog (default: loaded from settings.catalog_path)
        store: Case store (default: empty in-memory store)
    """
    settings = settings or AnalysisSettings.from_env()
    configure_logging(settings.log_level)

    if registry is None:
        registry = CaseTypeRegistry()
        registry.load(settings.catalog_path)
    store = store if store is not None else InMemoryCaseStore()

    app = FastAPI(
        title="ProcAudit",
        description="Procedural compliance and bias triage for proceedings",
        version=__version__,
    )
    app.state.service = ServiceState(
        settings=settings,
        registry=registry,
        store=store,
        analyzer=ProceedingAnalyzer(
            catalog=registry,
            events=store,
            cases=store,
            reports=store,
            settings=settings,
        ),
    )

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        """Add request ID to all requests."""
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        start = time.time()

        response = await call_next(request)

        response.headers["X-Request-ID"] = request_id
        logger.debug(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "request_id": request_id,
                "duration_ms": round((time.time() - start) * 1000, 2),
            },
        )
        return response

    @app.exception_handler(ProcAuditError)
    async def procaudit_error_handler(request: Request, exc: ProcAuditError):
        status = status_for(exc)
        log = logger.error if status >= 500 else logger.info
        log(
            str(exc),
            extra={
                "request_id": getattr(request.state, "request_id", "unknown"),
                "error_code": exc.code,
                "case_id": exc.case_id,
            },
        )
        return JSONResponse(status_code=status, content=exc.to_dict())

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """Liveness probe."""
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(timezone.utc).isoformat(),
            version=__version__,
            case_type_count=len(registry),
        )

    app.include_router(case_types.router)
    app.include_router(cases.router)
    app.include_router(institutions.router)

    logger.info(f"ProcAudit {__version__} ready with {len(registry)} case types")
    return app


app = create_app()
