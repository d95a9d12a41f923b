"""Shared service state, attached to the FastAPI app by create_app()."""
from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from ..catalogs import CaseTypeRegistry
from ..config import AnalysisSettings
from ..engine import ProceedingAnalyzer
from ..store import InMemoryCaseStore


@dataclass
class ServiceState:
    settings: AnalysisSettings
    registry: CaseTypeRegistry
    store: InMemoryCaseStore
    analyzer: ProceedingAnalyzer


def get_state(request: Request) -> ServiceState:
    return request.app.state.service
