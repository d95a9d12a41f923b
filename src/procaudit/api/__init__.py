"""
ProcAudit HTTP API

FastAPI service over the analyzer; see procaudit.api.main.
"""
