"""Request and response schemas for the ProcAudit API."""
