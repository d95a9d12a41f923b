"""ProcAudit API routers."""
