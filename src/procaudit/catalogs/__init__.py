"""
ProcAudit Case-Type Catalogs

Schema validation and loading for case-type catalogs.

A catalog is a YAML or JSON file listing case types: for each, the ordered
required procedural steps, the forbidden actions and informational time
limits. A default catalog ships in catalogs/data/case_types.yaml.

Usage:
    from procaudit.catalogs import load_catalog, CaseTypeRegistry

    registry = load_catalog("path/to/case_types.yaml")
    hearing = registry.case_type("ct-court-hearing")
"""
from __future__ import annotations

from .loader import (
    CaseTypeRegistry,
    case_type_from_mapping,
    load_catalog,
    load_catalog_from_string,
)
from .schema import (
    SCHEMA_VERSION,
    CaseTypeSchema,
    CatalogSchema,
    check_schema_version,
    coerce_text_list,
    coerce_time_limits,
    validate_case_type,
    validate_catalog,
)

__all__ = [
    # Version
    "SCHEMA_VERSION",
    # Loader
    "CaseTypeRegistry",
    "case_type_from_mapping",
    "load_catalog",
    "load_catalog_from_string",
    # Validation
    "validate_case_type",
    "validate_catalog",
    "check_schema_version",
    "coerce_text_list",
    "coerce_time_limits",
    # Schemas
    "CaseTypeSchema",
    "CatalogSchema",
]
