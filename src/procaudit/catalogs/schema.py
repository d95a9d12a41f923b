"""
ProcAudit Case-Type Catalog Schemas

Pydantic models for validating case-type catalog YAML/JSON files.

Catalog entries are authored outside this system and their list fields
arrive in varying shapes (native lists, JSON-encoded strings, garbage).
Malformed required/forbidden/time-limit fields degrade to empty
collections with a warning; they never fail the load. Only a missing id
or name makes an entry invalid.

Schema versioning:
- schema_version field tracks breaking changes
- Loaders should check version compatibility
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

logger = logging.getLogger(__name__)


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


# =============================================================================
# Lenient coercion helpers
# =============================================================================

def _decode_json_text(value: Any) -> Any:
    """Decode a JSON-encoded string field; other values pass through."""
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            logger.warning("Catalog field is not valid JSON, treating as empty: %r", value[:60])
            return None
    return value


def coerce_text_list(value: Any, field_name: str = "") -> list[str]:
    """
    Normalise a required-steps / forbidden-actions field to a list of text.

    Non-list input becomes []. Non-text or blank items are dropped.
    """
    value = _decode_json_text(value)
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning(
            "Catalog field %s is %s, not a list; treating as empty",
            field_name or "<list>", type(value).__name__,
        )
        return []

    items: list[str] = []
    for item in value:
        if isinstance(item, str) and item.strip():
            items.append(item.strip())
        else:
            logger.warning("Dropping non-text entry %r from catalog field %s", item, field_name)
    return items


def coerce_time_limits(value: Any) -> dict[str, str]:
    """Normalise a time-limits field to a text -> text mapping."""
    value = _decode_json_text(value)
    if value is None:
        return {}
    if not isinstance(value, dict):
        logger.warning(
            "Catalog field time_limits is %s, not a mapping; treating as empty",
            type(value).__name__,
        )
        return {}
    return {str(k): str(v) for k, v in value.items() if v is not None}


# =============================================================================
# Case Type Schema
# =============================================================================

class CaseTypeSchema(BaseModel):
    """Schema for one case-type entry."""
    id: str = Field(..., min_length=1, description="Unique identifier (e.g., 'ct-court-hearing')")
    name: str = Field(..., min_length=1, description="Human-readable name")
    description: Optional[str] = Field(None, description="Longer description")
    required_steps: list[str] = Field(
        default_factory=list,
        description="Ordered list of required procedural steps"
    )
    forbidden_actions: list[str] = Field(
        default_factory=list,
        description="Actions that are violations in themselves"
    )
    time_limits: dict[str, str] = Field(
        default_factory=dict,
        description="Step -> duration text"
    )

    @field_validator("required_steps", "forbidden_actions", mode="before")
    @classmethod
    def lenient_text_list(cls, v: Any, info: ValidationInfo) -> list[str]:
        return coerce_text_list(v, info.field_name)

    @field_validator("time_limits", mode="before")
    @classmethod
    def lenient_time_limits(cls, v: Any) -> dict[str, str]:
        return coerce_time_limits(v)

    model_config = {
        "extra": "ignore",  # Catalogs carry localised names etc.
        "populate_by_name": True,
    }


# =============================================================================
# Catalog Schema (Top-Level)
# =============================================================================

class CatalogSchema(BaseModel):
    """Top-level schema for a case-type catalog file."""
    schema_version: str = Field(SCHEMA_VERSION, description="Schema version for compatibility")
    name: Optional[str] = Field(None, description="Catalog name")
    case_types: list[CaseTypeSchema] = Field(default_factory=list)

    model_config = {
        "extra": "forbid",
    }


# =============================================================================
# Validation Helpers
# =============================================================================

def normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    """
    Accept camelCase keys as exported by the case store
    (requiredSteps, forbiddenActions, timeLimits).
    """
    aliases = {
        "requiredSteps": "required_steps",
        "forbiddenActions": "forbidden_actions",
        "timeLimits": "time_limits",
    }
    return {aliases.get(k, k): v for k, v in data.items()}


def validate_case_type(data: dict[str, Any]) -> CaseTypeSchema:
    """
    Validate a single case-type mapping.

    Raises:
        pydantic.ValidationError: If id or name is missing
    """
    return CaseTypeSchema.model_validate(normalize_keys(data))


def validate_catalog(data: Any) -> CatalogSchema:
    """
    Validate a catalog document.

    Accepts either a mapping with a case_types list or a bare list of
    case-type mappings.
    """
    if isinstance(data, list):
        data = {"case_types": data}
    if isinstance(data, dict) and isinstance(data.get("case_types"), list):
        data = dict(data)
        data["case_types"] = [
            normalize_keys(ct) if isinstance(ct, dict) else ct
            for ct in data["case_types"]
        ]
    return CatalogSchema.model_validate(data)


def check_schema_version(data: Any) -> bool:
    """Check the catalog's major schema version matches."""
    if not isinstance(data, dict):
        return True
    pack_major = str(data.get("schema_version", SCHEMA_VERSION)).split(".")[0]
    current_major = SCHEMA_VERSION.split(".")[0]
    return pack_major == current_major
