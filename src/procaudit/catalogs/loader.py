"""
ProcAudit Case-Type Catalog Loader

Loads and validates case-type catalogs from YAML or JSON files.

Converts Pydantic schema models to ProcAudit domain models.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Optional, Union

import yaml
from pydantic import ValidationError

from ..exceptions import CatalogLoadError, CatalogValidationError, CaseTypeNotFoundError
from ..models import CaseTypeDefinition
from .schema import (
    SCHEMA_VERSION,
    CaseTypeSchema,
    check_schema_version,
    validate_case_type,
    validate_catalog,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_case_type(schema: CaseTypeSchema) -> CaseTypeDefinition:
    """Convert CaseTypeSchema to CaseTypeDefinition model."""
    return CaseTypeDefinition(
        id=schema.id,
        name=schema.name,
        description=schema.description,
        required_steps=tuple(schema.required_steps),
        forbidden_actions=tuple(schema.forbidden_actions),
        time_limits=dict(schema.time_limits),
    )


def case_type_from_mapping(data: dict[str, Any]) -> CaseTypeDefinition:
    """
    Build a CaseTypeDefinition from a raw mapping (e.g. a case-store row).

    Malformed list fields become empty; a missing id/name raises.

    Raises:
        CatalogValidationError: If the mapping has no usable id or name
    """
    try:
        return _convert_case_type(validate_case_type(data))
    except ValidationError as e:
        raise CatalogValidationError(
            message=f"Case type validation failed: {e.error_count()} errors",
            details={"errors": e.errors(include_url=False)},
        )


def _check_unique_ids(case_types: list[CaseTypeDefinition], path: str = "") -> None:
    seen: set[str] = set()
    duplicates: list[str] = []
    for ct in case_types:
        if ct.id in seen:
            duplicates.append(ct.id)
        seen.add(ct.id)
    if duplicates:
        path_str = f" in {path}" if path else ""
        raise CatalogValidationError(
            message=f"Duplicate case type IDs{path_str}: {', '.join(duplicates)}",
            details={"duplicates": duplicates, "path": path},
        )


# =============================================================================
# Case Type Registry
# =============================================================================

class CaseTypeRegistry:
    """
    Holds loaded case types in catalog order.

    Catalog order matters: the case-type selector's default tie-break
    prefers the earliest entry.

    Usage:
        registry = CaseTypeRegistry()
        registry.load("path/to/case_types.yaml")

        for ct in registry.case_types():
            ...
        hearing = registry.case_type("ct-court-hearing")
    """

    def __init__(
        self,
        case_types: Optional[Iterable[CaseTypeDefinition]] = None,
        strict_version: bool = True,
    ):
        """
        Initialize the registry.

        Args:
            case_types: Initial entries, in catalog order
            strict_version: If True, reject catalogs with incompatible schema versions
        """
        self.strict_version = strict_version
        self._case_types: dict[str, CaseTypeDefinition] = {}
        for ct in case_types or []:
            self.add(ct)

    def add(self, case_type: CaseTypeDefinition) -> None:
        """Add or replace a case type (replacement keeps the original position)."""
        self._case_types[case_type.id] = case_type

    def load(self, path: Union[str, Path]) -> list[CaseTypeDefinition]:
        """
        Load a catalog file and register its case types.

        Args:
            path: Path to YAML or JSON file

        Returns:
            Case types loaded from the file, in file order

        Raises:
            CatalogLoadError: If the file cannot be read or parsed
            CatalogValidationError: If an entry lacks id/name or ids repeat
        """
        path = Path(path)

        try:
            data = self._load_file(path)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise CatalogLoadError(
                message=f"Failed to load case-type catalog: {e}",
                details={"path": str(path), "error": str(e)},
            )

        loaded = self.load_data(data, source=str(path))
        logger.info("Loaded %d case types from %s", len(loaded), path)
        return loaded

    def load_data(self, data: Any, source: str = "") -> list[CaseTypeDefinition]:
        """Validate an already-parsed catalog document and register it."""
        if data is None:
            raise CatalogLoadError(
                message="Case-type catalog is empty",
                details={"path": source},
            )

        if self.strict_version and not check_schema_version(data):
            raise CatalogValidationError(
                message=(
                    f"Schema version mismatch: catalog has {data.get('schema_version')}, "
                    f"expected {SCHEMA_VERSION}"
                ),
                details={"path": source, "expected_version": SCHEMA_VERSION},
            )

        try:
            schema = validate_catalog(data)
        except ValidationError as e:
            raise CatalogValidationError(
                message=f"Case-type catalog validation failed: {e.error_count()} errors",
                details={"errors": e.errors(include_url=False), "path": source},
            )

        loaded = [_convert_case_type(ct) for ct in schema.case_types]
        _check_unique_ids(loaded, source)

        for ct in loaded:
            self.add(ct)
        return loaded

    def _load_file(self, path: Path) -> Any:
        """Load data from YAML or JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)

    # -------------------------------------------------------------------------
    # CaseTypeCatalog interface
    # -------------------------------------------------------------------------

    def case_types(self) -> list[CaseTypeDefinition]:
        """All case types, in catalog order."""
        return list(self._case_types.values())

    def case_type(self, case_type_id: str) -> Optional[CaseTypeDefinition]:
        """Get a case type by ID."""
        return self._case_types.get(case_type_id)

    def require(self, case_type_id: str) -> CaseTypeDefinition:
        """
        Get a case type by ID.

        Raises:
            CaseTypeNotFoundError: If the ID is unknown
        """
        case_type = self.case_type(case_type_id)
        if case_type is None:
            raise CaseTypeNotFoundError(
                message=f"Case type not found: {case_type_id}",
                details={"case_type_id": case_type_id, "available": list(self._case_types)},
            )
        return case_type

    def __len__(self) -> int:
        return len(self._case_types)


# =============================================================================
# Convenience Functions
# =============================================================================

def load_catalog(path: Union[str, Path]) -> CaseTypeRegistry:
    """
    Load a case-type catalog file into a new registry.

    Args:
        path: Path to YAML or JSON file

    Returns:
        CaseTypeRegistry holding the file's case types
    """
    registry = CaseTypeRegistry()
    registry.load(path)
    return registry


def load_catalog_from_string(content: str, format: str = "yaml") -> CaseTypeRegistry:
    """
    Load a case-type catalog from a string.

    Args:
        content: YAML or JSON string
        format: "yaml" or "json"
    """
    try:
        if format.lower() == "json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise CatalogLoadError(
            message=f"Failed to parse case-type catalog: {e}",
            details={"format": format, "error": str(e)},
        )

    registry = CaseTypeRegistry()
    registry.load_data(data, source="<string>")
    return registry
