"""
Tests for case-type catalog loading and validation.

Tests cover:
- Loading the bundled catalog
- YAML and JSON sources, bare lists and camelCase keys
- Lenient handling of malformed list fields
- Structural validation errors
"""
import json
import logging

import pytest

from procaudit.catalogs import (
    CaseTypeRegistry,
    case_type_from_mapping,
    coerce_text_list,
    coerce_time_limits,
    load_catalog,
    load_catalog_from_string,
)
from procaudit.config import DEFAULT_CATALOG_PATH
from procaudit.exceptions import (
    CaseTypeNotFoundError,
    CatalogLoadError,
    CatalogValidationError,
)


# =============================================================================
# Bundled Catalog Tests
# =============================================================================

class TestBundledCatalog:
    """Tests for the catalog shipped with the package."""

    def test_loads_all_case_types_in_order(self):
        registry = load_catalog(DEFAULT_CATALOG_PATH)
        assert [ct.id for ct in registry.case_types()] == [
            "ct-admin-offense",
            "ct-criminal-investigation",
            "ct-court-hearing",
        ]

    def test_case_type_contents(self):
        hearing = load_catalog(DEFAULT_CATALOG_PATH).require("ct-court-hearing")
        assert hearing.name == "Court Hearing"
        assert hearing.required_steps[0] == "Open session and verify attendance"
        assert hearing.required_steps[-1] == "Announce decision with legal basis"
        assert "Announcing decision before deliberation" in hearing.forbidden_actions
        assert hearing.time_limit_for("Written decision") == "5 days after announcement"


# =============================================================================
# Loader Tests
# =============================================================================

class TestCatalogLoader:
    """Tests for catalog parsing."""

    def test_yaml_string(self):
        registry = load_catalog_from_string("""
schema_version: "1.0.0"
case_types:
  - id: ct-a
    name: Procedure A
    required_steps: [Open session, Read charges]
""")
        assert len(registry) == 1
        assert registry.case_type("ct-a").required_steps == ("Open session", "Read charges")

    def test_json_bare_list_with_camel_case(self):
        """Test case-store exports (bare list, camelCase, JSON-string fields) load."""
        content = json.dumps([
            {
                "id": "ct-b",
                "name": "Procedure B",
                "requiredSteps": json.dumps(["Register complaint", "Conduct formal hearing"]),
                "forbiddenActions": json.dumps(["Evidence tampering"]),
                "timeLimits": json.dumps({"Conduct formal hearing": "15 days"}),
            }
        ])
        case_type = load_catalog_from_string(content, format="json").require("ct-b")

        assert case_type.required_steps == ("Register complaint", "Conduct formal hearing")
        assert case_type.forbidden_actions == ("Evidence tampering",)
        assert case_type.time_limits == {"Conduct formal hearing": "15 days"}

    def test_json_file(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({
            "schema_version": "1.0.0",
            "case_types": [{"id": "ct-c", "name": "Procedure C"}],
        }))
        registry = CaseTypeRegistry()
        loaded = registry.load(path)
        assert [ct.id for ct in loaded] == ["ct-c"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogLoadError) as exc_info:
            load_catalog(tmp_path / "absent.yaml")
        assert exc_info.value.code == "PA_CATALOG_LOAD_ERROR"

    def test_unparseable_yaml(self):
        with pytest.raises(CatalogLoadError):
            load_catalog_from_string("case_types: [unclosed")

    def test_empty_document(self):
        with pytest.raises(CatalogLoadError):
            load_catalog_from_string("")

    def test_missing_id_rejected(self):
        with pytest.raises(CatalogValidationError):
            load_catalog_from_string("case_types:\n  - name: No Id\n")

    def test_duplicate_ids_rejected(self):
        with pytest.raises(CatalogValidationError) as exc_info:
            load_catalog_from_string("""
case_types:
  - {id: ct-a, name: A}
  - {id: ct-a, name: A again}
""")
        assert exc_info.value.details["duplicates"] == ["ct-a"]

    def test_incompatible_schema_version(self):
        with pytest.raises(CatalogValidationError):
            load_catalog_from_string('schema_version: "2.0.0"\ncase_types: []\n')

    def test_lenient_registry_accepts_other_versions(self):
        registry = CaseTypeRegistry(strict_version=False)
        registry.load_data({"schema_version": "2.0.0", "case_types": [{"id": "ct-a", "name": "A"}]})
        assert len(registry) == 1

    def test_unknown_case_type(self):
        registry = CaseTypeRegistry()
        assert registry.case_type("ct-nope") is None
        with pytest.raises(CaseTypeNotFoundError):
            registry.require("ct-nope")


# =============================================================================
# Malformed Field Tests
# =============================================================================

class TestMalformedFields:
    """Tests for lenient field coercion."""

    def test_non_list_steps_become_empty(self, caplog):
        caplog.set_level(logging.WARNING)
        case_type = case_type_from_mapping({"id": "ct-a", "name": "A", "required_steps": 42})
        assert case_type.required_steps == ()
        assert "not a list" in caplog.text

    def test_invalid_json_string_becomes_empty(self, caplog):
        caplog.set_level(logging.WARNING)
        case_type = case_type_from_mapping({"id": "ct-a", "name": "A", "forbidden_actions": "[broken"})
        assert case_type.forbidden_actions == ()
        assert "not valid JSON" in caplog.text

    def test_non_text_items_dropped(self):
        assert coerce_text_list(["Open session", 3, None, "  ", " Read charges "]) == [
            "Open session",
            "Read charges",
        ]

    def test_non_mapping_time_limits_become_empty(self):
        assert coerce_time_limits(["15 days"]) == {}
        assert coerce_time_limits('{"Hearing": 15}') == {"Hearing": "15"}
        assert coerce_time_limits(None) == {}

    def test_mapping_without_name_rejected(self):
        with pytest.raises(CatalogValidationError):
            case_type_from_mapping({"id": "ct-a", "name": ""})
