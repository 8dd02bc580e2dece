"""Tests for the static tool catalog."""

import pytest

from ns_mcp.tools.catalog import CATALOG, CURRENT_TIME_TOOL, TOOLS, index_catalog

EXPECTED_TOOLS = [
    "get_disruptions",
    "get_travel_advice",
    "get_departures",
    "get_ovfiets",
    "get_station_info",
    "get_current_time_in_rfc3339",
    "get_arrivals",
    "get_prices",
]


class TestCatalog:
    def test_tool_names_in_order(self) -> None:
        assert [spec.name for spec in CATALOG] == EXPECTED_TOOLS

    def test_names_unique(self) -> None:
        assert len(TOOLS) == len(CATALOG)

    def test_index_rejects_duplicate_names(self) -> None:
        with pytest.raises(ValueError, match="duplicate"):
            index_catalog((CATALOG[0], CATALOG[0]))

    def test_every_schema_is_an_object(self) -> None:
        for spec in CATALOG:
            schema = spec.descriptor.input_schema
            assert schema["type"] == "object"
            assert isinstance(schema["properties"], dict)

    def test_required_fields_declared_as_properties(self) -> None:
        for spec in CATALOG:
            schema = spec.descriptor.input_schema
            for name in schema.get("required", []):
                assert name in schema["properties"], (spec.name, name)

    def test_defaults_refer_to_model_fields(self) -> None:
        for spec in CATALOG:
            for key in spec.defaults:
                assert key in spec.arguments.model_fields, (spec.name, key)

    def test_only_current_time_is_local(self) -> None:
        local = [spec.name for spec in CATALOG if spec.operation is None]
        assert local == [CURRENT_TIME_TOOL]

    def test_station_boards_require_station_or_uic_code(self) -> None:
        for name in ("get_departures", "get_arrivals"):
            schema = TOOLS[name].descriptor.input_schema
            assert schema["anyOf"] == [{"required": ["station"]}, {"required": ["uicCode"]}]

    def test_documented_defaults(self) -> None:
        assert TOOLS["get_disruptions"].defaults == {"is_active": True}
        assert TOOLS["get_departures"].defaults == {"max_journeys": 40, "lang": "nl"}
        assert TOOLS["get_station_info"].defaults == {
            "include_non_plannable_stations": False,
            "limit": 10,
        }

    def test_descriptor_serializes_with_input_schema_key(self) -> None:
        data = TOOLS["get_ovfiets"].descriptor.model_dump(by_alias=True)
        assert set(data) == {"name", "description", "inputSchema"}
        assert data["inputSchema"]["required"] == ["stationCode"]
