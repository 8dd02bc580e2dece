"""The static tool catalog.

Each :class:`ToolSpec` pairs the advertised :class:`ToolDescriptor` with the
validator predicate, the typed argument model, the documented defaults and
the name of the :class:`~ns_mcp.ns_api.client.NSApiClient` method that
serves it. The catalog is built once at import time and never mutated.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ns_mcp.protocols.mcp.models import ToolDescriptor
from ns_mcp.tools import arguments as a

CURRENT_TIME_TOOL = "get_current_time_in_rfc3339"
TIMEZONE = "Europe/Amsterdam"

_RFC3339_HINT = "Format - date-time (as date-time in RFC3339)."


@dataclass(frozen=True)
class ToolSpec:
    """Dispatch-table entry for one tool."""

    descriptor: ToolDescriptor
    validator: Callable[[object], bool]
    arguments: type[a.ToolArguments]
    # NSApiClient method name; ``None`` means the dispatcher answers locally.
    operation: str | None = None
    # Field name -> value applied when the caller left the field out.
    defaults: Mapping[str, Any] = field(default_factory=dict)
    # Tool-specific reshaping of the raw mapping before validation.
    prepare: Callable[[Mapping[str, Any]], dict[str, Any]] | None = None

    @property
    def name(self) -> str:
        return self.descriptor.name


def _station_board_schema(kind: str) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "station": {
                "type": "string",
                "description": (
                    "NS Station code for the station (e.g., ASD for Amsterdam Centraal). "
                    "Required if uicCode is not provided"
                ),
            },
            "uicCode": {
                "type": "string",
                "description": "UIC code for the station. Required if station code is not provided",
            },
            "dateTime": {
                "type": "string",
                "description": (
                    f"{_RFC3339_HINT} Only supported for {kind} at foreign stations. "
                    "Defaults to server time (Europe/Amsterdam)"
                ),
            },
            "maxJourneys": {
                "type": "integer",
                "description": f"Number of {kind} to return",
                "minimum": 1,
                "maximum": 100,
                "default": 40,
            },
            "lang": {
                "type": "string",
                "description": (
                    f"Language for localizing the {kind} list. Only a small subset of text "
                    "is translated, mainly notes. Defaults to Dutch"
                ),
                "enum": ["nl", "en"],
                "default": "nl",
            },
        },
        "anyOf": [{"required": ["station"]}, {"required": ["uicCode"]}],
    }


_STATION_BOARD_DEFAULTS = MappingProxyType({"max_journeys": 40, "lang": "nl"})


CATALOG: tuple[ToolSpec, ...] = (
    ToolSpec(
        descriptor=ToolDescriptor(
            name="get_disruptions",
            description=(
                "Get comprehensive information about current and planned disruptions on the "
                "Dutch railway network. Returns details about maintenance work, unexpected "
                "disruptions, alternative transport options, impact on travel times, and "
                "relevant advice. Can filter for active disruptions and specific disruption types."
            ),
            input_schema={
                "type": "object",
                "properties": {
                    "isActive": {
                        "type": "boolean",
                        "description": "Filter to only return active disruptions",
                        "default": True,
                    },
                    "type": {
                        "type": "string",
                        "description": "Type of disruptions to return (e.g., MAINTENANCE, DISRUPTION)",
                        "enum": ["MAINTENANCE", "DISRUPTION"],
                    },
                },
            },
        ),
        validator=a.is_valid_disruptions_args,
        arguments=a.DisruptionsArgs,
        operation="get_disruptions",
        defaults=MappingProxyType({"is_active": True}),
        prepare=a.normalize_is_active,
    ),
    ToolSpec(
        descriptor=ToolDescriptor(
            name="get_travel_advice",
            description=(
                "Get detailed travel routes between two train stations, including transfers, "
                "real-time updates, platform information, and journey duration. Can plan trips "
                "for immediate departure or for a specific future time, with options to optimize "
                "for arrival time. Returns multiple route options with status and crowding "
                "information."
            ),
            input_schema={
                "type": "object",
                "properties": {
                    "fromStation": {
                        "type": "string",
                        "description": "Name or code of departure station",
                    },
                    "toStation": {
                        "type": "string",
                        "description": "Name or code of destination station",
                    },
                    "dateTime": {
                        "type": "string",
                        "description": (
                            f"{_RFC3339_HINT} Datetime that the user wants to depart from the "
                            "origin or arrive at the destination"
                        ),
                    },
                    "searchForArrival": {
                        "type": "boolean",
                        "description": "If true, dateTime is treated as desired arrival time",
                        "default": False,
                    },
                },
                "required": ["fromStation", "toStation"],
            },
        ),
        validator=a.is_valid_travel_advice_args,
        arguments=a.TravelAdviceArgs,
        operation="get_travel_advice",
        defaults=MappingProxyType({"search_for_arrival": False}),
    ),
    ToolSpec(
        descriptor=ToolDescriptor(
            name="get_departures",
            description=(
                "Get real-time departure information for trains from a specific station, "
                "including platform numbers, delays, route details, and any relevant travel "
                "notes. Returns a list of upcoming departures with timing, destination, and "
                "status information."
            ),
            input_schema=_station_board_schema("departures"),
        ),
        validator=a.is_valid_departures_args,
        arguments=a.StationBoardArgs,
        operation="get_departures",
        defaults=_STATION_BOARD_DEFAULTS,
    ),
    ToolSpec(
        descriptor=ToolDescriptor(
            name="get_ovfiets",
            description="Get OV-fiets availability at a train station",
            input_schema={
                "type": "object",
                "properties": {
                    "stationCode": {
                        "type": "string",
                        "description": (
                            "Station code to check OV-fiets availability for "
                            "(e.g., ASD for Amsterdam Centraal)"
                        ),
                    },
                },
                "required": ["stationCode"],
            },
        ),
        validator=a.is_valid_ovfiets_args,
        arguments=a.OVFietsArgs,
        operation="get_ovfiets",
    ),
    ToolSpec(
        descriptor=ToolDescriptor(
            name="get_station_info",
            description="Get detailed information about a train station",
            input_schema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "Station name or code to search for",
                    },
                    "includeNonPlannableStations": {
                        "type": "boolean",
                        "description": "Include stations where trains do not stop regularly",
                        "default": False,
                    },
                    "limit": {
                        "type": "integer",
                        "description": "Maximum number of results to return",
                        "minimum": 1,
                        "maximum": 50,
                        "default": 10,
                    },
                },
                "required": ["query"],
            },
        ),
        validator=a.is_valid_station_info_args,
        arguments=a.StationInfoArgs,
        operation="get_station_info",
        defaults=MappingProxyType({"include_non_plannable_stations": False, "limit": 10}),
    ),
    ToolSpec(
        descriptor=ToolDescriptor(
            name=CURRENT_TIME_TOOL,
            description=(
                "Get the current server time (Europe/Amsterdam timezone) in RFC3339 format. "
                "This can be used as input for other tools that require date-time parameters."
            ),
            input_schema={"type": "object", "properties": {}},
        ),
        validator=a.is_valid_no_args,
        arguments=a.NoArgs,
    ),
    ToolSpec(
        descriptor=ToolDescriptor(
            name="get_arrivals",
            description=(
                "Get real-time arrival information for trains at a specific station, including "
                "platform numbers, delays, origin stations, and any relevant travel notes. "
                "Returns a list of upcoming arrivals with timing, origin, and status information."
            ),
            input_schema=_station_board_schema("arrivals"),
        ),
        validator=a.is_valid_arrivals_args,
        arguments=a.StationBoardArgs,
        operation="get_arrivals",
        defaults=_STATION_BOARD_DEFAULTS,
    ),
    ToolSpec(
        descriptor=ToolDescriptor(
            name="get_prices",
            description=(
                "Get ticket prices for a train journey between two stations, per travel class "
                "and ticket type, including discounts and the number of travellers."
            ),
            input_schema={
                "type": "object",
                "properties": {
                    "fromStation": {
                        "type": "string",
                        "description": "Name or code of departure station",
                    },
                    "toStation": {
                        "type": "string",
                        "description": "Name or code of destination station",
                    },
                    "travelClass": {
                        "type": "string",
                        "description": "Travel class of the ticket",
                        "enum": ["FIRST_CLASS", "SECOND_CLASS"],
                    },
                    "travelType": {
                        "type": "string",
                        "description": "Single or return ticket",
                        "enum": ["single", "return"],
                    },
                    "isJointJourney": {
                        "type": "boolean",
                        "description": "Whether to apply the joint journey discount",
                    },
                    "adults": {
                        "type": "integer",
                        "description": "Number of adults travelling",
                        "minimum": 0,
                    },
                    "children": {
                        "type": "integer",
                        "description": "Number of children travelling",
                        "minimum": 0,
                    },
                    "routeId": {
                        "type": "string",
                        "description": "Route id from a travel advice trip",
                    },
                    "plannedDepartureTime": {
                        "type": "string",
                        "description": f"{_RFC3339_HINT} Planned departure time",
                    },
                    "plannedArrivalTime": {
                        "type": "string",
                        "description": f"{_RFC3339_HINT} Planned arrival time",
                    },
                },
            },
        ),
        validator=a.is_valid_prices_args,
        arguments=a.PricesArgs,
        operation="get_prices",
    ),
)

def index_catalog(catalog: tuple[ToolSpec, ...]) -> Mapping[str, ToolSpec]:
    """Map tool names to specs, rejecting duplicate names."""
    index = {spec.name: spec for spec in catalog}
    if len(index) != len(catalog):
        msg = "duplicate tool names in catalog"
        raise ValueError(msg)
    return MappingProxyType(index)


TOOLS: Mapping[str, ToolSpec] = index_catalog(CATALOG)
