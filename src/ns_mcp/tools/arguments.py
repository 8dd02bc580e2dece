"""Typed tool arguments and the per-tool validator predicates.

Raw ``tools/call`` arguments arrive as an untyped mapping. Each tool has a
frozen pydantic model describing its shape; the ``is_valid_*`` predicates
check a raw mapping against that shape without raising, and
:func:`coerce_arguments` turns an accepted mapping into the typed record
used everywhere past the dispatcher.

Models validate in strict mode and by camelCase alias only, so the wire
names (``stationCode``, ``maxJourneys``...) are the only accepted keys.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, TypeVar

from pydantic import BaseModel, BeforeValidator, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel


def _whole_number(value: Any) -> Any:
    if isinstance(value, bool):
        msg = "booleans are not numbers"
        raise ValueError(msg)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


JourneyCount = Annotated[int, Field(ge=1, le=100), BeforeValidator(_whole_number)]
ResultLimit = Annotated[int, Field(ge=1, le=50), BeforeValidator(_whole_number)]
PassengerCount = Annotated[int, Field(ge=0), BeforeValidator(_whole_number)]

DisruptionType = Literal["MAINTENANCE", "DISRUPTION"]
Language = Literal["nl", "en"]
TravelClass = Literal["FIRST_CLASS", "SECOND_CLASS"]
TravelType = Literal["single", "return"]


class ToolArguments(BaseModel):
    """Base for all validated argument records."""

    model_config = {
        "strict": True,
        "frozen": True,
        "alias_generator": to_camel,
        "extra": "ignore",
    }

    @model_validator(mode="before")
    @classmethod
    def _reject_nulls(cls, data: Any) -> Any:
        # A present key must carry a typed value; JSON null is not "absent".
        if isinstance(data, Mapping):
            for name, field in cls.model_fields.items():
                key = field.alias or name
                if key in data and data[key] is None:
                    msg = f"{key} must not be null"
                    raise ValueError(msg)
        return data


class DisruptionsArgs(ToolArguments):
    is_active: bool | None = None
    type: DisruptionType | None = None


class TravelAdviceArgs(ToolArguments):
    from_station: str
    to_station: str
    date_time: str | None = None
    search_for_arrival: bool | None = None


class StationBoardArgs(ToolArguments):
    """Shared shape of ``get_departures`` and ``get_arrivals``."""

    station: str | None = None
    uic_code: str | None = None
    date_time: str | None = None
    max_journeys: JourneyCount | None = None
    lang: Language | None = None

    @model_validator(mode="after")
    def _require_station(self) -> StationBoardArgs:
        if not self.station and not self.uic_code:
            msg = "either station or uicCode is required"
            raise ValueError(msg)
        return self


class OVFietsArgs(ToolArguments):
    station_code: str


class StationInfoArgs(ToolArguments):
    query: str
    include_non_plannable_stations: bool | None = None
    limit: ResultLimit | None = None


class PricesArgs(ToolArguments):
    from_station: str | None = None
    to_station: str | None = None
    travel_class: TravelClass | None = None
    travel_type: TravelType | None = None
    is_joint_journey: bool | None = None
    adults: PassengerCount | None = None
    children: PassengerCount | None = None
    route_id: str | None = None
    planned_departure_time: str | None = None
    planned_arrival_time: str | None = None


class NoArgs(ToolArguments):
    """Tools that take no arguments still require an object."""


ArgsT = TypeVar("ArgsT", bound=ToolArguments)


def _conforms(model: type[ToolArguments], args: object) -> bool:
    try:
        model.model_validate(args)
    except ValidationError:
        return False
    return True


def is_valid_disruptions_args(args: object) -> bool:
    return _conforms(DisruptionsArgs, args)


def is_valid_travel_advice_args(args: object) -> bool:
    return _conforms(TravelAdviceArgs, args)


def is_valid_departures_args(args: object) -> bool:
    return _conforms(StationBoardArgs, args)


def is_valid_arrivals_args(args: object) -> bool:
    return _conforms(StationBoardArgs, args)


def is_valid_ovfiets_args(args: object) -> bool:
    return _conforms(OVFietsArgs, args)


def is_valid_station_info_args(args: object) -> bool:
    return _conforms(StationInfoArgs, args)


def is_valid_prices_args(args: object) -> bool:
    return _conforms(PricesArgs, args)


def is_valid_no_args(args: object) -> bool:
    return _conforms(NoArgs, args)


def coerce_arguments(model: type[ArgsT], args: Mapping[str, Any]) -> ArgsT:
    """Build the typed record for arguments a validator has already accepted."""
    return model.model_validate(args)


def normalize_is_active(args: Mapping[str, Any]) -> dict[str, Any]:
    """Accept ``isActive`` as a boolean or as a ``"true"``/``"false"`` string.

    Only ``get_disruptions`` gets this treatment; other boolean fields must
    arrive as real booleans.
    """
    shaped = dict(args)
    value = shaped.get("isActive")
    if "isActive" in shaped and not isinstance(value, bool):
        shaped["isActive"] = str(value).lower() == "true"
    return shaped
