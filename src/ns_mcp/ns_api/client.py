"""NSApiClient — thin async wrapper over the NS API gateway.

One method per upstream operation. Each builds its query from a validated
argument record, issues a single GET and returns the decoded JSON body.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ns_mcp.config import DEFAULT_BASE_URL
from ns_mcp.ns_api.errors import NSApiError
from ns_mcp.tools.arguments import (
    DisruptionsArgs,
    OVFietsArgs,
    PricesArgs,
    StationBoardArgs,
    StationInfoArgs,
    TravelAdviceArgs,
)

logger = logging.getLogger(__name__)

SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"

DISRUPTIONS_PATH = "/disruptions/v3"
TRIPS_PATH = "/reisinformatie-api/api/v3/trips"
DEPARTURES_PATH = "/reisinformatie-api/api/v2/departures"
ARRIVALS_PATH = "/reisinformatie-api/api/v2/arrivals"
OVFIETS_PATH = "/places-api/v2/ovfiets"
STATIONS_PATH = "/reisinformatie-api/api/v2/stations"
PRICES_PATH = "/reisinformatie-api/api/v3/price"


class NSApiClient:
    """Async client for the NS API gateway.

    The underlying :class:`httpx.AsyncClient` is created once and reused for
    every call; it carries the base URL and the subscription-key header.

    Usage::

        async with NSApiClient(api_key) as client:
            data = await client.get_departures(StationBoardArgs.model_validate({"station": "ASD"}))
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers={SUBSCRIPTION_KEY_HEADER: api_key},
            transport=transport,
        )

    async def __aenter__(self) -> NSApiClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Release pooled connections."""
        await self._http.aclose()

    async def get_disruptions(self, args: DisruptionsArgs) -> Any:
        return await self._get(
            DISRUPTIONS_PATH,
            {"isActive": args.is_active, "type": args.type},
        )

    async def get_travel_advice(self, args: TravelAdviceArgs) -> Any:
        return await self._get(
            TRIPS_PATH,
            {
                "fromStation": args.from_station,
                "toStation": args.to_station,
                "dateTime": args.date_time,
                "searchForArrival": args.search_for_arrival,
            },
        )

    async def get_departures(self, args: StationBoardArgs) -> Any:
        return await self._get(DEPARTURES_PATH, _station_board_params(args))

    async def get_arrivals(self, args: StationBoardArgs) -> Any:
        return await self._get(ARRIVALS_PATH, _station_board_params(args))

    async def get_ovfiets(self, args: OVFietsArgs) -> Any:
        return await self._get(OVFIETS_PATH, {"station_code": args.station_code})

    async def get_station_info(self, args: StationInfoArgs) -> Any:
        return await self._get(
            STATIONS_PATH,
            {
                "q": args.query,
                "includeNonPlannableStations": args.include_non_plannable_stations,
                "limit": args.limit,
            },
        )

    async def get_prices(self, args: PricesArgs) -> Any:
        return await self._get(PRICES_PATH, args.model_dump(by_alias=True))

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        """GET *path* with every non-``None`` param and decode the JSON body."""
        query = {key: _query_value(value) for key, value in params.items() if value is not None}
        logger.debug("GET %s %s", path, query)
        try:
            response = await self._http.get(path, params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise NSApiError(
                _upstream_message(exc.response) or str(exc),
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise NSApiError(str(exc) or type(exc).__name__) from exc

        try:
            return response.json()
        except ValueError as exc:
            msg = f"invalid JSON in response from {path}"
            raise NSApiError(msg, status_code=response.status_code) from exc


def _station_board_params(args: StationBoardArgs) -> dict[str, Any]:
    return {
        "station": args.station,
        "uicCode": args.uic_code,
        "dateTime": args.date_time,
        "maxJourneys": args.max_journeys,
        "lang": args.lang,
    }


def _query_value(value: Any) -> Any:
    # The gateway expects lowercase JSON-style booleans.
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def _upstream_message(response: httpx.Response) -> str | None:
    """Extract the gateway's own ``message`` field from an error body."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
        errors = body.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            nested = errors[0].get("message")
            if isinstance(nested, str) and nested:
                return nested
    return None
