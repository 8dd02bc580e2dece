"""Tests for NSApiClient against a mocked gateway."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from ns_mcp.ns_api.client import (
    ARRIVALS_PATH,
    DEPARTURES_PATH,
    DISRUPTIONS_PATH,
    OVFIETS_PATH,
    PRICES_PATH,
    STATIONS_PATH,
    SUBSCRIPTION_KEY_HEADER,
    TRIPS_PATH,
    NSApiClient,
)
from ns_mcp.ns_api.errors import NSApiError
from ns_mcp.tools.arguments import (
    DisruptionsArgs,
    OVFietsArgs,
    PricesArgs,
    StationBoardArgs,
    StationInfoArgs,
    TravelAdviceArgs,
)


class _Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, status: int = 200, body: Any = None, content: bytes | None = None) -> None:
        self.status = status
        self.body = {"ok": True} if body is None else body
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status, content=self.content)
        return httpx.Response(self.status, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def params(self) -> dict[str, str]:
        return dict(self.last.url.params)


def _client(recorder: _Recorder) -> NSApiClient:
    return NSApiClient(
        "secret-key",
        base_url="https://gateway.test",
        transport=httpx.MockTransport(recorder),
    )


class TestRequests:
    async def test_subscription_key_header(self) -> None:
        recorder = _Recorder()
        async with _client(recorder) as client:
            await client.get_disruptions(DisruptionsArgs.model_validate({}))
        assert recorder.last.headers[SUBSCRIPTION_KEY_HEADER] == "secret-key"
        assert recorder.last.method == "GET"

    async def test_disruptions_query(self) -> None:
        recorder = _Recorder(body=[{"id": "d1"}])
        async with _client(recorder) as client:
            data = await client.get_disruptions(
                DisruptionsArgs.model_validate({"isActive": True, "type": "MAINTENANCE"})
            )
        assert data == [{"id": "d1"}]
        assert recorder.last.url.path == DISRUPTIONS_PATH
        assert recorder.params == {"isActive": "true", "type": "MAINTENANCE"}

    async def test_absent_fields_are_omitted(self) -> None:
        recorder = _Recorder()
        async with _client(recorder) as client:
            await client.get_disruptions(DisruptionsArgs.model_validate({}))
        assert recorder.params == {}
        assert "isActive" not in str(recorder.last.url)

    async def test_travel_advice_query(self) -> None:
        recorder = _Recorder()
        args = TravelAdviceArgs.model_validate(
            {"fromStation": "ASD", "toStation": "UT", "searchForArrival": False}
        )
        async with _client(recorder) as client:
            await client.get_travel_advice(args)
        assert recorder.last.url.path == TRIPS_PATH
        assert recorder.params == {
            "fromStation": "ASD",
            "toStation": "UT",
            "searchForArrival": "false",
        }

    async def test_departures_and_arrivals_paths(self) -> None:
        recorder = _Recorder()
        args = StationBoardArgs.model_validate({"uicCode": "8400058", "maxJourneys": 5, "lang": "en"})
        async with _client(recorder) as client:
            await client.get_departures(args)
            assert recorder.last.url.path == DEPARTURES_PATH
            await client.get_arrivals(args)
            assert recorder.last.url.path == ARRIVALS_PATH
        assert recorder.params == {"uicCode": "8400058", "maxJourneys": "5", "lang": "en"}

    async def test_ovfiets_uses_snake_case_param(self) -> None:
        recorder = _Recorder()
        async with _client(recorder) as client:
            await client.get_ovfiets(OVFietsArgs.model_validate({"stationCode": "ASD"}))
        assert recorder.last.url.path == OVFIETS_PATH
        assert recorder.params == {"station_code": "ASD"}

    async def test_station_info_sends_query_as_q(self) -> None:
        recorder = _Recorder()
        args = StationInfoArgs.model_validate({"query": "Utrecht", "limit": 3})
        async with _client(recorder) as client:
            await client.get_station_info(args)
        assert recorder.last.url.path == STATIONS_PATH
        assert recorder.params == {"q": "Utrecht", "limit": "3"}

    async def test_prices_query(self) -> None:
        recorder = _Recorder()
        args = PricesArgs.model_validate(
            {"fromStation": "ASD", "toStation": "UT", "travelClass": "SECOND_CLASS", "adults": 2}
        )
        async with _client(recorder) as client:
            await client.get_prices(args)
        assert recorder.last.url.path == PRICES_PATH
        assert recorder.params == {
            "fromStation": "ASD",
            "toStation": "UT",
            "travelClass": "SECOND_CLASS",
            "adults": "2",
        }


class TestErrors:
    async def test_upstream_message_is_used(self) -> None:
        recorder = _Recorder(status=500, body={"message": "server error"})
        async with _client(recorder) as client:
            with pytest.raises(NSApiError, match="server error") as info:
                await client.get_ovfiets(OVFietsArgs.model_validate({"stationCode": "ASD"}))
        assert info.value.status_code == 500

    async def test_nested_errors_message(self) -> None:
        recorder = _Recorder(status=400, body={"errors": [{"message": "Invalid station"}]})
        async with _client(recorder) as client:
            with pytest.raises(NSApiError, match="Invalid station"):
                await client.get_ovfiets(OVFietsArgs.model_validate({"stationCode": "XX"}))

    async def test_non_json_error_body_falls_back(self) -> None:
        recorder = _Recorder(status=401, content=b"<html>denied</html>")
        async with _client(recorder) as client:
            with pytest.raises(NSApiError, match="401") as info:
                await client.get_ovfiets(OVFietsArgs.model_validate({"stationCode": "ASD"}))
        assert info.value.status_code == 401

    async def test_transport_failure(self) -> None:
        def _fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("name resolution failed", request=request)

        client = NSApiClient("k", transport=httpx.MockTransport(_fail))
        async with client:
            with pytest.raises(NSApiError, match="name resolution failed") as info:
                await client.get_disruptions(DisruptionsArgs.model_validate({}))
        assert info.value.status_code is None

    async def test_invalid_json_success_body(self) -> None:
        recorder = _Recorder(content=b"not json")
        async with _client(recorder) as client:
            with pytest.raises(NSApiError, match="invalid JSON"):
                await client.get_disruptions(DisruptionsArgs.model_validate({}))
