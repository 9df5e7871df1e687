"""Geocoding Client — Google payload parsing, failure mapping and retry policy.

Tests cover:
    - OK payload → Coordinates from results[0].geometry.location
    - ZERO_RESULTS / empty results / REQUEST_DENIED / 4xx / malformed → UnprocessableAddressError, no retry
    - 5xx, transport errors and UNKNOWN_ERROR retried; exhausted retries → UnprocessableAddressError
    - address and key sent as query parameters

Design Decisions:
    - httpx.MockTransport instead of patching: exercises the real client code path
    - base_delay_ms=0 keeps retry tests instant
"""

import httpx
import pytest

from yourplaces.core.domain_types import Coordinates
from yourplaces.core.errors import UnprocessableAddressError
from yourplaces.infrastructure.geocoding import GoogleGeocodingClient

OK_PAYLOAD = {
    "status": "OK",
    "results": [
        {"geometry": {"location": {"lat": 40.7484474, "lng": -73.9871516}}},
    ],
}


def _client(handler, max_retries: int = 2) -> GoogleGeocodingClient:
    return GoogleGeocodingClient(
        "test-key",
        url="https://geocode.test/json",
        max_retries=max_retries,
        base_delay_ms=0,
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


async def test_resolves_first_result_location():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=OK_PAYLOAD)

    geocoder = _client(handler)
    coords = await geocoder.resolve("20 W 34th St, New York, NY 10001")
    assert coords == Coordinates(lat=40.7484474, lng=-73.9871516)
    assert seen[0].url.params["address"] == "20 W 34th St, New York, NY 10001"
    assert seen[0].url.params["key"] == "test-key"
    await geocoder.aclose()


@pytest.mark.parametrize("payload", [
    {"status": "ZERO_RESULTS", "results": []},
    {"status": "OK", "results": []},
    {"status": "REQUEST_DENIED", "results": [], "error_message": "bad key"},
    {"status": "OK", "results": [{"geometry": {}}]},
    ["not", "an", "object"],
])
async def test_unusable_payloads_fail_without_retry(payload):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=payload)

    with pytest.raises(UnprocessableAddressError):
        await _client(handler).resolve("nowhere")
    assert len(calls) == 1


async def test_non_json_body_fails():
    def handler(request):
        return httpx.Response(200, content=b"<html>oops</html>")

    with pytest.raises(UnprocessableAddressError):
        await _client(handler).resolve("nowhere")


async def test_client_error_is_not_retried():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(403, json={})

    with pytest.raises(UnprocessableAddressError):
        await _client(handler).resolve("x")
    assert len(calls) == 1


async def test_server_error_retried_then_succeeds():
    responses = [httpx.Response(503), httpx.Response(200, json=OK_PAYLOAD)]

    def handler(request):
        return responses.pop(0)

    coords = await _client(handler).resolve("x")
    assert coords.lat == 40.7484474
    assert responses == []


async def test_unknown_error_status_retried():
    responses = [
        httpx.Response(200, json={"status": "UNKNOWN_ERROR", "results": []}),
        httpx.Response(200, json=OK_PAYLOAD),
    ]

    def handler(request):
        return responses.pop(0)

    coords = await _client(handler).resolve("x")
    assert coords.lng == -73.9871516


async def test_transport_errors_exhaust_retries():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UnprocessableAddressError) as exc:
        await _client(handler, max_retries=2).resolve("x")
    assert len(calls) == 3
    assert "try again later" in exc.value.message


async def test_zero_retries_means_single_attempt():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500)

    with pytest.raises(UnprocessableAddressError):
        await _client(handler, max_retries=0).resolve("x")
    assert len(calls) == 1
