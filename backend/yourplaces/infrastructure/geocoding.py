"""Geocoding Client — resolves free-text addresses via the Google Geocoding API.

Invariants:
    - resolve() returns Coordinates or raises UnprocessableAddressError; nothing else escapes
    - ZERO_RESULTS, non-OK provider status, malformed payloads: immediate failure, no retry
    - Transport errors, timeouts, HTTP 5xx and UNKNOWN_ERROR: retried with exponential backoff
    - Called before any store write, so a failure here never leaves partial state

Design Decisions:
    - Wrapper over raw httpx client: retry policy isolated from the coordinator
      (ADR: single responsibility)
    - ±25% jitter on backoff: prevents synchronized retries against the provider
    - Injected httpx.AsyncClient: tests swap in httpx.MockTransport
"""

import asyncio
import logging
import random

import httpx

from yourplaces.core.domain_types import Coordinates
from yourplaces.core.errors import UnprocessableAddressError

logger = logging.getLogger(__name__)

ZERO_RESULTS = "ZERO_RESULTS"
# Google's own guidance: "the request may succeed if you try again"
_RETRYABLE_STATUSES = frozenset({"UNKNOWN_ERROR"})


class _TransientGeocodingError(Exception):
    """Internal signal: this attempt failed but may succeed on retry."""


class GoogleGeocodingClient:
    """Resilient GeocodingResolver backed by maps.googleapis.com."""

    def __init__(
        self,
        api_key: str,
        url: str = "https://maps.googleapis.com/maps/api/geocode/json",
        timeout_seconds: float = 10.0,
        max_retries: int = 2,
        base_delay_ms: int = 200,
        max_delay_ms: int = 5_000,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.url = url
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms
        self.client = client or httpx.AsyncClient(timeout=timeout_seconds)

    async def resolve(self, address: str) -> Coordinates:
        """Resolve address to coordinates, retrying transient failures."""
        for attempt in range(self.max_retries + 1):
            try:
                return await self._lookup(address)
            except _TransientGeocodingError as e:
                await self._handle_transient_error(e, attempt)
        # unreachable: the last attempt raises from _handle_transient_error
        raise UnprocessableAddressError()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _lookup(self, address: str) -> Coordinates:
        try:
            response = await self.client.get(
                self.url, params={"address": address, "key": self.api_key},
            )
        except httpx.TimeoutException as e:
            raise _TransientGeocodingError(f"timeout: {e}") from e
        except httpx.TransportError as e:
            raise _TransientGeocodingError(f"transport error: {e}") from e

        if response.status_code >= 500:
            raise _TransientGeocodingError(f"HTTP {response.status_code}")
        if response.status_code != 200:
            logger.error(f"Geocoding request rejected: HTTP {response.status_code}")
            raise UnprocessableAddressError()
        return self._parse(response)

    def _parse(self, response: httpx.Response) -> Coordinates:
        try:
            data = response.json()
        except ValueError:
            logger.error("Geocoding response is not JSON")
            raise UnprocessableAddressError()

        if not isinstance(data, dict):
            logger.error("Geocoding response is not a JSON object")
            raise UnprocessableAddressError()

        status = data.get("status")
        if status in _RETRYABLE_STATUSES:
            raise _TransientGeocodingError(f"provider status {status}")
        if status == ZERO_RESULTS:
            raise UnprocessableAddressError()
        if status != "OK":
            # REQUEST_DENIED / OVER_QUERY_LIMIT / INVALID_REQUEST: config or quota
            logger.error(f"Geocoding provider returned status {status}")
            raise UnprocessableAddressError()
        if not data.get("results"):
            raise UnprocessableAddressError()

        try:
            location = data["results"][0]["geometry"]["location"]
            return Coordinates(lat=float(location["lat"]), lng=float(location["lng"]))
        except (KeyError, IndexError, TypeError, ValueError):
            logger.error("Geocoding response missing geometry.location")
            raise UnprocessableAddressError()

    async def _handle_transient_error(
        self, e: Exception, attempt: int,
    ) -> None:
        """Back off before the next attempt, or give up after the last one."""
        if attempt >= self.max_retries:
            logger.error(
                f"Geocoding failed after {attempt + 1} attempts: {e}",
                extra={"attempt": attempt},
            )
            raise UnprocessableAddressError(
                "Could not resolve the address right now, please try again later.",
            )
        delay_ms = min(self.base_delay_ms * (2 ** attempt), self.max_delay_ms)
        delay_ms *= random.uniform(0.75, 1.25)
        logger.warning(
            f"Geocoding transient error, retrying in {delay_ms:.0f}ms: {e}",
            extra={"attempt": attempt},
        )
        await asyncio.sleep(delay_ms / 1000)


# Singleton (initialized on startup)
geocoder: GoogleGeocodingClient | None = None


def init_geocoder(api_key: str, **kwargs) -> GoogleGeocodingClient:
    global geocoder
    geocoder = GoogleGeocodingClient(api_key, **kwargs)
    return geocoder


async def close_geocoder() -> None:
    global geocoder
    if geocoder is not None:
        await geocoder.aclose()
        geocoder = None
