"""
Metro Transit NexTrip v2 client.
One GET per endpoint, bounded timeout, no retries and no caching: a failed call
is reported once and the caller decides what to do with it.
"""
import logging
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from nextbus.nextrip.models import PlaceCode, Route, RouteDepartures, RouteDirection

logger = logging.getLogger(__name__)

NEXTRIP_BASE = "https://svc.metrotransit.org/nextripv2"
NEXTRIP_REQUEST_TIMEOUT_SECONDS = 10.0

T = TypeVar("T")

_ROUTES = TypeAdapter(list[Route])
_DIRECTIONS = TypeAdapter(list[RouteDirection])
_PLACE_CODES = TypeAdapter(list[PlaceCode])
_DEPARTURES = TypeAdapter(RouteDepartures)


class NexTripError(Exception):
    """Base error for talking to the NexTrip service."""


class FetchError(NexTripError):
    """Transport failure or non-2xx response."""


class DecodeError(NexTripError):
    """Response body was not valid JSON or did not match the expected shape."""


class NexTripClient:
    """Client for the NexTrip v2 JSON endpoints used to find the next departure."""

    def __init__(
        self,
        base_url: str = NEXTRIP_BASE,
        timeout_seconds: float = NEXTRIP_REQUEST_TIMEOUT_SECONDS,
    ):
        self._base = base_url.rstrip("/")
        self._timeout = timeout_seconds

    def _get_json(self, path: str) -> Any:
        url = f"{self._base}{path}"
        try:
            with httpx.Client(timeout=self._timeout) as client:
                resp = client.get(url)
                resp.raise_for_status()
                data = resp.json()
        except httpx.TimeoutException as e:
            logger.warning("telemetry nextrip_timeout path=%s", path, extra={"path": path})
            raise FetchError(f"request to {path} timed out after {self._timeout}s") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(
                "telemetry nextrip_http_error path=%s status=%s",
                path,
                status,
                extra={"path": path, "status": status},
            )
            raise FetchError(f"{path} returned HTTP {status}") from e
        except httpx.HTTPError as e:
            logger.warning(
                "telemetry nextrip_unreachable path=%s error=%s",
                path,
                str(e),
                extra={"path": path, "error": str(e)},
            )
            raise FetchError(f"unable to reach NexTrip for {path}: {e}") from e
        except ValueError as e:
            logger.warning("telemetry nextrip_bad_json path=%s", path, extra={"path": path})
            raise DecodeError(f"{path} did not return valid JSON") from e
        return data

    def _fetch(self, path: str, adapter: TypeAdapter[T]) -> T:
        data = self._get_json(path)
        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            logger.warning(
                "telemetry nextrip_unexpected_payload path=%s errors=%s",
                path,
                e.error_count(),
                extra={"path": path},
            )
            raise DecodeError(f"unexpected payload from {path}: {e.error_count()} validation error(s)") from e

    def get_routes(self) -> list[Route]:
        routes = self._fetch("/routes", _ROUTES)
        logger.info("telemetry nextrip_routes_fetched count=%s", len(routes), extra={"count": len(routes)})
        return routes

    def get_directions(self, route_id: str) -> list[RouteDirection]:
        directions = self._fetch(f"/directions/{route_id}", _DIRECTIONS)
        logger.info(
            "telemetry nextrip_directions_fetched route_id=%s count=%s",
            route_id,
            len(directions),
            extra={"route_id": route_id, "count": len(directions)},
        )
        return directions

    def get_stops(self, route_id: str, direction_id: int) -> list[PlaceCode]:
        stops = self._fetch(f"/stops/{route_id}/{direction_id}", _PLACE_CODES)
        logger.info(
            "telemetry nextrip_stops_fetched route_id=%s direction_id=%s count=%s",
            route_id,
            direction_id,
            len(stops),
            extra={"route_id": route_id, "direction_id": direction_id, "count": len(stops)},
        )
        return stops

    def get_departures(self, route_id: str, direction_id: int, place_code: str) -> RouteDepartures:
        """Departures for one stop; the service lists them earliest first."""
        result = self._fetch(f"/{route_id}/{direction_id}/{place_code}", _DEPARTURES)
        logger.info(
            "telemetry nextrip_departures_fetched route_id=%s place_code=%s count=%s",
            route_id,
            place_code,
            len(result.departures),
            extra={"route_id": route_id, "place_code": place_code, "count": len(result.departures)},
        )
        return result
