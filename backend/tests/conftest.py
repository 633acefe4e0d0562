"""Pytest configuration and fixtures."""
import sys
from pathlib import Path

import pytest

# Ensure backend root is on path when running pytest from repo root or backend
backend = Path(__file__).resolve().parent.parent
if str(backend) not in sys.path:
    sys.path.insert(0, str(backend))


class FakeNexTripClient:
    """In-memory stand-in for NexTripClient; records calls, raises queued errors."""

    def __init__(self, routes=None, directions=None, stops=None, departures=None, errors=None):
        self.routes = routes or []
        self.directions = directions or []
        self.stops = stops or []
        self.departures = departures
        self.errors = errors or {}
        self.calls: list[str] = []

    def _maybe_fail(self, name: str) -> None:
        self.calls.append(name)
        if name in self.errors:
            raise self.errors[name]

    def get_routes(self):
        self._maybe_fail("routes")
        return self.routes

    def get_directions(self, route_id):
        self._maybe_fail("directions")
        return self.directions

    def get_stops(self, route_id, direction_id):
        self._maybe_fail("stops")
        return self.stops

    def get_departures(self, route_id, direction_id, place_code):
        from nextbus.nextrip.models import RouteDepartures

        self._maybe_fail("departures")
        return self.departures or RouteDepartures()


@pytest.fixture
def fake_client_cls():
    return FakeNexTripClient
