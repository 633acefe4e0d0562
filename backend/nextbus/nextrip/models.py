"""Pydantic models for NexTrip v2 responses.

Missing scalars fall back to zero values and unknown fields are ignored, so a
sparse payload still decodes. Models are frozen: they are read-only snapshots.
"""
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


class _NexTripModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class Route(_NexTripModel):
    route_id: str = ""
    agency_id: int = 0
    route_label: str = ""


class RouteDirection(_NexTripModel):
    direction_id: int = 0
    direction_name: str = ""


class PlaceCode(_NexTripModel):
    place_code: str = ""
    description: str = ""


class Departure(_NexTripModel):
    departure_time: int = 0  # epoch seconds

    @property
    def departs_at(self) -> datetime | None:
        """Aware UTC datetime, or None when the timestamp is outside datetime's range."""
        try:
            return datetime.fromtimestamp(self.departure_time, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None


class RouteDepartures(_NexTripModel):
    departures: list[Departure] = []
