"""
Next-bus resolution: route label -> route id -> direction id -> place code -> minutes.
Each stage needs the previous stage's output, so the lookups run strictly in
order and the first failure ends the pipeline.
"""
import logging
from collections.abc import Sequence
from datetime import datetime, timezone

from nextbus.nextrip.client import NexTripClient, NexTripError
from nextbus.nextrip.models import Departure, PlaceCode, Route, RouteDirection
from nextbus.resolver.errors import (
    DepartureFetchError,
    DirectionNotFound,
    NextBusError,
    RouteNotFound,
    StopNotFound,
    render_error,
)
from nextbus.resolver.models import NextDeparture

logger = logging.getLogger(__name__)


# --- Matching over fetched data ---


def find_route(routes: Sequence[Route], label: str) -> Route:
    """First route whose label equals `label` exactly. Empty labels never match."""
    if label:
        for route in routes:
            if route.route_label == label:
                return route
    raise RouteNotFound(f"Route {label!r} not found")


def match_direction(directions: Sequence[RouteDirection], direction: str) -> int:
    # Only the service's name is lower-cased; "east" matches "Eastbound", "East" does not.
    for route_direction in directions:
        if direction in route_direction.direction_name.lower():
            return route_direction.direction_id
    raise DirectionNotFound(f"Route direction {direction!r} not found")


def match_stop(place_codes: Sequence[PlaceCode], stop: str) -> str:
    for place_code in place_codes:
        if stop in place_code.description:
            return place_code.place_code
    raise StopNotFound(f"Bus stop place code for {stop!r} not found")


def earliest_departure(departures: Sequence[Departure]) -> Departure | None:
    """Earliest scheduled departure, or None if nothing is scheduled.

    The service normally lists departures in time order; taking the minimum
    keeps the answer correct when it does not.
    """
    if not departures:
        return None
    return min(departures, key=lambda d: d.departure_time)


def minutes_until(departure_time: int, now: datetime) -> int:
    """Whole minutes from `now` to an epoch-seconds departure, truncated toward zero (179s -> 2)."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return int((departure_time - now.timestamp()) / 60)


# --- Stages ---


def resolve_route(client: NexTripClient, label: str) -> Route:
    try:
        routes = client.get_routes()
    except NexTripError as e:
        raise RouteNotFound.from_nextrip(e) from e
    return find_route(routes, label)


def resolve_direction(client: NexTripClient, route_id: str, direction: str) -> int:
    try:
        directions = client.get_directions(route_id)
    except NexTripError as e:
        raise DirectionNotFound.from_nextrip(e) from e
    return match_direction(directions, direction)


def resolve_stop(client: NexTripClient, route_id: str, direction_id: int, stop: str) -> str:
    try:
        place_codes = client.get_stops(route_id, direction_id)
    except NexTripError as e:
        raise StopNotFound.from_nextrip(e) from e
    return match_stop(place_codes, stop)


def _fetch_earliest_departure(
    client: NexTripClient, route_id: str, direction_id: int, place_code: str
) -> Departure | None:
    try:
        result = client.get_departures(route_id, direction_id, place_code)
    except NexTripError as e:
        raise DepartureFetchError.from_nextrip(e) from e
    return earliest_departure(result.departures)


def time_till_next_bus(
    client: NexTripClient,
    route_id: str,
    direction_id: int,
    place_code: str,
    now: datetime | None = None,
) -> str:
    """'N Minutes' until the earliest departure, or '' when none are scheduled."""
    departure = _fetch_earliest_departure(client, route_id, direction_id, place_code)
    if departure is None:
        return ""
    now = now or datetime.now(timezone.utc)
    return f"{minutes_until(departure.departure_time, now)} Minutes"


# --- Orchestration ---


def find_next_departure(
    client: NexTripClient,
    route: str,
    stop: str,
    direction: str,
    now: datetime | None = None,
) -> NextDeparture:
    """
    Run the four lookups in order and return the next departure.
    Raises the first stage's NextBusError; later stages are not attempted.
    """
    requested_route = resolve_route(client, route)
    direction_id = resolve_direction(client, requested_route.route_id, direction)
    place_code = resolve_stop(client, requested_route.route_id, direction_id, stop)
    departure = _fetch_earliest_departure(client, requested_route.route_id, direction_id, place_code)

    result = NextDeparture(
        route_id=requested_route.route_id,
        direction_id=direction_id,
        place_code=place_code,
    )
    if departure is not None:
        now = now or datetime.now(timezone.utc)
        result.minutes = minutes_until(departure.departure_time, now)
        result.departure_time = departure.departs_at
    logger.info(
        "telemetry next_departure_resolved route_id=%s direction_id=%s place_code=%s minutes=%s",
        result.route_id,
        result.direction_id,
        result.place_code,
        result.minutes,
        extra={"route_id": result.route_id, "place_code": result.place_code, "minutes": result.minutes},
    )
    return result


def calculate_time_till_next_bus(
    client: NexTripClient,
    route: str,
    stop: str,
    direction: str,
    now: datetime | None = None,
) -> str:
    """Output line for the CLI: 'N Minutes', '' or an 'Error ...' message."""
    try:
        return find_next_departure(client, route, stop, direction, now=now).text
    except NextBusError as e:
        logger.warning(
            "telemetry next_departure_failed stage=%s kind=%s error=%s",
            e.stage,
            e.kind.value,
            str(e),
            extra={"stage": e.stage, "kind": e.kind.value},
        )
        return render_error(e)
