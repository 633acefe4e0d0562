from nextbus.resolver.errors import (
    DepartureFetchError,
    DirectionNotFound,
    ErrorKind,
    NextBusError,
    RouteNotFound,
    StopNotFound,
    render_error,
)
from nextbus.resolver.service import calculate_time_till_next_bus, find_next_departure

__all__ = [
    "DepartureFetchError",
    "DirectionNotFound",
    "ErrorKind",
    "NextBusError",
    "RouteNotFound",
    "StopNotFound",
    "calculate_time_till_next_bus",
    "find_next_departure",
    "render_error",
]
