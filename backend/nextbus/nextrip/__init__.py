from nextbus.nextrip.client import DecodeError, FetchError, NexTripClient, NexTripError
from nextbus.nextrip.models import Departure, PlaceCode, Route, RouteDepartures, RouteDirection

__all__ = [
    "DecodeError",
    "Departure",
    "FetchError",
    "NexTripClient",
    "NexTripError",
    "PlaceCode",
    "Route",
    "RouteDepartures",
    "RouteDirection",
]
