"""Pipeline errors. Each carries the stage that failed and a structured kind;
text is produced only when rendering for output."""
from enum import Enum

from nextbus.nextrip.client import DecodeError, NexTripError


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    FETCH = "fetch"
    DECODE = "decode"


class NextBusError(Exception):
    stage = "resolving next departure"

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.NOT_FOUND):
        super().__init__(message)
        self.kind = kind

    @classmethod
    def from_nextrip(cls, exc: NexTripError) -> "NextBusError":
        kind = ErrorKind.DECODE if isinstance(exc, DecodeError) else ErrorKind.FETCH
        return cls(str(exc), kind=kind)


class RouteNotFound(NextBusError):
    stage = "retrieving routes"


class DirectionNotFound(NextBusError):
    stage = "getting bus direction ID"


class StopNotFound(NextBusError):
    stage = "getting bus stop place code"


class DepartureFetchError(NextBusError):
    stage = "getting time till next bus stop"


def render_error(exc: NextBusError) -> str:
    """Single-line message for the CLI, e.g. 'Error getting bus direction ID: ...'."""
    return f"Error {exc.stage}: {exc}"
