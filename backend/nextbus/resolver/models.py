"""Pydantic models for the resolved next departure and its API responses."""
from datetime import datetime

from pydantic import BaseModel


class NextDeparture(BaseModel):
    route_id: str
    direction_id: int
    place_code: str
    minutes: int | None = None  # None when nothing is scheduled
    departure_time: datetime | None = None

    @property
    def text(self) -> str:
        if self.minutes is None:
            return ""
        return f"{self.minutes} Minutes"


class NextDepartureResponse(BaseModel):
    route_id: str
    direction_id: int
    place_code: str
    minutes: int | None
    departure_time: datetime | None
    text: str


class NextDepartureError(BaseModel):
    detail: str
    stage: str
    kind: str
