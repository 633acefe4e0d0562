import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from nextbus.middleware import RequestLoggingMiddleware
from nextbus.monitoring import get_metrics, record_lookup
from nextbus.nextrip.client import NexTripClient
from nextbus.resolver.errors import ErrorKind, NextBusError
from nextbus.resolver.models import NextDepartureError, NextDepartureResponse
from nextbus.resolver.service import find_next_departure
from nextbus.settings import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=["100/minute"])

QUERY_PARAM_MAX_LEN = 100


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.nextrip_client = NexTripClient(
        base_url=settings.nextrip_base_url,
        timeout_seconds=settings.nextrip_timeout_seconds,
    )
    yield
    app.state.nextrip_client = None


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
def unhandled_exception_handler(request: Request, exc: Exception):
    """Consistent JSON 500 for anything the routes did not handle."""
    logger.exception("telemetry unhandled_exception path=%s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred. Please try again later."},
    )


app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/favicon.ico", include_in_schema=False)
@limiter.exempt
def favicon(request: Request):
    return Response(status_code=204)


@app.get("/health")
@limiter.exempt
def health(request: Request):
    logger.info("telemetry route=health")
    return {"status": "ok"}


@app.get("/metrics")
@limiter.exempt
def metrics(request: Request):
    return get_metrics()


def _validate_query_param(name: str, value: str) -> None:
    if not value or len(value) > QUERY_PARAM_MAX_LEN:
        raise HTTPException(
            status_code=400,
            detail=f"{name} must be between 1 and {QUERY_PARAM_MAX_LEN} characters",
        )


def _status_for(exc: NextBusError) -> int:
    return 404 if exc.kind is ErrorKind.NOT_FOUND else 502


@app.get(
    "/next-departure",
    response_model=NextDepartureResponse,
    responses={404: {"model": NextDepartureError}, 502: {"model": NextDepartureError}},
)
@limiter.limit(settings.rate_limit)
def next_departure(request: Request, route: str, stop: str, direction: str):
    """Minutes until the next bus for a route label, stop-name fragment and direction fragment."""
    for name, value in (("route", route), ("stop", stop), ("direction", direction)):
        _validate_query_param(name, value)
    logger.info(
        "telemetry route=next_departure route_label=%s stop=%s direction=%s",
        route,
        stop,
        direction,
    )
    client: NexTripClient | None = getattr(app.state, "nextrip_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="NexTrip client is not initialized.")
    try:
        result = find_next_departure(client, route, stop, direction)
    except NextBusError as e:
        record_lookup(e.kind.value)
        logger.warning(
            "telemetry next_departure_route_error stage=%s kind=%s error=%s",
            e.stage,
            e.kind.value,
            str(e),
        )
        body = NextDepartureError(detail=str(e), stage=e.stage, kind=e.kind.value)
        return JSONResponse(status_code=_status_for(e), content=body.model_dump())
    record_lookup("departure" if result.minutes is not None else "no_departures")
    return NextDepartureResponse(**result.model_dump(), text=result.text)
