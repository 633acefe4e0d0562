"""In-memory counters for /metrics: HTTP status buckets and next-departure lookup outcomes."""
import time
from collections import Counter
from threading import Lock

_start_time = time.monotonic()
_status_counts: Counter[str] = Counter()
_lookup_counts: Counter[str] = Counter()
_lock = Lock()


def _status_bucket(status_code: int) -> str:
    if 200 <= status_code < 300:
        return "2xx"
    if 400 <= status_code < 500:
        return "4xx"
    if status_code >= 500:
        return "5xx"
    return "other"


def record_request(status_code: int) -> None:
    with _lock:
        _status_counts[_status_bucket(status_code)] += 1


def record_lookup(outcome: str) -> None:
    """outcome: 'departure', 'no_departures', or an error kind such as 'not_found'."""
    with _lock:
        _lookup_counts[outcome] += 1


def reset_metrics() -> None:
    with _lock:
        _status_counts.clear()
        _lookup_counts.clear()


def get_metrics() -> dict:
    with _lock:
        statuses = dict(_status_counts)
        lookups = dict(_lookup_counts)
    return {
        "requests_total": sum(statuses.values()),
        "requests_2xx": statuses.get("2xx", 0),
        "requests_4xx": statuses.get("4xx", 0),
        "requests_5xx": statuses.get("5xx", 0),
        "lookups_total": sum(lookups.values()),
        "lookups": lookups,
        "uptime_seconds": round(time.monotonic() - _start_time, 1),
    }
