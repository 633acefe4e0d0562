"""Unit tests for the NexTrip client: URLs, decoding and error mapping."""
from unittest.mock import patch

import httpx
import pytest

from nextbus.nextrip.client import DecodeError, FetchError, NexTripClient
from nextbus.nextrip.models import Departure, RouteDepartures


def _mock_get(mock_client_cls):
    return mock_client_cls.return_value.__enter__.return_value.get


def test_get_routes_decodes_and_calls_routes_endpoint():
    """get_routes hits /routes and decodes each route."""
    with patch("nextbus.nextrip.client.httpx.Client") as mock_client_cls:
        mock_resp = _mock_get(mock_client_cls).return_value
        mock_resp.json.return_value = [
            {"route_id": "901", "agency_id": 0, "route_label": "METRO Blue Line"},
            {"route_id": "5", "agency_id": 0, "route_label": "5", "extra": "ignored"},
        ]
        mock_resp.raise_for_status = lambda: None

        routes = NexTripClient(base_url="https://example.test/nextripv2/").get_routes()

        _mock_get(mock_client_cls).assert_called_once_with("https://example.test/nextripv2/routes")
        assert [r.route_id for r in routes] == ["901", "5"]
        assert routes[0].route_label == "METRO Blue Line"


def test_client_uses_configured_timeout():
    """httpx.Client is built with the configured timeout."""
    with patch("nextbus.nextrip.client.httpx.Client") as mock_client_cls:
        mock_resp = _mock_get(mock_client_cls).return_value
        mock_resp.json.return_value = []
        mock_resp.raise_for_status = lambda: None

        NexTripClient(timeout_seconds=5.0).get_routes()
        mock_client_cls.assert_called_once_with(timeout=5.0)


def test_endpoint_paths():
    """Directions, stops and departures hit their own paths."""
    with patch("nextbus.nextrip.client.httpx.Client") as mock_client_cls:
        get = _mock_get(mock_client_cls)
        get.return_value.raise_for_status = lambda: None
        client = NexTripClient(base_url="https://svc.test")

        get.return_value.json.return_value = [{"direction_id": 0, "direction_name": "Northbound"}]
        directions = client.get_directions("901")
        assert get.call_args.args[0] == "https://svc.test/directions/901"
        assert directions[0].direction_name == "Northbound"

        get.return_value.json.return_value = [{"place_code": "TF2", "description": "Target Field Station"}]
        stops = client.get_stops("901", 1)
        assert get.call_args.args[0] == "https://svc.test/stops/901/1"
        assert stops[0].place_code == "TF2"

        get.return_value.json.return_value = {"departures": [{"departure_time": 1700000000}]}
        result = client.get_departures("901", 1, "TF2")
        assert get.call_args.args[0] == "https://svc.test/901/1/TF2"
        assert result.departures[0].departure_time == 1700000000


def test_missing_fields_decode_to_zero_values():
    """Missing fields decode to empty strings and zeros."""
    with patch("nextbus.nextrip.client.httpx.Client") as mock_client_cls:
        mock_resp = _mock_get(mock_client_cls).return_value
        mock_resp.json.return_value = [{}]
        mock_resp.raise_for_status = lambda: None

        routes = NexTripClient().get_routes()
        assert routes[0].route_id == ""
        assert routes[0].agency_id == 0
        assert routes[0].route_label == ""


def test_departures_without_list_is_empty():
    """A departures payload without a list decodes to no departures."""
    with patch("nextbus.nextrip.client.httpx.Client") as mock_client_cls:
        mock_resp = _mock_get(mock_client_cls).return_value
        mock_resp.json.return_value = {"stops": []}
        mock_resp.raise_for_status = lambda: None

        assert NexTripClient().get_departures("5", 0, "7SOL").departures == []


def test_transport_error_raises_fetch_error():
    """Connection errors become FetchError."""
    with patch("nextbus.nextrip.client.httpx.Client") as mock_client_cls:
        _mock_get(mock_client_cls).side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(FetchError, match="unable to reach"):
            NexTripClient().get_routes()


def test_timeout_raises_fetch_error():
    """Timeouts become FetchError."""
    with patch("nextbus.nextrip.client.httpx.Client") as mock_client_cls:
        _mock_get(mock_client_cls).side_effect = httpx.ReadTimeout("timed out")

        with pytest.raises(FetchError, match="timed out"):
            NexTripClient(timeout_seconds=2.0).get_directions("901")


def test_http_status_raises_fetch_error():
    """Non-2xx responses become FetchError."""
    request = httpx.Request("GET", "https://svc.test/directions/999")
    response = httpx.Response(404, request=request)
    with patch("nextbus.nextrip.client.httpx.Client") as mock_client_cls:
        _mock_get(mock_client_cls).return_value = response

        with pytest.raises(FetchError, match="HTTP 404"):
            NexTripClient(base_url="https://svc.test").get_directions("999")


def test_invalid_json_raises_decode_error():
    """Invalid JSON becomes DecodeError."""
    with patch("nextbus.nextrip.client.httpx.Client") as mock_client_cls:
        mock_resp = _mock_get(mock_client_cls).return_value
        mock_resp.json.side_effect = ValueError("Expecting value")
        mock_resp.raise_for_status = lambda: None

        with pytest.raises(DecodeError, match="valid JSON"):
            NexTripClient().get_routes()


def test_wrong_shape_raises_decode_error():
    """A payload of the wrong shape becomes DecodeError."""
    with patch("nextbus.nextrip.client.httpx.Client") as mock_client_cls:
        mock_resp = _mock_get(mock_client_cls).return_value
        mock_resp.json.return_value = {"message": "not a list"}
        mock_resp.raise_for_status = lambda: None

        with pytest.raises(DecodeError, match="unexpected payload"):
            NexTripClient().get_stops("901", 0)


def test_departure_departs_at_is_utc():
    """departs_at is an aware UTC datetime."""
    dep = Departure(departure_time=0)
    assert dep.departs_at.year == 1970
    assert dep.departs_at.utcoffset().total_seconds() == 0
    assert RouteDepartures().departures == []
