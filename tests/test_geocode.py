"""Tests for lunarcalendar.geocode (reverse-geocoding place names)."""

from __future__ import annotations

import logging

import httpx
import pytest

from lunarcalendar.errors import GeocodingError
from lunarcalendar.geocode import (
    UNKNOWN_LOCATION,
    get_location_name,
    pick_place_name,
    reverse_geocode,
)


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestPickPlaceName:
    def test_city_with_country(self) -> None:
        address = {"city": "New York", "state": "New York", "country": "United States"}
        assert pick_place_name(address) == "New York, United States"

    def test_priority_order(self) -> None:
        address = {"village": "Hallstatt", "county": "Gmunden", "country": "Austria"}
        assert pick_place_name(address) == "Hallstatt, Austria"

    def test_town_before_village(self) -> None:
        assert pick_place_name({"town": "A", "village": "B"}) == "A"

    def test_country_only_not_repeated(self) -> None:
        assert pick_place_name({"country": "Iceland"}) == "Iceland"

    def test_same_name_as_country(self) -> None:
        assert pick_place_name({"city": "Singapore", "country": "Singapore"}) == "Singapore"

    def test_empty_fields_skipped(self) -> None:
        assert pick_place_name({"city": "", "state": "Bavaria"}) == "Bavaria"

    def test_nothing_usable(self) -> None:
        assert pick_place_name({"road": "Main Street"}) is None


class TestReverseGeocode:
    def test_request_and_result(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200, json={"address": {"city": "Paris", "country": "France"}}
            )

        with _client(handler) as client:
            name = reverse_geocode(48.8566, 2.3522, client=client)

        assert name == "Paris, France"
        request = seen[0]
        assert request.url.path == "/reverse"
        assert request.url.params["lat"] == "48.8566"
        assert request.url.params["lon"] == "2.3522"
        assert request.url.params["zoom"] == "10"
        assert request.url.params["addressdetails"] == "1"
        assert request.headers["User-Agent"].startswith("LunarCalendar/")

    def test_configured_endpoint(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NOMINATIM_URL", "https://geo.example.org/")
        monkeypatch.setenv("NOMINATIM_USER_AGENT", "test-agent")
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"address": {"town": "Bree"}})

        with _client(handler) as client:
            assert reverse_geocode(1.0, 2.0, client=client) == "Bree"
        assert seen[0].url.host == "geo.example.org"
        assert seen[0].headers["User-Agent"] == "test-agent"

    def test_missing_address_is_unresolved(self) -> None:
        with _client(lambda r: httpx.Response(200, json={"error": "Unable to geocode"})) as c:
            assert reverse_geocode(0.0, 0.0, client=c) is None

    def test_http_error(self) -> None:
        with _client(lambda r: httpx.Response(503)) as c:
            with pytest.raises(GeocodingError):
                reverse_geocode(0.0, 0.0, client=c)

    def test_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with _client(handler) as c:
            with pytest.raises(GeocodingError):
                reverse_geocode(0.0, 0.0, client=c)

    def test_malformed_body(self) -> None:
        with _client(lambda r: httpx.Response(200, content=b"<html>")) as c:
            with pytest.raises(GeocodingError):
                reverse_geocode(0.0, 0.0, client=c)


class TestGetLocationName:
    def test_resolved(self) -> None:
        assert get_location_name(1.0, 2.0, lookup=lambda lat, lng: "Somewhere") == "Somewhere"

    def test_unresolved(self) -> None:
        assert get_location_name(1.0, 2.0, lookup=lambda lat, lng: None) == UNKNOWN_LOCATION

    def test_failure_is_absorbed_and_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        def failing(lat: float, lng: float) -> str | None:
            raise GeocodingError("timeout")

        with caplog.at_level(logging.WARNING, logger="lunarcalendar.geocode"):
            assert get_location_name(1.0, 2.0, lookup=failing) == "Unknown Location"
        assert "timeout" in caplog.text

    def test_default_lookup_network_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def boom(*args, **kwargs):
            raise httpx.ConnectTimeout("timed out")

        monkeypatch.setattr(httpx, "get", boom)
        assert get_location_name(40.0, -74.0) == UNKNOWN_LOCATION
