"""Best-effort place names for coordinates via Nominatim reverse geocoding.

Decoration only: nothing in the grid computation depends on these results.
"""

import logging
import os
from collections.abc import Callable

import httpx

from lunarcalendar.errors import GeocodingError

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "Unknown Location"

_PLACE_FIELDS = (
    "city",
    "town",
    "village",
    "municipality",
    "county",
    "state",
    "country",
)

PlaceLookup = Callable[[float, float], str | None]


def _nominatim_url() -> str:
    return os.environ.get("NOMINATIM_URL", "https://nominatim.openstreetmap.org").rstrip(
        "/"
    )


def _user_agent() -> str:
    return os.environ.get(
        "NOMINATIM_USER_AGENT",
        "LunarCalendar/1.0 (https://github.com/lunar-calendar/lunar-calendar)",
    )


def _timeout() -> float:
    return float(os.environ.get("NOMINATIM_TIMEOUT", "10"))


def pick_place_name(address: dict) -> str | None:
    """Choose a display name from a Nominatim ``address`` block.

    The first present field among city, town, village, municipality, county,
    state, country wins; ", <country>" is appended when it differs from the
    chosen name.
    """
    name = next((address[f] for f in _PLACE_FIELDS if address.get(f)), None)
    if not name:
        return None
    country = address.get("country")
    if country and name != country:
        name = f"{name}, {country}"
    return name


def reverse_geocode(
    lat: float, lng: float, client: httpx.Client | None = None
) -> str | None:
    """Single Nominatim reverse call. Returns None when the response has no address.

    Raises:
        GeocodingError: On network failure, non-2xx status or an undecodable body.
    """
    params = {
        "format": "json",
        "lat": lat,
        "lon": lng,
        "zoom": 10,
        "addressdetails": 1,
    }
    headers = {"User-Agent": _user_agent()}
    url = f"{_nominatim_url()}/reverse"
    try:
        if client is None:
            resp = httpx.get(url, params=params, headers=headers, timeout=_timeout())
        else:
            resp = client.get(url, params=params, headers=headers)
        resp.raise_for_status()
        data = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        raise GeocodingError(f"Reverse geocoding failed for ({lat}, {lng}): {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("address"), dict):
        return None
    return pick_place_name(data["address"])


def get_location_name(
    lat: float, lng: float, lookup: PlaceLookup = reverse_geocode
) -> str:
    """Place name for coordinates, or "Unknown Location". Never raises on lookup failure."""
    try:
        name = lookup(lat, lng)
    except GeocodingError as e:
        logger.warning("Reverse geocoding failed: %s", e)
        return UNKNOWN_LOCATION
    return name or UNKNOWN_LOCATION
