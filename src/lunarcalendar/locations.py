"""Preset observer locations and the calendar title built from a selection."""

from lunarcalendar.errors import InvalidInputError
from lunarcalendar.geocode import PlaceLookup, get_location_name
from lunarcalendar.models import ObserverLocation, PresetLocation

CUSTOM = "custom"

PRESET_LOCATIONS: tuple[PresetLocation, ...] = (
    PresetLocation(CUSTOM, "Custom"),
    # Major world cities
    PresetLocation("40.7128,-74.0060", "New York City, USA"),
    PresetLocation("34.0522,-118.2437", "Los Angeles, USA"),
    PresetLocation("41.8781,-87.6298", "Chicago, USA"),
    PresetLocation("29.7604,-95.3698", "Houston, USA"),
    PresetLocation("33.4484,-112.0740", "Phoenix, USA"),
    PresetLocation("39.9526,-75.1652", "Philadelphia, USA"),
    PresetLocation("32.7767,-96.7970", "Dallas, USA"),
    PresetLocation("37.7749,-122.4194", "San Francisco, USA"),
    PresetLocation("47.6062,-122.3321", "Seattle, USA"),
    PresetLocation("25.7617,-80.1918", "Miami, USA"),
    PresetLocation("42.3601,-71.0589", "Boston, USA"),
    PresetLocation("43.6532,-79.3832", "Toronto, Canada"),
    PresetLocation("45.5017,-73.5673", "Montreal, Canada"),
    PresetLocation("49.2827,-123.1207", "Vancouver, Canada"),
    PresetLocation("51.5074,-0.1278", "London, UK"),
    PresetLocation("55.7558,37.6176", "Moscow, Russia"),
    PresetLocation("48.8566,2.3522", "Paris, France"),
    PresetLocation("52.5200,13.4050", "Berlin, Germany"),
    PresetLocation("41.9028,12.4964", "Rome, Italy"),
    PresetLocation("40.4168,-3.7038", "Madrid, Spain"),
    PresetLocation("59.3293,18.0686", "Stockholm, Sweden"),
    PresetLocation("60.1699,24.9384", "Helsinki, Finland"),
    PresetLocation("55.6761,12.5683", "Copenhagen, Denmark"),
    PresetLocation("47.3769,8.5417", "Zurich, Switzerland"),
    PresetLocation("50.0755,14.4378", "Prague, Czech Republic"),
    PresetLocation("35.6762,139.6503", "Tokyo, Japan"),
    PresetLocation("37.5665,126.9780", "Seoul, South Korea"),
    PresetLocation("39.9042,116.4074", "Beijing, China"),
    PresetLocation("31.2304,121.4737", "Shanghai, China"),
    PresetLocation("22.3193,114.1694", "Hong Kong"),
    PresetLocation("1.3521,103.8198", "Singapore"),
    PresetLocation("28.6139,77.2090", "New Delhi, India"),
    PresetLocation("19.0760,72.8777", "Mumbai, India"),
    PresetLocation("13.0827,80.2707", "Chennai, India"),
    PresetLocation("-33.8688,151.2093", "Sydney, Australia"),
    PresetLocation("-37.8136,144.9631", "Melbourne, Australia"),
    PresetLocation("-27.4698,153.0251", "Brisbane, Australia"),
    PresetLocation("-23.5505,-46.6333", "São Paulo, Brazil"),
    PresetLocation("-22.9068,-43.1729", "Rio de Janeiro, Brazil"),
    PresetLocation("-34.6037,-58.3816", "Buenos Aires, Argentina"),
    PresetLocation("19.4326,-99.1332", "Mexico City, Mexico"),
    PresetLocation("-33.4489,-70.6693", "Santiago, Chile"),
    PresetLocation("30.0444,31.2357", "Cairo, Egypt"),
    PresetLocation("-26.2041,28.0473", "Johannesburg, South Africa"),
    PresetLocation("-33.9249,18.4241", "Cape Town, South Africa"),
    PresetLocation("6.5244,3.3792", "Lagos, Nigeria"),
    PresetLocation("41.0082,28.9784", "Istanbul, Turkey"),
    PresetLocation("25.2048,55.2708", "Dubai, UAE"),
)

DEFAULT_PRESET = "40.7128,-74.0060"


def parse_coordinates(value: str) -> ObserverLocation:
    """Parse a "lat,lng" preset value into a validated ObserverLocation.

    Raises:
        InvalidInputError: If the string is malformed or out of range.
    """
    parts = value.split(",")
    if len(parts) != 2:
        raise InvalidInputError(f"Expected 'lat,lng', got: {value!r}")
    try:
        lat, lng = float(parts[0]), float(parts[1])
    except ValueError as e:
        raise InvalidInputError(f"Expected 'lat,lng', got: {value!r}") from e
    return ObserverLocation(latitude=lat, longitude=lng)


def preset_label(value: str) -> str | None:
    return next((p.label for p in PRESET_LOCATIONS if p.value == value), None)


def match_preset(latitude: float, longitude: float) -> str:
    """Preset value whose coordinates equal (latitude, longitude), else CUSTOM."""
    for preset in PRESET_LOCATIONS:
        if preset.value == CUSTOM:
            continue
        loc = parse_coordinates(preset.value)
        if loc.latitude == latitude and loc.longitude == longitude:
            return preset.value
    return CUSTOM


def search_presets(query: str) -> list[PresetLocation]:
    """Presets whose label contains ``query`` (case-insensitive)."""
    needle = query.lower()
    return [p for p in PRESET_LOCATIONS if needle in p.label.lower()]


def _coords(location: ObserverLocation) -> str:
    return f"{location.latitude:.4f}°, {location.longitude:.4f}°"


def calendar_title(
    year: int,
    location: ObserverLocation,
    selected: str,
    lookup: PlaceLookup | None = None,
) -> str:
    """Heading for a generated calendar.

    Presets use their label. Custom coordinates use the lookup's place name;
    without a lookup, or when it fails, the title falls back to coordinates.
    """
    label = preset_label(selected) if selected != CUSTOM else None
    if label is not None:
        return f"{year} | {label} ({_coords(location)})"

    if lookup is None:
        return f"{year} | {_coords(location)}"
    try:
        name = get_location_name(location.latitude, location.longitude, lookup)
    except OSError:
        return f"{year} | {_coords(location)}"
    return f"{year} | {name} ({_coords(location)})"
