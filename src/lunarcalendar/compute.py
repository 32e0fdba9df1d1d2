"""Astronomy computation layer — closed-form lunar illumination and phase naming.

No ephemeris tables and no I/O: the moon's position comes from mean orbital
elements plus a handful of first-order perturbation terms, nudged toward the
observer's position on the surface. Good enough to shade a calendar, not to
point a telescope.
"""

import math
from datetime import MAXYEAR, MINYEAR, datetime, timedelta, tzinfo

from pytz import UnknownTimeZoneError, timezone, utc
from timezonefinder import TimezoneFinder

from lunarcalendar.errors import InvalidInputError
from lunarcalendar.geometry import days_in_month
from lunarcalendar.models import (
    CalendarDate,
    IlluminationSample,
    ObserverLocation,
    PhaseLabel,
)

_tf = TimezoneFinder()

_UNIX_EPOCH = datetime(1970, 1, 1)
_LOCALIZE_MIN = datetime(1, 1, 3)
_LOCALIZE_MAX = datetime(9999, 12, 29)
_MS_PER_DAY = 86_400_000
_J2000_UNIX_DAYS = 10957.5  # 2000-01-01T12:00 UTC in days since 1970-01-01

_EARTH_RADIUS_KM = 6371.0
_MINUTES_PER_DAY = 1440.0
_MINUTES_PER_DEGREE = 4.0
_DAYS_PER_YEAR = 365.25


def _fixangle(deg: float) -> float:
    """Reduce an angle in degrees to [0, 360)."""
    return deg - 360.0 * math.floor(deg / 360.0)


def _sin(deg: float) -> float:
    return math.sin(math.radians(deg))


def _cos(deg: float) -> float:
    return math.cos(math.radians(deg))


def observer_timezone(location: ObserverLocation) -> tzinfo:
    """Resolve the IANA timezone at the observer; UTC where none is found."""
    tz_str = _tf.timezone_at(lat=location.latitude, lng=location.longitude)
    if tz_str is None:
        return utc
    try:
        return timezone(tz_str)
    except UnknownTimeZoneError:
        return utc


def _days_from_civil(year: int, month: int, day: int) -> int:
    """Days from 1970-01-01 to a proleptic Gregorian date (1-based month), any year."""
    y = year - 1 if month <= 2 else year
    era = y // 400
    yoe = y - era * 400  # 0..399
    doy = (153 * ((month + 9) % 12) + 2) // 5 + day - 1  # day of a March-based year
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * 146097 + doe - 719468


def _utc_offset(zone: tzinfo, date: CalendarDate) -> timedelta:
    """UTC offset of ``zone`` at local midnight of ``date``.

    Years ``datetime`` cannot hold borrow the same day of the nearest year it
    can (Feb 29 becomes Feb 28 there if needed). pytz also looks a day either
    side while localizing, so the instant stays two days inside the limits.
    """
    year = min(max(date.year, MINYEAR), MAXYEAR)
    day = min(date.day, days_in_month(year, date.month))
    local = datetime(year, date.month + 1, day)
    local = min(max(local, _LOCALIZE_MIN), _LOCALIZE_MAX)
    if hasattr(zone, "localize"):
        return zone.localize(local).utcoffset()
    return local.replace(tzinfo=zone).utcoffset()


def days_since_j2000(
    when: CalendarDate | datetime,
    location: ObserverLocation,
    tz: tzinfo | None = None,
) -> float:
    """Continuous day offset from J2000.0 for a calendar day or an instant.

    A CalendarDate is taken as local midnight in the observer's timezone
    (``tz`` if given, resolved from the location otherwise). A naive datetime
    is taken as UTC.

    Raises:
        ImpossibleDateError: If ``when`` is a CalendarDate that does not exist.
    """
    if isinstance(when, CalendarDate):
        when.validate()
        local_days = _days_from_civil(when.year, when.month + 1, when.day)
        zone = tz if tz is not None else observer_timezone(location)
        offset = _utc_offset(zone, when)
        since_epoch = timedelta(days=local_days) - offset
    elif when.tzinfo is None:
        since_epoch = when - _UNIX_EPOCH
    else:
        since_epoch = (when.replace(tzinfo=None) - _UNIX_EPOCH) - when.utcoffset()

    unix_ms = since_epoch / timedelta(milliseconds=1)
    return unix_ms / _MS_PER_DAY - _J2000_UNIX_DAYS


def illuminated_fraction(
    when: CalendarDate | datetime,
    latitude: float,
    longitude: float,
    tz: tzinfo | None = None,
) -> float:
    """Illuminated fraction of the moon's disk seen from (latitude, longitude).

    Args:
        when: Calendar day (local midnight at the observer) or an instant.
        latitude: Observer latitude in decimal degrees, [-90, 90].
        longitude: Observer longitude in decimal degrees, [-180, 180].
        tz: Observer timezone, to skip the per-call lookup for CalendarDates.

    Returns:
        Fraction in [0, 1]. Deterministic for identical inputs.

    Raises:
        InvalidInputError: On non-finite or out-of-range coordinates.
    """
    location = ObserverLocation(latitude=latitude, longitude=longitude)
    d = days_since_j2000(when, location, tz)

    # Local solar time runs 4 minutes per degree ahead of UT going east.
    d_local = d + longitude * _MINUTES_PER_DEGREE / _MINUTES_PER_DAY

    # Mean orbital elements of the moon (degrees)
    L = _fixangle(218.316 + 13.176396 * d_local)  # mean longitude
    M = _fixangle(134.963 + 13.064993 * d_local)  # mean anomaly
    F = _fixangle(93.272 + 13.229350 * d_local)  # argument of latitude
    D = _fixangle(297.850 + 12.190749 * d_local)  # mean elongation

    # First-order periodic perturbations
    lam = _fixangle(
        L
        + 6.289 * _sin(M)
        + 1.274 * _sin(2 * D - M)
        + 0.658 * _sin(2 * D)
        + 0.214 * _sin(2 * M - 2 * D)
    )
    beta = 5.128 * _sin(F)
    distance_km = (
        385001.0
        - 20905.0 * _cos(M)
        - 3699.0 * _cos(2 * D - M)
        - 2956.0 * _cos(2 * D)
    )

    sun_lng = _fixangle(280.459 + 0.98564736 * d_local)

    # Pseudo-topocentric shift: horizontal parallax applied along the hour angle
    parallax = math.degrees(math.asin(_EARTH_RADIUS_KM / distance_km))
    local_sidereal = _fixangle(280.46061837 + 360.98564736629 * d + longitude)
    hour_angle = _fixangle(local_sidereal - lam)
    lam_topo = _fixangle(
        lam - parallax * _cos(latitude) * _sin(hour_angle) / _cos(beta)
    )
    beta_topo = beta - parallax * (
        _sin(latitude) * _cos(beta) - _cos(latitude) * _cos(hour_angle) * _sin(beta)
    )

    # Sun–moon separation, spherical law of cosines (sun on the ecliptic)
    cos_psi = _cos(beta_topo) * _cos(lam_topo - sun_lng)
    phase_angle = math.acos(max(-1.0, min(1.0, cos_psi)))

    fraction = (1.0 + math.cos(phase_angle)) / 2.0
    fraction *= 1.0 + 0.01 * _sin(latitude) * math.sin(phase_angle)
    fraction *= 1.0 + 0.005 * math.sin(
        2.0 * math.pi * d / _DAYS_PER_YEAR + math.radians(longitude)
    )

    return max(0.0, min(1.0, fraction))


def illumination_sample(
    date: CalendarDate, location: ObserverLocation, tz: tzinfo | None = None
) -> IlluminationSample:
    """Compute a fresh IlluminationSample for one day at one location."""
    fraction = illuminated_fraction(date, location.latitude, location.longitude, tz)
    return IlluminationSample(date=date, location=location, fraction=fraction)


def phase_name(fraction: float) -> PhaseLabel:
    """Name the phase for an illuminated fraction.

    First matching branch wins. Only the instantaneous fraction is known, so
    waxing and waning cannot be told apart: 0.5 is always First Quarter and
    exactly 0.9 falls through to Waning Gibbous.

    Raises:
        InvalidInputError: If fraction is non-finite or outside [0, 1].
    """
    if not math.isfinite(fraction) or not 0.0 <= fraction <= 1.0:
        raise InvalidInputError(f"Illuminated fraction must lie in [0, 1]: {fraction}")
    if fraction < 0.1:
        return PhaseLabel.NEW_MOON
    if fraction < 0.3:
        return PhaseLabel.WAXING_CRESCENT
    if fraction < 0.7:
        return PhaseLabel.FIRST_QUARTER
    if fraction < 0.9:
        return PhaseLabel.WAXING_GIBBOUS
    if fraction > 0.9:
        return PhaseLabel.FULL_MOON
    if fraction > 0.7:
        return PhaseLabel.WANING_GIBBOUS
    if fraction > 0.3:
        return PhaseLabel.LAST_QUARTER
    return PhaseLabel.WANING_CRESCENT
