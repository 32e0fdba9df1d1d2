"""Lunar calendar records: observer, calendar day, illumination, grid cells and tooltips."""

import datetime
import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from lunarcalendar.errors import ImpossibleDateError, InvalidInputError
from lunarcalendar.geometry import days_in_month


@dataclass(frozen=True)
class ObserverLocation:
    """Observer position on Earth. Validated on construction."""

    latitude: float  # Decimal degrees, [-90, 90]
    longitude: float  # Decimal degrees, [-180, 180]

    def __post_init__(self) -> None:
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise InvalidInputError(
                f"Coordinates must be finite: lat={self.latitude}, lng={self.longitude}"
            )
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidInputError(f"Latitude out of range [-90, 90]: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidInputError(
                f"Longitude out of range [-180, 180]: {self.longitude}"
            )


@dataclass(frozen=True)
class CalendarDate:
    """A calendar day. Month is 0-based (0 = January).

    Not validated on construction; the grid builder only creates days that
    exist. ``validate`` rejects impossible ones. Any integer year is allowed
    (proleptic Gregorian).
    """

    year: int
    month: int  # 0..11
    day: int  # 1..31

    def validate(self) -> None:
        """Raise ImpossibleDateError if the day does not exist in (year, month)."""
        if not 1 <= self.day <= days_in_month(self.year, self.month):
            raise ImpossibleDateError(
                f"Day {self.day} does not exist in month {self.month} of {self.year}"
            )

    def to_date(self) -> datetime.date:
        """Return the equivalent ``datetime.date``.

        Raises:
            ImpossibleDateError: If the day does not exist in (year, month).
            ValueError: If the year is outside what ``datetime.date`` holds.
        """
        self.validate()
        return datetime.date(self.year, self.month + 1, self.day)


class PhaseLabel(str, Enum):
    """Named lunar phase. Derived from an illuminated fraction only."""

    NEW_MOON = "New Moon"
    WAXING_CRESCENT = "Waxing Crescent"
    FIRST_QUARTER = "First Quarter"
    WAXING_GIBBOUS = "Waxing Gibbous"
    FULL_MOON = "Full Moon"
    WANING_GIBBOUS = "Waning Gibbous"
    LAST_QUARTER = "Last Quarter"
    WANING_CRESCENT = "Waning Crescent"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class IlluminationSample:
    """One illumination query and its result."""

    date: CalendarDate
    location: ObserverLocation
    fraction: float  # [0, 1]


@dataclass(frozen=True)
class GridCell:
    """A (month, day) slot of the year grid."""

    month: int  # 0..11
    day: int  # 1..31
    occupied: bool  # day exists in this month
    fraction: float | None = None  # Illuminated fraction, None when unoccupied
    intensity: int | None = None  # Grayscale 0..255, None when unoccupied
    date: CalendarDate | None = None


@dataclass(frozen=True)
class YearGrid:
    """Dense month × day grid for one (year, location). The sole input to renderers."""

    year: int
    location: ObserverLocation
    rows: tuple[tuple[GridCell, ...], ...]  # rows[day - 1][month]

    @property
    def max_days(self) -> int:
        return len(self.rows)

    def cell(self, month: int, day: int) -> GridCell:
        """Return the cell at (month, day). Raises IndexError outside the grid."""
        if not (0 <= month < 12 and 1 <= day <= self.max_days):
            raise IndexError(f"No grid cell at month={month}, day={day}")
        return self.rows[day - 1][month]

    def column(self, month: int) -> tuple[GridCell, ...]:
        return tuple(row[month] for row in self.rows)

    def occupied_cells(self) -> tuple[GridCell, ...]:
        return tuple(c for row in self.rows for c in row if c.occupied)

    def intensity_matrix(self) -> np.ndarray:
        """Intensities as a (max_days, 12) float array; nan where unoccupied."""
        return np.array(
            [
                [np.nan if c.intensity is None else float(c.intensity) for c in row]
                for row in self.rows
            ]
        )

    def fraction_matrix(self) -> np.ndarray:
        """Fractions as a (max_days, 12) float array; nan where unoccupied."""
        return np.array(
            [[np.nan if c.fraction is None else c.fraction for c in row] for row in self.rows]
        )


@dataclass(frozen=True)
class TooltipPayload:
    """Inspection result for a single day. Built on demand, not retained."""

    formatted_date: str  # "Jan 01"
    illumination_percent: str  # One decimal, e.g. "42.7"
    phase_label: PhaseLabel


@dataclass(frozen=True)
class PresetLocation:
    """A selectable location. ``value`` is "lat,lng" or "custom"."""

    value: str
    label: str
