"""Year grid assembly and per-cell inspection."""

import math

from lunarcalendar.compute import illuminated_fraction, observer_timezone, phase_name
from lunarcalendar.errors import ImpossibleDateError, UnoccupiedCellError
from lunarcalendar.geometry import MONTH_NAMES, days_in_month, max_days_in_year
from lunarcalendar.models import (
    CalendarDate,
    GridCell,
    ObserverLocation,
    TooltipPayload,
    YearGrid,
)


def fraction_to_intensity(fraction: float) -> int:
    """Grayscale channel value 0..255 for an illuminated fraction (half-up rounding)."""
    return int(math.floor(fraction * 255 + 0.5))


def build_year_grid(year: int, location: ObserverLocation) -> YearGrid:
    """Compute illumination for every day of ``year`` at ``location``.

    Rows are days 1..max_days, columns are months 0..11. Slots past a month's
    length (Feb 30, Apr 31, ...) are unoccupied and carry no values.

    Args:
        year: Any proleptic Gregorian year.
        location: Validated observer location.

    Returns:
        A freshly built YearGrid. Nothing is reused from earlier builds.
    """
    tz = observer_timezone(location)
    month_lengths = [days_in_month(year, month) for month in range(12)]

    rows: list[tuple[GridCell, ...]] = []
    for day in range(1, max_days_in_year(year) + 1):
        row: list[GridCell] = []
        for month in range(12):
            if day > month_lengths[month]:
                row.append(GridCell(month=month, day=day, occupied=False))
                continue
            date = CalendarDate(year=year, month=month, day=day)
            fraction = illuminated_fraction(
                date, location.latitude, location.longitude, tz=tz
            )
            row.append(
                GridCell(
                    month=month,
                    day=day,
                    occupied=True,
                    fraction=fraction,
                    intensity=fraction_to_intensity(fraction),
                    date=date,
                )
            )
        rows.append(tuple(row))

    return YearGrid(year=year, location=location, rows=tuple(rows))


def format_cell_date(month: int, day: int) -> str:
    """Format as "MMM DD", e.g. "Jan 01"."""
    return f"{MONTH_NAMES[month]} {day:02d}"


def inspect_cell(cell: GridCell, date: CalendarDate | None = None) -> TooltipPayload:
    """Tooltip data for an occupied cell, from its stored fraction.

    ``date``, when given, must name the cell's own month and day.

    Raises:
        UnoccupiedCellError: If the cell holds no day.
        ImpossibleDateError: If ``date`` is not the cell's day.
    """
    if not cell.occupied or cell.fraction is None:
        raise UnoccupiedCellError(
            f"No day at month={cell.month}, day={cell.day}; nothing to inspect"
        )
    if date is not None and (date.month, date.day) != (cell.month, cell.day):
        raise ImpossibleDateError(
            f"Date month={date.month}, day={date.day} does not match cell "
            f"month={cell.month}, day={cell.day}"
        )
    return TooltipPayload(
        formatted_date=format_cell_date(cell.month, cell.day),
        illumination_percent=f"{cell.fraction * 100:.1f}",
        phase_label=phase_name(cell.fraction),
    )
