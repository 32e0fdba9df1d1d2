"""Tests for lunarcalendar.models."""

from __future__ import annotations

import datetime
import math

import numpy as np
import pytest

from lunarcalendar.errors import ImpossibleDateError, InvalidInputError
from lunarcalendar.models import CalendarDate, ObserverLocation, PhaseLabel, YearGrid


class TestObserverLocation:
    def test_valid_bounds(self) -> None:
        ObserverLocation(latitude=90.0, longitude=180.0)
        ObserverLocation(latitude=-90.0, longitude=-180.0)

    @pytest.mark.parametrize(
        ("lat", "lng"),
        [(90.5, 0.0), (-91.0, 0.0), (0.0, 180.5), (0.0, -200.0)],
    )
    def test_out_of_range(self, lat: float, lng: float) -> None:
        with pytest.raises(InvalidInputError):
            ObserverLocation(latitude=lat, longitude=lng)

    @pytest.mark.parametrize(
        ("lat", "lng"),
        [(math.nan, 0.0), (0.0, math.inf), (-math.inf, 0.0)],
    )
    def test_non_finite(self, lat: float, lng: float) -> None:
        with pytest.raises(InvalidInputError):
            ObserverLocation(latitude=lat, longitude=lng)

    def test_invalid_input_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            ObserverLocation(latitude=100.0, longitude=0.0)


class TestCalendarDate:
    def test_zero_based_month(self) -> None:
        assert CalendarDate(2024, 0, 1).to_date() == datetime.date(2024, 1, 1)
        assert CalendarDate(2024, 11, 31).to_date() == datetime.date(2024, 12, 31)

    def test_leap_day(self) -> None:
        assert CalendarDate(2024, 1, 29).to_date() == datetime.date(2024, 2, 29)

    @pytest.mark.parametrize(
        "date",
        [
            CalendarDate(2023, 1, 29),
            CalendarDate(2024, 1, 30),
            CalendarDate(2024, 3, 31),
            CalendarDate(2024, 0, 0),
            CalendarDate(2024, 12, 1),
            CalendarDate(10000, 1, 30),
        ],
    )
    def test_impossible(self, date: CalendarDate) -> None:
        with pytest.raises(ImpossibleDateError):
            date.validate()
        with pytest.raises(ImpossibleDateError):
            date.to_date()

    @pytest.mark.parametrize(
        "date",
        [CalendarDate(0, 1, 29), CalendarDate(-44, 2, 15), CalendarDate(12000, 11, 31)],
    )
    def test_any_year_validates(self, date: CalendarDate) -> None:
        date.validate()

    def test_to_date_outside_datetime_range(self) -> None:
        with pytest.raises(ValueError):
            CalendarDate(10000, 0, 1).to_date()

    def test_construction_does_not_validate(self) -> None:
        CalendarDate(2023, 1, 30)


def test_phase_label_values() -> None:
    assert [p.value for p in PhaseLabel] == [
        "New Moon",
        "Waxing Crescent",
        "First Quarter",
        "Waxing Gibbous",
        "Full Moon",
        "Waning Gibbous",
        "Last Quarter",
        "Waning Crescent",
    ]
    assert str(PhaseLabel.FULL_MOON) == "Full Moon"


class TestYearGrid:
    def test_cell_lookup(self, grid_2024: YearGrid) -> None:
        cell = grid_2024.cell(0, 1)
        assert (cell.month, cell.day) == (0, 1)
        assert grid_2024.cell(11, 31).day == 31

    @pytest.mark.parametrize(("month", "day"), [(12, 1), (-1, 1), (0, 0), (0, 32)])
    def test_cell_outside_grid(self, grid_2024: YearGrid, month: int, day: int) -> None:
        with pytest.raises(IndexError):
            grid_2024.cell(month, day)

    def test_column(self, grid_2024: YearGrid) -> None:
        feb = grid_2024.column(1)
        assert len(feb) == 31
        assert all(c.month == 1 for c in feb)

    def test_occupied_cells(self, grid_2024: YearGrid) -> None:
        assert len(grid_2024.occupied_cells()) == 366

    def test_matrices(self, grid_2024: YearGrid) -> None:
        intensity = grid_2024.intensity_matrix()
        fraction = grid_2024.fraction_matrix()
        assert intensity.shape == (31, 12)
        assert fraction.shape == (31, 12)
        assert np.isnan(intensity[29, 1])  # Feb 30
        assert np.isnan(fraction[30, 3])  # Apr 31
        assert int(np.count_nonzero(~np.isnan(intensity))) == 366
        assert np.nanmin(fraction) >= 0.0
        assert np.nanmax(fraction) <= 1.0
