"""Shared fixtures. Rendering tests use the non-interactive matplotlib backend."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pytest

from lunarcalendar.grid import build_year_grid
from lunarcalendar.models import ObserverLocation, YearGrid


@pytest.fixture(scope="session")
def nyc() -> ObserverLocation:
    return ObserverLocation(latitude=40.7128, longitude=-74.0060)


@pytest.fixture(scope="session")
def grid_2024(nyc: ObserverLocation) -> YearGrid:
    return build_year_grid(2024, nyc)
