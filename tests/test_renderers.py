"""Tests for the Plotly and matplotlib year-grid renderers."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import plotly.graph_objects as go
from matplotlib.figure import Figure

from lunarcalendar.geometry import MONTH_NAMES
from lunarcalendar.models import YearGrid
from lunarcalendar.renderers.plotly_grid import render_plotly_grid
from lunarcalendar.renderers.static import render_static_grid, save_static_grid


class TestPlotlyGrid:
    def test_heatmap_shape(self, grid_2024: YearGrid) -> None:
        fig = render_plotly_grid(grid_2024)
        assert isinstance(fig, go.Figure)
        heatmap = fig.data[0]
        assert np.asarray(heatmap.z, dtype=float).shape == (31, 12)
        assert list(heatmap.x) == list(MONTH_NAMES)
        assert heatmap.zmin == 0
        assert heatmap.zmax == 255

    def test_hover_text(self, grid_2024: YearGrid) -> None:
        heatmap = render_plotly_grid(grid_2024).data[0]
        assert "Jan 01" in heatmap.text[0][0]
        assert "% illuminated" in heatmap.text[0][0]
        assert heatmap.text[29][1] == ""  # Feb 30

    def test_empty_cells_have_no_value(self, grid_2024: YearGrid) -> None:
        z = np.asarray(render_plotly_grid(grid_2024).data[0].z, dtype=float)
        assert np.isnan(z[30, 1])
        assert not np.isnan(z[0, 0])


class TestStaticGrid:
    def test_render(self, grid_2024: YearGrid) -> None:
        fig = render_static_grid(grid_2024)
        assert isinstance(fig, Figure)
        labels = [t.get_text() for t in fig.axes[0].get_xticklabels()]
        assert labels == list(MONTH_NAMES)
        plt.close(fig)

    def test_save(self, grid_2024: YearGrid, tmp_path: Path) -> None:
        out = save_static_grid(grid_2024, tmp_path / "nested" / "grid.png")
        assert out.exists()
        assert out.stat().st_size > 0
