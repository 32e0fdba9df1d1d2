"""Plotly interactive year-grid renderer.

One grayscale heatmap: 12 month columns, one row per day (day 1 on top).
Hovering a day shows the same payload as the cell inspector.
"""

import plotly.graph_objects as go

from lunarcalendar.geometry import MONTH_NAMES
from lunarcalendar.grid import inspect_cell
from lunarcalendar.models import YearGrid

_BG = "#0b0d14"
_EMPTY_BG = "rgba(0,0,0,0)"
_LABEL_COLOR = "#9aa3b5"


def _hover_text(grid: YearGrid) -> list[list[str]]:
    text: list[list[str]] = []
    for row in grid.rows:
        line: list[str] = []
        for cell in row:
            if not cell.occupied:
                line.append("")
                continue
            tip = inspect_cell(cell)
            line.append(
                f"<b>{tip.formatted_date}</b><br>"
                f"{tip.illumination_percent}% illuminated<br>"
                f"{tip.phase_label.value}"
            )
        text.append(line)
    return text


def render_plotly_grid(grid: YearGrid, cell_px: int = 18) -> go.Figure:
    """Render a YearGrid as a Plotly heatmap.

    Args:
        grid: Fully computed year grid.
        cell_px: Approximate pixel size of one day cell.

    Returns:
        Plotly Figure object.
    """
    heatmap = go.Heatmap(
        z=grid.intensity_matrix(),
        x=list(MONTH_NAMES),
        y=list(range(1, grid.max_days + 1)),
        text=_hover_text(grid),
        hovertemplate="%{text}<extra></extra>",
        colorscale=[[0.0, "rgb(0,0,0)"], [1.0, "rgb(255,255,255)"]],
        zmin=0,
        zmax=255,
        showscale=False,
        xgap=1,
        ygap=1,
        hoverongaps=False,
    )

    fig = go.Figure(data=[heatmap])
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_EMPTY_BG,
        margin=dict(l=0, r=0, t=30, b=0),
        width=cell_px * 12 * 3,
        height=cell_px * (grid.max_days + 2),
        xaxis=dict(
            side="top",
            showgrid=False,
            zeroline=False,
            tickfont=dict(color=_LABEL_COLOR),
            fixedrange=True,
        ),
        yaxis=dict(
            autorange="reversed",
            showgrid=False,
            zeroline=False,
            showticklabels=False,
            fixedrange=True,
        ),
    )
    fig._config = {"displayModeBar": False}  # type: ignore[attr-defined]

    return fig
