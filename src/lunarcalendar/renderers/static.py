"""Matplotlib static PNG renderer."""

from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from lunarcalendar.geometry import MONTH_NAMES
from lunarcalendar.models import YearGrid

_ROOT = Path(__file__).parent.parent.parent.parent


def render_static_grid(grid: YearGrid, cell_inches: float = 0.3) -> Figure:
    """Render a YearGrid as a static grayscale image.

    Args:
        grid: Fully computed year grid.
        cell_inches: Size of one day cell in inches.

    Returns:
        matplotlib Figure object.
    """
    fig, ax = plt.subplots(figsize=(12 * cell_inches + 1, grid.max_days * cell_inches + 1))
    fig.patch.set_facecolor("black")
    ax.set_facecolor("black")

    # Unoccupied slots are masked and left at the background color
    z = np.ma.masked_invalid(grid.intensity_matrix())
    cmap = matplotlib.colormaps["gray"].copy()
    cmap.set_bad(color="black", alpha=0.0)
    ax.imshow(z, cmap=cmap, vmin=0, vmax=255, aspect="equal", interpolation="nearest")

    ax.set_xticks(range(12))
    ax.set_xticklabels(MONTH_NAMES, color="#aaaaaa")
    ax.xaxis.tick_top()
    ax.set_yticks([])
    ax.tick_params(length=0)
    for spine in ax.spines.values():
        spine.set_visible(False)

    return fig


def save_static_grid(grid: YearGrid, output_path: Path | None = None) -> Path:
    """Save a YearGrid as a PNG file.

    Args:
        grid: Fully computed year grid.
        output_path: Destination path. Auto-generated under results/ if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        loc = grid.location
        filename = f"lunar_{grid.year}__{loc.latitude:.4f}_{loc.longitude:.4f}.png"
        output_path = _ROOT / "results" / filename

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_grid(grid)
    fig.savefig(output_path, facecolor="black")
    plt.close(fig)
    return output_path
