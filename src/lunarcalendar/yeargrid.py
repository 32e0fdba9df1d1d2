"""CLI entry point for lunar year-grid generation.

Edit the year/latitude/longitude variables at the top, then run:
    uv run python src/lunarcalendar/yeargrid.py
"""

from dotenv import load_dotenv

load_dotenv()

from lunarcalendar.grid import build_year_grid  # noqa: E402
from lunarcalendar.models import ObserverLocation  # noqa: E402
from lunarcalendar.renderers.static import save_static_grid  # noqa: E402

year = 2024
latitude = 40.7128
longitude = -74.0060


def main() -> None:
    grid = build_year_grid(year, ObserverLocation(latitude=latitude, longitude=longitude))
    path = save_static_grid(grid)
    print(f"Saved: {path}")


if __name__ == "__main__":
    main()
