"""Lunar Calendar — Streamlit app for a year of moonlight at one place on Earth."""

import datetime
import html

import streamlit as st
from dotenv import load_dotenv

load_dotenv()

from lunarcalendar.errors import InvalidInputError  # noqa: E402
from lunarcalendar.geocode import reverse_geocode  # noqa: E402
from lunarcalendar.geometry import MONTH_NAMES, days_in_month, year_options  # noqa: E402
from lunarcalendar.grid import build_year_grid, inspect_cell  # noqa: E402
from lunarcalendar.locations import (  # noqa: E402
    CUSTOM,
    DEFAULT_PRESET,
    calendar_title,
    match_preset,
    parse_coordinates,
    preset_label,
    search_presets,
)
from lunarcalendar.models import ObserverLocation  # noqa: E402
from lunarcalendar.renderers.plotly_grid import render_plotly_grid  # noqa: E402

st.set_page_config(
    page_title="Lunar Calendar",
    page_icon="☾",
    layout="centered",
    initial_sidebar_state="collapsed",
)

# --- Dark theme CSS ---
st.markdown(
    """
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #0b0d14 !important;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    h1.lunar-heading {
        text-align: center;
        font-family: monospace;
        font-weight: 300;
        letter-spacing: 0.2em;
        text-transform: uppercase;
        color: #e8e8e8;
    }
    .calendar-title {
        text-align: center;
        font-family: monospace;
        font-weight: 300;
        letter-spacing: 0.05em;
        color: #d0d8e8;
        font-size: 1.2rem;
    }
    .calendar-hint {
        text-align: center;
        color: #667088;
        font-size: 0.85rem;
    }
    label, [data-testid="stWidgetLabel"] p {
        color: #aaaaaa !important;
        font-size: 0.85rem !important;
    }
    .error-box {
        border: 1px solid #ff6b6b;
        color: #ff9999;
        border-radius: 6px;
        padding: 0.8rem 1.2rem;
    }
    .tooltip-box {
        border: 1px solid rgba(255,255,255,0.15);
        border-radius: 6px;
        padding: 0.8rem 1.2rem;
        color: #e8e8e8;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

# --- Session state initialization ---
if "year" not in st.session_state:
    st.session_state.year = datetime.date.today().year
if "selected_location" not in st.session_state:
    st.session_state.selected_location = DEFAULT_PRESET
if "latitude" not in st.session_state:
    _default = parse_coordinates(DEFAULT_PRESET)
    st.session_state.latitude = _default.latitude
    st.session_state.longitude = _default.longitude
if "location_query" not in st.session_state:
    st.session_state.location_query = ""
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None


def _on_location_change() -> None:
    value = st.session_state.selected_location
    if value != CUSTOM:
        loc = parse_coordinates(value)
        st.session_state.latitude = loc.latitude
        st.session_state.longitude = loc.longitude


def _on_coordinate_change() -> None:
    st.session_state.selected_location = match_preset(
        st.session_state.latitude, st.session_state.longitude
    )


def _generate() -> None:
    """Rebuild the grid and title from the current selection. Nothing is reused."""
    st.session_state.error_msg = None
    st.session_state.grid = None
    try:
        location = ObserverLocation(
            latitude=float(st.session_state.latitude),
            longitude=float(st.session_state.longitude),
        )
    except InvalidInputError as e:
        st.session_state.error_msg = f"Invalid coordinates: {e}"
        return

    selected = st.session_state.selected_location
    year = int(st.session_state.year)
    with st.spinner("Calculating lunar phases..."):
        grid = build_year_grid(year, location)
        lookup = reverse_geocode if selected == CUSTOM else None
        st.session_state.title = calendar_title(year, location, selected, lookup=lookup)
    st.session_state.grid = grid


st.markdown("<h1 class='lunar-heading'>Lunar Calendar</h1>", unsafe_allow_html=True)

# --- Controls ---
col1, col2 = st.columns(2)
with col1:
    years = year_options()
    if st.session_state.year not in years:
        years = sorted({*years, st.session_state.year})
    st.selectbox("Year", options=years, key="year")
with col2:
    st.text_input("Search cities", key="location_query", placeholder="Search cities...")
    options = [p.value for p in search_presets(st.session_state.location_query)]
    if st.session_state.selected_location not in options:
        options.insert(0, st.session_state.selected_location)
    st.selectbox(
        "Location",
        options=options,
        key="selected_location",
        format_func=lambda v: "Custom Location" if v == CUSTOM else (preset_label(v) or v),
        on_change=_on_location_change,
    )

if st.session_state.selected_location == CUSTOM:
    lat_col, lng_col = st.columns(2)
    with lat_col:
        st.number_input(
            "Latitude",
            min_value=-90.0,
            max_value=90.0,
            step=0.0001,
            format="%.4f",
            key="latitude",
            on_change=_on_coordinate_change,
        )
    with lng_col:
        st.number_input(
            "Longitude",
            min_value=-180.0,
            max_value=180.0,
            step=0.0001,
            format="%.4f",
            key="longitude",
            on_change=_on_coordinate_change,
        )

if st.button("Generate", use_container_width=True):
    _generate()

# Generate once on first load
if "grid" not in st.session_state:
    _generate()

# --- Error message ---
if st.session_state.error_msg:
    st.markdown(
        f"<div class='error-box'>{html.escape(st.session_state.error_msg)}</div>",
        unsafe_allow_html=True,
    )

# --- Calendar ---
grid = st.session_state.get("grid")
if grid is not None:
    st.markdown(
        f"<div class='calendar-title'>{html.escape(st.session_state.title)}</div>"
        "<p class='calendar-hint'>Hover over any day to see moon phase details</p>",
        unsafe_allow_html=True,
    )
    st.plotly_chart(
        render_plotly_grid(grid),
        use_container_width=True,
        config={"displayModeBar": False},
    )

    # --- Day inspection ---
    m_col, d_col = st.columns(2)
    with m_col:
        month = st.selectbox(
            "Month", options=list(range(12)), format_func=lambda m: MONTH_NAMES[m]
        )
    with d_col:
        day = st.number_input(
            "Day",
            min_value=1,
            max_value=days_in_month(grid.year, month),
            value=1,
            step=1,
        )
    tip = inspect_cell(grid.cell(month, int(day)))
    st.markdown(
        f"<div class='tooltip-box'><b>{tip.formatted_date}</b><br>"
        f"{tip.illumination_percent}% illuminated<br>{tip.phase_label.value}</div>",
        unsafe_allow_html=True,
    )
