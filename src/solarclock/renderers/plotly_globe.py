"""Plotly interactive globe renderer.

Orthographic Scattergeo by default; pass ``projection="equirectangular"``
for a flat interactive map. Drag rotates the globe.
"""

import plotly.graph_objects as go

from solarclock.i18n import t
from solarclock.models import FlightSolarClock
from solarclock.report import format_clock

_BG = "#050a1a"
_PLANE_COLOR = "#00e5ff"
_SUN_COLOR = "#ff4136"
_LAND_COLOR = "#1d3557"
_OCEAN_COLOR = "#0b1d3a"


def render_plotly_globe(
    result: FlightSolarClock,
    upto: int | None = None,
    projection: str = "orthographic",
    lang: str = "en",
) -> go.Figure:
    """Render the route and Sun path on a Plotly globe.

    Args:
        result: Fully computed flight solar clock.
        upto: Last route index to draw (inclusive); the point at this index is
            highlighted. Draws the whole flight if None.
        projection: Plotly geo projection type.
        lang: Language code for the title.

    Returns:
        Plotly Figure object.
    """
    n = len(result)
    last = n - 1 if upto is None else max(0, min(upto, n - 1))
    sl = slice(0, last + 1)

    clocks = [format_clock(c) for c in result.solar_clock.times[sl]]

    plane_trace = go.Scattergeo(
        lat=list(result.route.latitudes[sl]),
        lon=list(result.route.longitudes[sl]),
        mode="markers",
        marker=dict(size=3, color=_PLANE_COLOR, symbol="star"),
        text=clocks,
        hovertemplate="%{lat:.2f}, %{lon:.2f}<br>%{text}<extra>plane</extra>",
        name="plane",
    )
    sun_trace = go.Scattergeo(
        lat=list(result.sun_track.latitudes[sl]),
        lon=list(result.sun_track.longitudes[sl]),
        mode="markers",
        marker=dict(size=6, color=_SUN_COLOR, symbol="circle-open"),
        hoverinfo="skip",
        name="sun",
    )

    plane = result.route[last]
    sun = result.sun_track[last]
    current_trace = go.Scattergeo(
        lat=[plane.lat, sun.lat],
        lon=[plane.lon, sun.lon],
        mode="markers",
        marker=dict(size=[10, 16], color=[_PLANE_COLOR, _SUN_COLOR]),
        hoverinfo="skip",
        name="current",
    )

    fig = go.Figure(data=[plane_trace, sun_trace, current_trace])
    fig.update_geos(
        projection_type=projection,
        projection_rotation=dict(lon=plane.lon, lat=plane.lat / 2),
        showland=True,
        landcolor=_LAND_COLOR,
        showocean=True,
        oceancolor=_OCEAN_COLOR,
        showcountries=True,
        countrycolor="#334466",
        coastlinecolor="#7ec8e3",
        bgcolor=_BG,
    )
    fig.update_layout(
        title=dict(text=t("globe_title", lang), font=dict(color="#e8e8e8")),
        paper_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=0, t=40, b=0),
    )
    return fig
