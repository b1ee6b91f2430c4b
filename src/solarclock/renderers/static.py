"""Matplotlib static PNG renderer: flight route and Sun path on a flat map."""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from solarclock.config import settings
from solarclock.i18n import t
from solarclock.models import FlightSolarClock

_PLANE_COLOR = "cyan"
_SUN_COLOR = "red"
_BG = "#0b1d3a"


def render_static_map(
    result: FlightSolarClock, lang: str = "en", chart_width: int = 12
) -> Figure:
    """Render the route and Sun path on an equirectangular lon/lat map.

    Args:
        result: Fully computed flight solar clock.
        lang: Language code for the title.
        chart_width: Output image width in inches (height is half).

    Returns:
        matplotlib Figure object.
    """
    fig, ax = plt.subplots(figsize=(chart_width, chart_width / 2))
    ax.set_facecolor(_BG)

    plane_lon = np.array(result.route.longitudes)
    plane_lat = np.array(result.route.latitudes)
    sun_lon = np.array(result.sun_track.longitudes)
    sun_lat = np.array(result.sun_track.latitudes)

    ax.plot(
        plane_lon,
        plane_lat,
        linestyle="none",
        marker="*",
        markersize=2,
        color=_PLANE_COLOR,
        label="plane",
    )
    ax.plot(
        sun_lon,
        sun_lat,
        linestyle="none",
        marker="o",
        markerfacecolor="none",
        color=_SUN_COLOR,
        label="sun",
    )

    ax.set_xlim(-180, 180)
    ax.set_ylim(-90, 90)
    ax.set_xticks(range(-180, 181, 30))
    ax.set_yticks(range(-90, 91, 30))
    ax.grid(color="white", alpha=0.15, linewidth=0.5)
    ax.set_xlabel("longitude [deg]")
    ax.set_ylabel("latitude [deg]")
    ax.set_title(t("map_title", lang))

    return fig


def save_static_map(
    result: FlightSolarClock, output_path: Path | None = None, lang: str = "en"
) -> Path:
    """Save the flat map as a PNG file.

    Args:
        result: Fully computed flight solar clock.
        output_path: Destination path. Auto-generated under the results dir if None.
        lang: Language code for the title.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        trip = result.trip
        when_str = trip.departure_local.strftime("%Y_%m_%d_%H_%M")
        filename = (
            f"{trip.departure.lat:.2f}_{trip.departure.lon:.2f}__"
            f"{trip.arrival.lat:.2f}_{trip.arrival.lon:.2f}__{when_str}.png"
        )
        output_path = Path(settings.results_dir) / filename

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_map(result, lang=lang)
    fig.savefig(output_path)
    plt.close(fig)
    return output_path
