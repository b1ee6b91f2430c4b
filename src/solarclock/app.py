"""Solar Clock in the Sky — Streamlit app for the solar time felt aboard a flight."""

import datetime
import html

import matplotlib.pyplot as plt
import streamlit as st
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from solarclock.compute import run  # noqa: E402
from solarclock.config import configure_logging, settings  # noqa: E402
from solarclock.errors import SolarClockError  # noqa: E402
from solarclock.i18n import t  # noqa: E402
from solarclock.models import TripQuery  # noqa: E402
from solarclock.renderers.plotly_globe import render_plotly_globe  # noqa: E402
from solarclock.renderers.static import render_static_map  # noqa: E402
from solarclock.report import format_clock, trip_summary  # noqa: E402

configure_logging()

# --- Language detection (browser-first via streamlit-js-eval) ---
# navigator.language is read once and cached in session_state.
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", settings.lang)

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="☀",
    layout="wide",
)

# --- Session state initialization ---

if "flight" not in st.session_state:
    st.session_state.flight = None
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None

st.markdown(
    """
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #050a1a !important;
        color: #e8e8e8;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    label, [data-testid="stWidgetLabel"] p {
        color: #aaaaaa !important;
        font-size: 0.85rem !important;
    }
    .solar-clock {
        font-family: 'Menlo', 'Consolas', monospace;
        font-size: 3rem;
        color: #ffd166;
        text-align: center;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

st.title(t("page_title", _lang))

# --- Input panel (defaults: Asiana OZ 521, Seoul/Incheon -> London Heathrow) ---
col1, col2, col3, col4, col5, col6 = st.columns([3, 3, 2, 2, 1.5, 1.5])
with col1:
    departure = st.text_input(t("label_departure", _lang), value="37.4602,126.4407")
with col2:
    arrival = st.text_input(t("label_arrival", _lang), value="51.4700,-0.4543")
with col3:
    date_val = st.date_input(t("label_date", _lang), value=datetime.date(2022, 6, 25))
with col4:
    time_val = st.time_input(
        t("label_time", _lang), value=datetime.time(11, 50), step=300
    )
with col5:
    utc_offset = st.number_input(
        t("label_offset", _lang), min_value=-12.0, max_value=14.0, value=9.0, step=0.25
    )
with col6:
    flying_time = st.text_input(t("label_flying_time", _lang), value="15:00")

submitted = st.button(t("btn_compute", _lang), key="submit_btn")

# --- Form submission handler ---
if submitted:
    query = TripQuery(
        departure=departure,
        arrival=arrival,
        when=f"{date_val:%Y-%m-%d} {time_val:%H:%M:%S}",
        utc_offset=str(utc_offset),
        flying_time=flying_time,
    )
    try:
        st.session_state.flight = run(query)
        st.session_state.error_msg = None
    except SolarClockError as e:
        st.session_state.flight = None
        st.session_state.error_msg = t("error_input", _lang).format(
            error=html.escape(str(e))
        )

if st.session_state.error_msg:
    st.error(st.session_state.error_msg)

flight = st.session_state.flight
if flight is None:
    st.markdown(
        f"<div style='color:#334466; font-size:1.2rem;'>{t('placeholder', _lang)}</div>",
        unsafe_allow_html=True,
    )
    st.stop()

# --- Results ---
# The slider replaces a timed animation: display pacing is the viewer's.
index = 0
if len(flight) > 1:
    index = st.slider(
        t("label_progress", _lang), min_value=0, max_value=len(flight) - 1, value=0
    )
st.markdown(
    f"<div class='solar-clock'>{format_clock(flight.solar_clock[index])}</div>",
    unsafe_allow_html=True,
)

globe_col, map_col = st.columns([1, 2])
with globe_col:
    st.plotly_chart(
        render_plotly_globe(flight, upto=index, lang=_lang), use_container_width=True
    )
with map_col:
    map_fig = render_static_map(flight, lang=_lang)
    st.pyplot(map_fig)
    plt.close(map_fig)

st.text(trip_summary(flight, _lang))
