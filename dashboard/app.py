"""Selection Bar dashboard: list items synchronized with session selections."""

from __future__ import annotations

import logging

import streamlit as st

from components.surface import render_surface

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

st.set_page_config(
    page_title="Selection Bar",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.title("Sales Overview")
st.caption(
    "Once-per-session defaults apply on the first visit; every-sheet defaults "
    "apply again whenever you return to this page."
)

render_surface("overview")
