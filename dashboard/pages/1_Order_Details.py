"""Order details page sharing the selection bar with the overview."""

from __future__ import annotations

import logging

import streamlit as st

from components.surface import render_surface

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

st.set_page_config(page_title="Order Details | Selection Bar", layout="wide")

st.title("Order Details")

render_surface("order_details")
