"""Shared page body: configuration, sidebar, selection bar and state tables.

Every dashboard page calls ``render_surface`` with its own page id. Host
state lives in the session, so selections follow the user across pages
while every-sheet defaults are re-applied on each page change.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Final

import pandas as pd
import streamlit as st

from components.selection_bar import render_selection_bar
from data.cache import clear_all_caches, query_field_values
from data.connection import get_connection
from data.host import (
    EDIT_MODE_KEY,
    PAGE_KEY,
    StreamlitSelectionHost,
    apply_on_arrival,
    get_session_registry,
)
from selection_bar.config import ConfigError, SelectionBarConfig, load_config
from selection_bar.dispatch import SelectionDispatcher
from selection_bar.initial_selections import InitialSelectionEngine

logger: Final[logging.Logger] = logging.getLogger(__name__)

CONFIG_ENV_VAR: Final[str] = "SELECTION_BAR_CONFIG"
DEFAULT_CONFIG_PATH: Final[str] = "selection_bar.toml"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@st.cache_data  # type: ignore[misc]
def _load(path: str, mtime: float) -> SelectionBarConfig:
    """Parse the config file; *mtime* invalidates the cache on edits."""
    return load_config(Path(path))


def load_surface_config() -> SelectionBarConfig:
    """Load the configured surface or stop the page with an error."""
    path = Path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH))
    try:
        return _load(str(path), path.stat().st_mtime)
    except (ConfigError, FileNotFoundError) as exc:
        logger.error("Selection bar configuration error: %s", exc)
        st.error(f"Selection bar configuration error: {exc}")
        st.stop()
        raise  # Unreachable; st.stop() raises StopException


def _source_table() -> str | None:
    try:
        return st.secrets["selection_bar"]["source_table"]
    except (KeyError, FileNotFoundError):
        # No Snowflake source: lists only offer values that are already selected
        return None


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------


def _reset_session() -> None:
    """Forget applied defaults and treat the next run as a navigation."""
    get_session_registry(st.session_state).reset()
    st.session_state[PAGE_KEY] = None


def _render_sidebar(source_table: str | None) -> None:
    # Re-assign so the toggle keeps its value when switching pages
    st.session_state[EDIT_MODE_KEY] = st.session_state.get(EDIT_MODE_KEY, False)
    st.sidebar.title("Selection Bar")
    st.sidebar.toggle("Edit mode", key=EDIT_MODE_KEY)
    st.sidebar.button("Re-apply initial selections", on_click=_reset_session)
    if source_table:
        st.sidebar.button("Refresh field values", on_click=clear_all_caches)


# ---------------------------------------------------------------------------
# State tables
# ---------------------------------------------------------------------------


def _render_state(config: SelectionBarConfig, host: StreamlitSelectionHost) -> None:
    st.subheader("Current Selections")
    rows = [
        {"kind": "field", "name": name, "value": ", ".join(str(v) for v in values)}
        for name, values in host.selections.items()
        if values
    ] + [
        {"kind": "variable", "name": name, "value": value}
        for name, value in host.variables.items()
    ]
    if rows:
        st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)
    else:
        st.caption("Nothing selected")

    if host.is_analysis_mode():
        return

    st.subheader("Configuration")
    st.dataframe(
        pd.DataFrame(
            [
                {
                    "index": index,
                    "type": item.list_type.value,
                    "target": item.field_name or item.variable_name or "",
                    "initial": item.initial_selection,
                    "mode": item.initial_selection_mode.value,
                }
                for index, item in enumerate(config.list_items)
            ]
        ),
        hide_index=True,
        use_container_width=True,
    )


# ---------------------------------------------------------------------------
# Page body
# ---------------------------------------------------------------------------


def render_surface(page_id: str) -> None:
    """Render the selection bar page body for *page_id*.

    Args:
        page_id: Stable page identifier; a change of page id within the
            session triggers initial selections.
    """
    config = load_surface_config()
    source_table = _source_table()
    _render_sidebar(source_table)

    host = StreamlitSelectionHost.for_config(st.session_state, config)
    dispatcher = SelectionDispatcher(host)
    engine = InitialSelectionEngine(
        dispatcher, get_session_registry(st.session_state)
    )
    apply_on_arrival(engine, st.session_state, page_id, config)

    def _field_values(field_name: str) -> list[str]:
        """Selectable values: Snowflake when configured, else current selection."""
        if source_table:
            return query_field_values(field_name, source_table, get_connection())
        return [str(value) for value in host.selected_values(field_name)]

    render_selection_bar(config, host, dispatcher, _field_values)

    st.markdown("---")
    _render_state(config, host)
