"""Widget primitives for selection bar lists."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import streamlit as st

if TYPE_CHECKING:
    from collections.abc import Callable

    from streamlit.delta_generator import DeltaGenerator


def _visibility(label: str, show_label: bool) -> str:
    return "visible" if show_label and label else "collapsed"


def merge_options(options: list[str], selected: list[str]) -> list[str]:
    """Append selected values missing from *options*, without duplicates.

    Values beyond the fetched row limit stay visible, so the next edit
    does not silently drop them from the host selection.
    """
    return list(dict.fromkeys([*options, *selected]))


def multiselect_filter(
    container: DeltaGenerator,
    label: str,
    options: list[str],
    selected: list[str],
    key: str,
    on_change: Callable[[list[str]], None],
    show_label: bool = True,
) -> list[str]:
    """Render a multiselect whose value mirrors the host selection.

    The widget is seeded from *selected* on every run so selections made
    elsewhere (initial selections, other widgets) show up immediately.

    Args:
        container: Column or sidebar to render into.
        label: Widget label text.
        options: Available values.
        selected: Values currently selected in the host.
        key: Unique widget key to prevent ``DuplicateWidgetID`` errors.
        on_change: Called with the new value list after a user edit.
        show_label: Hide the label while keeping it for accessibility.

    Returns:
        List of selected values.
    """
    st.session_state[key] = list(selected)

    def _changed() -> None:
        on_change(list(st.session_state[key]))

    result: list[str] = container.multiselect(
        label or key,
        options=merge_options(options, selected),
        key=key,
        on_change=_changed,
        label_visibility=_visibility(label, show_label),
    )
    return result


def select_filter(
    container: DeltaGenerator,
    label: str,
    options: list[str],
    current: str | None,
    key: str,
    on_change: Callable[[str], None],
    show_label: bool = True,
) -> str | None:
    """Render a single-select dropdown mirroring a host value.

    Args:
        container: Column or sidebar to render into.
        label: Widget label text.
        options: Available choices.
        current: Value currently active in the host, if any.
        key: Unique widget key to prevent ``DuplicateWidgetID`` errors.
        on_change: Called with the chosen value after a user edit.
        show_label: Hide the label while keeping it for accessibility.

    Returns:
        Selected value, or None when nothing is active.
    """
    st.session_state[key] = current

    def _changed() -> None:
        value: Any = st.session_state[key]
        if value is not None:
            on_change(value)

    selected: str | None = container.selectbox(
        label or key,
        options=merge_options(options, [] if current is None else [current]),
        index=None,
        key=key,
        on_change=_changed,
        placeholder="Select value",
        label_visibility=_visibility(label, show_label),
    )
    return selected
