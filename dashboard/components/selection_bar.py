"""Render selection bar list items with Streamlit widgets.

Each list item gets one column. Field and flag lists are multiselects (a
single select when ``always_one_selected`` is set), variable lists are
dropdowns over the configured values, date pickers are a calendar of day
buttons driven by ``DateRangePicker`` and buttons are link buttons. Every
user edit goes through the ``SelectionDispatcher`` so host failures are
logged the same way as initial selections.
"""

from __future__ import annotations

import calendar
import datetime
import html
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Final

import streamlit as st

from components.filters import multiselect_filter, select_filter
from selection_bar.config import LabelAlign, ListType
from selection_bar.date_range import DateRangePicker, expand_days
from selection_bar.session import SelectionKey
from selection_bar.values import classify_value, parse_values

if TYPE_CHECKING:
    from collections.abc import Callable, MutableMapping

    from streamlit.delta_generator import DeltaGenerator

    from data.host import StreamlitSelectionHost
    from selection_bar.config import ListItemConfig, SelectionBarConfig
    from selection_bar.dispatch import SelectionDispatcher

_PICKER_KEY_PREFIX: Final[str] = "_sb_picker_"
_DAY_HEADERS: Final[tuple[str, ...]] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def _item_container(
    container: DeltaGenerator, item: ListItemConfig
) -> tuple[DeltaGenerator, ListItemConfig]:
    """Place the list label and return where the list widget goes.

    Left-aligned labels get their own narrow column; the returned item has
    ``show_label`` cleared so the widget does not repeat it.
    """
    if not item.show_label or not item.label or item.list_type is ListType.BUTTON:
        return container, item
    if item.label_align is LabelAlign.LEFT:
        label_col, widget_col = container.columns([1, 3])
        label_col.caption(item.label)
        return widget_col, replace(item, show_label=False)
    if item.list_type is ListType.DATE_RANGE_PICKER:
        container.caption(item.label)
    return container, item


def get_picker(
    state: MutableMapping[str, Any],
    key: SelectionKey,
    item: ListItemConfig,
    dispatcher: SelectionDispatcher,
) -> DateRangePicker:
    """Return the session's picker for *key*, rebuilding it on config change.

    The picker outlives reruns so a pending start survives the click that
    chose it. Without a configured ``today`` it reads the clock on each use.
    """
    state_key = f"{_PICKER_KEY_PREFIX}{key}"
    picker: DateRangePicker | None = state.get(state_key)
    if (
        picker is None
        or picker.field_name != item.field_name
        or picker.range_type is not item.date_range_type
        or picker.preset_family is not item.date_range_presets
        or picker.fixed_today != item.today
    ):
        picker = DateRangePicker(
            item.field_name or "",
            dispatcher,
            range_type=item.date_range_type,
            presets=item.date_range_presets,
            today=item.today,
        )
        state[state_key] = picker
    return picker


def _render_field_list(
    container: DeltaGenerator,
    item: ListItemConfig,
    key: SelectionKey,
    host: StreamlitSelectionHost,
    dispatcher: SelectionDispatcher,
    values_provider: Callable[[str], list[str]],
) -> None:
    field_name = item.field_name
    if not field_name:
        container.caption("No field configured")
        return

    options = values_provider(field_name)
    selected = [str(value) for value in host.selected_values(field_name)]

    def _select(values: list[str]) -> None:
        criteria = [classify_value(value) for value in values]
        dispatcher.select_field(field_name, criteria, additive=False)

    if item.always_one_selected:
        select_filter(
            container,
            item.label,
            options,
            selected[0] if selected else None,
            key=f"_sb_list_{key}",
            on_change=lambda value: _select([value]),
            show_label=item.show_label,
        )
        return

    multiselect_filter(
        container,
        item.label,
        options,
        selected,
        key=f"_sb_list_{key}",
        on_change=_select,
        show_label=item.show_label,
    )


def _render_variable_list(
    container: DeltaGenerator,
    item: ListItemConfig,
    key: SelectionKey,
    host: StreamlitSelectionHost,
    dispatcher: SelectionDispatcher,
) -> None:
    variable_name = item.variable_name
    values = parse_values(item.variable_values)
    if not variable_name or not values:
        container.caption("No variable configured")
        return

    select_filter(
        container,
        item.label,
        values,
        host.get_variable(variable_name) or None,
        key=f"_sb_var_{key}",
        on_change=lambda value: dispatcher.set_variable(variable_name, value),
        show_label=item.show_label,
    )


def _render_date_picker(
    container: DeltaGenerator,
    item: ListItemConfig,
    key: SelectionKey,
    dispatcher: SelectionDispatcher,
) -> None:
    if not item.field_name:
        container.caption("No date field configured")
        return

    picker = get_picker(st.session_state, key, item, dispatcher)
    with container.popover(f"\U0001f4c5 {picker.display_text()}"):
        nav_prev, title, nav_next = st.columns([1, 3, 1])
        nav_prev.button("«", key=f"_sb_prev_{key}", on_click=picker.previous_month)
        title.markdown(
            f"**{calendar.month_name[picker.view_month]} {picker.view_year}**"
        )
        nav_next.button("»", key=f"_sb_next_{key}", on_click=picker.next_month)

        for col, name in zip(st.columns(7), _DAY_HEADERS, strict=True):
            col.caption(name)

        for week in picker.month_grid():
            for col, day in zip(st.columns(7), week, strict=True):
                if day is None:
                    continue
                _render_day(col, picker, day, key)

        presets = picker.presets()
        if presets:
            st.divider()
            for col, preset in zip(st.columns(len(presets)), presets, strict=True):
                col.button(
                    preset.label,
                    key=f"_sb_preset_{key}_{preset.label}",
                    on_click=picker.apply_preset,
                    args=(preset.label,),
                )

        confirmed = picker.selected_range
        if confirmed is not None:
            st.caption(f"{len(expand_days(confirmed))} day(s) selected")


def _render_day(
    col: DeltaGenerator,
    picker: DateRangePicker,
    day: datetime.date,
    key: SelectionKey,
) -> None:
    state = picker.day_state(day)
    col.button(
        str(day.day),
        key=f"_sb_day_{key}_{day.isoformat()}",
        on_click=picker.activate,
        args=(day,),
        type="primary" if state else "secondary",
        help="Today" if day == picker.today else None,
    )


def _render_button(container: DeltaGenerator, item: ListItemConfig) -> None:
    if item.button_open_in_new:
        container.link_button(item.button_label, item.button_url)
        return
    # link_button always opens a new tab; same-tab links need raw HTML
    label = html.escape(item.button_label)
    url = html.escape(item.button_url, quote=True)
    container.markdown(
        f'<a class="sb-button" href="{url}" target="_self">{label}</a>',
        unsafe_allow_html=True,
    )


def render_selection_bar(
    config: SelectionBarConfig,
    host: StreamlitSelectionHost,
    dispatcher: SelectionDispatcher,
    values_provider: Callable[[str], list[str]],
) -> None:
    """Render every configured list item side by side.

    Args:
        config: Surface id and ordered list items.
        host: Session-backed host providing current selections.
        dispatcher: Boundary used for all user-triggered mutations.
        values_provider: Returns the selectable values of a field.
    """
    if not config.list_items:
        st.caption("Selection Bar - add list items to the configuration file")
        return

    columns = st.columns(len(config.list_items))
    for index, (container, item) in enumerate(
        zip(columns, config.list_items, strict=True)
    ):
        key = SelectionKey(config.surface_id, index)
        target, item = _item_container(container, item)

        match item.list_type:
            case ListType.FIELD | ListType.FLAG:
                _render_field_list(target, item, key, host, dispatcher, values_provider)
            case ListType.VARIABLE:
                _render_variable_list(target, item, key, host, dispatcher)
            case ListType.DATE_RANGE_PICKER:
                _render_date_picker(target, item, key, dispatcher)
            case ListType.BUTTON:
                _render_button(target, item)
