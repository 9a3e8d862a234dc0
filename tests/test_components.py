"""Tests for Streamlit component helpers that run without a browser session."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Any
from unittest.mock import patch

import pytest

from components.filters import merge_options
from components.selection_bar import get_picker
from selection_bar.config import DateRangeType, ListItemConfig, ListType, PresetFamily
from selection_bar.session import SelectionKey

if TYPE_CHECKING:
    from unittest.mock import MagicMock

    from selection_bar.dispatch import SelectionDispatcher

_KEY = SelectionKey("obj", 2)


def _date_item(**overrides: Any) -> ListItemConfig:
    fields: dict[str, Any] = {
        "list_type": ListType.DATE_RANGE_PICKER,
        "field_name": "OrderDate",
        "date_range_presets": PresetFamily.STANDARD,
    }
    fields.update(overrides)
    return ListItemConfig(**fields)


class TestGetPicker:
    def test_reused_across_reruns(self, dispatcher: SelectionDispatcher) -> None:
        state: dict[str, Any] = {}
        first = get_picker(state, _KEY, _date_item(), dispatcher)
        first.activate(datetime.date(2024, 3, 10))

        again = get_picker(state, _KEY, _date_item(), dispatcher)

        assert again is first
        assert again.pending_start == datetime.date(2024, 3, 10)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"field_name": "ShipDate"},
            {"date_range_type": DateRangeType.SINGLE},
            {"date_range_presets": PresetFamily.ROLLING},
            {"today": datetime.date(2024, 1, 1)},
        ],
        ids=["field", "range-type", "presets", "today"],
    )
    def test_rebuilt_on_config_change(
        self, dispatcher: SelectionDispatcher, overrides: dict[str, Any]
    ) -> None:
        state: dict[str, Any] = {}
        first = get_picker(state, _KEY, _date_item(), dispatcher)

        assert get_picker(state, _KEY, _date_item(**overrides), dispatcher) is not first

    @patch("selection_bar.date_range.current_date")
    def test_stored_picker_follows_the_clock(
        self,
        mock_today: MagicMock,
        dispatcher: SelectionDispatcher,
        mock_host: MagicMock,
    ) -> None:
        state: dict[str, Any] = {}
        mock_today.return_value = datetime.date(2024, 3, 15)
        get_picker(state, _KEY, _date_item(), dispatcher)

        mock_today.return_value = datetime.date(2024, 3, 16)
        picker = get_picker(state, _KEY, _date_item(), dispatcher)
        picker.apply_preset("Today")

        _field, criteria, _additive = mock_host.select_field.call_args.args
        assert [c.value for c in criteria] == ["2024-03-16"]


class TestMergeOptions:
    def test_selected_values_outside_options_kept(self) -> None:
        assert merge_options(["East", "North"], ["North", "Zeta"]) == [
            "East",
            "North",
            "Zeta",
        ]

    def test_no_selection(self) -> None:
        assert merge_options(["East"], []) == ["East"]
