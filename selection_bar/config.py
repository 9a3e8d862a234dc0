"""Typed configuration for the selection bar and its list items.

Defines the closed enums for list type, initial-selection mode, date-range
picker type and preset family, the immutable ``ListItemConfig`` record, and
a TOML loader. Keys in the TOML file keep the camelCase names used by the
dashboard property panel so exported configurations load unchanged.
"""

from __future__ import annotations

import datetime
import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from collections.abc import Mapping


class ConfigError(ValueError):
    """Raised when a selection bar configuration cannot be parsed.

    Attributes:
        list_index: Position of the offending list item, or None when the
            error concerns the document as a whole.
    """

    def __init__(self, message: str, *, list_index: int | None = None) -> None:
        self.list_index: Final[int | None] = list_index
        prefix = f"list item {list_index}: " if list_index is not None else ""
        super().__init__(f"{prefix}{message}")


class ListType(Enum):
    """Kind of selection list rendered for a list item."""

    FIELD = "field"
    VARIABLE = "variable"
    FLAG = "flag"
    DATE_RANGE_PICKER = "dateRangePicker"
    BUTTON = "button"


class InitialSelectionMode(Enum):
    """When a configured initial selection is applied."""

    ONCE_PER_SESSION = "oncePerSession"
    EVERY_SHEET = "everySheet"


class DateRangeType(Enum):
    """Date picker interaction mode."""

    RANGE = "range"
    SINGLE = "single"


class PresetFamily(Enum):
    """Family of relative date presets offered by a range picker."""

    NONE = "none"
    STANDARD = "standard"
    ROLLING = "rolling"


class LabelAlign(Enum):
    """Position of the list label relative to its values."""

    TOP = "top"
    LEFT = "left"


@dataclass(frozen=True, slots=True)
class ListItemConfig:
    """Immutable configuration for one list in the selection bar.

    Attributes:
        list_type: Kind of list (field, variable, flag, date picker, button).
        field_name: Host field driven by field, flag and date picker lists.
        variable_name: Host variable driven by variable lists.
        variable_values: Comma-separated values offered by a variable list.
        initial_selection: Raw default selection (comma-separated values).
        initial_selection_mode: Whether the default applies once or on
            every sheet navigation.
        date_range_type: Range or single-date picker.
        date_range_presets: Preset family shown by a range picker.
        today: Reference date for presets; None means the current date.
        label: Text shown above or beside the list.
        show_label: Whether the label is rendered.
        label_align: Label position.
        always_one_selected: Host hint that a field keeps one value selected.
        button_label: Text of a button list item.
        button_url: Target of a button list item.
        button_open_in_new: Whether a button opens a new browser tab.
    """

    list_type: ListType = ListType.FIELD
    field_name: str | None = None
    variable_name: str | None = None
    variable_values: str = ""
    initial_selection: str = ""
    initial_selection_mode: InitialSelectionMode = (
        InitialSelectionMode.ONCE_PER_SESSION
    )
    date_range_type: DateRangeType = DateRangeType.RANGE
    date_range_presets: PresetFamily = PresetFamily.NONE
    today: datetime.date | None = None
    label: str = ""
    show_label: bool = True
    label_align: LabelAlign = LabelAlign.TOP
    always_one_selected: bool = False
    button_label: str = "Link"
    button_url: str = "#"
    button_open_in_new: bool = False


@dataclass(frozen=True, slots=True)
class SelectionBarConfig:
    """A widget instance and its ordered list items."""

    surface_id: str
    list_items: tuple[ListItemConfig, ...] = ()


DEFAULT_SURFACE_ID: Final[str] = "unknown"

_ENUM_KEYS: Final[dict[str, tuple[str, type[Enum]]]] = {
    "listType": ("list_type", ListType),
    "initialSelectionMode": ("initial_selection_mode", InitialSelectionMode),
    "dateRangeType": ("date_range_type", DateRangeType),
    "dateRangePresets": ("date_range_presets", PresetFamily),
    "labelAlign": ("label_align", LabelAlign),
}

_STRING_KEYS: Final[dict[str, str]] = {
    "fieldName": "field_name",
    "variableName": "variable_name",
    "variableValues": "variable_values",
    "initialSelection": "initial_selection",
    "label": "label",
    "buttonLabel": "button_label",
    "buttonUrl": "button_url",
}

_BOOL_KEYS: Final[dict[str, str]] = {
    "showLabel": "show_label",
    "alwaysOneSelected": "always_one_selected",
    "buttonOpenInNew": "button_open_in_new",
}


def _parse_enum(
    enum_type: type[Enum], raw: Any, key: str, list_index: int
) -> Enum:
    """Map a raw configuration value onto a closed enum member."""
    for member in enum_type:
        if member.value == raw:
            return member
    valid = ", ".join(str(m.value) for m in enum_type)
    raise ConfigError(
        f"invalid {key} {raw!r}. Valid values: {valid}", list_index=list_index
    )


def _parse_today(raw: Any, list_index: int) -> datetime.date | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime.datetime):
        return raw.date()
    if isinstance(raw, datetime.date):
        return raw
    try:
        return datetime.date.fromisoformat(str(raw))
    except ValueError as exc:
        raise ConfigError(
            f"invalid today {raw!r}; expected YYYY-MM-DD", list_index=list_index
        ) from exc


def parse_list_item(raw: Mapping[str, Any], list_index: int) -> ListItemConfig:
    """Build a ListItemConfig from one ``[[list_items]]`` table.

    Args:
        raw: Mapping of camelCase property names to values.
        list_index: Position of the item, used in error messages.

    Returns:
        Parsed ListItemConfig with defaults for absent keys.

    Raises:
        ConfigError: On unknown keys, wrong value types or enum values
            outside the allowed set.
    """
    known = {*_ENUM_KEYS, *_STRING_KEYS, *_BOOL_KEYS, "today"}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(
            f"unknown keys: {', '.join(unknown)}", list_index=list_index
        )

    kwargs: dict[str, Any] = {}
    for key, (attr, enum_type) in _ENUM_KEYS.items():
        if key in raw:
            kwargs[attr] = _parse_enum(enum_type, raw[key], key, list_index)

    for key, attr in _STRING_KEYS.items():
        if key not in raw:
            continue
        value = raw[key]
        if not isinstance(value, str | int | float) or isinstance(value, bool):
            raise ConfigError(f"{key} must be a string", list_index=list_index)
        kwargs[attr] = str(value)

    for key, attr in _BOOL_KEYS.items():
        if key not in raw:
            continue
        if not isinstance(raw[key], bool):
            raise ConfigError(f"{key} must be a boolean", list_index=list_index)
        kwargs[attr] = raw[key]

    kwargs["today"] = _parse_today(raw.get("today"), list_index)
    return ListItemConfig(**kwargs)


def parse_config(document: Mapping[str, Any]) -> SelectionBarConfig:
    """Build a SelectionBarConfig from a decoded TOML document."""
    surface_id = str(document.get("surface_id", DEFAULT_SURFACE_ID))
    raw_items = document.get("list_items", [])
    if not isinstance(raw_items, list):
        raise ConfigError("list_items must be an array of tables")

    items: list[ListItemConfig] = []
    for index, raw in enumerate(raw_items):
        if not isinstance(raw, dict):
            raise ConfigError("list item must be a table", list_index=index)
        items.append(parse_list_item(raw, index))
    return SelectionBarConfig(surface_id=surface_id, list_items=tuple(items))


def load_config(path: Path) -> SelectionBarConfig:
    """Read and parse a selection bar TOML file.

    Raises:
        ConfigError: If the file is not valid TOML or fails validation.
        FileNotFoundError: If *path* does not exist.
    """
    with path.open("rb") as fh:
        try:
            document = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"malformed TOML in '{path}': {exc}") from exc
    return parse_config(document)
