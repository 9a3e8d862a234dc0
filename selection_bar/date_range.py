"""Date-range picker state machine and day expansion.

A range picker confirms an interval with two day activations; a single
picker confirms on the first. Confirmed ranges, including presets, are sent
to the host as the full list of ``YYYY-MM-DD`` day values so that fields
holding one row per day can be selected exactly.
"""

from __future__ import annotations

import calendar
import datetime
import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from selection_bar.config import DateRangeType, PresetFamily
from selection_bar.dispatch import SelectionCriterion
from selection_bar.presets import PresetDefinition, find_preset, get_presets

if TYPE_CHECKING:
    from selection_bar.dispatch import DispatchResult, SelectionDispatcher

logger: Final[logging.Logger] = logging.getLogger(__name__)

DEFAULT_DATE_PATTERN: Final[str] = "YYYY-MM-DD"

_ONE_DAY: Final = datetime.timedelta(days=1)


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive interval of calendar days with ``start <= end``."""

    start: datetime.date
    end: datetime.date

    def __post_init__(self) -> None:
        if self.start > self.end:
            msg = f"Range start {self.start} is after end {self.end}"
            raise ValueError(msg)

    @classmethod
    def between(cls, first: datetime.date, second: datetime.date) -> DateRange:
        """Build a range from two days given in either order."""
        if second < first:
            return cls(second, first)
        return cls(first, second)

    @property
    def is_single_day(self) -> bool:
        return self.start == self.end

    def __contains__(self, day: object) -> bool:
        if not isinstance(day, datetime.date):
            return False
        return self.start <= day <= self.end


def format_date(day: datetime.date, pattern: str = DEFAULT_DATE_PATTERN) -> str:
    """Format *day* by substituting the ``YYYY``, ``MM`` and ``DD`` tokens."""
    return (
        pattern.replace("YYYY", str(day.year))
        .replace("MM", f"{day.month:02d}")
        .replace("DD", f"{day.day:02d}")
    )


def expand_days(date_range: DateRange) -> list[datetime.date]:
    """Every calendar day from start to end, inclusive."""
    days: list[datetime.date] = []
    current = date_range.start
    while current <= date_range.end:
        days.append(current)
        current += _ONE_DAY
    return days


def current_date() -> datetime.date:
    """Local calendar date, read on every call."""
    return datetime.date.today()


class PickerState(enum.Enum):
    """Position in the two-click selection protocol."""

    IDLE = "IDLE"
    START_CHOSEN = "START_CHOSEN"
    CLOSED = "CLOSED"


class DateRangePicker:
    """Turn day activations into confirmed date ranges for one host field.

    Args:
        field_name: Host field holding one value per day.
        dispatcher: Host boundary used to push confirmed ranges.
        range_type: ``RANGE`` needs two activations, ``SINGLE`` one.
        presets: Preset family; only offered in range mode.
        today: Fixed reference day for presets and the initial calendar
            month. When None the current date is read on every use, so a
            long-lived picker follows the clock across midnight.
    """

    def __init__(
        self,
        field_name: str,
        dispatcher: SelectionDispatcher,
        range_type: DateRangeType = DateRangeType.RANGE,
        presets: PresetFamily = PresetFamily.NONE,
        today: datetime.date | None = None,
    ) -> None:
        self.field_name = field_name
        self.range_type = range_type
        self.preset_family = presets
        self.fixed_today = today
        self._dispatcher = dispatcher
        self._state = PickerState.IDLE
        self._pending_start: datetime.date | None = None
        self._confirmed: DateRange | None = None
        start = self.today
        self.view_year = start.year
        self.view_month = start.month
        self.last_result: DispatchResult | None = None

    @property
    def today(self) -> datetime.date:
        if self.fixed_today is not None:
            return self.fixed_today
        return current_date()

    @property
    def state(self) -> PickerState:
        return self._state

    @property
    def selected_range(self) -> DateRange | None:
        """Last confirmed range, kept while a new selection is pending."""
        return self._confirmed

    @property
    def pending_start(self) -> datetime.date | None:
        return self._pending_start

    # ---- Transitions ---------------------------------------------------------

    def activate(self, day: datetime.date) -> DateRange | None:
        """Handle a click on a day cell.

        Returns:
            The confirmed range when this activation closes the selection,
            otherwise None.
        """
        if self.range_type is DateRangeType.SINGLE:
            return self._close(DateRange(day, day))

        if (
            self._state is PickerState.START_CHOSEN
            and self._pending_start is not None
        ):
            return self._close(DateRange.between(self._pending_start, day))

        self._pending_start = day
        self._state = PickerState.START_CHOSEN
        return None

    def apply_preset(self, preset: PresetDefinition | str) -> DateRange:
        """Confirm a preset range directly, skipping endpoint selection.

        Args:
            preset: A PresetDefinition or the label of one of this picker's
                presets.

        Raises:
            KeyError: If a label does not name one of this picker's presets.
        """
        if isinstance(preset, str):
            preset = find_preset(self.available_presets_family(), self.today, preset)
        return self._close(DateRange(preset.start, preset.end))

    def open(self) -> None:
        """Re-open the calendar, dropping any half-finished selection."""
        self._discard_pending()

    def show_month(self, year: int, month: int) -> None:
        """Move the calendar view, dropping any half-finished selection."""
        if not 1 <= month <= 12:
            msg = f"Month must be in 1..12, got {month}"
            raise ValueError(msg)
        self.view_year = year
        self.view_month = month
        self._discard_pending()

    def previous_month(self) -> None:
        if self.view_month == 1:
            self.show_month(self.view_year - 1, 12)
        else:
            self.show_month(self.view_year, self.view_month - 1)

    def next_month(self) -> None:
        if self.view_month == 12:
            self.show_month(self.view_year + 1, 1)
        else:
            self.show_month(self.view_year, self.view_month + 1)

    def _discard_pending(self) -> None:
        if self._state is not PickerState.START_CHOSEN:
            return
        self._pending_start = None
        if self._confirmed is not None:
            self._state = PickerState.CLOSED
        else:
            self._state = PickerState.IDLE

    def _close(self, date_range: DateRange) -> DateRange:
        self._pending_start = None
        self._confirmed = date_range
        self._state = PickerState.CLOSED
        self.last_result = self._dispatch(date_range)
        return date_range

    def _dispatch(self, date_range: DateRange) -> DispatchResult:
        criteria = [
            SelectionCriterion(numeric=False, value=format_date(day))
            for day in expand_days(date_range)
        ]
        logger.info(
            "Selecting %d day(s) in %s: %s",
            len(criteria),
            self.field_name,
            self.display_text(),
        )
        return self._dispatcher.select_field(self.field_name, criteria, additive=False)

    # ---- Presentation helpers -----------------------------------------------

    def available_presets_family(self) -> PresetFamily:
        if self.range_type is DateRangeType.SINGLE:
            return PresetFamily.NONE
        return self.preset_family

    def presets(self) -> list[PresetDefinition]:
        """Presets offered by this picker, recomputed on every call."""
        return get_presets(self.available_presets_family(), self.today)

    def display_text(self) -> str:
        """Trigger text: the chosen day(s), or a prompt when nothing is set."""
        if self._pending_start is not None:
            return format_date(self._pending_start)
        confirmed = self._confirmed
        if confirmed is None:
            suffix = "s" if self.range_type is DateRangeType.RANGE else ""
            return f"Select date{suffix}"
        if confirmed.is_single_day:
            return format_date(confirmed.start)
        return f"{format_date(confirmed.start)} - {format_date(confirmed.end)}"

    def day_state(self, day: datetime.date) -> str | None:
        """Cell highlight for *day*: ``"selected"``, ``"in-range"`` or None."""
        if self._state is PickerState.START_CHOSEN:
            return "selected" if day == self._pending_start else None
        if self._confirmed is None:
            return None
        if day in (self._confirmed.start, self._confirmed.end):
            return "selected"
        if day in self._confirmed:
            return "in-range"
        return None

    def month_grid(self) -> list[list[datetime.date | None]]:
        """Weeks of the view month, Sunday first, padded with None."""
        weeks = calendar.Calendar(firstweekday=calendar.SUNDAY).monthdatescalendar(
            self.view_year, self.view_month
        )
        return [
            [day if day.month == self.view_month else None for day in week]
            for week in weeks
        ]
