"""Named date presets relative to a reference day.

All dates are built with ``rolled_date``, which accepts out-of-range month
and day numbers and rolls them over like native calendar construction
does. Day 0 of a month is the last day of the previous month, so month
ends never depend on month length tables.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Final

from selection_bar.config import PresetFamily

_ROLLING_MONTHS: Final[tuple[int, ...]] = (3, 6, 11, 12)


@dataclass(frozen=True, slots=True)
class PresetDefinition:
    """A labelled inclusive date range.

    Attributes:
        label: Button text, e.g. ``"This Month"`` or ``"R3"``.
        start: First day of the range.
        end: Last day of the range.
    """

    label: str
    start: datetime.date
    end: datetime.date


def rolled_date(year: int, month: int, day: int) -> datetime.date:
    """Build a date, rolling overflowing months and days into neighbours.

    Args:
        year: Calendar year.
        month: Month number; 0 is December of the previous year and 13 is
            January of the next.
        day: Day of month; 0 is the last day of the previous month.

    Examples:
        >>> rolled_date(2024, 3, 0)
        datetime.date(2024, 2, 29)
        >>> rolled_date(2024, 2, 31)
        datetime.date(2024, 3, 2)
    """
    extra_years, month_index = divmod(month - 1, 12)
    first = datetime.date(year + extra_years, month_index + 1, 1)
    return first + datetime.timedelta(days=day - 1)


def sunday_weekday(day: datetime.date) -> int:
    """Day-of-week index with Sunday as 0 and Saturday as 6."""
    return day.isoweekday() % 7


def _standard_presets(today: datetime.date) -> list[PresetDefinition]:
    y, m, d = today.year, today.month, today.day
    dow = sunday_weekday(today)
    return [
        PresetDefinition("Today", rolled_date(y, m, d), rolled_date(y, m, d)),
        PresetDefinition(
            "This Week", rolled_date(y, m, d - dow + 1), rolled_date(y, m, d + 7 - dow)
        ),
        PresetDefinition(
            "Last Week", rolled_date(y, m, d - dow - 6), rolled_date(y, m, d - dow)
        ),
        PresetDefinition("This Month", rolled_date(y, m, 1), rolled_date(y, m + 1, 0)),
        PresetDefinition("Last Month", rolled_date(y, m - 1, 1), rolled_date(y, m, 0)),
        PresetDefinition("This Year", rolled_date(y, 1, 1), rolled_date(y, 12, 31)),
        PresetDefinition(
            "Last Year", rolled_date(y - 1, 1, 1), rolled_date(y - 1, 12, 31)
        ),
    ]


def _rolling_presets(today: datetime.date) -> list[PresetDefinition]:
    y, m, d = today.year, today.month, today.day
    return [
        PresetDefinition(f"R{months}", rolled_date(y, m - months, d), today)
        for months in _ROLLING_MONTHS
    ]


def get_presets(
    family: PresetFamily, today: datetime.date
) -> list[PresetDefinition]:
    """Compute the presets of *family* relative to *today*.

    Standard presets cover today, this/last week (Monday start), this/last
    month and this/last year. Rolling presets R3, R6, R11 and R12 end today
    and start the same day N months earlier. ``PresetFamily.NONE`` yields
    no presets.
    """
    if family is PresetFamily.STANDARD:
        return _standard_presets(today)
    if family is PresetFamily.ROLLING:
        return _rolling_presets(today)
    if family is PresetFamily.NONE:
        return []
    raise ValueError(f"Unknown preset family: {family!r}")


def find_preset(
    family: PresetFamily, today: datetime.date, label: str
) -> PresetDefinition:
    """Look up a single preset by label.

    Raises:
        KeyError: If *family* has no preset with that label.
    """
    presets = get_presets(family, today)
    for preset in presets:
        if preset.label == label:
            return preset
    valid = ", ".join(p.label for p in presets) or "none"
    raise KeyError(f"Unknown preset '{label}'. Valid: {valid}")
