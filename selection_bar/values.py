"""Parsing of raw configuration values into discrete selection tokens."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, Final

from selection_bar.dispatch import SelectionCriterion

_SEPARATOR: Final[str] = ","

# Dashboard number formatting switches to exponent notation outside this band
_EXPONENT_UPPER: Final[float] = 1e21
_EXPONENT_LOWER: Final[float] = 1e-6

# Larger integral values stay floats; neighbouring integers share a float
_MAX_SAFE_INTEGER: Final[int] = 2**53 - 1


def parse_values(raw: Any) -> list[str]:
    """Split a comma-separated configuration value into trimmed tokens.

    Empty, ``None`` and non-string input yield an empty list. Tokens that
    are empty after trimming are dropped; order is preserved.

    Examples:
        >>> parse_values("a, b ,,c")
        ['a', 'b', 'c']
        >>> parse_values(None)
        []
    """
    if not raw or not isinstance(raw, str):
        return []
    tokens = (token.strip() for token in raw.split(_SEPARATOR))
    return [token for token in tokens if token]


def format_number(value: float) -> str:
    """Render a number the way the dashboard host prints it.

    Digits are the shortest that round-trip (``123456789012345680000``,
    not the exact binary value). Magnitudes between 1e-6 and 1e21 are
    positional with no trailing ``.0``; outside that band a signed exponent
    without zero padding is used (``1e+21``, ``1.5e-7``).
    """
    if value == 0:
        return "0"
    # repr gives the shortest digits that round-trip
    text = repr(value)
    if "e" not in text:
        return text.removesuffix(".0")
    if _EXPONENT_LOWER <= abs(value) < _EXPONENT_UPPER:
        return format(Decimal(text), "f")
    mantissa, exponent = text.split("e")
    power = int(exponent)
    sign = "+" if power > 0 else "-"
    return f"{mantissa}e{sign}{abs(power)}"


def classify_value(token: str) -> SelectionCriterion:
    """Classify a token as a numeric or textual selection criterion.

    A token is numeric only when it parses as a finite number that formats
    back to exactly the same string, so ``"42"`` is numeric while
    ``"42.0"`` and ``"042"`` stay textual.
    """
    try:
        number = float(token)
    except ValueError:
        return SelectionCriterion(numeric=False, value=token)

    if not math.isfinite(number) or format_number(number) != token:
        return SelectionCriterion(numeric=False, value=token)

    if number.is_integer() and abs(number) <= _MAX_SAFE_INTEGER:
        return SelectionCriterion(numeric=True, value=int(number))
    return SelectionCriterion(numeric=True, value=number)
