"""Boundary between the selection bar core and the dashboard host.

The host owns field selections and variables. The core talks to it only
through ``SelectionHost`` and always via ``SelectionDispatcher``, which turns
host exceptions into ``DispatchResult`` values so callers decide explicitly
what a failure means. The selection bar never retries and never rolls back.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

logger: Final[logging.Logger] = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SelectionCriterion:
    """One value to match when selecting in a host field.

    Attributes:
        numeric: True when ``value`` is matched as a number.
        value: Number for numeric criteria, text otherwise.
    """

    numeric: bool
    value: str | int | float


class SelectionHost(Protocol):
    """Selection and variable API exposed by the dashboard host."""

    def is_analysis_mode(self) -> bool: ...

    def select_field(
        self,
        field_name: str,
        criteria: Sequence[SelectionCriterion],
        additive: bool,
    ) -> None: ...

    def set_variable(self, variable_name: str, value: str) -> None: ...


class DispatchOperation(enum.Enum):
    """Host mutation issued by the dispatcher."""

    SELECT_FIELD = "SELECT_FIELD"
    SET_VARIABLE = "SET_VARIABLE"


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Outcome of a single host mutation.

    Attributes:
        operation: Which host call was made.
        target: Field or variable name the call addressed.
        error: Exception raised by the host, None on success.
    """

    operation: DispatchOperation
    target: str
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """True when the host accepted the mutation."""
        return self.error is None


class SelectionDispatcher:
    """Forward selection requests to the host, capturing failures.

    Failures are logged as warnings and returned in the result; they are
    never raised to the caller.
    """

    def __init__(self, host: SelectionHost) -> None:
        self._host = host

    def is_analysis_mode(self) -> bool:
        """Return the host mode, assuming analysis mode if detection fails."""
        try:
            return bool(self._host.is_analysis_mode())
        except Exception:  # noqa: BLE001
            logger.debug("Mode detection failed; assuming analysis mode")
            return True

    def select_field(
        self,
        field_name: str,
        criteria: Sequence[SelectionCriterion],
        *,
        additive: bool = False,
    ) -> DispatchResult:
        """Select *criteria* in *field_name*, replacing the current selection
        unless *additive* is set.
        """
        try:
            self._host.select_field(field_name, list(criteria), additive)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "Failed to select %d value(s) in field %s: %s",
                len(criteria),
                field_name,
                exc,
            )
            return DispatchResult(DispatchOperation.SELECT_FIELD, field_name, exc)
        return DispatchResult(DispatchOperation.SELECT_FIELD, field_name)

    def set_variable(self, variable_name: str, value: str) -> DispatchResult:
        """Set *variable_name* to the string *value*."""
        try:
            self._host.set_variable(variable_name, value)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "Failed to set variable %s to %r: %s", variable_name, value, exc
            )
            return DispatchResult(DispatchOperation.SET_VARIABLE, variable_name, exc)
        return DispatchResult(DispatchOperation.SET_VARIABLE, variable_name)
