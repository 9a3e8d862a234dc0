"""Initial-selection engine for selection bar list items.

Each list item may carry a default selection that is pushed to the host
when the widget is painted in analysis mode. In ``oncePerSession`` mode a
default is applied the first time its (surface, list index) key is seen;
in ``everySheet`` mode it is applied on every paint. Items are evaluated
independently, in configuration order.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from selection_bar.config import InitialSelectionMode, ListType
from selection_bar.session import SelectionKey, SessionRegistry
from selection_bar.values import classify_value, parse_values

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from selection_bar.config import ListItemConfig
    from selection_bar.dispatch import DispatchResult, SelectionDispatcher

logger: Final[logging.Logger] = logging.getLogger(__name__)


class ApplyStatus(enum.Enum):
    """Outcome of evaluating one list item's initial selection."""

    APPLIED = "APPLIED"
    FAILED = "FAILED"
    SKIPPED_BUTTON = "SKIPPED_BUTTON"
    SKIPPED_NO_VALUE = "SKIPPED_NO_VALUE"
    SKIPPED_EDIT_MODE = "SKIPPED_EDIT_MODE"
    SKIPPED_ALREADY_APPLIED = "SKIPPED_ALREADY_APPLIED"
    SKIPPED_INCOMPLETE = "SKIPPED_INCOMPLETE"


@dataclass(frozen=True, slots=True)
class ApplyOutcome:
    """Result of one ``apply`` call.

    Attributes:
        key: Selection key of the evaluated list item.
        status: Whether the default was dispatched, failed or skipped.
        result: Host dispatch result, None when nothing was dispatched.
    """

    key: SelectionKey
    status: ApplyStatus
    result: DispatchResult | None = None

    @property
    def dispatched(self) -> bool:
        return self.result is not None


class InitialSelectionEngine:
    """Decide when to apply configured default selections and apply them.

    Args:
        dispatcher: Host boundary used for field and variable mutations.
        registry: Session registry shared across paints of the same session.
        is_analysis_mode: Predicate for the host viewing mode. Defaults to
            the dispatcher's mode check. A predicate that raises counts as
            analysis mode.
    """

    def __init__(
        self,
        dispatcher: SelectionDispatcher,
        registry: SessionRegistry | None = None,
        is_analysis_mode: Callable[[], bool] | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._registry = registry if registry is not None else SessionRegistry()
        self._is_analysis_mode = is_analysis_mode or dispatcher.is_analysis_mode

    @property
    def registry(self) -> SessionRegistry:
        return self._registry

    def _in_analysis_mode(self) -> bool:
        try:
            return bool(self._is_analysis_mode())
        except Exception:  # noqa: BLE001
            logger.debug("Mode detection failed; assuming analysis mode")
            return True

    def apply(self, item: ListItemConfig, key: SelectionKey) -> ApplyOutcome:
        """Evaluate one list item and dispatch its default if due.

        The key is marked applied before dispatching, in both modes, and
        the mark stands even when the host rejects the selection.
        """
        if item.list_type is ListType.BUTTON:
            return ApplyOutcome(key, ApplyStatus.SKIPPED_BUTTON)

        if not item.initial_selection:
            return ApplyOutcome(key, ApplyStatus.SKIPPED_NO_VALUE)

        if not self._in_analysis_mode():
            logger.debug("Skipping %s: not in analysis mode", key)
            return ApplyOutcome(key, ApplyStatus.SKIPPED_EDIT_MODE)

        once = item.initial_selection_mode is InitialSelectionMode.ONCE_PER_SESSION
        if once and self._registry.has_applied(key):
            return ApplyOutcome(key, ApplyStatus.SKIPPED_ALREADY_APPLIED)

        values = parse_values(item.initial_selection)
        if not values:
            return ApplyOutcome(key, ApplyStatus.SKIPPED_NO_VALUE)

        self._registry.mark_applied(key)

        if item.list_type is ListType.VARIABLE:
            if not item.variable_name:
                logger.debug("Skipping %s: no variable configured", key)
                return ApplyOutcome(key, ApplyStatus.SKIPPED_INCOMPLETE)
            result = self._dispatcher.set_variable(item.variable_name, values[0])
        else:
            if not item.field_name:
                logger.debug("Skipping %s: no field configured", key)
                return ApplyOutcome(key, ApplyStatus.SKIPPED_INCOMPLETE)
            criteria = [classify_value(value) for value in values]
            result = self._dispatcher.select_field(
                item.field_name, criteria, additive=False
            )

        if not result.ok:
            # No retry and no rollback: the key stays marked applied.
            return ApplyOutcome(key, ApplyStatus.FAILED, result)

        logger.info("Applied initial selection for %s (%s)", key, result.target)
        return ApplyOutcome(key, ApplyStatus.APPLIED, result)

    def apply_all(
        self, items: Iterable[ListItemConfig], surface_id: str
    ) -> list[ApplyOutcome]:
        """Evaluate every list item of a surface in configuration order."""
        return [
            self.apply(item, SelectionKey(surface_id, index))
            for index, item in enumerate(items)
        ]

    def reset_session(self) -> None:
        """Forget all applied keys so defaults apply again."""
        self._registry.reset()
