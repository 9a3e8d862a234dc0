"""Streamlit-backed selection host.

Field selections, variables and the edit-mode flag live in the user's
session state, so each browser session sees its own selection bar state.
The state mapping is injectable; the dashboard passes ``st.session_state``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Final

from selection_bar.config import ListType
from selection_bar.initial_selections import ApplyStatus
from selection_bar.session import SessionRegistry

if TYPE_CHECKING:
    from collections.abc import Collection, MutableMapping, Sequence

    from selection_bar.config import SelectionBarConfig
    from selection_bar.dispatch import SelectionCriterion
    from selection_bar.initial_selections import ApplyOutcome, InitialSelectionEngine

logger: Final[logging.Logger] = logging.getLogger(__name__)

SELECTIONS_KEY: Final[str] = "_sb_selections"
VARIABLES_KEY: Final[str] = "_sb_variables"
EDIT_MODE_KEY: Final[str] = "_sb_edit_mode"
REGISTRY_KEY: Final[str] = "_sb_registry"
PAGE_KEY: Final[str] = "_sb_page"


class HostError(Exception):
    """Raised when the host rejects a selection or variable change.

    Attributes:
        target: Field or variable name that was addressed.
    """

    def __init__(self, message: str, *, target: str = "") -> None:
        self.target: Final[str] = target
        super().__init__(message)


class StreamlitSelectionHost:
    """Selection host storing field selections and variables in a mapping.

    Args:
        state: Session state mapping (``st.session_state`` in the app).
        known_fields: Field names the host accepts. None accepts any name.
        known_variables: Variable names the host accepts. None accepts any.
    """

    def __init__(
        self,
        state: MutableMapping[str, Any],
        known_fields: Collection[str] | None = None,
        known_variables: Collection[str] | None = None,
    ) -> None:
        self._state = state
        self._known_fields = known_fields
        self._known_variables = known_variables
        state.setdefault(SELECTIONS_KEY, {})
        state.setdefault(VARIABLES_KEY, {})

    @classmethod
    def for_config(
        cls, state: MutableMapping[str, Any], config: SelectionBarConfig
    ) -> StreamlitSelectionHost:
        """Build a host that only accepts the fields and variables *config* names."""
        fields = {
            item.field_name
            for item in config.list_items
            if item.list_type is not ListType.VARIABLE and item.field_name
        }
        variables = {
            item.variable_name
            for item in config.list_items
            if item.list_type is ListType.VARIABLE and item.variable_name
        }
        return cls(state, known_fields=fields, known_variables=variables)

    @property
    def selections(self) -> dict[str, list[str | int | float]]:
        return self._state[SELECTIONS_KEY]

    @property
    def variables(self) -> dict[str, str]:
        return self._state[VARIABLES_KEY]

    def is_analysis_mode(self) -> bool:
        return not self._state.get(EDIT_MODE_KEY, False)

    def selected_values(self, field_name: str) -> list[str | int | float]:
        return list(self.selections.get(field_name, []))

    def select_field(
        self,
        field_name: str,
        criteria: Sequence[SelectionCriterion],
        additive: bool,
    ) -> None:
        """Replace (or, when *additive*, toggle) the values of one field."""
        if self._known_fields is not None and field_name not in self._known_fields:
            raise HostError(f"Unknown field '{field_name}'", target=field_name)

        values = [criterion.value for criterion in criteria]
        if additive:
            current = self.selected_values(field_name)
            for value in values:
                if value in current:
                    current.remove(value)
                else:
                    current.append(value)
            values = current
        self.selections[field_name] = list(dict.fromkeys(values))
        logger.debug("Field %s now has %d selected value(s)", field_name, len(values))

    def get_variable(self, variable_name: str) -> str:
        return self.variables.get(variable_name, "")

    def set_variable(self, variable_name: str, value: str) -> None:
        if (
            self._known_variables is not None
            and variable_name not in self._known_variables
        ):
            raise HostError(f"Unknown variable '{variable_name}'", target=variable_name)
        self.variables[variable_name] = value


def get_session_registry(state: MutableMapping[str, Any]) -> SessionRegistry:
    """Return the session's registry, creating it on first use."""
    registry = state.get(REGISTRY_KEY)
    if registry is None:
        registry = SessionRegistry()
        state[REGISTRY_KEY] = registry
    return registry


def consume_navigation(state: MutableMapping[str, Any], page_id: str) -> bool:
    """Report whether this run is the first on *page_id* since arriving.

    Returns True on the first run after the session enters the page and
    False for reruns triggered by widgets on the same page.
    """
    arrived = state.get(PAGE_KEY) != page_id
    state[PAGE_KEY] = page_id
    return arrived


def apply_on_arrival(
    engine: InitialSelectionEngine,
    state: MutableMapping[str, Any],
    page_id: str,
    config: SelectionBarConfig,
) -> list[ApplyOutcome]:
    """Apply initial selections when the session has just entered *page_id*.

    Widget reruns on the same page apply nothing, so user edits are never
    overwritten by every-sheet defaults until the next page change.
    """
    if not consume_navigation(state, page_id):
        return []
    outcomes = engine.apply_all(config.list_items, config.surface_id)
    failed = [o for o in outcomes if o.status is ApplyStatus.FAILED]
    if failed:
        logger.warning(
            "%d initial selection(s) rejected on page %s", len(failed), page_id
        )
    return outcomes
