"""Shared pytest fixtures for selection bar tests.

The dashboard host is replaced by a MagicMock so tests can assert on the
exact host calls; configuration files are generated under tmp_path.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from selection_bar.dispatch import SelectionDispatcher
from selection_bar.initial_selections import InitialSelectionEngine
from selection_bar.session import SessionRegistry

if TYPE_CHECKING:
    from pathlib import Path

# ---------------------------------------------------------------------------
# Host doubles
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_host() -> MagicMock:
    """Return a MagicMock host that reports analysis mode and accepts calls."""
    host = MagicMock()
    host.is_analysis_mode.return_value = True
    return host


@pytest.fixture()
def dispatcher(mock_host: MagicMock) -> SelectionDispatcher:
    return SelectionDispatcher(mock_host)


@pytest.fixture()
def registry() -> SessionRegistry:
    """Fresh registry per test so applied keys never leak between tests."""
    return SessionRegistry()


@pytest.fixture()
def engine(
    dispatcher: SelectionDispatcher, registry: SessionRegistry
) -> InitialSelectionEngine:
    return InitialSelectionEngine(dispatcher, registry)


# ---------------------------------------------------------------------------
# Configuration files
# ---------------------------------------------------------------------------

SAMPLE_CONFIG: str = """
surface_id = "obj-42"

[[list_items]]
listType = "field"
fieldName = "Region"
initialSelection = "North, 42"

[[list_items]]
listType = "variable"
variableName = "vCurrency"
variableValues = "EUR, USD"
initialSelection = "USD"
initialSelectionMode = "everySheet"

[[list_items]]
listType = "dateRangePicker"
fieldName = "OrderDate"
dateRangeType = "range"
dateRangePresets = "rolling"
today = "2024-03-15"

[[list_items]]
listType = "button"
buttonLabel = "Docs"
buttonUrl = "https://example.com"
buttonOpenInNew = true
"""


@pytest.fixture()
def sample_config_path(tmp_path: Path) -> Path:
    """Write a four-item configuration covering every list family."""
    path = tmp_path / "selection_bar.toml"
    path.write_text(SAMPLE_CONFIG, encoding="utf-8")
    return path
