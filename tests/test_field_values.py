"""Tests for field value queries (dashboard/data/queries.py, data/cache.py).

Snowflake access is mocked by patching execute_query; no connection is
opened.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pandas as pd
import pytest

from data.cache import query_field_values
from data.queries import FIELD_VALUE_LIMIT, field_values, quote_identifier


class TestQuoteIdentifier:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Region", '"Region"'),
            ("MARTS.dim_date", '"MARTS"."dim_date"'),
            ("Order Date", '"Order Date"'),
            ('odd"name', '"odd""name"'),
        ],
        ids=["simple", "dotted", "space", "embedded-quote"],
    )
    def test_quoting(self, name: str, expected: str) -> None:
        assert quote_identifier(name) == expected

    @pytest.mark.parametrize("name", ["", "MARTS.", ".x", "a..b"])
    def test_empty_parts_rejected(self, name: str) -> None:
        with pytest.raises(ValueError, match="Invalid identifier"):
            quote_identifier(name)


class TestFieldValuesQuery:
    def test_query_shape(self) -> None:
        sql = field_values("Region", "MARTS.dim_region")

        assert 'TO_VARCHAR("Region") AS field_value' in sql
        assert 'FROM "MARTS"."dim_region"' in sql
        assert "LIMIT %(limit)s" in sql


class TestQueryFieldValues:
    def setup_method(self) -> None:
        query_field_values.clear()

    @patch("data.cache.execute_query")
    def test_returns_strings(self, mock_execute: MagicMock) -> None:
        mock_execute.return_value = pd.DataFrame({"FIELD_VALUE": ["East", "North"]})

        values = query_field_values("Region", "dim_region", MagicMock())

        assert values == ["East", "North"]
        params = mock_execute.call_args.args[2]
        assert params == {"limit": FIELD_VALUE_LIMIT}

    @patch("data.cache.execute_query")
    def test_empty_frame(self, mock_execute: MagicMock) -> None:
        mock_execute.return_value = pd.DataFrame()

        assert query_field_values("Missing", "dim_region", MagicMock()) == []
