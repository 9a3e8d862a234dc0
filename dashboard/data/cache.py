"""Cached field value lookups for selection bar lists.

Field values change slowly relative to clicks, so each (field, table) pair
is cached for 10 minutes and shared across sessions.
"""

from __future__ import annotations

from typing import Any

import streamlit as st

from data.connection import execute_query
from data.queries import FIELD_VALUE_LIMIT, field_values


@st.cache_data(ttl=600)  # type: ignore[misc]
def query_field_values(field_name: str, table: str, _conn: Any) -> list[str]:
    """Distinct values of *field_name* in *table* as display strings.

    Args:
        field_name: Field configured on a field, flag or date list.
        table: Table or view holding the field.
        _conn: Snowflake connection from get_connection(); excluded from
            the cache key.

    Returns:
        Values in ascending order; empty when the query fails.
    """
    df = execute_query(
        field_values(field_name, table), _conn, {"limit": FIELD_VALUE_LIMIT}
    )
    if df.empty:
        return []
    return [str(value) for value in df.iloc[:, 0].tolist()]


def clear_all_caches() -> None:
    """Clear cached field values, e.g. after the source data reloads."""
    st.cache_data.clear()
