"""Snowflake connection used to list selectable field values."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

import pandas as pd
import snowflake.connector
import streamlit as st
from snowflake.connector.errors import DatabaseError, ProgrammingError

if TYPE_CHECKING:
    from snowflake.connector.connection import SnowflakeConnection

_DEFAULT_SCHEMA: Final[str] = "MARTS"
_TIMEOUT_SECONDS: Final[int] = 30


@st.cache_resource  # type: ignore[misc]
def get_connection() -> SnowflakeConnection:
    """Open the shared Snowflake connection for field value lookups.

    Credentials come from st.secrets["snowflake"]; ``schema`` is optional
    and defaults to MARTS. The connection is a process-wide singleton via
    st.cache_resource.
    """
    try:
        secrets = st.secrets["snowflake"]
        return snowflake.connector.connect(
            account=secrets["account"],
            user=secrets["user"],
            password=secrets["password"],
            warehouse=secrets["warehouse"],
            database=secrets["database"],
            role=secrets["role"],
            schema=secrets.get("schema", _DEFAULT_SCHEMA),
            login_timeout=_TIMEOUT_SECONDS,
            network_timeout=_TIMEOUT_SECONDS,
        )
    except DatabaseError:
        st.error(
            "Snowflake connection failed. "
            "Verify credentials in .streamlit/secrets.toml."
        )
        st.stop()
        raise  # Unreachable; st.stop() raises StopException


def _fetch_frame(
    query: str,
    conn: SnowflakeConnection,
    params: dict[str, Any] | None,
) -> pd.DataFrame:
    cursor = conn.cursor()
    try:
        cursor.execute(query, params)
        columns = [desc[0] for desc in cursor.description]
        return pd.DataFrame(cursor.fetchall(), columns=columns)
    finally:
        cursor.close()


def execute_query(
    query: str,
    conn: SnowflakeConnection,
    params: dict[str, Any] | None = None,
) -> pd.DataFrame:
    """Run a query, reconnecting once if the connection was lost.

    A ProgrammingError (bad SQL, unknown field) is shown with st.error and
    yields an empty DataFrame so the list renders without values. A
    DatabaseError clears the cached connection and retries once before
    halting the app.

    Args:
        query: SQL string, optionally containing %(param)s placeholders.
        conn: Connection from get_connection().
        params: Bind-variable parameters.

    Returns:
        Query results as a pandas DataFrame.
    """
    try:
        return _fetch_frame(query, conn, params)
    except ProgrammingError as exc:
        st.error(f"Field value query failed: {exc}")
        return pd.DataFrame()
    except DatabaseError:
        st.cache_resource.clear()
        try:
            return _fetch_frame(query, get_connection(), params)
        except (DatabaseError, ProgrammingError):
            st.error(
                "Connection lost. "
                "Verify Snowflake credentials in .streamlit/secrets.toml."
            )
            st.stop()
            raise  # Unreachable; st.stop() raises StopException
