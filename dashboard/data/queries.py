"""SQL query definitions for selection bar field values.

Field and table names come from configuration, not user input, but are
still quoted as Snowflake identifiers so names with spaces or mixed case
resolve exactly. Row limits are bound as %(param)s variables.
"""

from __future__ import annotations

from typing import Final

# Upper bound on distinct values fetched for one list
FIELD_VALUE_LIMIT: Final[int] = 500


def quote_identifier(name: str) -> str:
    """Quote a possibly dotted Snowflake identifier.

    ``MARTS.dim_date`` becomes ``"MARTS"."dim_date"``; embedded double
    quotes are doubled.

    Raises:
        ValueError: If *name* or any dotted part is empty.
    """
    parts = name.split(".")
    if not name or any(not part.strip() for part in parts):
        msg = f"Invalid identifier: {name!r}"
        raise ValueError(msg)
    return ".".join('"' + part.strip().replace('"', '""') + '"' for part in parts)


def field_values(field_name: str, table: str) -> str:
    """Distinct non-null values of one field, sorted ascending.

    Parameters: limit (int), the maximum number of values returned.
    Returns DataFrame with a single field_value column cast to text so
    values compare with the host's textual selection criteria.
    """
    column = quote_identifier(field_name)
    source = quote_identifier(table)
    return f"""
        SELECT DISTINCT
            TO_VARCHAR({column}) AS field_value
        FROM {source}
        WHERE {column} IS NOT NULL
        ORDER BY field_value
        LIMIT %(limit)s
    """
