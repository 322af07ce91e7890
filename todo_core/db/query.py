"""Helpers for building parameterized SQL fragments.

Field names are interpolated into the returned clause, values never are.
Callers must only pass field names from a trusted source (schema models).
"""

from typing import Any


def build_where_clause(conditions: dict[str, Any]) -> tuple[str, list[Any]]:
    """Build a WHERE clause joining equality conditions with AND.

    Args:
        conditions: Mapping of column name to value. None values are skipped.

    Returns:
        Tuple of (clause, params). Clause is "1=1" when nothing applies.
    """
    fragments = []
    params = []

    for field, value in conditions.items():
        if value is None:
            continue
        fragments.append(f"{field} = ?")
        params.append(value)

    if not fragments:
        return "1=1", []

    return " AND ".join(fragments), params


def build_update_clause(
    data: dict[str, Any],
    exclude: set[str] | None = None,
    nullable: set[str] | None = None
) -> tuple[str, list[Any]]:
    """Build the SET part of an UPDATE statement.

    Args:
        data: Mapping of column name to new value.
        exclude: Columns that must never be updated (e.g. "id").
        nullable: Columns where an explicit None clears the value.
            None values for other columns are skipped.

    Returns:
        Tuple of (clause, params). Clause is "" when nothing applies.
    """
    exclude = exclude or set()
    nullable = nullable or set()
    fragments = []
    params = []

    for field, value in data.items():
        if field in exclude:
            continue
        if value is None and field not in nullable:
            continue
        fragments.append(f"{field} = ?")
        params.append(value)

    return ", ".join(fragments), params
