"""
Column schema helpers.
A schema is an ordered list of column dicts: {'id', 'name', 'kind'}.
"""

from typing import Dict, List

from processors.errors import ColumnNotFoundError, InvalidSchemaError

IDENTIFIER = 'identifier'
GRADE = 'grade'


def make_column(column_id: str, name: str, kind: str = GRADE) -> Dict[str, str]:
    """Build a single column definition."""
    if kind not in (IDENTIFIER, GRADE):
        raise InvalidSchemaError(f"Unknown column kind: {kind}")
    return {'id': column_id, 'name': name, 'kind': kind}


def default_columns() -> List[Dict[str, str]]:
    """Columns every new session starts with."""
    return [
        make_column('col1', 'ID', IDENTIFIER),
        make_column('col2', 'Grade 1', GRADE),
    ]


def columns_from_names(names: List[str]) -> List[Dict[str, str]]:
    """
    Build a schema from display names.

    The first name becomes the identifier column, the rest are grade columns.

    Args:
        names: Column display names in order

    Returns:
        Column schema
    """
    names = [n.strip() for n in names if n and n.strip()]
    if not names:
        raise InvalidSchemaError("At least one column name is required")

    columns = []
    for index, name in enumerate(names, 1):
        kind = IDENTIFIER if index == 1 else GRADE
        columns.append(make_column(f'col{index}', name, kind))
    return columns


def get_grade_columns(columns: List[Dict]) -> List[Dict]:
    return [col for col in columns if col['kind'] == GRADE]


def get_identifier_column(columns: List[Dict]) -> Dict:
    """
    Get the column used to look records up.

    First identifier-kind column, or the first column of the schema
    when none is marked as identifier.
    """
    if not columns:
        raise InvalidSchemaError("Schema has no columns")

    for col in columns:
        if col['kind'] == IDENTIFIER:
            return col
    return columns[0]


def add_column(columns: List[Dict]) -> List[Dict]:
    """
    Append one grade column with an auto-generated id and name.

    Args:
        columns: Current schema (not modified)

    Returns:
        New schema with the extra column at the end
    """
    grade_count = len(get_grade_columns(columns))
    new_column = make_column(
        f'col{len(columns) + 1}',
        f'Grade {grade_count + 1}',
        GRADE
    )
    return [dict(col) for col in columns] + [new_column]


def rename_column(columns: List[Dict], column_id: str, name: str) -> List[Dict]:
    """
    Rename a column in place, keeping its id, kind and position.

    Args:
        columns: Current schema (not modified)
        column_id: Id of the column to rename
        name: New display name

    Returns:
        New schema

    Raises:
        ColumnNotFoundError: If no column has this id
    """
    if not any(col['id'] == column_id for col in columns):
        raise ColumnNotFoundError(column_id)

    return [
        {**col, 'name': name} if col['id'] == column_id else dict(col)
        for col in columns
    ]
