"""
Pure table operations.

Every function returns a new TableData and leaves its input untouched.
Out-of-range indices are treated as no-ops rather than errors.
"""

from typing import List, Optional

from .data_models import TableData


def create_empty_table(
    column_count: int,
    row_count: int,
    headers: Optional[List[str]] = None
) -> TableData:
    """
    Create a table with the given dimensions and blank cells.

    Args:
        column_count: Number of columns
        row_count: Number of rows
        headers: Explicit headers; "Col 1".."Col N" when omitted

    Returns:
        New TableData

    Raises:
        ValueError: If either count is negative
    """
    if column_count < 0:
        raise ValueError(f"column_count must be >= 0, got {column_count}")
    if row_count < 0:
        raise ValueError(f"row_count must be >= 0, got {row_count}")

    if headers is None:
        headers = [f"Col {i + 1}" for i in range(column_count)]

    return TableData(
        headers=list(headers),
        rows=[[""] * column_count for _ in range(row_count)],
    )


def add_row(table: TableData, row_data: Optional[List[str]] = None) -> TableData:
    """
    Append a row.

    row_data is not checked against the header count.
    """
    if row_data is None:
        new_row = [""] * len(table.headers)
    else:
        new_row = list(row_data)

    result = table.copy()
    result.rows.append(new_row)
    return result


def add_column(table: TableData, header: str, default_value: str = "") -> TableData:
    """Append a column, filling every existing row with default_value."""
    return TableData(
        headers=[*table.headers, header],
        rows=[[*row, default_value] for row in table.rows],
    )


def remove_row(table: TableData, row_index: int) -> TableData:
    """Remove the row at row_index; out-of-range indices change nothing."""
    return TableData(
        headers=list(table.headers),
        rows=[list(row) for i, row in enumerate(table.rows) if i != row_index],
    )


def remove_column(table: TableData, column_index: int) -> TableData:
    """Remove a header and the matching cell from every row."""
    return TableData(
        headers=[h for i, h in enumerate(table.headers) if i != column_index],
        rows=[
            [cell for i, cell in enumerate(row) if i != column_index]
            for row in table.rows
        ],
    )


def update_cell(
    table: TableData,
    row_index: int,
    column_index: int,
    value: str
) -> TableData:
    """
    Replace a single cell.

    An out-of-range row returns an unchanged copy. A column past the end of
    an in-range row is still written, padding the row with empty cells.
    Negative indices count as out of range.
    """
    result = table.copy()
    if not 0 <= row_index < len(result.rows) or column_index < 0:
        return result

    row = result.rows[row_index]
    if column_index >= len(row):
        row.extend([""] * (column_index + 1 - len(row)))
    row[column_index] = value
    return result
