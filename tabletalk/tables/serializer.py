"""
JSON serialization for tables.

Format: {"headers": [str, ...], "rows": [[str, ...], ...]}
"""

import json
import logging
from typing import Any, Dict, List

from .data_models import TableData

logger = logging.getLogger(__name__)


def _to_cell(value: Any) -> str:
    return "" if value is None else str(value)


def table_to_dict(table: TableData) -> Dict[str, Any]:
    """Plain dict form of a table, headers first."""
    return {
        "headers": list(table.headers),
        "rows": [list(row) for row in table.rows],
    }


def table_from_dict(data: Any) -> TableData:
    """
    Build a table from decoded JSON.

    Cells that are not strings are converted with str(); None becomes "".

    Raises:
        ValueError: If data is not an object with list-typed headers and rows
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected JSON object, got {type(data).__name__}")

    headers = data.get("headers")
    rows = data.get("rows")
    if not isinstance(headers, list):
        raise ValueError("Missing or invalid 'headers' field")
    if not isinstance(rows, list):
        raise ValueError("Missing or invalid 'rows' field")

    parsed_rows: List[List[str]] = []
    for i, row in enumerate(rows):
        if not isinstance(row, list):
            raise ValueError(f"Row {i} is not a list")
        parsed_rows.append([_to_cell(cell) for cell in row])

    return TableData(headers=[_to_cell(h) for h in headers], rows=parsed_rows)


def serialize_table(table: TableData) -> str:
    """Serialize a table to compact JSON."""
    return json.dumps(table_to_dict(table), ensure_ascii=False, separators=(",", ":"))


def deserialize_table(text: str) -> TableData:
    """
    Deserialize a table produced by serialize_table.

    Malformed input yields an empty table instead of an exception.
    """
    try:
        return table_from_dict(json.loads(text))
    except (TypeError, ValueError, RecursionError) as e:
        logger.warning(f"Could not deserialize table, using empty table: {e}")
        return TableData()
