"""
Table model for TableTalk.

Value-style table data plus pure operations, Slack formatting, delimited
text parsing and JSON serialization.
"""

from .data_models import ActionContext, TableData
from .formatter import EMPTY_TABLE_MARKER, format_table_as_markdown, format_table_as_plain_text
from .operations import (
    add_column,
    add_row,
    create_empty_table,
    remove_column,
    remove_row,
    update_cell,
)
from .serializer import deserialize_table, serialize_table
from .text_parser import parse_table_from_text

__all__ = [
    "TableData",
    "ActionContext",
    "EMPTY_TABLE_MARKER",
    "format_table_as_markdown",
    "format_table_as_plain_text",
    "create_empty_table",
    "add_row",
    "add_column",
    "remove_row",
    "remove_column",
    "update_cell",
    "serialize_table",
    "deserialize_table",
    "parse_table_from_text",
]
