"""
TableTalk

A Slack bot for creating and editing simple tables with slash commands,
modal forms and natural-language AI assistance.
"""

__version__ = "1.0.0"

# Main classes available for library use
from .tables import (
    ActionContext,
    TableData,
    add_column,
    add_row,
    create_empty_table,
    deserialize_table,
    format_table_as_markdown,
    format_table_as_plain_text,
    parse_table_from_text,
    remove_column,
    remove_row,
    serialize_table,
    update_cell,
)
from .builders import (
    HeuristicTableBuilder,
    NaturalLanguageTableBuilder,
    OpenAITableBuilder,
    TableBuildError,
    TableBuilder,
    create_table_builder,
)

__all__ = [
    "TableData",
    "ActionContext",
    "create_empty_table",
    "add_row",
    "add_column",
    "remove_row",
    "remove_column",
    "update_cell",
    "format_table_as_markdown",
    "format_table_as_plain_text",
    "parse_table_from_text",
    "serialize_table",
    "deserialize_table",
    "TableBuilder",
    "TableBuildError",
    "HeuristicTableBuilder",
    "OpenAITableBuilder",
    "NaturalLanguageTableBuilder",
    "create_table_builder",
]
