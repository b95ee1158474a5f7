#!/usr/bin/env python3
"""
Tests for the Slack table formatters.
"""

import pytest
from tabletalk.tables.data_models import TableData
from tabletalk.tables.formatter import (
    EMPTY_TABLE_MARKER,
    column_widths,
    format_table_as_markdown,
    format_table_as_plain_text,
)
from tabletalk.tables.text_parser import parse_table_from_text


@pytest.fixture
def table():
    """Table with a long cell in the first column."""
    return TableData(
        headers=["Name", "Status"],
        rows=[["Project Alpha", "Active"], ["B", "Pending"]]
    )


class TestColumnWidths:
    """Test width calculation."""

    def test_minimum_width(self):
        """Test columns are at least three characters wide."""
        table = TableData(headers=["A", "B"], rows=[["1", "22"]])
        assert column_widths(table) == [3, 3]

    def test_longest_value_wins(self, table):
        """Test width follows the longest header or cell."""
        assert column_widths(table) == [len("Project Alpha"), len("Pending")]

    def test_missing_cells_count_as_empty(self):
        """Test short rows do not break width calculation."""
        table = TableData(headers=["Name", "Notes"], rows=[["A"]])
        assert column_widths(table) == [4, 5]


class TestFormatTableAsMarkdown:
    """Test fenced, aligned rendering."""

    def test_empty_table_marker(self):
        """Test an empty table renders as the marker."""
        assert format_table_as_markdown(TableData(headers=[], rows=[])) == EMPTY_TABLE_MARKER
        assert EMPTY_TABLE_MARKER == "_Empty table_"

    def test_minimum_width_layout(self):
        """Test exact output for a table narrower than the minimum width."""
        table = TableData(headers=["A", "B"], rows=[["1", "22"]])
        expected = (
            "```\n"
            "*A*   | *B*  \n"
            "------|------\n"
            "1     | 22   \n"
            "```"
        )
        assert format_table_as_markdown(table) == expected

    def test_line_order_and_fence(self, table):
        """Test header, separator and rows appear in order inside the fence."""
        lines = format_table_as_markdown(table).split("\n")
        assert lines[0] == "```"
        assert lines[-1] == "```"
        assert lines[1].startswith("*Name*")
        assert set(lines[2]) == {"-", "|"}
        assert lines[3].startswith("Project Alpha")
        assert lines[4].startswith("B ")

    def test_columns_aligned(self, table):
        """Test separators line up across data rows."""
        lines = format_table_as_markdown(table).split("\n")[3:-1]
        positions = {line.index(" | ") for line in lines}
        assert len(positions) == 1

    def test_missing_cells_render_empty(self):
        """Test short rows are padded instead of failing."""
        table = TableData(headers=["Name", "Status"], rows=[["A"]])
        lines = format_table_as_markdown(table).split("\n")
        assert lines[3] == "A      | " + " " * 8

    def test_extra_cells_kept(self):
        """Test cells past the last header are rendered unpadded."""
        table = parse_table_from_text("A, B\n1, 2, 3")
        lines = format_table_as_markdown(table).split("\n")
        assert lines[3] == "1     | 2     | 3"

    def test_does_not_mutate(self, table):
        """Test formatting leaves the table untouched."""
        before = table.copy()
        format_table_as_markdown(table)
        assert table == before


class TestFormatTableAsPlainText:
    """Test unaligned rendering."""

    def test_plain_text_layout(self):
        """Test exact output."""
        table = TableData(headers=["Name", "Status"], rows=[["A", "Active"], ["B", "Pending"]])
        assert format_table_as_plain_text(table) == (
            "*Name | Status*\n"
            "---|---\n"
            "A | Active\n"
            "B | Pending\n"
        )

    def test_empty_table_marker(self):
        """Test the empty marker is shared with the markdown formatter."""
        assert format_table_as_plain_text(TableData()) == EMPTY_TABLE_MARKER

    def test_no_fence(self, table):
        """Test plain text is not fenced."""
        assert "```" not in format_table_as_plain_text(table)
