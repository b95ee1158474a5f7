#!/usr/bin/env python3
"""
Tests for delimited text parsing.
"""

from tabletalk.tables.data_models import TableData
from tabletalk.tables.text_parser import parse_table_from_text


class TestParseTableFromText:
    """Test parse_table_from_text."""

    def test_comma_delimited(self):
        """Test the basic comma-separated example."""
        result = parse_table_from_text("Name, Status\nA, Active\nB, Pending")
        assert result.headers == ["Name", "Status"]
        assert result.rows == [["A", "Active"], ["B", "Pending"]]

    def test_pipe_delimited(self):
        """Test pipes work as delimiters."""
        result = parse_table_from_text("Time | Topic\n9am | Standup")
        assert result.headers == ["Time", "Topic"]
        assert result.rows == [["9am", "Standup"]]

    def test_tab_delimited(self):
        """Test tabs work as delimiters."""
        result = parse_table_from_text("Item\tQty\nApples\t5")
        assert result.headers == ["Item", "Qty"]
        assert result.rows == [["Apples", "5"]]

    def test_mixed_delimiters(self):
        """Test every delimiter character splits, even within one line."""
        result = parse_table_from_text("A,B|C\tD")
        assert result.headers == ["A", "B", "C", "D"]

    def test_blank_lines_skipped(self):
        """Test blank and whitespace-only lines are ignored."""
        result = parse_table_from_text("\n\n  Name, Status  \n\n   \nA, Active\n\n")
        assert result.headers == ["Name", "Status"]
        assert result.rows == [["A", "Active"]]

    def test_empty_text(self):
        """Test empty input yields an empty table."""
        assert parse_table_from_text("") == TableData(headers=[], rows=[])
        assert parse_table_from_text("   \n  \n") == TableData()

    def test_headers_only(self):
        """Test a single line gives headers and no rows."""
        result = parse_table_from_text("Name, Status")
        assert result.headers == ["Name", "Status"]
        assert result.rows == []

    def test_ragged_rows_kept(self):
        """Test rows are not reconciled with the header count."""
        result = parse_table_from_text("A, B, C\n1\n1, 2, 3, 4")
        assert result.rows == [["1"], ["1", "2", "3", "4"]]

    def test_empty_cells_preserved(self):
        """Test consecutive delimiters produce empty cells."""
        result = parse_table_from_text("A, B, C\n1,,3")
        assert result.rows == [["1", "", "3"]]
