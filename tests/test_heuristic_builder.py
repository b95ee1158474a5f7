#!/usr/bin/env python3
"""
Tests for the regex-based fallback builder.
"""

import pytest
from tabletalk.builders.heuristic_builder import HeuristicTableBuilder
from tabletalk.tables.data_models import TableData


@pytest.fixture
def builder():
    return HeuristicTableBuilder()


class TestHeuristicBuildTable:
    """Test build_table."""

    def test_columns_and_rows(self, builder):
        """Test the full tracker phrasing extracts headers and rows."""
        result = builder.build_table(
            "project tracker with columns: name, status, owner. "
            "Add rows for Alpha (Active, John), Beta (Pending, Sarah)"
        )
        assert result.headers == ["Name", "Status", "Owner"]
        assert result.rows == [["Alpha", "Active", "John"], ["Beta", "Pending", "Sarah"]]

    def test_with_and_phrasing(self, builder):
        """Test "with X and Y" yields two capitalized headers."""
        result = builder.build_table("Make a list with name and email")
        assert result.headers == ["Name", "Email"]

    def test_rows_default_when_none_given(self, builder):
        """Test three empty rows sized to the headers."""
        result = builder.build_table("Make a list with name and email")
        assert result.rows == [["", ""], ["", ""], ["", ""]]

    def test_no_match_uses_defaults(self, builder):
        """Test generic headers and empty rows when nothing matches."""
        result = builder.build_table("something random entirely")
        assert result == TableData(
            headers=["Column 1", "Column 2", "Column 3"],
            rows=[["", "", ""], ["", "", ""], ["", "", ""]]
        )

    def test_empty_description(self, builder):
        """Test empty input never fails."""
        result = builder.build_table("")
        assert result.headers == HeuristicTableBuilder.DEFAULT_HEADERS
        assert result.row_count == 3

    def test_short_rows_padded(self, builder):
        """Test rows with fewer values are padded to the header count."""
        result = builder.build_table(
            "tracker with columns: name, status, owner. Add rows for Alpha (Active)"
        )
        assert result.rows == [["Alpha", "Active", ""]]

    def test_long_rows_truncated(self, builder):
        """Test rows with extra values are cut to the header count."""
        result = builder.build_table(
            "tracker with columns: name, status. Add rows for Alpha (Active, John, extra)"
        )
        assert result.rows == [["Alpha", "Active"]]

    def test_overlong_headers_dropped(self, builder):
        """Test candidate headers of fifty or more characters are discarded."""
        long_name = "x" * 60
        result = builder.build_table(f"columns: name, {long_name}")
        assert result.headers == ["Name"]

    def test_default_headers_not_shared(self, builder):
        """Test results never alias the class defaults."""
        result = builder.build_table("nothing here")
        result.headers.append("Extra")
        assert HeuristicTableBuilder.DEFAULT_HEADERS == ["Column 1", "Column 2", "Column 3"]


class TestHeuristicModifyTable:
    """Test modify_table."""

    def test_returns_equal_table(self, builder):
        """Test edits leave the table unchanged."""
        table = TableData(headers=["A"], rows=[["1"]])
        result = builder.modify_table(table, "add a column for B")
        assert result == table
