#!/usr/bin/env python3
"""
Tests for the composite builder and its factory.
"""

import pytest
from unittest.mock import MagicMock, Mock, patch
from tabletalk.builders.base_builder import TableBuildError, TableBuilder
from tabletalk.builders.heuristic_builder import HeuristicTableBuilder
from tabletalk.builders.natural_language import (
    NaturalLanguageTableBuilder,
    create_table_builder,
)
from tabletalk.builders.openai_builder import OpenAITableBuilder
from tabletalk.tables.data_models import TableData


@pytest.fixture
def table():
    return TableData(headers=["Name", "Status"], rows=[["Alpha", "Active"]])


@pytest.fixture
def primary():
    return Mock(spec=TableBuilder)


@pytest.fixture
def fallback():
    return Mock(spec=TableBuilder)


class TestBuildTable:
    """Test creation strategy selection."""

    def test_primary_used_when_available(self, primary, fallback):
        """Test a successful primary result is returned."""
        expected = TableData(headers=["A"], rows=[])
        primary.build_table.return_value = expected
        builder = NaturalLanguageTableBuilder(primary=primary, fallback=fallback)

        assert builder.build_table("desc") is expected
        fallback.build_table.assert_not_called()

    def test_fallback_on_primary_failure(self, primary, fallback):
        """Test TableBuildError routes to the fallback."""
        primary.build_table.side_effect = TableBuildError("boom")
        fallback.build_table.return_value = TableData(headers=["B"], rows=[])
        builder = NaturalLanguageTableBuilder(primary=primary, fallback=fallback)

        assert builder.build_table("desc").headers == ["B"]
        fallback.build_table.assert_called_once_with("desc")

    def test_fallback_when_no_primary(self, fallback):
        """Test no primary goes straight to the fallback."""
        fallback.build_table.return_value = TableData()
        builder = NaturalLanguageTableBuilder(fallback=fallback)

        builder.build_table("desc")
        fallback.build_table.assert_called_once_with("desc")

    def test_empty_model_reply_falls_back(self):
        """Test a reply without choices still produces a heuristic table."""
        primary = OpenAITableBuilder(api_key="sk-test")
        empty_response = MagicMock()
        empty_response.choices = []
        builder = NaturalLanguageTableBuilder(primary=primary)

        with patch.object(primary.client.chat.completions, 'create', return_value=empty_response):
            result = builder.build_table("Make a list with name and email")

        assert result.headers == ["Name", "Email"]

    def test_default_fallback_is_heuristic(self):
        """Test the heuristic builder is used when no fallback is given."""
        builder = NaturalLanguageTableBuilder()
        assert isinstance(builder.fallback, HeuristicTableBuilder)
        assert builder.build_table("Make a list with name and email").headers == ["Name", "Email"]


class TestModifyTable:
    """Test edit strategy selection."""

    def test_primary_result_returned(self, primary, table):
        """Test a successful edit replaces the table."""
        edited = TableData(headers=["Name"], rows=[["Alpha"]])
        primary.modify_table.return_value = edited
        builder = NaturalLanguageTableBuilder(primary=primary)

        assert builder.modify_table(table, "remove status") is edited

    def test_original_returned_on_failure(self, primary, fallback, table):
        """Test a failed edit never reaches the fallback."""
        primary.modify_table.side_effect = TableBuildError("boom")
        builder = NaturalLanguageTableBuilder(primary=primary, fallback=fallback)

        assert builder.modify_table(table, "remove status") is table
        fallback.modify_table.assert_not_called()

    def test_original_returned_without_primary(self, table):
        """Test edits are a no-op when no model is configured."""
        builder = NaturalLanguageTableBuilder()
        assert builder.modify_table(table, "sort by name") is table


class TestCreateTableBuilder:
    """Test the configuration-driven factory."""

    def test_without_api_key(self):
        """Test a missing key yields a heuristic-only composite."""
        with patch('tabletalk.builders.natural_language.config') as mock_config:
            mock_config.get_openai_api_key.side_effect = ValueError("OPENAI_API_KEY not found")
            builder = create_table_builder()

        assert builder.primary is None
        assert isinstance(builder.fallback, HeuristicTableBuilder)

    def test_with_api_key(self):
        """Test configured values reach the OpenAI builder."""
        with patch('tabletalk.builders.natural_language.config') as mock_config:
            mock_config.get_openai_api_key.return_value = "sk-test"
            mock_config.get_openai_model.return_value = "gpt-4o"
            mock_config.get_openai_temperature.return_value = 0.1
            mock_config.get_openai_max_retries.return_value = 2
            builder = create_table_builder()

        assert isinstance(builder.primary, OpenAITableBuilder)
        assert builder.primary.model == "gpt-4o"
        assert builder.primary.temperature == 0.1
        assert builder.primary.max_retries == 2
