#!/usr/bin/env python3
"""
Base TableBuilder: abstract strategy for turning free text into tables.
"""

from abc import ABC, abstractmethod

from ..tables.data_models import TableData


class TableBuildError(Exception):
    """Raised when a builder cannot produce a usable table."""


class TableBuilder(ABC):
    """
    Strategy interface for natural-language table construction.

    Implementations:
    - OpenAITableBuilder: remote language model, raises TableBuildError on failure
    - HeuristicTableBuilder: local regex heuristics, never fails
    - NaturalLanguageTableBuilder: composite choosing between the two
    """

    @abstractmethod
    def build_table(self, description: str) -> TableData:
        """
        Create a table from a free-text description.

        Args:
            description: e.g. "project tracker with name, status, owner"

        Returns:
            The new table
        """

    @abstractmethod
    def modify_table(self, table: TableData, command: str) -> TableData:
        """
        Apply a free-text edit to an existing table.

        Args:
            table: Current table
            command: e.g. "add a deadline column"

        Returns:
            A complete replacement table
        """
