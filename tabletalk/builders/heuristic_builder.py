#!/usr/bin/env python3
"""
HeuristicTableBuilder: local fallback when the language model is unavailable.

Extracts column names and row values from common phrasings with regular
expressions, e.g. "project tracker with columns: name, status, owner.
Add rows for Alpha (active, John), Beta (pending, Sarah)".
"""

import re
import logging
from typing import List

from ..tables.data_models import TableData
from .base_builder import TableBuilder

logger = logging.getLogger(__name__)


class HeuristicTableBuilder(TableBuilder):
    """Regex-based fallback parser for natural-language table requests."""

    COLUMN_PATTERNS = [
        re.compile(
            r'(?:columns?|fields?|headers?)(?:\s+(?:for|are|like|with|including))?:?\s*([^.]+)',
            re.IGNORECASE
        ),
        re.compile(r'with\s+(?:columns?\s+)?([^.]+?)(?:\s+and\s+add|\.|$)', re.IGNORECASE),
        re.compile(r'(?:tracker|schedule|list).*with\s+([^.]+)', re.IGNORECASE),
    ]
    COLUMN_SPLIT_PATTERN = re.compile(r',|\sand\s|,?\s+and\s+')
    ROW_PATTERN = re.compile(r'add.*row.*for\s+(.+)', re.IGNORECASE)
    # Commas outside parentheses separate row entries
    ROW_SPLIT_PATTERN = re.compile(r',(?![^()]*\))')
    ROW_ENTRY_PATTERN = re.compile(r'([^(]+)\(([^)]+)\)')

    DEFAULT_HEADERS = ["Column 1", "Column 2", "Column 3"]
    DEFAULT_ROW_COUNT = 3
    MAX_HEADER_LENGTH = 50

    def build_table(self, description: str) -> TableData:
        """
        Build a table from description using heuristics only.

        Falls back to three generic headers and three empty rows when
        nothing can be extracted. Rows are always normalized to the header
        count.
        """
        headers = self._extract_headers(description) or list(self.DEFAULT_HEADERS)
        rows = self._extract_rows(description)

        if not rows:
            rows = [[""] * len(headers) for _ in range(self.DEFAULT_ROW_COUNT)]
        else:
            rows = [self._normalize_row(row, len(headers)) for row in rows]

        logger.info(
            f"Heuristic parser produced {len(headers)} columns and {len(rows)} rows"
        )
        return TableData(headers=headers, rows=rows)

    def modify_table(self, table: TableData, command: str) -> TableData:
        """Edits are not attempted heuristically; the table is returned unchanged."""
        logger.info("Heuristic parser does not support edits, returning table unchanged")
        return table.copy()

    def _extract_headers(self, description: str) -> List[str]:
        for pattern in self.COLUMN_PATTERNS:
            match = pattern.search(description)
            if not match:
                continue

            headers = [
                h.strip() for h in self.COLUMN_SPLIT_PATTERN.split(match.group(1))
            ]
            headers = [
                h[0].upper() + h[1:]
                for h in headers
                if 0 < len(h) < self.MAX_HEADER_LENGTH
            ]
            if headers:
                return headers
        return []

    def _extract_rows(self, description: str) -> List[List[str]]:
        match = self.ROW_PATTERN.search(description)
        if not match:
            return []

        rows = []
        for entry in self.ROW_SPLIT_PATTERN.split(match.group(1)):
            entry_match = self.ROW_ENTRY_PATTERN.search(entry)
            if entry_match:
                first_value = entry_match.group(1).strip()
                other_values = [v.strip() for v in entry_match.group(2).split(',')]
                rows.append([first_value, *other_values])
        return rows

    @staticmethod
    def _normalize_row(row: List[str], width: int) -> List[str]:
        """Truncate or pad row to exactly width cells."""
        return (row + [""] * width)[:width]
