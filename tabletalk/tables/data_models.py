"""
Data models for TableTalk tables.

This module defines the core data structures passed between the table
operations, the formatters, the builders and the Slack layer.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class TableData:
    """
    A simple table: ordered column headers plus ordered rows of cells.

    Rows are expected to have len(headers) cells, but this is not enforced;
    parsed text and model output may produce ragged rows and the formatters
    treat missing cells as empty strings.

    Attributes:
        headers: Column labels, position defines column identity
        rows: Row cells in display order
    """
    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        """Number of columns."""
        return len(self.headers)

    @property
    def row_count(self) -> int:
        """Number of data rows."""
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        """True when the table has no headers."""
        return not self.headers

    def copy(self) -> "TableData":
        """Return a copy that shares no lists with this table."""
        return TableData(
            headers=list(self.headers),
            rows=[list(row) for row in self.rows],
        )


@dataclass
class ActionContext:
    """
    State carried through Slack button values and modal metadata.

    Attributes:
        table: The table the action applies to
        user_id: Slack user who created the table
        channel_id: Channel the table belongs to
        message_ts: Timestamp of the message showing the table
    """
    table: TableData = field(default_factory=TableData)
    user_id: Optional[str] = None
    channel_id: Optional[str] = None
    message_ts: Optional[str] = None
