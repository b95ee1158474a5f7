"""
Parse delimited plain text into a table.

Example input:
    Name, Status, Owner
    Project A, Active, John
    Project B, Pending, Sarah
"""

import re
from typing import List

from .data_models import TableData

DELIMITER_PATTERN = re.compile(r"[,|\t]")


def _split_line(line: str) -> List[str]:
    return [cell.strip() for cell in DELIMITER_PATTERN.split(line)]


def parse_table_from_text(text: str) -> TableData:
    """
    Parse text whose first line holds the headers.

    Commas, pipes and tabs are all treated as delimiters. Blank lines are
    skipped and rows are kept as-is even when their length differs from
    the header count.

    Args:
        text: Delimited text

    Returns:
        Parsed TableData, empty when the text has no non-blank lines
    """
    lines = [line.strip() for line in text.strip().split("\n")]
    lines = [line for line in lines if line]

    if not lines:
        return TableData()

    return TableData(
        headers=_split_line(lines[0]),
        rows=[_split_line(line) for line in lines[1:]],
    )
