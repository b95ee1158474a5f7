"""
Render tables as Slack mrkdwn.

Slack has no native table block, so tables are drawn as aligned monospaced
text inside a code fence.
"""

from typing import List

from .data_models import TableData

EMPTY_TABLE_MARKER = "_Empty table_"
MIN_COLUMN_WIDTH = 3
CODE_FENCE = "```"


def _cell(row: List[str], index: int) -> str:
    if index < len(row) and row[index] is not None:
        return str(row[index])
    return ""


def _pad(text: str, width: int) -> str:
    return text + " " * max(0, width - len(text))


def column_widths(table: TableData) -> List[int]:
    """
    Width of each column: longest header or cell, at least MIN_COLUMN_WIDTH.

    Missing cells count as empty strings.
    """
    widths = []
    for index, header in enumerate(table.headers):
        longest_cell = max((len(_cell(row, index)) for row in table.rows), default=0)
        widths.append(max(len(header), longest_cell, MIN_COLUMN_WIDTH))
    return widths


def format_table_as_markdown(table: TableData) -> str:
    """
    Format a table as an aligned, fenced block.

    Headers are bold and every column is padded to its width plus two.
    Rows longer than the headers keep their extra cells.

    Args:
        table: Table to render

    Returns:
        Slack mrkdwn text, or EMPTY_TABLE_MARKER when there are no headers
    """
    if not table.headers:
        return EMPTY_TABLE_MARKER

    widths = column_widths(table)

    lines = [
        " | ".join(
            _pad(f"*{header}*", widths[i] + 2) for i, header in enumerate(table.headers)
        ),
        "-|-".join("-" * (width + 2) for width in widths),
    ]
    for row in table.rows:
        cells = [_pad(_cell(row, i), width + 2) for i, width in enumerate(widths)]
        # Cells past the last header are kept, unpadded
        cells.extend(_cell(row, i) for i in range(len(widths), len(row)))
        lines.append(" | ".join(cells))

    return f"{CODE_FENCE}\n" + "\n".join(lines) + f"\n{CODE_FENCE}"


def format_table_as_plain_text(table: TableData) -> str:
    """Format a table without a fence or column alignment."""
    if not table.headers:
        return EMPTY_TABLE_MARKER

    text = "*" + " | ".join(table.headers) + "*\n"
    text += "|".join("---" for _ in table.headers) + "\n"
    for row in table.rows:
        text += " | ".join("" if cell is None else str(cell) for cell in row) + "\n"
    return text
