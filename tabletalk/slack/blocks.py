#!/usr/bin/env python3
"""
Block Kit payload builders for TableTalk messages and modals.

Everything here is pure: functions take tables and ids and return the
dicts handed to the Slack Web API.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from ..tables.data_models import ActionContext, TableData
from ..tables.formatter import format_table_as_markdown
from ..tables.operations import create_empty_table
from ..tables.serializer import table_from_dict, table_to_dict

logger = logging.getLogger(__name__)

# Action ids
EDIT_TABLE_ACTION = "edit_table"
ADD_ROW_ACTION = "add_row"
ADD_COLUMN_ACTION = "add_column"
EDIT_WITH_AI_ACTION = "edit_with_ai"
EDIT_MANUALLY_ACTION = "edit_manually"
POST_TO_CHANNEL_ACTION = "post_to_channel"

# Modal callback ids
TABLE_CREATE_MODAL = "table_create_modal"
TABLE_EDIT_MODAL = "table_edit_modal"
EDIT_CHOICE_MODAL = "edit_choice_modal"
AI_EDIT_MODAL = "ai_edit_modal"

AI_EDIT_BLOCK_ID = "edit_description"
AI_EDIT_INPUT_ID = "edit_input"

COLUMN_EMOJIS = ["1️⃣", "2️⃣", "3️⃣", "4️⃣", "5️⃣"]
DEFAULT_COLUMN_EMOJI = "▪️"
HEADER_PLACEHOLDERS = ["Name", "Status", "Owner"]
ROW_DIVIDER = "━━━━━━━━━━━━━━━━━━━━━━"
DEFAULT_HEADERS = ["Column 1", "Column 2", "Column 3"]


def _plain_text(text: str) -> Dict[str, Any]:
    return {"type": "plain_text", "text": text}


def _mrkdwn_section(text: str) -> Dict[str, Any]:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def _button(text: str, action_id: str, value: str, style: Optional[str] = None) -> Dict[str, Any]:
    button = {
        "type": "button",
        "text": _plain_text(text),
        "action_id": action_id,
        "value": value,
    }
    if style:
        button["style"] = style
    return button


def _column_emoji(index: int) -> str:
    return COLUMN_EMOJIS[index] if index < len(COLUMN_EMOJIS) else DEFAULT_COLUMN_EMOJI


def encode_action_value(context: ActionContext) -> str:
    """Encode table and ids for a button value or private_metadata."""
    data: Dict[str, Any] = {"table": table_to_dict(context.table)}
    for key in ("user_id", "channel_id", "message_ts"):
        value = getattr(context, key)
        if value:
            data[key] = value
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def decode_action_value(value: Optional[str]) -> ActionContext:
    """
    Decode a value produced by encode_action_value.

    Malformed or missing data gives an empty context; a bad table alone
    gives an empty table with the ids preserved.
    """
    if not value:
        return ActionContext()

    try:
        data = json.loads(value)
    except (TypeError, ValueError, RecursionError) as e:
        logger.warning(f"Could not decode action value: {e}")
        return ActionContext()
    if not isinstance(data, dict):
        return ActionContext()

    try:
        table = table_from_dict(data.get("table"))
    except ValueError:
        table = TableData()

    return ActionContext(
        table=table,
        user_id=data.get("user_id"),
        channel_id=data.get("channel_id"),
        message_ts=data.get("message_ts"),
    )


def build_table_message_blocks(
    table: TableData,
    context: ActionContext,
    intro: Optional[str] = None,
    include_post_button: bool = False
) -> List[Dict[str, Any]]:
    """
    Blocks for a rendered table followed by its action buttons.

    Args:
        table: Table to render
        context: Ids carried in every button value (its table is replaced by table)
        intro: Optional text shown above the table
        include_post_button: Prepend a primary "Post to Channel" button
    """
    markdown = format_table_as_markdown(table)
    text = f"{intro}\n\n{markdown}" if intro else markdown
    value = encode_action_value(
        ActionContext(
            table=table,
            user_id=context.user_id,
            channel_id=context.channel_id,
            message_ts=context.message_ts,
        )
    )

    elements = []
    if include_post_button:
        elements.append(_button("📤 Post to Channel", POST_TO_CHANNEL_ACTION, value, style="primary"))
    label = "✏️ Edit More" if include_post_button else "✏️ Edit"
    elements.extend([
        _button(label, EDIT_TABLE_ACTION, value),
        _button("➕ Add Row", ADD_ROW_ACTION, value),
        _button("➕ Add Column", ADD_COLUMN_ACTION, value),
    ])

    return [_mrkdwn_section(text), {"type": "actions", "elements": elements}]


def build_table_modal_view(
    table: Optional[TableData],
    is_edit: bool,
    channel_id: Optional[str] = None
) -> Dict[str, Any]:
    """
    Create/edit modal with one input per header and per cell.

    Without a table the form starts as an empty 3x3 grid.
    """
    if table is None:
        table = create_empty_table(3, 3)

    blocks: List[Dict[str, Any]] = [
        _mrkdwn_section("✏️ *Edit your table*" if is_edit else "✨ *Create a new table*"),
        _mrkdwn_section(f"📋 *Headers* ({len(table.headers)} columns)"),
    ]

    for col_index, header in enumerate(table.headers):
        placeholder = HEADER_PLACEHOLDERS[min(col_index, len(HEADER_PLACEHOLDERS) - 1)]
        element = {
            "type": "plain_text_input",
            "action_id": f"header_input_{col_index}",
            "placeholder": _plain_text(f"e.g., {placeholder}"),
        }
        if header:
            element["initial_value"] = header
        blocks.append({
            "type": "input",
            "block_id": f"header_{col_index}",
            "label": _plain_text(f"{_column_emoji(col_index)} Column {col_index + 1}"),
            "element": element,
        })

    blocks.append({"type": "divider"})

    for row_index, row in enumerate(table.rows):
        blocks.append(_mrkdwn_section(f"📝 *Row {row_index + 1}*"))

        for col_index, cell in enumerate(row):
            if col_index < len(table.headers) and table.headers[col_index]:
                column_label = table.headers[col_index]
            else:
                column_label = f"Column {col_index + 1}"
            element = {
                "type": "plain_text_input",
                "action_id": f"cell_input_{row_index}_{col_index}",
                "placeholder": _plain_text(f"Row {row_index + 1}, Col {col_index + 1}"),
            }
            if cell:
                element["initial_value"] = cell
            blocks.append({
                "type": "input",
                "block_id": f"row_{row_index}_col_{col_index}",
                "label": _plain_text(f"{_column_emoji(col_index)} {column_label}"),
                "element": element,
                "optional": True,
            })

        if row_index < len(table.rows) - 1:
            blocks.append({
                "type": "context",
                "elements": [{"type": "mrkdwn", "text": ROW_DIVIDER}],
            })

    view = {
        "type": "modal",
        "callback_id": TABLE_EDIT_MODAL if is_edit else TABLE_CREATE_MODAL,
        "title": _plain_text("Edit Table" if is_edit else "Create Table"),
        "submit": _plain_text("Update" if is_edit else "Create"),
        "close": _plain_text("Cancel"),
        "blocks": blocks,
    }
    if channel_id:
        view["private_metadata"] = json.dumps({"channel_id": channel_id})
    return view


def build_edit_choice_view(context: ActionContext) -> Dict[str, Any]:
    """Modal asking whether to edit with AI or by hand."""
    value = encode_action_value(context)
    return {
        "type": "modal",
        "callback_id": EDIT_CHOICE_MODAL,
        "title": _plain_text("Edit Table"),
        "close": _plain_text("Cancel"),
        "blocks": [
            _mrkdwn_section("How would you like to edit this table?"),
            {
                "type": "actions",
                "elements": [
                    _button("🤖 Edit with AI", EDIT_WITH_AI_ACTION, value, style="primary"),
                    _button("✏️ Edit Manually", EDIT_MANUALLY_ACTION, value),
                ],
            },
        ],
    }


def build_ai_edit_view(context: ActionContext) -> Dict[str, Any]:
    """Modal collecting a free-text edit instruction."""
    return {
        "type": "modal",
        "callback_id": AI_EDIT_MODAL,
        "title": _plain_text("AI Edit"),
        "submit": _plain_text("Apply Changes"),
        "close": _plain_text("Cancel"),
        "private_metadata": encode_action_value(context),
        "blocks": [
            _mrkdwn_section("Describe how you'd like to modify the table:"),
            {
                "type": "input",
                "block_id": AI_EDIT_BLOCK_ID,
                "label": _plain_text("Changes"),
                "element": {
                    "type": "plain_text_input",
                    "action_id": AI_EDIT_INPUT_ID,
                    "multiline": True,
                    "placeholder": _plain_text(
                        'e.g., "add a deadline column" or "remove the last row" '
                        'or "add a row for Project D, in progress, Mike"'
                    ),
                },
            },
        ],
    }


def _input_value(values: Dict[str, Any], block_id: str, action_id: str) -> str:
    return ((values.get(block_id) or {}).get(action_id) or {}).get("value") or ""


def extract_table_from_submission(values: Dict[str, Any]) -> TableData:
    """
    Read a submitted table modal's state.values back into a table.

    Blank headers are skipped (three generic headers when all are blank),
    cells are trimmed and rows with no values are dropped.
    """
    headers = []
    col_index = 0
    while f"header_{col_index}" in values:
        header = _input_value(values, f"header_{col_index}", f"header_input_{col_index}").strip()
        if header:
            headers.append(header)
        col_index += 1

    if not headers:
        headers = list(DEFAULT_HEADERS)

    rows = []
    row_index = 0
    while f"row_{row_index}_col_0" in values:
        row = [
            _input_value(values, f"row_{row_index}_col_{col}", f"cell_input_{row_index}_{col}").strip()
            for col in range(len(headers))
        ]
        if any(row):
            rows.append(row)
        row_index += 1

    return TableData(headers=headers, rows=rows)


def extract_ai_edit_command(values: Dict[str, Any]) -> str:
    """The instruction typed into the AI edit modal."""
    return _input_value(values, AI_EDIT_BLOCK_ID, AI_EDIT_INPUT_ID).strip()
