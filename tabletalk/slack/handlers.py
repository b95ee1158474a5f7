#!/usr/bin/env python3
"""
Slack command, modal and button handlers for TableTalk.

The handler owns no state beyond its collaborators; every table travels
inside the Slack payloads themselves (button values and modal metadata).
"""

import logging
import traceback
from typing import Any, Callable, Dict, Optional

import requests
from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from ..builders.base_builder import TableBuilder
from ..tables.data_models import ActionContext, TableData
from ..tables import operations
from ..utils.background import run_in_background
from . import blocks
from .client import post_to_response_url

logger = logging.getLogger(__name__)

TABLE_COMMANDS = ("/table", "/table-edit")

CREATE_FAILED_MESSAGE = (
    "❌ Sorry, I couldn't create that table. Please try `/table` to use the manual form."
)
EDIT_FAILED_MESSAGE = "❌ Sorry, I couldn't apply those changes. Please try editing manually."
NOT_CREATOR_MESSAGE = "⚠️ Only the table creator can edit this table."
POSTED_MESSAGE = "✅ Table posted to channel!"
POST_FAILED_MESSAGE = "❌ Failed to post table to channel. Please try again."
PREVIEW_INTRO = "✅ *Table updated* (preview - only you can see this):"


class TableTalkHandler:
    """
    Routes Slack events to the table model and the natural-language builder.

    Responsibilities:
    - Slash commands: AI creation in the background or the manual modal
    - Modal submissions: manual tables and AI edit requests
    - Button actions: edit, add row/column, post preview to channel
    """

    def __init__(
        self,
        slack: WebClient,
        table_builder: TableBuilder,
        dispatch: Callable[..., Any] = run_in_background,
        post_json: Callable[[str, Dict[str, Any]], None] = post_to_response_url
    ):
        """
        Initialize handler.

        Args:
            slack: Authenticated Slack Web API client
            table_builder: Builder used for natural-language requests
            dispatch: Runs slow work without blocking the Slack acknowledgement
            post_json: Delivers payloads to a response_url
        """
        self.slack = slack
        self.table_builder = table_builder
        self.dispatch = dispatch
        self.post_json = post_json

    # ------------------------------------------------------------------
    # Slash commands
    # ------------------------------------------------------------------

    def handle_table_command(self, payload: Dict[str, Any]) -> None:
        """
        Handle /table and /table-edit.

        With text the request goes to the builder in the background;
        without text the manual creation modal is opened.
        """
        text = (payload.get("text") or "").strip()
        user_id = payload.get("user_id")
        channel_id = payload.get("channel_id")
        response_url = payload.get("response_url")

        logger.info(f"Table command from {user_id} in {channel_id}: '{text[:100]}'")

        if text:
            self.dispatch(self.process_table_with_ai, channel_id, text, user_id, response_url)
            return

        self.open_table_modal(payload.get("trigger_id"), None, channel_id)

    def process_table_with_ai(
        self,
        channel_id: str,
        description: str,
        user_id: str,
        response_url: Optional[str] = None
    ) -> None:
        """Build a table from description and post it back to Slack."""
        try:
            table = self.table_builder.build_table(description)
            logger.info(f"Built table with {table.column_count} columns, {table.row_count} rows")

            if response_url:
                context = ActionContext(table=table, user_id=user_id, channel_id=channel_id)
                self.post_json(response_url, {
                    "response_type": "in_channel",
                    "text": "Table created",
                    "blocks": blocks.build_table_message_blocks(table, context),
                })
                logger.info("Table posted via response_url")
            else:
                self.post_table(channel_id, table, user_id)
                logger.info(f"Table posted directly to {channel_id}")

        except Exception as e:
            logger.error(f"AI table creation failed: {e}")
            logger.error(traceback.format_exc())
            if response_url:
                self._send_response_url_text(response_url, CREATE_FAILED_MESSAGE)

    # ------------------------------------------------------------------
    # Modals
    # ------------------------------------------------------------------

    def open_table_modal(
        self,
        trigger_id: str,
        table: Optional[TableData],
        channel_id: Optional[str] = None
    ) -> None:
        """Open the create modal (table is None) or the edit modal."""
        self.slack.views_open(
            trigger_id=trigger_id,
            view=blocks.build_table_modal_view(table, table is not None, channel_id),
        )

    def handle_modal_submission(self, payload: Dict[str, Any]) -> None:
        """Handle a view_submission for any TableTalk modal."""
        view = payload.get("view") or {}
        values = (view.get("state") or {}).get("values") or {}
        callback_id = view.get("callback_id")
        user_id = (payload.get("user") or {}).get("id")

        logger.info(f"Modal submission {callback_id} from {user_id}")

        if callback_id == blocks.AI_EDIT_MODAL:
            context = blocks.decode_action_value(view.get("private_metadata"))
            command = blocks.extract_ai_edit_command(values)
            if not command:
                logger.info("Empty AI edit request ignored")
                return

            response_urls = payload.get("response_urls") or []
            response_url = response_urls[0].get("response_url") if response_urls else None

            self.dispatch(
                self.process_ai_edit,
                context.channel_id,
                context.table,
                command,
                context.user_id or user_id,
                response_url,
                context.message_ts,
            )
            return

        table = blocks.extract_table_from_submission(values)
        metadata = blocks.decode_action_value(view.get("private_metadata"))
        # Without a channel the table goes to the user's DM
        channel_id = metadata.channel_id or user_id
        self.post_table(channel_id, table, user_id)

    def process_ai_edit(
        self,
        channel_id: Optional[str],
        original_table: TableData,
        command: str,
        user_id: Optional[str],
        response_url: Optional[str] = None,
        message_ts: Optional[str] = None
    ) -> None:
        """
        Apply a natural-language edit and show the result.

        The preview is ephemeral when channel and user are known, otherwise
        it goes to response_url, and as a last resort to the channel.
        """
        try:
            modified = self.table_builder.modify_table(original_table, command)
            context = ActionContext(
                table=modified,
                user_id=user_id,
                channel_id=channel_id,
                message_ts=message_ts,
            )

            if channel_id and user_id:
                self.slack.chat_postEphemeral(
                    channel=channel_id,
                    user=user_id,
                    text="✅ Table updated (preview)",
                    blocks=blocks.build_table_message_blocks(
                        modified, context, intro=PREVIEW_INTRO, include_post_button=True
                    ),
                )
                logger.info(f"Ephemeral preview posted to {user_id} in {channel_id}")
            elif response_url:
                self.post_json(response_url, {
                    "response_type": "in_channel",
                    "text": "Table updated",
                    "replace_original": False,
                    "blocks": blocks.build_table_message_blocks(modified, context),
                })
                logger.info("Edited table posted via response_url")
            elif channel_id:
                self.post_table(channel_id, modified, user_id)
            else:
                raise ValueError("No channel ID, user ID, or response URL available")

        except Exception as e:
            logger.error(f"AI edit failed: {e}")
            logger.error(traceback.format_exc())
            if channel_id and user_id:
                try:
                    self.slack.chat_postEphemeral(
                        channel=channel_id, user=user_id, text=EDIT_FAILED_MESSAGE
                    )
                except SlackApiError as post_error:
                    logger.error(f"Failed to post error message: {post_error}")
            elif response_url:
                self._send_response_url_text(response_url, EDIT_FAILED_MESSAGE)

    # ------------------------------------------------------------------
    # Buttons
    # ------------------------------------------------------------------

    def handle_table_action(self, payload: Dict[str, Any]) -> None:
        """Handle block_actions from table messages and the edit-choice modal."""
        actions = payload.get("actions") or []
        if not actions:
            logger.warning("block_actions payload without actions")
            return

        action = actions[0]
        action_id = action.get("action_id")
        trigger_id = payload.get("trigger_id")
        user_id = (payload.get("user") or {}).get("id")
        message = payload.get("message") or {}
        payload_channel_id = (payload.get("channel") or {}).get("id")

        stored = blocks.decode_action_value(action.get("value"))
        table = stored.table

        logger.info(f"Table action {action_id} from {user_id}")

        if stored.user_id and user_id != stored.user_id:
            self._reject_non_creator(payload_channel_id or stored.channel_id, user_id)
            return

        context = ActionContext(
            table=table,
            user_id=stored.user_id,
            channel_id=stored.channel_id or payload_channel_id or message.get("channel"),
            message_ts=stored.message_ts or message.get("ts"),
        )

        if action_id == blocks.EDIT_TABLE_ACTION:
            self.slack.views_open(trigger_id=trigger_id, view=blocks.build_edit_choice_view(context))

        elif action_id == blocks.EDIT_WITH_AI_ACTION:
            self.slack.views_push(trigger_id=trigger_id, view=blocks.build_ai_edit_view(context))

        elif action_id == blocks.EDIT_MANUALLY_ACTION:
            self.slack.views_push(
                trigger_id=trigger_id,
                view=blocks.build_table_modal_view(table, True, context.channel_id),
            )

        elif action_id == blocks.ADD_ROW_ACTION:
            self.open_table_modal(trigger_id, operations.add_row(table), context.channel_id)

        elif action_id == blocks.ADD_COLUMN_ACTION:
            new_header = f"Col {len(table.headers) + 1}"
            self.open_table_modal(
                trigger_id, operations.add_column(table, new_header), context.channel_id
            )

        elif action_id == blocks.POST_TO_CHANNEL_ACTION:
            self._post_preview_to_channel(context, user_id, payload_channel_id)

        else:
            logger.warning(f"Unknown action_id: {action_id}")

    def _reject_non_creator(self, channel_id: Optional[str], user_id: Optional[str]) -> None:
        logger.info(f"User {user_id} is not the table creator, action refused")
        if not channel_id:
            logger.warning("Cannot notify non-creator without a channel")
            return
        try:
            self.slack.chat_postEphemeral(channel=channel_id, user=user_id, text=NOT_CREATOR_MESSAGE)
        except SlackApiError as e:
            logger.error(f"Failed to notify non-creator: {e}")

    def _post_preview_to_channel(
        self,
        context: ActionContext,
        user_id: str,
        payload_channel_id: Optional[str]
    ) -> None:
        channel_id = context.channel_id or payload_channel_id
        if not channel_id:
            logger.warning("post_to_channel without a channel")
            return
        try:
            self.post_table(channel_id, context.table, context.user_id)
            self.slack.chat_postEphemeral(channel=channel_id, user=user_id, text=POSTED_MESSAGE)
        except SlackApiError as e:
            logger.error(f"Error posting to channel: {e}")
            self.slack.chat_postEphemeral(channel=channel_id, user=user_id, text=POST_FAILED_MESSAGE)

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    def post_table(self, channel_id: str, table: TableData, user_id: Optional[str]) -> Any:
        """Post a formatted table with its action buttons."""
        context = ActionContext(table=table, user_id=user_id, channel_id=channel_id)
        return self.slack.chat_postMessage(
            channel=channel_id,
            text="Table created",
            blocks=blocks.build_table_message_blocks(table, context),
        )

    def _send_response_url_text(self, response_url: str, text: str) -> None:
        try:
            self.post_json(response_url, {"text": text})
        except requests.RequestException as e:
            logger.error(f"Failed to deliver message to response_url: {e}")
