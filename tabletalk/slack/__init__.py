"""
Slack integration for TableTalk: Web API client, Block Kit payloads and
command/interaction handlers.
"""

from .client import get_slack_client, post_to_response_url
from .handlers import TABLE_COMMANDS, TableTalkHandler

__all__ = [
    "TableTalkHandler",
    "TABLE_COMMANDS",
    "get_slack_client",
    "post_to_response_url",
]
