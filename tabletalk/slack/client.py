#!/usr/bin/env python3
"""
Slack transport helpers: Web API client and response_url delivery.
"""

import logging
from typing import Any, Dict, Optional

import requests
from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from ..utils.config import get_slack_bot_token

logger = logging.getLogger(__name__)

RESPONSE_URL_TIMEOUT = 10


def get_slack_client(token: Optional[str] = None) -> WebClient:
    """
    Create a Web API client and verify the token with auth.test.

    Args:
        token: Bot token; read from SLACK_BOT_TOKEN when omitted

    Returns:
        Authenticated WebClient

    Raises:
        ValueError: If no token is configured
        ConnectionError: If Slack rejects the token
    """
    if token is None:
        token = get_slack_bot_token()

    client = WebClient(token=token)
    try:
        response = client.auth_test()
    except SlackApiError as e:
        raise ConnectionError(
            f"Failed to connect to Slack. Check that your SLACK_BOT_TOKEN is valid. Error: {e}"
        ) from e

    logger.info(f"Connected to Slack as {response.get('user_id')} in team {response.get('team')}")
    return client


def post_to_response_url(response_url: str, payload: Dict[str, Any]) -> None:
    """
    Post a message payload to a slash command or interaction response_url.

    Raises:
        requests.HTTPError: If Slack answers with a non-2xx status
        requests.RequestException: On network failure
    """
    response = requests.post(response_url, json=payload, timeout=RESPONSE_URL_TIMEOUT)
    response.raise_for_status()
    logger.debug(f"response_url accepted message ({response.status_code})")
