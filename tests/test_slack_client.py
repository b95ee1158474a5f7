#!/usr/bin/env python3
"""
Tests for Slack transport helpers.
"""

import pytest
import requests
from unittest.mock import MagicMock, patch
from slack_sdk.errors import SlackApiError

from tabletalk.slack.client import (
    RESPONSE_URL_TIMEOUT,
    get_slack_client,
    post_to_response_url,
)


class TestGetSlackClient:
    """Test client creation and the auth check."""

    def test_valid_token(self):
        """Test auth.test is called and the client returned."""
        with patch('tabletalk.slack.client.WebClient') as mock_client_class:
            mock_client = mock_client_class.return_value
            mock_client.auth_test.return_value = {'user_id': 'UBOT', 'team': 'Acme'}

            client = get_slack_client(token='xoxb-test')

        mock_client_class.assert_called_once_with(token='xoxb-test')
        mock_client.auth_test.assert_called_once()
        assert client is mock_client

    def test_token_from_config(self, monkeypatch):
        """Test SLACK_BOT_TOKEN is used when no token is passed."""
        monkeypatch.setenv('SLACK_BOT_TOKEN', 'xoxb-env')
        with patch('tabletalk.slack.client.WebClient') as mock_client_class:
            get_slack_client()
        mock_client_class.assert_called_once_with(token='xoxb-env')

    def test_missing_token(self, monkeypatch):
        monkeypatch.delenv('SLACK_BOT_TOKEN', raising=False)
        with pytest.raises(ValueError, match="SLACK_BOT_TOKEN"):
            get_slack_client()

    def test_rejected_token(self):
        """Test Slack auth errors become ConnectionError."""
        with patch('tabletalk.slack.client.WebClient') as mock_client_class:
            mock_client_class.return_value.auth_test.side_effect = SlackApiError(
                "invalid_auth", MagicMock()
            )
            with pytest.raises(ConnectionError, match="SLACK_BOT_TOKEN"):
                get_slack_client(token='xoxb-bad')


class TestPostToResponseUrl:
    """Test response_url delivery."""

    def test_posts_json_with_timeout(self):
        with patch('tabletalk.slack.client.requests.post') as mock_post:
            mock_post.return_value.status_code = 200
            post_to_response_url('https://hooks.slack.com/x', {'text': 'hi'})

        mock_post.assert_called_once_with(
            'https://hooks.slack.com/x', json={'text': 'hi'}, timeout=RESPONSE_URL_TIMEOUT
        )
        mock_post.return_value.raise_for_status.assert_called_once()

    def test_http_error_raised(self):
        with patch('tabletalk.slack.client.requests.post') as mock_post:
            mock_post.return_value.raise_for_status.side_effect = requests.HTTPError("404")
            with pytest.raises(requests.HTTPError):
                post_to_response_url('https://hooks.slack.com/x', {'text': 'hi'})
