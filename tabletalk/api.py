#!/usr/bin/env python3
"""
Flask application exposing the TableTalk Slack endpoints.

Slash commands and interactive payloads are verified with the Slack
signing secret, acknowledged quickly, and handed to TableTalkHandler.
"""

from flask import Flask, request, jsonify
import json
import sys
import logging
import traceback
from datetime import datetime, timezone

from slack_sdk.signature import SignatureVerifier

from tabletalk import __version__
from tabletalk.builders.natural_language import create_table_builder
from tabletalk.slack.client import get_slack_client
from tabletalk.slack.handlers import TABLE_COMMANDS, TableTalkHandler
from tabletalk.utils.config import get_env_string, get_slack_signing_secret

# Create Flask app
app = Flask(__name__)

# Configure logging
log_handlers = [logging.StreamHandler(sys.stdout)]
log_file = get_env_string('TABLETALK_LOG_FILE')
if log_file:
    log_handlers.append(logging.FileHandler(log_file))

logging.basicConfig(
    level=get_env_string('LOG_LEVEL', 'INFO').upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=log_handlers
)
logger = logging.getLogger(__name__)

logger.info("=" * 80)
logger.info(f"TableTalk API starting (version {__version__})")
logger.info("=" * 80)

# Initialize handler lazily (Slack auth check happens on first request)
handler = None


def get_handler() -> TableTalkHandler:
    """Get or initialize the Slack handler."""
    global handler
    if handler is None:
        try:
            logger.info("Initializing TableTalk handler...")
            handler = TableTalkHandler(get_slack_client(), create_table_builder())
            logger.info("✅ TableTalk handler initialized successfully")
        except Exception as e:
            logger.error(f"❌ Failed to initialize TableTalk handler: {e}")
            logger.error(traceback.format_exc())
            raise
    return handler


def timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


def verify_slack_request() -> bool:
    """
    Check the request signature against SLACK_SIGNING_SECRET.

    Verification is skipped when no secret is configured.
    """
    signing_secret = get_slack_signing_secret()
    if not signing_secret:
        logger.debug("SLACK_SIGNING_SECRET not set, skipping signature verification")
        return True

    verifier = SignatureVerifier(signing_secret)
    return verifier.is_valid_request(request.get_data(), request.headers)


def unauthorized():
    logger.warning(f"Invalid Slack signature from {request.remote_addr}")
    return jsonify({'error': 'Invalid signature', 'timestamp': timestamp()}), 401


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint (no auth required)."""
    return jsonify({
        'status': 'ok',
        'service': 'tabletalk',
        'version': __version__,
        'timestamp': timestamp()
    }), 200


@app.route('/slack/commands', methods=['POST'])
def slack_commands():
    """
    Slash command endpoint for /table and /table-edit.

    Returns:
        HTTP 200: Empty acknowledgement
        HTTP 400: Unknown command
        HTTP 401: Invalid signature
        HTTP 500: Internal error
    """
    if not verify_slack_request():
        return unauthorized()

    command = request.form.get('command')
    logger.info(f"Slack command {command} from {request.form.get('user_id')}")

    if command not in TABLE_COMMANDS:
        logger.warning(f"Unknown command: {command}")
        return jsonify({'error': 'Unknown command'}), 400

    try:
        get_handler().handle_table_command(request.form.to_dict())
    except Exception as e:
        logger.error(f"Slack command failed: {e}")
        logger.error(traceback.format_exc())
        return jsonify({'error': 'Internal error'}), 500

    # Respond immediately, results arrive via response_url
    return '', 200


@app.route('/slack/interactions', methods=['POST'])
def slack_interactions():
    """
    Interactive components endpoint (modal submissions and buttons).

    Returns:
        HTTP 200: {"response_action": "clear"} for submissions, empty for actions
        HTTP 400: Missing/invalid payload or unknown interaction type
        HTTP 401: Invalid signature
        HTTP 500: Internal error
    """
    if not verify_slack_request():
        return unauthorized()

    try:
        payload = json.loads(request.form.get('payload', ''))
    except ValueError as e:
        logger.warning(f"Invalid interaction payload: {e}")
        return jsonify({'error': 'Invalid payload'}), 400
    if not isinstance(payload, dict):
        return jsonify({'error': 'Invalid payload'}), 400

    interaction_type = payload.get('type')
    callback_id = (payload.get('view') or {}).get('callback_id')
    logger.info(f"Slack interaction {interaction_type} (callback_id={callback_id})")

    try:
        if interaction_type == 'view_submission':
            get_handler().handle_modal_submission(payload)
            # Close every modal in the stack
            return jsonify({'response_action': 'clear'}), 200

        if interaction_type == 'block_actions':
            get_handler().handle_table_action(payload)
            return '', 200

    except Exception as e:
        logger.error(f"Slack interaction failed: {e}")
        logger.error(traceback.format_exc())
        return jsonify({'error': 'Internal error'}), 500

    logger.warning(f"Unknown interaction type: {interaction_type}")
    return jsonify({'error': 'Unknown interaction type'}), 400


@app.errorhandler(404)
def not_found(error):
    """Handle 404 errors."""
    logger.warning(f"404 Not Found: {request.path} from {request.remote_addr}")
    return jsonify({
        'error': 'Endpoint not found',
        'path': request.path,
        'timestamp': timestamp()
    }), 404


@app.errorhandler(500)
def internal_error(error):
    """Handle 500 errors."""
    logger.error(f"500 Internal Server Error: {error}")
    logger.error(traceback.format_exc())
    return jsonify({
        'error': 'Internal server error',
        'message': 'An unexpected error occurred',
        'timestamp': timestamp()
    }), 500


@app.before_request
def log_request():
    """Log incoming requests."""
    logger.debug(f"{request.method} {request.path} from {request.remote_addr}")


@app.after_request
def log_response(response):
    """Log response status."""
    logger.debug(f"Response: {response.status_code}")
    return response


if __name__ == '__main__':
    # For local development only
    app.run(debug=True, host='0.0.0.0', port=5001)
