#!/usr/bin/env python3
"""
Fire-and-forget execution for work that must outlive a Slack request.

Slack expects an acknowledgement within three seconds, so language-model
round trips run on a daemon thread and report back through response_url
or the Web API.
"""

import logging
import traceback
from threading import Thread
from typing import Any, Callable

logger = logging.getLogger(__name__)


def run_in_background(func: Callable[..., Any], *args, **kwargs) -> Thread:
    """
    Run func(*args, **kwargs) on a daemon thread.

    Exceptions escaping func are logged, never re-raised.

    Returns:
        The started thread
    """
    name = getattr(func, "__name__", "task")

    def _runner():
        try:
            func(*args, **kwargs)
        except Exception as e:
            logger.error(f"Background task {name} failed: {e}")
            logger.error(traceback.format_exc())

    thread = Thread(target=_runner, name=f"tabletalk-{name}", daemon=True)
    thread.start()
    logger.debug(f"Dispatched background task {name}")
    return thread
