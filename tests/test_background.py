#!/usr/bin/env python3
"""Tests for background task dispatch."""

import threading

from tabletalk.utils.background import run_in_background


class TestRunInBackground:
    """Test run_in_background."""

    def test_runs_with_arguments(self):
        results = []
        done = threading.Event()

        def task(a, b=None):
            results.append((a, b))
            done.set()

        thread = run_in_background(task, 1, b=2)
        assert done.wait(timeout=5)
        thread.join(timeout=5)
        assert results == [(1, 2)]

    def test_daemon_thread_named_after_task(self):
        def build_table():
            pass

        thread = run_in_background(build_table)
        thread.join(timeout=5)
        assert thread.daemon is True
        assert thread.name == "tabletalk-build_table"

    def test_exceptions_logged_not_raised(self, caplog):
        def failing():
            raise RuntimeError("boom")

        thread = run_in_background(failing)
        thread.join(timeout=5)
        assert not thread.is_alive()
        assert "Background task failing failed: boom" in caplog.text
