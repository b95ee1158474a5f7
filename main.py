#!/usr/bin/env python3
"""
TableTalk - Main Entry Point

Usage:
    python main.py render <file|-> [--format markdown|plain|json]
    python main.py build "<description>" [--offline]
    python main.py edit '<table json>' "<instruction>"
    python main.py serve [--host HOST] [--port PORT]
    python main.py config
"""

from tabletalk.cli import main


if __name__ == "__main__":
    main()
