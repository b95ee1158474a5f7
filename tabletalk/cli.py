#!/usr/bin/env python3
"""
Command-line interface for TableTalk.

Lets tables be rendered, built and edited locally with the same code the
Slack bot uses, and starts the Flask server.
"""

import argparse
import logging
import sys
from pathlib import Path

from .builders.heuristic_builder import HeuristicTableBuilder
from .builders.natural_language import NaturalLanguageTableBuilder, create_table_builder
from .tables.data_models import TableData
from .tables.formatter import format_table_as_markdown, format_table_as_plain_text
from .tables.serializer import deserialize_table, serialize_table
from .tables.text_parser import parse_table_from_text
from .utils.config import config

FORMATTERS = {
    'markdown': format_table_as_markdown,
    'plain': format_table_as_plain_text,
    'json': serialize_table,
}


def _read_source(source: str) -> str:
    if source == '-':
        return sys.stdin.read()
    path = Path(source)
    if not path.exists():
        print(f"Error: File not found: {path}")
        sys.exit(1)
    return path.read_text(encoding='utf-8')


def _print_table(table: TableData, output_format: str) -> None:
    print(FORMATTERS[output_format](table))


def cmd_render(args):
    """Parse delimited text and print the table."""
    table = parse_table_from_text(_read_source(args.source))
    _print_table(table, args.format)


def cmd_build(args):
    """Build a table from a natural-language description."""
    if args.offline:
        builder = NaturalLanguageTableBuilder(fallback=HeuristicTableBuilder())
    else:
        builder = create_table_builder()
    _print_table(builder.build_table(args.description), args.format)


def cmd_edit(args):
    """Apply a natural-language edit to a serialized table."""
    table_json = args.table
    if not table_json.lstrip().startswith('{'):
        table_json = _read_source(table_json)

    table = deserialize_table(table_json)
    if table.is_empty:
        print("Error: Could not read a table from the given JSON")
        sys.exit(1)

    modified = create_table_builder().modify_table(table, args.instruction)
    if modified == table:
        print("⚠️  Table unchanged", file=sys.stderr)
    _print_table(modified, args.format)


def cmd_serve(args):
    """Run the Flask server."""
    from .api import app

    host, port = config.get_server_address()
    debug = args.debug or config.get_env_bool('TABLETALK_DEBUG', False)
    app.run(debug=debug, host=args.host or host, port=args.port or port)


def cmd_config(args):
    """Print the configuration summary."""
    config.print_config_summary()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='tabletalk',
        description="TableTalk - simple tables for Slack",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tabletalk render tasks.csv
  printf 'Name|Status\\nA|Active' | tabletalk render - --format plain
  tabletalk build "project tracker with columns: name, status, owner"
  tabletalk edit '{"headers":["Name"],"rows":[["A"]]}' "add a status column"
  tabletalk serve --port 5001
        """
    )
    parser.add_argument('--debug-logging', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    format_kwargs = dict(
        choices=sorted(FORMATTERS), default='markdown',
        help='Output format (default: markdown)'
    )

    render_parser = subparsers.add_parser('render', help='Render delimited text as a table')
    render_parser.add_argument('source', help="Text file with comma/pipe/tab delimited rows, or '-' for stdin")
    render_parser.add_argument('--format', **format_kwargs)

    build_parser_ = subparsers.add_parser('build', help='Build a table from a description')
    build_parser_.add_argument('description', help='Natural-language description of the table')
    build_parser_.add_argument('--offline', action='store_true', help='Use the heuristic parser only')
    build_parser_.add_argument('--format', **format_kwargs)

    edit_parser = subparsers.add_parser('edit', help='Edit a serialized table with AI')
    edit_parser.add_argument('table', help="Table JSON, a file containing it, or '-' for stdin")
    edit_parser.add_argument('instruction', help='What to change, e.g. "add a deadline column"')
    edit_parser.add_argument('--format', **format_kwargs)

    serve_parser = subparsers.add_parser('serve', help='Run the Slack HTTP server')
    serve_parser.add_argument('--host', default=None, help='Bind address (default: TABLETALK_HOST)')
    serve_parser.add_argument('--port', type=int, default=None, help='Port (default: TABLETALK_PORT)')
    serve_parser.add_argument('--debug', action='store_true', help='Run Flask in debug mode (default: TABLETALK_DEBUG)')

    subparsers.add_parser('config', help='Show configuration summary')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.debug_logging else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    command_handlers = {
        'render': cmd_render,
        'build': cmd_build,
        'edit': cmd_edit,
        'serve': cmd_serve,
        'config': cmd_config,
    }

    try:
        command_handlers[args.command](args)
    except KeyboardInterrupt:
        print("\nOperation cancelled.")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
