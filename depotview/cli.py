#!/usr/bin/env python3
"""
DepotView Command-Line Interface (CLI)
======================================

Check, convert and template the CSV files used to import banks and
positions:
- check-banks / check-positions: validate a file and list every row error
- convert-positions: re-export a positions file in the canonical dialect
- template: write an example file
- dashboard: launch the streamlit import review dashboard
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import LOG_LEVELS, get_config
from .exceptions import DepotViewError
from .export import bank_template, export_positions, position_template
from .files import read_upload, save_download
from .parsers.batch import ParseResult, parse_bank_csv, parse_position_csv

# Positions are checked outside any store, so they need a placeholder owner
DEFAULT_CHECK_BANK_ID = 1


def print_banner():
    """Print DepotView banner."""
    print("=" * 60)
    print(f"  DepotView v{__version__} - Portfolio CSV Import & Export")
    print("=" * 60)


def _load(path: str) -> str:
    file_path = Path(path)
    if not file_path.exists():
        raise DepotViewError(f"File not found: {path}")
    print(f"📂 Loading: {path}")
    return read_upload(file_path)


def print_result(result: ParseResult) -> int:
    """Print a parse summary, every error and a preview table; returns the exit code"""
    print(f"\n📊 {result.total_rows} row(s): "
          f"{len(result.success)} valid, {len(result.errors)} with errors")

    if result.has_errors:
        print("\n❌ Errors:")
        for error in result.errors:
            print(f"   Row {error.row}: {error.error}")

    if result.total_rows:
        max_rows = get_config().get_max_preview_rows()
        print("\n📋 Preview:")
        print(result.to_frame().head(max_rows).to_string(index=False))
        if result.total_rows > max_rows:
            print(f"   ... {result.total_rows - max_rows} more row(s)")

    if result.has_errors:
        print("\n💡 Fix the rows above before importing.")
        return 1

    print("\n✅ File is ready to import.")
    return 0


def check_banks(args) -> int:
    """Validate a bank CSV file."""
    print("🏦 Checking bank file...")
    print("-" * 60)
    return print_result(parse_bank_csv(_load(args.file)))


def check_positions(args) -> int:
    """Validate a position CSV file."""
    print("📈 Checking position file...")
    print("-" * 60)
    return print_result(parse_position_csv(_load(args.file), args.bank_id))


def convert_positions(args) -> int:
    """Re-export a position file as a canonical comma-delimited document."""
    print("🔄 Converting position file...")
    print("-" * 60)

    result = parse_position_csv(_load(args.file), DEFAULT_CHECK_BANK_ID)
    if result.has_errors:
        return print_result(result)

    document = export_positions(result.success, args.bank_name)
    path = save_download(document, args.output)
    print(f"\n✅ {len(result.success)} position(s) written to: {path}")
    return 0


def write_template(args) -> int:
    """Write an example CSV file."""
    document = bank_template() if args.kind == 'banks' else position_template()
    path = save_download(document, args.output)
    print(f"✅ Template written to: {path}")
    return 0


def launch_dashboard(args) -> int:
    """Launch the import review dashboard."""
    print("🚀 Launching Import Dashboard...")
    print("-" * 60)

    import subprocess

    app_path = Path(__file__).resolve().parent / 'import_app.py'
    cmd = ['streamlit', 'run', str(app_path)]

    if args.port:
        cmd.extend(['--server.port', str(args.port)])

    if args.host:
        cmd.extend(['--server.address', args.host])

    print(f"📊 Dashboard URL: http://{args.host or 'localhost'}:{args.port or 8501}")
    print("💡 Press Ctrl+C to stop the server")
    print("-" * 60)

    try:
        completed = subprocess.run(cmd)
    except KeyboardInterrupt:
        print("\n\n✅ Dashboard stopped.")
        return 0
    except FileNotFoundError:
        print("❌ Error: streamlit executable not found")
        print("\n💡 Make sure Streamlit is installed: pip install streamlit")
        return 1
    return completed.returncode


def show_info(args) -> int:
    """Show version and configuration."""
    print_banner()
    print()
    get_config().print_summary()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='depotview',
        description='DepotView - validate, convert and template portfolio CSV files',
    )
    parser.add_argument('--version', action='version', version=f'depotview {__version__}')
    parser.add_argument(
        '--log-level',
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help='Logging level (default: from DEPOTVIEW_LOG_LEVEL or WARNING)'
    )

    subparsers = parser.add_subparsers(title='commands', dest='command')

    banks_parser = subparsers.add_parser(
        'check-banks',
        help='Validate a bank CSV file',
        description='Parse a bank CSV file and list every row error'
    )
    banks_parser.add_argument('file', help='Path to the bank CSV file')
    banks_parser.set_defaults(func=check_banks)

    positions_parser = subparsers.add_parser(
        'check-positions',
        help='Validate a position CSV file',
        description='Parse a position CSV file and list every row error'
    )
    positions_parser.add_argument('file', help='Path to the position CSV file')
    positions_parser.add_argument(
        '--bank-id',
        type=int,
        default=DEFAULT_CHECK_BANK_ID,
        help='Bank id assigned to the parsed positions (default: 1)'
    )
    positions_parser.set_defaults(func=check_positions)

    convert_parser = subparsers.add_parser(
        'convert-positions',
        help='Re-export a position CSV file in the canonical dialect',
        description='Parse a comma- or semicolon-delimited file and write it comma-delimited'
    )
    convert_parser.add_argument('file', help='Path to the position CSV file')
    convert_parser.add_argument(
        '--bank-name',
        type=str,
        required=True,
        help='Bank name used in the output file name (required)'
    )
    convert_parser.add_argument(
        '--output',
        type=str,
        default='.',
        help='Output directory (default: current directory)'
    )
    convert_parser.set_defaults(func=convert_positions)

    template_parser = subparsers.add_parser(
        'template',
        help='Write an example CSV file',
        description='Write the example bank or position CSV file'
    )
    template_parser.add_argument('kind', choices=['banks', 'positions'])
    template_parser.add_argument(
        '--output',
        type=str,
        default='.',
        help='Output directory (default: current directory)'
    )
    template_parser.set_defaults(func=write_template)

    dashboard_parser = subparsers.add_parser(
        'dashboard',
        help='Launch the import review dashboard',
        description='Launch the streamlit dashboard for previewing and committing imports'
    )
    dashboard_parser.add_argument(
        '--port',
        type=int,
        default=8501,
        help='Port number for the dashboard (default: 8501)'
    )
    dashboard_parser.add_argument(
        '--host',
        type=str,
        default='localhost',
        help='Host address (default: localhost, use 0.0.0.0 for all interfaces)'
    )
    dashboard_parser.set_defaults(func=launch_dashboard)

    info_parser = subparsers.add_parser(
        'info',
        help='Show DepotView information',
        description='Display version and configuration'
    )
    info_parser.set_defaults(func=show_info)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    log_level = args.log_level or get_config().get_log_level()
    if log_level not in LOG_LEVELS:
        print(f"⚠️  Unknown log level '{log_level}', using WARNING")
        log_level = 'WARNING'

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    if not hasattr(args, 'func'):
        print_banner()
        parser.print_help()
        print("\n💡 Quick start: depotview template positions")
        return 0

    try:
        return args.func(args)
    except DepotViewError as e:
        print(f"❌ Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
