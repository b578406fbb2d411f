"""
DepotView Parsers Module
========================

CSV codec, row validators and batch parsing for bank and position imports.
"""

from .codec import (
    RawRow,
    csv_to_rows,
    detect_delimiter,
    format_value,
    rows_to_csv,
    tokenize_line,
)
from .validators import (
    parse_date,
    parse_number,
    preview_bank_row,
    preview_position_row,
    validate_bank_row,
    validate_position_row,
)
from .batch import (
    ParsedRow,
    ParseResult,
    RowError,
    parse_bank_csv,
    parse_position_csv,
)

__all__ = [
    'RawRow',
    'csv_to_rows',
    'detect_delimiter',
    'format_value',
    'rows_to_csv',
    'tokenize_line',
    'parse_date',
    'parse_number',
    'preview_bank_row',
    'preview_position_row',
    'validate_bank_row',
    'validate_position_row',
    'ParsedRow',
    'ParseResult',
    'RowError',
    'parse_bank_csv',
    'parse_position_csv',
]
