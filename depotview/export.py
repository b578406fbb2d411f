"""
Export Assembler
================

Maps banks and positions to flat rows with a fixed column order and
serializes them with the tabular codec. Also provides the example
documents offered to users as import templates.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Optional

from .messages import get_message
from .models import Bank, Position
from .parsers.codec import rows_to_csv

BANK_CSV_HEADERS = ['name', 'notes']

POSITION_CSV_HEADERS = [
    'isin',
    'ticker',
    'assetType',
    'purchaseDate',
    'quantity',
    'purchasePrice',
    'currency',
    'notes',
    'nominalValue',
    'couponRate',
]

CSV_MIME_TYPE = 'text/csv'

# Seed rows for the downloadable templates
EXAMPLE_BANKS = [
    {
        'name': 'Example Bank AG',
        'notes': 'Main depot',
    },
    {
        'name': 'Broker XYZ',
        'notes': 'ETF savings plans',
    },
]

EXAMPLE_POSITIONS = [
    {
        'isin': 'US0378331005',
        'ticker': 'AAPL',
        'assetType': 'stock',
        'purchaseDate': '2024-01-15',
        'quantity': '10',
        'purchasePrice': '185.50',
        'currency': 'USD',
        'notes': 'Tech stock',
        'nominalValue': '',
        'couponRate': '',
    },
    {
        'isin': 'IE00B4L5Y983',
        'ticker': 'IWDA',
        'assetType': 'etf',
        'purchaseDate': '2024-02-01',
        'quantity': '50',
        'purchasePrice': '78.25',
        'currency': 'EUR',
        'notes': 'MSCI World ETF',
        'nominalValue': '',
        'couponRate': '',
    },
    {
        'isin': 'DE0001102580',
        'ticker': 'DBR',
        'assetType': 'bond',
        'purchaseDate': '2024-03-12',
        'quantity': '1',
        'purchasePrice': '98.40',
        'currency': 'EUR',
        'notes': 'German federal bond',
        'nominalValue': '10000',
        'couponRate': '2.5',
    },
]

_UNSAFE_FILENAME_CHARS = re.compile(r'[^a-zA-Z0-9]')
_LINE_BREAKS = re.compile(r'\r\n|\r|\n')


@dataclass
class ExportDocument:
    """Ready-to-download CSV text with its file name"""

    content: str
    filename: str
    mime_type: str = CSV_MIME_TYPE


def sanitize_label(label: str) -> str:
    """Replace every character outside [a-zA-Z0-9] with '-'"""
    return _UNSAFE_FILENAME_CHARS.sub('-', label)


def single_line(text: Optional[str]) -> str:
    """Replace line breaks with spaces; the CSV dialect holds one record per line"""
    return _LINE_BREAKS.sub(' ', text) if text else ''


def _date_stamp(today: Optional[date]) -> str:
    return (today or date.today()).isoformat()


def bank_to_row(bank: Bank) -> Dict[str, object]:
    return {
        'name': single_line(bank.name),
        'notes': single_line(bank.notes),
    }


def position_to_row(position: Position) -> Dict[str, object]:
    return {
        'isin': single_line(position.isin),
        'ticker': single_line(position.ticker),
        'assetType': position.asset_type,
        'purchaseDate': position.purchase_date,
        'quantity': position.quantity,
        'purchasePrice': position.purchase_price,
        'currency': position.currency,
        'notes': single_line(position.notes),
        'nominalValue': '' if position.nominal_value is None else position.nominal_value,
        'couponRate': '' if position.coupon_rate is None else position.coupon_rate,
    }


def banks_to_csv(banks: Iterable[Bank]) -> str:
    return rows_to_csv([bank_to_row(bank) for bank in banks], BANK_CSV_HEADERS)


def positions_to_csv(positions: Iterable[Position]) -> str:
    return rows_to_csv([position_to_row(pos) for pos in positions], POSITION_CSV_HEADERS)


def export_banks(banks: Iterable[Bank], today: Optional[date] = None) -> ExportDocument:
    """
    Export banks to a CSV document.

    Parameters
    ----------
    banks : iterable of Bank
        Banks to export; an empty iterable yields a header-only document
    today : date, optional
        Date used in the file name (defaults to today)

    Returns
    -------
    ExportDocument
        Content and a file name like ``banks-export-2024-05-01.csv``
    """
    stem = get_message('bank_file_stem')
    return ExportDocument(
        content=banks_to_csv(banks),
        filename=f"{stem}-export-{_date_stamp(today)}.csv",
    )


def export_positions(
    positions: Iterable[Position],
    bank_name: str,
    today: Optional[date] = None
) -> ExportDocument:
    """
    Export the positions of one bank to a CSV document.

    Parameters
    ----------
    positions : iterable of Position
        Positions to export
    bank_name : str
        Name of the owning bank; sanitized into the file name
    today : date, optional
        Date used in the file name (defaults to today)

    Returns
    -------
    ExportDocument
        Content and a file name like ``positions-My-Bank-2024-05-01.csv``
    """
    stem = get_message('position_file_stem')
    return ExportDocument(
        content=positions_to_csv(positions),
        filename=f"{stem}-{sanitize_label(bank_name)}-{_date_stamp(today)}.csv",
    )


def example_bank_csv() -> str:
    return rows_to_csv(EXAMPLE_BANKS, BANK_CSV_HEADERS)


def example_position_csv() -> str:
    return rows_to_csv(EXAMPLE_POSITIONS, POSITION_CSV_HEADERS)


def bank_template() -> ExportDocument:
    """Example bank document for users to fill in"""
    return ExportDocument(
        content=example_bank_csv(),
        filename=f"{get_message('bank_file_stem')}-{get_message('example_suffix')}.csv",
    )


def position_template() -> ExportDocument:
    """Example position document for users to fill in"""
    return ExportDocument(
        content=example_position_csv(),
        filename=f"{get_message('position_file_stem')}-{get_message('example_suffix')}.csv",
    )
