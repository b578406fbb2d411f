"""
Row Validators
==============

Turn one header-keyed CSV row into a typed ``Bank`` or ``Position``.

Every check raises ``RowValidationError`` naming the failing column. The
first failing check is reported. Validators are pure: they never touch the
record store and never assign ids or timestamps.
"""

import math
import re
from datetime import date
from typing import Any, Dict, Mapping, Optional

from ..exceptions import InvalidArgumentError, RowValidationError
from ..messages import get_message
from ..models import AssetType, Bank, Currency, Position

# Required position columns, in the order they are checked
REQUIRED_POSITION_FIELDS = [
    ('isin', 'isin_required'),
    ('ticker', 'ticker_required'),
    ('assetType', 'asset_type_required'),
    ('purchaseDate', 'purchase_date_required'),
    ('quantity', 'quantity_required'),
    ('purchasePrice', 'purchase_price_required'),
    ('currency', 'currency_required'),
]

_DECIMAL_COMMA = re.compile(r'^[+-]?\d+,\d+$')
_ISO_DATE = re.compile(r'^(\d{4})-(\d{2})-(\d{2})(?:[T ][0-9:.+\-Z]*)?$')


# =============================================================================
# Field Helpers
# =============================================================================

def _text(row: Mapping[str, str], column: str) -> str:
    """Trimmed value of a column; absent columns read as empty"""
    value = row.get(column)
    return value.strip() if value else ''


def _optional_text(row: Mapping[str, str], column: str) -> Optional[str]:
    return _text(row, column) or None


def parse_number(text: str) -> Optional[float]:
    """
    Parse a real number, or return None.

    Accepts a decimal point or a single decimal comma (``"78,25"``) as
    written by spreadsheet programs in semicolon locales. Thousands
    separators, NaN and infinities are rejected.
    """
    if text is None:
        return None
    text = text.strip()
    if not text or '_' in text:
        return None

    if _DECIMAL_COMMA.match(text):
        text = text.replace(',', '.')

    try:
        value = float(text)
    except ValueError:
        return None

    if not math.isfinite(value):
        return None
    return value


def parse_date(text: str) -> Optional[date]:
    """
    Parse a ``YYYY-MM-DD`` calendar date, or return None.

    A trailing time part (``2024-01-15T10:30:00``) is accepted and dropped.
    """
    if text is None:
        return None
    match = _ISO_DATE.match(text.strip())
    if not match:
        return None

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _require(row: Mapping[str, str], column: str, message_key: str) -> str:
    value = _text(row, column)
    if not value:
        raise RowValidationError(column, get_message(message_key))
    return value


# =============================================================================
# Bank Rows
# =============================================================================

def validate_bank_row(row: Mapping[str, str]) -> Bank:
    """
    Validate a bank row.

    Parameters
    ----------
    row : mapping
        Header-keyed raw values

    Returns
    -------
    Bank
        Bank without id or creation timestamp

    Raises
    ------
    RowValidationError
        If the name is absent or whitespace-only
    """
    name = _require(row, 'name', 'bank_name_required')
    return Bank(name=name, notes=_optional_text(row, 'notes'))


def preview_bank_row(row: Mapping[str, str]) -> Dict[str, Any]:
    """Best-effort display values for a bank row"""
    return {
        'name': _text(row, 'name'),
        'notes': _optional_text(row, 'notes'),
    }


# =============================================================================
# Position Rows
# =============================================================================

def _bounded_number(text, minimum, inclusive) -> Optional[float]:
    """Parsed number if it is above ``minimum`` (or equal, when inclusive), else None"""
    value = parse_number(text)
    if value is None:
        return None
    if value < minimum or (value == minimum and not inclusive):
        return None
    return value


def _bond_field(row, column, required_key, invalid_key, minimum, inclusive):
    text = _text(row, column)
    if not text:
        raise RowValidationError(column, get_message(required_key))

    value = _bounded_number(text, minimum, inclusive)
    if value is None:
        raise RowValidationError(column, get_message(invalid_key))
    return value


def _optional_bond_number(row, column, minimum, inclusive) -> Optional[float]:
    # Informational on stocks and ETFs: out-of-range values are dropped
    return _bounded_number(_text(row, column), minimum, inclusive)


def validate_position_row(row: Mapping[str, str], bank_id: int) -> Position:
    """
    Validate a position row for the given bank.

    Required columns are checked in document order: isin, ticker,
    assetType, purchaseDate, quantity, purchasePrice, currency. Bonds
    additionally need ``nominalValue`` (> 0) and ``couponRate`` (>= 0).

    For stocks and ETFs the bond columns are informational: unparsable or
    out-of-range values are dropped instead of failing the row, while bonds
    reject them.

    Parameters
    ----------
    row : mapping
        Header-keyed raw values
    bank_id : int
        Owning bank, supplied by the caller

    Returns
    -------
    Position
        Position with upper-cased ISIN and ticker

    Raises
    ------
    InvalidArgumentError
        If ``bank_id`` is missing
    RowValidationError
        On the first field that violates its contract
    """
    if bank_id is None:
        raise InvalidArgumentError("bank_id is required to validate position rows")

    for column, message_key in REQUIRED_POSITION_FIELDS:
        _require(row, column, message_key)

    asset_type_text = _text(row, 'assetType').lower()
    try:
        asset_type = AssetType(asset_type_text)
    except ValueError:
        raise RowValidationError('assetType', get_message('asset_type_invalid'))

    currency_text = _text(row, 'currency').upper()
    try:
        currency = Currency(currency_text)
    except ValueError:
        raise RowValidationError('currency', get_message('currency_invalid'))

    quantity = parse_number(_text(row, 'quantity'))
    if quantity is None or quantity <= 0:
        raise RowValidationError('quantity', get_message('quantity_invalid'))

    purchase_price = parse_number(_text(row, 'purchasePrice'))
    if purchase_price is None or purchase_price <= 0:
        raise RowValidationError('purchasePrice', get_message('purchase_price_invalid'))

    purchase_date = parse_date(_text(row, 'purchaseDate'))
    if purchase_date is None:
        raise RowValidationError('purchaseDate', get_message('purchase_date_invalid'))

    if asset_type == AssetType.BOND:
        nominal_value = _bond_field(
            row, 'nominalValue', 'nominal_value_required', 'nominal_value_invalid',
            minimum=0, inclusive=False
        )
        coupon_rate = _bond_field(
            row, 'couponRate', 'coupon_rate_required', 'coupon_rate_invalid',
            minimum=0, inclusive=True
        )
    else:
        nominal_value = _optional_bond_number(row, 'nominalValue', minimum=0, inclusive=False)
        coupon_rate = _optional_bond_number(row, 'couponRate', minimum=0, inclusive=True)

    return Position(
        bank_id=bank_id,
        isin=_text(row, 'isin').upper(),
        ticker=_text(row, 'ticker').upper(),
        asset_type=asset_type,
        purchase_date=purchase_date,
        quantity=quantity,
        purchase_price=purchase_price,
        currency=currency,
        notes=_optional_text(row, 'notes'),
        nominal_value=nominal_value,
        coupon_rate=coupon_rate,
    )


def preview_position_row(row: Mapping[str, str]) -> Dict[str, Any]:
    """
    Best-effort display values for a position row.

    Applies the same trimming and casing as validation. Numbers are parsed
    when possible, otherwise the raw text is kept so the user sees what
    they typed.
    """
    def number_or_text(column):
        text = _text(row, column)
        value = parse_number(text)
        return value if value is not None else (text or None)

    purchase_date_text = _text(row, 'purchaseDate')

    return {
        'isin': _text(row, 'isin').upper(),
        'ticker': _text(row, 'ticker').upper(),
        'assetType': _text(row, 'assetType').lower(),
        'purchaseDate': parse_date(purchase_date_text) or purchase_date_text or None,
        'quantity': number_or_text('quantity'),
        'purchasePrice': number_or_text('purchasePrice'),
        'currency': _text(row, 'currency').upper(),
        'notes': _optional_text(row, 'notes'),
        'nominalValue': number_or_text('nominalValue'),
        'couponRate': number_or_text('couponRate'),
    }
