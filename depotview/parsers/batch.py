"""
Batch Parser
============

Runs the codec and a row validator over a whole document and collects the
outcome of every data row. Row-level failures never abort the batch: each
row ends up either in ``success`` or in ``errors``, and always in
``all_rows`` for review screens.

Row numbers are 1-based and count the header, so the first data row is
row 2.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, TypeVar

import pandas as pd

from ..exceptions import InvalidArgumentError, RowValidationError
from ..messages import get_message
from ..models import Bank, Position
from .codec import csv_to_rows
from .validators import (
    preview_bank_row,
    preview_position_row,
    validate_bank_row,
    validate_position_row,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')

FIRST_DATA_ROW = 2

BANK_KIND = 'bank'
POSITION_KIND = 'position'

_RECORD_TYPES = {BANK_KIND: Bank, POSITION_KIND: Position}


@dataclass
class RowError:
    """A row that failed validation"""

    row: int
    error: str
    field: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'row': self.row, 'error': self.error, 'field': self.field}


@dataclass
class ParsedRow(Generic[T]):
    """Outcome of a single data row, success or failure"""

    row: int
    data: Optional[T] = None
    error: Optional[str] = None
    values: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ParseResult(Generic[T]):
    """
    Classified rows of one parsed document.

    ``success`` and ``errors`` drive the commit decision; ``all_rows`` keeps
    every row in document order for preview tables.
    """

    kind: str
    success: List[T] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)
    all_rows: List[ParsedRow] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def total_rows(self) -> int:
        return len(self.all_rows)

    def error_for_row(self, row: int) -> Optional[RowError]:
        for error in self.errors:
            if error.row == row:
                return error
        return None

    def to_frame(self) -> pd.DataFrame:
        """
        Build a review table with one line per data row.

        Columns: ``row``, ``status`` ('ok' or 'error'), the record columns,
        then ``error``.
        """
        records = []
        for parsed in self.all_rows:
            record = {'row': parsed.row, 'status': 'ok' if parsed.ok else 'error'}
            record.update(parsed.values)
            record['error'] = parsed.error
            records.append(record)

        frame = pd.DataFrame(records)
        if frame.empty:
            frame = pd.DataFrame(columns=['row', 'status', 'error'])
        return frame

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe form for staging a result until the user decides"""
        return {
            'kind': self.kind,
            'success': [record.to_dict() for record in self.success],
            'errors': [error.to_dict() for error in self.errors],
            'all_rows': [
                {
                    'row': parsed.row,
                    'error': parsed.error,
                    'data': parsed.data.to_dict() if parsed.data is not None else None,
                    'values': {key: _json_value(value) for key, value in parsed.values.items()},
                }
                for parsed in self.all_rows
            ],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> 'ParseResult':
        kind = payload['kind']
        if kind not in _RECORD_TYPES:
            raise InvalidArgumentError(f"Unknown parse result kind '{kind}'")
        record_type = _RECORD_TYPES[kind]

        return cls(
            kind=kind,
            success=[record_type.from_dict(item) for item in payload.get('success', [])],
            errors=[
                RowError(row=item['row'], error=item['error'], field=item.get('field'))
                for item in payload.get('errors', [])
            ],
            all_rows=[
                ParsedRow(
                    row=item['row'],
                    error=item.get('error'),
                    data=record_type.from_dict(item['data']) if item.get('data') else None,
                    values=dict(item.get('values') or {}),
                )
                for item in payload.get('all_rows', [])
            ],
        )


def _json_value(value):
    if isinstance(value, date):
        return value.isoformat()
    return value


def _parse_rows(
    csv_content: str,
    kind: str,
    validate: Callable[[Mapping[str, str]], T],
    preview: Callable[[Mapping[str, str]], Dict[str, Any]],
) -> ParseResult:
    result = ParseResult(kind=kind)

    for index, raw_row in enumerate(csv_to_rows(csv_content)):
        row_number = index + FIRST_DATA_ROW
        values = preview(raw_row)

        try:
            record = validate(raw_row)
        except RowValidationError as e:
            error = RowError(row=row_number, error=e.message, field=e.field)
        except (ValueError, TypeError) as e:
            logger.warning("Unexpected failure validating %s row %d: %s", kind, row_number, e)
            error = RowError(row=row_number, error=get_message('unknown_error'))
        else:
            result.success.append(record)
            result.all_rows.append(ParsedRow(row=row_number, data=record, values=values))
            continue

        result.errors.append(error)
        result.all_rows.append(ParsedRow(row=row_number, error=error.error, values=values))

    logger.info(
        "Parsed %d %s row(s): %d accepted, %d rejected",
        result.total_rows, kind, len(result.success), len(result.errors)
    )
    return result


def parse_bank_csv(csv_content: str) -> ParseResult[Bank]:
    """
    Parse a bank document.

    Parameters
    ----------
    csv_content : str
        Document text with a ``name`` column and optional ``notes``

    Returns
    -------
    ParseResult
        Accepted banks and row errors
    """
    return _parse_rows(csv_content, BANK_KIND, validate_bank_row, preview_bank_row)


def parse_position_csv(csv_content: str, bank_id: int) -> ParseResult[Position]:
    """
    Parse a position document for one bank.

    Parameters
    ----------
    csv_content : str
        Document text
    bank_id : int
        Bank every accepted position belongs to

    Returns
    -------
    ParseResult
        Accepted positions and row errors

    Raises
    ------
    InvalidArgumentError
        If ``bank_id`` is missing
    """
    if bank_id is None:
        raise InvalidArgumentError("bank_id is required to parse positions")

    return _parse_rows(
        csv_content,
        POSITION_KIND,
        lambda row: validate_position_row(row, bank_id),
        preview_position_row,
    )
