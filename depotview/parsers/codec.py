"""
Tabular Codec
=============

Converts between the DepotView CSV dialect and header-keyed rows.

Dialect accepted on import:
- first line is the header
- delimiter is a comma or a semicolon, detected from the header line
- fields may be quoted with ``"``; a quote inside a quoted field is doubled
- blank lines are ignored

Export always writes commas. The codec knows nothing about banks or
positions.
"""

import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Sequence

RawRow = Dict[str, str]

COMMA = ','
SEMICOLON = ';'
QUOTE = '"'
BOM = '\ufeff'

_LINE_BREAK = re.compile(r'\r?\n')


def detect_delimiter(text: str) -> str:
    """
    Detect whether a document uses commas or semicolons.

    Only the first line is examined. Delimiters inside quotes are not
    counted. Semicolon wins only with a strictly higher count.
    """
    first_line = _LINE_BREAK.split(text, maxsplit=1)[0] if text else ''
    if not first_line:
        return COMMA

    comma_count = 0
    semicolon_count = 0
    inside_quotes = False

    i = 0
    while i < len(first_line):
        char = first_line[i]

        if char == QUOTE:
            if inside_quotes and first_line[i + 1:i + 2] == QUOTE:
                i += 1  # Escaped quote
            else:
                inside_quotes = not inside_quotes
        elif not inside_quotes:
            if char == COMMA:
                comma_count += 1
            elif char == SEMICOLON:
                semicolon_count += 1
        i += 1

    return SEMICOLON if semicolon_count > comma_count else COMMA


def tokenize_line(line: str, delimiter: str = COMMA) -> List[str]:
    """
    Split one line into trimmed field values.

    Parameters
    ----------
    line : str
        A single header or data line
    delimiter : str
        ``','`` or ``';'``

    Returns
    -------
    list of str
        Unquoted, whitespace-trimmed fields
    """
    fields = []
    current = []
    inside_quotes = False

    i = 0
    while i < len(line):
        char = line[i]

        if char == QUOTE:
            if inside_quotes and line[i + 1:i + 2] == QUOTE:
                current.append(QUOTE)
                i += 1
            else:
                inside_quotes = not inside_quotes
        elif char == delimiter and not inside_quotes:
            fields.append(''.join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append(''.join(current).strip())
    return fields


def split_lines(text: str) -> List[str]:
    """Split a document into lines after stripping a BOM and outer whitespace"""
    text = text.lstrip(BOM).strip()
    if not text:
        return []
    return _LINE_BREAK.split(text)


def csv_to_rows(text: str) -> List[RawRow]:
    """
    Parse a document into header-keyed rows.

    A document with no data lines yields an empty list. Missing trailing
    values become empty strings; values beyond the header are dropped.
    """
    lines = split_lines(text)
    if len(lines) <= 1:
        return []

    delimiter = detect_delimiter(lines[0])
    headers = tokenize_line(lines[0], delimiter)

    rows = []
    for line in lines[1:]:
        if not line.strip():
            continue

        values = tokenize_line(line, delimiter)
        rows.append({
            header: values[index] if index < len(values) else ''
            for index, header in enumerate(headers)
        })

    return rows


def format_value(value: Any) -> str:
    """Render a single field value as export text"""
    if value is None:
        return ''
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def escape_field(text: str) -> str:
    """Quote a field that contains a comma or a quote"""
    if COMMA in text or QUOTE in text:
        return QUOTE + text.replace(QUOTE, QUOTE * 2) + QUOTE
    return text


def rows_to_csv(rows: Sequence[Mapping[str, Any]], headers: Sequence[str]) -> str:
    """
    Serialize rows to comma-delimited text with a fixed column order.

    An empty export still carries the header line, terminated by a newline.
    """
    header_line = COMMA.join(headers)
    if not rows:
        return header_line + '\n'

    lines = [header_line]
    for row in rows:
        lines.append(COMMA.join(
            escape_field(format_value(row.get(header))) for header in headers
        ))

    return '\n'.join(lines)
