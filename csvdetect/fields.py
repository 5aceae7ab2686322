"""
Fault tolerant splitting of CSV lines into fields.

Lines are split naively at the separator. Every field is then classified
by its quote signature, the number of consecutive quotes at its left and
right end:

    (0, 0)                               unquoted
    (1, 1) (3, 1) (1, 3) (3, 3) (2, 2)   quoted, outer quotes are removed
    (0, n)                               quotes inside unquoted text
    (2, 0)                               starts with an escaped quote
    (n, 0)                               opens a quote that the naive split
                                         cut off, needs repairing

Repairs:
- the last field of a line opening a quote is continued on the following
  lines (newlines inside a quoted value), consumed lines become empty so
  row indices still match line indices
- any other field opening a quote is joined with the following fields of
  the same line up to its closing field (separator inside a quoted value)

Every other signature, and an opened quote without closing counterpart,
raises FieldParseError.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from . import rules
from .errors import FieldParseError

logger = logging.getLogger(__name__)

_QUOTED_SIGNATURES = {
    (1, 1),  # quoted field
    (3, 1),  # quoted field beginning with escaped quote
    (1, 3),  # quoted field ending with escaped quote
    (3, 3),  # quoted field with escaped quotes at both ends
    (2, 2),  # escaped quotes at both ends, quoted or not
}
_OPENING_QUOTES = (1, 3)
_CLOSING_LEFT_QUOTES = (0, 2)
_CLOSING_RIGHT_QUOTES = (1, 3)


def count_quotes_left(field: str) -> int:
    return len(field) - len(field.lstrip(rules.QUOTE))


def count_quotes_right(field: str) -> int:
    return len(field) - len(field.rstrip(rules.QUOTE))


def quote_signature(field: str) -> tuple[int, int]:
    """
    Count consecutive quotes at both ends of field.

    A field made only of quotes is split between both sides,
    the left side getting the extra quote of an odd count:

    >>> quote_signature('"value"')
    (1, 1)
    >>> quote_signature('"' * 3)
    (2, 1)
    """
    left = count_quotes_left(field)
    right = count_quotes_right(field)
    if left == len(field):
        left = (len(field) + 1) // 2
        right = len(field) - left
    return left, right


def escape_quotes(value: str) -> str:
    """Double every quote as RFC 4180 requires inside quoted fields."""
    return value.replace(rules.QUOTE, rules.ESCAPED_QUOTE)


def unescape_quotes(value: str) -> str:
    return value.replace(rules.ESCAPED_QUOTE, rules.QUOTE)


def _closes_quote(field: str, open_left: int) -> bool:
    if open_left not in _OPENING_QUOTES:
        return False
    # A lone quote closes a value that ended with the separator
    if field == rules.QUOTE:
        return True
    if len(field) < 2:
        return False
    left, right = quote_signature(field)
    return left in _CLOSING_LEFT_QUOTES and right in _CLOSING_RIGHT_QUOTES


def _join_following_lines(
    lines: List[str],
    line_index: int,
    field: str,
    fields: List[str],
    separator: str,
    newline_replacement: str,
) -> Optional[str]:
    for join_index in range(line_index + 1, len(lines)):
        join_fields = lines[join_index].split(separator)
        if join_fields[0].endswith(rules.QUOTE):
            break
    else:
        return None

    parts = [field] + lines[line_index + 1 : join_index] + [join_fields[0]]
    fields.extend(join_fields[1:])
    for i in range(line_index + 1, join_index + 1):
        lines[i] = ""

    logger.debug("joined lines %d-%d into one field", line_index + 1, join_index + 1)
    return newline_replacement.join(parts)[1:-1]


def _join_following_fields(fields: List[str], index: int, open_left: int, separator: str) -> Optional[str]:
    for r in range(index + 1, len(fields)):
        if not _closes_quote(fields[r], open_left):
            continue
        joined = separator.join(fields[index : r + 1])
        fields[index : r + 1] = [joined]
        logger.debug("joined fields %d-%d containing separator %r", index, r, separator)
        return joined[1:-1]
    return None


def parse_line_fields(
    lines: List[str],
    line_index: int,
    separator: str,
    newline_replacement: str = rules.FIELD_NEWLINE,
) -> List[str]:
    """
    Parse lines[line_index] into unescaped fields.

    May consume following lines of a multi-line field,
    those are set to empty strings in lines.
    """
    line = lines[line_index]
    fields = line.split(separator)

    i = 0
    while i < len(fields):
        field = fields[i]
        if len(field) < 2:
            i += 1
            continue

        left, right = quote_signature(field)
        if left == 0 and right == 0:
            pass
        elif (left, right) in _QUOTED_SIGNATURES:
            field = field[1:-1]
        elif left == 0:
            # Quotes inside the field, no special handling needed
            pass
        elif right == 0:
            # Two quotes are an escaped quote, unescaped below
            if left != 2:
                joined = None
                if i == len(fields) - 1:
                    joined = _join_following_lines(lines, line_index, field, fields, separator, newline_replacement)
                if joined is None:
                    joined = _join_following_fields(fields, i, left, separator)
                if joined is None:
                    raise FieldParseError("no closing quote for CSV field", field, line, line_index + 1)
                field = joined
        else:
            raise FieldParseError("can't handle CSV field", field, line, line_index + 1)

        fields[i] = unescape_quotes(field)
        i += 1

    return fields


def read_lines(
    lines: List[str],
    separator: str,
    newline_replacement: str = rules.FIELD_NEWLINE,
) -> List[Optional[List[str]]]:
    """
    Parse lines into rows of fields.

    The result has one entry per line. Empty lines and lines merged
    into a multi-line field of a previous line are None.
    lines is modified in place by multi-line merges.
    """
    rows: List[Optional[List[str]]] = [None] * len(lines)
    for line_index in range(len(lines)):
        if not lines[line_index]:
            continue
        rows[line_index] = parse_line_fields(lines, line_index, separator, newline_replacement)
    return rows
