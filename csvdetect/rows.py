"""
Post-processing of parsed rows.

Parsed rows keep one entry per source line, None marking empty lines
and lines merged into a previous row. These helpers clean such results up.
"""

from __future__ import annotations

from collections import Counter
from typing import List, Optional

Rows = List[Optional[List[str]]]


def _is_empty(row: Optional[List[str]]) -> bool:
    return not row or all(field == "" for field in row)


def uniform_column_rows(rows: Rows) -> Rows:
    """
    Replace rows that don't have the majority column count with None,
    so every row is either None or has the same number of fields.

    Only rows with more than one field vote, ties go to the wider count.
    """
    if not rows:
        return []
    votes = Counter(len(row) for row in rows if row is not None and len(row) > 1)
    majority = 0
    if votes:
        majority = max(votes.items(), key=lambda item: (item[1], item[0]))[0]
    return [row if row is not None and len(row) == majority else None for row in rows]


def blank_empty_rows(rows: Rows) -> Rows:
    """Replace rows where all fields are empty strings with None."""
    if not rows:
        return []
    return [None if _is_empty(row) else row for row in rows]


def remove_empty_rows(rows: Rows) -> Rows:
    """
    Remove None rows and rows where all fields are empty strings.
    Returns rows itself if nothing had to be removed.
    """
    if not rows:
        return []
    if not any(_is_empty(row) for row in rows):
        return rows
    return [row for row in rows if not _is_empty(row)]


def _compact_spaced_string(value: str) -> tuple[str, bool]:
    if len(value) < 3:
        return value, False
    if any(ch != " " for ch in value[1::2]):
        return value, False
    return value[::2], True


def compact_spaced_strings(rows: Rows) -> int:
    """
    Remove the spaces of values where every odd character is a space,
    like "H e l l o". Modifies rows in place, returns the number of
    modified values.
    """
    modified = 0
    for row in rows:
        if row is None:
            continue
        for col, value in enumerate(row):
            cleaned, changed = _compact_spaced_string(value)
            if changed:
                row[col] = cleaned
                modified += 1
    return modified


def replace_newline_with_space(rows: Rows) -> None:
    for row in rows:
        if row is None:
            continue
        for col, value in enumerate(row):
            row[col] = value.replace("\n", " ")


def trim_space(rows: Rows) -> None:
    """Strip leading and trailing whitespace from all fields in place."""
    for row in rows:
        if row is None:
            continue
        for col, value in enumerate(row):
            row[col] = value.strip()
