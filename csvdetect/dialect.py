"""
Newline and separator detection on decoded, sanitized CSV text.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from . import rules
from .models import FormatDetectionConfig

logger = logging.getLogger(__name__)


def detect_newline(text: str) -> str:
    # Any CRLF wins because that's the standard (Windows/Excel exports)
    if rules.CRLF in text:
        return rules.CRLF
    return rules.LF


def split_lines(text: str, newline: str) -> List[str]:
    return text.split(newline)


def parse_sep_header_line(line: str) -> str:
    """
    Return X for a separator declaration line "sep=X" or "SEP=X",
    optionally wrapped in double quotes, else an empty string.

    >>> parse_sep_header_line('"sep=;"')
    ';'
    >>> parse_sep_header_line('Name,Age')
    ''
    """
    if len(line) < rules.SEP_HEADER_LENGTH:
        return ""
    if line[0] == rules.QUOTE and line[-1] == rules.QUOTE:
        line = line[1:-1]
    if len(line) != rules.SEP_HEADER_LENGTH:
        return ""
    if not line.startswith(rules.SEP_HEADER_PREFIXES):
        return ""
    return line[4]


def count_separators(lines: Sequence[str], candidates: Sequence[str]) -> Dict[str, int]:
    counts = {sep: 0 for sep in candidates}
    for line in lines:
        if not line:
            continue
        for sep in candidates:
            counts[sep] += line.count(sep)
    return counts


def choose_separator(counts: Dict[str, int], default: str = rules.DEFAULT_SEPARATOR) -> str:
    """The candidate with a strictly highest count, else default."""
    for sep, count in counts.items():
        if all(count > other for o, other in counts.items() if o != sep):
            return sep
    return default


def detect_dialect(text: str, config: FormatDetectionConfig) -> tuple[str, str, List[str]]:
    """
    Detect newline and separator of text and split it into lines.

    Returns (separator, newline, lines). A "sep=X" header line is honored
    over counting and removed from the returned lines. Lines are stripped
    of stray CR/LF characters at both ends when the separator is counted.
    An empty or blank text yields no lines.
    """
    newline = detect_newline(text)
    lines = split_lines(text, newline)

    header_sep = parse_sep_header_line(lines[0])
    if header_sep:
        logger.debug("separator %r declared by header line", header_sep)
        return header_sep, newline, lines[1:]

    # Remove double newlines
    lines = [line.strip("\r\n") for line in lines]
    if not any(lines):
        logger.info("no data lines, using default separator %r", config.default_separator)
        return config.default_separator, newline, []

    counts = count_separators(lines, config.separators)
    separator = choose_separator(counts, config.default_separator)
    logger.debug("separator counts %r, newline %r: using %r", counts, newline, separator)
    return separator, newline, lines
