"""
CSV parsing pipelines.

parse_detect_format:
    encoding detection -> sanitizing -> newline detection ->
    separator detection ("sep=" header or counting) -> line splitting ->
    field parsing

parse_with_format:
    the same without detection, using a caller supplied Format.

Rows are returned with one entry per data line: lines that were empty or
merged into a multi-line field of a previous row are None.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from . import encoding, rules
from .dialect import detect_dialect, parse_sep_header_line, split_lines
from .errors import HeaderConflictError
from .fields import read_lines
from .models import Format, FormatDetectionConfig
from .rows import Rows

logger = logging.getLogger(__name__)


def detect_format(data: bytes, config: Optional[FormatDetectionConfig] = None) -> tuple[Format, List[str]]:
    """
    Detect the Format of data and split the decoded text into data lines.
    A "sep=" header line is not part of the returned lines.
    """
    if config is None:
        config = FormatDetectionConfig()

    text, encoding_name = encoding.detect_and_decode(data, config)
    text = encoding.sanitize(text)
    separator, newline, lines = detect_dialect(text, config)

    fmt = Format(encoding=encoding_name, separator=separator, newline=newline)
    logger.debug("detected CSV format %r with %d lines", fmt, len(lines))
    return fmt, lines


def parse_detect_format(data: bytes, config: Optional[FormatDetectionConfig] = None) -> tuple[Rows, Format]:
    """
    Parse CSV data of unknown encoding, separator and line endings.

    config defaults to FormatDetectionConfig(). Returns (rows, format).

    >>> rows, fmt = parse_detect_format(b"Name;Age\\r\\nJohn;30")
    >>> rows, fmt.separator
    ([['Name', 'Age'], ['John', '30']], ';')
    """
    fmt, lines = detect_format(data, config)
    rows = read_lines(lines, fmt.separator, rules.FIELD_NEWLINE)
    return rows, fmt


def parse_with_format(data: bytes, format: Any) -> Rows:
    """
    Parse CSV data with a known Format.

    format may be a Format or a mapping with encoding, separator and
    newline; invalid formats raise ConfigurationError. A "sep=" header
    line is removed, it must declare format.separator or
    HeaderConflictError is raised.
    """
    fmt = Format.load(format)

    text = encoding.sanitize(encoding.decode(data, fmt.encoding))
    lines = split_lines(text, fmt.newline)

    header_sep = parse_sep_header_line(lines[0])
    if header_sep:
        if header_sep != fmt.separator:
            raise HeaderConflictError(header_sep, fmt.separator)
        lines = lines[1:]

    return read_lines(lines, fmt.separator, rules.FIELD_NEWLINE)
