from __future__ import annotations


class CsvError(ValueError):
    """Base class for every detection and parsing failure."""


class ConfigurationError(CsvError):
    pass


class DecodingError(CsvError):
    def __init__(self, encoding: str, reason: str):
        self.encoding = encoding
        super().__init__(f"can't decode CSV data as {encoding}: {reason}")


class HeaderConflictError(CsvError):
    def __init__(self, header_separator: str, format_separator: str):
        self.header_separator = header_separator
        self.format_separator = format_separator
        super().__init__(
            f"separator {header_separator!r} in header line is different "
            f"from format separator {format_separator!r}"
        )


class FieldParseError(CsvError):
    """A field whose quoting can't be classified or repaired."""

    def __init__(self, message: str, field: str, line: str, line_number: int):
        self.field = field
        self.line = line
        self.line_number = line_number
        super().__init__(f"{message}: field `{field}` in line {line_number} `{line}`")
