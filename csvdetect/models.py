from __future__ import annotations

from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from . import rules
from .errors import ConfigurationError


class Format(BaseModel):
    """
    Encoding and structure of a CSV file.

    Invariants (checked on construction):
    - encoding is not empty
    - separator is exactly one character
    - newline is one of "\\n", "\\r\\n", "\\n\\r"
    """

    model_config = ConfigDict(frozen=True)

    encoding: str = Field(examples=["UTF-8"])
    separator: str = Field(examples=[",", ";", "\t"])
    newline: str = Field(examples=["\r\n"])

    @field_validator("encoding")
    @classmethod
    def _check_encoding(cls, v: str) -> str:
        if not v:
            raise ValueError("missing CSV format encoding")
        return v

    @field_validator("separator")
    @classmethod
    def _check_separator(cls, v: str) -> str:
        if not v:
            raise ValueError("missing CSV format separator")
        if len(v) != 1:
            raise ValueError(f"invalid CSV format separator: {v!r}")
        return v

    @field_validator("newline")
    @classmethod
    def _check_newline(cls, v: str) -> str:
        if not v:
            raise ValueError("missing CSV format newline")
        if v not in rules.VALID_NEWLINES:
            raise ValueError(f"invalid CSV format newline: {v!r}")
        return v

    @classmethod
    def with_separator(cls, separator: str) -> "Format":
        """UTF-8 with CRLF line endings and the given separator."""
        return cls(encoding="UTF-8", separator=separator, newline=rules.CRLF)

    @classmethod
    def load(cls, obj: Any) -> "Format":
        """
        Validate a Format, a mapping or any object with matching attributes.

        Raises ConfigurationError instead of pydantic's ValidationError so
        callers only deal with the CsvError hierarchy.
        """
        if obj is None:
            raise ConfigurationError("missing CSV format")
        if isinstance(obj, cls):
            return obj
        try:
            if isinstance(obj, dict):
                return cls.model_validate(obj)
            return cls.model_validate(obj, from_attributes=True)
        except ValidationError as exc:
            raise ConfigurationError(f"invalid CSV format: {exc}") from exc


class FormatDetectionConfig(BaseModel):
    # Tried in this order, earlier encodings win ties
    encodings: List[str] = Field(default_factory=lambda: list(rules.DEFAULT_ENCODINGS))
    # Characters with encoding dependent byte representation
    encoding_tests: List[str] = Field(default_factory=lambda: list(rules.DEFAULT_ENCODING_TESTS))
    separators: List[str] = Field(default_factory=lambda: list(rules.SEPARATOR_CANDIDATES))
    default_separator: str = rules.DEFAULT_SEPARATOR
    # Ask charset-normalizer when no probe matched and the data is not UTF-8
    charset_fallback: bool = True

    @field_validator("separators")
    @classmethod
    def _check_separators(cls, v: List[str]) -> List[str]:
        for sep in v:
            if len(sep) != 1:
                raise ValueError(f"invalid separator candidate: {sep!r}")
        return v

    @field_validator("default_separator")
    @classmethod
    def _check_default_separator(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError(f"invalid default separator: {v!r}")
        return v


class ParseSummary(BaseModel):
    rows: int = 0
    non_empty_rows: int = 0
    columns: Optional[int] = Field(default=None, examples=[None])


class ParseResponse(BaseModel):
    format: Format
    rows: List[Optional[List[str]]] = Field(default_factory=list)
    summary: ParseSummary


class HealthResponse(BaseModel):
    ok: bool = True
