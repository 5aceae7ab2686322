"""
Encoding detection and decoding of raw CSV bytes.

Detection order:
1. Byte order mark of a candidate encoding
2. Valid UTF-8 containing non-ASCII characters
3. Probe scoring: the candidate whose decoded text contains the most
   probe characters wins, earlier candidates win ties
4. Plain ASCII / valid UTF-8
5. charset-normalizer guess restricted to the candidates
6. UTF-8 with replacement characters
"""

from __future__ import annotations

import codecs
import logging
from typing import List, Optional, Tuple

from charset_normalizer import from_bytes

from . import rules
from .errors import ConfigurationError, DecodingError
from .models import FormatDetectionConfig

logger = logging.getLogger(__name__)

_UTF8 = "utf-8"
_BOMS = (
    (codecs.BOM_UTF8, _UTF8),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
)
_SANITIZE_TABLE = str.maketrans({ch: " " for ch in rules.SANITIZE_CHARS})


def resolve_encoding(name: str) -> codecs.CodecInfo:
    """Look up a codec by display name ("Windows 1252") or Python alias."""
    if not name:
        raise ConfigurationError("missing encoding name")
    try:
        return codecs.lookup(name)
    except LookupError as exc:
        raise ConfigurationError(f"unknown encoding: {name!r}") from exc


def sanitize(text: str) -> str:
    """Replace replacement characters and no-break spaces with spaces."""
    return text.translate(_SANITIZE_TABLE)


def strip_bom(text: str) -> str:
    if text.startswith("\ufeff"):
        return text[1:]
    return text


def probe_score(text: str, probes: List[str]) -> int:
    return sum(text.count(p) for p in probes if p)


def _strict_decode(data: bytes, codec_name: str) -> Optional[str]:
    try:
        return data.decode(codec_name)
    except UnicodeDecodeError:
        return None


def _utf8_name(candidates: List[Tuple[str, codecs.CodecInfo]]) -> str:
    for name, info in candidates:
        if info.name == _UTF8:
            return name
    return rules.FALLBACK_ENCODING


def detect_and_decode(data: bytes, config: FormatDetectionConfig) -> tuple[str, str]:
    """
    Decode data with the best matching encoding of config.encodings.

    Returns (text, encoding name as configured). The text still needs
    sanitizing. Unknown encoding names raise ConfigurationError.
    """
    if config is None:
        raise ConfigurationError("format detection config must not be None")

    candidates = [(name, resolve_encoding(name)) for name in config.encodings]

    for bom, codec_name in _BOMS:
        if not data.startswith(bom):
            continue
        for name, info in candidates:
            if info.name == codec_name:
                logger.debug("byte order mark selects encoding %s", name)
                if codec_name == _UTF8:
                    return data[len(bom):].decode(_UTF8, errors="replace"), name
                text = _strict_decode(data[len(bom):], codec_name)
                if text is None:
                    raise DecodingError(name, "invalid data after byte order mark")
                return text, name
        if codec_name == _UTF8:
            data = data[len(bom):]

    utf8_text = _strict_decode(data, _UTF8)
    if utf8_text is not None and not data.isascii() and any(info.name == _UTF8 for _, info in candidates):
        logger.debug("valid non-ASCII UTF-8 data")
        return strip_bom(utf8_text), _utf8_name(candidates)

    best_text, best_name, best_score = None, None, 0
    for name, info in candidates:
        text = _strict_decode(data, info.name)
        if text is None:
            logger.debug("encoding %s can't decode data", name)
            continue
        score = probe_score(text, config.encoding_tests)
        logger.debug("encoding %s probe score %d", name, score)
        if score > best_score:
            best_text, best_name, best_score = text, name, score
    if best_text is not None:
        return strip_bom(best_text), best_name

    if utf8_text is not None:
        return strip_bom(utf8_text), _utf8_name(candidates)

    if config.charset_fallback and candidates:
        match = from_bytes(data, cp_isolation=[info.name for _, info in candidates]).best()
        if match is not None:
            guessed = codecs.lookup(match.encoding).name
            for name, info in candidates:
                if info.name == guessed:
                    logger.info("no encoding probe matched, charset-normalizer guessed %s", name)
                    text = _strict_decode(data, info.name)
                    if text is None:
                        raise DecodingError(name, "charset-normalizer guess does not decode")
                    return strip_bom(text), name

    logger.info("no encoding matched, decoding as %s with replacement characters", rules.FALLBACK_ENCODING)
    return data.decode(_UTF8, errors="replace"), _utf8_name(candidates)


def decode(data: bytes, encoding: str) -> str:
    """
    Decode data with an explicitly given encoding.

    UTF-8 never fails: invalid sequences become replacement characters,
    which sanitize() turns into spaces. Other encodings raise DecodingError.
    """
    info = resolve_encoding(encoding)
    if info.name == _UTF8:
        if data.startswith(codecs.BOM_UTF8):
            data = data[len(codecs.BOM_UTF8):]
        return data.decode(_UTF8, errors="replace")
    try:
        text = data.decode(info.name)
    except UnicodeDecodeError as exc:
        raise DecodingError(encoding, str(exc)) from exc
    return strip_bom(text)
