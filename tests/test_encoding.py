import codecs

import pytest

from csvdetect.encoding import decode, detect_and_decode, resolve_encoding, sanitize
from csvdetect.errors import ConfigurationError
from csvdetect.models import FormatDetectionConfig
from csvdetect.parse import parse_detect_format


def test_resolve_display_names():
    assert resolve_encoding("UTF-8").name == "utf-8"
    assert resolve_encoding("UTF-16LE").name == "utf-16-le"
    assert resolve_encoding("ISO 8859-1").name == "iso8859-1"
    assert resolve_encoding("Windows 1252").name == "cp1252"
    assert resolve_encoding("Macintosh").name == "mac-roman"


def test_resolve_unknown_encoding():
    with pytest.raises(ConfigurationError):
        resolve_encoding("no-such-charset")
    with pytest.raises(ConfigurationError):
        resolve_encoding("")


def test_unknown_encoding_in_config():
    with pytest.raises(ConfigurationError):
        parse_detect_format(b"a,b", FormatDetectionConfig(encodings=["UTF-8", "no-such-charset"]))


def test_missing_config():
    with pytest.raises(ConfigurationError):
        detect_and_decode(b"a,b", None)


def test_ascii_is_utf8():
    text, name = detect_and_decode(b"a,b\n", FormatDetectionConfig())
    assert (text, name) == ("a,b\n", "UTF-8")


def test_utf8_with_bom():
    data = codecs.BOM_UTF8 + "Grüße;Straße\r\n".encode("utf-8")
    rows, fmt = parse_detect_format(data)
    assert fmt.encoding == "UTF-8"
    assert rows[0] == ["Grüße", "Straße"]


def test_utf8_without_probe_characters():
    # ç maps to ß in Macintosh, valid UTF-8 must still win
    text, name = detect_and_decode("Français;ça\n".encode("utf-8"), FormatDetectionConfig())
    assert name == "UTF-8"
    assert text == "Français;ça\n"


def test_latin1():
    text, name = detect_and_decode("Straße;Müller\n".encode("latin-1"), FormatDetectionConfig())
    assert name == "ISO 8859-1"
    assert text == "Straße;Müller\n"


def test_windows1252_euro_sign():
    text, name = detect_and_decode("Grüße,€ 10\n".encode("cp1252"), FormatDetectionConfig())
    assert name == "Windows 1252"
    assert text == "Grüße,€ 10\n"


def test_utf16le_cyrillic_without_bom():
    data = "Имя;Город\nИван;Москва".encode("utf-16-le")
    rows, fmt = parse_detect_format(data)
    assert fmt.encoding == "UTF-16LE"
    assert fmt.separator == ";"
    assert rows == [["Имя", "Город"], ["Иван", "Москва"]]


def test_utf16le_bom():
    data = codecs.BOM_UTF16_LE + "a;b\r\nc;d\r\n".encode("utf-16-le")
    rows, fmt = parse_detect_format(data)
    assert fmt.encoding == "UTF-16LE"
    assert fmt.newline == "\r\n"
    assert rows == [["a", "b"], ["c", "d"], None]


def test_encoding_order_breaks_ties():
    data = "Straße\n".encode("latin-1")
    config = FormatDetectionConfig(encodings=["Windows 1252", "ISO 8859-1"])
    _, name = detect_and_decode(data, config)
    assert name == "Windows 1252"


def test_fallback_to_utf8_with_replacement():
    config = FormatDetectionConfig(encodings=["UTF-8"], charset_fallback=False)
    text, name = detect_and_decode(b"a,b\xffc\n", config)
    assert name == "UTF-8"
    assert sanitize(text) == "a,b c\n"


def test_configured_names_are_reported():
    config = FormatDetectionConfig(encodings=["utf8", "latin-1"])
    _, name = detect_and_decode(b"plain", config)
    assert name == "utf8"
    _, name = detect_and_decode("Müller".encode("latin-1"), config)
    assert name == "latin-1"


def test_sanitize():
    assert sanitize("a\u00a0b\ufffdc\nd") == "a b c\nd"


def test_decode_explicit():
    assert decode(codecs.BOM_UTF8 + b"a,b", "UTF-8") == "a,b"
    assert decode("ä".encode("mac_roman"), "Macintosh") == "ä"
    assert decode(codecs.BOM_UTF16_LE + "a".encode("utf-16-le"), "UTF-16LE") == "a"


def test_charset_normalizer_guess_without_probes():
    text, name = detect_and_decode("Paul,Montréal\n".encode("latin-1"), FormatDetectionConfig())
    assert name == "Windows 1252"
    assert text == "Paul,Montréal\n"

    text, name = detect_and_decode("Crème brûlée;5\n".encode("mac_roman"), FormatDetectionConfig())
    assert name == "Macintosh"
    assert text == "Crème brûlée;5\n"


def test_charset_fallback_disabled():
    config = FormatDetectionConfig(charset_fallback=False)
    text, name = detect_and_decode("Paul,Montréal\n".encode("latin-1"), config)
    assert name == "UTF-8"
    assert sanitize(text) == "Paul,Montr al\n"
