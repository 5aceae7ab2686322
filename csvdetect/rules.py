"""
Detection and parsing rules.

Every default the detector falls back to lives here so the policy is
explicit and can be overridden through FormatDetectionConfig.
"""

# Candidate encodings in priority order
DEFAULT_ENCODINGS = [
    "UTF-8",
    "UTF-16LE",
    "ISO 8859-1",
    "Windows 1252",  # like ANSI
    "Macintosh",
]

# Characters whose byte representation differs between the candidate encodings
DEFAULT_ENCODING_TESTS = [
    "ä", "Ä", "ö", "Ö", "ü", "Ü", "ß",
    "§", "€",
    "д", "Д", "ъ", "Ъ", "б", "Б", "л", "Л", "и", "И", "ж",
]

FALLBACK_ENCODING = "UTF-8"

SEPARATOR_CANDIDATES = [",", ";", "\t"]
DEFAULT_SEPARATOR = ","  # used when no candidate has a strict plurality

QUOTE = '"'
ESCAPED_QUOTE = '""'

LF = "\n"
CRLF = "\r\n"
LFCR = "\n\r"
VALID_NEWLINES = (LF, CRLF, LFCR)
NEWLINE_NAMES = {"LF": LF, "CRLF": CRLF, "LFCR": LFCR}

# Line break used inside values stitched together from several lines
FIELD_NEWLINE = LF

# Decoding artifacts mapped to a plain space
SANITIZE_CHARS = ("\ufffd", "\u00a0")

SEP_HEADER_PREFIXES = ("sep=", "SEP=")
SEP_HEADER_LENGTH = 5

ACCEPTED_EXTENSIONS = (".csv", ".txt")
