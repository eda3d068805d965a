r"""
TOON Primitive Encoding

Quoting rules for strings and keys, number formatting, and array headers.

Quoting rules:
- null -> null, bool -> true / false
- number -> integer form when integral, otherwise shortest round-trip float
- string -> bare if safe, otherwise quoted with \\ \" \n \r \t escapes
- key -> bare if identifier-shaped, otherwise quoted like a string

A bare token never contains a colon or the active delimiter, so the output
stays unambiguous for a line-oriented reader.
"""

from __future__ import annotations
import math
import re
from typing import Iterable, Optional, Sequence, Union

from .options import DEFAULT_DELIMITER
from .types import TValue, TType


# ============================================================
# Constants
# ============================================================

NULL_LITERAL = "null"
TRUE_LITERAL = "true"
FALSE_LITERAL = "false"
RESERVED_LITERALS = {TRUE_LITERAL, FALSE_LITERAL, NULL_LITERAL}

COLON = ":"
DOUBLE_QUOTE = '"'
BACKSLASH = "\\"
COMMA = ","

LIST_ITEM_MARKER = "-"
LIST_ITEM_PREFIX = "- "

# Integral floats below this magnitude print without an exponent
_MAX_PLAIN_INTEGRAL = 1e21

# Ints with more digits than str() allows are printed in chunks of this size
_CHUNK_DIGITS = 1000
_CHUNK = 10 ** _CHUNK_DIGITS
_PLAIN_INT_LIMIT = 10 ** 4000

NUMERIC_LIKE_RE = re.compile(r"^-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?$")
LEADING_ZERO_RE = re.compile(r"^0\d+$")
STRUCTURAL_RE = re.compile(r"[\[\]{}]")
LINE_BREAK_RE = re.compile(r"[\n\r\t]")
CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
IDENTIFIER_RE = re.compile(r"^[A-Za-z_][\w.]*$", re.ASCII)
DIGITS_RE = re.compile(r"^\d+$")


# ============================================================
# Scalar Encoding
# ============================================================

def encode_primitive(v: TValue, delimiter: str = DEFAULT_DELIMITER) -> str:
    """Encode a null, bool, number or string value."""
    t = v.type

    if t == TType.NULL:
        return NULL_LITERAL
    elif t == TType.BOOL:
        return TRUE_LITERAL if v.as_bool() else FALSE_LITERAL
    elif t == TType.NUMBER:
        return encode_number(v.as_number())
    elif t == TType.STRING:
        return encode_string(v.as_str(), delimiter)

    raise TypeError(f"not a primitive: {t}")


def encode_number(n: Union[int, float]) -> str:
    """Format a number in canonical decimal form."""
    if isinstance(n, int):
        return int_to_str(n)
    if math.isfinite(n) and n.is_integer() and abs(n) < _MAX_PLAIN_INTEGRAL:
        return str(int(n))
    return repr(n)


def int_to_str(n: int) -> str:
    """Decimal digits of an int of any size, past the interpreter's str() digit limit."""
    if n < 0:
        return "-" + int_to_str(-n)
    if n < _PLAIN_INT_LIMIT:
        return str(n)
    chunks = []
    while n:
        n, low = divmod(n, _CHUNK)
        chunks.append(low)
    head = str(chunks.pop())
    return head + "".join(str(c).zfill(_CHUNK_DIGITS) for c in reversed(chunks))


def is_numeric_like(s: str) -> bool:
    """Check if a string would read back as a number (42, -3.14, 1e-6, 05)."""
    return bool(NUMERIC_LIKE_RE.match(s) or LEADING_ZERO_RE.match(s))


def is_padded_with_whitespace(s: str) -> bool:
    return s != s.strip()


def is_safe_unquoted(s: str, delimiter: str = DEFAULT_DELIMITER) -> bool:
    """Check if a string value can be emitted bare."""
    if not s:
        return False
    if is_padded_with_whitespace(s):
        return False
    if s in RESERVED_LITERALS:
        return False
    if is_numeric_like(s):
        return False
    if COLON in s:
        return False
    if DOUBLE_QUOTE in s or BACKSLASH in s:
        return False
    if STRUCTURAL_RE.search(s):
        return False
    if LINE_BREAK_RE.search(s):
        return False
    if delimiter in s:
        return False
    if s.startswith(LIST_ITEM_PREFIX):
        return False
    return True


def escape_string(s: str) -> str:
    """Escape a string for quoted output. Backslashes go first."""
    return (
        s.replace(BACKSLASH, BACKSLASH + BACKSLASH)
        .replace(DOUBLE_QUOTE, BACKSLASH + DOUBLE_QUOTE)
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def quote(s: str) -> str:
    return f"{DOUBLE_QUOTE}{escape_string(s)}{DOUBLE_QUOTE}"


def encode_string(s: str, delimiter: str = DEFAULT_DELIMITER) -> str:
    """Encode a string value, bare if safe, otherwise quoted."""
    if is_safe_unquoted(s, delimiter):
        return s
    return quote(s)


# ============================================================
# Key Encoding
# ============================================================

def is_valid_unquoted_key(key: str) -> bool:
    """Check if an object key can be emitted bare."""
    if not key:
        return False
    if CONTROL_RE.search(key):
        return False
    if COLON in key:
        return False
    if DOUBLE_QUOTE in key or BACKSLASH in key:
        return False
    if STRUCTURAL_RE.search(key):
        return False
    if COMMA in key:
        return False
    if key.startswith(LIST_ITEM_PREFIX):
        return False
    if DIGITS_RE.match(key):
        return False
    if is_padded_with_whitespace(key):
        return False
    return bool(IDENTIFIER_RE.match(key))


def encode_key(key: str) -> str:
    """Encode an object key or tabular field name."""
    if is_valid_unquoted_key(key):
        return key
    return quote(key)


# ============================================================
# Joining and Headers
# ============================================================

def join_encoded_values(values: Iterable[TValue], delimiter: str = DEFAULT_DELIMITER) -> str:
    """Encode primitives and join them with the delimiter."""
    return delimiter.join(encode_primitive(v, delimiter) for v in values)


def format_header(
    length: int,
    key: Optional[str] = None,
    fields: Optional[Sequence[str]] = None,
    delimiter: str = DEFAULT_DELIMITER,
    length_marker: Optional[str] = None,
) -> str:
    """
    Format an array header: key[#N|]{f1|f2}:

    The comma delimiter is implicit; tab and pipe appear after the length.
    """
    header = encode_key(key) if key is not None else ""

    delimiter_suffix = delimiter if delimiter != DEFAULT_DELIMITER else ""
    length_prefix = length_marker or ""
    header += f"[{length_prefix}{length}{delimiter_suffix}]"

    if fields is not None:
        header += "{" + delimiter.join(encode_key(f) for f in fields) + "}"

    return header + COLON
