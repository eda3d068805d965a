"""
TOON Encoder

Renders canonical TValue trees as indented TOON text.

Layout rules:
- object -> one "key: value" line per field, nested objects indented below
- primitive array -> inline: key[N]: a,b,c
- uniform array of objects -> table: key[N]{f1,f2}: then one row per object
- anything else -> list form: key[N]: then one "- item" line per element

Tabular detection runs independently wherever an array of objects appears.
"""

from __future__ import annotations
import logging
from typing import Any, List, Optional, Sequence, TextIO

from .normalize import normalize
from .options import EncodeOptions, resolve_options
from .primitives import (
    LIST_ITEM_MARKER,
    LIST_ITEM_PREFIX,
    encode_key,
    encode_primitive,
    format_header,
    join_encoded_values,
)
from .types import (
    TValue,
    is_array,
    is_array_of_arrays,
    is_array_of_objects,
    is_array_of_primitives,
    is_object,
    is_primitive,
)
from .writer import LineWriter

logger = logging.getLogger(__name__)


# ============================================================
# Public API
# ============================================================

def encode(value: Any, options: Optional[EncodeOptions] = None, **overrides: Any) -> str:
    """
    Encode any Python value as TOON text.

    The value is normalized first: datetimes become ISO-8601 strings, sets
    become arrays, NaN and unsupported objects become null.

    Example:
        >>> encode({"tags": ["a", "b", "c"]}, length_marker="#")
        'tags[#3]: a,b,c'
    """
    opts = resolve_options(options, **overrides)
    return encode_value(normalize(value), opts)


def encode_to(value: Any, fp: TextIO, options: Optional[EncodeOptions] = None, **overrides: Any) -> None:
    """Encode a value and write the text to a file-like object."""
    opts = resolve_options(options, **overrides)
    encode_value(normalize(value), opts, output=fp)


def encode_value(value: TValue, options: EncodeOptions, output: Optional[TextIO] = None) -> str:
    """
    Encode a canonical value.

    With an output sink the text is written there and "" is returned.
    """
    logger.debug(
        "Encoding %s root (indent=%d, delimiter=%r, length_marker=%r)",
        value.type.value, options.indent, options.delimiter, options.length_marker,
    )

    if is_primitive(value):
        text = encode_primitive(value, options.delimiter)
        if output is None:
            return text
        output.write(text)
        return ""

    writer = LineWriter(options.indent, output)
    if is_array(value):
        encode_array(None, value, writer, 0, options)
    elif is_object(value):
        encode_object(value, writer, 0, options)
    return writer.to_string()


# ============================================================
# Objects
# ============================================================

def encode_object(obj: TValue, writer: LineWriter, depth: int, opts: EncodeOptions) -> None:
    """Emit each field of an object in insertion order."""
    for key, value in obj.as_object().items():
        encode_key_value_pair(key, value, writer, depth, opts)


def encode_key_value_pair(
    key: str,
    value: TValue,
    writer: LineWriter,
    depth: int,
    opts: EncodeOptions,
    prefix: str = "",
) -> None:
    """
    Emit one field.

    A non-empty prefix means the field shares a list item's marker line;
    a nested object's fields then sit one level deeper than usual because
    the marker takes up an indent level.
    """
    if is_array(value):
        encode_array(key, value, writer, depth, opts, prefix)
        return

    encoded_key = encode_key(key)

    if is_primitive(value):
        writer.push(depth, f"{prefix}{encoded_key}: {encode_primitive(value, opts.delimiter)}")
        return

    writer.push(depth, f"{prefix}{encoded_key}:")
    if len(value):
        encode_object(value, writer, depth + (2 if prefix else 1), opts)


def encode_object_as_list_item(obj: TValue, writer: LineWriter, depth: int, opts: EncodeOptions) -> None:
    """Emit an object as "- first: value" with remaining fields below it."""
    fields = obj.as_object()
    if not fields:
        writer.push(depth, LIST_ITEM_MARKER)
        return

    entries = iter(fields.items())
    first_key, first_value = next(entries)
    encode_key_value_pair(first_key, first_value, writer, depth, opts, LIST_ITEM_PREFIX)

    for key, value in entries:
        encode_key_value_pair(key, value, writer, depth + 1, opts)


# ============================================================
# Arrays
# ============================================================

def encode_array(
    key: Optional[str],
    arr: TValue,
    writer: LineWriter,
    depth: int,
    opts: EncodeOptions,
    prefix: str = "",
) -> None:
    """
    Emit an array in the most compact form that fits its shape.

    Header and inline values go on one line at depth (after prefix); rows or
    list items go at depth + 1.
    """
    items = arr.as_array()

    if not items:
        writer.push(depth, prefix + _header(0, key, opts))
        return

    if is_array_of_primitives(arr):
        writer.push(depth, prefix + format_inline_array(items, opts, key))
        return

    if is_array_of_arrays(arr) and all(is_array_of_primitives(inner) for inner in items):
        writer.push(depth, prefix + _header(len(items), key, opts))
        for inner in items:
            writer.push(depth + 1, LIST_ITEM_PREFIX + format_inline_array(inner.as_array(), opts))
        return

    if is_array_of_objects(arr):
        header = detect_tabular_header(items)
        if header is not None:
            writer.push(depth, prefix + _header(len(items), key, opts, fields=header))
            write_tabular_rows(items, header, writer, depth + 1, opts)
            return
        logger.debug("Array %r of %d objects is not tabular, using list form", key, len(items))

    # Mixed arrays, and arrays of arrays holding non-primitives
    writer.push(depth, prefix + _header(len(items), key, opts))
    for item in items:
        _encode_list_item(item, writer, depth + 1, opts)


def _encode_list_item(item: TValue, writer: LineWriter, depth: int, opts: EncodeOptions) -> None:
    if is_primitive(item):
        writer.push(depth, LIST_ITEM_PREFIX + encode_primitive(item, opts.delimiter))
    elif is_object(item):
        encode_object_as_list_item(item, writer, depth, opts)
    else:
        encode_array(None, item, writer, depth, opts, LIST_ITEM_PREFIX)


def format_inline_array(values: Sequence[TValue], opts: EncodeOptions, key: Optional[str] = None) -> str:
    """Format a primitive array on one line: key[N]: v1,v2,..."""
    header = _header(len(values), key, opts)
    if not values:
        return header
    return f"{header} {join_encoded_values(values, opts.delimiter)}"


def _header(length: int, key: Optional[str], opts: EncodeOptions, fields: Optional[List[str]] = None) -> str:
    return format_header(
        length,
        key=key,
        fields=fields,
        delimiter=opts.delimiter,
        length_marker=opts.length_marker,
    )


# ============================================================
# Auto-Tabular
# ============================================================

def detect_tabular_header(rows: Sequence[TValue]) -> Optional[List[str]]:
    """
    Return the table columns for an array of objects, or None.

    Columns are the first row's keys in its own order. Every row must have
    exactly those keys, in any order, each holding a primitive.
    """
    if not rows:
        return None

    header = rows[0].keys()
    if not header:
        return None

    if is_tabular_array(rows, header):
        return header
    return None


def is_tabular_array(rows: Sequence[TValue], header: Sequence[str]) -> bool:
    """Check that every row has exactly the header keys with primitive values."""
    for row in rows:
        fields = row.as_object()
        if len(fields) != len(header):
            return False
        for key in header:
            value = fields.get(key)
            if value is None or not is_primitive(value):
                return False
    return True


def write_tabular_rows(
    rows: Sequence[TValue],
    header: Sequence[str],
    writer: LineWriter,
    depth: int,
    opts: EncodeOptions,
) -> None:
    """Emit one delimiter-joined row per object, cells in header order."""
    for row in rows:
        fields = row.as_object()
        writer.push(depth, join_encoded_values((fields[key] for key in header), opts.delimiter))
