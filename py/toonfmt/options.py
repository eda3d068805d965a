"""
TOON Encode Options

Configuration for a single encode call. Options are validated eagerly so a bad
delimiter or indent never reaches the encoder.
"""

from __future__ import annotations
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Optional, Union

from .errors import ConfigurationError


class Delimiter(Enum):
    """Separators allowed between inline array values and tabular cells."""
    COMMA = ","
    TAB = "\t"
    PIPE = "|"


DEFAULT_DELIMITER = Delimiter.COMMA.value
DEFAULT_LENGTH_MARKER = "#"
VALID_DELIMITERS = frozenset(d.value for d in Delimiter)


@dataclass(frozen=True)
class EncodeOptions:
    """Options for TOON encoding."""
    indent: int = 2
    delimiter: Union[str, Delimiter] = DEFAULT_DELIMITER
    length_marker: Union[str, bool, None] = None

    def __post_init__(self) -> None:
        if isinstance(self.indent, bool) or not isinstance(self.indent, int):
            raise ConfigurationError("indent", self.indent, "must be an integer")
        if self.indent < 0:
            raise ConfigurationError("indent", self.indent, "must not be negative")

        delimiter = self.delimiter
        if isinstance(delimiter, Delimiter):
            delimiter = delimiter.value
        if delimiter not in VALID_DELIMITERS:
            raise ConfigurationError(
                "delimiter", self.delimiter, "must be one of ',', '\\t' or '|'"
            )
        object.__setattr__(self, "delimiter", delimiter)

        object.__setattr__(self, "length_marker", _check_length_marker(self.length_marker))


def _check_length_marker(marker: Any) -> Optional[str]:
    if marker is None or marker is False:
        return None
    if marker is True:
        return DEFAULT_LENGTH_MARKER
    if not isinstance(marker, str) or len(marker) != 1:
        raise ConfigurationError("length_marker", marker, "must be a single character")
    # The marker sits directly before the length inside [...]
    if marker.isdigit() or marker.isspace() or marker == "]":
        raise ConfigurationError(
            "length_marker", marker,
            "must not be a digit, whitespace or ']' so the bracketed length stays parseable",
        )
    return marker


def default_encode_options() -> EncodeOptions:
    """Default options: two-space indent, comma delimiter, no length marker."""
    return EncodeOptions()


def tab_encode_options() -> EncodeOptions:
    """Options using tab-separated rows, usually the cheapest in tokens."""
    return EncodeOptions(delimiter=Delimiter.TAB)


def pipe_encode_options() -> EncodeOptions:
    """Options using pipe-separated rows."""
    return EncodeOptions(delimiter=Delimiter.PIPE)


def resolve_options(options: Optional[EncodeOptions] = None, **overrides: Any) -> EncodeOptions:
    """Merge keyword overrides into an options object, validating the result."""
    if options is None:
        options = default_encode_options()
    elif not isinstance(options, EncodeOptions):
        raise ConfigurationError("options", options, "must be an EncodeOptions instance")
    if not overrides:
        return options

    known = {f.name for f in fields(EncodeOptions)}
    for name in overrides:
        if name not in known:
            raise ConfigurationError(name, overrides[name], "unknown option")
    return replace(options, **overrides)
