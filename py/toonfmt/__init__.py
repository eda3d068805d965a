"""
TOON - Token-Oriented Object Notation encoder

Compact, deterministic text encoding of structured data for language-model
prompts. Uniform arrays of objects collapse into tables, primitive arrays
into single lines, and strings stay unquoted whenever that is unambiguous.

Example:
    >>> import toonfmt
    >>>
    >>> data = {"items": [{"sku": "A1", "qty": 2}, {"sku": "B2", "qty": 1}]}
    >>> print(toonfmt.encode(data))
    items[2]{sku,qty}:
      A1,2
      B2,1
    >>>
    >>> print(toonfmt.encode({"tags": ["a", "b"]}, delimiter="|", length_marker="#"))
    tags[#2|]: a|b
    >>>
    >>> # Build canonical values directly
    >>> from toonfmt import t, field
    >>> user = t.object(field("id", t.num(1)), field("name", t.str("Ada")))
    >>> print(toonfmt.encode(user))
    id: 1
    name: Ada
"""

import logging

__version__ = "1.0.0"

# Core types
from .types import (
    TValue,
    TType,
    MapEntry,
    field,
    t,
    T,
    is_primitive,
    is_array,
    is_object,
    is_array_of_primitives,
    is_array_of_arrays,
    is_array_of_objects,
)

# Options and errors
from .options import (
    EncodeOptions,
    Delimiter,
    default_encode_options,
    tab_encode_options,
    pipe_encode_options,
)
from .errors import ToonError, ConfigurationError

# Normalization
from .normalize import normalize, to_python

# Primitives
from .primitives import (
    encode_primitive,
    encode_key,
    format_header,
    is_safe_unquoted,
    is_valid_unquoted_key,
)

# Encoding
from .encoder import (
    encode,
    encode_to,
    encode_value,
    detect_tabular_header,
)
from .writer import LineWriter

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Core types
    "TValue",
    "TType",
    "MapEntry",
    "field",
    "t",
    "T",
    # Classification
    "is_primitive",
    "is_array",
    "is_object",
    "is_array_of_primitives",
    "is_array_of_arrays",
    "is_array_of_objects",
    # Options
    "EncodeOptions",
    "Delimiter",
    "default_encode_options",
    "tab_encode_options",
    "pipe_encode_options",
    # Errors
    "ToonError",
    "ConfigurationError",
    # Normalization
    "normalize",
    "to_python",
    # Primitives
    "encode_primitive",
    "encode_key",
    "format_header",
    "is_safe_unquoted",
    "is_valid_unquoted_key",
    # Encoding
    "encode",
    "encode_to",
    "encode_value",
    "detect_tabular_header",
    "LineWriter",
]
