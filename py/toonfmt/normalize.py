"""
TOON Normalizer

Maps arbitrary Python values onto the canonical TValue model. The mapping is
total: anything outside the recognized set of host types becomes null, and
nothing raises.

Recognized shapes:
- None, bool, str, int, float -> null / bool / string / number
- Decimal and other real numbers -> number
- Enum members -> string (str values as is, otherwise the member name)
- datetime -> ISO-8601 UTC string, second precision
- date -> ISO-8601 string at midnight UTC
- Mapping -> object, keys coerced to strings
- Sequence (not str/bytes), Set, mapping values views -> array
"""

from __future__ import annotations
import logging
import math
import numbers
from collections.abc import Mapping, Sequence, Set as AbstractSet, ValuesView
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Set

from .primitives import int_to_str
from .types import TValue, TType

logger = logging.getLogger(__name__)

# Byte strings are sequences but not arrays of values
_NOT_ARRAYS = (str, bytes, bytearray, memoryview)

_SECONDS_PER_DAY = 86400


def normalize(value: Any) -> TValue:
    """Convert a Python value into a canonical TValue tree."""
    return _normalize(value, set())


def _is_array_like(value: Any) -> bool:
    if isinstance(value, _NOT_ARRAYS):
        return False
    return isinstance(value, (Sequence, AbstractSet, ValuesView))


def _normalize(value: Any, active: Set[int]) -> TValue:
    if isinstance(value, TValue):
        return value
    if value is None:
        return TValue.null()
    # Before the scalar checks so str and int mixins still become strings
    if isinstance(value, Enum):
        return TValue.str_(enum_to_str(value))
    if isinstance(value, bool):
        return TValue.bool_(value)
    if isinstance(value, str):
        return TValue.str_(value)
    if isinstance(value, int):
        return TValue.number(int(value))
    if isinstance(value, float):
        return _normalize_float(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            return TValue.null()
        if value == value.to_integral_value():
            return TValue.number(int(value))
        return _normalize_float(float(value))
    if isinstance(value, numbers.Real):
        if isinstance(value, numbers.Rational) and value.denominator == 1:
            return TValue.number(int(value.numerator))
        try:
            f = float(value)
        except OverflowError:
            logger.debug("%s out of float range normalized to null", type(value).__name__)
            return TValue.null()
        return _normalize_float(f)
    if isinstance(value, datetime):
        return TValue.str_(format_datetime(value))
    if isinstance(value, date):
        return TValue.str_(f"{value.isoformat()}T00:00:00Z")

    if isinstance(value, Mapping) or _is_array_like(value):
        marker = id(value)
        if marker in active:
            logger.debug("Reference cycle through %s normalized to null", type(value).__name__)
            return TValue.null()
        active.add(marker)
        try:
            if isinstance(value, Mapping):
                return TValue.object_from_pairs(
                    (key_to_str(k), _normalize(v, active)) for k, v in value.items()
                )
            return TValue.array(*[_normalize(item, active) for item in value])
        finally:
            active.discard(marker)

    logger.debug("Unsupported type %s normalized to null", type(value).__name__)
    return TValue.null()


def _normalize_float(f: float) -> TValue:
    if math.isnan(f) or math.isinf(f):
        return TValue.null()
    if f == 0:
        # Covers -0.0
        return TValue.number(0)
    return TValue.number(f)


def format_datetime(dt: datetime) -> str:
    """
    Format a datetime as ISO-8601 UTC with second precision.

    Naive datetimes are taken as UTC. The shift to UTC is done by hand so
    values near datetime.min/max still format: the day may land in year 0
    or year 10000, which datetime itself cannot represent.
    """
    offset = dt.utcoffset() or timedelta(0)
    secs = dt.hour * 3600 + dt.minute * 60 + dt.second - int(offset.total_seconds())
    days, secs = divmod(secs, _SECONDS_PER_DAY)
    ordinal = dt.toordinal() + days

    if ordinal < 1:
        day = "0000-12-31"
    elif ordinal > date.max.toordinal():
        day = "10000-01-01"
    else:
        day = date.fromordinal(ordinal).isoformat()

    hours, rest = divmod(secs, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{day}T{hours:02d}:{minutes:02d}:{seconds:02d}Z"


def enum_to_str(member: Enum) -> str:
    """String values stand for themselves; anything else goes by member name."""
    if isinstance(member.value, str):
        return member.value
    if member.name is not None:
        return member.name
    return str(member.value)


def key_to_str(key: Any) -> str:
    """Coerce a mapping key to its string form."""
    if isinstance(key, str) and not isinstance(key, Enum):
        return key
    if isinstance(key, Enum):
        return enum_to_str(key)
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, int):
        return int_to_str(key)
    return str(key)


def to_python(v: TValue) -> Any:
    """Convert a canonical TValue back to plain Python data."""
    t = v.type

    if t == TType.NULL:
        return None
    elif t == TType.BOOL:
        return v.as_bool()
    elif t == TType.NUMBER:
        return v.as_number()
    elif t == TType.STRING:
        return v.as_str()
    elif t == TType.ARRAY:
        return [to_python(item) for item in v.as_array()]
    elif t == TType.OBJECT:
        return {k: to_python(item) for k, item in v.as_object().items()}

    raise ValueError(f"unknown type: {t}")
