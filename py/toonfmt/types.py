"""
TOON Core Types

TValue is the canonical value container every encoding step operates on.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union


class TType(Enum):
    """Canonical value types."""
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True)
class MapEntry:
    """Key-value pair for objects."""
    key: str
    value: "TValue"


_EMPTY_OBJECT: Mapping[str, "TValue"] = MappingProxyType({})


class TValue:
    """
    Canonical value container for TOON encoding.

    Supports: null, bool, number, string, array, object.
    Values are immutable once built; arrays are tuples and objects are
    read-only ordered mappings.
    """

    __slots__ = ('_type', '_bool', '_number', '_str', '_array', '_object')

    def __init__(self, ttype: TType):
        self._type = ttype
        self._bool: Optional[bool] = None
        self._number: Optional[Union[int, float]] = None
        self._str: Optional[str] = None
        self._array: Optional[Tuple[TValue, ...]] = None
        self._object: Optional[Mapping[str, TValue]] = None

    @property
    def type(self) -> TType:
        return self._type

    # ============================================================
    # Constructors
    # ============================================================

    @staticmethod
    def null() -> "TValue":
        return TValue(TType.NULL)

    @staticmethod
    def bool_(v: bool) -> "TValue":
        tv = TValue(TType.BOOL)
        tv._bool = bool(v)
        return tv

    @staticmethod
    def number(v: Union[int, float]) -> "TValue":
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise TypeError(f"not a number: {v!r}")
        tv = TValue(TType.NUMBER)
        tv._number = v
        return tv

    @staticmethod
    def str_(v: str) -> "TValue":
        tv = TValue(TType.STRING)
        tv._str = str(v)
        return tv

    @staticmethod
    def array(*values: "TValue") -> "TValue":
        tv = TValue(TType.ARRAY)
        tv._array = tuple(values)
        return tv

    @staticmethod
    def object(*entries: MapEntry) -> "TValue":
        return TValue.object_from_pairs((e.key, e.value) for e in entries)

    @staticmethod
    def object_from_pairs(pairs: Iterable[Tuple[str, "TValue"]]) -> "TValue":
        """Build an object; a repeated key keeps its first position and last value."""
        data: Dict[str, TValue] = {}
        for key, value in pairs:
            data[key] = value
        tv = TValue(TType.OBJECT)
        tv._object = MappingProxyType(data) if data else _EMPTY_OBJECT
        return tv

    # ============================================================
    # Accessors
    # ============================================================

    def is_null(self) -> bool:
        return self._type == TType.NULL

    def as_bool(self) -> bool:
        if self._type != TType.BOOL:
            raise TypeError("not a bool")
        return self._bool  # type: ignore

    def as_number(self) -> Union[int, float]:
        if self._type != TType.NUMBER:
            raise TypeError("not a number")
        return self._number  # type: ignore

    def as_str(self) -> str:
        if self._type != TType.STRING:
            raise TypeError("not a string")
        return self._str  # type: ignore

    def as_array(self) -> Tuple["TValue", ...]:
        if self._type != TType.ARRAY:
            raise TypeError("not an array")
        return self._array  # type: ignore

    def as_object(self) -> Mapping[str, "TValue"]:
        if self._type != TType.OBJECT:
            raise TypeError("not an object")
        return self._object  # type: ignore

    def keys(self) -> List[str]:
        """Object keys in insertion order."""
        return list(self.as_object().keys())

    def get(self, key: str) -> Optional["TValue"]:
        """Get field from object by key."""
        if self._type != TType.OBJECT:
            return None
        return self._object.get(key)  # type: ignore

    def index(self, i: int) -> "TValue":
        """Get element from array by index."""
        return self.as_array()[i]

    def __len__(self) -> int:
        """Length of an array or number of object keys."""
        if self._type == TType.ARRAY:
            return len(self._array)  # type: ignore
        if self._type == TType.OBJECT:
            return len(self._object)  # type: ignore
        return 0

    # ============================================================
    # Equality
    # ============================================================

    def _payload(self):
        if self._type == TType.NULL:
            return None
        elif self._type == TType.BOOL:
            return self._bool
        elif self._type == TType.NUMBER:
            return self._number
        elif self._type == TType.STRING:
            return self._str
        elif self._type == TType.ARRAY:
            return self._array
        # Key order is significant, so compare as a sequence of pairs
        return tuple(self._object.items())  # type: ignore

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TValue):
            return NotImplemented
        return self._type == other._type and self._payload() == other._payload()

    def __hash__(self) -> int:
        return hash((self._type, self._payload()))

    def __repr__(self) -> str:
        if self._type == TType.NULL:
            return "TValue.null()"
        elif self._type == TType.BOOL:
            return f"TValue.bool_({self._bool})"
        elif self._type == TType.NUMBER:
            return f"TValue.number({self._number!r})"
        elif self._type == TType.STRING:
            return f"TValue.str_({self._str!r})"
        elif self._type == TType.ARRAY:
            return f"TValue.array({', '.join(repr(v) for v in self._array)})"  # type: ignore
        return f"TValue.object({', '.join(repr(k) for k in self._object)})"  # type: ignore


# ============================================================
# Classification
# ============================================================

_PRIMITIVE_TYPES = frozenset((TType.NULL, TType.BOOL, TType.NUMBER, TType.STRING))


def is_primitive(v: TValue) -> bool:
    return v.type in _PRIMITIVE_TYPES


def is_array(v: TValue) -> bool:
    return v.type == TType.ARRAY


def is_object(v: TValue) -> bool:
    return v.type == TType.OBJECT


# The array predicates hold vacuously for an empty array, so callers check
# emptiness first.

def is_array_of_primitives(v: TValue) -> bool:
    return is_array(v) and all(is_primitive(item) for item in v.as_array())


def is_array_of_arrays(v: TValue) -> bool:
    return is_array(v) and all(is_array(item) for item in v.as_array())


def is_array_of_objects(v: TValue) -> bool:
    return is_array(v) and all(is_object(item) for item in v.as_array())


# ============================================================
# Helper Functions
# ============================================================

def field(key: str, value: TValue) -> MapEntry:
    """Create a field entry for object construction."""
    return MapEntry(key, value)


# Shorthand constructors
class T:
    """Shorthand constructors for TValue."""

    @staticmethod
    def null() -> TValue:
        return TValue.null()

    @staticmethod
    def bool(v: bool) -> TValue:
        return TValue.bool_(v)

    @staticmethod
    def num(v: Union[int, float]) -> TValue:
        return TValue.number(v)

    @staticmethod
    def str(v: str) -> TValue:
        return TValue.str_(v)

    @staticmethod
    def array(*values: TValue) -> TValue:
        return TValue.array(*values)

    @staticmethod
    def object(*entries: MapEntry) -> TValue:
        return TValue.object(*entries)


t = T()
