"""
Coerced parameter values as a tagged union.

Every token the dispatcher coerces becomes a Value: a (kind, object, type) triple.
The kind is decided once from the parameter's declared type (classify), so each
coercion route handles a closed set of shapes instead of a loosely typed object
array. Callbacks never see Value instances; the dispatcher unwraps .object.

Kinds
- NULL     the absent value (None), produced by "null"/"~" for nullable/reference types
- BOOL     bool
- INT      int
- FLOAT    float, complex, decimal.Decimal, fractions.Fraction
- STRING   str
- ENUM     enum.Enum subclasses (object is the member)
- CUSTOM   any other class (object is whatever its parser returned)
"""
import decimal
import enum
import fractions
from collections import namedtuple
from enum import IntEnum


class ValueKind(IntEnum):
    NULL = 0
    BOOL = 1
    INT = 2
    FLOAT = 3
    STRING = 4
    ENUM = 5
    CUSTOM = 6


Value = namedtuple("Value", ("kind", "object", "type"))
Value.__doc__ = "one coerced parameter value: its kind, the Python object, and the declared type."


def classify(type, /):
    """
    Return the ValueKind a declared parameter type produces.

    bool is tested before int (bool is an int subclass) and enumerations before
    every primitive (IntEnum members are ints too).
    """
    match type:
        case _ if type is bool:
            return ValueKind.BOOL
        case _ if isinstance(type, enum.EnumMeta):
            return ValueKind.ENUM
        case _ if type is int:
            return ValueKind.INT
        case _ if type in (float, complex, decimal.Decimal, fractions.Fraction):
            return ValueKind.FLOAT
        case _ if type is str:
            return ValueKind.STRING
        case _:
            return ValueKind.CUSTOM


def null(type, /):
    """
    Build the absent value for a declared type.
    """
    return Value(ValueKind.NULL, None, type)


def wrap(object, type, /):
    """
    Wrap a coerced object into a Value tagged by its declared type.
    """
    if object is None:
        return null(type)
    return Value(classify(type), object, type)


def unwrap(values, /):
    """
    Return the plain objects of a sequence of values, in order.
    """
    return tuple(value.object for value in values)


__all__ = (
    "ValueKind",
    "Value",
    "classify",
    "null",
    "wrap",
    "unwrap",
)
