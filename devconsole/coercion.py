"""
Type coercion: turning raw tokens into typed parameter values.

Overview
- Parsers: registry mapping a type to a parse function `parse(token) -> object`.
  At most one entry exists per type; a second registration is refused (False) and
  never overwrites the first one.
- Parsers.coerce(token, parameter): the full coercion pipeline for one token,
  returning a values.Value.

Pipeline (first match wins)
1. nullable or reference type, token "null" (any case) or "~"  → absent value (None)
2. value type, token "default" (any case) or "~"              → the type's zero value
3. a registered parse function for the type                    → its result
4. enumeration: member name (any case), then integer value     → the member
5. generic conversion                                          → bool/number/str rules,
                                                                  or type(token)

Vocabulary
- value types: bool, int, float, complex, Decimal, Fraction, Enum subclasses, and
  custom types registered with an explicit `default=` zero value.
- reference types: everything else (str included), which is why "null" coerces to
  None for a str parameter.

Errors
- A type with no route at all (non-class annotations such as list[int]) raises
  UnknownCoercionTypeError; every other failure, including exceptions raised by
  a registered parser, surfaces as the parser's own exception for the dispatcher
  to normalize into ParameterCoercionError.
"""
import builtins
import decimal
import enum
import fractions
import types
import typing

from .faults import UnknownCoercionTypeError, FaultCode
from .parameters import typename
from .utils import *
from .values import *

# Literal tokens understood by every parameter, whatever its type.
NULL_TOKENS = ("null", "~")
DEFAULT_TOKENS = ("default", "~")

_PRIMITIVES = (bool, int, float, complex, decimal.Decimal, fractions.Fraction)


def _zero_enum(type, /):
    """
    Zero value of an enumeration: the member whose value is 0, else the first member.
    """
    try:
        return type(0)
    except ValueError:
        return next(iter(type))


def _parse_bool(token, /):
    # "0"/"1" are accepted alongside true/false, any case
    match token.strip().lower():
        case "true" | "1":
            return True
        case "false" | "0":
            return False
        case _:
            raise ValueError("%r is not a boolean" % token)


def _parse_enum(token, type, /):
    """
    Resolve an enumeration member by name (case-insensitive), then by integer value.
    """
    lowered = token.lower()
    for name, member in type.__members__.items():
        if name.lower() == lowered:
            return member
    try:
        number = int(token)
    except ValueError:
        raise ValueError("%r is not a member of %s" % (token, type.__name__)) from None
    return type(number)


class Parsers:
    """
    Registry of custom parse functions, keyed by type.

    Contract
    - register(type, parse, default=Unset) -> bool
      • False when the type already has an entry (no overwrite).
      • default, when given, is the zero value for the "default" literal and makes
        the type a value type.
    - supports(type) -> bool: whether some pipeline route can coerce the type.
    - coerce(token, parameter) -> Value: run the pipeline (see module docstring).
    """

    def __init__(self):
        self._entries = {}
        self._defaults = {}

    def __contains__(self, type):
        return type in self._entries

    def __len__(self):
        return len(self._entries)

    def register(self, type, parse, /, default=Unset):
        if not callable(parse):
            raise TypeError("register() parse function must be callable")
        if type in self._entries:
            return False
        self._entries[type] = parse
        if default is not Unset:
            self._defaults[type] = default
        return True

    def is_value_type(self, type, /):
        return type in self._defaults or type in _PRIMITIVES or isinstance(type, enum.EnumMeta)

    def zero(self, type, /):
        """
        Return the zero value of a value type.
        """
        if type in self._defaults:
            return self._defaults[type]
        if isinstance(type, enum.EnumMeta):
            return _zero_enum(type)
        return type()

    def supports(self, type, /):
        return (
            type in self._entries
            or isinstance(type, enum.EnumMeta)
            or (
                isinstance(type, builtins.type)
                and not isinstance(type, types.GenericAlias)
                and type is not typing.Any
            )
        )

    def coerce(self, token, parameter, /):
        type = parameter.type
        lowered = token.lower()

        if (parameter.nullable or not self.is_value_type(type)) and lowered in NULL_TOKENS:
            return null(type)

        if parameter.nullable and lowered == "default":
            return null(type)

        if self.is_value_type(type) and lowered in DEFAULT_TOKENS:
            return wrap(self.zero(type), type)

        if type in self._entries:
            return wrap(self._entries[type](token), type)

        if not self.supports(type):
            raise UnknownCoercionTypeError(
                "no parser is registered for type %r" % typename(type),
                title="unknown parameter type",
                code=FaultCode.UNKNOWN_TYPE_FOR_COERCION,
                type=type,
            )

        match classify(type):
            case ValueKind.BOOL:
                return wrap(_parse_bool(token), type)
            case ValueKind.ENUM:
                return wrap(_parse_enum(token, type), type)
            case ValueKind.INT | ValueKind.FLOAT | ValueKind.STRING | ValueKind.CUSTOM:
                return wrap(type(token), type)
            case kind:
                raise AssertionError("unhandled value kind %r" % kind)


__all__ = (
    "NULL_TOKENS",
    "DEFAULT_TOKENS",
    "Parsers",
)
