"""
Devconsole parameter descriptors.

Overview
- Parameter: one typed, positional argument of a command. It carries a name, a
  short help text, and the resolved type used by the coercion stage.

Type resolution (done once, at construction)
- Plain classes (int, str, MyEnum, Path, ...) are kept as-is.
- Nullable annotations, `X | None` or `Optional[X]`, resolve to `X` with the
  `nullable` flag set; "null" and "~" then coerce to None for that parameter.
- Any other union is rejected: a single token must map to a single target type.
- Non-class annotations (list[int], typing.Any, ...) are accepted here and reported
  as UnknownCoercionTypeError when a token is actually coerced, so a host may
  declare the command first and register a parser for the type later.

Syntax
- syntax() renders the parameter as `<(type)name>`, the fragment used by help,
  arity errors, and inline hints. Nullable types render as `<(type | None)name>`.

Quick example:
    >>> from devconsole.parameters import Parameter
    >>> Parameter("buildIndex", "Build index of the scene to load", int).syntax()
    '<(int)buildIndex>'
"""
import types
import typing

from rich.text import Text

from .internals import DescriptorType
from .utils import *


def _resolve_type(cls, annotation, /):
    """
    Internal: split a declared annotation into (type, nullable).

    Raises
    - TypeError: for NoneType alone or unions with more than one non-None member.
    """
    if annotation is None or annotation is type(None):
        raise TypeError(f"{cls.__typename__} 'type' cannot be None")

    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        members = [member for member in typing.get_args(annotation) if member is not type(None)]
        if len(members) != 1 or len(members) == len(typing.get_args(annotation)):
            raise TypeError(f"{cls.__typename__} 'type' only supports optional unions (X | None)")
        return members[0], True

    return annotation, False


def typename(type, /):
    """
    Return the display label of a type ("int", "Key", "list[int]").
    """
    if isinstance(type, types.GenericAlias) or typing.get_origin(type) is not None:
        return repr(type).removeprefix("typing.")
    return getattr(type, "__name__", repr(type))


class Parameter(metaclass=DescriptorType):
    """
    Positional, typed argument of a command.

    Properties (read-only, see __introspectable__)
    - name: str, trimmed and non-empty.
    - descr: str, short help text (may be empty).
    - type: the resolved target type.
    - nullable: whether "null"/"~" are accepted as the absent value.
    """

    __introspectable__ = (
        "name",
        "descr",
        "type",
        "nullable",
    )

    def __init__(self, name, descr="", type=str, /):
        if not isinstance(name, str):
            raise TypeError(f"{Parameter.__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError(f"{Parameter.__typename__} 'name' cannot be empty")

        if not isinstance(descr, str):
            raise TypeError(f"{Parameter.__typename__} 'descr' must be a string")

        self._name = name
        self._descr = descr.strip()
        self._type, self._nullable = _resolve_type(Parameter, type)

    def __setattr__(self, name, value, /):
        if not name.startswith("_") or hasattr(self, "_nullable"):
            raise AttributeError(f"{Parameter.__typename__} is immutable")
        super().__setattr__(name, value)

    def __eq__(self, other):
        if not isinstance(other, Parameter):
            return NotImplemented
        return (self.name, self.descr, self.type, self.nullable) == (other.name, other.descr, other.type, other.nullable)

    def __hash__(self):
        return hash((self.name, self.descr, self.type, self.nullable))

    @property
    def typename(self):
        """
        Display label of the parameter type, including the nullable marker.
        """
        return typename(self.type) + " | None" * self.nullable

    def syntax(self):
        """
        Render the parameter as `<(type)name>`.
        """
        return "<(%s)%s>" % (self.typename, self.name)

    def __rich__(self):
        return Text.assemble("<(", (self.typename, "italic"), ")", (self.name, "bold"), ">")


__all__ = (
    "Parameter",
    "typename",
)
