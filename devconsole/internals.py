"""
internal plumbing shared by the descriptor classes (parameters and commands).

scope
- DescriptorType: metaclass that gives descriptor classes a stable typename, read-only
  mirrored properties, and readable __repr__/__rich_repr__ implementations.

conventions
- a class lists its public fields in __introspectable__; each one is backed by a
  private "_{name}" attribute and published through utils.mirror().
- __displayable__ (optional) narrows what __rich_repr__/__repr__ show.
- __typename__ is derived from the class name (camel-case split with hyphens) and
  is used in validation messages ("parameter 'name' must be a string").
"""
import functools
import operator
import re

from .utils import *


class DescriptorType(type):
    """
    metaclass that turns plain classes into introspectable, read-only descriptors.

    responsibilities
    - expose every name in __introspectable__ as a read-only property (via mirror()).
    - provide a compact __repr__ and a structured __rich_repr__ for rich.pretty.
    - derive __typename__ for consistent labels in errors and help output.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            return a concise, stable representation with key metadata.

            example
            - command(name='print', aliases=frozenset({'say'}), ...)
            """
            fields = ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            return "%s(%s)" % (type(self).__typename__, fields)

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            yield (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)

        if "__repr__" not in namespace:
            self.__repr__ = __repr__
        if "__rich_repr__" not in namespace:
            self.__rich_repr__ = __rich_repr__

        return self


__all__ = (
    "DescriptorType",
)
