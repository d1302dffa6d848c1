"""
Devconsole command layer: describe invocable commands.

What this module provides
- Command: an immutable descriptor for one invocable command with
  • a canonical name (lower-cased, whitespace removed) and a set of aliases,
  • a help text and an ordered tuple of Parameter descriptors,
  • a primary callback receiving the coerced values positionally,
  • an optional default callback, run when a parameterized command is called bare
    (query/toggle semantics such as `fullscreen` printing the current state).

- command(...): build a Command from an explicitly supplied callable, taking the
  parameter names from its signature and the parameter types from its annotations.
  It works both as a decorator factory and as a plain call:

      @command("print", "say", "Display a message", "Message to display")
      def echo(message: str): ...

      quit = command(on_quit, "quit", "exit", "Exit the application")

Core ideas
- Registration is explicit: the host hands commands to Console.register() (or uses
  Console.command()); nothing is discovered by scanning modules.
- Canonicalization happens at construction, so registry lookups and collision checks
  only ever compare canonical strings.
- The only mutable bit is the one-time "custom" flag, set when a caller (not the
  console itself) registers the command.

Syntax
- syntax() renders `name <(type1)param1> <(type2)param2>`, the text used by help,
  arity errors, and the `>> ...` command echo.
"""
import inspect
import typing
from collections.abc import Iterable

from rich.text import Text

from .internals import DescriptorType
from .parameters import Parameter
from .utils import *


def _sanitize_aliases(cls, name, aliases, /):
    """
    Internal: canonicalize aliases into a frozenset.

    Accepted forms
    - a comma-separated string ("exit,shutdown")
    - any iterable of strings

    Empty aliases (after canonicalization) and aliases equal to the command's own
    name are dropped; an empty result means "no aliases".
    """
    if isinstance(aliases, str):
        aliases = aliases.split(",")
    elif not isinstance(aliases, Iterable):
        raise TypeError(f"{cls.__typename__} 'aliases' must be a string or an iterable of strings")

    sanitized = set()
    for alias in aliases:
        if not isinstance(alias, str):
            raise TypeError(f"{cls.__typename__} aliases must be strings")
        if (alias := canonicalize(alias)) and alias != name:
            sanitized.add(alias)
    return frozenset(sanitized)


def _sanitize_callback(cls, callback, arity, /, role="callback"):
    """
    Internal: ensure a callback is callable and accepts `arity` positional arguments.

    Callables without an inspectable signature (some builtins) are trusted.
    """
    if not callable(callback):
        raise TypeError(f"{cls.__typename__} '{role}' must be callable")
    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError):
        return callback
    try:
        signature.bind(*range(arity))
    except TypeError:
        raise TypeError(
            f"{cls.__typename__} '{role}' must accept {arity} positional argument(s)"
        ) from None
    return callback


class Command(metaclass=DescriptorType):
    """
    Immutable description of one invocable command.

    Properties (read-only, see __introspectable__)
    - name: canonical name (may be empty; the registry rejects empty names).
    - aliases: frozenset of canonical aliases (empty when there are none).
    - descr: help text.
    - parameters: tuple of Parameter, in call order.
    - callback: primary callback, called as callback(*values).
    - default: callback without arguments, or None.
    - custom: True once a caller registered the command (builtin is the inverse).

    Construction rules
    - default requires at least one parameter (a parameterless command has nothing
      to fall back from).
    - callback must accept exactly len(parameters) positional arguments.
    """

    __introspectable__ = (
        "name",
        "aliases",
        "descr",
        "parameters",
        "callback",
        "default",
        "custom",
    )

    __displayable__ = (
        "name",
        "aliases",
        "descr",
        "parameters",
        "custom",
    )

    def __init__(self, name, callback, /, aliases=(), descr="", parameters=(), *, default=Unset):
        if not isinstance(name, str):
            raise TypeError(f"{Command.__typename__} 'name' must be a string")
        if not isinstance(descr, str):
            raise TypeError(f"{Command.__typename__} 'descr' must be a string")
        if not isinstance(parameters, Iterable):
            raise TypeError(f"{Command.__typename__} 'parameters' must be an iterable of parameters")

        parameters = tuple(parameters)
        if not all(isinstance(parameter, Parameter) for parameter in parameters):
            raise TypeError(f"{Command.__typename__} 'parameters' must only contain parameters")

        if default is not Unset:
            if not parameters:
                raise TypeError(f"{Command.__typename__} 'default' requires at least one parameter")
            _sanitize_callback(Command, default, 0, role="default")

        self._name = canonicalize(name)
        self._aliases = _sanitize_aliases(Command, self._name, aliases)
        self._descr = descr.strip()
        self._parameters = parameters
        self._callback = _sanitize_callback(Command, callback, len(parameters))
        self._default = coalesce(default)
        self._custom = False

    def __setattr__(self, name, value, /):
        if not name.startswith("_"):
            raise AttributeError(f"{Command.__typename__} is immutable")
        super().__setattr__(name, value)

    @property
    def builtin(self):
        """
        Whether the command was registered by the console itself.
        """
        return not self._custom

    @property
    def identifiers(self):
        """
        Every string the command answers to: its name plus its aliases.
        """
        return frozenset({self._name}) | self._aliases

    def has_alias(self, *aliases):
        """
        Whether any of the given (non-empty) strings is one of this command's aliases.
        """
        return any(alias and canonicalize(alias) in self._aliases for alias in aliases)

    def _mark_custom(self):
        # one-time flag; registering twice cannot flip it back
        self._custom = True

    def syntax(self):
        """
        Render the command as `name <(type1)param1> <(type2)param2>`.
        """
        return " ".join((self._name, *(parameter.syntax() for parameter in self._parameters)))

    def __str__(self):
        return self._name

    def __rich__(self):
        fragments = [Text(self._name, "bold")]
        for parameter in self._parameters:
            fragments.extend((Text(" "), parameter.__rich__()))
        return Text.assemble(*fragments)


def _from_callback(callback, name=Unset, aliases=(), descr=Unset, /, *descrs, default=Unset):
    """
    Internal: build a Command from a callable's signature and annotations.

    - name defaults to the callable's __name__.
    - descr defaults to the first line of the callable's docstring.
    - parameter help texts are taken from `descrs`, in order; missing ones are "".
    - unannotated parameters are typed as str.
    """
    if not callable(callback):
        raise TypeError("command() source must be callable")

    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError):
        raise TypeError("command() source must have an inspectable signature") from None

    try:
        hints = typing.get_type_hints(callback)
    except NameError as exception:
        raise TypeError(f"command() cannot resolve annotations of {callback!r}: {exception}") from None

    parameters = []
    for index, parameter in enumerate(signature.parameters.values()):
        if parameter.kind not in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            raise TypeError(f"command() parameter {parameter.name!r} must be positional")
        parameters.append(Parameter(
            parameter.name,
            descrs[index] if index < len(descrs) else "",
            hints.get(parameter.name, str),
        ))

    if descr is Unset:
        descr = (inspect.getdoc(callback) or "").partition("\n")[0]

    return Command(
        coalesce(name, getattr(callback, "__name__", "")),
        callback,
        aliases,
        descr,
        parameters,
        default=default,
    )


def command(source=Unset, /, *args, **kwargs):
    """
    Create a Command from a callable, or return a decorator that will.

    Forms
    - @command                                   → name/descr from the function
    - @command("name", "alias1,alias2", "help", "param help", ..., default=...)
    - command(callable, "name", "aliases", "help", "param help", ..., default=...)
    """
    if callable(source):
        return _from_callback(source, *args, **kwargs)

    def wrapper(callback, /):
        if source is Unset:
            return _from_callback(callback, *args, **kwargs)
        return _from_callback(callback, source, *args, **kwargs)

    return rename(wrapper, "command")


__all__ = (
    "Command",
    "command",
)
