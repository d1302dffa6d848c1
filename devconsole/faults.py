"""
Devconsole faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue the
  console can report. Codes are grouped by stage (routing, arity, coercion,
  delegation, registration) to keep logs and searches predictable.
- ConsoleException / ConsoleWarning: base types that carry message + options and
  know how to render themselves with rich in a friendly, lowercased, actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: parameter faults name the ordinal position of the token
  (“at second position”) so users can learn by trying.
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The console catches every stage failure and calls trigger(fault, **options).
- In shell mode, faults are printed to the console output; otherwise exceptions are
  raised and warnings are emitted through the warnings module.
"""
import inspect
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the console (stable identifiers).

    grouping (by dispatch stage)
    - routing (2110x)
      • COMMAND_NOT_FOUND
    - arity (2111x)
      • ARITY_MISMATCH
    - coercion (2112x)
      • PARAMETER_COERCION_FAILURE, UNKNOWN_TYPE_FOR_COERCION
    - delegated (2113x)
      • CALLBACK_THREW
    - registration warnings (2210x)
      • DUPLICATE_REGISTRATION

    normalize() lets the host remap codes to its own labels while keeping the
    numeric identifiers stable.
    """
    # --- routing errors (21xxx) ---
    COMMAND_NOT_FOUND           = 21101

    # --- arity errors (21xxx) ---
    ARITY_MISMATCH              = 21111

    # --- coercion errors (21xxx) ---
    PARAMETER_COERCION_FAILURE  = 21121
    UNKNOWN_TYPE_FOR_COERCION   = 21122

    # --- delegated errors (21xxx) ---
    CALLBACK_THREW              = 21131

    # --- warnings (22xxx) ---
    DUPLICATE_REGISTRATION      = 22101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, styles):
    """
    build the rich renderable shared by exceptions and warnings.

    layout
    - header: "[ prog — code | Title ]"
    - body: message, then " → hint", then docs when the host provides them.
    - fancy mode wraps the body in a Panel titled with the header.
    """
    main = __import__("__main__")
    options = fault.options
    styles = defaultdict(str, styles | getattr(main, "__styles__", {}))
    colorful = options.get("colorful", True)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    prog = text(getattr(main, "__prog__", options.get("prog", "devconsole")), "prog-name")
    code = options.get("code", Unset)

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code.normalize() if code else "-", "code"),
        " | ",
        text(options.get("title", "fault").title(), "title"),
        " ]"
    )
    body = [text(fault.message, "message")]
    if options.get("hint"):
        body.append(Text.assemble(text(" → ", "hint-arrow"), text(options["hint"], "hint")))
    if options.get("docs"):
        body.append(text(options["docs"], "docs"))

    if options.get("fancy", False):
        return Panel(Group(*body), title=header, title_align="left")

    return Group(header, *body)


class ConsoleException(Exception):
    """
    base class for every error the dispatcher can report.

    the message is a single lowercased sentence; the options mapping carries the
    rendering context (prog, code, title, hint, docs, shell, fancy, colorful,
    output) plus any stage-specific details (input, token, index, parameter,
    command, exception).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title

            # body
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "docs": "underline #00E5FF dim",
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", True):
            raise self from None
        self.options.get("output", console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class CommandNotFoundError(ConsoleException): ...
class ArityMismatchError(ConsoleException): ...
class ParameterCoercionError(ConsoleException): ...
class UnknownCoercionTypeError(ConsoleException): ...
class CallbackError(ConsoleException): ...


class ConsoleWarning(ABC, Warning):
    """
    base class for non-fatal notices (registration conflicts and the like).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
            "docs": "underline #FFB400 dim",
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", True):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        self.options.get("output", console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class DuplicateRegistrationWarning(ConsoleWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich output; otherwise, exceptions are
      raised and warnings are warned.

    typical options
    - prog, output, shell, fancy, colorful, title, code, hint, docs, and any other
      context the reporter may want to keep (input, token, index, command, ...).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ConsoleException",
    "CommandNotFoundError",
    "ArityMismatchError",
    "ParameterCoercionError",
    "UnknownCoercionTypeError",
    "CallbackError",
    "ConsoleWarning",
    "DuplicateRegistrationWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
