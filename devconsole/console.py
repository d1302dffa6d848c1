"""
Devconsole console: the context object a host constructs and drives.

What this module provides
- Console: owns the command registry, the type parsers, and the history, renders
  output through a rich Console, and dispatches raw input lines.

Dispatch (Console.run)
    tokenize → resolve → record history → reconcile → default? → arity → coerce → invoke

- every stage failure is reported through trigger() as exactly one fault:
  CommandNotFoundError, ArityMismatchError, ParameterCoercionError,
  UnknownCoercionTypeError, or CallbackError.
- all tokens are coerced before any callback runs; a bad third argument means the
  callback never sees the first two.
- callbacks are trusted host code running synchronously; an exception they raise is
  reported, never propagated (BaseExceptions such as SystemExit still are).

Runtime options
- name: program label used in fault headers (overridable with __prog__ in __main__).
- output: rich Console receiving logs and rendered faults (stdout by default).
- shell: render faults (True) or raise errors / warn warnings (False).
- fancy: render faults inside panels.
- colorful: style logs and faults (styles overridable with __styles__ in __main__).
- development: enables registrations requested with development=True.
- history: number of raw inputs kept.
- builtins: install the built-in commands (devconsole, print, help, ...).

Quick start
    from devconsole import Console

    console = Console()

    @console.command("greet", "hi", "Greet someone", "Who to greet")
    def greet(name: str):
        console.log_success("hello, %s" % name)

    console.run("hi world")
"""
import difflib
import enum
from threading import Lock

from rich.console import Console as RichConsole
from rich.text import Text

from . import builtin
from .coercion import Parsers
from .commands import Command, command as _command
from .faults import *
from .history import History
from .registry import CommandRegistry
from .suggestions import suggest, hint
from .tokens import tokenize, reconcile
from .utils import *
from .values import unwrap

_STYLES = {
    "log-error": "#E99497",
    "log-warning": "#B3E283",
    "log-success": "#B3E283",
    "log-separator": "bold",
}


def _coercion_hint(parameter):
    """
    Suggest accepted spellings for a parameter whose token failed to coerce.
    """
    literals = "'null'" if parameter.nullable else ""
    if parameter.type is bool:
        hint = "use true/false or 1/0"
    elif isinstance(parameter.type, enum.EnumMeta):
        hint = "use one of: %s" % " · ".join(parameter.type.__members__)
    else:
        hint = "pass a value convertible to %s" % parameter.typename
    if literals:
        hint += ", or %s for no value" % literals
    return hint


class Console:
    """
    Interactive command console bound to one host application.

    The console is an explicit context object: there is no process-wide instance,
    and several consoles can live side by side with their own commands and history.
    """

    def __init__(
            self,
            name="devconsole",
            /,
            *,
            output=Unset,
            shell=True,
            fancy=False,
            colorful=True,
            development=False,
            history=10,
            builtins=True,
    ):
        if not isinstance(name, str):
            raise TypeError("console 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError("console 'name' cannot be empty")
        if not isinstance(output, RichConsole | UnsetType):
            raise TypeError("console 'output' must be a rich console")

        self._name = name
        self._output = coalesce(output, RichConsole(highlight=False))
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._development = bool(development)
        self._lock = Lock()
        self._commands = CommandRegistry()
        self._parsers = Parsers()
        self._history = History(history)
        self._fallback = None
        self._fault = None

        if builtins:
            for command in builtin.commands(self):
                self._commands.register(command, custom=False)

    name = property(lambda self: self._name)
    output = property(lambda self: self._output)
    shell = property(lambda self: self._shell)
    fancy = property(lambda self: self._fancy)
    colorful = property(lambda self: self._colorful)
    development = property(lambda self: self._development)
    commands = property(lambda self: self._commands)
    parsers = property(lambda self: self._parsers)
    history = property(lambda self: self._history)

    @property
    def fault(self):
        """
        The fault reported by the latest run(), or None when it succeeded.
        """
        return self._fault

    # --- faults ---

    def fallback(self, fallback, /):
        """
        Route every triggered fault to `fallback(fault)` instead of rendering it.

        Usable as a decorator; pass None to restore the default behavior.
        """
        if fallback is not None and not callable(fallback):
            raise TypeError("fallback() argument must be callable")
        self._fallback = fallback
        return fallback

    def trigger(self, fault, /, **options):
        if (
                not hasattr(fault, "__trigger__") or
                not callable(fault.__trigger__) or
                not hasattr(fault, "__replace__") or
                not callable(fault.__replace__)
        ):
            raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
        fault = fault.__replace__(**{
            "prog": self._name,
            "output": self._output,
            "shell": self._shell,
            "fancy": self._fancy,
            "colorful": self._colorful,
        } | options)
        if isinstance(fault, ConsoleException):
            self._fault = fault
        if self._fallback:
            self._fallback(fault)
        else:
            trigger(fault)
        return fault

    def _fail(self, fault, /, **options):
        self.trigger(fault, **options)
        return False

    # --- registration ---

    def register(self, command, /, development=False):
        """
        Register a caller-defined command; returns whether it was added.

        Refused (False) when the command is development-only and the console is
        not in development mode, when its name is empty, or when its name or an
        alias is already taken (a DuplicateRegistrationWarning is triggered).
        """
        if not isinstance(command, Command):
            raise TypeError("register() argument must be a command")
        if development and not self._development:
            return False
        if command.name and (conflicts := self._commands.conflicts(command)):
            self.trigger(DuplicateRegistrationWarning(
                "command %r conflicts with already registered name(s) %s" % (
                    command.name, ", ".join(map(repr, sorted(conflicts)))
                ),
                title="duplicate registration",
                code=FaultCode.DUPLICATE_REGISTRATION,
                hint="pick another name or alias, or remove the existing command first",
                docs=getdoc(FaultCode.DUPLICATE_REGISTRATION),
                command=command,
                conflicts=conflicts,
            ))
            return False
        return self._commands.register(command, custom=True)

    def remove(self, name, /):
        if not isinstance(name, str):
            raise TypeError("remove() argument must be a string")
        elif not name:
            raise ValueError("remove() argument must be a non-empty string")
        return self._commands.remove(name)

    def register_type(self, type, parse, /, default=Unset):
        """
        Register the parse function for a parameter type; returns whether it was added.
        """
        if self._parsers.register(type, parse, default=default):
            return True
        self.trigger(DuplicateRegistrationWarning(
            "a parser for type %r is already registered" % getattr(type, "__name__", type),
            title="duplicate registration",
            code=FaultCode.DUPLICATE_REGISTRATION,
            hint="the first registration is kept; register a distinct type instead",
            docs=getdoc(FaultCode.DUPLICATE_REGISTRATION),
            type=type,
        ))
        return False

    def command(self, name=Unset, /, *args, development=False, **kwargs):
        """
        Decorator: build a command from the decorated function and register it.

            @console.command("print", "say", "Display a message", "Message to display")
            def echo(message: str): ...

        The built Command is returned whether or not registration succeeded.
        """
        def wrapper(callback, /):
            if name is Unset:
                command = _command(callback, *args, **kwargs)
            else:
                command = _command(callback, name, *args, **kwargs)
            self.register(command, development=development)
            return command

        if callable(name):
            callback, name = name, Unset
            return wrapper(callback)
        return rename(wrapper, "command")

    def resolve(self, name, /):
        return self._commands.resolve(name)

    # --- dispatch ---

    def run(self, raw, /):
        """
        Parse and execute one input line; returns whether a command ran without fault.
        """
        if not isinstance(raw, str):
            raise TypeError("run() argument must be a string")
        elif not raw:
            raise ValueError("run() argument must be a non-empty string")

        self._fault = None
        tokens = tokenize(raw)
        command = self._commands.resolve(tokens[0])

        # recorded even when nothing resolves, so typos can be recalled and fixed
        self._history.record(command.name if command else tokens[0], raw)

        if command is None:
            suggestions = difflib.get_close_matches(
                tokens[0].lower(),
                [identifier for command in self._commands.values() for identifier in command.identifiers],
                5,
            )
            try:
                hint = "did you mean %r? you can also run 'commands' to see them all" % suggestions[0]
            except IndexError:
                hint = "run 'commands' to see all available commands"
            return self._fail(CommandNotFoundError(
                "could not find the specified command %r" % tokens[0],
                title="command not found",
                code=FaultCode.COMMAND_NOT_FOUND,
                hint=hint,
                docs=getdoc(FaultCode.COMMAND_NOT_FOUND),
                input=raw,
                token=tokens[0],
                suggestions=suggestions,
            ))

        tokens = reconcile(tokens, len(command.parameters))

        if len(tokens) == 1 and command.default is not None:
            return self._invoke(command, command.default, (), raw)

        if len(tokens) - 1 != len(command.parameters):
            return self._fail(ArityMismatchError(
                "invalid number of parameters for %r: expected %d but %d were given" % (
                    command.name, len(command.parameters), len(tokens) - 1
                ),
                title="invalid number of parameters",
                code=FaultCode.ARITY_MISMATCH,
                hint="use: %s" % command.syntax(),
                docs=getdoc(FaultCode.ARITY_MISMATCH),
                input=raw,
                command=command,
            ))

        values = []
        for index, (token, parameter) in enumerate(zip(tokens[1:], command.parameters), start=1):
            try:
                values.append(self._parsers.coerce(token, parameter))
            except UnknownCoercionTypeError as fault:
                return self._fail(fault.__replace__(
                    hint="register a parser with register_type() before using %s" % parameter.syntax(),
                    docs=getdoc(FaultCode.UNKNOWN_TYPE_FOR_COERCION),
                    input=raw,
                    token=token,
                    index=index,
                    command=command,
                    parameter=parameter,
                ))
            except Exception as exception:
                return self._fail(ParameterCoercionError(
                    "invalid parameter type %r at %s position, expected %s" % (
                        token, ordinal(index), parameter.syntax()
                    ),
                    title="invalid parameter type",
                    code=FaultCode.PARAMETER_COERCION_FAILURE,
                    hint=_coercion_hint(parameter),
                    docs=getdoc(FaultCode.PARAMETER_COERCION_FAILURE),
                    input=raw,
                    token=token,
                    index=index,
                    command=command,
                    parameter=parameter,
                    exception=exception,
                ))

        return self._invoke(command, command.callback, unwrap(values), raw)

    def _invoke(self, command, callback, arguments, raw):
        try:
            callback(*arguments)
        except Exception as exception:
            return self._fail(CallbackError(
                "command %r failed: %s" % (command.name, str(exception) or type(exception).__name__),
                title="command failed",
                code=FaultCode.CALLBACK_THREW,
                hint="check the values passed to %s" % command.syntax(),
                docs=getdoc(FaultCode.CALLBACK_THREW),
                input=raw,
                command=command,
                exception=exception,
            ))
        return True

    def submit(self, text, /):
        """
        Run text coming from an input field: a trailing newline is dropped and blank
        input is ignored (returns False without touching the history).
        """
        if not isinstance(text, str):
            raise TypeError("submit() argument must be a string")
        if not (text := text.rstrip("\n")).strip():
            return False
        return self.run(text)

    # --- history & completion ---

    def cycle(self, direction, /):
        """
        Step through the history (see History.cycle) and return the recalled input.
        """
        return self._history.cycle(direction)

    def suggest(self, prefix, /):
        """
        Autocomplete a partial command name against the live registry.
        """
        return suggest(self._commands.values(), prefix)

    def hint(self, text, /):
        """
        Return the syntax of the parameters still missing from a partial input line.
        """
        tokens = tokenize(text)
        if (command := self._commands.resolve(tokens[0])) is None:
            return ""
        return hint(command, len([token for token in tokens[1:] if token]))

    # --- output ---

    def _style(self, name):
        if not self._colorful:
            return ""
        return (_STYLES | getattr(__import__("__main__"), "__styles__", {})).get(name, "")

    def log(self, message="", /, style=Unset):
        """
        Print one message to the output; rich markup in `message` is never interpreted.
        """
        if not isinstance(message, Text):
            message = Text(str(message), coalesce(style, "") if self._colorful else "")
        with self._lock:
            self._output.print(message)

    def log_error(self, message, /):
        self.log(message, self._style("log-error"))

    def log_warning(self, message, /):
        self.log(message, self._style("log-warning"))

    def log_success(self, message, /):
        self.log(message, self._style("log-success"))

    def log_variable(self, name, value, /, suffix=""):
        self.log("%s: %s%s." % (name, value, suffix))

    def log_collection(self, collection, /, format=Unset, prefix="", suffix=""):
        """
        Print every item of `collection` on its own line as `prefix + format(item) + suffix`.

        The lines are written in one call, so concurrent logs never interleave with them.
        """
        format = coalesce(format, str)
        self.log("\n".join(prefix + format(item) + suffix for item in collection))

    def log_separator(self, message=Unset, /):
        if message is Unset:
            return self.log("---")
        self.log(Text.assemble("--- ", (str(message), self._style("log-separator")), " ---"))

    def log_command(self, name=Unset, /):
        """
        Echo the syntax of a command (the current one by default) as `>> syntax.`
        """
        if (command := self._commands.resolve(coalesce(name, self._history.current))) is None:
            return
        self.log(Text.assemble(">> ", command.__rich__() if self._colorful else command.syntax(), "."))

    def clear(self):
        with self._lock:
            self._output.clear()


__all__ = (
    "Console",
)
