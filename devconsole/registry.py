"""
Command registry: ownership, uniqueness, and name/alias resolution.

Invariants
- keys are canonical command names; iteration follows insertion order.
- a name is never equal to another command's name or alias, and an alias is never
  equal to another command's name or alias; registration that would break this is
  refused as a whole (nothing is inserted).
- the empty string never resolves, so "no aliases" can never match by accident.

Removal
- unknown names are a successful no-op.
- built-in commands listed in PERMANENT_COMMANDS cannot be removed.
"""
from collections.abc import Mapping

from .commands import Command
from .utils import *

# Built-in commands that keep the console usable; remove() refuses them.
PERMANENT_COMMANDS = frozenset({
    "devconsole",
    "commands",
    "help",
    "consoleversion",
})


class CommandRegistry(Mapping):
    """
    Ordered mapping of canonical name → Command.

    Contract
    - register(command, custom=True) -> bool
    - remove(name) -> bool
    - resolve(name_or_alias) -> Command | None
    - conflicts(command) -> frozenset[str]: identifiers already taken by others
    """

    def __init__(self):
        self._commands = {}

    def __getitem__(self, name):
        return self._commands[name]

    def __iter__(self):
        return iter(self._commands)

    def __len__(self):
        return len(self._commands)

    def conflicts(self, command, /):
        """
        Return the identifiers of `command` that another registered command already uses.
        """
        taken = set()
        for other in self._commands.values():
            taken |= other.identifiers
        return frozenset(command.identifiers & taken)

    def register(self, command, /, custom=True):
        if not isinstance(command, Command):
            raise TypeError("register() argument must be a command")
        if not command.name or self.conflicts(command):
            return False
        self._commands[command.name] = command
        if custom:
            command._mark_custom()
        return True

    def resolve(self, name, /):
        if not isinstance(name, str):
            raise TypeError("resolve() argument must be a string")
        if not (name := canonicalize(name)):
            return None
        try:
            return self._commands[name]
        except KeyError:
            pass
        # aliases are globally unique, so the first hit is the only hit
        for command in self._commands.values():
            if command.has_alias(name):
                return command
        return None

    def remove(self, name, /):
        if (command := self.resolve(name)) is None:
            return True
        if command.builtin and command.name in PERMANENT_COMMANDS:
            return False
        del self._commands[command.name]
        return True

    def clear(self):
        self._commands.clear()


__all__ = (
    "PERMANENT_COMMANDS",
    "CommandRegistry",
)
