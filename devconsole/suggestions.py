"""
Autocomplete suggestions and inline parameter hints.

suggest(commands, prefix)
- prefix-matches (case-insensitively) every command name first, then every alias,
  each pass in registry order; a command whose name and alias both match shows up
  once per matching string.
- every suggestion keeps what the user typed and appends the rest of the match:
  typing "PRi" suggests "PRint", so accepting it does not rewrite the typed part.
- the result is a pair of index-aligned sequences (texts, commands).

hint(command, supplied)
- the `<(type)name>` fragments of the parameters not supplied yet, for display
  after the caret.
"""
from collections import namedtuple

Suggestions = namedtuple("Suggestions", ("texts", "commands"))
Suggestions.__doc__ = "index-aligned autocomplete texts and the commands they complete to."


def suggest(commands, prefix, /):
    """
    Return Suggestions for a partial command name.

    Parameters
    - commands: iterable of Command, in registry order.
    - prefix: the partial name as typed; blank prefixes produce no suggestions.
    """
    if not isinstance(prefix, str):
        raise TypeError("suggest() prefix must be a string")

    texts = []
    matches = []
    if not prefix.strip():
        return Suggestions(tuple(texts), tuple(matches))

    commands = tuple(commands)
    lowered = prefix.lower()

    for command in commands:
        if command.name.startswith(lowered):
            texts.append(prefix + command.name[len(prefix):])
            matches.append(command)

    # Alias order between commands follows registry order, nothing stronger.
    for command in commands:
        for alias in sorted(command.aliases):
            if alias.startswith(lowered):
                texts.append(prefix + alias[len(prefix):])
                matches.append(command)

    return Suggestions(tuple(texts), tuple(matches))


def hint(command, supplied, /):
    """
    Return the syntax of the parameters of `command` after the first `supplied` ones.
    """
    if supplied < 0:
        raise ValueError("hint() supplied count must be a non-negative integer")
    return " ".join(parameter.syntax() for parameter in command.parameters[supplied:])


__all__ = (
    "Suggestions",
    "suggest",
    "hint",
)
