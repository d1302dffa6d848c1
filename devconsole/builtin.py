"""
Built-in commands installed on every console created with builtins=True.

- devconsole: usage instructions.
- print / say <(str)message>: log a message.
- clear: clear the output.
- help / info <(str)commandName>: describe a command; bare `help` describes the
  previously run command.
- commands: list every command name.
- consoleversion: print the package version.
- quit / exit: raise SystemExit (never caught by the dispatcher).

devconsole, commands, help and consoleversion are permanent (see registry).
"""
from rich.text import Text

from . import __version__
from .commands import command


def commands(console, /):
    """
    Build the built-in commands bound to `console`.
    """

    @command("devconsole", (), "Display instructions on how to use the developer console")
    def devconsole():
        console.log_separator("Developer console (v%s)" % __version__)
        console.log("Use 'commands' to display a list of available commands.")
        console.log("Use 'help <(str)commandName>' to display information about a specific command.")
        console.log("Use UP / DOWN to cycle through the command history.")
        console.log_separator()

    @command("print", "say", "Display a message in the developer console", "Message to display")
    def echo(message: str):
        console.log("" if message is None else message)

    @command("clear", (), "Clear the developer console")
    def clear():
        console.clear()

    def describe(name):
        if (target := console.resolve(name or "")) is None:
            console.log_error(
                "Unknown command name specified: %r. Use 'commands' for a list of all commands." % name
            )
            return

        console.log_separator(target.name)
        if target.descr:
            console.log(target.descr.rstrip(".") + ".")
        if target.aliases:
            console.log("Aliases: %s." % ", ".join(sorted(target.aliases)))
        if target.parameters:
            console.log(Text.assemble("Syntax: ", target.__rich__() if console.colorful else target.syntax()))
        for parameter in target.parameters:
            if parameter.descr:
                console.log(Text.assemble(" ", (parameter.name, "bold"), ": ", parameter.descr.rstrip(".") + "."))
        console.log_separator()

    help = command(
        describe,
        "help",
        "info",
        "Display helpful information about the specified command",
        "Name of the command",
        default=lambda: describe(console.history.previous or "help"),
    )

    @command("commands", (), "Display a sorted list of all available commands")
    def names():
        console.log("Available commands: %s." % ", ".join(sorted(console.commands)))

    @command("consoleversion", (), "Display the developer console version")
    def version():
        console.log("Developer console version: %s." % __version__)

    @command("quit", "exit", "Exit the application")
    def quit():
        raise SystemExit(0)

    return devconsole, echo, clear, help, names, version, quit


__all__ = (
    "commands",
)
