from enum import Enum

from rich.pretty import pprint

from devconsole import *


class Key(Enum):
    UpArrow = 0
    DownArrow = 1
    Escape = 2


console = Console(development=True)
bindings = {}
window = {"fullscreen": False}


@console.command("bind", (), "Bind a key to a console command", "Key to bind", "Command to run")
def bind(key: Key, command: str):
    bindings[key] = command
    console.log_success("%s is now bound to %r." % (key.name, command))


@console.command(
    "fullscreen",
    (),
    "Query or set whether the window is fullscreen",
    "Whether the window is fullscreen",
    default=lambda: console.log_variable("Fullscreen", window["fullscreen"]),
)
def fullscreen(enabled: bool):
    window["fullscreen"] = enabled


if __name__ == '__main__':
    pprint(console.resolve("bind"))
    for line in ("devconsole", 'bind UpArrow "say hi there"', "fullscreen", "fullscreen 1", "fullscreen", "unknowncmd"):
        console.log_separator(line)
        console.run(line)
