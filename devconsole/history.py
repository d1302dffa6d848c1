"""
Command history: the raw inputs submitted to the console, newest first.

- record(name, raw) pushes the raw input (evicting the oldest beyond the bound),
  shifts current → previous, and stops any cycling in progress.
- cycle(direction) walks the entries like the UP/DOWN keys of a terminal:
  OLDER from "not cycling" selects the newest entry, NEWER from the newest entry
  returns to "not cycling" (an empty input line); walking past either end is a no-op.
"""
from collections import deque
from enum import IntEnum


class Direction(IntEnum):
    OLDER = 1
    NEWER = -1


class History:
    """
    Bounded, newest-first history of raw inputs plus the last two command names.

    Properties
    - current: name recorded by the latest record() call ("" before any).
    - previous: name recorded by the call before that ("" before any).
    - cursor: index of the entry being shown, or -1 when not cycling.
    """

    def __init__(self, length=10, /):
        if not isinstance(length, int) or isinstance(length, bool):
            raise TypeError("history length must be an integer")
        if length < 1:
            raise ValueError("history length must be a positive integer")
        self._entries = deque(maxlen=length)
        self._current = ""
        self._previous = ""
        self._cursor = -1

    @property
    def current(self):
        return self._current

    @property
    def previous(self):
        return self._previous

    @property
    def cursor(self):
        return self._cursor

    @property
    def length(self):
        return self._entries.maxlen

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __getitem__(self, index):
        return self._entries[index]

    def record(self, name, raw, /):
        self._entries.appendleft(raw)
        self._previous, self._current = self._current, name
        self._cursor = -1

    def cycle(self, direction, /):
        """
        Move the cursor one step and return the entry under it ("" when not cycling).
        """
        direction = Direction(direction)
        if (
            not self._entries
            or (direction is Direction.OLDER and self._cursor == len(self._entries) - 1)
            or (direction is Direction.NEWER and self._cursor == -1)
        ):
            return self._entries[self._cursor] if self._cursor != -1 else ""

        self._cursor += direction
        return self._entries[self._cursor] if self._cursor != -1 else ""

    def clear(self):
        self._entries.clear()
        self._current = ""
        self._previous = ""
        self._cursor = -1


__all__ = (
    "Direction",
    "History",
)
