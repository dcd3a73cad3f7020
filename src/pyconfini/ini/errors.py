# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/10/12 21:40:05
# @Author : Kariko Lin

"""Exceptions raised while reading, querying or borrowing an INI document.

I/O failures are *not* wrapped here: `OSError` and friends reach the caller
exactly as `open()` raised them.
"""


class IniError(Exception):
    """Base of every error this package raises on its own."""
    pass


class IniSyntaxError(IniError):
    """A section header was opened with `[` but never closed."""

    def __init__(self, lineno: int, line: str) -> None:
        super().__init__(
            f'line {lineno}: unterminated section header {line.strip()!r}')
        self.lineno = lineno
        self.line = line


class IniValueError(IniError, ValueError):
    """A stored string could not be coerced to the requested type."""

    def __init__(self, value: str, target: str) -> None:
        super().__init__(f'cannot convert {value!r} to {target}')
        self.value = value
        self.target = target


class BorrowError(IniError, RuntimeError):
    """The document is already lent out through `IniClass.borrow()`."""
    pass


class IniNameError(IniError, ValueError):
    """A section name, key or value that would not survive a write/read trip.

    e.g. a key starting with `[` or holding the delimiter, or a line break.
    """

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f'{name!r}: {reason}')
        self.name = name
        self.reason = reason


class IniDecodeError(IniError, ValueError):
    """No candidate encoding could decode the file."""

    def __init__(self, filename: str, encodings: list[str]) -> None:
        super().__init__(
            f'cannot decode {filename} (tried {", ".join(encodings)})')
        self.filename = filename
        self.encodings = encodings
