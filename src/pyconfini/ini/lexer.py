# -*- encoding: utf-8 -*-
# @File   : lexer.py
# @Time   : 2024/10/12 22:31:19
# @Author : Kariko Lin

"""Tells what one physical INI line is.

Only whole-line comments are known here: `key = a ; b` keeps `a ; b` as the
value. Header lines end at the *last* `]`, so `[a] b]` declares `a] b`,
and whatever trails that bracket is dropped.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .errors import IniSyntaxError
from .model import ABSENT, IniDefault, Slot


@dataclass(frozen=True)
class Blank:
    pass


@dataclass(frozen=True)
class Comment:
    text: str


@dataclass(frozen=True)
class SectionHeader:
    name: str


@dataclass(frozen=True)
class Entry:
    key: str
    value: Slot


type LineKind = Blank | Comment | SectionHeader | Entry


def _find_delimiter(
    line: str, delimiters: Iterable[str]
) -> tuple[int, int] | None:
    """Earliest delimiter occurrence, as `(position, length)`."""
    found = None
    for i in delimiters:
        pos = line.find(i)
        if pos < 0:
            continue
        if found is None or pos < found[0]:
            found = (pos, len(i))
    return found


def classify(
    raw_line: str, lineno: int = 0, defaults: IniDefault | None = None
) -> LineKind:
    """Classify one line. `lineno` only shows up in `IniSyntaxError`."""
    if defaults is None:
        defaults = IniDefault()
    line = raw_line.strip()
    if not line:
        return Blank()
    if line.startswith(tuple(defaults.comment_symbols)):
        return Comment(line)
    if line[0] == '[':
        end = line.rfind(']')
        if end < 0:
            raise IniSyntaxError(lineno, raw_line)
        return SectionHeader(defaults.canonical(line[1:end]))

    found = _find_delimiter(line, defaults.delimiters)
    if found is None:
        return Entry(defaults.canonical(line), ABSENT)
    pos, length = found
    return Entry(defaults.canonical(line[:pos]), line[pos + length:].strip())


def tokenize(
    buf: Iterable[str], defaults: IniDefault | None = None
) -> Iterator[LineKind]:
    """Classify every line of a text stream (or any iterable of lines)."""
    for lineno, line in enumerate(buf, 1):
        if lineno == 1:
            line = line.lstrip('\ufeff')  # BOM
        yield classify(line, lineno, defaults)
