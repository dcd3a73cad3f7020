# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/10 00:57:10
# @Author : Kariko Lin

"""
Basically INI Structure: sections of `key = value` pairs, plus a header
section holding pairs that come before any `[section]`.

Section names and keys are normalized (trimmed, lowercased by default)
whenever they go in or get looked up, so `[Foo]` and `[ foo ]` are one
section. As for reading and writing text, just see `ini.parser`.
"""

from collections.abc import (
    Callable, Iterable, Iterator, Mapping, MutableMapping
)
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from warnings import warn

from .convert import BOOLEAN_VALUES, to_bool, to_float, to_int, to_uint
from .errors import BorrowError, IniNameError


class Absent(Enum):
    """Value slot of a key written without any delimiter, like `flag` alone.

    Distinct from `flag =`, whose value is the empty string.
    """
    ABSENT = 'absent'

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'ABSENT'


ABSENT = Absent.ABSENT

_MISSING = object()

Slot = str | Absent


def _slot(value: object) -> Slot:
    # `None` is accepted as a spelling of ABSENT, but never stored.
    if value is None or value is ABSENT:
        return ABSENT
    if not isinstance(value, str):
        raise TypeError(
            f'INI values are strings (or ABSENT), got {type(value).__name__}')
    value = value.strip()
    if '\n' in value or '\r' in value:
        raise IniNameError(value, 'values cannot span lines')
    return value


@dataclass
class IniDefault:
    """Construction-time options of an `IniClass`."""
    default_section: str = 'default'
    comment_symbols: tuple[str, ...] = (';', '#')
    delimiters: tuple[str, ...] = ('=',)
    case_sensitive: bool = False
    boolean_values: dict[bool, tuple[str, ...]] = field(
        default_factory=lambda: dict(BOOLEAN_VALUES))

    def canonical(self, name: str) -> str:
        """The one and only normalization of section names and keys."""
        name = name.strip()
        return name if self.case_sensitive else name.lower()

    def check_section(self, name: str) -> str:
        """Canonical section name, refusing what a header line can't hold."""
        name = self.canonical(name)
        if '\n' in name or '\r' in name:
            raise IniNameError(name, 'section names cannot span lines')
        return name

    def check_key(self, key: str) -> str:
        """Canonical key, refusing what would read back as something else."""
        key = self.canonical(key)
        if '\n' in key or '\r' in key:
            raise IniNameError(key, 'keys cannot span lines')
        if key.startswith('['):
            raise IniNameError(key, 'would read back as a section header')
        if key.startswith(tuple(self.comment_symbols)):
            raise IniNameError(key, 'would read back as a comment')
        if any(i in key for i in self.delimiters):
            raise IniNameError(key, 'holds a delimiter')
        return key


class IniSection(MutableMapping[str, Slot]):
    """INI 小节字典。

    Keys are normalized on every access, values are either stripped strings
    or `ABSENT`. Assigning `None` stores `ABSENT`.
    """

    def __init__(
        self, section_name: str, defaults: IniDefault, /,
        pairs: Mapping[str, Slot | None] | None = None
    ) -> None:
        self._name = section_name
        self._defaults = defaults
        self._data: dict[str, Slot] = {}
        if pairs:
            self.update(pairs)

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> Slot:
        return self._data[self._defaults.canonical(key)]

    def __setitem__(self, key: str, value: Slot | None) -> None:
        self._data[self._defaults.check_key(key)] = _slot(value)

    def __delitem__(self, key: str) -> None:
        del self._data[self._defaults.canonical(key)]

    def __contains__(self, key: object) -> bool:
        return (isinstance(key, str)
                and self._defaults.canonical(key) in self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __str__(self) -> str:
        return f'[{self._name}]'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self._data))

    def to_dict(self) -> dict[str, Slot]:
        """A plain copy of the pairs."""
        return self._data.copy()

    def view(self) -> Mapping[str, Slot]:
        """Read-only live view of the pairs. Keys are *not* normalized here."""
        return MappingProxyType(self._data)


class IniClass(MutableMapping[str, IniSection]):
    """INI 文件表示。支持以下形式的 INI 小节和键值对：

        ```ini
        key = val       ; 使用 self.header 访问游离的键值对。
        [Section]
        key233 = val666
        flag            ; 没有分隔符，值为 ABSENT
        empty =         ; 值为空串
        ```

    The header section (named by `IniDefault.default_section`) is always
    there. A later `[Default]` header in the text lands in the very same
    section. Redeclared sections and keys are overwritten: last write wins.
    """

    def __init__(self, defaults: IniDefault | None = None) -> None:
        self.__defaults = defaults if defaults is not None else IniDefault()
        self.__raw: dict[str, IniSection] = {}
        self.__borrowed = False
        name = self.default_section
        self.__raw[name] = IniSection(name, self.__defaults)

    def defaults(self) -> IniDefault:
        return self.__defaults

    def load_defaults(self, defaults: IniDefault) -> None:
        """Switch options, re-normalizing everything already stored.

        Names that collapse into one under the new options follow the usual
        last-write-wins rule.
        """
        self.__check_borrow()
        snapshot = self.get_map()
        # header pairs stay header pairs, whatever the section is called now.
        header = snapshot.pop(self.default_section)
        self.__rebuild(
            [(defaults.default_section, header), *snapshot.items()], defaults)

    @property
    def default_section(self) -> str:
        return self.__defaults.canonical(self.__defaults.default_section)

    @property
    def header(self) -> IniSection:
        """位于文件头部的，不属于任何小节的游离键值对。"""
        return self.__raw[self.default_section]

    def __getitem__(self, key: str) -> IniSection:
        return self.__raw[self.__defaults.canonical(key)]

    def __setitem__(
        self, key: str, value: IniSection | Mapping[str, Slot | None]
    ) -> None:
        self.__check_borrow()
        name = self.__defaults.check_section(key)
        # shouldn't keep ptr to external dict in key setting operation.
        pairs = value.to_dict() if isinstance(value, IniSection) else value
        self.__raw[name] = IniSection(name, self.__defaults, pairs)

    def __delitem__(self, key: str) -> None:
        self.__check_borrow()
        name = self.__defaults.canonical(key)
        if name == self.default_section:
            warn(f'[{name}] 是默认小节，不能删除，只会被清空。')
            self.__raw[name].clear()
            return
        del self.__raw[name]

    def __contains__(self, key: object) -> bool:
        return (isinstance(key, str)
                and self.__defaults.canonical(key) in self.__raw)

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __repr__(self) -> str:
        return '<IniClass [%s]>' % ', '.join(self.__raw)

    def setdefault(
        self, key: str, default: Mapping[str, Slot | None] | None = None
    ) -> IniSection:
        """If section `key` not in self, then add it (with `default` pairs).

        Returns the section either way.
        """
        self.__check_borrow()
        name = self.__defaults.check_section(key)
        if name not in self.__raw:
            self.__raw[name] = IniSection(name, self.__defaults, default)
        return self.__raw[name]

    def pop(self, key: str, default: object = _MISSING) -> object:
        """Same as `remove_section()`, but missing sections are a `KeyError`
        unless `default` is given.
        """
        removed = self.remove_section(key)
        if removed is not None:
            return removed
        if default is _MISSING:
            raise KeyError(key)
        return default

    def popitem(self) -> tuple[str, IniSection]:
        self.__check_borrow()
        for name in reversed(self.__raw):
            if name != self.default_section:
                return name, self.__raw.pop(name)
        raise KeyError('popitem(): no section but the default one')

    def clear(self) -> None:
        """Drop every section; the default one stays, emptied."""
        self.__check_borrow()
        header = self.header
        header.clear()
        self.__raw = {header.name: header}

    def sections(self) -> list[str]:
        return list(self.__raw)

    def merge(self, another: 'IniClass') -> None:
        """Key-wise merge of `another` into self.

        Sections only present here are left alone, and so are keys that
        `another` does not redeclare.
        """
        self.__check_borrow()
        self.header.update(another.header)
        for name, section in another.items():
            if name == another.default_section:
                continue
            self.setdefault(name).update(section)

    # ---- accessors ----

    def get(
        self, section: str, key: str | None = None
    ) -> IniSection | Slot | None:
        """Look a value up, case-insensitively.

        With `key` left out, this is the plain mapping lookup: the section,
        or `None`.

        Returns:
            - `None` if the section or the key does not exist,
            - `ABSENT` if the key exists without a value,
            - the stored string otherwise (possibly `''`).
        """
        sect = self.__raw.get(self.__defaults.canonical(section))
        if sect is None or key is None:
            return sect
        return sect.get(key)

    def __coerce[T](self, section: str, key: str,
                    converter: Callable[[str], T]) -> T | None:
        value = self.get(section, key)
        if value is None or value is ABSENT:
            return None
        return converter(value)

    def getint(self, section: str, key: str) -> int | None:
        """Raises `IniValueError` if the value isn't a 64-bit integer."""
        return self.__coerce(section, key, to_int)

    def getuint(self, section: str, key: str) -> int | None:
        return self.__coerce(section, key, to_uint)

    def getfloat(self, section: str, key: str) -> float | None:
        return self.__coerce(section, key, to_float)

    def getbool(self, section: str, key: str) -> bool | None:
        """Accepts `IniDefault.boolean_values`, ignoring case."""
        return self.__coerce(
            section, key,
            lambda x: to_bool(x, self.__defaults.boolean_values))

    # ---- mutators ----

    def set(
        self, section: str, key: str, value: Slot | None = ABSENT
    ) -> None:
        """Insert or overwrite one pair, creating the section if needed."""
        self.setdefault(section)[key] = value

    def remove_key(self, section: str, key: str) -> bool:
        """Remove one pair if present. Returns whether anything was removed."""
        self.__check_borrow()
        sect = self.__raw.get(self.__defaults.canonical(section))
        if sect is None or key not in sect:
            return False
        del sect[key]
        return True

    def remove_section(self, section: str) -> IniSection | None:
        """Remove a whole section if present, and hand it back.

        The default section can't go away; it is emptied instead.
        """
        self.__check_borrow()
        name = self.__defaults.canonical(section)
        if name not in self.__raw:
            return None
        removed = IniSection(name, self.__defaults, self.__raw[name].to_dict())
        del self[name]
        return removed

    # ---- whole-map access ----

    def get_map(self) -> dict[str, dict[str, Slot]]:
        """A plain, detached copy of the whole document."""
        return {name: sect.to_dict() for name, sect in self.__raw.items()}

    def get_map_ref(self) -> Mapping[str, Mapping[str, Slot]]:
        """Read-only view of the whole document.

        Pairs stay live; the list of sections is the one at call time.
        """
        return MappingProxyType(
            {name: sect.view() for name, sect in self.__raw.items()})

    @contextmanager
    def borrow(self) -> Iterator[dict[str, dict[str, Slot | None]]]:
        """Lend the document out as plain nested dicts, for bulk edits.

        Only one borrow may be open at a time, and the other mutators refuse
        to run meanwhile. Changes are normalized and written back when the
        `with` block exits normally; if it raises, they are dropped.
        """
        self.__check_borrow()
        self.__borrowed = True
        try:
            view: dict[str, dict[str, Slot | None]] = self.get_map()
            yield view
        finally:
            self.__borrowed = False
        self.__rebuild(view.items(), self.__defaults)

    def __check_borrow(self) -> None:
        if self.__borrowed:
            raise BorrowError('document is borrowed; finish that first')

    def __rebuild(
        self,
        sections: Iterable[tuple[str, Mapping[str, Slot | None]]],
        defaults: IniDefault
    ) -> None:
        # build aside first, so a bad name or value leaves self untouched.
        raw: dict[str, IniSection] = {}
        default = defaults.canonical(defaults.default_section)
        raw[default] = IniSection(default, defaults)
        for key, pairs in sections:
            name = defaults.check_section(key)
            raw.setdefault(name, IniSection(name, defaults)).update(pairs)
        self.__raw = raw
        self.__defaults = defaults

    # ---- text ----

    def read(self, text: str) -> 'IniClass':
        """Parse `text` and merge it into self. Returns self."""
        from io import StringIO

        from .parser import IniParser
        return IniParser.readstream(StringIO(text, newline=None), self)

    def writes(self, delimiter: str = '=', **kwargs) -> str:
        """Render self as INI text. See `ini.parser.dumps`."""
        from .parser import dumps
        return dumps(self, delimiter, **kwargs)
