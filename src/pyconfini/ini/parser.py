# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/10 01:04:45
# @Author : Kariko Lin

"""Reading INI text into an `IniClass`, and writing it back.

Text goes `lexer.tokenize()` -> `build()` -> `IniClass`;
the other way round is just `dumps()`.

Parsing stops at the first malformed header (`IniSyntaxError`): nothing of
that text is merged into the target document then.
"""

import logging
from collections.abc import Iterable, Iterator
from io import StringIO
from os import PathLike

import chardet

from ..abstract import FileHandler
from .errors import IniDecodeError
from .lexer import Entry, LineKind, SectionHeader, tokenize
from .model import ABSENT, IniClass, IniDefault, IniSection


def build(lines: Iterable[LineKind], ins: IniClass) -> IniClass:
    """Apply classified lines to `ins`, section by section, key by key."""
    this_sect = ins.header
    for i in lines:
        if isinstance(i, SectionHeader):
            if i.name in ins:
                logging.debug(f'[{i.name}] declared again, merging.')
            this_sect = ins.setdefault(i.name)
        elif isinstance(i, Entry):
            if i.key in this_sect:
                logging.debug(f'[{this_sect.name}] {i.key} overridden.')
            this_sect[i.key] = i.value
        # blank lines and comments change nothing.
    return ins


def _section_lines(section: IniSection, delimiter: str) -> Iterator[str]:
    for k, v in section.items():
        yield k if v is ABSENT else f'{k}{delimiter}{v}'


def dumps(
    instance: IniClass, delimiter: str = '=', *,
    space_around_delimiters: bool = False,
    blank_lines: int = 1
) -> str:
    """Render `instance` as INI text.

    The default section goes first, without any header; the others follow
    in insertion order. Value-less keys are written bare, without delimiter.

    Args:
        delimiter: how to connect key with value?
        space_around_delimiters: write `key = value` rather than `key=value`.
        blank_lines: how many lines between sections?
    """
    if space_around_delimiters:
        delimiter = f' {delimiter} '
    blocks = []
    if instance.header:
        blocks.append('\n'.join(_section_lines(instance.header, delimiter)))
    for name, section in instance.items():
        if name == instance.default_section:
            continue
        blocks.append('\n'.join([
            f'[{name}]', *_section_lines(section, delimiter)]))
    if not blocks:
        return ''
    return ('\n' * (blank_lines + 1)).join(blocks) + '\n'


class IniParser(FileHandler[IniClass]):
    def __init__(
        self, filename: str | PathLike[str],
        encoding: str | None = 'utf-8',
        defaults: IniDefault | None = None
    ) -> None:
        super().__init__(filename, encoding)
        self._defaults = defaults

    @staticmethod
    def readstream(
        buf: Iterable[str],
        ins: IniClass | None = None,
        defaults: IniDefault | None = None
    ) -> IniClass:
        """读取解码好的字符串流。

        如没有特殊需求，直接调用`self.read()`便是。

        With `ins` given, the stream is merged into it (and `defaults` is
        ignored in favour of `ins.defaults()`). The stream is parsed aside
        first, so an `IniSyntaxError` leaves `ins` as it was.
        """
        if ins is not None:
            defaults = ins.defaults()
        ret = build(tokenize(buf, defaults), IniClass(defaults))
        if ins is None:
            return ret
        ins.merge(ret)
        return ins

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            logging.warning(
                f'Unsure about the charset of {filename} ({codec}), '
                'trying utf-8.')
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            logging.warning(f'{filename} is not {codec["encoding"]}, '
                            'falling back to gbk.')
            try:
                buf = raw.decode('gbk')
            except UnicodeDecodeError as e:
                raise IniDecodeError(
                    filename, [codec['encoding'], 'gbk']) from e
        return StringIO(buf, newline=None)

    def read(self) -> IniClass:
        """读取`IniParser`实例指定的文件。"""
        return self.read_into(None)

    def read_into(self, ins: IniClass | None) -> IniClass:
        """Like `read()`, but merges the file into `ins` key by key.

        Raises `IniDecodeError` when neither the given encoding, nor the
        detected one, nor gbk can decode the file.
        """
        if ins is None:
            ins = IniClass(self._defaults)
        try:
            with self._open('r') as fp:
                return self.readstream(fp, ins)
        except UnicodeDecodeError:
            # encoding got wrong, just detect it with `chardet`.
            logging.info(f'{self._fn} is not {self._codec}, detecting.')
            return self.readstream(self._decode_file(self._fn), ins)

    def write(
        self, instance: IniClass, *,
        delimiter: str = '=',
        space_around_delimiters: bool = False,
        blank_lines: int = 1
    ) -> None:
        """保存到*一个* INI 文件。"""
        text = dumps(
            instance, delimiter,
            space_around_delimiters=space_around_delimiters,
            blank_lines=blank_lines)
        with self._open('w') as fp:
            fp.write(text)

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"


def loads(text: str, defaults: IniDefault | None = None) -> IniClass:
    """Parse INI text into a fresh `IniClass`."""
    return IniParser.readstream(
        StringIO(text, newline=None), defaults=defaults)


def load(
    filename: str | PathLike[str],
    encoding: str | None = 'utf-8',
    defaults: IniDefault | None = None
) -> IniClass:
    """Parse an INI file into a fresh `IniClass`."""
    return IniParser(filename, encoding, defaults).read()
