# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/09/08 20:22:30
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from os import PathLike, fspath
from typing import IO


class FileHandler[T](metaclass=ABCMeta):
    """Binds one file path (and its text encoding) to a document type `T`.

    I/O errors are never caught here: a missing file is a `FileNotFoundError`
    for the caller, not a broken document.
    """

    def __init__(
        self, filename: str | PathLike[str], encoding: str | None = 'utf-8'
    ) -> None:
        self._fn = fspath(filename)
        self._codec = encoding

    @property
    def filename(self) -> str:
        return self._fn

    def _open(self, mode: str = 'r') -> IO:
        # when encoding is None, `open()` would fallback to system default.
        if 'b' in mode:
            return open(self._fn, mode)
        return open(self._fn, mode, encoding=self._codec)

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
