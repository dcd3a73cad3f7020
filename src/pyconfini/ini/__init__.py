# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/10 01:16:53
# @Author : Kariko Lin

from .errors import (
    BorrowError, IniDecodeError, IniError, IniNameError, IniSyntaxError,
    IniValueError
)
from .lexer import Blank, Comment, Entry, LineKind, SectionHeader, classify
from .model import ABSENT, Absent, IniClass, IniDefault, IniSection
from .parser import IniParser, build, dumps, load, loads
