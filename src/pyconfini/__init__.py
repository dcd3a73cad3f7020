# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/10 01:20:12
# @Author : Kariko Lin

import logging

from .ini import (
    ABSENT, Absent, BorrowError,
    IniClass, IniDecodeError, IniDefault, IniError, IniNameError,
    IniParser, IniSection, IniSyntaxError, IniValueError,
    dumps, load, loads
)

__all__ = [
    'ABSENT', 'Absent', 'BorrowError',
    'IniClass', 'IniDecodeError', 'IniDefault', 'IniError', 'IniNameError',
    'IniParser', 'IniSection', 'IniSyntaxError', 'IniValueError',
    'dumps', 'load', 'loads'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
