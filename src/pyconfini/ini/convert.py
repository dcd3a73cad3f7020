# -*- encoding: utf-8 -*-
# @File   : convert.py
# @Time   : 2024/10/12 22:03:47
# @Author : Kariko Lin

"""Everything in an INI file is a string. These turn one into something else.

All of them are pure: they take the stored string and either return the
converted value or raise `IniValueError`.
"""

from collections.abc import Mapping, Sequence
from re import IGNORECASE
from re import compile as regex

from .errors import IniValueError

I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1
U64_MAX = (1 << 64) - 1

# no underscores, no surrounding spaces, no `0x` prefixes.
_INT = regex(r'[+-]?[0-9]+')
_UINT = regex(r'\+?[0-9]+')
_FLOAT = regex(
    r'[+-]?(?:'
    r'(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?'
    r'|inf(?:inity)?|nan)',
    IGNORECASE
)

BOOLEAN_VALUES: dict[bool, tuple[str, ...]] = {
    True: ('true', 'yes', 'on', '1'),
    False: ('false', 'no', 'off', '0'),
}


def to_int(value: str) -> int:
    """Signed 64-bit decimal integer. Fractions and exponents are rejected."""
    if not _INT.fullmatch(value):
        raise IniValueError(value, 'int')
    ret = int(value)
    if not I64_MIN <= ret <= I64_MAX:
        raise IniValueError(value, 'int')
    return ret


def to_uint(value: str) -> int:
    if not _UINT.fullmatch(value):
        raise IniValueError(value, 'uint')
    ret = int(value)
    if ret > U64_MAX:
        raise IniValueError(value, 'uint')
    return ret


def to_float(value: str) -> float:
    if not _FLOAT.fullmatch(value):
        raise IniValueError(value, 'float')
    return float(value)


def to_bool(
    value: str,
    boolean_values: Mapping[bool, Sequence[str]] = BOOLEAN_VALUES
) -> bool:
    """Case-insensitive lookup of `value` in the literal table.

    By default `true yes on 1` mean `True`, `false no off 0` mean `False`.
    """
    lowered = value.lower()
    for result, literals in boolean_values.items():
        if lowered in (i.lower() for i in literals):
            return result
    raise IniValueError(value, 'bool')
