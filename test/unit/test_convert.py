import math

import pytest

from pyconfini.ini import IniValueError
from pyconfini.ini.convert import I64_MAX, I64_MIN, U64_MAX, to_bool, to_float, to_int, to_uint


@pytest.mark.parametrize(
    "value,expected",
    [
        ("9", 9),
        ("-31415", -31415),
        ("+7", 7),
        ("0000", 0),
        (str(I64_MAX), I64_MAX),
        (str(I64_MIN), I64_MIN),
    ],
)
def test_to_int(value: str, expected: int):
    assert to_int(value) == expected


@pytest.mark.parametrize(
    "value",
    ["", "1.5", "1e3", "1_000", " 1", "0x10", "not-a-number", str(I64_MAX + 1), str(I64_MIN - 1)],
)
def test_to_int_rejects(value: str):
    with pytest.raises(IniValueError) as excinfo:
        to_int(value)
    assert excinfo.value.value == value
    assert excinfo.value.target == "int"


def test_to_uint():
    assert to_uint("0") == 0
    assert to_uint("+42") == 42
    assert to_uint(str(U64_MAX)) == U64_MAX


@pytest.mark.parametrize("value", ["-1", "-0", "1.0", str(U64_MAX + 1)])
def test_to_uint_rejects(value: str):
    with pytest.raises(IniValueError):
        to_uint(value)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("0.999", 0.999),
        ("1e3", 1000.0),
        (".5", 0.5),
        ("5.", 5.0),
        ("-2.5E-3", -0.0025),
        ("42", 42.0),
        ("inf", math.inf),
        ("-Infinity", -math.inf),
    ],
)
def test_to_float(value: str, expected: float):
    assert to_float(value) == expected


def test_to_float_nan():
    assert math.isnan(to_float("NaN"))


@pytest.mark.parametrize("value", ["", "abc", "1.2.3", "1_0", "e5", " 1.0"])
def test_to_float_rejects(value: str):
    with pytest.raises(IniValueError):
        to_float(value)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("true", True),
        ("Yes", True),
        ("ON", True),
        ("1", True),
        ("false", False),
        ("NO", False),
        ("Off", False),
        ("0", False),
    ],
)
def test_to_bool(value: str, expected: bool):
    assert to_bool(value) is expected


@pytest.mark.parametrize("value", ["", "y", "t", "2", "maybe"])
def test_to_bool_rejects(value: str):
    with pytest.raises(IniValueError) as excinfo:
        to_bool(value)
    assert excinfo.value.target == "bool"


def test_to_bool_custom_literals():
    literals = {True: ("Enabled",), False: ("Disabled",)}
    assert to_bool("enabled", literals) is True
    assert to_bool("DISABLED", literals) is False
    with pytest.raises(IniValueError):
        to_bool("yes", literals)


def test_value_error_is_a_value_error():
    with pytest.raises(ValueError):
        to_int("x")
