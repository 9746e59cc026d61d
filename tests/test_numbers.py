import io

import pytest

from reborners.numbers import atoi, itoa, put_line, put_number


@pytest.mark.parametrize(
    "text, expected",
    [("42", 42), ("  -42abc", -42), ("+7", 7), ("\t\n 15", 15), ("abc", 0), ("", 0)],
)
def test_atoi(text, expected):
    assert atoi(text) == expected


def test_atoi_takes_one_sign_only():
    assert atoi("--1") == 0
    assert atoi("+-1") == 0


@pytest.mark.parametrize("number", [0, 1, -1, 2147483647, -2147483648, 1234567])
def test_itoa_round_trip(number):
    assert atoi(itoa(number)) == number


def test_itoa_minimum_int():
    assert itoa(-2147483648) == "-2147483648"


def test_put_number_writes_decimal():
    stream = io.StringIO()
    put_number(-305, stream)
    assert stream.getvalue() == "-305"


def test_put_line_adds_newline():
    stream = io.StringIO()
    put_line("hello", stream)
    put_line(None, stream)
    assert stream.getvalue() == "hello\n\n"