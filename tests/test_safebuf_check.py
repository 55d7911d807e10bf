"""Tests for the classification predicates and numeric parsers."""

from __future__ import annotations

import math

import pytest

import safebuf as sb
import safebuf_check as chk


def _buf(text: bytes) -> sb.SafeBuf:
    return sb.from_bytes(text)


@pytest.mark.parametrize(
    "text, expected",
    [
        (b"-124", True),
        (b"124", True),
        (b"0", True),
        (b"-23.89", False),
        (b"23.89", False),
        (b"", False),
        (b"-", False),
        (b"+5", False),
        (b"12a", False),
        (b"12\n", False),
    ],
)
def test_is_integer(text: bytes, expected: bool) -> None:
    assert chk.is_integer(_buf(text)) is expected


@pytest.mark.parametrize(
    "text, expected",
    [
        (b"-23.89", True),
        (b"23.89", True),
        (b"23", True),
        (b"23.", True),
        (b".5", True),
        (b"1.2.3", False),
        (b"-", False),
        (b".", False),
        (b"1e5", False),
        (b"", False),
    ],
)
def test_is_float(text: bytes, expected: bool) -> None:
    assert chk.is_float(_buf(text)) is expected


def test_is_signed() -> None:
    assert chk.is_signed(_buf(b"-124"))
    assert chk.is_signed(_buf(b"-23.89"))
    assert not chk.is_signed(_buf(b"23.89"))
    assert not chk.is_signed(_buf(b"-abc"))


@pytest.mark.parametrize(
    "text, skip, underscore, expected",
    [
        (b"StringdePrueba123", 0, False, True),
        (b"Stringde@Prueba123", 0, False, False),
        (b"Stringde@Prueba123", 9, True, True),
        (b"String_de_Prueba_123", 0, False, False),
        (b"String_de_Prueba_123", 0, True, True),
        (b"abc", 3, False, True),
        (b"abc", 4, False, False),
        (b"abc", -1, False, False),
    ],
)
def test_is_alnum(text: bytes, skip: int, underscore: bool, expected: bool) -> None:
    assert chk.is_alnum(_buf(text), skip, underscore) is expected


@pytest.mark.parametrize(
    "text, expected",
    [
        (b"String de-Prueba", False),
        (b"", True),
        (b"       ", True),
        (b" \t\r\n\x0b\x0c", True),
    ],
)
def test_is_blank(text: bytes, expected: bool) -> None:
    assert chk.is_blank(_buf(text)) is expected


def test_predicates_on_absent_buffer() -> None:
    for fn in (chk.is_integer, chk.is_float, chk.is_signed, chk.is_alnum, chk.is_blank):
        assert fn(None) is False


def test_to_long() -> None:
    assert chk.to_long(_buf(b"-234567")) == -234567
    assert chk.to_long(_buf(b"ff"), 16) == 255
    assert chk.to_long(_buf(b"0x1f"), 0) == 31


@pytest.mark.parametrize("text", [b"", b"12a", b"1_000", b"--1"])
def test_to_long_malformed_returns_none(text: bytes) -> None:
    assert chk.to_long(_buf(text)) is None


def test_to_long_rejects_bad_base() -> None:
    with pytest.raises(ValueError):
        chk.to_long(_buf(b"1"), 1)


def test_to_double() -> None:
    assert chk.to_double(_buf(b"-23.89")) == -23.89
    assert chk.to_double(_buf(b"-23.89e5")) == -2389000
    assert math.isinf(chk.to_double(_buf(b"inf")))


@pytest.mark.parametrize("text", [b"", b"abc", b"1.2.3", b"1_0"])
def test_to_double_malformed_returns_none(text: bytes) -> None:
    assert chk.to_double(_buf(text)) is None


def test_parsers_on_absent_buffer() -> None:
    assert chk.to_long(None) is None
    assert chk.to_double(None) is None
